#!/usr/bin/env python3
"""
Tests for the in-app inbox endpoint.
"""

import unittest

from notification import InAppChannel
from tests.fixtures.api import build_test_context, build_client, as_user
from tests.fixtures.factories import FixedClock


class TestInboxEndpoint(unittest.TestCase):

    def setUp(self):
        InAppChannel.clear()
        self.clock = FixedClock()
        self.client = build_client(build_test_context(clock=self.clock, notifications=True))

    def tearDown(self):
        InAppChannel.clear()

    def schedule(self):
        response = self.client.post("/api/sessions", json={
            "mentor_id": "mentor-1",
            "title": "Career planning",
            "scheduled_start_time": "2026-03-02T16:00:00Z",
            "scheduled_end_time": "2026-03-02T17:00:00Z",
        }, headers=as_user("u1"))
        self.assertEqual(response.status_code, 201)
        return response.json()["session"]["id"]

    def test_scheduled_session_reaches_participant_inbox(self):
        session_id = self.schedule()

        response = self.client.get("/api/notifications/inbox", headers=as_user("u1"))
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["user_id"], "u1")
        self.assertEqual(data["count"], 1)
        self.assertEqual(data["messages"][0]["subject"], "Session scheduled: Career planning")
        self.assertEqual(data["messages"][0]["metadata"]["session_id"], session_id)

    def test_actor_is_not_notified(self):
        session_id = self.schedule()
        self.assertEqual(self.client.get("/api/notifications/inbox", headers=as_user("mentor-1")).json()["count"], 0)

        self.client.post(f"/api/sessions/{session_id}/cancel", json={"reason": "Conflict"}, headers=as_user("u1"))
        u1_inbox = self.client.get("/api/notifications/inbox", headers=as_user("u1")).json()
        self.assertEqual(u1_inbox["count"], 1)
        mentor_inbox = self.client.get("/api/notifications/inbox", headers=as_user("mentor-1")).json()
        self.assertEqual(mentor_inbox["messages"][0]["subject"], "Session cancelled: Career planning")
        self.assertIn("Reason: Conflict", mentor_inbox["messages"][0]["body"])

    def test_newest_first_and_limit(self):
        first = self.schedule()
        self.client.post(f"/api/sessions/{first}/cancel", headers=as_user("mentor-1"))

        data = self.client.get("/api/notifications/inbox", headers=as_user("u1")).json()
        self.assertEqual(data["count"], 2)
        self.assertTrue(data["messages"][0]["subject"].startswith("Session cancelled"))
        self.assertTrue(data["messages"][1]["subject"].startswith("Session scheduled"))

        limited = self.client.get("/api/notifications/inbox", params={"limit": 1}, headers=as_user("u1")).json()
        self.assertEqual(limited["count"], 1)
        self.assertTrue(limited["messages"][0]["subject"].startswith("Session cancelled"))

    def test_requires_caller(self):
        self.assertEqual(self.client.get("/api/notifications/inbox").status_code, 401)


if __name__ == '__main__':
    unittest.main()
