#!/usr/bin/env python3
"""
Tests for MentorDirectory: listing, search, capacity gate and metric updates.
"""

import threading
import unittest

from core.config_loader import MentorsConfig
from core.exceptions import NotFoundError, InvalidStateError, ValidationError
from core.mentors import MentorDirectory, MentorStatus
from database.repositories import InMemoryMentorRepository
from tests.fixtures.factories import make_mentor, sample_mentors


class TestDirectoryQueries(unittest.TestCase):

    def setUp(self):
        self.directory = MentorDirectory(InMemoryMentorRepository(sample_mentors()))

    def test_list_active_excludes_inactive(self):
        ids = [m.id for m in self.directory.list_active()]
        self.assertEqual(ids, ["mentor-1", "mentor-2", "mentor-3"])

    def test_get_by_id_unknown_raises(self):
        with self.assertRaises(NotFoundError):
            self.directory.get_by_id("nobody")

    def test_find_by_id_unknown_returns_none(self):
        self.assertIsNone(self.directory.find_by_id("nobody"))
        self.assertEqual(self.directory.find_by_id("mentor-4").status, MentorStatus.INACTIVE)

    def test_search_is_case_insensitive(self):
        self.assertEqual([m.id for m in self.directory.search("HOPPER")], ["mentor-2"])
        self.assertEqual([m.id for m in self.directory.search("bletchley")], ["mentor-3"])

    def test_search_matches_bio(self):
        ids = [m.id for m in self.directory.search("leadership")]
        self.assertEqual(ids, ["mentor-1", "mentor-2", "mentor-3"])

    def test_search_blank_returns_all_active(self):
        self.assertEqual(len(self.directory.search("   ")), 3)

    def test_search_never_returns_inactive(self):
        self.assertEqual(self.directory.search("Inactive"), [])

    def test_top_rated_orders_by_rating(self):
        ids = [m.id for m in self.directory.top_rated()]
        self.assertEqual(ids, ["mentor-1", "mentor-2", "mentor-3"])

    def test_top_rated_limit(self):
        self.assertEqual([m.id for m in self.directory.top_rated(1)], ["mentor-1"])
        self.assertEqual(self.directory.top_rated(0), [])


class TestCapacity(unittest.TestCase):

    def setUp(self):
        self.directory = MentorDirectory(InMemoryMentorRepository(sample_mentors()))

    def test_under_cap_active_accepts(self):
        self.assertTrue(self.directory.can_accept_new_students(make_mentor(total_students=29)))

    def test_at_cap_rejects(self):
        self.assertFalse(self.directory.can_accept_new_students(make_mentor(total_students=30)))

    def test_inactive_rejects(self):
        mentor = make_mentor(total_students=0, status=MentorStatus.SUSPENDED)
        self.assertFalse(self.directory.can_accept_new_students(mentor))

    def test_cap_is_configurable(self):
        directory = MentorDirectory(InMemoryMentorRepository(), MentorsConfig(max_students_per_mentor=5))
        self.assertFalse(directory.can_accept_new_students(make_mentor(total_students=5)))

    def test_ensure_accepting_students(self):
        self.assertEqual(self.directory.ensure_accepting_students("mentor-1").id, "mentor-1")
        with self.assertRaises(InvalidStateError):
            self.directory.ensure_accepting_students("mentor-2")
        with self.assertRaises(NotFoundError):
            self.directory.ensure_accepting_students("nobody")


class TestUpdateMetrics(unittest.TestCase):

    def setUp(self):
        self.repo = InMemoryMentorRepository(sample_mentors())
        self.directory = MentorDirectory(self.repo)

    def test_partial_merge(self):
        updated = self.directory.update_metrics("mentor-1", {"total_sessions": 121})
        self.assertEqual(updated.metrics.total_sessions, 121)
        self.assertEqual(updated.metrics.average_rating, 4.8)
        self.assertEqual(self.repo.get("mentor-1").metrics.total_sessions, 121)

    def test_unknown_mentor_is_noop(self):
        with self.assertLogs("core.mentors.directory", level="WARNING"):
            self.assertIsNone(self.directory.update_metrics("nobody", {"total_sessions": 1}))
        self.assertEqual(len(self.repo), 4)

    def test_unknown_field_rejected_without_change(self):
        with self.assertRaises(ValidationError):
            self.directory.update_metrics("mentor-1", {"popularity": 10})
        self.assertEqual(self.repo.get("mentor-1").metrics.total_sessions, 120)

    def test_out_of_range_rating_rejected(self):
        with self.assertRaises(ValidationError):
            self.directory.update_metrics("mentor-1", {"average_rating": 7})

    def test_concurrent_updates_to_different_fields_all_land(self):
        fields = [
            {"total_sessions": 500},
            {"total_students": 3},
            {"success_rate": 0.5},
            {"completion_rate": 0.25},
        ]
        threads = [
            threading.Thread(target=self.directory.update_metrics, args=("mentor-1", partial))
            for partial in fields
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        metrics = self.repo.get("mentor-1").metrics
        self.assertEqual(metrics.total_sessions, 500)
        self.assertEqual(metrics.total_students, 3)
        self.assertEqual(metrics.success_rate, 0.5)
        self.assertEqual(metrics.completion_rate, 0.25)

    def test_apply_metrics_sees_current_values(self):
        seen = []

        def bump(current):
            seen.append(current.total_sessions)
            return {"total_sessions": current.total_sessions + 1}

        updated = self.directory.apply_metrics("mentor-1", bump)
        self.assertEqual(seen, [120])
        self.assertEqual(updated.metrics.total_sessions, 121)
        self.assertEqual(self.repo.get("mentor-1").metrics.average_rating, 4.8)

    def test_apply_metrics_unknown_mentor_skips_compute(self):
        def fail(current):
            raise AssertionError("compute should not run")

        with self.assertLogs("core.mentors.directory", level="WARNING"):
            self.assertIsNone(self.directory.apply_metrics("nobody", fail))

    def test_concurrent_increments_are_not_lost(self):
        def bump(current):
            return {"total_sessions": current.total_sessions + 1}

        threads = [
            threading.Thread(target=self.directory.apply_metrics, args=("mentor-1", bump))
            for _ in range(20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(self.repo.get("mentor-1").metrics.total_sessions, 140)


if __name__ == '__main__':
    unittest.main()
