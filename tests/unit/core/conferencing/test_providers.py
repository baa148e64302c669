#!/usr/bin/env python3
"""
Tests for the local and HTTP channel providers.
"""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock, patch

import requests

from core.conferencing import LocalChannelProvider, HttpChannelProvider
from core.exceptions import StorageIOError
from tests.fixtures.factories import FixedClock, BASE_TIME


class TestLocalChannelProvider(unittest.TestCase):

    def setUp(self):
        self.provider = LocalChannelProvider(signing_secret="s3cret", token_ttl_seconds=600, clock=FixedClock())

    def test_token_carries_claims(self):
        credential = self.provider.issue_token("chan-1", "u1")
        claims = self.provider.verify_token(credential.token)
        self.assertEqual(claims["channel"], "chan-1")
        self.assertEqual(claims["user"], "u1")
        self.assertEqual(credential.expires_at, BASE_TIME + timedelta(minutes=10))
        self.assertEqual(claims["exp"], int(credential.expires_at.timestamp()))

    def test_tokens_are_unique(self):
        first = self.provider.issue_token("chan-1", "u1").token
        second = self.provider.issue_token("chan-1", "u1").token
        self.assertNotEqual(first, second)

    def test_tampered_token_rejected(self):
        token = self.provider.issue_token("chan-1", "u1").token
        payload, signature = token.rsplit(".", 1)
        self.assertIsNone(self.provider.verify_token(payload + "x." + signature))
        self.assertIsNone(self.provider.verify_token("garbage"))

    def test_other_secret_rejected(self):
        token = self.provider.issue_token("chan-1", "u1").token
        other = LocalChannelProvider(signing_secret="different")
        self.assertIsNone(other.verify_token(token))

    def test_random_secret_when_unset(self):
        with self.assertLogs("core.conferencing.local_provider", level="WARNING"):
            provider = LocalChannelProvider()
        token = provider.issue_token("c", "u").token
        self.assertIsNotNone(provider.verify_token(token))


def _response(status_code=200, body=None):
    response = Mock()
    response.status_code = status_code
    response.content = b"{}" if body is not None else b""
    response.json.return_value = body or {}
    if status_code >= 400:
        error = requests.HTTPError(f"{status_code} error")
        error.response = response
        response.raise_for_status.side_effect = error
    else:
        response.raise_for_status.return_value = None
    return response


class TestHttpChannelProvider(unittest.TestCase):

    def setUp(self):
        self.provider = HttpChannelProvider(
            base_url="https://rtc.example.com/",
            api_key="key-1",
            max_attempts=3,
            retry_wait_seconds=0
        )
        self.post = Mock()
        self.provider.session.post = self.post

    def test_issue_token(self):
        self.post.return_value = _response(body={"token": "abc", "expires_at": "2026-03-02T16:00:00Z"})

        credential = self.provider.issue_token("chan-1", "u1")

        self.assertEqual(credential.token, "abc")
        self.assertEqual(credential.expires_at, datetime(2026, 3, 2, 16, 0, tzinfo=timezone.utc))
        self.post.assert_called_once()
        args, kwargs = self.post.call_args
        self.assertEqual(args[0], "https://rtc.example.com/tokens")
        self.assertEqual(kwargs["json"], {"channel_id": "chan-1", "user_id": "u1"})
        self.assertEqual(self.provider.session.headers["Authorization"], "Bearer key-1")

    def test_epoch_expiry(self):
        self.post.return_value = _response(body={"token": "abc", "expires_at": 0})
        # 0 is falsy and treated as "no expiry"
        self.assertIsNone(self.provider.issue_token("c", "u").expires_at)

        self.post.return_value = _response(body={"token": "abc", "expires_at": 1772467200})
        self.assertEqual(
            self.provider.issue_token("c", "u").expires_at,
            datetime.fromtimestamp(1772467200, tz=timezone.utc)
        )

    def test_retries_server_errors_then_succeeds(self):
        self.post.side_effect = [_response(503), _response(body={"token": "abc"})]
        with self.assertLogs("core.conferencing.http_provider", level="WARNING"):
            credential = self.provider.issue_token("chan-1", "u1")
        self.assertEqual(credential.token, "abc")
        self.assertEqual(self.post.call_count, 2)

    def test_retries_timeouts_then_raises_storage_error(self):
        self.post.side_effect = requests.Timeout("slow")
        with self.assertRaises(StorageIOError):
            self.provider.issue_token("chan-1", "u1")
        self.assertEqual(self.post.call_count, 3)

    def test_client_errors_not_retried(self):
        self.post.return_value = _response(403)
        with self.assertRaises(StorageIOError) as ctx:
            self.provider.issue_token("chan-1", "u1")
        self.assertEqual(self.post.call_count, 1)
        self.assertTrue(ctx.exception.retryable)
        self.assertIsInstance(ctx.exception, IOError)

    def test_missing_token_is_an_error(self):
        self.post.return_value = _response(body={"expires_at": None})
        with self.assertRaises(StorageIOError):
            self.provider.issue_token("chan-1", "u1")

    def test_release_failure_is_logged(self):
        self.post.return_value = _response(404)
        with self.assertLogs("core.conferencing.http_provider", level="WARNING"):
            self.provider.release_channel("chan-1")


if __name__ == '__main__':
    unittest.main()
