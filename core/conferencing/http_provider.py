#!/usr/bin/env python3
"""HTTP Channel Provider - requests join tokens from a hosted conferencing service."""

import logging
from datetime import datetime, timezone
from typing import Optional

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception,
    before_sleep_log,
    RetryError
)

from core.conferencing.interfaces import ChannelProvider, ChannelCredential
from core.exceptions import StorageIOError
from core.utils import ensure_utc

logger = logging.getLogger(__name__)


def _is_retryable_error(exc: Exception) -> bool:
    """
    Only timeouts, connection failures and 5xx responses are retried.
    4xx responses mean the request itself is wrong and fail immediately.
    """
    if isinstance(exc, requests.Timeout):
        return True

    if isinstance(exc, requests.RequestException):
        response = getattr(exc, 'response', None)
        if response is not None:
            return response.status_code >= 500
        return True

    return False


def _parse_expiry(value) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return ensure_utc(datetime.fromisoformat(str(value).replace("Z", "+00:00")))


class HttpChannelProvider(ChannelProvider):
    """
    Client for an external channel service.

    POST {base_url}/tokens with {"channel_id", "user_id"} returns
    {"token": ..., "expires_at": ISO-8601 or epoch seconds}.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        request_timeout_seconds: int = 10,
        max_attempts: int = 3,
        retry_wait_seconds: float = 1
    ):
        self.base_url = base_url.rstrip("/")
        self.request_timeout_seconds = request_timeout_seconds

        self.session = requests.Session()
        if api_key:
            self.session.headers["Authorization"] = f"Bearer {api_key}"

        self._post_with_retry = retry(
            stop=stop_after_attempt(max_attempts),
            wait=wait_fixed(retry_wait_seconds),
            retry=retry_if_exception(_is_retryable_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )(self._post)

        logger.info(f"HttpChannelProvider initialized: base_url={self.base_url}, max_attempts={max_attempts}")

    def _post(self, path: str, payload: dict) -> dict:
        response = self.session.post(
            f"{self.base_url}{path}",
            json=payload,
            timeout=self.request_timeout_seconds
        )
        response.raise_for_status()
        return response.json() if response.content else {}

    def issue_token(self, channel_id: str, user_id: str) -> ChannelCredential:
        try:
            body = self._post_with_retry("/tokens", {"channel_id": channel_id, "user_id": user_id})
        except (requests.RequestException, RetryError) as e:
            logger.error(f"Channel provider failed to issue token for {channel_id}: {e}")
            raise StorageIOError(f"Channel provider unavailable: {e}") from e

        token = body.get("token")
        if not token:
            raise StorageIOError(f"Channel provider returned no token for {channel_id}")

        try:
            expires_at = _parse_expiry(body.get("expires_at"))
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring unparseable token expiry {body.get('expires_at')!r}: {e}")
            expires_at = None

        return ChannelCredential(token=token, expires_at=expires_at)

    def release_channel(self, channel_id: str) -> None:
        """Best effort: a failed release is logged, the channel expires on its own."""
        try:
            self._post_with_retry("/channels/release", {"channel_id": channel_id})
        except requests.RequestException as e:
            logger.warning(f"Failed to release channel {channel_id}: {e}")
