#!/usr/bin/env python3
"""
Local Channel Provider - signs join tokens in-process.

Tokens have the form ``<payload>.<signature>`` where the payload is a
urlsafe-base64 JSON document {channel, user, exp, nonce} and the signature
is HMAC-SHA256 over the payload. Nonces and the fallback signing key come
from the ``secrets`` module.
"""

import base64
import hashlib
import hmac
import json
import logging
import secrets
from datetime import timedelta
from typing import Callable, Optional, Dict, Any

from core.conferencing.interfaces import ChannelProvider, ChannelCredential
from core.utils import utcnow

logger = logging.getLogger(__name__)


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _unb64(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


class LocalChannelProvider(ChannelProvider):
    """Issues HMAC-signed join tokens without an external service."""

    def __init__(
        self,
        signing_secret: Optional[str] = None,
        token_ttl_seconds: int = 3600,
        clock: Callable = utcnow
    ):
        if signing_secret is None:
            logger.warning("No conferencing signing secret configured; using a per-process random key")
            signing_secret = secrets.token_hex(32)
        self._key = signing_secret.encode("utf-8")
        self.token_ttl_seconds = token_ttl_seconds
        self._clock = clock

    def _sign(self, payload: str) -> str:
        return _b64(hmac.new(self._key, payload.encode("ascii"), hashlib.sha256).digest())

    def issue_token(self, channel_id: str, user_id: str) -> ChannelCredential:
        expires_at = self._clock() + timedelta(seconds=self.token_ttl_seconds)
        claims = {
            "channel": channel_id,
            "user": user_id,
            "exp": int(expires_at.timestamp()),
            "nonce": secrets.token_urlsafe(12),
        }
        payload = _b64(json.dumps(claims, separators=(",", ":"), sort_keys=True).encode("utf-8"))
        return ChannelCredential(token=f"{payload}.{self._sign(payload)}", expires_at=expires_at)

    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Return the claims of a token signed by this provider, or None.

        Expiry is reported in the claims but not enforced here.
        """
        try:
            payload, signature = token.rsplit(".", 1)
        except ValueError:
            return None
        if not hmac.compare_digest(signature, self._sign(payload)):
            return None
        return json.loads(_unb64(payload))
