#!/usr/bin/env python3
"""
Notification Channels

Every channel implements the same small interface so the service can fan a
session event out to whatever is configured:

    from notification.channels import NotificationChannelFactory

    channel = NotificationChannelFactory.get_channel('webhook')
    channel.send(recipient, subject, body, metadata)

New channels are added with NotificationChannelFactory.register_channel().
"""

from abc import ABC, abstractmethod
from collections import defaultdict, deque
from datetime import datetime, timezone
from typing import Dict, Any, List
import logging
import threading
import urllib.parse

import requests

logger = logging.getLogger(__name__)


def _validate_webhook_url(url: str) -> bool:
    """Only absolute http(s) URLs with a hostname are accepted."""
    try:
        parsed = urllib.parse.urlparse(url or "")
    except ValueError as e:
        logger.error(f"URL validation error: {e}")
        return False

    if parsed.scheme not in ('http', 'https'):
        logger.error(f"Invalid URL scheme: {parsed.scheme!r}")
        return False
    if not parsed.hostname:
        logger.error("URL missing hostname")
        return False
    return True


class NotificationChannel(ABC):
    """
    Abstract base class for all notification channels.

    send() returns False on delivery failure instead of raising; the caller
    decides whether that is worth a retry.

    Channels with process_local = True keep their state in the sending
    process and are always delivered inline, never through the RQ queue.
    """

    process_local = False

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        """
        Send a notification.

        Args:
            recipient: Channel-specific address (user id, webhook URL)
            subject: Short title
            body: Plain-text body
            metadata: Structured event data

        Returns:
            True if delivered
        """
        pass

    def validate_config(self) -> bool:
        return True


class WebhookChannel(NotificationChannel):
    """POSTs a JSON document describing the event to a webhook URL."""

    timeout_seconds = 10

    @property
    def channel_type(self) -> str:
        return 'webhook'

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        if not _validate_webhook_url(recipient):
            logger.error(f"Invalid webhook URL: {recipient}")
            return False

        payload = {
            'type': 'session_event',
            'subject': subject,
            'body': body,
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'event': metadata,
        }

        try:
            response = requests.post(
                recipient,
                json=payload,
                headers={'User-Agent': 'Mentorship-Notification-Service/1.0'},
                timeout=self.timeout_seconds
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to send webhook: {e}")
            return False

        parsed = urllib.parse.urlparse(recipient)
        logger.info(f"Webhook sent to {parsed.scheme}://{parsed.hostname}{parsed.path}")
        return True


class InAppChannel(NotificationChannel):
    """
    In-app notifications held in a per-user inbox.

    The inbox lives in the memory of the API process and is bounded per user.
    Clients read it through GET /api/notifications/inbox. It is not shared
    between processes and does not survive a restart; running more than one
    API worker gives each worker its own inbox.
    """

    process_local = True
    max_per_user = 100

    _inbox: Dict[str, deque] = defaultdict(lambda: deque(maxlen=InAppChannel.max_per_user))
    _lock = threading.Lock()

    @property
    def channel_type(self) -> str:
        return 'in_app'

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        entry = {
            'subject': subject,
            'body': body,
            'metadata': metadata,
            'created_at': datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            self._inbox[recipient].append(entry)
        logger.info(f"[IN_APP] User: {recipient}, Title: {subject}")
        return True

    @classmethod
    def messages_for(cls, recipient: str) -> List[Dict[str, Any]]:
        with cls._lock:
            return list(cls._inbox.get(recipient, ()))

    @classmethod
    def clear(cls) -> None:
        with cls._lock:
            cls._inbox.clear()


class NotificationChannelFactory:
    """Registry of channel classes by type name."""

    _channels: Dict[str, type] = {
        'webhook': WebhookChannel,
        'in_app': InAppChannel,
    }

    @classmethod
    def get_channel(cls, channel_type: str) -> NotificationChannel:
        """
        Raises:
            ValueError: if the channel type is not registered
        """
        channel_class = cls._channels.get(channel_type.lower())
        if channel_class is None:
            raise ValueError(
                f"Unknown channel type: {channel_type}. Available: {cls.list_channels()}"
            )
        return channel_class()

    @classmethod
    def is_process_local(cls, channel_type: str) -> bool:
        channel_class = cls._channels.get(channel_type.lower())
        return bool(channel_class and channel_class.process_local)

    @classmethod
    def register_channel(cls, channel_type: str, channel_class: type):
        if not isinstance(channel_class, type) or not issubclass(channel_class, NotificationChannel):
            raise ValueError("Channel class must extend NotificationChannel")
        cls._channels[channel_type.lower()] = channel_class
        logger.info(f"Registered notification channel: {channel_type}")

    @classmethod
    def list_channels(cls) -> list:
        return sorted(cls._channels)
