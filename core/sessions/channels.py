"""
Active channel registry - membership of live session channels.

One channel exists per IN_PROGRESS session. The registry is shared by all
lifecycle calls and may be read while another thread mutates it.
"""
import logging
import threading
from typing import Dict, Set, List

logger = logging.getLogger(__name__)


class ActiveChannelRegistry:
    """Thread-safe map of channel id to the set of member user ids."""

    def __init__(self):
        self._lock = threading.Lock()
        self._channels: Dict[str, Set[str]] = {}

    def open(self, channel_id: str, user_id: str) -> None:
        """Register a new channel with the opening user as sole member."""
        with self._lock:
            self._channels[channel_id] = {user_id}
        logger.debug(f"Opened channel {channel_id} for {user_id}")

    def add_member(self, channel_id: str, user_id: str) -> None:
        # Membership is a set, re-joining is a no-op. A channel unknown to
        # this process (e.g. after a restart) is re-registered on first join.
        with self._lock:
            self._channels.setdefault(channel_id, set()).add(user_id)

    def remove_member(self, channel_id: str, user_id: str) -> None:
        with self._lock:
            members = self._channels.get(channel_id)
            if members is not None:
                members.discard(user_id)

    def close(self, channel_id: str) -> None:
        with self._lock:
            removed = self._channels.pop(channel_id, None)
        if removed is not None:
            logger.debug(f"Closed channel {channel_id} ({len(removed)} members)")

    def members(self, channel_id: str) -> List[str]:
        with self._lock:
            return sorted(self._channels.get(channel_id, ()))

    def is_active(self, channel_id: str) -> bool:
        with self._lock:
            return channel_id in self._channels

    def __len__(self) -> int:
        with self._lock:
            return len(self._channels)
