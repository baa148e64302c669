"""
Channel Provider Interface - Abstract base for real-time conferencing providers.

The lifecycle only allocates and retires logical channel ids; the provider
turns (channel_id, user_id) into an opaque join credential with a short
expiry. The core never validates or refreshes these credentials.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ChannelCredential:
    """Opaque join token for one user on one channel."""
    token: str
    expires_at: Optional[datetime] = None


class ChannelProvider(ABC):
    """
    Abstract Interface for real-time channel providers (local signer, hosted service).
    """

    @abstractmethod
    def issue_token(self, channel_id: str, user_id: str) -> ChannelCredential:
        """
        Issue a join credential for a user on a channel.

        Raises:
            StorageIOError: when the provider cannot be reached
        """
        pass

    def release_channel(self, channel_id: str) -> None:
        """Tell the provider a channel is retired. Default: nothing to release."""
        return None
