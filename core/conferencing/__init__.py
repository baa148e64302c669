"""Conferencing - join credentials for live session channels."""
from core.conferencing.interfaces import ChannelProvider, ChannelCredential
from core.conferencing.local_provider import LocalChannelProvider
from core.conferencing.http_provider import HttpChannelProvider

__all__ = [
    'ChannelProvider', 'ChannelCredential',
    'LocalChannelProvider', 'HttpChannelProvider',
]
