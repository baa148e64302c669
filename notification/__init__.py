"""
Notification Module

Session event notifications over pluggable channels, delivered inline or
through an RQ queue.

Usage:
    from notification import NotificationService, NotificationChannelFactory

    service = NotificationService(config.notifications)
    service.notify_session_event('cancelled', session, actor_id='u1', reason='sick')

    channel = NotificationChannelFactory.get_channel('webhook')
    channel.send('https://hooks.example.com/x', 'Subject', 'Body', {})
"""

from notification.channels import (
    NotificationChannel,
    WebhookChannel,
    InAppChannel,
    NotificationChannelFactory,
)

from notification.message_builder import (
    NotificationMessageBuilder,
    SessionEventContent,
)

from notification.service import (
    NotificationService,
    process_notification_task,
)

__all__ = [
    # Channels
    'NotificationChannel',
    'WebhookChannel',
    'InAppChannel',
    'NotificationChannelFactory',
    # Messages
    'NotificationMessageBuilder',
    'SessionEventContent',
    # Service
    'NotificationService',
    'process_notification_task',
]
