#!/usr/bin/env python3
"""
Notification Service - fans session events out to the configured channels.

Delivery is fire-and-forget from the lifecycle's point of view: the state
change has already been saved when a notification is sent, and a delivery
failure is only logged.

Usage:
    from notification.service import NotificationService

    service = NotificationService(config.notifications)
    service.notify_session_event("scheduled", session, actor_id="m1")

With use_async_queue=True jobs go to an RQ queue on Redis and are run by
`python -m notification.worker`; otherwise they are delivered inline.
In-app messages are always delivered inline.
"""

import logging
import uuid
from typing import Optional, Dict, Any, List

from redis import Redis
from rq import Queue, Retry

from core.config_loader import NotificationConfig
from core.sessions.models import Session
from notification.channels import NotificationChannelFactory
from notification.message_builder import NotificationMessageBuilder, SessionEventContent

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Coordinates:
    1. Recipient selection (everyone on the session except the actor)
    2. Message building (via NotificationMessageBuilder)
    3. Channel selection (via NotificationChannelFactory)
    4. Queueing for async processing (via RQ) or inline delivery
    """

    def __init__(self, config: Optional[NotificationConfig] = None):
        """
        Args:
            config: NotificationConfig with channels, base_url and queue settings
        """
        self.config = config or NotificationConfig()
        self.base_url = self.config.base_url.rstrip('/')
        self.redis_conn = None
        self.queue = None
        self.async_mode = False

        if not self.config.use_async_queue:
            logger.info("Async queue disabled via config. Using sync mode.")
            return

        redis_url = self.config.redis_url or 'redis://localhost:6379/0'
        try:
            self.redis_conn = Redis.from_url(redis_url)
            self.redis_conn.ping()
            self.queue = Queue(self.config.queue_name, connection=self.redis_conn)
            self.async_mode = True
            logger.info("Notification service connected to Redis")
        except Exception as e:
            logger.error(f"Redis connection failed: {e}. Falling back to sync mode.")
            self.redis_conn = None
            self.queue = None

    def send_notification(
        self,
        channel_type: str,
        recipient: str,
        subject: str,
        body: str,
        user_id: str,
        event_type: str = "general",
        metadata: Optional[Dict[str, Any]] = None
    ) -> Optional[str]:
        """
        Queue or deliver one notification.

        Process-local channels (in_app) are delivered inline even in async
        mode so the message lands in this process, where the inbox is read.

        Returns:
            Job id in async mode, notification id in sync mode
        """
        notification_data = {
            'channel_type': channel_type,
            'recipient': recipient,
            'subject': subject,
            'body': body,
            'metadata': metadata or {},
            'user_id': user_id,
            'event_type': event_type,
        }

        if self.async_mode and not NotificationChannelFactory.is_process_local(channel_type):
            job = self.queue.enqueue(
                process_notification_task,
                notification_data,
                job_timeout='5m',
                result_ttl=86400,
                retry=Retry(max=3, interval=[30, 60, 120])
            )
            logger.info(f"Queued notification as job {job.id}")
            return job.id

        return process_notification_task(notification_data)

    def notify_session_event(
        self,
        event: str,
        session: Session,
        actor_id: str,
        **extra
    ) -> Dict[str, Optional[str]]:
        """
        Tell everyone on a session (except whoever caused the event) about it.

        Args:
            event: scheduled, started, completed, cancelled, rescheduled or feedback
            session: Session after the state change
            actor_id: User who triggered the event
            **extra: reason, rating or previous_start, depending on event

        Returns:
            Dict mapping "{user}:{channel}" to notification ids (None on failure)
        """
        if not self.config.enabled:
            logger.debug(f"Notifications disabled, skipping {event} for session {session.id}")
            return {}

        content = SessionEventContent(
            event=event,
            session_id=session.id,
            title=session.title,
            mentor_id=session.mentor_id,
            actor_id=actor_id,
            status=session.status.value,
            scheduled_start_time=session.scheduled_start_time.isoformat(),
            scheduled_end_time=session.scheduled_end_time.isoformat(),
            link=f"{self.base_url}/session/{session.id}",
            **extra
        )
        subject = NotificationMessageBuilder.build_subject(content)
        body = NotificationMessageBuilder.build_body(content)
        metadata = NotificationMessageBuilder.build_metadata(content)

        results = {}
        for user_id in self._recipients(session, actor_id):
            for channel_type, channel_cfg in self.config.channels.items():
                if not channel_cfg.enabled:
                    continue
                key = f"{user_id}:{channel_type}"
                try:
                    results[key] = self.send_notification(
                        channel_type=channel_type,
                        recipient=channel_cfg.recipient or user_id,
                        subject=subject,
                        body=body,
                        user_id=user_id,
                        event_type=f"session_{event}",
                        metadata=metadata
                    )
                except Exception as e:
                    logger.error(f"Failed to send {channel_type} notification to {user_id}: {e}")
                    results[key] = None

        return results

    @staticmethod
    def _recipients(session: Session, actor_id: str) -> List[str]:
        users = [session.mentor_id] + list(session.participant_ids)
        return [u for u in users if u != actor_id]

    def get_queue_status(self) -> Dict[str, Any]:
        if not self.async_mode:
            return {'status': 'sync_mode', 'queue_length': 0}

        try:
            return {
                'status': 'active',
                'queue_length': len(self.queue),
                'redis_connected': self.redis_conn.ping()
            }
        except Exception as e:
            return {'status': 'error', 'error': str(e)}


# Worker task - must be at module level for RQ
def process_notification_task(notification_data: Dict[str, Any]) -> Optional[str]:
    """
    Deliver one notification (called inline or by an RQ worker).

    Returns:
        The notification id, or None when the channel reported failure
    """
    notification_id = str(uuid.uuid4())
    channel_type = notification_data['channel_type']

    logger.info(f"Processing notification {notification_id} via {channel_type}")

    channel = NotificationChannelFactory.get_channel(channel_type)
    success = channel.send(
        notification_data['recipient'],
        notification_data['subject'],
        notification_data['body'],
        notification_data.get('metadata', {})
    )

    if not success:
        logger.error(f"Notification {notification_id} failed to send")
        return None

    logger.info(f"Notification {notification_id} sent successfully")
    return notification_id
