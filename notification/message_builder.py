"""Builds subject/body text for session event notifications."""
from typing import Optional, Dict, Any

from pydantic import BaseModel


class SessionEventContent(BaseModel):
    """Everything a channel needs to describe one session event."""
    event: str
    session_id: str
    title: str
    mentor_id: str
    actor_id: str
    status: str
    scheduled_start_time: str
    scheduled_end_time: str
    link: str
    reason: Optional[str] = None
    rating: Optional[int] = None
    previous_start: Optional[str] = None


_SUBJECTS = {
    'scheduled': "Session scheduled: {title}",
    'started': "Session started: {title}",
    'completed': "Session completed: {title}",
    'cancelled': "Session cancelled: {title}",
    'rescheduled': "Session rescheduled: {title}",
    'feedback': "New feedback on: {title}",
}


class NotificationMessageBuilder:

    @staticmethod
    def build_subject(content: SessionEventContent) -> str:
        template = _SUBJECTS.get(content.event, "Session update: {title}")
        return template.format(title=content.title)

    @staticmethod
    def build_body(content: SessionEventContent) -> str:
        lines = [f"{content.title} ({content.status})"]

        if content.event == 'rescheduled' and content.previous_start:
            lines.append(f"Moved from {content.previous_start} to {content.scheduled_start_time}")
        else:
            lines.append(f"When: {content.scheduled_start_time} - {content.scheduled_end_time}")

        if content.event == 'cancelled':
            lines.append(f"Reason: {content.reason or 'No reason provided'}")
        if content.event == 'feedback' and content.rating is not None:
            lines.append(f"Rating: {content.rating}/5")

        lines.append("")
        lines.append(f"Details: {content.link}")
        return "\n".join(lines)

    @staticmethod
    def build_metadata(content: SessionEventContent) -> Dict[str, Any]:
        return content.model_dump(exclude_none=True)
