"""Sessions Module - coaching session state machine and live channels."""
from core.sessions.models import (
    Session, SessionStatus, SessionType, SessionFeedback, ScheduleRequest,
    JoinInfo, SessionStats, TERMINAL_STATUSES, JOINABLE_STATUSES
)
from core.sessions.channels import ActiveChannelRegistry
from core.sessions.lifecycle import SessionLifecycle

__all__ = [
    'SessionLifecycle', 'ActiveChannelRegistry',
    'Session', 'SessionStatus', 'SessionType', 'SessionFeedback',
    'ScheduleRequest', 'JoinInfo', 'SessionStats',
    'TERMINAL_STATUSES', 'JOINABLE_STATUSES',
]
