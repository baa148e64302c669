from .base import Base, JSONType
from .mentor import MentorProfileRow
from .session import CoachingSessionRow, SessionParticipantRow, SessionFeedbackRow

__all__ = [
    'Base',
    'JSONType',
    'MentorProfileRow',
    'CoachingSessionRow',
    'SessionParticipantRow',
    'SessionFeedbackRow',
]
