#!/usr/bin/env python3
"""
Session Models - coaching sessions and the values the lifecycle returns.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Dict, Optional

from core.utils import ensure_utc, minutes_between


class SessionStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


TERMINAL_STATUSES = frozenset({SessionStatus.COMPLETED, SessionStatus.CANCELLED})
JOINABLE_STATUSES = frozenset({SessionStatus.SCHEDULED, SessionStatus.IN_PROGRESS})


class SessionType(str, Enum):
    MENTORING = "MENTORING"
    WORKSHOP = "WORKSHOP"
    CODE_REVIEW = "CODE_REVIEW"


@dataclass
class SessionFeedback:
    """A single user's rating of a completed session."""
    rating: int
    comments: str
    submitted_at: datetime


@dataclass
class Session:
    """
    Central mutable entity of the lifecycle.

    participant_ids never contains mentor_id. actual_* timestamps and
    channel_id are only set by live transitions.
    """
    id: str
    mentor_id: str
    title: str
    scheduled_start_time: datetime
    scheduled_end_time: datetime
    participant_ids: List[str] = field(default_factory=list)
    mentorship_request_id: Optional[str] = None
    description: str = ""
    session_type: SessionType = SessionType.MENTORING
    status: SessionStatus = SessionStatus.SCHEDULED
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    channel_id: Optional[str] = None
    recording_url: Optional[str] = None
    transcript_url: Optional[str] = None
    feedback: Dict[str, SessionFeedback] = field(default_factory=dict)
    rating: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_mentor(self, user_id: str) -> bool:
        return self.mentor_id == user_id

    def involves(self, user_id: str) -> bool:
        """True when the user is the mentor or a participant."""
        return self.mentor_id == user_id or user_id in self.participant_ids

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def is_overdue(self, now: datetime) -> bool:
        """Still SCHEDULED although the scheduled window has passed."""
        return self.status == SessionStatus.SCHEDULED and ensure_utc(now) > self.scheduled_end_time

    def duration_minutes(self) -> int:
        """Actual duration when both live timestamps exist, scheduled otherwise."""
        if self.actual_start_time and self.actual_end_time:
            return minutes_between(self.actual_start_time, self.actual_end_time)
        if self.scheduled_start_time and self.scheduled_end_time:
            return minutes_between(self.scheduled_start_time, self.scheduled_end_time)
        return 0


@dataclass
class ScheduleRequest:
    """Input to SessionLifecycle.schedule()."""
    mentor_id: str
    title: str
    scheduled_start_time: datetime
    scheduled_end_time: datetime
    participant_ids: List[str] = field(default_factory=list)
    mentorship_request_id: Optional[str] = None
    description: str = ""
    session_type: Optional[SessionType] = None


@dataclass
class JoinInfo:
    """What a starting or joining user needs to connect to the live channel."""
    session_id: str
    channel_id: str
    join_token: str
    meeting_url: str
    token_expires_at: Optional[datetime] = None
    can_record: bool = True
    can_transcribe: bool = True


@dataclass
class SessionStats:
    total_sessions: int
    completed_sessions: int
    upcoming_sessions: int
    total_duration_minutes: int
    average_rating: float
