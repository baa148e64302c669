"""
Factories for mentors, sessions and a controllable clock.

Demo data lives here rather than in production code.
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from core.mentors.models import (
    MentorProfile, MentorMetrics, MentorStatus, ExpertiseArea, AvailabilityWindow
)
from core.sessions.models import Session, SessionStatus

BASE_TIME = datetime(2026, 3, 2, 15, 0, tzinfo=timezone.utc)


class FixedClock:
    """Callable clock for SessionLifecycle; move it with advance() or set()."""

    def __init__(self, now: datetime = BASE_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now


def make_mentor(
    mentor_id: str = "mentor-1",
    first_name: str = "Ada",
    last_name: str = "Lovelace",
    expertise: Optional[List[str]] = ("Software Engineering",),
    average_rating: float = 4.8,
    total_sessions: int = 120,
    total_students: int = 12,
    success_rate: float = 0.95,
    response_time_hours: Optional[float] = 2.0,
    status: MentorStatus = MentorStatus.ACTIVE,
    hourly_rate: Optional[float] = 150.0,
    languages: Optional[List[str]] = None,
    **kwargs
) -> MentorProfile:
    return MentorProfile(
        id=mentor_id,
        first_name=first_name,
        last_name=last_name,
        email=f"{mentor_id}@example.com",
        title=kwargs.pop("title", "Staff Engineer"),
        company=kwargs.pop("company", "Analytical Engines"),
        bio=kwargs.pop("bio", "Mentoring engineers through their first leadership role."),
        expertise=[ExpertiseArea(category=c, years_experience=10, level="expert") for c in (expertise or [])],
        availability=[AvailabilityWindow(day_of_week=2, start_time="09:00", end_time="12:00")],
        hourly_rate=hourly_rate,
        status=status,
        metrics=MentorMetrics(
            total_sessions=total_sessions,
            average_rating=average_rating,
            total_students=total_students,
            success_rate=success_rate,
            response_time_hours=response_time_hours,
            completion_rate=0.9,
        ),
        languages=list(languages) if languages is not None else ["English"],
        **kwargs
    )


def sample_mentors() -> List[MentorProfile]:
    """Three ACTIVE mentors and one inactive, as a small directory."""
    return [
        make_mentor("mentor-1", "Ada", "Lovelace", average_rating=4.8),
        make_mentor(
            "mentor-2", "Grace", "Hopper",
            expertise=["Product Management"], average_rating=4.6,
            total_sessions=40, total_students=30, response_time_hours=6.0,
            company="Compilers Inc", languages=["English", "Spanish"], hourly_rate=90.0
        ),
        make_mentor(
            "mentor-3", "Alan", "Turing",
            expertise=[], average_rating=4.0, total_sessions=5,
            success_rate=0.5, hourly_rate=None, title="Researcher", company="Bletchley"
        ),
        make_mentor("mentor-4", "Inactive", "Person", status=MentorStatus.INACTIVE),
    ]


def make_session(
    session_id: str = "session-1",
    mentor_id: str = "mentor-1",
    participant_ids: Optional[List[str]] = None,
    start: datetime = BASE_TIME,
    minutes: int = 60,
    status: SessionStatus = SessionStatus.SCHEDULED,
    **kwargs
) -> Session:
    return Session(
        id=session_id,
        mentor_id=mentor_id,
        title=kwargs.pop("title", "Career planning"),
        scheduled_start_time=start,
        scheduled_end_time=start + timedelta(minutes=minutes),
        participant_ids=list(participant_ids) if participant_ids is not None else ["u1"],
        status=status,
        created_at=kwargs.pop("created_at", BASE_TIME - timedelta(days=1)),
        **kwargs
    )
