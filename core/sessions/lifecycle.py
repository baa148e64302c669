#!/usr/bin/env python3
"""
Session Lifecycle - the coaching session state machine.

    SCHEDULED --start/join--> IN_PROGRESS --end--> COMPLETED
    SCHEDULED --cancel--> CANCELLED

COMPLETED and CANCELLED are terminal; reschedule stays in SCHEDULED.

Every state-changing operation loads, checks and saves under the session's
lock so concurrent callers see a single winner. Checks run before any
mutation, and the channel credential is obtained before the session is
touched, so a failed call leaves the stored session unchanged.
"""
from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Callable, List, Optional, TYPE_CHECKING

from core.config_loader import SessionsConfig
from core.conferencing.interfaces import ChannelProvider
from core.exceptions import (
    NotFoundError, InvalidStateError, UnauthorizedError, ValidationError
)
from core.locks import KeyedLock
from core.mentors.models import MentorMetrics
from core.sessions.channels import ActiveChannelRegistry
from core.sessions.models import (
    Session, SessionStatus, SessionType, SessionFeedback, ScheduleRequest,
    JoinInfo, SessionStats, JOINABLE_STATUSES
)
from core.utils import utcnow, ensure_utc, round_half_up
from database.repositories.interfaces import SessionRepository

if TYPE_CHECKING:
    from core.mentors.directory import MentorDirectory
    from notification.service import NotificationService

logger = logging.getLogger(__name__)


class SessionLifecycle:
    """
    Owns every session state transition.

    Responsibilities:
    - Validate and create SCHEDULED sessions
    - Allocate live channels and issue join credentials on start/join
    - Enforce relationship checks (mentor vs participant)
    - Aggregate feedback and write mentor metrics back to the directory
    """

    def __init__(
        self,
        repo: SessionRepository,
        channel_provider: ChannelProvider,
        config: Optional[SessionsConfig] = None,
        notifier: Optional[NotificationService] = None,
        directory: Optional[MentorDirectory] = None,
        clock: Callable[[], datetime] = utcnow,
        channels: Optional[ActiveChannelRegistry] = None
    ):
        """
        Args:
            repo: Session storage
            channel_provider: Issues join tokens for live channels
            config: SessionsConfig (grace period, meeting URL, capabilities)
            notifier: Optional fire-and-forget notification sink
            directory: Optional MentorDirectory for mentor checks and metric write-back
            clock: Returns the current aware UTC time
            channels: Registry of live channel membership
        """
        self.repo = repo
        self.channel_provider = channel_provider
        self.config = config or SessionsConfig()
        self.notifier = notifier
        self.directory = directory
        self.clock = clock
        self.channels = channels or ActiveChannelRegistry()
        self._locks = KeyedLock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_session(self, session_id: str) -> Session:
        session = self.repo.get(session_id)
        if session is None:
            raise NotFoundError(f"Session not found: {session_id}")
        return session

    def can_start(self, session: Session, now: Optional[datetime] = None) -> bool:
        """SCHEDULED and now within [start - grace, end]."""
        if session.status != SessionStatus.SCHEDULED:
            return False
        now = ensure_utc(now or self.clock())
        earliest = session.scheduled_start_time - timedelta(minutes=self.config.start_grace_minutes)
        return earliest <= now <= session.scheduled_end_time

    def can_join(self, session: Session, user_id: str) -> bool:
        return session.status in JOINABLE_STATUSES and session.involves(user_id)

    def sessions_for_user(
        self,
        user_id: str,
        status: Optional[SessionStatus] = None,
        upcoming: bool = False
    ) -> List[Session]:
        """Sessions where the user is mentor or participant, newest scheduled first."""
        sessions = self.repo.list_for_user(user_id)
        if status is not None:
            sessions = [s for s in sessions if s.status == status]
        if upcoming:
            now = self.clock()
            sessions = [
                s for s in sessions
                if s.status == SessionStatus.SCHEDULED and s.scheduled_start_time > now
            ]
        sessions.sort(key=lambda s: s.scheduled_start_time, reverse=True)
        return sessions

    def upcoming_sessions(self, user_id: str, limit: int = 10) -> List[Session]:
        sessions = self.sessions_for_user(user_id, upcoming=True)
        sessions.sort(key=lambda s: s.scheduled_start_time)
        return sessions[:max(0, limit)]

    def stats_for_user(self, user_id: str) -> SessionStats:
        sessions = self.repo.list_for_user(user_id)
        now = self.clock()

        completed = [s for s in sessions if s.status == SessionStatus.COMPLETED]
        upcoming = [
            s for s in sessions
            if s.status == SessionStatus.SCHEDULED and s.scheduled_start_time > now
        ]
        rated = [s.rating for s in completed if s.rating is not None]

        return SessionStats(
            total_sessions=len(sessions),
            completed_sessions=len(completed),
            upcoming_sessions=len(upcoming),
            total_duration_minutes=sum(s.duration_minutes() for s in completed),
            average_rating=round_half_up(sum(rated) / len(rated), 1) if rated else 0.0,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def schedule(self, request: ScheduleRequest) -> Session:
        """
        Create a SCHEDULED session.

        Raises:
            ValidationError: blank title/mentor, or end <= start
            NotFoundError: unknown mentor (only when a directory is attached)
            InvalidStateError: mentor inactive or at the student cap
        """
        if not request.mentor_id or not request.mentor_id.strip():
            raise ValidationError("mentor_id is required")
        if not request.title or not request.title.strip():
            raise ValidationError("title is required")

        start = ensure_utc(request.scheduled_start_time)
        end = ensure_utc(request.scheduled_end_time)
        if start is None or end is None:
            raise ValidationError("scheduled start and end times are required")
        if end <= start:
            raise ValidationError("scheduled_end_time must be after scheduled_start_time")

        if self.directory is not None:
            self.directory.ensure_accepting_students(request.mentor_id)

        participants = []
        for user_id in request.participant_ids:
            if user_id and user_id != request.mentor_id and user_id not in participants:
                participants.append(user_id)

        now = self.clock()
        session = Session(
            id=str(uuid.uuid4()),
            mentor_id=request.mentor_id,
            title=request.title.strip(),
            scheduled_start_time=start,
            scheduled_end_time=end,
            participant_ids=participants,
            mentorship_request_id=request.mentorship_request_id,
            description=request.description or "",
            session_type=request.session_type or SessionType(self.config.default_session_type),
            status=SessionStatus.SCHEDULED,
            created_at=now,
            updated_at=now,
        )
        self.repo.save(session)

        logger.info(f"Scheduled session {session.id} with mentor {session.mentor_id} at {start.isoformat()}")
        self._notify("scheduled", session, request.mentor_id)
        return session

    def start(self, session_id: str, user_id: str) -> JoinInfo:
        """
        Move a session to IN_PROGRESS and open its live channel.

        Raises:
            NotFoundError: unknown session
            InvalidStateError: not SCHEDULED or outside the start window
            UnauthorizedError: caller is neither mentor nor participant
            StorageIOError: the channel provider is unavailable
        """
        with self._locks.hold(session_id):
            session = self.get_session(session_id)
            info = self._start_locked(session, user_id)

        self._notify("started", session, user_id)
        return info

    def join(self, session_id: str, user_id: str) -> JoinInfo:
        """
        Join a live session, starting it first when it is due.

        Raises:
            NotFoundError: unknown session
            UnauthorizedError: caller is neither mentor nor participant
            InvalidStateError: not started yet, or already finished
        """
        promoted = False
        with self._locks.hold(session_id):
            session = self.get_session(session_id)
            if not session.involves(user_id):
                raise UnauthorizedError(f"User {user_id} is not part of session {session_id}")

            if session.status == SessionStatus.SCHEDULED:
                if not self.can_start(session):
                    raise InvalidStateError("Session has not started yet")
                info = self._start_locked(session, user_id)
                promoted = True
            elif session.status == SessionStatus.IN_PROGRESS:
                credential = self.channel_provider.issue_token(session.channel_id, user_id)
                self.channels.add_member(session.channel_id, user_id)
                info = self._join_info(session, credential)
                logger.info(f"User {user_id} joined session {session_id}")
            else:
                raise InvalidStateError(
                    f"Cannot join session {session_id} in status {session.status.value}"
                )

        if promoted:
            self._notify("started", session, user_id)
        return info

    def leave(self, session_id: str, user_id: str) -> None:
        with self._locks.hold(session_id):
            session = self.get_session(session_id)
            if not session.involves(user_id):
                raise UnauthorizedError(f"User {user_id} is not part of session {session_id}")
            if session.status != SessionStatus.IN_PROGRESS:
                raise InvalidStateError(f"Session {session_id} is not in progress")
            self.channels.remove_member(session.channel_id, user_id)
        logger.info(f"User {user_id} left session {session_id}")

    def end(self, session_id: str, user_id: str) -> Session:
        """
        Complete an IN_PROGRESS session and retire its channel. Mentor only.
        """
        with self._locks.hold(session_id):
            session = self.get_session(session_id)
            if session.status != SessionStatus.IN_PROGRESS:
                raise InvalidStateError(
                    f"Cannot end session {session_id} in status {session.status.value}"
                )
            if not session.is_mentor(user_id):
                raise UnauthorizedError("Only the mentor can end the session")

            now = self.clock()
            session.status = SessionStatus.COMPLETED
            session.actual_end_time = now
            session.updated_at = now
            self.repo.save(session)

            channel_id = session.channel_id
            self.channels.close(channel_id)

        self._release_channel(channel_id)
        logger.info(f"Session {session_id} completed ({session.duration_minutes()} min)")
        self._notify("completed", session, user_id)
        return session

    def cancel(self, session_id: str, user_id: str, reason: Optional[str] = None) -> Session:
        with self._locks.hold(session_id):
            session = self.get_session(session_id)
            if session.status != SessionStatus.SCHEDULED:
                raise InvalidStateError(
                    f"Cannot cancel session {session_id} in status {session.status.value}"
                )
            if not session.involves(user_id):
                raise UnauthorizedError(f"User {user_id} is not part of session {session_id}")

            note = f"Cancelled by user {user_id}. Reason: {reason or 'No reason provided'}"
            session.notes = f"{session.notes}\n{note}" if session.notes else note
            session.status = SessionStatus.CANCELLED
            session.updated_at = self.clock()
            self.repo.save(session)

        logger.info(f"Session {session_id} cancelled by {user_id}")
        self._notify("cancelled", session, user_id, reason=reason)
        return session

    def reschedule(
        self,
        session_id: str,
        user_id: str,
        new_start: datetime,
        new_end: datetime
    ) -> Session:
        new_start = ensure_utc(new_start)
        new_end = ensure_utc(new_end)
        if new_start is None or new_end is None or new_end <= new_start:
            raise ValidationError("scheduled_end_time must be after scheduled_start_time")

        with self._locks.hold(session_id):
            session = self.get_session(session_id)
            if session.status != SessionStatus.SCHEDULED:
                raise InvalidStateError(
                    f"Cannot reschedule session {session_id} in status {session.status.value}"
                )
            if not session.is_mentor(user_id):
                raise UnauthorizedError("Only the mentor can reschedule the session")

            previous_start = session.scheduled_start_time
            session.scheduled_start_time = new_start
            session.scheduled_end_time = new_end
            session.updated_at = self.clock()
            self.repo.save(session)

        logger.info(
            f"Session {session_id} rescheduled from {previous_start.isoformat()} to {new_start.isoformat()}"
        )
        self._notify("rescheduled", session, user_id, previous_start=previous_start.isoformat())
        return session

    def update_details(
        self,
        session_id: str,
        user_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        notes: Optional[str] = None
    ) -> Session:
        """Edit title, description or notes without changing status.

        Mentor only; allowed in any state except CANCELLED.
        """
        if title is not None and not title.strip():
            raise ValidationError("title must not be blank")

        with self._locks.hold(session_id):
            session = self.get_session(session_id)
            if session.status == SessionStatus.CANCELLED:
                raise InvalidStateError(f"Session {session_id} is cancelled")
            if not session.is_mentor(user_id):
                raise UnauthorizedError("Only the mentor can edit the session")

            if title is not None:
                session.title = title.strip()
            if description is not None:
                session.description = description
            if notes is not None:
                session.notes = notes
            session.updated_at = self.clock()
            self.repo.save(session)

        return session

    def attach_recording(
        self,
        session_id: str,
        recording_url: Optional[str] = None,
        transcript_url: Optional[str] = None
    ) -> Session:
        """Record where the recording and transcript of a live or finished session live."""
        if recording_url is None and transcript_url is None:
            raise ValidationError("recording_url or transcript_url is required")

        with self._locks.hold(session_id):
            session = self.get_session(session_id)
            if session.status not in (SessionStatus.IN_PROGRESS, SessionStatus.COMPLETED):
                raise InvalidStateError(
                    f"Cannot attach recording to session {session_id} in status {session.status.value}"
                )
            if recording_url is not None:
                session.recording_url = recording_url
            if transcript_url is not None:
                session.transcript_url = transcript_url
            session.updated_at = self.clock()
            self.repo.save(session)

        logger.info(f"Attached recording artifacts to session {session_id}")
        return session

    def submit_feedback(
        self,
        session_id: str,
        user_id: str,
        rating: int,
        comments: str = ""
    ) -> Session:
        """
        Record (or replace) a user's rating of a COMPLETED session.

        The session rating becomes the mean of all submitted ratings, rounded
        half up to one decimal.
        """
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError(f"rating must be an integer between 1 and 5, got {rating!r}")

        with self._locks.hold(session_id):
            session = self.get_session(session_id)
            if session.status != SessionStatus.COMPLETED:
                raise InvalidStateError(
                    f"Cannot submit feedback for session {session_id} in status {session.status.value}"
                )
            if not session.involves(user_id):
                raise UnauthorizedError(f"User {user_id} is not part of session {session_id}")

            now = self.clock()
            session.feedback[user_id] = SessionFeedback(
                rating=rating, comments=comments or "", submitted_at=now
            )
            previous_rating = session.rating
            ratings = [f.rating for f in session.feedback.values()]
            session.rating = round_half_up(sum(ratings) / len(ratings), 1)
            session.updated_at = now
            self.repo.save(session)

            # Still under the session lock so folds for one session apply in order
            self._fold_mentor_rating(session.mentor_id, previous_rating, session.rating)

        logger.info(f"Feedback from {user_id} on session {session_id}: rating now {session.rating}")
        self._notify("feedback", session, user_id, rating=rating)
        return session

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_locked(self, session: Session, user_id: str) -> JoinInfo:
        # Caller holds the session lock.
        if not self.can_start(session):
            raise InvalidStateError(
                f"Session {session.id} cannot be started now (status {session.status.value})"
            )
        if not self.can_join(session, user_id):
            raise UnauthorizedError(f"User {user_id} is not part of session {session.id}")

        channel_id = f"session-{session.id}-{secrets.token_hex(8)}"
        credential = self.channel_provider.issue_token(channel_id, user_id)

        now = self.clock()
        session.status = SessionStatus.IN_PROGRESS
        session.actual_start_time = now
        session.channel_id = channel_id
        session.updated_at = now
        self.repo.save(session)

        self.channels.open(channel_id, user_id)
        logger.info(f"Session {session.id} started by {user_id} on channel {channel_id}")
        return self._join_info(session, credential)

    def _join_info(self, session: Session, credential) -> JoinInfo:
        return JoinInfo(
            session_id=session.id,
            channel_id=session.channel_id,
            join_token=credential.token,
            meeting_url=f"{self.config.meeting_base_url.rstrip('/')}/session/{session.id}",
            token_expires_at=credential.expires_at,
            can_record=self.config.can_record,
            can_transcribe=self.config.can_transcribe,
        )

    def _release_channel(self, channel_id: Optional[str]) -> None:
        if not channel_id:
            return
        try:
            self.channel_provider.release_channel(channel_id)
        except Exception as e:
            logger.error(f"Failed to release channel {channel_id}: {e}")

    def _fold_mentor_rating(
        self,
        mentor_id: str,
        previous_rating: Optional[float],
        new_rating: float
    ) -> None:
        """
        Merge one session's rating into the mentor's running metrics.

        The first rating of a session counts it as one more rated session
        and folds it into the average weighted by total_sessions. A later
        rating of the same session swaps its old contribution for the new
        one. History already on the profile is kept.
        """
        if self.directory is None or not self.config.sync_mentor_metrics:
            return

        def fold(current: MentorMetrics) -> dict:
            count = current.total_sessions
            if previous_rating is None or count == 0:
                new_count = count + 1
                total = current.average_rating * count + new_rating
            else:
                new_count = count
                total = current.average_rating * count - previous_rating + new_rating
            average = min(5.0, max(0.0, total / new_count))
            return {"total_sessions": new_count, "average_rating": round_half_up(average, 2)}

        self.directory.apply_metrics(mentor_id, fold)

    def _notify(self, event: str, session: Session, actor_id: str, **extra) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.notify_session_event(event, session, actor_id, **extra)
        except Exception as e:
            logger.error(f"Notification for {event} on session {session.id} failed: {e}")
