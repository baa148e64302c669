"""
Conversion between ORM rows and domain dataclasses.

Rows never leave the repository layer; the core only sees dataclasses.
"""
from dataclasses import asdict
from typing import Dict

from core.mentors.models import (
    MentorProfile, MentorMetrics, MentorStatus, ExpertiseArea, AvailabilityWindow
)
from core.sessions.models import Session, SessionFeedback, SessionStatus, SessionType
from core.utils import ensure_utc
from database.models import (
    MentorProfileRow, CoachingSessionRow, SessionParticipantRow, SessionFeedbackRow
)


def mentor_from_row(row: MentorProfileRow) -> MentorProfile:
    return MentorProfile(
        id=row.id,
        user_id=row.user_id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email or "",
        avatar_url=row.avatar_url,
        bio=row.bio or "",
        title=row.title or "",
        company=row.company or "",
        linkedin_url=row.linkedin_url,
        expertise=[ExpertiseArea(**e) for e in (row.expertise or [])],
        availability=[AvailabilityWindow(**a) for a in (row.availability or [])],
        hourly_rate=float(row.hourly_rate) if row.hourly_rate is not None else None,
        currency=row.currency or "USD",
        status=MentorStatus(row.status),
        metrics=MentorMetrics(**(row.metrics or {})),
        languages=list(row.languages or []),
    )


def apply_mentor_to_row(mentor: MentorProfile, row: MentorProfileRow) -> MentorProfileRow:
    row.id = mentor.id
    row.user_id = mentor.user_id
    row.first_name = mentor.first_name
    row.last_name = mentor.last_name
    row.email = mentor.email
    row.avatar_url = mentor.avatar_url
    row.bio = mentor.bio
    row.title = mentor.title
    row.company = mentor.company
    row.linkedin_url = mentor.linkedin_url
    row.expertise = [asdict(e) for e in mentor.expertise]
    row.availability = [asdict(a) for a in mentor.availability]
    row.hourly_rate = mentor.hourly_rate
    row.currency = mentor.currency
    row.status = mentor.status.value
    row.metrics = mentor.metrics.to_dict()
    row.languages = list(mentor.languages)
    return row


def session_from_row(row: CoachingSessionRow) -> Session:
    feedback = {
        fb.user_id: SessionFeedback(
            rating=fb.rating,
            comments=fb.comments or "",
            submitted_at=ensure_utc(fb.submitted_at),
        )
        for fb in row.feedback
    }
    return Session(
        id=row.id,
        mentorship_request_id=row.mentorship_request_id,
        mentor_id=row.mentor_id,
        participant_ids=[p.user_id for p in sorted(row.participants, key=lambda p: p.position)],
        title=row.title,
        description=row.description or "",
        scheduled_start_time=ensure_utc(row.scheduled_start_time),
        scheduled_end_time=ensure_utc(row.scheduled_end_time),
        session_type=SessionType(row.session_type),
        status=SessionStatus(row.status),
        actual_start_time=ensure_utc(row.actual_start_time),
        actual_end_time=ensure_utc(row.actual_end_time),
        channel_id=row.channel_id,
        recording_url=row.recording_url,
        transcript_url=row.transcript_url,
        feedback=feedback,
        rating=row.rating,
        notes=row.notes,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


def apply_session_to_row(session: Session, row: CoachingSessionRow) -> CoachingSessionRow:
    """Copy scalar fields and reconcile child rows by user id.

    Children are updated in place rather than replaced so the unique
    (session_id, user_id) constraints never see a delete/insert pair.
    """
    row.id = session.id
    row.mentorship_request_id = session.mentorship_request_id
    row.mentor_id = session.mentor_id
    row.title = session.title
    row.description = session.description
    row.session_type = session.session_type.value
    row.status = session.status.value
    row.scheduled_start_time = session.scheduled_start_time
    row.scheduled_end_time = session.scheduled_end_time
    row.actual_start_time = session.actual_start_time
    row.actual_end_time = session.actual_end_time
    row.channel_id = session.channel_id
    row.recording_url = session.recording_url
    row.transcript_url = session.transcript_url
    row.rating = session.rating
    row.notes = session.notes
    if session.created_at is not None:
        row.created_at = session.created_at
    if session.updated_at is not None:
        row.updated_at = session.updated_at

    existing_participants: Dict[str, SessionParticipantRow] = {p.user_id: p for p in row.participants}
    wanted = set(session.participant_ids)
    for p in list(row.participants):
        if p.user_id not in wanted:
            row.participants.remove(p)
    for position, user_id in enumerate(session.participant_ids):
        participant = existing_participants.get(user_id)
        if participant is None:
            row.participants.append(SessionParticipantRow(user_id=user_id, position=position))
        else:
            participant.position = position

    existing_feedback: Dict[str, SessionFeedbackRow] = {fb.user_id: fb for fb in row.feedback}
    for fb in list(row.feedback):
        if fb.user_id not in session.feedback:
            row.feedback.remove(fb)
    for user_id, entry in session.feedback.items():
        fb_row = existing_feedback.get(user_id)
        if fb_row is None:
            fb_row = SessionFeedbackRow(user_id=user_id)
            row.feedback.append(fb_row)
        fb_row.rating = entry.rating
        fb_row.comments = entry.comments
        fb_row.submitted_at = entry.submitted_at

    return row
