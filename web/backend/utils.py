#!/usr/bin/env python3
"""
Conversions from core dataclasses to API response models.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Optional

from core.matcher.models import MatchResult, MatchSet
from core.mentors.models import MentorProfile
from core.sessions.models import Session, JoinInfo, SessionStats
from .models.responses import (
    MentorOut, MetricsOut, ExpertiseOut, AvailabilityOut,
    MatchOut, MatchesResponse, MatchFiltersOut,
    SessionOut, FeedbackOut, JoinInfoOut, SessionStatsOut
)


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """ISO-8601 string or None."""
    return dt.isoformat() if dt else None


def mentor_to_response(mentor: MentorProfile) -> MentorOut:
    return MentorOut(
        id=mentor.id,
        user_id=mentor.user_id,
        first_name=mentor.first_name,
        last_name=mentor.last_name,
        full_name=mentor.full_name,
        avatar_url=mentor.avatar_url,
        bio=mentor.bio,
        title=mentor.title,
        company=mentor.company,
        linkedin_url=mentor.linkedin_url,
        expertise=[ExpertiseOut(**asdict(e)) for e in mentor.expertise],
        availability=[AvailabilityOut(**asdict(a)) for a in mentor.availability],
        hourly_rate=mentor.hourly_rate,
        currency=mentor.currency,
        status=mentor.status.value,
        metrics=MetricsOut(**mentor.metrics.to_dict()),
        languages=list(mentor.languages),
    )


def match_to_response(match: MatchResult) -> MatchOut:
    return MatchOut(
        mentor=mentor_to_response(match.mentor),
        match_score=match.match_score,
        strengths=match.strengths,
        match_reasons=match.match_reasons,
    )


def match_set_to_response(match_set: MatchSet) -> MatchesResponse:
    filters = match_set.filters
    return MatchesResponse(
        success=True,
        matches=[match_to_response(m) for m in match_set.matches],
        total_matches=match_set.total_matches,
        search_time_ms=match_set.search_time_ms,
        filters=MatchFiltersOut(
            expertise_tags=list(filters.expertise_tags),
            min_budget=filters.min_budget,
            max_budget=filters.max_budget,
            language=filters.language,
        ),
    )


def session_to_response(session: Session) -> SessionOut:
    return SessionOut(
        id=session.id,
        mentor_id=session.mentor_id,
        participant_ids=list(session.participant_ids),
        mentorship_request_id=session.mentorship_request_id,
        title=session.title,
        description=session.description,
        session_type=session.session_type.value,
        status=session.status.value,
        scheduled_start_time=safe_datetime_iso(session.scheduled_start_time),
        scheduled_end_time=safe_datetime_iso(session.scheduled_end_time),
        actual_start_time=safe_datetime_iso(session.actual_start_time),
        actual_end_time=safe_datetime_iso(session.actual_end_time),
        duration_minutes=session.duration_minutes(),
        channel_id=session.channel_id,
        recording_url=session.recording_url,
        transcript_url=session.transcript_url,
        feedback={
            user_id: FeedbackOut(
                rating=fb.rating,
                comments=fb.comments,
                submitted_at=safe_datetime_iso(fb.submitted_at),
            )
            for user_id, fb in session.feedback.items()
        },
        rating=session.rating,
        notes=session.notes,
        created_at=safe_datetime_iso(session.created_at),
        updated_at=safe_datetime_iso(session.updated_at),
    )


def join_info_to_response(info: JoinInfo) -> JoinInfoOut:
    return JoinInfoOut(
        session_id=info.session_id,
        channel_id=info.channel_id,
        join_token=info.join_token,
        meeting_url=info.meeting_url,
        token_expires_at=safe_datetime_iso(info.token_expires_at),
        can_record=info.can_record,
        can_transcribe=info.can_transcribe,
    )


def stats_to_response(stats: SessionStats) -> SessionStatsOut:
    return SessionStatsOut(**asdict(stats))
