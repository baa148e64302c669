#!/usr/bin/env python3
"""
Session endpoints - scheduling and the live session lifecycle.

The caller comes from the identity headers; the lifecycle enforces who may
do what (mentor vs participant).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.exceptions import UnauthorizedError, ValidationError
from core.sessions import SessionLifecycle, ScheduleRequest, SessionStatus, SessionType
from ..dependencies import get_lifecycle, get_caller, CallerIdentity
from ..models.requests import (
    ScheduleSessionRequest,
    RescheduleRequest,
    CancelRequest,
    FeedbackRequest,
    SessionDetailsUpdate,
    RecordingAttach
)
from ..models.responses import (
    SessionResponse,
    SessionsResponse,
    JoinResponse,
    SessionStatsResponse,
    SuccessResponse
)
from ..utils import session_to_response, join_info_to_response, stats_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def _session_response(session) -> SessionResponse:
    return SessionResponse(success=True, session=session_to_response(session))


def _ensure_self_or_admin(caller: CallerIdentity, user_id: str) -> None:
    if caller.user_id != user_id and not caller.is_admin:
        raise UnauthorizedError("Cannot view another user's sessions")


@router.post("", response_model=SessionResponse, status_code=201)
def schedule_session(
    body: ScheduleSessionRequest,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    """Schedule a session; the caller joins as participant unless they are the mentor."""
    session_type = None
    if body.session_type:
        try:
            session_type = SessionType(body.session_type.upper())
        except ValueError:
            raise ValidationError(f"Unknown session type: {body.session_type}")

    participants = list(body.participant_ids)
    if caller.user_id != body.mentor_id and caller.user_id not in participants:
        participants.append(caller.user_id)

    session = lifecycle.schedule(ScheduleRequest(
        mentor_id=body.mentor_id,
        title=body.title,
        scheduled_start_time=body.scheduled_start_time,
        scheduled_end_time=body.scheduled_end_time,
        participant_ids=participants,
        mentorship_request_id=body.mentorship_request_id,
        description=body.description,
        session_type=session_type,
    ))
    return _session_response(session)


@router.get("/user/{user_id}", response_model=SessionsResponse)
def list_user_sessions(
    user_id: str,
    status: Optional[SessionStatus] = Query(default=None),
    upcoming: bool = Query(default=False, description="Only SCHEDULED sessions that start in the future"),
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    _ensure_self_or_admin(caller, user_id)
    sessions = lifecycle.sessions_for_user(user_id, status=status, upcoming=upcoming)
    return SessionsResponse(
        success=True,
        count=len(sessions),
        sessions=[session_to_response(s) for s in sessions]
    )


@router.get("/user/{user_id}/stats", response_model=SessionStatsResponse)
def user_session_stats(
    user_id: str,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    _ensure_self_or_admin(caller, user_id)
    return SessionStatsResponse(
        success=True,
        user_id=user_id,
        stats=stats_to_response(lifecycle.stats_for_user(user_id))
    )


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(
    session_id: str,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    session = lifecycle.get_session(session_id)
    if not session.involves(caller.user_id) and not caller.is_admin:
        raise UnauthorizedError(f"User {caller.user_id} is not part of session {session_id}")
    return _session_response(session)


@router.post("/{session_id}/start", response_model=JoinResponse)
def start_session(
    session_id: str,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    info = lifecycle.start(session_id, caller.user_id)
    return JoinResponse(success=True, join_info=join_info_to_response(info))


@router.post("/{session_id}/join", response_model=JoinResponse)
def join_session(
    session_id: str,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    info = lifecycle.join(session_id, caller.user_id)
    return JoinResponse(success=True, join_info=join_info_to_response(info))


@router.post("/{session_id}/leave", response_model=SuccessResponse)
def leave_session(
    session_id: str,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    lifecycle.leave(session_id, caller.user_id)
    return SuccessResponse(success=True, message=f"Left session {session_id}")


@router.post("/{session_id}/end", response_model=SessionResponse)
def end_session(
    session_id: str,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    return _session_response(lifecycle.end(session_id, caller.user_id))


@router.post("/{session_id}/cancel", response_model=SessionResponse)
def cancel_session(
    session_id: str,
    body: Optional[CancelRequest] = None,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    reason = body.reason if body else None
    return _session_response(lifecycle.cancel(session_id, caller.user_id, reason))


@router.post("/{session_id}/reschedule", response_model=SessionResponse)
def reschedule_session(
    session_id: str,
    body: RescheduleRequest,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    session = lifecycle.reschedule(
        session_id,
        caller.user_id,
        body.scheduled_start_time,
        body.scheduled_end_time
    )
    return _session_response(session)


@router.post("/{session_id}/feedback", response_model=SessionResponse)
def submit_feedback(
    session_id: str,
    body: FeedbackRequest,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    session = lifecycle.submit_feedback(session_id, caller.user_id, body.rating, body.comments)
    return _session_response(session)


@router.patch("/{session_id}", response_model=SessionResponse)
def update_session_details(
    session_id: str,
    body: SessionDetailsUpdate,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    session = lifecycle.update_details(
        session_id,
        caller.user_id,
        title=body.title,
        description=body.description,
        notes=body.notes
    )
    return _session_response(session)


@router.post("/{session_id}/recording", response_model=SessionResponse)
def attach_recording(
    session_id: str,
    body: RecordingAttach,
    caller: CallerIdentity = Depends(get_caller),
    lifecycle: SessionLifecycle = Depends(get_lifecycle)
):
    """Attach recording/transcript URLs. Mentor or admin (recording service)."""
    session = lifecycle.get_session(session_id)
    if not session.is_mentor(caller.user_id) and not caller.is_admin:
        raise UnauthorizedError("Only the mentor can attach recordings")
    session = lifecycle.attach_recording(session_id, body.recording_url, body.transcript_url)
    return _session_response(session)
