#!/usr/bin/env python3
"""
Mentor endpoints - browse the directory, capacity gate and metric updates.
"""

import logging
from fastapi import APIRouter, Depends, Query

from core.exceptions import NotFoundError
from core.mentors import MentorDirectory
from ..dependencies import get_directory, get_caller, require_admin, CallerIdentity
from ..models.requests import MetricsPatch
from ..models.responses import MentorsResponse, MentorDetailResponse, MentorRequestResponse
from ..utils import mentor_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/mentors", tags=["mentors"])


def _mentors_response(mentors) -> MentorsResponse:
    return MentorsResponse(
        success=True,
        count=len(mentors),
        mentors=[mentor_to_response(m) for m in mentors]
    )


@router.get("", response_model=MentorsResponse)
def list_mentors(directory: MentorDirectory = Depends(get_directory)):
    """All ACTIVE mentors."""
    return _mentors_response(directory.list_active())


@router.get("/top", response_model=MentorsResponse)
def top_rated_mentors(
    limit: int = Query(default=None, ge=1, le=100, description="Maximum mentors to return"),
    directory: MentorDirectory = Depends(get_directory)
):
    """ACTIVE mentors ordered by average rating, highest first."""
    return _mentors_response(directory.top_rated(limit))


@router.get("/search", response_model=MentorsResponse)
def search_mentors(
    q: str = Query(default="", description="Text matched against name, bio, title and company"),
    directory: MentorDirectory = Depends(get_directory)
):
    return _mentors_response(directory.search(q))


@router.get("/{mentor_id}", response_model=MentorDetailResponse)
def get_mentor(mentor_id: str, directory: MentorDirectory = Depends(get_directory)):
    return MentorDetailResponse(success=True, mentor=mentor_to_response(directory.get_by_id(mentor_id)))


@router.post("/{mentor_id}/request", response_model=MentorRequestResponse)
def request_mentor(
    mentor_id: str,
    caller: CallerIdentity = Depends(get_caller),
    directory: MentorDirectory = Depends(get_directory)
):
    """
    Capacity gate run before a student is assigned to a mentor.

    Returns 409 when the mentor is inactive or already at the student cap.
    """
    directory.ensure_accepting_students(mentor_id)
    logger.info(f"User {caller.user_id} may be assigned to mentor {mentor_id}")
    return MentorRequestResponse(success=True, mentor_id=mentor_id, accepting_students=True)


@router.patch("/{mentor_id}/metrics", response_model=MentorDetailResponse)
def patch_mentor_metrics(
    mentor_id: str,
    patch: MetricsPatch,
    caller: CallerIdentity = Depends(require_admin),
    directory: MentorDirectory = Depends(get_directory)
):
    """Merge-patch a mentor's metrics. Admin only."""
    mentor = directory.update_metrics(mentor_id, patch.model_dump(exclude_unset=True, exclude_none=True))
    if mentor is None:
        raise NotFoundError(f"Mentor not found: {mentor_id}")
    return MentorDetailResponse(success=True, mentor=mentor_to_response(mentor))
