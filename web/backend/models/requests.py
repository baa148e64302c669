#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class MatchFiltersBody(BaseModel):
    """Optional pre-filters applied before scoring."""
    expertise_tags: List[str] = Field(default_factory=list, description="Match any of these expertise categories")
    min_budget: Optional[float] = Field(None, ge=0, description="Lowest acceptable hourly rate")
    max_budget: Optional[float] = Field(None, ge=0, description="Highest acceptable hourly rate")
    language: Optional[str] = Field(None, description="Required mentor language")


class MentorshipRequestBody(BaseModel):
    """A mentee's request for mentor recommendations."""
    title: str = Field(..., min_length=1)
    description: str = ""
    id: Optional[str] = None
    goals: List[str] = Field(default_factory=list)
    preferred_expertise: List[str] = Field(default_factory=list)
    filters: MatchFiltersBody = Field(default_factory=MatchFiltersBody)


class MetricsPatch(BaseModel):
    """Partial mentor metrics; omitted fields are left unchanged."""
    total_sessions: Optional[int] = Field(None, ge=0)
    average_rating: Optional[float] = Field(None, ge=0, le=5)
    total_students: Optional[int] = Field(None, ge=0)
    success_rate: Optional[float] = Field(None, ge=0, le=1)
    response_time_hours: Optional[float] = Field(None, ge=0)
    completion_rate: Optional[float] = Field(None, ge=0, le=1)


class ScheduleSessionRequest(BaseModel):
    mentor_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    scheduled_start_time: datetime
    scheduled_end_time: datetime
    participant_ids: List[str] = Field(default_factory=list)
    mentorship_request_id: Optional[str] = None
    description: str = ""
    session_type: Optional[str] = Field(None, description="MENTORING, WORKSHOP or CODE_REVIEW")


class RescheduleRequest(BaseModel):
    scheduled_start_time: datetime
    scheduled_end_time: datetime


class CancelRequest(BaseModel):
    reason: Optional[str] = None


class FeedbackRequest(BaseModel):
    # Range is enforced by the lifecycle so every caller gets the same error
    rating: int
    comments: str = ""


class SessionDetailsUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None


class RecordingAttach(BaseModel):
    recording_url: Optional[str] = None
    transcript_url: Optional[str] = None
