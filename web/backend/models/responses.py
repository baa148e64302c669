#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional, Dict


class ExpertiseOut(BaseModel):
    category: str
    subcategory: Optional[str] = None
    years_experience: int = 0
    level: str = "intermediate"


class AvailabilityOut(BaseModel):
    day_of_week: int
    start_time: str
    end_time: str
    timezone: str = "UTC"


class MetricsOut(BaseModel):
    total_sessions: int
    average_rating: float
    total_students: int
    success_rate: float
    response_time_hours: Optional[float] = None
    completion_rate: float


class MentorOut(BaseModel):
    """Public view of a mentor profile."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "mentor-1",
                "first_name": "Ada",
                "last_name": "Lovelace",
                "title": "Staff Engineer",
                "company": "Analytical Engines",
                "status": "ACTIVE",
                "expertise": [{"category": "Software Engineering", "years_experience": 12, "level": "expert"}],
                "metrics": {"total_sessions": 120, "average_rating": 4.8, "total_students": 12,
                            "success_rate": 0.95, "response_time_hours": 2, "completion_rate": 0.97},
            }
        }
    )

    id: str
    user_id: Optional[str] = None
    first_name: str
    last_name: str
    full_name: str
    avatar_url: Optional[str] = None
    bio: str = ""
    title: str = ""
    company: str = ""
    linkedin_url: Optional[str] = None
    expertise: List[ExpertiseOut] = Field(default_factory=list)
    availability: List[AvailabilityOut] = Field(default_factory=list)
    hourly_rate: Optional[float] = None
    currency: str = "USD"
    status: str
    metrics: MetricsOut
    languages: List[str] = Field(default_factory=list)


class MentorsResponse(BaseModel):
    success: bool
    count: int
    mentors: List[MentorOut]


class MentorDetailResponse(BaseModel):
    success: bool
    mentor: MentorOut


class MentorRequestResponse(BaseModel):
    """Outcome of the capacity gate before assigning a new student."""
    success: bool
    mentor_id: str
    accepting_students: bool


class MatchFiltersOut(BaseModel):
    expertise_tags: List[str] = Field(default_factory=list)
    min_budget: Optional[float] = None
    max_budget: Optional[float] = None
    language: Optional[str] = None


class MatchOut(BaseModel):
    mentor: MentorOut
    match_score: float = Field(gt=0, le=1)
    strengths: List[str] = Field(default_factory=list)
    match_reasons: List[str] = Field(default_factory=list)


class MatchesResponse(BaseModel):
    success: bool
    matches: List[MatchOut]
    total_matches: int
    search_time_ms: float
    filters: MatchFiltersOut


class FeedbackOut(BaseModel):
    rating: int
    comments: str
    submitted_at: str


class SessionOut(BaseModel):
    id: str
    mentor_id: str
    participant_ids: List[str]
    mentorship_request_id: Optional[str] = None
    title: str
    description: str = ""
    session_type: str
    status: str
    scheduled_start_time: str
    scheduled_end_time: str
    actual_start_time: Optional[str] = None
    actual_end_time: Optional[str] = None
    duration_minutes: int
    channel_id: Optional[str] = None
    recording_url: Optional[str] = None
    transcript_url: Optional[str] = None
    feedback: Dict[str, FeedbackOut] = Field(default_factory=dict)
    rating: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SessionResponse(BaseModel):
    success: bool
    session: SessionOut


class SessionsResponse(BaseModel):
    success: bool
    count: int
    sessions: List[SessionOut]


class JoinInfoOut(BaseModel):
    session_id: str
    channel_id: str
    join_token: str
    meeting_url: str
    token_expires_at: Optional[str] = None
    can_record: bool
    can_transcribe: bool


class JoinResponse(BaseModel):
    success: bool
    join_info: JoinInfoOut


class SessionStatsOut(BaseModel):
    total_sessions: int
    completed_sessions: int
    upcoming_sessions: int
    total_duration_minutes: int
    average_rating: float


class SessionStatsResponse(BaseModel):
    success: bool
    user_id: str
    stats: SessionStatsOut


class SuccessResponse(BaseModel):
    success: bool
    message: str


class InboxMessageOut(BaseModel):
    subject: str
    body: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: str


class InboxResponse(BaseModel):
    success: bool
    user_id: str
    count: int
    messages: List[InboxMessageOut]
