#!/usr/bin/env python3
"""
Mentor Models - supply-side profiles and their rolling performance metrics.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import List, Dict, Any, Optional

from core.exceptions import ValidationError


class MentorStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


@dataclass
class ExpertiseArea:
    """One entry of a mentor's ordered expertise list."""
    category: str
    subcategory: Optional[str] = None
    years_experience: int = 0
    level: str = "intermediate"  # beginner | intermediate | advanced | expert


@dataclass
class AvailabilityWindow:
    """Weekly recurring window; day_of_week 0=Sunday .. 6=Saturday, times HH:MM."""
    day_of_week: int
    start_time: str
    end_time: str
    timezone: str = "UTC"


@dataclass
class MentorMetrics:
    """Rolling performance metrics, merge-patched after sessions complete."""
    total_sessions: int = 0
    average_rating: float = 0.0
    total_students: int = 0
    success_rate: float = 0.0
    response_time_hours: Optional[float] = None
    completion_rate: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.average_rating <= 5.0:
            raise ValidationError(f"average_rating must be within [0, 5], got {self.average_rating}")
        if self.total_students < 0:
            raise ValidationError(f"total_students must be non-negative, got {self.total_students}")
        if self.total_sessions < 0:
            raise ValidationError(f"total_sessions must be non-negative, got {self.total_sessions}")
        for name in ('success_rate', 'completion_rate'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValidationError(f"{name} must be within [0, 1], got {value}")
        if self.response_time_hours is not None and self.response_time_hours < 0:
            raise ValidationError(f"response_time_hours must be non-negative, got {self.response_time_hours}")

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    def merged(self, partial: Dict[str, Any]) -> "MentorMetrics":
        """Shallow merge: keys in partial replace the current values."""
        unknown = set(partial) - set(self.field_names())
        if unknown:
            raise ValidationError(f"Unknown metric fields: {', '.join(sorted(unknown))}")
        return replace(self, **partial)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass
class MentorProfile:
    """Mentor/coach profile available for matching and sessions."""
    id: str
    first_name: str
    last_name: str
    email: str = ""
    user_id: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: str = ""
    title: str = ""
    company: str = ""
    linkedin_url: Optional[str] = None
    expertise: List[ExpertiseArea] = field(default_factory=list)
    availability: List[AvailabilityWindow] = field(default_factory=list)
    hourly_rate: Optional[float] = None
    currency: str = "USD"
    status: MentorStatus = MentorStatus.ACTIVE
    metrics: MentorMetrics = field(default_factory=MentorMetrics)
    languages: List[str] = field(default_factory=lambda: ["English"])

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        return self.status == MentorStatus.ACTIVE

    def searchable_text(self) -> str:
        """Concatenated name/bio/title/affiliation used by text search."""
        return " ".join([self.full_name, self.bio or "", self.title or "", self.company or ""])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MentorProfile":
        """Build a profile from plain data (seed files, API payloads)."""
        data = dict(data)
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValidationError(f"Unknown mentor fields: {', '.join(sorted(unknown))}")
        if not data.get('id'):
            raise ValidationError("mentor id is required")

        data['expertise'] = [ExpertiseArea(**e) for e in data.get('expertise') or []]
        data['availability'] = [AvailabilityWindow(**a) for a in data.get('availability') or []]
        data['metrics'] = MentorMetrics(**(data.get('metrics') or {}))
        if 'status' in data:
            data['status'] = MentorStatus(data['status'])
        return cls(**data)
