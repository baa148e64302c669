#!/usr/bin/env python3
"""
Matcher Models - Data structures for matching.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Optional

from core.mentors.models import MentorProfile


@dataclass(frozen=True)
class MatchFilters:
    """Optional structured filters attached to a mentorship request."""
    expertise_tags: Tuple[str, ...] = ()
    min_budget: Optional[float] = None
    max_budget: Optional[float] = None
    language: Optional[str] = None

    def is_empty(self) -> bool:
        return (
            not self.expertise_tags
            and self.min_budget is None
            and self.max_budget is None
            and not self.language
        )


@dataclass(frozen=True)
class MentorshipRequest:
    """Demand-side input to matching. Re-submission is a new match attempt."""
    title: str
    description: str = ""
    id: Optional[str] = None
    goals: Tuple[str, ...] = ()
    preferred_expertise: Tuple[str, ...] = ()
    filters: MatchFilters = field(default_factory=MatchFilters)


@dataclass
class MatchResult:
    """One ranked mentor with an explainable score."""
    mentor: MentorProfile
    match_score: float
    strengths: List[str] = field(default_factory=list)
    match_reasons: List[str] = field(default_factory=list)


@dataclass
class MatchSet:
    """Ranked matches for one request; a response artifact, never persisted."""
    matches: List[MatchResult]
    total_matches: int
    search_time_ms: float
    filters: MatchFilters
