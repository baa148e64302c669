"""Matcher Module - mentor ranking for mentorship requests."""
from core.matcher.models import (
    MatchFilters, MentorshipRequest, MatchResult, MatchSet
)
from core.matcher.service import MatchEngine
from core.matcher.filters import filter_mentors

__all__ = [
    'MatchEngine', 'filter_mentors',
    'MatchFilters', 'MentorshipRequest', 'MatchResult', 'MatchSet',
]
