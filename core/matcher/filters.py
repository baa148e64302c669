#!/usr/bin/env python3
"""
Hard pre-filters applied to the candidate pool before scoring.

Filters narrow the pool; they never change a candidate's score.
"""

from typing import Iterable, List

from core.matcher.models import MatchFilters
from core.mentors.models import MentorProfile


def _speaks(mentor: MentorProfile, language: str) -> bool:
    wanted = language.strip().casefold()
    return any(lang.strip().casefold() == wanted for lang in mentor.languages or [])


def _within_budget(mentor: MentorProfile, filters: MatchFilters) -> bool:
    # Mentors without a published rate are not excluded by budget
    if mentor.hourly_rate is None:
        return True
    if filters.min_budget is not None and mentor.hourly_rate < filters.min_budget:
        return False
    if filters.max_budget is not None and mentor.hourly_rate > filters.max_budget:
        return False
    return True


def _has_expertise(mentor: MentorProfile, tags: Iterable[str]) -> bool:
    wanted = {t.strip().casefold() for t in tags if t and t.strip()}
    if not wanted:
        return True
    for area in mentor.expertise:
        labels = {area.category.casefold()}
        if area.subcategory:
            labels.add(area.subcategory.casefold())
        if labels & wanted:
            return True
    return False


def filter_mentors(filters: MatchFilters, mentors: Iterable[MentorProfile]) -> List[MentorProfile]:
    """Keep mentors passing every filter that is set, preserving order."""
    filtered = []
    for mentor in mentors:
        if filters.language and not _speaks(mentor, filters.language):
            continue
        if not _within_budget(mentor, filters):
            continue
        if filters.expertise_tags and not _has_expertise(mentor, filters.expertise_tags):
            continue
        filtered.append(mentor)
    return filtered
