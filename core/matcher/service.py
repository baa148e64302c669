#!/usr/bin/env python3
"""
Match Engine - ranks ACTIVE mentors against a mentorship request.

Scoring is a simple additive law (see MatchingConfig for the constants):

    score = base
          + expertise_bonus  if the mentor lists any expertise
          + rating_bonus     if average_rating > rating_bonus_threshold
    score = min(score, max_score)

Candidates scoring at or below min_score are discarded, the rest are
stable-sorted by score (ties keep pool order) and truncated to the limit.
The request text does not influence the score; it only feeds the echoed
filters. The engine holds no state and has no side effects.
"""
from typing import List, Optional, Sequence
import logging
import time

from core.config_loader import MatchingConfig
from core.exceptions import ValidationError
from core.matcher.explainability import mentor_strengths, match_reasons
from core.matcher.filters import filter_mentors
from core.matcher.models import MentorshipRequest, MatchResult, MatchSet
from core.mentors.directory import MentorDirectory
from core.mentors.models import MentorProfile

logger = logging.getLogger(__name__)


class MatchEngine:
    """
    Stateless scoring of directory mentors.

    Designed to be called concurrently; it only reads from the directory.
    """

    def __init__(self, directory: MentorDirectory, config: Optional[MatchingConfig] = None):
        """
        Args:
            directory: MentorDirectory supplying ACTIVE candidates
            config: MatchingConfig with scoring constants
        """
        self.directory = directory
        self.config = config or MatchingConfig()

    def score_mentor(self, mentor: MentorProfile) -> float:
        cfg = self.config
        score = cfg.base_score
        if mentor.expertise:
            score += cfg.expertise_bonus
        if mentor.metrics.average_rating > cfg.rating_bonus_threshold:
            score += cfg.rating_bonus
        return round(min(score, cfg.max_score), 4)

    def rank(
        self,
        candidates: Sequence[MentorProfile],
        limit: Optional[int] = None
    ) -> List[MatchResult]:
        """
        Score, threshold, stable-sort and truncate a candidate pool.

        Args:
            candidates: Mentors in pool order (ties keep this order)
            limit: Maximum results (default from config)

        Returns:
            Ranked MatchResults with strengths and reasons filled in
        """
        if limit is None:
            limit = self.config.default_limit
        if limit < 1:
            raise ValidationError(f"limit must be at least 1, got {limit}")

        scored = [(mentor, self.score_mentor(mentor)) for mentor in candidates]
        kept = [(m, s) for m, s in scored if s > self.config.min_score]
        # list.sort is stable
        kept.sort(key=lambda pair: pair[1], reverse=True)

        return [
            MatchResult(
                mentor=mentor,
                match_score=score,
                strengths=mentor_strengths(mentor, self.config),
                match_reasons=match_reasons(mentor, self.config),
            )
            for mentor, score in kept[:limit]
        ]

    def find_matches(
        self,
        request: MentorshipRequest,
        limit: Optional[int] = None,
        candidates: Optional[Sequence[MentorProfile]] = None
    ) -> MatchSet:
        """
        Rank mentors for a request.

        Args:
            request: The mentorship request; its filters are echoed back
            limit: Maximum matches (default 10)
            candidates: Explicit pool; defaults to the directory's ACTIVE mentors

        Returns:
            MatchSet; empty when the pool is empty
        """
        started = time.perf_counter()

        pool = list(candidates) if candidates is not None else self.directory.list_active()
        if self.config.apply_request_filters and not request.filters.is_empty():
            pool = filter_mentors(request.filters, pool)

        matches = self.rank(pool, limit)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 3)

        logger.debug(
            f"Matched request {request.id or request.title!r}: "
            f"{len(matches)} of {len(pool)} candidates in {elapsed_ms}ms"
        )

        return MatchSet(
            matches=matches,
            total_matches=len(matches),
            search_time_ms=elapsed_ms,
            filters=request.filters,
        )
