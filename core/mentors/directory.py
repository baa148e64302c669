#!/usr/bin/env python3
"""
Mentor Directory - authoritative mentor collection.

Supplies ACTIVE candidates to the MatchEngine, gates new-student assignment
on the capacity cap, and receives metric write-backs after sessions
complete. Storage is an injected MentorRepository.
"""
from typing import Callable, List, Dict, Any, Optional
import logging

from core.config_loader import MentorsConfig
from core.exceptions import NotFoundError, InvalidStateError
from core.locks import KeyedLock
from core.mentors.models import MentorProfile, MentorMetrics, MentorStatus
from database.repositories.interfaces import MentorRepository

logger = logging.getLogger(__name__)


class MentorDirectory:
    """Read/search/metric-update operations over the mentor repository."""

    def __init__(self, repo: MentorRepository, config: Optional[MentorsConfig] = None):
        self.repo = repo
        self.config = config or MentorsConfig()
        self._locks = KeyedLock()

    def register(self, mentor: MentorProfile) -> MentorProfile:
        """Store a mentor profile (onboarding import or seed data)."""
        self.repo.save(mentor)
        logger.info(f"Registered mentor {mentor.id} ({mentor.status.value})")
        return mentor

    def list_active(self) -> List[MentorProfile]:
        return self.repo.list_by_status(MentorStatus.ACTIVE)

    def find_by_id(self, mentor_id: str) -> Optional[MentorProfile]:
        return self.repo.get(mentor_id)

    def get_by_id(self, mentor_id: str) -> MentorProfile:
        mentor = self.repo.get(mentor_id)
        if mentor is None:
            raise NotFoundError(f"Mentor not found: {mentor_id}")
        return mentor

    def search(self, query_text: str) -> List[MentorProfile]:
        """Case-insensitive substring search over name, bio, title and company."""
        needle = (query_text or "").strip().casefold()
        mentors = self.list_active()
        if not needle:
            return mentors
        return [m for m in mentors if needle in m.searchable_text().casefold()]

    def top_rated(self, limit: Optional[int] = None) -> List[MentorProfile]:
        if limit is None:
            limit = self.config.top_rated_default_limit
        # sorted() is stable, ties keep repository order
        ranked = sorted(
            self.list_active(),
            key=lambda m: m.metrics.average_rating,
            reverse=True
        )
        return ranked[:max(0, limit)]

    def can_accept_new_students(self, mentor: MentorProfile) -> bool:
        return (
            mentor.status == MentorStatus.ACTIVE
            and mentor.metrics.total_students < self.config.max_students_per_mentor
        )

    def ensure_accepting_students(self, mentor_id: str) -> MentorProfile:
        """
        Assignment gate: return the mentor if a new student may be assigned.

        Matching may surface an at-capacity mentor; this check runs again
        before the assignment proceeds.

        Raises:
            NotFoundError: unknown mentor id
            InvalidStateError: mentor inactive or at capacity
        """
        mentor = self.get_by_id(mentor_id)
        if not self.can_accept_new_students(mentor):
            raise InvalidStateError(
                f"Mentor {mentor_id} is not accepting new students "
                f"(status={mentor.status.value}, students={mentor.metrics.total_students})"
            )
        return mentor

    def update_metrics(self, mentor_id: str, partial_metrics: Dict[str, Any]) -> Optional[MentorProfile]:
        """
        Shallow-merge partial metrics into the mentor's metrics.

        Unknown mentor ids are a logged no-op so replayed updates are safe.
        Updates to the same mentor are serialized; different mentors proceed
        concurrently.

        Returns:
            The updated mentor, or None when the id is unknown
        """
        return self.apply_metrics(mentor_id, lambda _current: partial_metrics)

    def apply_metrics(
        self,
        mentor_id: str,
        compute: Callable[[MentorMetrics], Dict[str, Any]]
    ) -> Optional[MentorProfile]:
        """
        Read-modify-write of a mentor's metrics under the mentor's lock.

        compute receives the current metrics and returns the partial to
        merge, so derived values (running averages, counters) never build
        on a stale read.
        """
        with self._locks.hold(mentor_id):
            mentor = self.repo.get(mentor_id)
            if mentor is None:
                logger.warning(f"Ignoring metrics update for unknown mentor {mentor_id}")
                return None

            partial_metrics = compute(mentor.metrics)
            mentor.metrics = mentor.metrics.merged(partial_metrics)
            self.repo.save(mentor)

        logger.info(f"Updated metrics for mentor {mentor_id}: {sorted(partial_metrics)}")
        return mentor
