"""
Repository interfaces consumed by the core.

The directory and the session lifecycle depend only on these abstractions;
in-memory and SQLAlchemy implementations live alongside. Implementations
return copies: mutating a returned object has no effect until save().
Storage failures surface as core.exceptions.StorageIOError.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from core.mentors.models import MentorProfile, MentorStatus
    from core.sessions.models import Session


class MentorRepository(ABC):
    """Create/read/update-by-id for mentor profiles."""

    @abstractmethod
    def get(self, mentor_id: str) -> Optional[MentorProfile]:
        """Return the mentor or None when the id is unknown."""
        pass

    @abstractmethod
    def list_by_status(self, status: MentorStatus) -> List[MentorProfile]:
        """Return mentors with the given status in a stable order."""
        pass

    @abstractmethod
    def save(self, mentor: MentorProfile) -> None:
        """Insert or replace the mentor with the same id."""
        pass


class SessionRepository(ABC):
    """Create/read/update-by-id for sessions plus the per-user query."""

    @abstractmethod
    def get(self, session_id: str) -> Optional[Session]:
        pass

    @abstractmethod
    def save(self, session: Session) -> None:
        pass

    @abstractmethod
    def list_for_user(self, user_id: str) -> List[Session]:
        """Sessions where mentor_id == user_id or user_id is a participant."""
        pass
