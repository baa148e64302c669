"""In-memory repositories for tests and database-less local runs."""
import copy
import logging
import threading
from typing import Dict, List

from database.repositories.interfaces import MentorRepository, SessionRepository

logger = logging.getLogger(__name__)


class InMemoryMentorRepository(MentorRepository):
    def __init__(self, mentors=None):
        self._lock = threading.Lock()
        self._mentors: Dict[str, object] = {}
        for mentor in mentors or []:
            self.save(mentor)

    def get(self, mentor_id):
        with self._lock:
            mentor = self._mentors.get(mentor_id)
            return copy.deepcopy(mentor) if mentor is not None else None

    def list_by_status(self, status):
        with self._lock:
            return [copy.deepcopy(m) for m in self._mentors.values() if m.status == status]

    def save(self, mentor) -> None:
        with self._lock:
            self._mentors[mentor.id] = copy.deepcopy(mentor)

    def __len__(self) -> int:
        with self._lock:
            return len(self._mentors)


class InMemorySessionRepository(SessionRepository):
    def __init__(self, sessions=None):
        self._lock = threading.Lock()
        self._sessions: Dict[str, object] = {}
        for session in sessions or []:
            self.save(session)

    def get(self, session_id):
        with self._lock:
            session = self._sessions.get(session_id)
            return copy.deepcopy(session) if session is not None else None

    def save(self, session) -> None:
        with self._lock:
            self._sessions[session.id] = copy.deepcopy(session)

    def list_for_user(self, user_id: str) -> List:
        with self._lock:
            return [
                copy.deepcopy(s) for s in self._sessions.values()
                if s.mentor_id == user_id or user_id in s.participant_ids
            ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
