import logging
from typing import List, Optional
from sqlalchemy import select, or_
from sqlalchemy.orm import selectinload

from core.sessions.models import Session
from database.mappers import session_from_row, apply_session_to_row
from database.models import CoachingSessionRow, SessionParticipantRow
from database.repositories.base import BaseRepository
from database.repositories.interfaces import SessionRepository

logger = logging.getLogger(__name__)

_CHILDREN = (
    selectinload(CoachingSessionRow.participants),
    selectinload(CoachingSessionRow.feedback),
)


class SqlSessionRepository(BaseRepository, SessionRepository):
    def get(self, session_id: str) -> Optional[Session]:
        with self._scope("session get") as db:
            row = db.get(CoachingSessionRow, session_id, options=_CHILDREN)
            return session_from_row(row) if row is not None else None

    def save(self, session: Session) -> None:
        with self._scope("session save") as db:
            row = db.get(CoachingSessionRow, session.id, options=_CHILDREN)
            if row is None:
                row = CoachingSessionRow()
                db.add(row)
            apply_session_to_row(session, row)

    def list_for_user(self, user_id: str) -> List[Session]:
        participant_of = select(SessionParticipantRow.session_id).where(
            SessionParticipantRow.user_id == user_id
        )
        stmt = select(CoachingSessionRow).options(*_CHILDREN).where(
            or_(
                CoachingSessionRow.mentor_id == user_id,
                CoachingSessionRow.id.in_(participant_of)
            )
        )
        with self._scope("session list") as db:
            return [session_from_row(row) for row in db.execute(stmt).scalars().all()]
