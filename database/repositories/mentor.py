import logging
from typing import List, Optional
from sqlalchemy import select

from core.mentors.models import MentorProfile, MentorStatus
from database.mappers import mentor_from_row, apply_mentor_to_row
from database.models import MentorProfileRow
from database.repositories.base import BaseRepository
from database.repositories.interfaces import MentorRepository

logger = logging.getLogger(__name__)


class SqlMentorRepository(BaseRepository, MentorRepository):
    def get(self, mentor_id: str) -> Optional[MentorProfile]:
        with self._scope("mentor get") as db:
            row = db.get(MentorProfileRow, mentor_id)
            return mentor_from_row(row) if row is not None else None

    def list_by_status(self, status: MentorStatus) -> List[MentorProfile]:
        stmt = select(MentorProfileRow).where(
            MentorProfileRow.status == status.value
        ).order_by(MentorProfileRow.created_at, MentorProfileRow.id)
        with self._scope("mentor list") as db:
            return [mentor_from_row(row) for row in db.execute(stmt).scalars().all()]

    def save(self, mentor: MentorProfile) -> None:
        with self._scope("mentor save") as db:
            row = db.get(MentorProfileRow, mentor.id)
            if row is None:
                row = MentorProfileRow()
                db.add(row)
            apply_mentor_to_row(mentor, row)
