import contextlib
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.exceptions import StorageIOError
from database.database import db_session_scope

logger = logging.getLogger(__name__)


class BaseRepository:
    """
    SQLAlchemy-backed repository base.

    Each public call is one unit of work: a fresh Session that commits on
    success and rolls back on error. Driver and ORM errors are translated to
    StorageIOError so callers can tell retryable storage failures from
    domain errors.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextlib.contextmanager
    def _scope(self, operation: str):
        try:
            with db_session_scope(self.session_factory) as db:
                yield db
        except SQLAlchemyError as e:
            logger.error(f"Storage failure during {operation}: {e}")
            raise StorageIOError(f"Storage failure during {operation}") from e
