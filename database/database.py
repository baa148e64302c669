import contextlib
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from core.config_loader import DatabaseConfig

logger = logging.getLogger(__name__)


def build_engine(config: DatabaseConfig) -> Engine:
    """Create an engine for the configured URL."""
    kwargs = {"echo": config.echo}
    if config.url.startswith("sqlite"):
        # One shared connection so an in-memory database survives across sessions
        kwargs.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
    else:
        kwargs.update(pool_pre_ping=config.pool_pre_ping, pool_size=10, max_overflow=20)
    return create_engine(config.url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@contextlib.contextmanager
def db_session_scope(session_factory: sessionmaker):
    """Provide a transactional scope around a series of operations."""
    session: Session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
