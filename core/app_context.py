from dataclasses import dataclass
import logging
from typing import Optional

from sqlalchemy.engine import Engine

from core.config_loader import AppConfig, ConferencingConfig
from core.conferencing import ChannelProvider, LocalChannelProvider, HttpChannelProvider
from core.matcher import MatchEngine
from core.mentors import MentorDirectory
from core.sessions import SessionLifecycle
from database.repositories import (
    MentorRepository, SessionRepository,
    InMemoryMentorRepository, InMemorySessionRepository
)
from notification.service import NotificationService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    One place builds the repositories, the directory, the match engine,
    the session lifecycle and its collaborators from config. The web app
    and scripts share it instead of wiring services themselves.
    """
    config: AppConfig
    mentor_repo: MentorRepository
    session_repo: SessionRepository
    directory: MentorDirectory
    match_engine: MatchEngine
    lifecycle: SessionLifecycle
    channel_provider: ChannelProvider
    notification_service: Optional[NotificationService] = None
    engine: Optional[Engine] = None

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext. database.url unset means in-memory storage.
        """
        engine = None
        if config.database.url:
            engine, mentor_repo, session_repo = cls._build_sql_repositories(config)
        else:
            logger.info("No database URL configured, using in-memory repositories")
            mentor_repo = InMemoryMentorRepository()
            session_repo = InMemorySessionRepository()

        directory = MentorDirectory(mentor_repo, config.mentors)
        match_engine = MatchEngine(directory, config.matching)
        channel_provider = cls._build_channel_provider(config.conferencing)

        # Notification Service (lazy - only if enabled)
        notification_service = None
        if config.notifications.enabled:
            notification_service = NotificationService(config.notifications)

        lifecycle = SessionLifecycle(
            repo=session_repo,
            channel_provider=channel_provider,
            config=config.sessions,
            notifier=notification_service,
            directory=directory,
        )

        return cls(
            config=config,
            mentor_repo=mentor_repo,
            session_repo=session_repo,
            directory=directory,
            match_engine=match_engine,
            lifecycle=lifecycle,
            channel_provider=channel_provider,
            notification_service=notification_service,
            engine=engine,
        )

    @staticmethod
    def _build_sql_repositories(config: AppConfig):
        # Deferred so the in-memory setup never touches SQLAlchemy models
        from database.database import build_engine, build_session_factory
        from database.init_db import init_db
        from database.repositories.mentor import SqlMentorRepository
        from database.repositories.session import SqlSessionRepository

        engine = build_engine(config.database)
        init_db(engine)
        factory = build_session_factory(engine)
        return engine, SqlMentorRepository(factory), SqlSessionRepository(factory)

    @staticmethod
    def _build_channel_provider(conf: ConferencingConfig) -> ChannelProvider:
        if conf.provider == "http":
            if not conf.base_url:
                raise ValueError("conferencing.base_url is required for the http provider")
            return HttpChannelProvider(
                base_url=conf.base_url,
                api_key=conf.api_key,
                request_timeout_seconds=conf.request_timeout_seconds,
                max_attempts=conf.max_attempts,
            )
        return LocalChannelProvider(
            signing_secret=conf.signing_secret,
            token_ttl_seconds=conf.token_ttl_seconds,
        )
