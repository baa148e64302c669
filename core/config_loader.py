import yaml
import os
from typing import Optional, Dict, Literal
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    # None = in-memory repositories (tests, local demo)
    url: Optional[str] = None
    echo: bool = False
    pool_pre_ping: bool = True


class MatchingConfig(BaseModel):
    """
    Configuration for the MatchEngine.

    The defaults are the baseline additive scoring law; changing them changes
    ranking for every request.
    """
    base_score: float = 0.5
    expertise_bonus: float = 0.3
    rating_bonus: float = 0.2
    rating_bonus_threshold: float = 4.5  # strictly greater than
    max_score: float = 1.0
    min_score: float = 0.3  # candidates at or below are discarded
    default_limit: int = 10

    # Strength / reason tagging thresholds
    highly_rated_threshold: float = 4.7
    experienced_sessions_threshold: int = 100
    quick_response_hours: float = 4.0
    high_success_rate: float = 0.9

    # Hard pre-filters from the request (language, budget, expertise tags).
    # Requests without filters are unaffected.
    apply_request_filters: bool = True


class MentorsConfig(BaseModel):
    """Configuration for the MentorDirectory."""
    max_students_per_mentor: int = 30
    top_rated_default_limit: int = 5


class SessionsConfig(BaseModel):
    """Configuration for the SessionLifecycle."""
    start_grace_minutes: int = 5  # host may start this early
    meeting_base_url: str = "http://localhost:3000"
    default_session_type: str = "MENTORING"
    can_record: bool = True
    can_transcribe: bool = True
    # Fold session ratings into the mentor total_sessions / average_rating
    sync_mentor_metrics: bool = True


class ConferencingConfig(BaseModel):
    """
    Configuration for the real-time channel provider.

    provider="local" signs tokens in-process; provider="http" asks an
    external conferencing service for a join credential.
    """
    provider: Literal["local", "http"] = "local"
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    signing_secret: Optional[str] = None  # local provider; random per process if unset
    token_ttl_seconds: int = 3600
    request_timeout_seconds: int = 10
    max_attempts: int = 3


class NotificationChannelConfig(BaseModel):
    """Configuration for a single notification channel."""
    enabled: bool = True
    recipient: Optional[str] = None  # Webhook URL; None = the user id (in_app)


class NotificationConfig(BaseModel):
    """
    Configuration for session event notifications.

    Delivery is fire-and-forget: a failed notification never affects the
    session state change that triggered it.
    """
    enabled: bool = False

    # Base URL for links in notifications
    base_url: str = "http://localhost:3000"

    channels: Dict[str, NotificationChannelConfig] = Field(
        default_factory=lambda: {"in_app": NotificationChannelConfig()}
    )

    # Redis queue settings
    use_async_queue: bool = False
    redis_url: Optional[str] = None
    queue_name: str = "session-notifications"


class WebConfig(BaseModel):
    """Web server configuration."""
    host: str = "0.0.0.0"
    port: int = 8080


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    mentors: MentorsConfig = Field(default_factory=MentorsConfig)
    sessions: SessionsConfig = Field(default_factory=SessionsConfig)
    conferencing: ConferencingConfig = Field(default_factory=ConferencingConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _set_nested(data: dict, section: str, key: str, value) -> None:
    if not isinstance(data.get(section), dict):
        data[section] = {}
    data[section][key] = value


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from a subdirectory), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        _set_nested(data, 'database', 'url', env_db_url)

    # Allow env var override for Redis URL
    env_redis_url = os.environ.get("REDIS_URL")
    if env_redis_url:
        _set_nested(data, 'notifications', 'redis_url', env_redis_url)

    # Conferencing provider endpoint and credentials
    env_conf_url = os.environ.get("CONFERENCING_BASE_URL")
    if env_conf_url:
        _set_nested(data, 'conferencing', 'base_url', env_conf_url)
        _set_nested(data, 'conferencing', 'provider', 'http')

    env_conf_key = os.environ.get("CONFERENCING_API_KEY")
    if env_conf_key:
        _set_nested(data, 'conferencing', 'api_key', env_conf_key)

    env_meeting_url = os.environ.get("MEETING_BASE_URL")
    if env_meeting_url:
        _set_nested(data, 'sessions', 'meeting_base_url', env_meeting_url)

    # Web server overrides
    if 'WEB_HOST' in os.environ:
        _set_nested(data, 'web', 'host', os.environ['WEB_HOST'])
    if 'WEB_PORT' in os.environ:
        _set_nested(data, 'web', 'port', int(os.environ['WEB_PORT']))

    if 'LOG_LEVEL' in os.environ:
        _set_nested(data, 'logging', 'level', os.environ['LOG_LEVEL'])

    return AppConfig(**data)
