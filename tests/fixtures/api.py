"""
Helpers for API tests: an in-memory AppContext and a TestClient over it.
"""
from fastapi.testclient import TestClient

from core.app_context import AppContext
from core.config_loader import AppConfig, ConferencingConfig, NotificationConfig
from tests.fixtures.factories import FixedClock, sample_mentors


def build_test_context(clock: FixedClock = None, mentors=None, notifications: bool = False) -> AppContext:
    config = AppConfig(
        conferencing=ConferencingConfig(signing_secret="test-secret"),
        notifications=NotificationConfig(enabled=notifications),
    )
    context = AppContext.build(config)
    for mentor in sample_mentors() if mentors is None else mentors:
        context.directory.register(mentor)
    if clock is not None:
        context.lifecycle.clock = clock
    return context


def build_client(context: AppContext) -> TestClient:
    from web.backend.app import create_app
    return TestClient(create_app(context), raise_server_exceptions=False)


def as_user(user_id: str, role: str = "user") -> dict:
    return {"X-User-Id": user_id, "X-User-Role": role}
