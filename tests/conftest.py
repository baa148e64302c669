"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
Object factories live in tests/fixtures/factories.py.
"""

import os
import pytest

from notification.channels import InAppChannel


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring PostgreSQL (deselect with '-m \"not db\"')"
    )


@pytest.fixture(autouse=True)
def _clear_in_app_inbox():
    """The in-app inbox is process-wide; start every test empty."""
    InAppChannel.clear()
    yield
    InAppChannel.clear()


@pytest.fixture(scope="session")
def postgres_url():
    """
    URL of an external PostgreSQL for tests marked `db`.

    Set TEST_DATABASE_URL to run them; otherwise they are skipped.
    """
    url = os.environ.get("TEST_DATABASE_URL")
    if not url:
        pytest.skip("TEST_DATABASE_URL not set")
    return url
