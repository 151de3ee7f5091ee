"""Pytest configuration for integration tests."""

import tempfile
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import pytest

from workout_calendar.client import ApiClient
from workout_calendar.config import Settings
from workout_calendar.db import init_db
from workout_calendar.web import create_app


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def settings():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Settings(
            _env_file=None,
            data_dir=Path(tmpdir),
            session_secret="integration-secret",
            log_level="WARNING",
        )


@pytest.fixture
def signed_in(settings):
    """Async factory for an ApiClient signed in against a fresh app."""
    app = create_app(settings)

    @asynccontextmanager
    async def factory(user: str = "alice"):
        await init_db(settings.db_path)
        transport = httpx.ASGITransport(app=app)
        async with ApiClient("http://testserver", transport=transport) as api:
            await api.login({settings.auth_user_header: user})
            yield api

    return factory
