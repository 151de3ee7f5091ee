"""Pytest configuration and fixtures."""

import tempfile
from contextlib import ExitStack, asynccontextmanager
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from workout_calendar.client import ApiClient
from workout_calendar.config import Settings
from workout_calendar.db import init_db
from workout_calendar.web import create_app

BASE_URL = "http://testserver"


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def settings(temp_db_path):
    """Settings pointing at the temporary database, ignoring any .env file."""
    return Settings(
        _env_file=None,
        data_dir=temp_db_path.parent,
        db_filename=temp_db_path.name,
        session_secret="test-secret",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


def identity(settings: Settings, user: str, email: str | None = None) -> dict[str, str]:
    headers = {settings.auth_user_header: user}
    if email:
        headers[settings.auth_email_header] = email
    return headers


@pytest.fixture
def make_client(app, settings):
    """Factory for TestClients, each with its own session cookie."""
    with ExitStack() as stack:

        def factory(user: str | None = "alice", email: str | None = None) -> TestClient:
            client = stack.enter_context(TestClient(app, raise_server_exceptions=False))
            if user:
                response = client.get(
                    "/api/login",
                    headers=identity(settings, user, email),
                    follow_redirects=False,
                )
                assert response.status_code == 302
            return client

        yield factory


@pytest.fixture
def client(make_client):
    """A TestClient signed in as alice."""
    return make_client("alice", "alice@example.com")


@pytest.fixture
def open_api(app, settings):
    """Async factory for ApiClients talking to the app in-process."""

    @asynccontextmanager
    async def factory(user: str | None = "alice"):
        await init_db(settings.db_path)
        transport = httpx.ASGITransport(app=app)
        async with ApiClient(BASE_URL, transport=transport) as api:
            if user:
                await api.login(identity(settings, user))
            yield api

    return factory


class ManualTicker:
    """Ticker driven by the test through ``fire``."""

    def __init__(self, callback):
        self.callback = callback
        self.active = False
        self.starts = 0
        self.cancels = 0

    def start(self):
        self.active = True
        self.starts += 1

    def cancel(self):
        self.active = False
        self.cancels += 1

    def fire(self, times: int = 1):
        for _ in range(times):
            if self.active:
                self.callback()


@pytest.fixture
def tickers():
    """Ticker factory that keeps every ticker it creates in ``.created``."""
    created = []

    def factory(callback):
        ticker = ManualTicker(callback)
        created.append(ticker)
        return ticker

    factory.created = created
    return factory


class RecordingNotifier:
    """Notifier that keeps every notification."""

    def __init__(self):
        self.messages: list[tuple[str, str, bool]] = []

    def notify(self, title: str, message: str = "", *, error: bool = False) -> None:
        self.messages.append((title, message, error))

    @property
    def titles(self) -> list[str]:
        return [title for title, _, _ in self.messages]

    @property
    def errors(self) -> list[tuple[str, str, bool]]:
        return [m for m in self.messages if m[2]]


@pytest.fixture
def notifier():
    return RecordingNotifier()
