"""Shared CLI utilities."""

import asyncio
from contextlib import asynccontextmanager
from functools import wraps

import click
import httpx

from ..client import ApiClient, ApiError
from ..config import Settings, get_settings

LOCAL_BASE_URL = "http://localhost"


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_cli_settings(ctx: click.Context) -> Settings:
    """Settings for this invocation (the group may have stored overrides)."""
    obj = ctx.find_root().obj or {}
    return obj.get("settings") or get_settings()


def get_server(ctx: click.Context) -> str | None:
    obj = ctx.find_root().obj or {}
    return obj.get("server")


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the local database exists (not needed against a remote server)."""
    if get_server(ctx):
        return
    db_path = get_cli_settings(ctx).db_path
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Database not initialized. Run 'workout-calendar init' first."
        )
        ctx.exit(1)


def identity_headers(settings: Settings, user: str, **profile: str | None) -> dict[str, str]:
    """Headers an identity-aware proxy would add for ``user``."""
    headers = {settings.auth_user_header: user}
    names = {
        "email": settings.auth_email_header,
        "first_name": settings.auth_first_name_header,
        "last_name": settings.auth_last_name_header,
        "profile_image_url": settings.auth_picture_header,
    }
    for key, value in profile.items():
        if value:
            headers[names[key]] = value
    return headers


@asynccontextmanager
async def open_client(ctx: click.Context, **profile: str | None):
    """A signed-in ApiClient.

    Talks to ``--server`` when given; otherwise runs the app in-process.
    """
    settings = get_cli_settings(ctx)
    server = get_server(ctx)
    if server:
        client = ApiClient(server)
    else:
        from ..web import create_app

        transport = httpx.ASGITransport(app=create_app(settings))
        client = ApiClient(LOCAL_BASE_URL, transport=transport)

    async with client:
        try:
            await client.login(identity_headers(settings, settings.local_user, **profile))
        except ApiError as e:
            echo_error(f"Sign-in failed: {e.message}")
            ctx.exit(1)
        yield client


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


class EchoNotifier:
    """Notifier that prints to the terminal, optionally ringing the bell."""

    def __init__(self, bell: bool = False):
        self.bell = bell

    def notify(self, title: str, message: str = "", *, error: bool = False) -> None:
        text = f"{title}: {message}" if message else title
        if error:
            echo_error(text)
            return
        if self.bell:
            click.echo("\a", nl=False)
        echo_success(text)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = [
        "".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)),
        "".join("-" * w + " " * padding for w in widths),
    ]
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)


def truncate(text: str, width: int = 30) -> str:
    return text[:width] + "..." if len(text) > width else text
