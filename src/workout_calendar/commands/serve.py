"""API server command."""

import click

from ..config import Settings
from .base import echo_info, echo_warning, ensure_initialized, get_cli_settings

DEFAULT_SECRET = Settings.model_fields["session_secret"].default


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the API server.

    The server expects to sit behind an identity-aware proxy that sets the
    configured identity headers on /api/login.

    Examples:

        workout-calendar serve

        # Listen on all interfaces, behind a proxy
        workout-calendar serve --host 0.0.0.0

        workout-calendar serve --reload
    """
    ensure_initialized(ctx)
    settings = get_cli_settings(ctx)

    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style(f"workout-calendar API on http://{host}:{port}", fg="green"))
    echo_info(f"Database: {settings.db_path}")
    echo_info(f"Identity header: {settings.auth_user_header}")
    echo_info(f"Set completion: {settings.completion_trigger.value}")
    if settings.session_secret == DEFAULT_SECRET:
        echo_warning("Using the default session secret; set WORKOUT_CALENDAR_SESSION_SECRET")
    click.echo()

    # The reloader re-imports the app, so it builds settings from the environment.
    uvicorn.run(
        "workout_calendar.web:create_app" if reload else create_app(settings),
        host=host,
        port=port,
        reload=reload,
        factory=reload,
    )
