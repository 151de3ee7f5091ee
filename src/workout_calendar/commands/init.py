"""Initialize database command."""

import click

from ..db import init_db
from .base import async_command, echo_info, echo_success, get_cli_settings


@click.command()
@click.pass_context
@async_command
async def init(ctx):
    """Initialize the workout-calendar database.

    This creates the data directory and the SQLite database with the
    users, workouts and exercises tables. Running it again is harmless.
    """
    settings = get_cli_settings(ctx)

    echo_info(f"Initializing workout-calendar in {settings.data_dir}")
    await init_db(settings.db_path)
    echo_success(f"Database ready at {settings.db_path}")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Schedule a workout:")
    click.echo('     workout-calendar workouts add "Leg Day" --date 2024-05-01')
    click.echo()
    click.echo("  2. Add exercises and train:")
    click.echo("     workout-calendar exercises add <workout-id> --template squat")
    click.echo("     workout-calendar train <workout-id>")
    click.echo()
    click.echo("  3. Or start the API server:")
    click.echo("     workout-calendar serve")
