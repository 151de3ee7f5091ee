"""CLI entry point for workout-calendar."""

import click

from . import __version__
from .commands import calendar, exercises, init, login, serve, templates, train, workouts
from .config import get_settings
from .log import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="workout-calendar")
@click.option(
    "--server",
    envvar="WORKOUT_CALENDAR_SERVER",
    help="Base URL of a running server (default: use the local database directly)",
)
@click.pass_context
def main(ctx, server: str | None):
    """workout-calendar: schedule workouts, log sets and pace your rests.

    Example usage:

        # Create the database
        workout-calendar init

        # Schedule a workout and add exercises
        workout-calendar workouts add "Leg Day" --date 2024-05-01
        workout-calendar exercises add <workout-id> --template squat

        # Train it
        workout-calendar train <workout-id>
    """
    ctx.ensure_object(dict)
    if "settings" not in ctx.obj:
        ctx.obj["settings"] = get_settings()
    settings = ctx.obj["settings"]
    ctx.obj["server"] = server
    configure_logging(settings.log_level)


# Register commands
main.add_command(init)
main.add_command(serve)
main.add_command(login)
main.add_command(workouts)
main.add_command(exercises)
main.add_command(calendar)
main.add_command(templates)
main.add_command(train)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
