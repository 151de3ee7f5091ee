"""Template listing command."""

import click

from ..models.templates import EXERCISE_TEMPLATES, WORKOUT_TEMPLATES
from ..tracking import format_clock
from .base import format_table


@click.command()
def templates():
    """List the built-in workout and exercise templates."""
    click.echo()
    click.echo("Workout templates:")
    click.echo(format_table(
        ["Name", "Description", "Color"],
        [[t.name, t.description, t.color] for t in WORKOUT_TEMPLATES],
    ))
    click.echo()
    click.echo("Exercise templates:")
    click.echo(format_table(
        ["Name", "Type", "Sets", "Reps", "Rest"],
        [
            [t.name, t.type.value, str(t.sets), str(t.reps), format_clock(t.rest_duration)]
            for t in EXERCISE_TEMPLATES
        ],
    ))
    click.echo()
