"""Exercise management commands."""

import click

from ..client import ApiError
from ..models.exercise import ExerciseType
from ..models.templates import EXERCISE_TEMPLATES, find_exercise_template
from ..tracking import format_clock
from ..views.exercise_card import describe_error
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    open_client,
)

EXERCISE_TYPES = click.Choice([t.value for t in ExerciseType], case_sensitive=False)


@click.group()
@click.pass_context
def exercises(ctx):
    """Manage the exercises of a workout."""
    ensure_initialized(ctx)


@exercises.command()
@click.argument("workout_id")
@click.argument("name", required=False)
@click.option(
    "--template",
    "-t",
    type=click.Choice([t.name for t in EXERCISE_TEMPLATES], case_sensitive=False),
    help="Prefill sets, reps, rest and type",
)
@click.option("--sets", "-s", type=int, help="Target sets (default 1)")
@click.option("--reps", "-r", type=int, help="Reps per set (default 1)")
@click.option("--rest", "rest_duration", type=int, help="Rest between sets in seconds (default 60)")
@click.option("--type", "exercise_type", type=EXERCISE_TYPES, help="Exercise category")
@click.option("--description", help="Optional notes")
@click.option("--order", type=int, help="Position in the workout (default: last)")
@click.pass_context
@async_command
async def add(ctx, workout_id, name, template, sets, reps, rest_duration, exercise_type, description, order):
    """Add an exercise to a workout."""
    fields = find_exercise_template(template).to_payload() if template else {}
    overrides = {
        "name": name,
        "sets": sets,
        "reps": reps,
        "rest_duration": rest_duration,
        "type": exercise_type,
        "description": description,
        "order": order,
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})
    if "name" not in fields:
        raise click.UsageError("Give a NAME or --template")

    async with open_client(ctx) as client:
        try:
            exercise = await client.create_exercise(workout_id, **fields)
        except ApiError as e:
            echo_error(describe_error(e))
            ctx.exit(1)

    echo_success(
        f"Added {exercise.name}: {exercise.sets}x{exercise.reps}, "
        f"rest {format_clock(exercise.rest_duration)}"
    )
    echo_info(f"ID: {exercise.id}")


@exercises.command()
@click.argument("exercise_id")
@click.option("--name", help="New name")
@click.option("--sets", "-s", type=int, help="Target sets")
@click.option("--reps", "-r", type=int, help="Reps per set")
@click.option("--rest", "rest_duration", type=int, help="Rest between sets in seconds")
@click.option("--type", "exercise_type", type=EXERCISE_TYPES, help="Exercise category")
@click.option("--description", help="Notes")
@click.option("--count", "current_count", type=int, help="Repetition counter value")
@click.option("--max-count", type=int, help="Repetition counter target")
@click.pass_context
@async_command
async def edit(ctx, exercise_id, name, sets, reps, rest_duration, exercise_type, description,
               current_count, max_count):
    """Change an exercise. Only the given options are updated."""
    changes = {
        "name": name,
        "sets": sets,
        "reps": reps,
        "rest_duration": rest_duration,
        "type": exercise_type,
        "description": description,
        "current_count": current_count,
        "max_count": max_count,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        echo_info("Nothing to change")
        return

    async with open_client(ctx) as client:
        try:
            exercise = await client.update_exercise(exercise_id, **changes)
        except ApiError as e:
            echo_error(describe_error(e))
            ctx.exit(1)

    if exercise is None:
        echo_error(f"Exercise {exercise_id} not found")
        ctx.exit(1)
    echo_success(f"Updated {exercise.name}")


@exercises.command()
@click.argument("exercise_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, exercise_id: str, force: bool):
    """Delete an exercise."""
    if not force and not click.confirm("Are you sure you want to delete this exercise?"):
        echo_info("Cancelled")
        return

    async with open_client(ctx) as client:
        try:
            await client.delete_exercise(exercise_id)
        except ApiError as e:
            echo_error(e.message)
            ctx.exit(1)

    echo_success(f"Exercise {exercise_id} deleted")
