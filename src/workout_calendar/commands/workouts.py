"""Workout management commands."""

from datetime import date, datetime, timedelta

import click

from ..client import ApiError
from ..config import WorkoutCompletion
from ..models.templates import WORKOUT_TEMPLATES, find_workout_template
from ..tracking import format_clock
from ..views import WorkoutView
from ..views.exercise_card import describe_error
from .base import (
    EchoNotifier,
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_cli_settings,
    open_client,
    truncate,
)


def parse_day(value: str) -> date:
    """Parse ``yyyy-MM-dd``, or the words today/tomorrow."""
    word = value.strip().lower()
    if word == "today":
        return date.today()
    if word == "tomorrow":
        return date.today() + timedelta(days=1)
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise click.BadParameter(f"'{value}' is not a yyyy-MM-dd date") from e


@click.group()
@click.pass_context
def workouts(ctx):
    """Manage scheduled workouts.

    Commands for listing, viewing, adding, completing and deleting workouts.
    """
    ensure_initialized(ctx)


@workouts.command(name="list")
@click.option("--date", "-d", "day", help="Only workouts on this day (yyyy-MM-dd)")
@click.pass_context
@async_command
async def list_workouts(ctx, day: str | None):
    """List your workouts, newest first."""
    async with open_client(ctx) as client:
        try:
            if day:
                found = await client.workouts_on(parse_day(day))
            else:
                found = await client.list_workouts()
        except ApiError as e:
            echo_error(e.message)
            ctx.exit(1)

    if not found:
        echo_info("No workouts found. Schedule one with 'workout-calendar workouts add'")
        return

    rows = [
        [w.id, w.date.isoformat(), truncate(w.name), "yes" if w.completed else "", w.color]
        for w in found
    ]
    click.echo()
    click.echo(format_table(["ID", "Date", "Name", "Done", "Color"], rows))
    click.echo()
    click.echo(f"Total: {len(found)} workout(s)")


@workouts.command()
@click.argument("workout_id")
@click.pass_context
@async_command
async def show(ctx, workout_id: str):
    """Show a workout and its exercises."""
    settings = get_cli_settings(ctx)
    async with open_client(ctx) as client:
        view = WorkoutView(
            client,
            workout_id,
            notifier=EchoNotifier(),
            completion=settings.workout_completion,
        )
        try:
            workout = await view.load()
        except ApiError as e:
            echo_error(e.message)
            ctx.exit(1)

    done, total = view.progress
    click.echo()
    click.echo("=" * 60)
    click.echo(f"Workout: {workout.name} (ID: {workout.id})")
    click.echo("=" * 60)
    click.echo()
    click.echo(f"Date:        {workout.date.isoformat()}")
    if workout.description:
        click.echo(f"Description: {workout.description}")
    click.echo(f"Status:      {'Completed' if workout.completed else 'Planned'}")
    click.echo(f"Progress:    {done}/{total} exercises")
    click.echo()

    if not view.cards:
        echo_info("No exercises yet. Add one with 'workout-calendar exercises add'")
        return

    rows = [
        [
            e.id,
            truncate(e.name, 24),
            e.type.value,
            f"{e.sets}x{e.reps}",
            format_clock(e.rest_duration),
            f"{e.current_count}/{e.max_count}",
            "yes" if e.completed else "",
        ]
        for e in view.exercises
    ]
    click.echo(format_table(["ID", "Exercise", "Type", "Sets", "Rest", "Count", "Done"], rows))


@workouts.command()
@click.argument("name", required=False)
@click.option("--date", "-d", "day", default="today", show_default=True, help="Day (yyyy-MM-dd)")
@click.option("--description", help="Optional description")
@click.option("--color", help="Calendar colour as #RRGGBB")
@click.option(
    "--template",
    "-t",
    type=click.Choice([t.name for t in WORKOUT_TEMPLATES], case_sensitive=False),
    help="Prefill name, description and colour",
)
@click.pass_context
@async_command
async def add(ctx, name, day, description, color, template):
    """Schedule a new workout."""
    fields = {}
    if template:
        preset = find_workout_template(template)
        fields.update(name=preset.name, description=preset.description, color=preset.color)
    for key, value in (("name", name), ("description", description), ("color", color)):
        if value is not None:
            fields[key] = value
    if "name" not in fields:
        raise click.UsageError("Give a NAME or --template")
    fields["date"] = parse_day(day)

    async with open_client(ctx) as client:
        try:
            workout = await client.create_workout(**fields)
        except ApiError as e:
            echo_error(describe_error(e))
            ctx.exit(1)

    echo_success(f"Workout '{workout.name}' scheduled on {workout.date.isoformat()}")
    echo_info(f"ID: {workout.id}")


@workouts.command()
@click.argument("workout_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, workout_id: str, force: bool):
    """Delete a workout and its exercises."""
    async with open_client(ctx) as client:
        try:
            workout = await client.get_workout(workout_id)
        except ApiError as e:
            echo_error(e.message)
            ctx.exit(1)

        if not force:
            click.echo(f"Workout: {workout.name} on {workout.date.isoformat()}")
            if not click.confirm("Are you sure you want to delete this workout?"):
                echo_info("Cancelled")
                return

        try:
            await client.delete_workout(workout_id)
        except ApiError as e:
            echo_error(e.message)
            ctx.exit(1)

    echo_success(f"Workout {workout_id} deleted")


@workouts.command()
@click.argument("workout_id")
@click.option("--undo", is_flag=True, help="Mark as not completed instead")
@click.pass_context
@async_command
async def complete(ctx, workout_id: str, undo: bool):
    """Mark a workout as completed.

    Only available when workout completion is manual; otherwise a workout
    is completed once all of its exercises are.
    """
    settings = get_cli_settings(ctx)
    if settings.workout_completion is WorkoutCompletion.DERIVED:
        echo_error(
            "Workout completion follows its exercises. "
            "Set WORKOUT_CALENDAR_WORKOUT_COMPLETION=manual to complete workouts by hand."
        )
        ctx.exit(1)

    async with open_client(ctx) as client:
        view = WorkoutView(
            client,
            workout_id,
            notifier=EchoNotifier(),
            completion=settings.workout_completion,
        )
        try:
            await view.load()
        except ApiError as e:
            echo_error(e.message)
            ctx.exit(1)
        updated = await view.complete_workout(not undo)

    if updated is None:
        ctx.exit(1)
    if undo:
        echo_success(f"Workout '{updated.name}' marked as not completed")

