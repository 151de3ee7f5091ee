"""Interactive training session command."""

import asyncio

import click
import questionary
from questionary import Style

from ..client import ApiError
from ..tracking import AsyncTicker, ExerciseSession, SessionState, format_clock
from ..views import ExerciseCard, WorkoutView
from .base import (
    EchoNotifier,
    async_command,
    echo_error,
    echo_info,
    ensure_initialized,
    get_cli_settings,
    open_client,
)

custom_style = Style(
    [
        ("qmark", "fg:#6366f1 bold"),
        ("question", "bold"),
        ("answer", "fg:#10b981 bold"),
        ("pointer", "fg:#6366f1 bold"),
        ("highlighted", "fg:#6366f1 bold"),
        ("selected", "fg:#10b981"),
        ("separator", "fg:#6366f1"),
        ("instruction", ""),
        ("text", ""),
    ]
)

REFRESH_INTERVAL = 0.25

FINISH = "__finish__"
BACK = "__back__"


def card_label(card: ExerciseCard) -> str:
    exercise = card.exercise
    session = card.session
    mark = "x" if session.completed else " "
    return (
        f"[{mark}] {exercise.name}  {session.completed_sets}/{exercise.sets} sets"
        f" x {exercise.reps} reps, rest {format_clock(exercise.rest_duration)}"
    )


def rest_choices(session: ExerciseSession) -> list[questionary.Choice]:
    """Rest controls available right now."""
    if session.rest_paused:
        choices = [questionary.Choice("Resume", "resume")]
    else:
        choices = [
            questionary.Choice("Watch countdown", "watch"),
            questionary.Choice("Pause", "pause"),
        ]
    choices.append(questionary.Choice("Reset", "reset"))
    choices.append(questionary.Choice("Skip rest", "skip"))
    return choices


def apply_rest_action(session: ExerciseSession, action: str) -> None:
    if action == "pause":
        session.pause()
    elif action == "resume":
        session.resume()
    elif action == "reset":
        # reset leaves the countdown stopped at full length
        session.reset_rest()
        session.resume()
    elif action == "skip":
        session.skip_rest()


async def watch_rest(session: ExerciseSession) -> None:
    """Show the live countdown until the rest ends or is paused."""
    while session.resting and not session.rest_paused:
        click.echo(f"\r  Rest: {format_clock(session.rest_time_left)} ", nl=False)
        await asyncio.sleep(REFRESH_INTERVAL)
    click.echo("\r" + " " * 20 + "\r", nl=False)


async def wait_for_rest(card: ExerciseCard) -> None:
    """Run the rest with pause, resume, reset and skip controls."""
    session = card.session
    while session.resting:
        action = await questionary.select(
            f"Rest {format_clock(session.rest_time_left)}"
            + (" (paused)" if session.rest_paused else ""),
            choices=rest_choices(session),
            style=custom_style,
        ).ask_async()
        # the rest may have run out while the menu was open
        if not session.resting:
            break
        if action is None:
            session.skip_rest()
        elif action == "watch":
            await watch_rest(session)
        else:
            apply_rest_action(session, action)


async def run_timer(card: ExerciseCard) -> None:
    """Run the exercise timer to the end."""
    session = card.session
    session.start_timer()
    while session.timer.running:
        click.echo(f"\r  Timer: {format_clock(session.timer.remaining)} ", nl=False)
        await asyncio.sleep(REFRESH_INTERVAL)
    click.echo("\r" + " " * 20 + "\r", nl=False)


async def train_exercise(card: ExerciseCard) -> None:
    """Log sets for one exercise until the user goes back."""
    session = card.session
    while True:
        state = session.state
        choices = []
        if state in (SessionState.IDLE, SessionState.IN_PROGRESS):
            choices.append(questionary.Choice("Log set", "log"))
        if state is SessionState.ALL_SETS_LOGGED:
            choices.append(questionary.Choice("Complete exercise", "complete"))
        if session.completed_sets > 0 and state not in (SessionState.COMPLETED, SessionState.RESTING):
            choices.append(questionary.Choice("Undo last set", "undo"))
        choices.append(questionary.Choice(f"Exercise timer ({format_clock(session.timer.duration)})", "timer"))
        choices.append(questionary.Choice("Back", BACK))

        action = await questionary.select(
            f"{card.exercise.name}: {session.completed_sets}/{session.sets} sets",
            choices=choices,
            style=custom_style,
        ).ask_async()

        if action in (None, BACK):
            return
        if action == "log":
            session.increment()
            if session.resting:
                take_rest = await questionary.confirm(
                    f"Rest {format_clock(session.rest_time_left)}?",
                    default=True,
                    style=custom_style,
                ).ask_async()
                if take_rest:
                    await wait_for_rest(card)
                else:
                    session.skip_rest()
        elif action == "complete":
            session.complete()
        elif action == "undo":
            session.decrement()
        elif action == "timer":
            seconds = await questionary.text(
                "Seconds:",
                default=str(session.timer.duration),
                validate=lambda v: v.isdigit() or "Enter a whole number of seconds",
                style=custom_style,
            ).ask_async()
            if seconds is None:
                continue
            session.set_timer_duration(int(seconds))
            await run_timer(card)

        await card.flush()


@click.command()
@click.argument("workout_id")
@click.pass_context
@async_command
async def train(ctx, workout_id: str):
    """Work through a workout set by set.

    Pick an exercise, log each set and rest between them. The terminal
    bell rings when a rest or timer runs out.
    """
    ensure_initialized(ctx)
    settings = get_cli_settings(ctx)

    async with open_client(ctx) as client:
        view = WorkoutView(
            client,
            workout_id,
            notifier=EchoNotifier(bell=True),
            completion=settings.workout_completion,
            completion_trigger=settings.completion_trigger,
            ticker_factory=AsyncTicker,
        )
        try:
            workout = await view.load()
        except ApiError as e:
            echo_error(e.message)
            ctx.exit(1)

        if not view.cards:
            echo_info("This workout has no exercises yet.")
            return

        click.echo()
        click.echo(f"=== {workout.name} ({workout.date.isoformat()}) ===")
        click.echo()

        try:
            while True:
                done, total = view.progress
                choice = await questionary.select(
                    f"Progress {done}/{total}. Pick an exercise:",
                    choices=[
                        *(questionary.Choice(card_label(card), card.id) for card in view.cards),
                        questionary.Choice("Finish", FINISH),
                    ],
                    style=custom_style,
                ).ask_async()
                if choice in (None, FINISH):
                    break
                card = view.card(choice)
                if card is not None:
                    await train_exercise(card)
        finally:
            view.close()
            await view.flush()

    done, total = view.progress
    click.echo()
    echo_info(f"{done}/{total} exercises completed")
