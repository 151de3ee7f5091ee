"""One exercise inside a workout: set logging, rest timer, edits."""

import asyncio
import logging
from typing import Awaitable, Callable

from ..client import ApiClient, ApiError, LogNotifier, Notifier
from ..config import CompletionTrigger
from ..models.exercise import Exercise
from ..tracking import ExerciseSession, TickerFactory

logger = logging.getLogger(__name__)

ChangeHandler = Callable[["ExerciseCard"], Awaitable[None]]


class ExerciseCard:
    """Drives an ExerciseSession and persists what it produces.

    Every failed request produces exactly one error notification and
    nothing is retried. A rejected completion reopens the session with
    all sets logged, so ``session.complete()`` sends it again.
    ``on_change`` is awaited after each successful mutation so the owner
    can refresh. ``deleted`` is set once the exercise is gone.
    """

    def __init__(
        self,
        client: ApiClient,
        exercise: Exercise,
        *,
        notifier: Notifier | None = None,
        completion_trigger: CompletionTrigger = CompletionTrigger.IMMEDIATE,
        ticker_factory: TickerFactory | None = None,
        on_change: ChangeHandler | None = None,
        on_rest_finished: Callable[[], None] | None = None,
        on_timer_finished: Callable[[], None] | None = None,
    ):
        self.client = client
        self.exercise = exercise
        self.notifier = notifier or LogNotifier()
        self.on_change = on_change
        self.deleted = False
        self._extra_rest_finished = on_rest_finished
        self._extra_timer_finished = on_timer_finished
        self._pending: set[asyncio.Task] = set()

        self.session = ExerciseSession(
            exercise.sets,
            exercise.rest_duration,
            completed=exercise.completed,
            completion_trigger=completion_trigger,
            on_rest_finished=self._rest_finished,
            on_completed=self._completed,
            on_timer_finished=self._timer_finished,
            ticker_factory=ticker_factory,
        )

    @property
    def id(self) -> str:
        return self.exercise.id

    # --- Session callbacks ---

    def _rest_finished(self) -> None:
        self.notifier.notify("Rest finished", "Time for your next set!")
        if self._extra_rest_finished is not None:
            self._extra_rest_finished()

    def _timer_finished(self) -> None:
        self.notifier.notify("Timer finished", self.exercise.name)
        if self._extra_timer_finished is not None:
            self._extra_timer_finished()

    def _completed(self) -> None:
        # Session callbacks are synchronous; the request runs as a task.
        task = asyncio.get_running_loop().create_task(self._persist_completion())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _persist_completion(self) -> None:
        updated = await self._mutate("Failed to update exercise", completed=True)
        if updated is None:
            self.session.reopen()
            return
        self.notifier.notify("Exercise completed", f"Great job finishing {updated.name}!")

    async def flush(self) -> None:
        """Wait for in-flight completion requests."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # --- Mutations ---

    async def _mutate(self, failure: str, **changes) -> Exercise | None:
        try:
            updated = await self.client.update_exercise(self.exercise.id, **changes)
        except ApiError as e:
            self.notifier.notify(failure, describe_error(e), error=True)
            return None
        if updated is None:
            self.notifier.notify(failure, "Exercise not found", error=True)
            return None
        self.exercise = updated
        if self.on_change is not None:
            await self.on_change(self)
        return updated

    async def edit(
        self,
        *,
        name: str | None = None,
        description: str | None = None,
        sets: int | None = None,
        reps: int | None = None,
        rest_duration: int | None = None,
    ) -> Exercise | None:
        """Change the exercise definition; only the given fields are sent."""
        changes = {
            key: value
            for key, value in {
                "name": name,
                "description": description,
                "sets": sets,
                "reps": reps,
                "rest_duration": rest_duration,
            }.items()
            if value is not None
        }
        if not changes:
            return self.exercise

        updated = await self._mutate("Failed to update exercise", **changes)
        if updated is not None:
            self.session.set_sets(updated.sets)
            self.session.set_rest_duration(updated.rest_duration)
            self.notifier.notify("Exercise updated", updated.name)
        return updated

    async def delete(self) -> bool:
        try:
            await self.client.delete_exercise(self.exercise.id, self.exercise.workout_id)
        except ApiError as e:
            self.notifier.notify("Failed to delete exercise", describe_error(e), error=True)
            return False
        self.deleted = True
        self.close()
        self.notifier.notify("Exercise deleted", self.exercise.name)
        if self.on_change is not None:
            await self.on_change(self)
        return True

    async def set_rest_duration(self, seconds: int) -> Exercise | None:
        updated = await self._mutate("Failed to update rest time", rest_duration=seconds)
        if updated is not None:
            self.session.set_rest_duration(updated.rest_duration)
        return updated

    # --- Repetition counter ---

    async def bump_count(self, step: int = 1) -> Exercise | None:
        """Move the repetition counter one step.

        Counting up past ``max_count`` wraps back to zero; counting down
        stops at zero.
        """
        current = self.exercise.current_count
        if step > 0:
            new_count = 0 if current >= self.exercise.max_count else current + 1
        else:
            new_count = max(current - 1, 0)
        return await self._mutate("Failed to update count", current_count=new_count)

    async def set_max_count(self, max_count: int) -> Exercise | None:
        return await self._mutate("Failed to update target", max_count=max_count)

    def close(self) -> None:
        """Stop the rest and exercise timers."""
        self.session.close()


def describe_error(error: ApiError) -> str:
    """Notification text for a failed request."""
    if error.errors:
        fields = ", ".join(
            f"{e.get('field')}: {e.get('message')}" for e in error.errors
        )
        return f"{error.message} ({fields})"
    return error.message
