"""A workout with its exercise cards."""

import logging
from datetime import date

from ..client import ApiClient, ApiError, LogNotifier, Notifier
from ..config import CompletionTrigger, WorkoutCompletion
from ..models.exercise import Exercise
from ..models.templates import ExerciseTemplate
from ..models.workout import Workout
from ..tracking import TickerFactory
from .exercise_card import ExerciseCard, describe_error

logger = logging.getLogger(__name__)


class WorkoutView:
    """Loads one workout and keeps an ExerciseCard per exercise.

    With ``WorkoutCompletion.DERIVED`` the workout's ``completed`` flag is
    written back whenever it disagrees with "every exercise completed"
    (a workout without exercises counts as not completed). With
    ``WorkoutCompletion.MANUAL`` only ``complete_workout`` changes it.
    """

    def __init__(
        self,
        client: ApiClient,
        workout_id: str,
        *,
        notifier: Notifier | None = None,
        completion: WorkoutCompletion = WorkoutCompletion.DERIVED,
        completion_trigger: CompletionTrigger = CompletionTrigger.IMMEDIATE,
        ticker_factory: TickerFactory | None = None,
    ):
        self.client = client
        self.workout_id = workout_id
        self.notifier = notifier or LogNotifier()
        self.completion = WorkoutCompletion(completion)
        self.completion_trigger = CompletionTrigger(completion_trigger)
        self.ticker_factory = ticker_factory
        self.workout: Workout | None = None
        self.cards: list[ExerciseCard] = []

    async def load(self) -> Workout:
        """Fetch the workout and its exercises. Raises ApiError(404) if missing."""
        self.workout = await self.client.get_workout(self.workout_id)
        exercises = await self.client.list_exercises(self.workout_id)
        self._build_cards(exercises)
        if self.completion is WorkoutCompletion.DERIVED:
            await self.sync_completion()
        return self.workout

    def _build_cards(self, exercises: list[Exercise]) -> None:
        known = {card.id: card for card in self.cards}
        cards = []
        for exercise in exercises:
            card = known.pop(exercise.id, None)
            if card is None:
                card = ExerciseCard(
                    self.client,
                    exercise,
                    notifier=self.notifier,
                    completion_trigger=self.completion_trigger,
                    ticker_factory=self.ticker_factory,
                    on_change=self._card_changed,
                )
            else:
                card.exercise = exercise
                card.session.set_sets(exercise.sets)
                card.session.set_rest_duration(exercise.rest_duration)
            cards.append(card)
        for stale in known.values():
            stale.close()
        self.cards = cards

    @property
    def exercises(self) -> list[Exercise]:
        return [card.exercise for card in self.cards]

    @property
    def progress(self) -> tuple[int, int]:
        """(completed exercises, total exercises)."""
        done = sum(1 for card in self.cards if card.exercise.completed)
        return done, len(self.cards)

    @property
    def progress_ratio(self) -> float:
        done, total = self.progress
        return done / total if total else 0.0

    @property
    def all_completed(self) -> bool:
        return bool(self.cards) and all(card.exercise.completed for card in self.cards)

    def card(self, exercise_id: str) -> ExerciseCard | None:
        for card in self.cards:
            if card.id == exercise_id:
                return card
        return None

    async def _card_changed(self, card: ExerciseCard) -> None:
        if card.deleted and card in self.cards:
            self.cards.remove(card)
        if self.completion is WorkoutCompletion.DERIVED:
            await self.sync_completion()

    async def sync_completion(self) -> bool:
        """Write the derived completion flag back if it changed."""
        if self.workout is None:
            return False
        wanted = self.all_completed
        if self.workout.completed == wanted:
            return False
        updated = await self._update("Failed to update workout", completed=wanted)
        if updated is not None and wanted:
            self.notifier.notify("Workout completed", f"You finished {updated.name}!")
        return updated is not None

    async def complete_workout(self, completed: bool = True) -> Workout | None:
        """Set the completion flag by hand."""
        if self.completion is WorkoutCompletion.DERIVED:
            raise ValueError("Workout completion follows its exercises")
        updated = await self._update("Failed to update workout", completed=completed)
        if updated is not None and completed:
            self.notifier.notify("Workout completed", f"You finished {updated.name}!")
        return updated

    async def rename(self, name: str) -> Workout | None:
        return await self._update("Failed to rename workout", name=name)

    async def reschedule(self, day: date) -> Workout | None:
        return await self._update("Failed to reschedule workout", date=day)

    async def _update(self, failure: str, **changes) -> Workout | None:
        try:
            updated = await self.client.update_workout(self.workout_id, **changes)
        except ApiError as e:
            self.notifier.notify(failure, describe_error(e), error=True)
            return None
        if updated is None:
            self.notifier.notify(failure, "Workout not found", error=True)
            return None
        self.workout = updated
        return updated

    async def delete(self) -> bool:
        """Delete the workout together with its exercises."""
        try:
            await self.client.delete_workout(self.workout_id)
        except ApiError as e:
            self.notifier.notify("Failed to delete workout", describe_error(e), error=True)
            return False
        self.close()
        self.cards = []
        self.notifier.notify("Workout deleted", self.workout.name if self.workout else "")
        return True

    async def add_exercise(
        self,
        template: ExerciseTemplate | None = None,
        **fields,
    ) -> ExerciseCard | None:
        """Append an exercise, optionally prefilled from a template."""
        payload = template.to_payload() if template else {}
        payload.update(fields)
        try:
            exercise = await self.client.create_exercise(self.workout_id, **payload)
        except ApiError as e:
            self.notifier.notify("Failed to add exercise", describe_error(e), error=True)
            return None
        self.notifier.notify("Exercise added", exercise.name)
        self._build_cards([*self.exercises, exercise])
        if self.completion is WorkoutCompletion.DERIVED:
            await self.sync_completion()
        return self.card(exercise.id)

    async def flush(self) -> None:
        """Wait for every card's in-flight requests."""
        for card in list(self.cards):
            await card.flush()

    def close(self) -> None:
        for card in self.cards:
            card.close()
