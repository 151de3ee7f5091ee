"""Per-exercise set logging and rest-timer state."""

import logging
from enum import Enum
from typing import Callable

from ..config import CompletionTrigger
from .countdown import Countdown
from .ticker import TickerFactory

logger = logging.getLogger(__name__)

Callback = Callable[[], None]

DEFAULT_TIMER_DURATION = 60


class SessionState(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    RESTING = "resting"
    ALL_SETS_LOGGED = "all_sets_logged"
    COMPLETED = "completed"


class ExerciseSession:
    """Tracks logged sets and the rest between them for one exercise.

    Logging a set below the target starts a rest countdown of
    ``rest_duration`` seconds. Logging the last set either completes the
    exercise at once or, with ``CompletionTrigger.AFTER_FINAL_REST``, runs
    one more rest and completes when it runs out. ``on_completed`` fires at
    most once per session.

    A second, independent countdown (``timer``) is available for timed
    holds; it never changes the set count.

    Nothing here is persisted. A new session starts from zero logged sets,
    or from all of them when the exercise is already completed.
    """

    def __init__(
        self,
        sets: int,
        rest_duration: int,
        *,
        completed: bool = False,
        completion_trigger: CompletionTrigger = CompletionTrigger.IMMEDIATE,
        timer_duration: int = DEFAULT_TIMER_DURATION,
        on_rest_finished: Callback | None = None,
        on_completed: Callback | None = None,
        on_timer_finished: Callback | None = None,
        ticker_factory: TickerFactory | None = None,
    ):
        if sets < 1:
            raise ValueError("sets must be >= 1")
        self.sets = sets
        self.completion_trigger = CompletionTrigger(completion_trigger)
        self.on_rest_finished = on_rest_finished
        self.on_completed = on_completed
        self.on_timer_finished = on_timer_finished

        self.completed_sets = sets if completed else 0
        self._completed = completed
        self._resting = False
        self._final_rest = False

        self.rest = Countdown(
            rest_duration,
            on_complete=self._rest_done,
            ticker_factory=ticker_factory,
        )
        self.timer = Countdown(
            timer_duration,
            on_complete=self._timer_done,
            ticker_factory=ticker_factory,
        )

    # --- State ---

    @property
    def state(self) -> SessionState:
        if self._completed:
            return SessionState.COMPLETED
        if self._resting:
            return SessionState.RESTING
        if self.completed_sets >= self.sets:
            return SessionState.ALL_SETS_LOGGED
        if self.completed_sets > 0:
            return SessionState.IN_PROGRESS
        return SessionState.IDLE

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def resting(self) -> bool:
        return self._resting

    @property
    def rest_paused(self) -> bool:
        return self._resting and not self.rest.running

    @property
    def rest_time_left(self) -> int:
        return self.rest.remaining

    @property
    def rest_duration(self) -> int:
        return self.rest.duration

    @property
    def progress(self) -> float:
        """Fraction of target sets logged, between 0 and 1."""
        if self._completed:
            return 1.0
        return min(self.completed_sets / self.sets, 1.0)

    # --- Set logging ---

    def increment(self) -> bool:
        """Log one set. Returns False when logging is not allowed now."""
        if self.state not in (SessionState.IDLE, SessionState.IN_PROGRESS):
            return False

        self.completed_sets += 1
        if self.completed_sets < self.sets:
            self._start_rest(final=False)
        elif self.completion_trigger is CompletionTrigger.AFTER_FINAL_REST:
            self._start_rest(final=True)
        else:
            self._mark_completed()
        return True

    def decrement(self) -> bool:
        """Un-log one set. Not allowed while resting or once completed."""
        if self._resting or self._completed or self.completed_sets == 0:
            return False
        self.completed_sets -= 1
        return True

    def complete(self) -> bool:
        """Mark the exercise completed once every set is logged."""
        if self.state is not SessionState.ALL_SETS_LOGGED:
            return False
        self._mark_completed()
        return True

    def reopen(self) -> bool:
        """Undo a completion the server did not accept.

        Every set stays logged, so ``complete`` can try again.
        """
        if not self._completed:
            return False
        self._completed = False
        self.completed_sets = self.sets
        return True

    def set_sets(self, sets: int) -> None:
        """Change the target, clamping the logged count to it."""
        if sets < 1:
            raise ValueError("sets must be >= 1")
        self.sets = sets
        if not self._completed:
            self.completed_sets = min(self.completed_sets, sets)

    # --- Rest countdown ---

    def pause(self) -> None:
        if self._resting:
            self.rest.pause()

    def resume(self) -> None:
        if self._resting:
            self.rest.resume()

    def reset_rest(self) -> None:
        """Stop the countdown at full length; still resting."""
        self.rest.reset()

    def skip_rest(self) -> None:
        """End the rest now. A skipped final rest leaves completion to ``complete``."""
        if not self._resting:
            return
        self.rest.reset()
        self._resting = False
        self._final_rest = False

    def set_rest_duration(self, seconds: int) -> None:
        self.rest.set_duration(seconds)

    def tick(self) -> None:
        """Advance every running countdown by one second."""
        self.rest.tick()
        self.timer.tick()

    # --- Exercise timer ---

    def start_timer(self) -> None:
        self.timer.start()

    def toggle_timer(self) -> None:
        self.timer.toggle()

    def reset_timer(self) -> None:
        self.timer.reset()

    def set_timer_duration(self, seconds: int) -> None:
        self.timer.set_duration(seconds)

    # --- Lifecycle ---

    def close(self) -> None:
        """Stop both countdowns and their tickers."""
        self.rest.pause()
        self.timer.pause()

    def _start_rest(self, final: bool) -> None:
        self._resting = True
        self._final_rest = final
        self.rest.reset()
        # a zero-length rest completes inside start()
        self.rest.start()

    def _rest_done(self) -> None:
        final = self._final_rest
        self._resting = False
        self._final_rest = False
        logger.debug("Rest finished (final=%s)", final)
        if self.on_rest_finished is not None:
            self.on_rest_finished()
        if final:
            self._mark_completed()

    def _timer_done(self) -> None:
        if self.on_timer_finished is not None:
            self.on_timer_finished()

    def _mark_completed(self) -> None:
        if self._completed:
            return
        self._completed = True
        self.completed_sets = self.sets
        if self.on_completed is not None:
            self.on_completed()
