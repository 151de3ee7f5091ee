"""End-to-end training flow with real asyncio tickers.

Runs the API, client, views and timers together, with rests shortened
to a few fast ticks.
"""

import asyncio
from datetime import date

from workout_calendar.config import CompletionTrigger
from workout_calendar.tracking import AsyncTicker, SessionState
from workout_calendar.views import CalendarView, WorkoutView

TICK = 0.005


def fast_ticker(callback):
    return AsyncTicker(callback, interval=TICK)


class RecordingNotifier:
    def __init__(self):
        self.titles = []

    def notify(self, title, message="", *, error=False):
        self.titles.append(("!" if error else "") + title)


async def wait_until(predicate, timeout: float = 5.0) -> None:
    async def poll():
        while not predicate():
            await asyncio.sleep(TICK)

    await asyncio.wait_for(poll(), timeout)


class TestTrainingFlow:
    """A scheduled Leg Day trained through to completion."""

    def test_leg_day_with_final_rest(self, signed_in):
        notifier = RecordingNotifier()

        async def scenario():
            async with signed_in() as api:
                calendar = CalendarView(api, today=date(2024, 5, 1), notifier=notifier)
                await calendar.load()
                workout = await calendar.create_workout("Leg Day")
                await api.create_exercise(
                    workout.id, name="Squat", sets=3, reps=12, rest_duration=3
                )

                view = WorkoutView(
                    api,
                    workout.id,
                    notifier=notifier,
                    completion_trigger=CompletionTrigger.AFTER_FINAL_REST,
                    ticker_factory=fast_ticker,
                )
                await view.load()
                card = view.cards[0]
                session = card.session

                rests = []
                for _ in range(3):
                    session.increment()
                    rests.append(session.rest_time_left)
                    await wait_until(lambda: not session.resting)

                await view.flush()
                tickers_stopped = not session.rest.ticker.active
                view.close()

                stored = await api.get_workout(workout.id)
                on_day = await calendar.select(date(2024, 5, 1))
                return rests, session.state, tickers_stopped, stored, on_day

        rests, state, tickers_stopped, stored, on_day = asyncio.run(scenario())

        assert rests == [3, 3, 3]
        assert state is SessionState.COMPLETED
        assert tickers_stopped
        assert stored.completed is True
        assert [w.completed for w in on_day] == [True]
        assert notifier.titles.count("Rest finished") == 3
        assert notifier.titles.count("Exercise completed") == 1
        assert notifier.titles.count("Workout completed") == 1
        assert not [t for t in notifier.titles if t.startswith("!")]

    def test_closing_mid_rest_stops_the_countdown(self, signed_in):
        async def scenario():
            async with signed_in() as api:
                workout = await api.create_workout(name="Arms", date=date(2024, 5, 2))
                await api.create_exercise(workout.id, name="Curl", sets=2, rest_duration=60)

                view = WorkoutView(api, workout.id, ticker_factory=fast_ticker)
                await view.load()
                session = view.cards[0].session
                session.increment()
                await asyncio.sleep(TICK * 4)

                view.close()
                left = session.rest_time_left
                await asyncio.sleep(TICK * 10)
                return left, session.rest_time_left, session.rest.ticker.active

        left, later, active = asyncio.run(scenario())
        assert left < 60
        assert later == left
        assert active is False
