"""Month calendar command."""

from datetime import datetime

import click

from ..client import ApiError
from ..models.calendar import DAY_NAMES, MonthView
from ..views import CalendarView
from .base import EchoNotifier, async_command, echo_error, ensure_initialized, open_client

CELL_WIDTH = 5


def parse_month(value: str) -> MonthView:
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except ValueError as e:
        raise click.BadParameter(f"'{value}' is not a yyyy-MM month") from e
    return MonthView(parsed.year, parsed.month)


def render_grid(view: CalendarView) -> list[str]:
    """Text grid: ``*`` marks days with workouts, ``[]`` marks today."""
    lines = ["".join(name[:2].rjust(CELL_WIDTH) for name in DAY_NAMES)]
    for week in view.grid():
        row = ""
        for cell in week:
            if cell is None:
                row += " " * CELL_WIDTH
                continue
            label = str(cell.day.day)
            if cell.workouts:
                label += "*"
            if cell.today:
                label = f"[{label}]"
            row += label.rjust(CELL_WIDTH)
        lines.append(row)
    return lines


@click.command()
@click.option("--month", "-m", help="Month to show as yyyy-MM (default: this month)")
@click.pass_context
@async_command
async def calendar(ctx, month: str | None):
    """Show a month with its scheduled workouts."""
    ensure_initialized(ctx)
    async with open_client(ctx) as client:
        view = CalendarView(client, notifier=EchoNotifier())
        if month:
            view.month = parse_month(month)
        try:
            await view.load()
        except ApiError as e:
            echo_error(e.message)
            ctx.exit(1)

    click.echo()
    click.echo(view.month.title.center(CELL_WIDTH * 7))
    for line in render_grid(view):
        click.echo(line)
    click.echo()

    scheduled = view.month_workouts()
    if not scheduled:
        click.echo("No workouts this month.")
        return
    for workout in scheduled:
        status = click.style("done", fg="green") if workout.completed else "planned"
        click.echo(f"  {workout.date.isoformat()}  {workout.name}  ({status})  {workout.id}")
