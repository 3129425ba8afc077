"""healthlog Command Line Interface."""

import asyncio
import json
from datetime import date
from pathlib import Path
from typing import Any, get_args

import click
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from healthlog.adapters.base import AdapterError
from healthlog.config.settings import LogLevel, settings
from healthlog.dates import LogDateError, local_today, parse_log_id
from healthlog.logs import configure_logging
from healthlog.models.daily_log import DailyLog, DailyLogSettings

app = typer.Typer(
    name="healthlog",
    help="healthlog - Daily health log streaks, trends and insights",
    no_args_is_help=True,
)
console = Console()

TREND_ARROWS = {
    "up": "[green]↑[/green]",
    "down": "[red]↓[/red]",
    "stable": "[dim]→[/dim]",
}


def _parse_day(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        parse_log_id(value)
    except LogDateError as e:
        raise typer.BadParameter(str(e)) from e
    return value


FileOption = typer.Option(None, "--file", "-f", help="Daily log export (JSON)")
UserOption = typer.Option(None, "--user", "-u", help="Only logs owned by this user")
DateOption = typer.Option(
    None, "--date", "-d", callback=_parse_day, help="Day to report on (YYYY-MM-DD)"
)
DaysOption = typer.Option(None, "--days", min=1, help="Days of history to load")


def _load(
    file: Path | None, user: str | None, day: str | None, days: int | None
) -> tuple[list[DailyLog], DailyLogSettings, date]:
    """Load logs from the export, exiting with an error message on failure."""
    today = parse_log_id(day) if day else local_today(settings.timezone)

    async def load() -> dict[str, Any]:
        from healthlog.adapters.json_export import load_daily_logs

        return await load_daily_logs(file, user, today, days)

    try:
        data = asyncio.run(load())
    except AdapterError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if data["skipped"]:
        console.print(f"[yellow]Skipped {data['skipped']} invalid log(s)[/yellow]")
    return data["logs"], data["settings"], today


def _format_metric(name: str, value: float | None) -> str:
    if value is None:
        return "N/A"
    if name == "sleep":
        minutes = round(value)
        hours, mins = divmod(minutes, 60)
        return f"{hours}h {mins}m" if mins else f"{hours}h"
    if name == "exercise":
        return f"{value:.0f} min"
    return f"{value:.1f}"


def _trends_table(summary: dict[str, Any]) -> Table:
    averages = summary["weekly_averages"]
    table = Table(title="Weekly Averages")
    table.add_column("Metric", style="cyan")
    table.add_column("This week", style="white")
    table.add_column("Last week", style="white")
    table.add_column("Trend", style="green")

    for name, trend in summary["trends"].items():
        change = trend["change_percent"]
        table.add_row(
            name.capitalize(),
            _format_metric(name, averages["this_week"][name]),
            _format_metric(name, averages["last_week"][name]),
            f"{TREND_ARROWS[trend['direction']]} {change:+d}%",
        )
    return table


def _habits_table(summary: dict[str, Any]) -> Table:
    table = Table(title="Habit Streaks")
    table.add_column("Habit", style="cyan")
    table.add_column("Streak", style="green")
    for habit in summary["habit_streaks"].values():
        table.add_row(habit["label"], f"{habit['streak']} days")
    return table


def _summarize(
    file: Path | None, user: str | None, day: str | None, days: int | None
) -> dict[str, Any]:
    from healthlog.aggregators.summary import DailyLogAggregator

    logs, log_settings, today = _load(file, user, day, days)
    return DailyLogAggregator(logs, log_settings).get_summary(today)


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        click_type=click.Choice(get_args(LogLevel), case_sensitive=False),
        help="DEBUG, INFO, WARNING or ERROR",
    ),
):
    """Configure logging before running a command."""
    configure_logging(log_level)


@app.command()
def summary(
    file: Path | None = FileOption,
    user: str | None = UserOption,
    day: str | None = DateOption,
    days: int | None = DaysOption,
):
    """Show streaks, weekly trends and insights."""
    data = _summarize(file, user, day, days)
    console.print(Panel(f"Daily Log Summary - {data['date']}", style="blue"))

    today = data["today"]
    console.print(f"\n[bold]Streak:[/bold] {data['streak']} days")
    if today["logged"]:
        status = "completed" if today["completed"] else "in progress"
        console.print(
            f"[bold]Today:[/bold] {today['completion_percentage']:.0f}% filled in ({status})"
        )
    else:
        console.print("[bold]Today:[/bold] [yellow]not logged yet[/yellow]")

    console.print(_trends_table(data))

    if data["habit_streaks"]:
        console.print(_habits_table(data))

    if data["insights"]:
        console.print("\n[cyan]Insights:[/cyan]")
        for insight in data["insights"]:
            console.print(f"  • {insight}")


@app.command()
def streak(
    habit: str | None = typer.Option(None, "--habit", help="Habit key instead of completed days"),
    file: Path | None = FileOption,
    user: str | None = UserOption,
    day: str | None = DateOption,
    days: int | None = DaysOption,
):
    """Show the current completion (or habit) streak."""
    from healthlog.aggregators.streaks import calculate_habit_streak, calculate_streak

    logs, _, today = _load(file, user, day, days)
    if habit:
        count = calculate_habit_streak(logs, habit, today)
        console.print(f"[green]{habit}: {count} day streak[/green]")
    else:
        count = calculate_streak(logs, today)
        console.print(f"[green]{count} day streak[/green]")


@app.command()
def habits(
    file: Path | None = FileOption,
    user: str | None = UserOption,
    day: str | None = DateOption,
    days: int | None = DaysOption,
):
    """Show the streak of every habit."""
    data = _summarize(file, user, day, days)
    if not data["habit_streaks"]:
        console.print("[yellow]No habits found[/yellow]")
        return
    console.print(_habits_table(data))


@app.command()
def trends(
    file: Path | None = FileOption,
    user: str | None = UserOption,
    day: str | None = DateOption,
    days: int | None = DaysOption,
):
    """Show this week's averages against last week's."""
    data = _summarize(file, user, day, days)
    console.print(_trends_table(data))


@app.command()
def insights(
    file: Path | None = FileOption,
    user: str | None = UserOption,
    day: str | None = DateOption,
    days: int | None = DaysOption,
):
    """Show insights for the last week."""
    from healthlog.aggregators.insights import generate_insights

    logs, _, _ = _load(file, user, day, days)
    messages = generate_insights(logs)
    if not messages:
        console.print("[green]No issues spotted this week[/green]")
        return
    for message in messages:
        console.print(f"• {message}")


@app.command()
def start(
    user: str = typer.Option(..., "--user", "-u", help="Owner of the new log"),
    file: Path | None = FileOption,
    day: str | None = DateOption,
):
    """Print today's log, pre-filled from settings when it does not exist yet."""
    from healthlog.aggregators.summary import DailyLogAggregator

    logs, log_settings, today = _load(file, user, day, 1)
    log = DailyLogAggregator(logs, log_settings).start_log(user, today)
    console.print_json(json.dumps(log.model_dump(mode="json", by_alias=True, exclude_none=True)))


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind address"),
    port: int | None = typer.Option(None, help="Port"),
):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "healthlog.api:app",
        host=host or settings.api.host,
        port=port or settings.api.port,
    )


@app.command()
def version():
    """Show healthlog version."""
    from healthlog import __version__

    console.print(f"healthlog v{__version__}")


if __name__ == "__main__":
    app()
