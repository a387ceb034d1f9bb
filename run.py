import datetime
import logging
from pathlib import Path
from typing import Optional

import typer

from ecal.errors import EventFileError, InvalidConfig
from ecal.generator import CalendarGenerator
from ecal.models import DisplayMode, WeekStart
from ecal.utils import build_config, load_settings, read_event_lines
from ecal.rules import parse_lines

app = typer.Typer(help="Text calendar with events from a rule file.")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _display_mode(calendar_only: bool, events_only: bool) -> Optional[DisplayMode]:
    if calendar_only and events_only:
        raise InvalidConfig("--calendar-only and --events-only cannot be combined")
    if calendar_only:
        return DisplayMode.calendar
    if events_only:
        return DisplayMode.events
    return None


@app.command()
def show(
    months: Optional[int] = typer.Option(None, "--months", "-n", help="Number of months to display (1, 3, 6 or 12)"),
    month: Optional[int] = typer.Option(None, "--month", "-m", help="Start month (default: current month)"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Start year (default: current year)"),
    columns: Optional[int] = typer.Option(None, "--columns", help="Calendar columns per row"),
    sunday_first: Optional[bool] = typer.Option(None, "--sunday-first/--monday-first", help="First day of the week"),
    weeks: Optional[bool] = typer.Option(None, "--weeks/--no-weeks", help="Show ISO week numbers"),
    calendar_only: bool = typer.Option(False, "--calendar-only", "-c", help="Show only the calendar"),
    events_only: bool = typer.Option(False, "--events-only", "-e", help="Show only the events"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Events file (default from settings: events.txt)"),
    config: Optional[Path] = typer.Option(None, "--config", help="Settings file (default: config/settings.yaml)"),
    color: Optional[bool] = typer.Option(None, "--color/--no-color", help="Use terminal colors"),
    today: Optional[datetime.datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Date to treat as today"),
):
    """
    Print the calendar and/or the events listing.
    """
    now = today.date() if today else datetime.date.today()
    try:
        settings = load_settings(config)
        week_start = None
        if sunday_first is not None:
            week_start = WeekStart.sunday if sunday_first else WeekStart.monday
        cal_config = build_config(
            settings,
            months_to_show=months,
            columns=columns,
            start_month=month if month is not None else now.month,
            start_year=year if year is not None else now.year,
            week_start=week_start,
            display_mode=_display_mode(calendar_only, events_only),
            show_week_numbers=weeks,
            color=color,
            today=now,
        )
    except (InvalidConfig, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        gen = CalendarGenerator.from_file(cal_config, file or Path(settings.events_file))
    except EventFileError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    page = gen.generate()
    if page:
        typer.echo(page)


@app.command()
def verify(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Events file to check"),
    config: Optional[Path] = typer.Option(None, "--config", help="Settings file (default: config/settings.yaml)"),
):
    """Parse the events file and report invalid lines without rendering."""
    try:
        settings = load_settings(config)
        path = file or Path(settings.events_file)
        rules, errors = parse_lines(read_event_lines(path))
    except (InvalidConfig, EventFileError, FileNotFoundError) as e:
        typer.echo(f"❌ Configuration invalid: {e}", err=True)
        raise typer.Exit(code=1)

    for error in errors:
        typer.echo(f"❌ {path}:{error.line_number}: {error.reason}: {error.text.strip()}")
    typer.echo(f"Found {len(rules)} valid rules, {len(errors)} invalid lines.")
    if errors:
        raise typer.Exit(code=1)
    typer.echo("✅ Events file valid!")


if __name__ == "__main__":
    app()
