"""
Page layout: month grids side by side, then the events listing.

Every calendar line is assembled from fixed-width cells so ANSI codes
never disturb the alignment of neighbouring months.
"""

import datetime
from typing import List, Optional, Sequence

from .constants import (
    ANNIVERSARY_LABELS,
    BG_CODES,
    BOLD,
    EVENTS_RULE_WIDTH,
    FG_CODES,
    MONTH_ABBR,
    MONTH_NAMES,
    MONTH_SEPARATOR,
    RESET,
    REVERSE,
    WEEKDAY_ABBR,
    WEEKDAY_SHORT,
)
from .dates import days_in_month, weekday_index
from .models import CalendarConfig, DisplayMode, MonthGrid, ResolvedEvent, WeekStart
from .renderer import TextRenderer
from .store import EventStore

CELL_WIDTH = 3
WEEK_COLUMN = 3


def paint(text: str, codes: str, config: CalendarConfig) -> str:
    if not config.color or not codes:
        return text
    return f"{codes}{text}{RESET}"


def block_width(config: CalendarConfig) -> int:
    return 7 * CELL_WIDTH + (WEEK_COLUMN if config.show_week_numbers else 0)


def weekday_order(week_start: WeekStart) -> List[int]:
    """Weekday indexes (0=Sunday) in column order."""
    first = 1 if week_start == WeekStart.monday else 0
    return [(first + i) % 7 for i in range(7)]


def ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _title_line(grid: MonthGrid, config: CalendarConfig) -> str:
    title = f"{MONTH_NAMES[grid.month - 1]} {grid.year}"
    width = block_width(config)
    left = max((width - len(title)) // 2, 0)
    right = max(width - left - len(title), 0)
    return " " * left + paint(title, BOLD, config) + " " * right


def _header_line(grid: MonthGrid, config: CalendarConfig) -> str:
    parts = []
    if config.show_week_numbers:
        parts.append(paint("Wk", FG_CODES["blue"], config) + " ")
    for weekday in weekday_order(grid.week_start):
        name = WEEKDAY_SHORT[weekday]
        if weekday in (0, 6):
            name = paint(name, FG_CODES["red"], config)
        parts.append(name + " ")
    return "".join(parts)


def _day_codes(day: datetime.date, store: EventStore, config: CalendarConfig) -> str:
    style = store.style_for(day)
    fg = FG_CODES[style.fg] if style is not None and style.fg else ""
    bg = BG_CODES[style.bg] if style is not None and style.bg else ""

    if config.today is not None and day == config.today:
        return (bg or BG_CODES["yellow"]) + (fg or FG_CODES["black"])

    weekend = weekday_index(day) in (0, 6)
    if style is None:
        return FG_CODES["red"] if weekend else ""
    if not style.is_plain:
        return bg + fg + BOLD
    if weekend:
        return FG_CODES["red"] + BOLD
    return REVERSE


def _week_line(grid: MonthGrid, row: int, store: EventStore, config: CalendarConfig) -> str:
    week = grid.weeks[row]
    parts = []
    if config.show_week_numbers:
        if week.week_number is None:
            parts.append(" " * WEEK_COLUMN)
        else:
            parts.append(paint(f"{week.week_number:2}", FG_CODES["blue"], config) + " ")
    for cell in week.days:
        if cell is None:
            parts.append(" " * CELL_WIDTH)
            continue
        day = datetime.date(grid.year, grid.month, cell)
        parts.append(paint(f"{cell:2}", _day_codes(day, store, config), config) + " ")
    return "".join(parts)


def render_month(grid: MonthGrid, store: EventStore, config: CalendarConfig) -> List[str]:
    """Lines of one month block: title, weekday header, one line per week."""
    lines = [_title_line(grid, config), _header_line(grid, config)]
    lines.extend(_week_line(grid, row, store, config) for row in range(len(grid.weeks)))
    return lines


def render_calendar_rows(grids: Sequence[MonthGrid], store: EventStore, config: CalendarConfig) -> List[str]:
    """One text block per row of months, `columns` months side by side."""
    per_row = 1 if config.months_to_show == 1 else config.columns
    width = block_width(config)
    blocks = []
    for start in range(0, len(grids), per_row):
        months = [render_month(grid, store, config) for grid in grids[start:start + per_row]]
        height = max(len(lines) for lines in months)
        for lines in months:
            lines.extend([" " * width] * (height - len(lines)))
        rows = [MONTH_SEPARATOR.join(parts).rstrip() for parts in zip(*months)]
        blocks.append("\n".join(rows))
    return blocks


def _relative_label(day: datetime.date, config: CalendarConfig) -> str:
    if config.today is None:
        return ""
    diff = (day - config.today).days
    if diff == 0:
        return ""
    count = paint(str(abs(diff)), BOLD, config)
    reset = RESET if config.color else ""
    if diff > 0:
        green = FG_CODES["green"] if config.color else ""
        return f" {green}(In {count}{green} days){reset}"
    blue = FG_CODES["blue"] if config.color else ""
    return f" {blue}({count}{blue} days ago){reset}"


def _listing_row(event: ResolvedEvent, config: CalendarConfig) -> dict:
    day = event.date
    prefix = ""
    if config.color:
        prefix = (BG_CODES[event.style.bg] if event.style.bg else "") + (FG_CODES[event.style.fg] if event.style.fg else "")

    description = event.description
    if event.original_year is not None and event.category in ANNIVERSARY_LABELS:
        years = day.year - event.original_year
        if years > 0:
            description += f" ({ordinal(years)} {ANNIVERSARY_LABELS[event.category]})"

    return {
        "prefix": prefix,
        "reset": RESET if prefix else "",
        "when": f"{WEEKDAY_ABBR[weekday_index(day)]}, {day.day:02d} {MONTH_ABBR[day.month - 1]} {day.year}",
        "description": description,
        "suffix": _relative_label(day, config),
    }


def render_events(store: EventStore, config: CalendarConfig, renderer: Optional[TextRenderer] = None) -> Optional[str]:
    """The events listing for the displayed months, or None when there are no events."""
    end_month, end_year = config.end_month
    first = datetime.date(config.start_year, config.start_month, 1)
    last = datetime.date(end_year, end_month, days_in_month(end_month, end_year))

    rows = [_listing_row(event, config) for event in store.between(first, last)]
    if not rows:
        return None

    renderer = renderer or TextRenderer()
    text = renderer.render("events.txt", {
        "bold": BOLD if config.color else "",
        "reset": RESET if config.color else "",
        "width": EVENTS_RULE_WIDTH,
        "rows": rows,
    })
    return text.rstrip("\n")


def compose_blocks(grids: Sequence[MonthGrid], config: CalendarConfig, store: EventStore,
                   renderer: Optional[TextRenderer] = None) -> List[str]:
    blocks = []
    if config.display_mode in (DisplayMode.calendar, DisplayMode.both):
        blocks.extend(render_calendar_rows(grids, store, config))
    if config.display_mode in (DisplayMode.events, DisplayMode.both):
        listing = render_events(store, config, renderer)
        if listing is not None:
            blocks.append(listing)
    return blocks


def compose_page(grids: Sequence[MonthGrid], config: CalendarConfig, store: EventStore,
                 renderer: Optional[TextRenderer] = None) -> str:
    """The full printable page, blocks separated by a blank line."""
    return "\n\n".join(compose_blocks(grids, config, store, renderer))
