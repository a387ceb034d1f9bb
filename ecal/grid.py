import datetime
from typing import List, Optional, Tuple

from .dates import add_months, days_in_month, is_leap_year, weekday_index
from .models import CalendarConfig, MonthGrid, WeekRow, WeekStart

__all__ = ["build_grids", "build_month_grid", "days_in_month", "is_leap_year", "leading_blanks", "month_sequence"]


def leading_blanks(month: int, year: int, week_start: WeekStart) -> int:
    """Number of empty cells before day 1 in the first week row."""
    first = weekday_index(datetime.date(year, month, 1))  # 0=Sunday
    if week_start == WeekStart.monday:
        return (first + 6) % 7
    return first


def _iso_week(first: datetime.date, days_from_first: int, week_start: WeekStart) -> Optional[int]:
    # ISO weeks are keyed by their Thursday
    thursday_offset = 3 if week_start == WeekStart.monday else 4
    try:
        return (first + datetime.timedelta(days=days_from_first + thursday_offset)).isocalendar()[1]
    except OverflowError:
        # Rows running past year 1 or 9999 have no ISO week
        return None


def build_month_grid(month: int, year: int, week_start: WeekStart = WeekStart.monday,
                     show_week_numbers: bool = True) -> MonthGrid:
    """
    Lays out a month as rows of seven cells.

    Cells before day 1 and after the last day are None. When
    show_week_numbers is set each row carries its ISO-8601 week number.
    """
    blanks = leading_blanks(month, year, week_start)
    length = days_in_month(month, year)
    cells = [None] * blanks + list(range(1, length + 1))
    cells += [None] * (-len(cells) % 7)

    first = datetime.date(year, month, 1)
    weeks = []
    for row in range(len(cells) // 7):
        week_number = None
        if show_week_numbers:
            week_number = _iso_week(first, row * 7 - blanks, week_start)
        weeks.append(WeekRow(days=cells[row * 7:(row + 1) * 7], week_number=week_number))

    return MonthGrid(month=month, year=year, week_start=week_start, weeks=weeks)


def month_sequence(config: CalendarConfig) -> List[Tuple[int, int]]:
    """(month, year) pairs for every displayed month, in order."""
    return [
        add_months(config.start_month, config.start_year, offset)
        for offset in range(config.months_to_show)
    ]


def build_grids(config: CalendarConfig) -> List[MonthGrid]:
    return [
        build_month_grid(month, year, config.week_start, config.show_week_numbers)
        for month, year in month_sequence(config)
    ]
