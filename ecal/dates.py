import datetime

from .constants import DAYS_IN_MONTH


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(month: int, year: int) -> int:
    """Returns the number of days in a month, February following the Gregorian leap rule."""
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month - 1]


def max_day_of_month(month: int) -> int:
    """Largest day a month can ever have (29 for February)."""
    return 29 if month == 2 else DAYS_IN_MONTH[month - 1]


def weekday_index(day: datetime.date) -> int:
    """Weekday of a date numbered 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


def add_months(month: int, year: int, offset: int):
    """Moves (month, year) forward by offset months, wrapping the year."""
    total = year * 12 + (month - 1) + offset
    return total % 12 + 1, total // 12
