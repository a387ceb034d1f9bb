import datetime
from typing import List, Optional

from .constants import ANNIVERSARY_LABELS
from .dates import days_in_month, weekday_index
from .easter import easter_sunday
from .models import (
    AnnualMonthDay,
    CalendarConfig,
    EasterOffset,
    FixedYearMonthDay,
    FullDate,
    NthWeekdayOfMonth,
    ParsedRule,
    ResolvedEvent,
    WeekdayAdjusted,
)


def _date_or_none(year: int, month: int, day: int) -> Optional[datetime.date]:
    # Feb 29 only exists in leap years
    if day > days_in_month(month, year):
        return None
    return datetime.date(year, month, day)


def _shift(day: datetime.date, offset: int) -> Optional[datetime.date]:
    try:
        return day + datetime.timedelta(days=offset)
    except OverflowError:
        return None


def get_nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> Optional[datetime.date]:
    """
    Returns the date of the Nth occurrence of a weekday in a month.
    weekday: 0=Sun, 6=Sat
    n: 1 for 1st, 2 for 2nd, ... None when the month has fewer occurrences
    """
    days = [
        datetime.date(year, month, day)
        for day in range(1, days_in_month(month, year) + 1)
        if weekday_index(datetime.date(year, month, day)) == weekday
    ]
    if n <= len(days):
        return days[n - 1]
    return None


def resolve(rule, target_year: int) -> Optional[datetime.date]:
    """
    Resolves a rule to the date it falls on in target_year, if any.

    Raises EasterComputationDomainError for Easter rules before 1583.
    """
    if isinstance(rule, EasterOffset):
        month, day = easter_sunday(target_year)
        return _shift(datetime.date(target_year, month, day), rule.offset)

    if isinstance(rule, NthWeekdayOfMonth):
        return get_nth_weekday_of_month(target_year, rule.month, rule.weekday, rule.occurrence)

    if isinstance(rule, AnnualMonthDay):
        return _date_or_none(target_year, rule.month, rule.day)

    if isinstance(rule, (FixedYearMonthDay, FullDate)):
        if target_year != rule.year:
            return None
        return datetime.date(rule.year, rule.month, rule.day)

    if isinstance(rule, WeekdayAdjusted):
        literal = _date_or_none(target_year, rule.month, rule.day)
        if literal is None:
            return None
        if weekday_index(literal) == rule.expected_weekday:
            return _shift(literal, rule.shift_days)
        return literal

    raise TypeError(f"Unknown rule type: {type(rule).__name__}")


def is_anniversary(parsed: ParsedRule) -> bool:
    return isinstance(parsed.rule, FullDate) and parsed.category in ANNIVERSARY_LABELS


def resolve_parsed(parsed: ParsedRule, target_year: int) -> Optional[ResolvedEvent]:
    """Resolves a parsed line for one year, carrying its description and style."""
    original_year = None
    if is_anniversary(parsed):
        rule = parsed.rule
        if target_year < rule.year:
            return None
        when = _date_or_none(target_year, rule.month, rule.day)
        original_year = rule.year
    else:
        when = resolve(parsed.rule, target_year)

    if when is None:
        return None
    return ResolvedEvent(
        date=when,
        description=parsed.description,
        style=parsed.style,
        category=parsed.category,
        original_year=original_year,
    )


def displayed_years(config: CalendarConfig) -> List[int]:
    """Every year touched by the displayed month range."""
    _, end_year = config.end_month
    return list(range(config.start_year, end_year + 1))
