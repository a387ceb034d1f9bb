import datetime
from enum import Enum
from typing import Annotated, List, Optional, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .dates import add_months, days_in_month, max_day_of_month

Color = Literal["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]

Month = Annotated[int, Field(ge=1, le=12)]
Weekday = Annotated[int, Field(ge=0, le=6)]  # 0=Sunday
Year = Annotated[int, Field(ge=1, le=9999)]


class WeekStart(str, Enum):
    monday = "monday"
    sunday = "sunday"


class DisplayMode(str, Enum):
    calendar = "calendar"
    events = "events"
    both = "both"


class Style(BaseModel):
    model_config = ConfigDict(frozen=True)

    fg: Optional[Color] = None
    bg: Optional[Color] = None

    @property
    def is_plain(self) -> bool:
        return self.fg is None and self.bg is None


def _check_day(month: int, day: int, year: Optional[int] = None):
    limit = days_in_month(month, year) if year is not None else max_day_of_month(month)
    if not 1 <= day <= limit:
        raise ValueError(f"day {day} is out of range for month {month}")


class _Rule(BaseModel):
    model_config = ConfigDict(frozen=True)


class EasterOffset(_Rule):
    kind: Literal["easter"] = "easter"
    offset: int = 0


class NthWeekdayOfMonth(_Rule):
    kind: Literal["nth_weekday"] = "nth_weekday"
    month: Month
    weekday: Weekday
    occurrence: int = Field(ge=1, le=5)


class AnnualMonthDay(_Rule):
    kind: Literal["annual"] = "annual"
    month: Month
    day: int

    @model_validator(mode="after")
    def check_day(self):
        _check_day(self.month, self.day)
        return self


class FixedYearMonthDay(_Rule):
    kind: Literal["fixed_year"] = "fixed_year"
    month: Month
    day: int
    year: Year

    @model_validator(mode="after")
    def check_day(self):
        _check_day(self.month, self.day, self.year)
        return self


class WeekdayAdjusted(_Rule):
    kind: Literal["weekday_adjusted"] = "weekday_adjusted"
    month: Month
    day: int
    expected_weekday: Weekday
    shift_days: int

    @model_validator(mode="after")
    def check_day(self):
        _check_day(self.month, self.day)
        return self


class FullDate(_Rule):
    kind: Literal["full_date"] = "full_date"
    month: Month
    day: int
    year: Year

    @model_validator(mode="after")
    def check_day(self):
        _check_day(self.month, self.day, self.year)
        return self


EventRule = Annotated[
    Union[EasterOffset, NthWeekdayOfMonth, AnnualMonthDay, FixedYearMonthDay, WeekdayAdjusted, FullDate],
    Field(discriminator="kind"),
]


class ParsedRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_number: int
    raw: str
    rule: EventRule
    style: Style = Style()
    category: Optional[str] = None  # first slot of the [type, fg, bg] block
    description: str = ""


class ResolvedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime.date
    description: str
    style: Style = Style()
    category: Optional[str] = None
    original_year: Optional[int] = None  # only for birthdays/anniversaries


class CalendarConfig(BaseModel):
    """What to render. Built by the CLI from settings and options."""
    model_config = ConfigDict(frozen=True)

    months_to_show: Literal[1, 3, 6, 12] = 1
    columns: int = Field(3, ge=1)
    start_month: Month
    start_year: Year
    week_start: WeekStart = WeekStart.monday
    display_mode: DisplayMode = DisplayMode.both
    show_week_numbers: bool = True
    color: bool = True
    today: Optional[datetime.date] = None  # None disables today highlighting

    @model_validator(mode="after")
    def check_range(self):
        _, end_year = add_months(self.start_month, self.start_year, self.months_to_show - 1)
        if end_year > 9999:
            raise ValueError("displayed months run past year 9999")
        return self

    @property
    def end_month(self):
        """(month, year) of the last displayed month."""
        return add_months(self.start_month, self.start_year, self.months_to_show - 1)


class Settings(BaseModel):
    """Defaults read from the YAML settings file."""
    months_to_show: int = 1
    columns: int = 3
    week_start: WeekStart = WeekStart.monday
    display_mode: DisplayMode = DisplayMode.both
    show_week_numbers: bool = True
    color: bool = True
    events_file: str = "events.txt"


class WeekRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    days: List[Optional[int]] = Field(min_length=7, max_length=7)
    week_number: Optional[int] = None


class MonthGrid(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: Month
    year: Year
    week_start: WeekStart
    weeks: List[WeekRow]
