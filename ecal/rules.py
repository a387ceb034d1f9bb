"""
Event file line parser.

A line looks like::

    DateRule ;[type, fg, bg] Description

and the date rule is one of E, E+N, E-N, MM/DOW#N, MM/DD/YYYY,
DD-MM-YYYY, YYYY-MM-DD, MM/DD?YYYY, MM/DD?D[+-]N, MM/DD? or MM/DD.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError

from .constants import COMMENT_MARKER
from .errors import InvalidRuleSyntax
from .models import (
    AnnualMonthDay,
    EasterOffset,
    FixedYearMonthDay,
    FullDate,
    NthWeekdayOfMonth,
    ParsedRule,
    Style,
    WeekdayAdjusted,
)

logger = logging.getLogger(__name__)

_SEMICOLON = re.compile(r"(?<!\\);")


def _easter(m):
    offset = m.group(1)
    return EasterOffset(offset=int(offset.replace(" ", "")) if offset else 0)


def _nth_weekday(m):
    month, weekday, occurrence = map(int, m.groups())
    return NthWeekdayOfMonth(month=month, weekday=weekday, occurrence=occurrence)


def _full_us(m):
    month, day, year = map(int, m.groups())
    return FullDate(month=month, day=day, year=year)


def _full_eu(m):
    day, month, year = map(int, m.groups())
    return FullDate(month=month, day=day, year=year)


def _full_iso(m):
    year, month, day = map(int, m.groups())
    return FullDate(month=month, day=day, year=year)


def _fixed_year(m):
    month, day, year = map(int, m.groups())
    return FixedYearMonthDay(month=month, day=day, year=year)


def _weekday_adjusted(m):
    month, day, weekday = int(m.group(1)), int(m.group(2)), int(m.group(3))
    shift = int(m.group(5))
    if m.group(4) == "-":
        shift = -shift
    return WeekdayAdjusted(month=month, day=day, expected_weekday=weekday, shift_days=shift)


def _annual(m):
    month, day = map(int, m.groups())
    return AnnualMonthDay(month=month, day=day)


# Tried in order, first match wins
RULE_PATTERNS = (
    (re.compile(r"^E(?:\s*([+-]\s*\d+))?$"), _easter),
    (re.compile(r"^(\d{1,2})/(\d)#(\d)$"), _nth_weekday),
    (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), _full_us),
    (re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$"), _full_eu),
    (re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$"), _full_iso),
    (re.compile(r"^(\d{1,2})/(\d{1,2})\?(\d{4})$"), _fixed_year),
    (re.compile(r"^(\d{1,2})/(\d{1,2})\?(\d)([+-])(\d+)$"), _weekday_adjusted),
    (re.compile(r"^(\d{1,2})/(\d{1,2})\??$"), _annual),
)


def parse_rule_token(token: str):
    """Turns a date rule token into an EventRule, or None if no pattern matches."""
    for pattern, build in RULE_PATTERNS:
        match = pattern.match(token)
        if match:
            return build(match)
    return None


def _parse_style(rest: str) -> Tuple[Optional[str], Style, str]:
    """Splits '[type, fg, bg] Description' into (category, style, description)."""
    if not rest.startswith("["):
        return None, Style(), rest
    end = rest.find("]")
    if end == -1:
        return None, Style(), rest

    parts = [p.strip() for p in rest[1:end].split(",")]
    parts += [""] * (3 - len(parts))
    category, fg, bg = parts[:3]
    style = Style(fg=fg.lower() or None, bg=bg.lower() or None)
    return category or None, style, rest[end + 1:].strip()


def _reason(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    message = first["msg"].removeprefix("Value error, ")
    return f"{field}: {message}" if field else message


def parse_line(text: str, line_number: int) -> Optional[ParsedRule]:
    """
    Parses one event file line.

    Returns None for blank and comment lines. Raises InvalidRuleSyntax
    when the date rule or the style block cannot be understood.
    """
    line = text.strip()
    if not line or line.startswith(COMMENT_MARKER):
        return None

    parts = _SEMICOLON.split(line, maxsplit=1)
    has_meta = len(parts) == 2
    if has_meta:
        token, rest = parts[0].strip(), parts[1].strip()
    else:
        # No ';': the rule is the first word, the rest is the description
        words = line.split(None, 1)
        token, rest = words[0], words[1].strip() if len(words) > 1 else ""

    try:
        rule = parse_rule_token(token)
        if rule is None:
            raise InvalidRuleSyntax(line_number, text, f"unrecognised date rule {token!r}")
        if has_meta:
            category, style, description = _parse_style(rest)
        else:
            category, style, description = None, Style(), rest
    except ValidationError as e:
        raise InvalidRuleSyntax(line_number, text, _reason(e)) from e

    return ParsedRule(
        line_number=line_number,
        raw=text,
        rule=rule,
        style=style,
        category=category,
        description=description.replace(r"\;", ";"),
    )


def parse_lines(lines: Iterable[str]) -> Tuple[List[ParsedRule], List[InvalidRuleSyntax]]:
    """Parses every line, collecting bad lines instead of stopping at them."""
    rules = []
    errors = []
    for line_number, text in enumerate(lines, start=1):
        try:
            parsed = parse_line(text.rstrip("\r\n"), line_number)
        except InvalidRuleSyntax as e:
            logger.warning("Skipping invalid rule on line %d (%s): %s", e.line_number, e.reason, e.text)
            errors.append(e)
            continue
        if parsed is not None:
            rules.append(parsed)
    return rules, errors
