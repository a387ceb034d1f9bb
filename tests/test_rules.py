import logging

import pytest

from ecal.errors import InvalidRuleSyntax
from ecal.models import (
    AnnualMonthDay,
    EasterOffset,
    FixedYearMonthDay,
    FullDate,
    NthWeekdayOfMonth,
    Style,
    WeekdayAdjusted,
)
from ecal.rules import parse_line, parse_lines, parse_rule_token


@pytest.mark.parametrize("token, expected", [
    ("E", EasterOffset(offset=0)),
    ("E+1", EasterOffset(offset=1)),
    ("E-2", EasterOffset(offset=-2)),
    ("05/1#1", NthWeekdayOfMonth(month=5, weekday=1, occurrence=1)),
    ("11/4#4", NthWeekdayOfMonth(month=11, weekday=4, occurrence=4)),
    ("12/25/2027", FullDate(month=12, day=25, year=2027)),
    ("25-12-2027", FullDate(month=12, day=25, year=2027)),
    ("2027-12-25", FullDate(month=12, day=25, year=2027)),
    ("07/04?2027", FixedYearMonthDay(month=7, day=4, year=2027)),
    ("12/25?6+2", WeekdayAdjusted(month=12, day=25, expected_weekday=6, shift_days=2)),
    ("12/26?0-1", WeekdayAdjusted(month=12, day=26, expected_weekday=0, shift_days=-1)),
    ("12/25", AnnualMonthDay(month=12, day=25)),
    ("12/25?", AnnualMonthDay(month=12, day=25)),
    ("2/29", AnnualMonthDay(month=2, day=29)),
])
def test_rule_tokens(token, expected):
    assert parse_rule_token(token) == expected


def test_unknown_token():
    assert parse_rule_token("Christmas") is None
    assert parse_rule_token("12.25") is None


def test_full_line_with_style():
    parsed = parse_line("E+1 ;[holiday, Red, blue]  Easter Monday ", 7)
    assert parsed.line_number == 7
    assert parsed.rule == EasterOffset(offset=1)
    assert parsed.style == Style(fg="red", bg="blue")
    assert parsed.category == "holiday"
    assert parsed.description == "Easter Monday"


def test_missing_style_elements_mean_no_color():
    parsed = parse_line("02/14 ;[, magenta] Valentine's Day", 1)
    assert parsed.style == Style(fg="magenta")
    assert parsed.category is None

    parsed = parse_line("02/14 ;[] Valentine's Day", 1)
    assert parsed.style.is_plain


def test_extra_style_elements_are_ignored():
    parsed = parse_line("11/29/1968 ;[bday, cyan, , cake] Nathan", 1)
    assert parsed.category == "bday"
    assert parsed.style == Style(fg="cyan")
    assert parsed.description == "Nathan"


def test_unterminated_style_block_is_description():
    parsed = parse_line("12/25 ; [x, red Christmas", 1)
    assert parsed.style.is_plain
    assert parsed.description == "[x, red Christmas"


def test_line_without_semicolon():
    parsed = parse_line("12/25   Christmas Day", 3)
    assert parsed.rule == AnnualMonthDay(month=12, day=25)
    assert parsed.description == "Christmas Day"
    assert parsed.style.is_plain

    assert parse_line("E", 4).description == ""


def test_escaped_semicolon():
    parsed = parse_line(r"12/31 ; Rock \; Roll", 1)
    assert parsed.description == "Rock ; Roll"


@pytest.mark.parametrize("text", ["", "   ", "# comment", "   # 12/25 ; indented comment"])
def test_blank_and_comment_lines(text):
    assert parse_line(text, 1) is None


@pytest.mark.parametrize("text", [
    "13/40 ; bogus",
    "00/10 ; month zero",
    "02/30 ; no such day",
    "04/31 ; no such day",
    "02/29/2023 ; not a leap year",
    "05/7#1 ; weekday out of range",
    "05/1#6 ; occurrence out of range",
    "05/1#0 ; occurrence out of range",
    "12/25?9+1 ; weekday out of range",
    "12/25 ;[x, purple] unknown color",
    "Christmas ; not a rule",
])
def test_invalid_lines(text):
    with pytest.raises(InvalidRuleSyntax) as excinfo:
        parse_line(text, 12)
    assert excinfo.value.line_number == 12
    assert excinfo.value.text == text


def test_parse_lines_skips_bad_lines(caplog):
    lines = [
        "12/25 ; Christmas",
        "13/40 ; bogus",
        "",
        "# comment",
        "E ; Easter",
    ]
    with caplog.at_level(logging.WARNING, logger="ecal.rules"):
        rules, errors = parse_lines(lines)

    assert [r.line_number for r in rules] == [1, 5]
    assert [e.line_number for e in errors] == [2]
    assert "line 2" in caplog.text


def test_parse_lines_is_restartable():
    lines = ["12/25 ; Christmas", "bogus"]
    first = parse_lines(lines)
    second = parse_lines(lines)
    assert first[0] == second[0]
    assert len(first[1]) == len(second[1]) == 1
