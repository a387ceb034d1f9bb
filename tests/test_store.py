import datetime

import pytest

from ecal.models import ResolvedEvent
from ecal.rules import parse_lines
from ecal.store import EventStore


def _store(lines, years):
    rules, _ = parse_lines(lines)
    return EventStore.build(rules, years)


def test_duplicate_dates_keep_file_order():
    store = _store([
        "12/25 ;[, red] Christmas",
        "12/25 ;[, blue] Presents",
        "12/24 Eve",
    ], [2027])

    christmas = datetime.date(2027, 12, 25)
    assert [e.description for e in store.events_on(christmas)] == ["Christmas", "Presents"]
    assert store.style_for(christmas).fg == "red"
    assert store.style_for(datetime.date(2027, 12, 1)) is None
    assert len(store) == 3


def test_annual_rule_in_every_displayed_year():
    store = _store(["12/25 Christmas"], [2026, 2027])
    assert store.dates() == [datetime.date(2026, 12, 25), datetime.date(2027, 12, 25)]


def test_invalid_line_absent_from_store():
    store = _store(["13/40 ; bogus", "12/25 ; Christmas"], [2027])
    assert len(store) == 1
    assert datetime.date(2027, 12, 25) in store


def test_easter_domain_error_skips_only_that_year():
    store = _store(["E ; Easter", "12/25 ; Christmas"], [1582, 1583])
    assert len(store.errors) == 1
    assert store.errors[0].year == 1582
    assert datetime.date(1583, 4, 10) in store
    assert datetime.date(1582, 12, 25) in store


def test_between_is_inclusive_and_ordered():
    store = _store(["12/31 ; Last", "12/01 ; First", "01/01 ; New year"], [2027, 2028])
    events = list(store.between(datetime.date(2027, 12, 1), datetime.date(2027, 12, 31)))
    assert [e.description for e in events] == ["First", "Last"]


def test_store_is_read_only_after_build():
    store = _store(["12/25 ; Christmas"], [2027])
    with pytest.raises(TypeError):
        store.add(ResolvedEvent(date=datetime.date(2027, 1, 1), description="late"))
