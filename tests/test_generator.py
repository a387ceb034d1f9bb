import datetime

from ecal.generator import CalendarGenerator
from ecal.models import DisplayMode


def test_pipeline_skips_bad_lines(make_config):
    config = make_config(display_mode=DisplayMode.events)
    gen = CalendarGenerator(config, ["12/25 ; Christmas", "13/40 ; bogus", "12/31 ; Eve"])

    assert [e.line_number for e in gen.errors] == [2]
    assert len(gen.store) == 2
    assert gen.generate().splitlines()[2:] == [
        "Sat, 25 Dec 2027 - Christmas",
        "Fri, 31 Dec 2027 - Eve",
    ]


def test_output_is_reproducible(make_config):
    config = make_config(months_to_show=12, start_month=6, color=True, show_week_numbers=True,
                         today=datetime.date(2027, 12, 8))
    lines = ["E ;[, yellow] Easter", "05/1#1 ;[, white, blue] May Day", "12/25?6+2 ; Christmas (observed)"]

    first = CalendarGenerator(config, lines).generate()
    second = CalendarGenerator(config, list(lines)).generate()
    assert first == second
    assert "Mon, 27 Dec 2027 - Christmas (observed)" in first


def test_from_file(make_config, events_file):
    gen = CalendarGenerator.from_file(make_config(), events_file)
    assert len(gen.rules) == 2
    assert len(gen.errors) == 1
    assert "New Year's Eve" in gen.generate()


def test_from_missing_file(make_config, tmp_path, caplog):
    with caplog.at_level("INFO", logger="ecal.generator"):
        gen = CalendarGenerator.from_file(make_config(), tmp_path / "nope.txt")
    assert gen.rules == []
    assert "not found" in caplog.text
    assert "December 2027" in gen.generate()
