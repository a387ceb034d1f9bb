import pytest

from ecal.models import CalendarConfig, DisplayMode


@pytest.fixture
def make_config():
    """Returns a factory for plain (uncoloured) configs with overridable fields."""

    def factory(**overrides):
        values = dict(
            months_to_show=1,
            columns=3,
            start_month=12,
            start_year=2027,
            display_mode=DisplayMode.both,
            show_week_numbers=False,
            color=False,
        )
        values.update(overrides)
        return CalendarConfig(**values)

    return factory


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("months_to_show: 1\ncolumns: 3\ncolor: false\nshow_week_numbers: false\n", encoding="utf-8")
    return path


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.txt"
    path.write_text(
        "# holidays\n"
        "12/25 ;[holiday, red] Christmas\n"
        "13/40 ; bogus\n"
        "\n"
        "12/31 New Year's Eve\n",
        encoding="utf-8",
    )
    return path
