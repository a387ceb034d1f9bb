import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .grid import build_grids
from .layout import compose_page
from .models import CalendarConfig
from .renderer import TextRenderer
from .resolver import displayed_years
from .rules import parse_lines
from .store import EventStore
from .utils import read_event_lines

logger = logging.getLogger(__name__)


class CalendarGenerator:
    """Runs the whole pipeline: event lines -> rules -> event store -> page text."""

    def __init__(self, config: CalendarConfig, lines: Sequence[str] = ()):
        self.config = config
        self.rules, self.errors = parse_lines(lines)
        self.store = EventStore.build(self.rules, displayed_years(config))
        self.renderer = TextRenderer()

    @classmethod
    def from_file(cls, config: CalendarConfig, events_path: Optional[Path]) -> "CalendarGenerator":
        lines: List[str] = []
        if events_path is not None:
            try:
                lines = read_event_lines(events_path)
            except FileNotFoundError:
                logger.info("Event file '%s' not found. Continuing without events.", events_path)
        return cls(config, lines)

    def generate(self) -> str:
        logger.debug(
            "Rendering %d month(s) from %02d/%d with %d rule(s), %d invalid line(s)",
            self.config.months_to_show, self.config.start_month, self.config.start_year,
            len(self.rules), len(self.errors),
        )
        grids = build_grids(self.config)
        return compose_page(grids, self.config, self.store, self.renderer)
