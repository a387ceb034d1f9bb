import datetime
import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import EasterComputationDomainError
from .models import ParsedRule, ResolvedEvent, Style
from .resolver import resolve_parsed

logger = logging.getLogger(__name__)


class EventStore:
    """
    Resolved events keyed by date.

    Events on the same date keep the order of their lines in the event
    file. The store is filled by build() and is read-only afterwards.
    """

    def __init__(self):
        self._events: Dict[datetime.date, List[ResolvedEvent]] = {}
        self._frozen = False
        self.errors: List[EasterComputationDomainError] = []

    @classmethod
    def build(cls, rules: Iterable[ParsedRule], years: Iterable[int]) -> "EventStore":
        store = cls()
        years = list(years)
        for parsed in rules:
            for year in years:
                try:
                    event = resolve_parsed(parsed, year)
                except EasterComputationDomainError as e:
                    logger.warning("Line %d: %s; skipping %d", parsed.line_number, e, year)
                    store.errors.append(e)
                    continue
                if event is not None:
                    store.add(event)
        store._frozen = True
        logger.debug("Event store built with %d events over %s", len(store), years)
        return store

    def add(self, event: ResolvedEvent):
        if self._frozen:
            raise TypeError("EventStore is read-only once built")
        self._events.setdefault(event.date, []).append(event)

    def events_on(self, day: datetime.date) -> List[ResolvedEvent]:
        return list(self._events.get(day, ()))

    def style_for(self, day: datetime.date) -> Optional[Style]:
        """Style of the first event on a date, None when the date has no events."""
        events = self._events.get(day)
        if not events:
            return None
        return events[0].style

    def between(self, first: datetime.date, last: datetime.date) -> Iterator[ResolvedEvent]:
        """Events dated first..last inclusive, ordered by date then file order."""
        for day in sorted(self._events):
            if first <= day <= last:
                yield from self._events[day]

    def dates(self) -> List[datetime.date]:
        return sorted(self._events)

    def __contains__(self, day) -> bool:
        return day in self._events

    def __len__(self) -> int:
        return sum(len(events) for events in self._events.values())
