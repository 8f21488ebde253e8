"""Area-filtered random event selection."""

from __future__ import annotations

from collections.abc import Iterable

from dragonwatch.core.logging import get_logger
from dragonwatch.engine.random_source import RandomSource
from dragonwatch.models.cards import EventDefinition
from dragonwatch.models.enums import BattleArea


logger = get_logger(__name__)


class EventPool:
    """All random events, drawn uniformly among those eligible in an area."""

    def __init__(self, events: Iterable[EventDefinition], rng: RandomSource) -> None:
        """Initialize the pool.

        Args:
            events: Event definitions in catalog order.
            rng: Random source for draws.
        """
        self._events: tuple[EventDefinition, ...] = tuple(events)
        self._rng = rng

        if not self._events:
            logger.warning("No event definitions supplied")
        else:
            logger.info("EventPool initialized", events=len(self._events))

    @property
    def events(self) -> tuple[EventDefinition, ...]:
        return self._events

    def eligible_events(self, area: BattleArea) -> list[EventDefinition]:
        """Events that can occur in ``area``, in catalog order."""
        return [event for event in self._events if event.can_occur_in(area)]

    def draw_random_event(self, area: BattleArea) -> EventDefinition | None:
        """Pick one eligible event uniformly at random.

        Args:
            area: The current battle area.

        Returns:
            The event, or None if no event can occur in the area.
        """
        candidates = self.eligible_events(area)
        if not candidates:
            logger.warning("No event can occur in area", area=area.value)
            return None
        return self._rng.choice(candidates)


__all__ = ["EventPool"]
