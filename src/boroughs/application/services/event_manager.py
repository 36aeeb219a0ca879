from __future__ import annotations

import logging
from typing import List, Sequence

from boroughs.application.services.balance_tables import EVENT_COUNT_WEIGHTS
from boroughs.domain.models.catalog import EventDefinition
from boroughs.domain.services.random_source import RandomSource


logger = logging.getLogger(__name__)


class EventManager:
    def __init__(self, events: Sequence[EventDefinition], rng: RandomSource) -> None:
        self.events = list(events)
        self.rng = rng

    def candidates(self, district: str, hour: int) -> List[EventDefinition]:
        return [event for event in self.events if event.matches(district, hour)]

    def pick_events(self, district: str, hour: int) -> List[EventDefinition]:
        """Draw one event, or two with half that probability, without replacement."""

        possible = self.candidates(district, hour)
        if not possible:
            return []
        amount = self.rng.pick(EVENT_COUNT_WEIGHTS)
        chosen = self.rng.shuffled(possible)[:amount]
        logger.debug("Ambient events for %s at %02d:00: %s", district, hour, [event.id for event in chosen])
        return chosen
