from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from boroughs.application.services.event_bus import EventBus, HandlerFailure
from boroughs.application.services.journal_service import JournalService
from boroughs.domain.events import GameEvent
from boroughs.domain.models.catalog import Catalogs
from boroughs.domain.models.character import Character
from boroughs.domain.models.delivery import DeliveryQuest
from boroughs.domain.models.menu import MenuSession
from boroughs.domain.models.npc import NPC
from boroughs.domain.models.world import World
from boroughs.domain.services.random_source import RandomSource


@dataclass
class GameSession:
    """Everything one playthrough owns. Handlers receive it explicitly."""

    character: Character
    world: World
    rng: RandomSource
    npcs: List[NPC] = field(default_factory=list)
    catalogs: Catalogs = field(default_factory=Catalogs)
    event_bus: EventBus = field(default_factory=EventBus)
    menu: Optional[MenuSession] = None
    delivery: Optional[DeliveryQuest] = None
    journal: JournalService = field(init=False)

    def __post_init__(self) -> None:
        self.journal = JournalService(self.event_bus)
        self.journal.register_handlers()
        for npc in self.npcs:
            if not self.world.has_place(npc.district, npc.place):
                self.relocate_randomly(npc)

    @classmethod
    def from_roster(
        cls,
        character: Character,
        world: World,
        rng: RandomSource,
        catalogs: Catalogs,
        event_bus: EventBus | None = None,
    ) -> "GameSession":
        npcs = [NPC.from_roster(row) for row in catalogs.npcs if row.get("id")]
        return cls(
            character=character,
            world=world,
            rng=rng,
            npcs=npcs,
            catalogs=catalogs,
            event_bus=event_bus or EventBus(),
        )

    def relocate_randomly(self, npc: NPC) -> None:
        districts = [name for name, places in self.world.districts.items() if places]
        if not districts:
            return
        district = self.rng.pick(districts)
        npc.district = district
        npc.place = self.rng.pick(self.world.districts[district])

    def npcs_here(self) -> List[NPC]:
        district, place = self.world.location
        return [npc for npc in self.npcs if npc.is_at(district, place)]

    def find_npc(self, npc_id: str) -> Optional[NPC]:
        return next((npc for npc in self.npcs if npc.id == npc_id), None)

    def publish(self, event: GameEvent) -> List[HandlerFailure]:
        return self.event_bus.publish(event)
