from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from boroughs.application.dtos import ActionResult, Narration, StatTable, TurnReport
from boroughs.application.mappers.status_mapper import to_status_tables
from boroughs.application.services import (
    delivery_service,
    lifestyle_service,
    shop_service,
    social_service,
    wardrobe_service,
)
from boroughs.application.services.balance_tables import (
    EXHAUSTED_PENALTY,
    EXHAUSTED_THRESHOLD,
    HUNGER_DECAY_PER_TURN,
    NAKED_MORALE_PENALTY,
    NPC_MOVE_CHANCE,
    STARVING_PENALTY,
    STARVING_THRESHOLD,
    TRAINING_CHANGE,
    TRAINING_MIN_ENERGY,
    TRAINING_PLACES,
)
from boroughs.application.services.event_manager import EventManager
from boroughs.application.services.menu_resolvers import MENU_RESOLVERS
from boroughs.application.session import GameSession
from boroughs.domain.events import DiaryEntryWritten, TurnAdvanced
from boroughs.domain.models.intent import Intent, IntentKind


logger = logging.getLogger(__name__)

IntentClassifier = Callable[[str], Intent]
Handler = Callable[[Intent], ActionResult]

IDLE_SUGGESTIONS = ["look", "map", "go <place>", "talk", "wardrobe", "eat"]


class TurnEngine:
    """Routes player input through menus and intent handlers and runs the hourly turn."""

    def __init__(self, session: GameSession, classifier: Optional[IntentClassifier] = None) -> None:
        self.session = session
        self.classifier = classifier
        self.event_manager = EventManager(session.catalogs.events, session.rng)
        self._handlers: Dict[IntentKind, Handler] = {
            IntentKind.TRAIN: self._train,
            IntentKind.GO: self._go,
            IntentKind.WORK: lambda intent: delivery_service.start_shift(self.session),
            IntentKind.SOCIAL: lambda intent: social_service.smalltalk(self.session),
            IntentKind.PHONE: lambda intent: social_service.open_phone(self.session),
            IntentKind.SHOP_CLOTHES: self._shop,
            IntentKind.SHOP_FOOD: self._shop,
            IntentKind.SHOP_GADGETS: self._shop,
            IntentKind.BUY: lambda intent: shop_service.buy_by_text(self.session, intent.text),
            IntentKind.NPC_LIST: lambda intent: social_service.open_npc_list(self.session),
            IntentKind.TALK: self._social_target,
            IntentKind.FLIRT: self._social_target,
            IntentKind.BEFRIEND: self._social_target,
            IntentKind.PICKUP: lambda intent: delivery_service.pickup(self.session),
            IntentKind.DELIVER: lambda intent: delivery_service.deliver(self.session),
            IntentKind.WARDROBE: lambda intent: wardrobe_service.open_wardrobe(self.session),
            IntentKind.WEAR: lambda intent: wardrobe_service.wear_by_text(self.session, intent.text),
            IntentKind.REMOVE: lambda intent: wardrobe_service.remove_by_text(self.session, intent.text),
            IntentKind.COOK: lambda intent: lifestyle_service.cook(self.session),
            IntentKind.EAT: lambda intent: lifestyle_service.open_eat_menu(self.session),
            IntentKind.HAIR: lambda intent: lifestyle_service.open_hair_menu(self.session),
            IntentKind.MAP: self._map,
            IntentKind.LOOK: self._look,
            IntentKind.FREE: self._free,
            IntentKind.IDLE: self._idle,
        }

    def process(self, raw: str) -> TurnReport:
        """Handle one line of player input.

        An open menu captures the input first; otherwise the classifier turns it
        into an intent.
        """

        if self.session.menu is not None:
            return self.resolve_menu(raw)
        if self.classifier is None:
            raise RuntimeError("TurnEngine.process needs an intent classifier; use perform() with an Intent")
        return self.dispatch(self.classifier(raw))

    def perform(self, intent: Intent) -> TurnReport:
        """Handle an already classified intent; an open menu still gets it first."""

        if self.session.menu is not None:
            return self.resolve_menu(intent.text or intent.kind.value)
        return self.dispatch(intent)

    def resolve_menu(self, raw: str) -> TurnReport:
        menu = self.session.menu
        if menu is None:
            return self._report(Narration(system="There is no open menu."), turn_consumed=False)
        self.session.menu = None
        index = menu.select(raw)
        if index is None:
            logger.debug("Menu %s closed by invalid selection %r", menu.kind.value, raw)
            narration = Narration(system=f"Choose a number from 1 to {len(menu.options)}. The menu was closed.")
            return self._report(narration, turn_consumed=False)

        logger.debug("Menu %s option %s selected", menu.kind.value, index + 1)
        result = MENU_RESOLVERS[menu.kind](self.session, menu, index)
        if result.menu is not None:
            self.session.menu = result.menu
        return self._report(result.narration, turn_consumed=False)

    def dispatch(self, intent: Intent) -> TurnReport:
        handler = self._handlers.get(intent.kind, self._idle)
        logger.debug("Dispatching intent %s", intent.kind.value)
        result = handler(intent)
        if result.menu is not None:
            self.session.menu = result.menu
        events: List[Narration] = []
        if result.consumes_turn:
            events = self.end_turn()
        return self._report(result.narration, events=events, turn_consumed=result.consumes_turn)

    def end_turn(self) -> List[Narration]:
        session = self.session
        character = session.character
        world = session.world

        world.advance_time(1)
        self.apply_passive_decay()
        character.update_derived_stats()

        narrations: List[Narration] = []
        for event in self.event_manager.pick_events(world.active_district, world.time.hour):
            narrations.append(Narration(narrative=event.narrative or None, system=event.system))
            if event.change:
                character.apply_change(event.change)

        self.relocate_npcs()
        session.publish(TurnAdvanced(day=world.time.day, hour=world.time.hour))
        return narrations

    def apply_passive_decay(self) -> None:
        character = self.session.character
        character.apply_change({"hunger": -HUNGER_DECAY_PER_TURN})
        if character.hunger <= STARVING_THRESHOLD:
            character.apply_change(
                {
                    "health": {"hp": -STARVING_PENALTY},
                    "energy": -STARVING_PENALTY,
                    "morale": -STARVING_PENALTY,
                }
            )
        if character.energy <= EXHAUSTED_THRESHOLD:
            character.apply_change({"health": {"hp": -EXHAUSTED_PENALTY}, "morale": -EXHAUSTED_PENALTY})
        if character.is_naked():
            character.apply_change({"morale": -NAKED_MORALE_PENALTY})
        logger.debug(
            "Decay applied: hunger=%s energy=%s hp=%s morale=%s",
            character.hunger,
            character.energy,
            character.hp,
            character.morale,
        )

    def relocate_npcs(self) -> None:
        menu = self.session.menu
        pinned = set(menu.pinned_npc_ids) if menu is not None else set()
        for npc in self.session.npcs:
            if npc.id in pinned:
                continue
            if self.session.rng.roll(NPC_MOVE_CHANCE):
                self.session.relocate_randomly(npc)

    def status_tables(self) -> List[StatTable]:
        return to_status_tables(self.session.character, self.session.world)

    def _report(self, narration: Narration, *, events: List[Narration] | None = None, turn_consumed: bool) -> TurnReport:
        failures = self.session.event_bus.drain_failures()
        if failures:
            logger.warning("%d event subscriber(s) failed this turn", len(failures))
        return TurnReport(
            narration=narration,
            events=list(events or []),
            turn_consumed=turn_consumed,
            menu_open=self.session.menu is not None,
            clock_label=self.session.world.time.label,
            warnings=[failure.message for failure in failures],
        )

    def _train(self, intent: Intent) -> ActionResult:
        character = self.session.character
        place = self.session.world.active_place
        if place not in TRAINING_PLACES:
            return ActionResult.blocked(f"There is nowhere to train at the {place}. Try the gym or the park.")
        if character.energy <= TRAINING_MIN_ENERGY:
            return ActionResult.blocked("You are too exhausted to train.")
        character.apply_change(TRAINING_CHANGE)
        return ActionResult.done(
            "You push through a hard workout until your arms shake.",
            system=f"Strength {character.stats['strength']}, energy {character.energy}.",
        )

    def _go(self, intent: Intent) -> ActionResult:
        world = self.session.world
        district = intent.district
        if not district:
            return ActionResult.blocked(f"Where to? Districts: {', '.join(world.districts)}.")
        if district not in world.districts:
            return ActionResult.blocked(f"There is no district called {district}.")
        place = intent.place or world.default_place(district)
        if place is None or not world.has_place(district, place):
            return ActionResult.blocked(
                f"{district.capitalize()} has no {intent.place}. Places: {', '.join(world.places_in(district))}."
            )
        if world.location == (district, place):
            return ActionResult.blocked(f"You are already at the {place}.")
        world.move_to(district, place)
        here = self.session.npcs_here()
        system = f"People here: {', '.join(npc.name for npc in here)}." if here else None
        return ActionResult.done(f"You make your way to the {place} in {district}.", system=system)

    def _shop(self, intent: Intent) -> ActionResult:
        return shop_service.open_shop(self.session, intent.kind.value)

    def _social_target(self, intent: Intent) -> ActionResult:
        return social_service.open_target_menu(self.session, intent.kind.value)

    def _map(self, intent: Intent) -> ActionResult:
        world = self.session.world
        options = [f"{district}: {', '.join(places)}" for district, places in world.districts.items()]
        return ActionResult.info("You unfold a creased city map.", options=options)

    def _look(self, intent: Intent) -> ActionResult:
        world = self.session.world
        here = self.session.npcs_here()
        people = ", ".join(f"{npc.name} ({npc.role})" if npc.role else npc.name for npc in here)
        narrative = f"You are at the {world.active_place} in {world.active_district}. {world.time.label}."
        system = f"People here: {people}." if people else "Nobody you know is around."
        quest = self.session.delivery
        if quest is not None:
            target = quest.dropoff if quest.picked_up else quest.pickup
            system += f" Courier job: {quest.remaining} drop(s) left, head to the {target[1]} in {target[0]}."
        return ActionResult.info(narrative, system=system)

    def _free(self, intent: Intent) -> ActionResult:
        text = str(intent.text or "").strip()
        if not text:
            return self._idle(intent)
        clock = self.session.world.time
        self.session.publish(DiaryEntryWritten(text=text, day=clock.day, hour=clock.hour))
        return ActionResult.done(
            "The city does not answer, but you remember it.",
            system=f"Diary: {text}",
        )

    def _idle(self, intent: Intent) -> ActionResult:
        return ActionResult.done(
            "You let an hour slip by, weighing your options.",
            options=list(IDLE_SUGGESTIONS),
        )
