from __future__ import annotations

from typing import Any, List, Tuple

from boroughs.application.dtos import ActionResult
from boroughs.application.session import GameSession
from boroughs.domain.models.character import EquipOutcome
from boroughs.domain.models.item import EquipmentSlot, Item
from boroughs.domain.models.menu import MenuKind, MenuSession


NAKED_NOTE = "You are wearing nothing. People will notice."


def _with_naked_note(session: GameSession, text: str) -> str:
    return f"{text} {NAKED_NOTE}" if session.character.is_naked() else text


def open_wardrobe(session: GameSession) -> ActionResult:
    character = session.character
    entries: List[Tuple[str, Any]] = []
    options: List[str] = []
    for item in character.inventory.wearables():
        entries.append(("wear", item))
        options.append(f"Wear {item.name} ({item.slot.value})")
    for slot, item in character.equipment.occupied().items():
        entries.append(("remove", slot))
        options.append(f"Take off {item.name} ({slot.value})")
    if not entries:
        return ActionResult.blocked("Nothing to put on and nothing to take off.")
    menu = MenuSession(MenuKind.WARDROBE, options, {"entries": entries})
    return ActionResult.done("You open the wardrobe.", options=options, menu=menu)


def wear(session: GameSession, item: Item) -> ActionResult:
    outcome = session.character.wear_from_inventory(item)
    if outcome is EquipOutcome.NOT_WEARABLE:
        return ActionResult.blocked(f"{item.name} is not something you can wear.")
    if outcome is EquipOutcome.NOT_IN_INVENTORY:
        return ActionResult.blocked(f"{item.name} is not in your bag.")
    if outcome is EquipOutcome.INVENTORY_FULL:
        return ActionResult.blocked(f"No room in the bag for what you would take off to wear {item.name}.")
    character = session.character
    return ActionResult.done(
        f"You put on the {item.name}.",
        system=f"Attractiveness {character.attractiveness}, sexuality {character.sexuality}.",
    )


def take_off(session: GameSession, slot: EquipmentSlot) -> ActionResult:
    item = session.character.equipment.get(slot)
    outcome = session.character.take_off_to_inventory(slot)
    if outcome is EquipOutcome.SLOT_EMPTY:
        return ActionResult.blocked(f"Nothing is worn on {slot.value}.")
    if outcome is EquipOutcome.INVENTORY_FULL:
        return ActionResult.blocked(f"Your bag is too full to hold the {item.name}.")
    return ActionResult.done(
        f"You take off the {item.name}.",
        system=_with_naked_note(session, "It goes back in your bag."),
    )


def wear_by_text(session: GameSession, text: str | None) -> ActionResult:
    wanted = str(text or "").strip()
    if not wanted:
        return open_wardrobe(session)
    item = next((item for item in session.character.inventory.wearables() if item.matches(wanted)), None)
    if item is None:
        return ActionResult.blocked(f"You have no {wanted} to wear.")
    return wear(session, item)


def remove_by_text(session: GameSession, text: str | None) -> ActionResult:
    wanted = str(text or "").strip()
    if not wanted:
        return open_wardrobe(session)
    slot = session.character.equipment.find_matching(wanted)
    if slot is None:
        return ActionResult.blocked(f"You are not wearing any {wanted}.")
    return take_off(session, slot)
