from __future__ import annotations

from typing import Any, Dict, List, Mapping

from boroughs.application.services.event_bus import EventBus
from boroughs.application.session import GameSession
from boroughs.domain.errors import SaveCorruptedError
from boroughs.domain.models.catalog import Catalogs
from boroughs.domain.models.character import (
    DEFAULT_APPEARANCE,
    DEFAULT_REPUTATION,
    DEFAULT_SKILLS,
    DEFAULT_STATS,
    Character,
)
from boroughs.domain.models.delivery import DeliveryQuest
from boroughs.domain.models.inventory import DEFAULT_INVENTORY_LIMIT, Equipment, Inventory
from boroughs.domain.models.item import EquipmentSlot, Item
from boroughs.domain.models.npc import NPC
from boroughs.domain.models.world import World, WorldClock
from boroughs.domain.services.random_source import RandomSource


SAVE_FORMAT_VERSION = 1


def character_to_dict(character: Character, delivery: DeliveryQuest | None = None) -> Dict[str, Any]:
    return {
        "name": character.name,
        "gender": character.gender,
        "age": character.age,
        "job": character.job,
        "traits": list(character.traits),
        "background": character.background,
        "stats": dict(character.stats),
        "skills": dict(character.skills),
        "appearance": dict(character.appearance),
        "health": dict(character.health),
        "energy": character.energy,
        "morale": character.morale,
        "hunger": character.hunger,
        "leisure": character.leisure,
        "popularity": character.popularity,
        "money": character.money,
        "reputation": dict(character.reputation),
        "contacts": list(character.contacts),
        "property": dict(character.residence),
        "flags": dict(character.flags),
        "inventory": {
            "limit": character.inventory.limit,
            "items": [item.to_dict() for item in character.inventory],
        },
        "equipment": {slot.value: item.to_dict() for slot, item in character.equipment.occupied().items()},
        "worn_morale": {slot.value: applied for slot, applied in character.worn_morale.items()},
        "quest": delivery.to_dict() if delivery is not None else None,
    }


def character_from_dict(data: Mapping[str, Any], *, inventory_limit: int = DEFAULT_INVENTORY_LIMIT) -> Character:
    """Rebuild a character; any absent field falls back to its default."""

    raw_inventory = data.get("inventory") or {}
    inventory = Inventory(limit=int(raw_inventory.get("limit", inventory_limit) or inventory_limit))
    inventory.items = [Item.from_dict(row) for row in raw_inventory.get("items") or []]

    # worn items are restored as-is; their morale effect is already in the saved morale
    equipment = Equipment()
    worn_morale: Dict[EquipmentSlot, int] = {}
    for slot_name, row in dict(data.get("equipment") or {}).items():
        slot = EquipmentSlot.parse(slot_name)
        item = Item.from_dict(row)
        if slot is not None and item.slot is slot:
            equipment.set(slot, item)
    for slot_name, applied in dict(data.get("worn_morale") or {}).items():
        slot = EquipmentSlot.parse(slot_name)
        if slot is not None and equipment.get(slot) is not None:
            worn_morale[slot] = int(applied)

    return Character(
        name=str(data.get("name", "Stranger") or "Stranger"),
        gender=str(data.get("gender", "unspecified") or "unspecified"),
        age=int(data.get("age", 18) or 18),
        job=str(data.get("job", "") or ""),
        traits=[str(trait) for trait in data.get("traits") or []],
        background=str(data.get("background", "") or ""),
        stats={**DEFAULT_STATS, **dict(data.get("stats") or {})},
        skills={**DEFAULT_SKILLS, **dict(data.get("skills") or {})},
        appearance={**DEFAULT_APPEARANCE, **dict(data.get("appearance") or {})},
        health={"hp": 100, **dict(data.get("health") or {})},
        energy=int(data.get("energy", 80)),
        morale=int(data.get("morale", 10)),
        hunger=int(data.get("hunger", 70)),
        leisure=int(data.get("leisure", 50)),
        popularity=int(data.get("popularity", 0)),
        money=int(data.get("money", 100)),
        reputation={**DEFAULT_REPUTATION, **dict(data.get("reputation") or {})},
        contacts=[str(npc_id) for npc_id in data.get("contacts") or []],
        inventory=inventory,
        equipment=equipment,
        worn_morale=worn_morale,
        residence=dict(data.get("property") or {"address": "Not set", "size": "room", "furniture": []}),
        flags=dict(data.get("flags") or {}),
    )


def world_to_dict(world: World) -> Dict[str, Any]:
    return {
        "districts": {name: list(places) for name, places in world.districts.items()},
        "active_district": world.active_district,
        "active_place": world.active_place,
        "time": {"day": world.time.day, "hour": world.time.hour},
    }


def world_from_dict(data: Mapping[str, Any]) -> World:
    clock = dict(data.get("time") or {})
    kwargs: Dict[str, Any] = {
        "active_district": str(data.get("active_district", "downtown") or "downtown"),
        "active_place": str(data.get("active_place", "") or ""),
        "time": WorldClock(day=int(clock.get("day", 1)), hour=int(clock.get("hour", 8)) % 24),
    }
    districts = data.get("districts")
    if isinstance(districts, Mapping) and districts:
        kwargs["districts"] = {str(name): [str(place) for place in places] for name, places in districts.items()}
    return World(**kwargs)


def npc_state_to_dict(npc: NPC) -> Dict[str, Any]:
    return {"id": npc.id, "relationship": npc.relationship, "district": npc.district, "place": npc.place}


def session_to_payload(session: GameSession) -> Dict[str, Any]:
    return {
        "version": SAVE_FORMAT_VERSION,
        "character": character_to_dict(session.character, session.delivery),
        "world": world_to_dict(session.world),
        "npcs": [npc_state_to_dict(npc) for npc in session.npcs],
        "journal": session.journal.entries(),
    }


def _restore_npcs(roster: List[Dict[str, Any]], saved: List[Mapping[str, Any]]) -> List[NPC]:
    npcs = [NPC.from_roster(row) for row in roster if row.get("id")]
    by_id = {npc.id: npc for npc in npcs}
    for row in saved:
        npc = by_id.get(str(row.get("id", "")))
        if npc is None:
            continue
        npc.relationship = int(row.get("relationship", npc.relationship) or 0)
        npc.district = str(row.get("district", npc.district) or npc.district)
        npc.place = str(row.get("place", npc.place) or npc.place)
        npc.adjust_relationship(0)
    return npcs


def session_from_payload(
    payload: Mapping[str, Any],
    *,
    catalogs: Catalogs,
    rng: RandomSource,
    event_bus: EventBus | None = None,
    inventory_limit: int = DEFAULT_INVENTORY_LIMIT,
) -> GameSession:
    character_data = payload.get("character") if isinstance(payload, Mapping) else None
    world_data = payload.get("world") if isinstance(payload, Mapping) else None
    if not isinstance(character_data, Mapping) or not isinstance(world_data, Mapping):
        raise SaveCorruptedError("Save is missing its character or world section")

    try:
        character = character_from_dict(character_data, inventory_limit=inventory_limit)
        world = world_from_dict(world_data)
        npcs = _restore_npcs(catalogs.npcs, [row for row in payload.get("npcs") or [] if isinstance(row, Mapping)])
    except (TypeError, ValueError, AttributeError) as exc:
        raise SaveCorruptedError(f"Save could not be decoded: {exc}") from exc

    session = GameSession(
        character=character,
        world=world,
        rng=rng,
        npcs=npcs,
        catalogs=catalogs,
        event_bus=event_bus or EventBus(),
        delivery=DeliveryQuest.from_dict(character_data.get("quest")),
    )
    session.journal.restore(list(payload.get("journal") or []))
    return session
