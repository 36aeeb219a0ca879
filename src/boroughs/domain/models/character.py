from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from boroughs.domain.models.inventory import Equipment, Inventory
from boroughs.domain.models.item import EquipmentSlot, Item
from boroughs.domain.services.random_source import clamp


STAT_NAMES = ("strength", "agility", "flexibility", "charisma", "intellect")
SKILL_NAMES = ("dance", "persuasion", "streetwise", "combat", "cooking")
APPEARANCE_FIELDS = ("height", "weight", "hips", "waist", "chest", "glutes", "face")

STAT_RANGE = (1, 20)
SKILL_RANGE = (0, 10)
HEALTH_RANGE = (1, 100)
ENERGY_RANGE = (1, 100)
NEED_RANGE = (0, 100)
MORALE_RANGE = (-100, 100)

DEFAULT_STATS: Dict[str, int] = {name: 10 for name in STAT_NAMES}
DEFAULT_SKILLS: Dict[str, int] = {name: 1 for name in SKILL_NAMES}
DEFAULT_APPEARANCE: Dict[str, int] = {
    "height": 170,
    "weight": 65,
    "hips": 5,
    "waist": 5,
    "chest": 5,
    "glutes": 5,
    "face": 6,
}
DEFAULT_REPUTATION: Dict[str, int] = {"police": 0, "underworld": 0, "syndicate": 0}

_NEED_FIELDS = ("hunger", "leisure", "popularity")


def stat_check_chance(stat_value: int, base_chance: int) -> int:
    return clamp(int(base_chance) + (int(stat_value) - 10) * 3, 10, 90)


@dataclass(frozen=True)
class DerivedStatTuning:
    """Weights behind attractiveness and sexuality."""

    face_weight: int = 4
    waist_weight: int = 2
    charisma_weight: int = 2
    nudity_bonus_by_gender: Mapping[str, int] = field(
        default_factory=lambda: {"female": 25, "male": 15}
    )
    default_nudity_bonus: int = 20

    def nudity_bonus(self, gender: str) -> int:
        key = str(gender or "").strip().lower()
        return int(self.nudity_bonus_by_gender.get(key, self.default_nudity_bonus))


DEFAULT_TUNING = DerivedStatTuning()


class EquipOutcome(str, Enum):
    EQUIPPED = "equipped"
    UNEQUIPPED = "unequipped"
    NOT_IN_INVENTORY = "not_in_inventory"
    NOT_WEARABLE = "not_wearable"
    SLOT_EMPTY = "slot_empty"
    INVENTORY_FULL = "inventory_full"


@dataclass
class Character:
    name: str
    gender: str = "unspecified"
    age: int = 18
    job: str = ""
    traits: List[str] = field(default_factory=list)
    background: str = ""
    stats: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_STATS))
    skills: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_SKILLS))
    appearance: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_APPEARANCE))
    health: Dict[str, int] = field(default_factory=lambda: {"hp": 100})
    energy: int = 80
    morale: int = 10
    hunger: int = 70
    leisure: int = 50
    popularity: int = 0
    money: int = 100
    reputation: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_REPUTATION))
    contacts: List[str] = field(default_factory=list)
    inventory: Inventory = field(default_factory=Inventory)
    equipment: Equipment = field(default_factory=Equipment)
    residence: Dict[str, Any] = field(
        default_factory=lambda: {"address": "Not set", "size": "room", "furniture": []}
    )
    flags: Dict[str, Any] = field(default_factory=dict)
    tuning: DerivedStatTuning = field(default=DEFAULT_TUNING, repr=False)
    attractiveness: int = field(default=0, init=False)
    sexuality: int = field(default=0, init=False)
    worn_morale: Dict[EquipmentSlot, int] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        for name in STAT_NAMES:
            self.stats[name] = clamp(int(self.stats.get(name, DEFAULT_STATS[name])), *STAT_RANGE)
        for name in SKILL_NAMES:
            self.skills[name] = clamp(int(self.skills.get(name, 0)), *SKILL_RANGE)
        self.health["hp"] = clamp(int(self.health.get("hp", HEALTH_RANGE[1])), *HEALTH_RANGE)
        self.energy = clamp(int(self.energy), *ENERGY_RANGE)
        self.morale = clamp(int(self.morale), *MORALE_RANGE)
        for name in _NEED_FIELDS:
            setattr(self, name, clamp(int(getattr(self, name)), *NEED_RANGE))
        self.money = max(0, int(self.money))
        # items handed in already worn are assumed to have their full morale applied
        for slot, item in self.equipment.occupied().items():
            self.worn_morale.setdefault(slot, int(item.effects.morale))
        self.update_derived_stats()

    @property
    def hp(self) -> int:
        return self.health["hp"]

    def apply_change(self, change: Mapping[str, Any] | None) -> None:
        """Add deltas to bounded fields, clamping each one right after the addition."""

        if not change:
            return
        for key, value in dict(change.get("stats") or {}).items():
            if key in self.stats:
                self.stats[key] = clamp(self.stats[key] + int(value), *STAT_RANGE)
        for key, value in dict(change.get("skills") or {}).items():
            if key in self.skills:
                self.skills[key] = clamp(self.skills[key] + int(value), *SKILL_RANGE)
        for key, value in dict(change.get("health") or {}).items():
            if key in self.health:
                self.health[key] = clamp(self.health[key] + int(value), *HEALTH_RANGE)
        if change.get("energy") is not None:
            self.energy = clamp(self.energy + int(change["energy"]), *ENERGY_RANGE)
        if change.get("morale") is not None:
            self.morale = clamp(self.morale + int(change["morale"]), *MORALE_RANGE)
        for name in _NEED_FIELDS:
            if change.get(name) is not None:
                setattr(self, name, clamp(getattr(self, name) + int(change[name]), *NEED_RANGE))
        if change.get("money") is not None:
            self.money = max(0, self.money + int(change["money"]))
        self.update_derived_stats()

    def effective_stat(self, stat: str) -> int:
        bonus = sum(int(item.effects.stats.get(stat, 0)) for item in self.equipment.items())
        return clamp(int(self.stats.get(stat, 10)) + bonus, *STAT_RANGE)

    def stat_check(self, stat: str, base_chance: int) -> int:
        return stat_check_chance(self.effective_stat(stat), base_chance)

    def is_naked(self) -> bool:
        return self.equipment.is_naked()

    def update_derived_stats(self) -> None:
        tuning = self.tuning
        item_charisma = sum(item.effects.charisma_bonus for item in self.equipment.items())
        raw = (
            int(self.appearance.get("face", 0)) * tuning.face_weight
            + int(self.appearance.get("waist", 0)) * tuning.waist_weight
            + int(self.stats.get("charisma", 0)) * tuning.charisma_weight
            + item_charisma
        )
        self.attractiveness = clamp(raw, *NEED_RANGE)

        allure = sum(
            item.effects.sexuality for item in self.equipment.items() if item.suits(self.gender)
        )
        if self.is_naked():
            allure += tuning.nudity_bonus(self.gender)
        self.sexuality = clamp(self.attractiveness + allure, *NEED_RANGE)

    def equip_item(self, slot: EquipmentSlot, item: Item) -> Optional[Item]:
        """Put ``item`` into ``slot`` and return whatever was there before."""

        if item.slot is not slot:
            raise ValueError(f"{item.name} does not fit the {slot.value} slot")
        outgoing = self.unequip_item(slot)
        self.equipment.set(slot, item)
        if item.effects.morale:
            before = self.morale
            self.apply_change({"morale": item.effects.morale})
            self.worn_morale[slot] = self.morale - before
        self.update_derived_stats()
        return outgoing

    def unequip_item(self, slot: EquipmentSlot) -> Optional[Item]:
        item = self.equipment.get(slot)
        if item is None:
            return None
        # only the morale the item actually added comes back off
        applied = self.worn_morale.pop(slot, 0)
        if applied:
            self.apply_change({"morale": -applied})
        self.equipment.clear(slot)
        self.update_derived_stats()
        return item

    def wear_from_inventory(self, item: Item) -> EquipOutcome:
        slot = item.slot
        if slot is None:
            return EquipOutcome.NOT_WEARABLE
        if not any(held is item for held in self.inventory):
            return EquipOutcome.NOT_IN_INVENTORY
        occupant = self.equipment.get(slot)
        if occupant is not None:
            weight_after = self.inventory.total_weight - item.weight + occupant.weight
            if weight_after > self.inventory.limit:
                return EquipOutcome.INVENTORY_FULL
        self.inventory.remove_item(item)
        outgoing = self.equip_item(slot, item)
        if outgoing is not None:
            self.inventory.add(outgoing)
        return EquipOutcome.EQUIPPED

    def take_off_to_inventory(self, slot: EquipmentSlot) -> EquipOutcome:
        """Move the slot occupant back to the bag; refuses when the bag cannot hold it."""

        item = self.equipment.get(slot)
        if item is None:
            return EquipOutcome.SLOT_EMPTY
        if not self.inventory.can_add(item):
            return EquipOutcome.INVENTORY_FULL
        self.unequip_item(slot)
        self.inventory.add(item)
        return EquipOutcome.UNEQUIPPED

    def add_contact(self, npc_id: str) -> bool:
        if npc_id in self.contacts:
            return False
        self.contacts.append(npc_id)
        return True
