from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class EquipmentSlot(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    SHOES = "shoes"
    UNDERWEAR = "underwear"
    GADGET = "gadget"

    @classmethod
    def parse(cls, value: str | None) -> Optional["EquipmentSlot"]:
        raw = str(value or "").strip().lower()
        for slot in cls:
            if slot.value == raw:
                return slot
        return None


CLOTHING_SLOTS = tuple(slot for slot in EquipmentSlot if slot is not EquipmentSlot.GADGET)


class ItemType(str, Enum):
    CLOTHING = "clothing"
    GADGET = "gadget"
    FOOD = "food"
    INGREDIENT = "ingredient"
    MISC = "misc"

    @classmethod
    def normalize(cls, value: str | None) -> str:
        raw = str(value or "").strip().lower()
        valid = {item.value for item in cls}
        return raw if raw in valid else cls.MISC.value


@dataclass(frozen=True)
class ItemEffects:
    stats: Mapping[str, int] = field(default_factory=dict)
    morale: int = 0
    sexuality: int = 0

    @property
    def charisma_bonus(self) -> int:
        return int(self.stats.get("charisma", 0))


@dataclass(eq=False)
class Item:
    """One concrete item instance.

    Equality is identity: two bottles of the same soda are different items, so
    "an item occupies at most one slot" is checked with ``is``.
    """

    id: str
    name: str
    weight: int = 1
    type: str = ItemType.MISC.value
    category: str = ""
    gender: str = "any"
    price: int = 0
    nutrition: int = 0
    effects: ItemEffects = field(default_factory=ItemEffects)

    def __post_init__(self) -> None:
        self.type = ItemType.normalize(self.type)
        self.weight = max(0, int(self.weight))
        self.price = max(0, int(self.price))
        self.nutrition = int(self.nutrition)

    @property
    def slot(self) -> Optional[EquipmentSlot]:
        if self.type not in (ItemType.CLOTHING.value, ItemType.GADGET.value):
            return None
        if self.type == ItemType.GADGET.value:
            return EquipmentSlot.GADGET
        return EquipmentSlot.parse(self.category)

    @property
    def wearable(self) -> bool:
        return self.slot is not None

    @property
    def edible(self) -> bool:
        return self.type == ItemType.FOOD.value

    def suits(self, gender: str | None) -> bool:
        cut = str(self.gender or "any").strip().lower()
        return cut == "any" or cut == str(gender or "").strip().lower()

    def matches(self, text: str) -> bool:
        needle = str(text or "").strip().lower()
        if not needle:
            return False
        return needle == self.id.lower() or needle in self.name.lower()

    def copy(self) -> "Item":
        return Item(
            id=self.id,
            name=self.name,
            weight=self.weight,
            type=self.type,
            category=self.category,
            gender=self.gender,
            price=self.price,
            nutrition=self.nutrition,
            effects=self.effects,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "weight": self.weight,
            "type": self.type,
            "category": self.category,
            "gender": self.gender,
            "price": self.price,
            "nutrition": self.nutrition,
            "effects": {
                "stats": dict(self.effects.stats),
                "morale": self.effects.morale,
                "sexuality": self.effects.sexuality,
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Item":
        raw_effects = data.get("effects") or {}
        if not isinstance(raw_effects, Mapping):
            raw_effects = {}
        stats = raw_effects.get("stats") or {}
        effects = ItemEffects(
            stats={str(key): int(value) for key, value in dict(stats).items()},
            morale=int(raw_effects.get("morale", 0) or 0),
            sexuality=int(raw_effects.get("sexuality", 0) or 0),
        )
        return cls(
            id=str(data.get("id", "") or ""),
            name=str(data.get("name", data.get("id", "item")) or "item"),
            weight=int(data.get("weight", 1) or 0),
            type=str(data.get("type", ItemType.MISC.value) or ""),
            category=str(data.get("category", "") or ""),
            gender=str(data.get("gender", "any") or "any"),
            price=int(data.get("price", 0) or 0),
            nutrition=int(data.get("nutrition", 0) or 0),
            effects=effects,
        )
