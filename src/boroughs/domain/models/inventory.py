from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from boroughs.domain.models.item import CLOTHING_SLOTS, EquipmentSlot, Item


DEFAULT_INVENTORY_LIMIT = 25


@dataclass
class Inventory:
    limit: int = DEFAULT_INVENTORY_LIMIT
    items: List[Item] = field(default_factory=list)

    @property
    def total_weight(self) -> int:
        return sum(item.weight for item in self.items)

    @property
    def free_weight(self) -> int:
        return self.limit - self.total_weight

    def can_add(self, item: Item) -> bool:
        return self.total_weight + item.weight <= self.limit

    def add(self, item: Item) -> bool:
        if not self.can_add(item):
            return False
        self.items.append(item)
        return True

    def remove(self, item_id: str) -> Optional[Item]:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return self.items.pop(index)
        return None

    def remove_item(self, item: Item) -> bool:
        for index, held in enumerate(self.items):
            if held is item:
                del self.items[index]
                return True
        return False

    def find(self, item_id: str) -> Optional[Item]:
        return next((item for item in self.items if item.id == item_id), None)

    def find_matching(self, text: str) -> Optional[Item]:
        return next((item for item in self.items if item.matches(text)), None)

    def wearables(self) -> List[Item]:
        return [item for item in self.items if item.wearable]

    def foods(self) -> List[Item]:
        return [item for item in self.items if item.edible]

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


class Equipment:
    """Fixed wearable slots, each holding at most one item."""

    def __init__(self) -> None:
        self._slots: Dict[EquipmentSlot, Optional[Item]] = {slot: None for slot in EquipmentSlot}

    def get(self, slot: EquipmentSlot) -> Optional[Item]:
        return self._slots[slot]

    def slot_of(self, item: Item) -> Optional[EquipmentSlot]:
        for slot, held in self._slots.items():
            if held is item:
                return slot
        return None

    def set(self, slot: EquipmentSlot, item: Item) -> None:
        current = self.slot_of(item)
        if current is not None and current is not slot:
            raise ValueError(f"{item.name} is already worn in the {current.value} slot")
        self._slots[slot] = item

    def clear(self, slot: EquipmentSlot) -> Optional[Item]:
        item = self._slots[slot]
        self._slots[slot] = None
        return item

    def items(self) -> List[Item]:
        return [item for item in self._slots.values() if item is not None]

    def occupied(self) -> Dict[EquipmentSlot, Item]:
        return {slot: item for slot, item in self._slots.items() if item is not None}

    def find_matching(self, text: str) -> Optional[EquipmentSlot]:
        by_slot = EquipmentSlot.parse(text)
        if by_slot is not None and self._slots[by_slot] is not None:
            return by_slot
        for slot, item in self._slots.items():
            if item is not None and item.matches(text):
                return slot
        return None

    def is_naked(self) -> bool:
        return all(self._slots[slot] is None for slot in CLOTHING_SLOTS)
