from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from boroughs.domain.models.item import Item


@dataclass(frozen=True)
class EventTrigger:
    district: Optional[str] = None
    hour: Optional[int] = None

    def matches(self, district: str, hour: int) -> bool:
        if self.district is not None and self.district != district:
            return False
        if self.hour is not None and self.hour != hour:
            return False
        return True


@dataclass(frozen=True)
class EventDefinition:
    id: str
    narrative: str
    system: Optional[str] = None
    trigger: Optional[EventTrigger] = None
    change: Optional[Mapping[str, Any]] = None

    def matches(self, district: str, hour: int) -> bool:
        return self.trigger is None or self.trigger.matches(district, hour)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int = 0) -> "EventDefinition":
        trigger = None
        raw_trigger = data.get("trigger")
        if isinstance(raw_trigger, Mapping):
            hour = raw_trigger.get("hour")
            trigger = EventTrigger(
                district=str(raw_trigger["district"]) if raw_trigger.get("district") else None,
                hour=int(hour) if hour is not None else None,
            )
        change = data.get("change")
        return cls(
            id=str(data.get("id", f"event_{index}")),
            narrative=str(data.get("narrative", "") or ""),
            system=str(data["system"]) if data.get("system") else None,
            trigger=trigger,
            change=dict(change) if isinstance(change, Mapping) else None,
        )


@dataclass
class Catalogs:
    """Pre-parsed static data. Any part may be empty."""

    items: List[Item] = field(default_factory=list)
    phrases: Dict[str, List[str]] = field(default_factory=dict)
    events: List[EventDefinition] = field(default_factory=list)
    npcs: List[Dict[str, Any]] = field(default_factory=list)

    def items_of_type(self, types: Sequence[str]) -> List[Item]:
        wanted = set(types)
        return [item for item in self.items if item.type in wanted]

    def find_item(self, item_id: str) -> Optional[Item]:
        return next((item for item in self.items if item.id == item_id), None)

    def phrase_pool(self, key: str) -> List[str]:
        return [str(line) for line in self.phrases.get(key, []) if str(line).strip()]
