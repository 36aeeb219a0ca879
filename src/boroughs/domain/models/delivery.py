from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


Location = Tuple[str, str]


class DeliveryStage(str, Enum):
    NONE = "none"
    ASSIGNED = "assigned"
    IN_TRANSIT = "in_transit"


@dataclass
class DeliveryQuest:
    total_tasks: int
    pickup: Location
    dropoff: Location
    completed: int = 0
    picked_up: bool = False

    @property
    def stage(self) -> DeliveryStage:
        return DeliveryStage.IN_TRANSIT if self.picked_up else DeliveryStage.ASSIGNED

    @property
    def remaining(self) -> int:
        return self.total_tasks - self.completed

    @property
    def finished(self) -> bool:
        return self.completed >= self.total_tasks

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_tasks": self.total_tasks,
            "completed": self.completed,
            "picked_up": self.picked_up,
            "pickup": list(self.pickup),
            "dropoff": list(self.dropoff),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Optional["DeliveryQuest"]:
        if not isinstance(data, Mapping) or not data:
            return None
        try:
            pickup = tuple(str(part) for part in data["pickup"])
            dropoff = tuple(str(part) for part in data["dropoff"])
            quest = cls(
                total_tasks=int(data["total_tasks"]),
                pickup=(pickup[0], pickup[1]),
                dropoff=(dropoff[0], dropoff[1]),
                completed=int(data.get("completed", 0) or 0),
                picked_up=bool(data.get("picked_up", False)),
            )
        except (KeyError, IndexError, TypeError, ValueError):
            return None
        return None if quest.finished else quest


def stage_of(quest: Optional[DeliveryQuest]) -> DeliveryStage:
    return DeliveryStage.NONE if quest is None else quest.stage
