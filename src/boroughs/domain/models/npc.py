from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from boroughs.domain.services.random_source import clamp


RELATIONSHIP_RANGE = (-100, 100)


@dataclass
class NPC:
    id: str
    name: str
    role: str = ""
    schedule: Any = field(default_factory=dict)
    relationship: int = 0
    district: str = ""
    place: str = ""

    def __post_init__(self) -> None:
        self.relationship = clamp(int(self.relationship or 0), *RELATIONSHIP_RANGE)

    def adjust_relationship(self, delta: int) -> int:
        self.relationship = clamp(self.relationship + int(delta), *RELATIONSHIP_RANGE)
        return self.relationship

    def is_at(self, district: str, place: str) -> bool:
        return self.district == district and self.place == place

    @classmethod
    def from_roster(cls, data: Mapping[str, Any]) -> "NPC":
        return cls(
            id=str(data.get("id", "") or ""),
            name=str(data.get("name", data.get("id", "Stranger")) or "Stranger"),
            role=str(data.get("role", "") or ""),
            schedule=data.get("schedule") or {},
            relationship=int(data.get("relationship", 0) or 0),
            district=str(data.get("district", "") or ""),
            place=str(data.get("place", "") or ""),
        )
