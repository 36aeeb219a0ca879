from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


DEFAULT_DISTRICTS: Dict[str, List[str]] = {
    "downtown": ["plaza", "courier office", "mall", "cafe"],
    "slums": ["apartment", "market", "alley", "gym"],
    "uptown": ["boutique", "salon", "park"],
    "nightlife": ["bar", "club"],
    "harbor": ["docks", "warehouse"],
}

HOURS_PER_DAY = 24


@dataclass
class WorldClock:
    day: int = 1
    hour: int = 8

    def advance(self, hours: int = 1) -> None:
        if hours < 0:
            raise ValueError("The clock only moves forward")
        self.hour += int(hours)
        while self.hour >= HOURS_PER_DAY:
            self.hour -= HOURS_PER_DAY
            self.day += 1

    @property
    def label(self) -> str:
        return f"Day {self.day}, {self.hour:02d}:00"


@dataclass
class World:
    districts: Dict[str, List[str]] = field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_DISTRICTS.items()})
    active_district: str = "downtown"
    active_place: str = ""
    time: WorldClock = field(default_factory=WorldClock)

    def __post_init__(self) -> None:
        if self.active_district not in self.districts and self.districts:
            self.active_district = next(iter(self.districts))
        if not self.has_place(self.active_district, self.active_place):
            self.active_place = self.default_place(self.active_district) or ""

    def advance_time(self, hours: int = 1) -> None:
        self.time.advance(hours)

    def places_in(self, district: str) -> List[str]:
        return list(self.districts.get(district, []))

    def default_place(self, district: str) -> Optional[str]:
        places = self.districts.get(district) or []
        return places[0] if places else None

    def has_place(self, district: str, place: str) -> bool:
        return place in self.districts.get(district, [])

    def move_to(self, district: str, place: str) -> None:
        if not self.has_place(district, place):
            raise ValueError(f"{place!r} is not in {district!r}")
        self.active_district = district
        self.active_place = place

    @property
    def location(self) -> Tuple[str, str]:
        return self.active_district, self.active_place

    def locate(self, place: str) -> Optional[Tuple[str, str]]:
        for district, places in self.districts.items():
            if place in places:
                return district, place
        return None
