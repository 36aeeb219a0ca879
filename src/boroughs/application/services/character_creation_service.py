from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from boroughs.domain.models.catalog import Catalogs
from boroughs.domain.models.character import (
    APPEARANCE_FIELDS,
    DEFAULT_APPEARANCE,
    DEFAULT_STATS,
    STAT_NAMES,
    STAT_RANGE,
    Character,
)
from boroughs.domain.models.inventory import DEFAULT_INVENTORY_LIMIT, Inventory
from boroughs.domain.models.world import World


logger = logging.getLogger(__name__)

MIN_AGE = 18
STAT_POINT_TOTAL = 50
APPEARANCE_SCORE_FIELDS = ("hips", "waist", "chest", "glutes", "face")
APPEARANCE_SCORE_RANGE = (1, 10)
STARTING_ITEM_COUNT = 2
STREET_BACKGROUND_WORD = "street"

CREATION_QUESTIONS: Tuple[Tuple[str, str], ...] = (
    ("name", "What is your character's name?"),
    ("gender", "Gender or self-description?"),
    ("age", f"Age ({MIN_AGE}+)?"),
    ("job", "Job or occupation? (courier unlocks delivery shifts)"),
    ("traits", "Character traits, comma separated?"),
    ("background", "Background (home / street / study / work)?"),
    (
        "stats",
        f"Spread {STAT_POINT_TOTAL} points over strength, agility, flexibility, charisma, intellect. "
        "Format: strength 10, agility 10, flexibility 10, charisma 10, intellect 10",
    ),
    (
        "appearance",
        "Appearance: height, weight, hips, waist, chest, glutes, face (1-10). "
        "Example: height 170, weight 65, hips 6, waist 5, chest 5, glutes 6, face 7",
    ),
)


@dataclass
class CharacterDraft:
    name: str = ""
    gender: str = "unspecified"
    age: int = MIN_AGE
    job: str = ""
    traits: List[str] = field(default_factory=list)
    background: str = ""
    stats: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_STATS))
    appearance: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_APPEARANCE))


def _parse_pairs(value: str, allowed: Tuple[str, ...]) -> Optional[Dict[str, int]]:
    parsed: Dict[str, int] = {}
    for chunk in str(value or "").split(","):
        parts = chunk.strip().lower().split()
        if not parts:
            continue
        if len(parts) != 2 or parts[0] not in allowed:
            return None
        try:
            parsed[parts[0]] = int(parts[1])
        except ValueError:
            return None
    return parsed or None


class CharacterCreationService:
    def __init__(self, catalogs: Catalogs, *, inventory_limit: int = DEFAULT_INVENTORY_LIMIT) -> None:
        self.catalogs = catalogs
        self.inventory_limit = int(inventory_limit)

    def questions(self) -> List[Tuple[str, str]]:
        return list(CREATION_QUESTIONS)

    def apply_answer(self, draft: CharacterDraft, key: str, value: str) -> Optional[str]:
        """Store one answer on ``draft``; return an error message when it is rejected."""

        text = str(value or "").strip()
        if key in ("name", "gender", "job", "background"):
            if key == "name" and not text:
                return "A name is required."
            setattr(draft, key, text or getattr(draft, key))
            return None
        if key == "age":
            try:
                age = int(text)
            except ValueError:
                return f"Age must be a whole number, {MIN_AGE} or more."
            if age < MIN_AGE:
                return f"Age must be {MIN_AGE} or more."
            draft.age = age
            return None
        if key == "traits":
            draft.traits = [trait.strip() for trait in text.split(",") if trait.strip()]
            return None
        if key == "stats":
            return self._apply_stats(draft, text)
        if key == "appearance":
            return self._apply_appearance(draft, text)
        return f"Unknown question: {key}"

    def _apply_stats(self, draft: CharacterDraft, text: str) -> Optional[str]:
        parsed = _parse_pairs(text, STAT_NAMES)
        if parsed is None:
            return "Could not read the stats. Use: strength 10, agility 10, ..."
        stats = {**draft.stats, **parsed}
        low, high = STAT_RANGE
        if any(not low <= value <= high for value in stats.values()):
            return f"Each stat must be between {low} and {high}."
        total = sum(stats.values())
        if total != STAT_POINT_TOTAL:
            return f"Stats must add up to {STAT_POINT_TOTAL}, yours add up to {total}."
        draft.stats = stats
        return None

    def _apply_appearance(self, draft: CharacterDraft, text: str) -> Optional[str]:
        parsed = _parse_pairs(text, APPEARANCE_FIELDS)
        if parsed is None:
            return "Could not read the appearance. Use: height 170, weight 65, face 7, ..."
        low, high = APPEARANCE_SCORE_RANGE
        for name in APPEARANCE_SCORE_FIELDS:
            if name in parsed and not low <= parsed[name] <= high:
                return f"{name.capitalize()} must be between {low} and {high}."
        if parsed.get("height", 1) <= 0 or parsed.get("weight", 1) <= 0:
            return "Height and weight must be positive."
        draft.appearance = {**draft.appearance, **parsed}
        return None

    def starting_district(self, draft: CharacterDraft) -> str:
        return "slums" if STREET_BACKGROUND_WORD in draft.background.lower() else "downtown"

    def build(self, draft: CharacterDraft) -> Tuple[Character, World]:
        character = Character(
            name=draft.name or "Stranger",
            gender=draft.gender,
            age=draft.age,
            job=draft.job,
            traits=list(draft.traits),
            background=draft.background,
            stats=dict(draft.stats),
            appearance=dict(draft.appearance),
            inventory=Inventory(limit=self.inventory_limit),
        )
        for template in self.catalogs.items[:STARTING_ITEM_COUNT]:
            if not character.inventory.add(template.copy()):
                logger.info("Starting item %s did not fit the inventory", template.id)
        world = World(active_district=self.starting_district(draft))
        logger.info("Created %s, starting in %s", character.name, world.active_district)
        return character, world
