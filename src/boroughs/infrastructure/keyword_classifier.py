from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from boroughs.domain.models.intent import Intent, IntentKind


# prefixes that carry free item text in the payload
_TEXT_PREFIXES: Sequence[Tuple[IntentKind, Tuple[str, ...]]] = (
    (IntentKind.BUY, ("buy ", "purchase ")),
    (IntentKind.WEAR, ("wear ", "put on ")),
    (IntentKind.REMOVE, ("take off ", "remove ", "undress ")),
)

_GO_PREFIXES = ("go to ", "go ", "walk to ", "head to ", "travel to ", "move to ")

# first match wins; longer phrases sit above the words they contain
_KEYWORDS: Sequence[Tuple[IntentKind, Tuple[str, ...]]] = (
    (IntentKind.WARDROBE, ("wardrobe", "outfit", "change clothes")),
    (IntentKind.SHOP_CLOTHES, ("shop clothes", "clothes", "clothing")),
    (IntentKind.SHOP_FOOD, ("shop food", "groceries", "grocery")),
    (IntentKind.SHOP_GADGETS, ("shop gadgets", "gadget", "electronics")),
    (IntentKind.NPC_LIST, ("who is here", "who's here", "people", "npcs")),
    (IntentKind.PICKUP, ("pick up", "pickup", "collect")),
    (IntentKind.DELIVER, ("deliver", "drop off")),
    (IntentKind.TRAIN, ("train", "workout", "exercise")),
    (IntentKind.WORK, ("work", "shift", "job")),
    (IntentKind.PHONE, ("phone", "call")),
    (IntentKind.FLIRT, ("flirt",)),
    (IntentKind.BEFRIEND, ("befriend", "make friends")),
    (IntentKind.TALK, ("talk",)),
    (IntentKind.SOCIAL, ("chat", "socialize", "socialise", "hang out")),
    (IntentKind.COOK, ("cook",)),
    (IntentKind.EAT, ("eat", "snack")),
    (IntentKind.HAIR, ("haircut", "hair")),
    (IntentKind.MAP, ("map",)),
    (IntentKind.LOOK, ("look", "where am i", "around")),
    (IntentKind.IDLE, ("wait", "rest", "idle")),
)

_PLACE_ALIASES = {"home": "apartment", "house": "apartment", "office": "courier office"}


class KeywordIntentClassifier:
    """Maps a line of player text to an Intent using plain keyword rules."""

    def __init__(self, districts: Mapping[str, Sequence[str]]) -> None:
        self.districts: Dict[str, List[str]] = {name: list(places) for name, places in districts.items()}

    def __call__(self, raw: str) -> Intent:
        return self.classify(raw)

    def classify(self, raw: str) -> Intent:
        clean = re.sub(r"\s+", " ", str(raw or "")).strip().lower()
        if not clean:
            return Intent.idle()

        for kind, prefixes in _TEXT_PREFIXES:
            for prefix in prefixes:
                if clean.startswith(prefix):
                    return Intent(kind, text=clean[len(prefix):].strip())

        for prefix in _GO_PREFIXES:
            if clean.startswith(prefix):
                return self._go(clean[len(prefix):].strip())

        for kind, words in _KEYWORDS:
            if any(self._contains(clean, word) for word in words):
                return Intent(kind)

        target = self._locate(clean)
        if target is not None:
            return Intent.go(*target)
        return Intent(IntentKind.FREE, text=str(raw).strip())

    def _go(self, target: str) -> Intent:
        located = self._locate(target)
        if located is not None:
            return Intent.go(*located)
        return Intent(IntentKind.GO, district=target or None)

    def _locate(self, text: str) -> Optional[Tuple[str, Optional[str]]]:
        for district, places in self.districts.items():
            for place in sorted(places, key=len, reverse=True):
                if self._contains(text, place):
                    return district, place
        for alias, place in _PLACE_ALIASES.items():
            if self._contains(text, alias):
                for district, places in self.districts.items():
                    if place in places:
                        return district, place
        for district in self.districts:
            if self._contains(text, district):
                return district, None
        return None

    @staticmethod
    def _contains(text: str, phrase: str) -> bool:
        return re.search(rf"\b{re.escape(phrase)}\b", text) is not None
