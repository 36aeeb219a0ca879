from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IntentKind(str, Enum):
    TRAIN = "train"
    GO = "go"
    WORK = "work"
    SOCIAL = "social"
    PHONE = "phone"
    SHOP_CLOTHES = "shop_clothes"
    SHOP_FOOD = "shop_food"
    SHOP_GADGETS = "shop_gadgets"
    BUY = "buy"
    NPC_LIST = "npc_list"
    TALK = "talk"
    FLIRT = "flirt"
    BEFRIEND = "befriend"
    PICKUP = "pickup"
    DELIVER = "deliver"
    WARDROBE = "wardrobe"
    WEAR = "wear"
    REMOVE = "remove"
    COOK = "cook"
    EAT = "eat"
    HAIR = "hair"
    MAP = "map"
    LOOK = "look"
    FREE = "free"
    IDLE = "idle"


@dataclass(frozen=True)
class Intent:
    """A classified player action.

    ``district``/``place`` carry the target of ``go``; ``text`` carries the item
    words of ``buy``/``wear``/``remove`` and the raw words of ``free``.
    """

    kind: IntentKind
    district: Optional[str] = None
    place: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def idle(cls) -> "Intent":
        return cls(IntentKind.IDLE)

    @classmethod
    def go(cls, district: str, place: str | None = None) -> "Intent":
        return cls(IntentKind.GO, district=district, place=place)
