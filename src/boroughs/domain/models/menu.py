from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class MenuKind(str, Enum):
    SHOP = "shop"
    PHONE = "phone"
    NPC_PICK = "npc_pick"
    NPC_ACTION = "npc_action"
    SOCIAL_TARGET = "social_target"
    WARDROBE = "wardrobe"
    EAT = "eat"
    HAIR = "hair"


@dataclass
class MenuSession:
    kind: MenuKind
    options: List[str]
    payload: Dict[str, Any] = field(default_factory=dict)

    def select(self, raw: str) -> Optional[int]:
        """Return the 0-based index chosen by ``raw`` or None when it is not a valid choice."""

        text = str(raw or "").strip().rstrip(".")
        if not text.isdigit():
            return None
        index = int(text) - 1
        if index < 0 or index >= len(self.options):
            return None
        return index

    @property
    def pinned_npc_ids(self) -> List[str]:
        """NPCs the open options point at; they stay put until the menu closes."""

        pinned = [str(npc_id) for npc_id in self.payload.get("npc_ids") or []]
        if self.payload.get("npc_id"):
            pinned.append(str(self.payload["npc_id"]))
        return pinned
