from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from boroughs.domain.models.menu import MenuSession


@dataclass
class Narration:
    narrative: Optional[str] = None
    dialogue: Optional[str] = None
    system: Optional[str] = None
    options: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.narrative or self.dialogue or self.system or self.options)


@dataclass
class ActionResult:
    narration: Narration = field(default_factory=Narration)
    consumes_turn: bool = True
    menu: Optional[MenuSession] = None

    @classmethod
    def done(
        cls,
        narrative: str | None = None,
        *,
        dialogue: str | None = None,
        system: str | None = None,
        options: List[str] | None = None,
        menu: MenuSession | None = None,
    ) -> "ActionResult":
        return cls(
            narration=Narration(narrative=narrative, dialogue=dialogue, system=system, options=list(options or [])),
            consumes_turn=True,
            menu=menu,
        )

    @classmethod
    def blocked(cls, system: str, *, narrative: str | None = None) -> "ActionResult":
        """A failed precondition: explained to the player, nothing changed, no time spent."""

        return cls(narration=Narration(narrative=narrative, system=system), consumes_turn=False)

    @classmethod
    def info(cls, narrative: str | None = None, *, system: str | None = None, options: List[str] | None = None) -> "ActionResult":
        return cls(
            narration=Narration(narrative=narrative, system=system, options=list(options or [])),
            consumes_turn=False,
        )


@dataclass
class StatTable:
    title: str
    headers: List[str]
    rows: List[List[str]] = field(default_factory=list)


@dataclass
class TurnReport:
    narration: Narration
    events: List[Narration] = field(default_factory=list)
    turn_consumed: bool = False
    menu_open: bool = False
    clock_label: str = ""
    warnings: List[str] = field(default_factory=list)

    @property
    def entries(self) -> List[Narration]:
        return [self.narration, *self.events]
