from __future__ import annotations

import logging
from typing import Callable, Optional

from rich.console import Console
from rich.panel import Panel

from boroughs.application.dtos import Narration
from boroughs.application.services.character_creation_service import CharacterDraft
from boroughs.application.services.turn_engine import TurnEngine
from boroughs.bootstrap import (
    create_catalogs,
    create_creation_service,
    create_engine_for,
    create_save_repository,
    load_session,
    save_session,
    start_session,
)
from boroughs.config import GameConfig
from boroughs.domain.errors import BoroughsError
from boroughs.domain.models.catalog import Catalogs
from boroughs.domain.repositories import SaveRepository
from boroughs.presentation.render import render_journal, render_narration, render_report, render_tables


logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"quit", "exit"}
HELP_TEXT = (
    "Type what you want to do: go to the gym, train, work, talk, flirt, buy soda, wear jacket, eat, look, map.\n"
    "Meta commands: status, journal, save [slot], load [slot], quit."
)


class GameCli:
    def __init__(
        self,
        config: GameConfig,
        *,
        console: Console | None = None,
        read_line: Callable[[str], str] | None = None,
        catalogs: Catalogs | None = None,
        save_repo: SaveRepository | None = None,
    ) -> None:
        self.config = config
        self.console = console or Console()
        self.read_line = read_line or self.console.input
        self.catalogs = catalogs if catalogs is not None else create_catalogs(config)
        self.save_repo = save_repo if save_repo is not None else create_save_repository(config)
        self.engine: Optional[TurnEngine] = None

    def _system(self, text: str) -> None:
        render_narration(self.console, Narration(system=text))

    def run(self) -> None:
        self.console.print(Panel("Neon Boroughs", subtitle="[dim]A life in five districts[/dim]", border_style="magenta"))
        if not self._start():
            return
        self._system(HELP_TEXT)
        while True:
            raw = self.read_line("> ").strip()
            if not self._handle_line(raw):
                break
        self.console.print("Session ended.")

    def _start(self) -> bool:
        slots = self.save_repo.list_slots()
        if slots:
            self._system(f"Saved games: {', '.join(slots)}. Type a slot name to continue or press ENTER for a new life.")
            choice = self.read_line("slot> ").strip()
            if choice and self._load(choice):
                return True
        return self._create_character()

    def _create_character(self) -> bool:
        service = create_creation_service(self.config, self.catalogs)
        draft = CharacterDraft()
        for key, prompt in service.questions():
            while True:
                answer = self.read_line(f"{prompt}\n> ")
                if answer.strip().lower() in QUIT_COMMANDS:
                    return False
                error = service.apply_answer(draft, key, answer)
                if error is None:
                    break
                self._system(error)
        character, world = service.build(draft)
        session = start_session(self.config, self.catalogs, character, world)
        self.engine = create_engine_for(session)
        render_narration(
            self.console,
            Narration(
                narrative=f"{character.name} wakes up in {world.active_district}, at the {world.active_place}.",
                system=world.time.label,
            ),
        )
        return True

    def _load(self, slot: str) -> bool:
        try:
            session = load_session(self.save_repo, self.config, self.catalogs, slot)
        except BoroughsError as exc:
            self._system(str(exc))
            return self.engine is not None
        self.engine = create_engine_for(session)
        self._system(f"Loaded {slot}. {session.world.time.label}, {session.world.active_place} in {session.world.active_district}.")
        return True

    def _handle_line(self, raw: str) -> bool:
        command, _, argument = raw.partition(" ")
        command = command.lower()
        slot = argument.strip() or self.config.default_slot
        if command in QUIT_COMMANDS:
            return False
        if command == "help":
            self._system(HELP_TEXT)
            return True
        if command == "status":
            render_tables(self.console, self.engine.status_tables())
            return True
        if command == "journal":
            render_journal(self.console, self.engine.session.journal.entries())
            return True
        if command == "save":
            try:
                save_session(self.save_repo, self.engine.session, slot)
            except BoroughsError as exc:
                self._system(f"Save failed: {exc}")
            else:
                self._system(f"Saved to {slot}.")
            return True
        if command == "load":
            self._load(slot)
            return True

        report = self.engine.process(raw)
        render_report(self.console, report)
        return True


def run(config: GameConfig | None = None) -> None:
    GameCli(config or GameConfig.from_env()).run()
