from typing import Iterable, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from boroughs.application.dtos import Narration, StatTable, TurnReport


_BORDER_TURN = "magenta"
_BORDER_EVENT = "cyan"
_BORDER_STATUS = "yellow"


def narration_lines(narration: Narration) -> List[str]:
    lines: List[str] = []
    if narration.narrative:
        lines.append(escape(narration.narrative))
    if narration.dialogue:
        lines.append(f"[italic cyan]{escape(narration.dialogue)}[/italic cyan]")
    if narration.system:
        lines.append(f"[dim]{escape(narration.system)}[/dim]")
    for number, option in enumerate(narration.options, start=1):
        lines.append(f"  [bold]{number}.[/bold] {escape(option)}")
    return lines


def render_narration(console: Console, narration: Narration, *, title: str = "", border: str = _BORDER_TURN) -> None:
    if narration.is_empty():
        return
    console.print(Panel("\n".join(narration_lines(narration)), title=title or None, border_style=border))


def render_report(console: Console, report: TurnReport) -> None:
    render_narration(console, report.narration, title=report.clock_label)
    for event in report.events:
        render_narration(console, event, title="Meanwhile", border=_BORDER_EVENT)
    for warning in report.warnings:
        console.print(f"[bold red]![/bold red] [dim]{escape(warning)}[/dim]")
    if report.menu_open:
        console.print("[dim]Pick a number. Anything else closes the menu.[/dim]")


def build_table(stat_table: StatTable) -> Table:
    table = Table(title=stat_table.title, show_header=True, header_style="bold yellow")
    for header in stat_table.headers:
        table.add_column(header)
    for row in stat_table.rows:
        table.add_row(*row)
    return table


def render_tables(console: Console, tables: Iterable[StatTable]) -> None:
    for stat_table in tables:
        console.print(build_table(stat_table))


def render_journal(console: Console, entries: List[str]) -> None:
    body = "\n".join(escape(entry) for entry in entries[-15:]) if entries else "[dim]Nothing written yet.[/dim]"
    console.print(Panel(body, title="Journal", border_style=_BORDER_STATUS))
