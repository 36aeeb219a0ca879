from __future__ import annotations

from typing import List

from boroughs.application.services.balance_tables import JOURNAL_MAX_ENTRIES
from boroughs.application.services.event_bus import EventBus
from boroughs.domain.events import (
    ContactAdded,
    DeliveryMade,
    DeliveryShiftCompleted,
    DeliveryShiftStarted,
    DiaryEntryWritten,
    ItemPurchased,
)


JOURNAL_PRIORITY = 50


class JournalService:
    """Keeps the character's diary: a bounded list of notable moments."""

    def __init__(self, event_bus: EventBus, *, max_entries: int = JOURNAL_MAX_ENTRIES) -> None:
        self.event_bus = event_bus
        self.max_entries = max(1, int(max_entries))
        self._entries: List[str] = []

    def register_handlers(self) -> None:
        self.event_bus.subscribe_many(
            {
                DiaryEntryWritten: self.on_diary_entry,
                DeliveryShiftStarted: self.on_shift_started,
                DeliveryMade: self.on_delivery_made,
                DeliveryShiftCompleted: self.on_shift_completed,
                ContactAdded: self.on_contact_added,
                ItemPurchased: self.on_item_purchased,
            },
            priority=JOURNAL_PRIORITY,
        )

    def entries(self) -> List[str]:
        return list(self._entries)

    def restore(self, entries: List[str]) -> None:
        self._entries = [str(line) for line in entries][-self.max_entries:]

    def _append(self, line: str) -> None:
        self._entries.append(line)
        if len(self._entries) > self.max_entries:
            del self._entries[: -self.max_entries]

    def on_diary_entry(self, event: DiaryEntryWritten) -> None:
        self._append(f"Day {event.day}, {event.hour:02d}:00 | {event.text}")

    def on_shift_started(self, event: DeliveryShiftStarted) -> None:
        self._append(f"Day {event.day}, {event.hour:02d}:00 | Courier shift taken: {event.total_tasks} drops.")

    def on_delivery_made(self, event: DeliveryMade) -> None:
        timing = "on time" if event.on_time else "late"
        self._append(
            f"Day {event.day}, {event.hour:02d}:00 | Drop {event.completed}/{event.total_tasks} {timing}, +{event.pay}."
        )

    def on_shift_completed(self, event: DeliveryShiftCompleted) -> None:
        self._append(f"Day {event.day}, {event.hour:02d}:00 | Shift closed after {event.total_tasks} drops.")

    def on_contact_added(self, event: ContactAdded) -> None:
        self._append(f"New contact: {event.npc_name}.")

    def on_item_purchased(self, event: ItemPurchased) -> None:
        self._append(f"Bought {event.item_name} for {event.price}.")
