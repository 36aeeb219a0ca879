import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from boroughs.application.services.event_bus import EventBus
from boroughs.application.services.journal_service import JournalService
from boroughs.domain.events import ContactAdded, DeliveryMade, DiaryEntryWritten, ItemPurchased


class EventBusTests(unittest.TestCase):
    def test_handlers_run_in_priority_then_subscription_order(self) -> None:
        bus = EventBus()
        seen: list[str] = []

        class Ping:
            pass

        bus.subscribe(Ping, lambda evt: seen.append("late"), priority=200)
        bus.subscribe(Ping, lambda evt: seen.append("first"))
        bus.subscribe(Ping, lambda evt: seen.append("second"))

        bus.publish(Ping())

        self.assertEqual(["first", "second", "late"], seen)

    def test_handlers_only_see_their_event_type(self) -> None:
        bus = EventBus()
        seen: list[object] = []
        bus.subscribe(ContactAdded, seen.append)

        bus.publish(ItemPurchased(item_id="soda", item_name="Soda", price=3))

        self.assertEqual([], seen)

    def test_failing_handler_does_not_stop_the_others(self) -> None:
        bus = EventBus()
        seen: list[str] = []

        def explode(event: object) -> None:
            raise RuntimeError("boom")

        bus.subscribe(ContactAdded, explode, priority=10)
        bus.subscribe(ContactAdded, lambda evt: seen.append(evt.npc_id), priority=20)

        with self.assertLogs("boroughs.application.services.event_bus", level="ERROR"):
            failures = bus.publish(ContactAdded(npc_id="mira", npc_name="Mira"))

        self.assertEqual(["mira"], seen)
        self.assertEqual(1, len(failures))
        self.assertEqual("ContactAdded", failures[0].event_name)
        self.assertIn("explode", failures[0].handler_name)
        self.assertIsInstance(failures[0].error, RuntimeError)
        self.assertIn("could not handle ContactAdded: boom", failures[0].message)

    def test_failures_are_held_until_drained(self) -> None:
        bus = EventBus()

        def explode(event: object) -> None:
            raise ValueError("bad row")

        bus.subscribe(ItemPurchased, explode)
        with self.assertLogs("boroughs.application.services.event_bus", level="ERROR"):
            bus.publish(ItemPurchased(item_id="soda", item_name="Soda", price=3))
            bus.publish(ItemPurchased(item_id="soda", item_name="Soda", price=3))

        self.assertEqual(2, len(bus.drain_failures()))
        self.assertEqual([], bus.drain_failures())

    def test_clean_publish_reports_nothing(self) -> None:
        bus = EventBus()
        bus.subscribe(ContactAdded, lambda evt: None)

        self.assertEqual([], bus.publish(ContactAdded(npc_id="dex", npc_name="Dex")))
        self.assertEqual([], bus.drain_failures())

    def test_subscribe_many_shares_one_priority(self) -> None:
        bus = EventBus()
        seen: list[str] = []
        bus.subscribe(ContactAdded, lambda evt: seen.append("default"))
        bus.subscribe_many(
            {ContactAdded: lambda evt: seen.append("early"), ItemPurchased: lambda evt: seen.append("bought")},
            priority=5,
        )

        bus.publish(ContactAdded(npc_id="dex", npc_name="Dex"))
        bus.publish(ItemPurchased(item_id="soda", item_name="Soda", price=3))

        self.assertEqual(["early", "default", "bought"], seen)
        self.assertEqual(2, len(bus.subscribers(ContactAdded)))


class JournalServiceTests(unittest.TestCase):
    def _journal(self, **kwargs) -> tuple[EventBus, JournalService]:
        bus = EventBus()
        journal = JournalService(bus, **kwargs)
        journal.register_handlers()
        return bus, journal

    def test_records_notable_events(self) -> None:
        bus, journal = self._journal()

        bus.publish(DiaryEntryWritten(text="Rain again.", day=2, hour=7))
        bus.publish(DeliveryMade(completed=1, total_tasks=3, on_time=False, pay=15, day=2, hour=9))
        bus.publish(ContactAdded(npc_id="dex", npc_name="Dex"))

        self.assertEqual(
            [
                "Day 2, 07:00 | Rain again.",
                "Day 2, 09:00 | Drop 1/3 late, +15.",
                "New contact: Dex.",
            ],
            journal.entries(),
        )

    def test_journal_keeps_only_the_newest_entries(self) -> None:
        bus, journal = self._journal(max_entries=3)

        for hour in range(5):
            bus.publish(DiaryEntryWritten(text=f"note {hour}", day=1, hour=hour))

        self.assertEqual(["note 2", "note 3", "note 4"], [line.split("| ")[1] for line in journal.entries()])

    def test_restore_trims_to_the_limit(self) -> None:
        _, journal = self._journal(max_entries=2)

        journal.restore(["a", "b", "c"])

        self.assertEqual(["b", "c"], journal.entries())

    def test_entries_returns_a_copy(self) -> None:
        bus, journal = self._journal()
        bus.publish(ContactAdded(npc_id="dex", npc_name="Dex"))

        journal.entries().clear()

        self.assertEqual(1, len(journal.entries()))


if __name__ == "__main__":
    unittest.main()
