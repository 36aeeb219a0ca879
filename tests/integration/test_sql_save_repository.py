import sys
import tempfile
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from sqlalchemy import text

from boroughs.domain.errors import SaveCorruptedError
from boroughs.infrastructure.db.sql_save_repo import SqlSaveRepository
from boroughs.infrastructure.inmemory.save_repo import InMemorySaveRepository


class SqlSaveRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = SqlSaveRepository.from_url("sqlite:///:memory:")

    def test_save_then_load_returns_the_payload(self) -> None:
        payload = {"version": 1, "character": {"name": "Ari", "money": 120}, "journal": ["New contact: Mira."]}

        self.repo.save("autosave", payload)

        self.assertEqual(payload, self.repo.load("autosave"))
        self.assertTrue(self.repo.exists("autosave"))

    def test_saving_again_overwrites_the_slot(self) -> None:
        self.repo.save("autosave", {"turn": 1})
        self.repo.save("autosave", {"turn": 2})

        self.assertEqual({"turn": 2}, self.repo.load("autosave"))
        self.assertEqual(["autosave"], self.repo.list_slots())

    def test_missing_slot_loads_as_none(self) -> None:
        self.assertIsNone(self.repo.load("nothing-here"))
        self.assertFalse(self.repo.exists("nothing-here"))

    def test_slots_are_listed_in_order_and_deletable(self) -> None:
        for slot in ("b", "a", "c"):
            self.repo.save(slot, {"slot": slot})

        self.assertEqual(["a", "b", "c"], self.repo.list_slots())
        self.assertTrue(self.repo.delete("b"))
        self.assertFalse(self.repo.delete("b"))
        self.assertEqual(["a", "c"], self.repo.list_slots())

    def test_corrupted_rows_raise(self) -> None:
        with self.repo.SessionLocal.begin() as session:
            session.execute(
                text("INSERT INTO save_slot (slot, payload_json, saved_at) VALUES ('bad', '{not json', 'x')")
            )
            session.execute(
                text("INSERT INTO save_slot (slot, payload_json, saved_at) VALUES ('list', '[1, 2]', 'x')")
            )

        with self.assertRaises(SaveCorruptedError):
            self.repo.load("bad")
        with self.assertRaises(SaveCorruptedError):
            self.repo.load("list")

    def test_file_backed_database_survives_a_new_repository(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            url = f"sqlite:///{Path(tmp) / 'saves.db'}"
            first = SqlSaveRepository.from_url(url)
            first.save("slot1", {"money": 5})
            first.engine.dispose()

            second = SqlSaveRepository.from_url(url)
            self.assertEqual({"money": 5}, second.load("slot1"))
            second.engine.dispose()


class InMemorySaveRepositoryTests(unittest.TestCase):
    def test_payloads_are_isolated_copies(self) -> None:
        repo = InMemorySaveRepository()
        payload = {"character": {"money": 10}}

        repo.save("autosave", payload)
        payload["character"]["money"] = 999
        loaded = repo.load("autosave")
        loaded["character"]["money"] = 0

        self.assertEqual({"character": {"money": 10}}, repo.load("autosave"))

    def test_parity_with_sql_repository(self) -> None:
        for repo in (InMemorySaveRepository(), SqlSaveRepository.from_url("sqlite://")):
            with self.subTest(repo=type(repo).__name__):
                repo.save("z", {"n": 1})
                repo.save("a", {"n": 2})
                self.assertEqual(["a", "z"], repo.list_slots())
                self.assertIsNone(repo.load("missing"))
                self.assertTrue(repo.delete("z"))
                self.assertEqual(["a"], repo.list_slots())


if __name__ == "__main__":
    unittest.main()
