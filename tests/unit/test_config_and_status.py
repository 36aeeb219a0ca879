import os
import sys
from pathlib import Path
import unittest
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from boroughs.application.mappers.status_mapper import to_inventory_table, to_status_tables
from boroughs.config import DEFAULT_SAVE_URL, GameConfig
from boroughs.domain.models.character import Character
from boroughs.domain.models.inventory import Inventory
from boroughs.domain.models.item import EquipmentSlot, Item
from boroughs.domain.models.world import World


class GameConfigTests(unittest.TestCase):
    def test_defaults_without_environment(self) -> None:
        config = GameConfig.from_env()

        self.assertEqual(DEFAULT_SAVE_URL, config.save_url)
        self.assertIsNone(config.seed)
        self.assertEqual("WARNING", config.log_level)
        self.assertEqual(25, config.inventory_limit)
        self.assertEqual("autosave", config.default_slot)

    def test_environment_overrides(self) -> None:
        env = {
            "BOROUGHS_DATA_DIR": "/tmp/boroughs-data",
            "BOROUGHS_SAVE_URL": "",
            "BOROUGHS_SEED": "42",
            "BOROUGHS_LOG_LEVEL": "debug",
            "BOROUGHS_INVENTORY_LIMIT": "12",
        }
        with mock.patch.dict(os.environ, env):
            config = GameConfig.from_env()

        self.assertEqual(Path("/tmp/boroughs-data"), config.data_dir)
        self.assertEqual("", config.save_url)
        self.assertEqual(42, config.seed)
        self.assertEqual("DEBUG", config.log_level)
        self.assertEqual(12, config.inventory_limit)


class StatusTableTests(unittest.TestCase):
    def test_status_covers_every_section(self) -> None:
        character = Character(name="Ari", stats={"agility": 12})
        character.equip_item(EquipmentSlot.TOP, Item(id="tee", name="Tee", type="clothing", category="top"))
        world = World(active_district="harbor", active_place="docks")

        tables = to_status_tables(character, world)

        self.assertEqual(
            ["Stats", "Vitals", "Needs & image", "Inventory (0/25)", "Equipment"],
            [table.title for table in tables],
        )
        stats = dict((row[0], row[1]) for row in tables[0].rows)
        self.assertEqual("12", stats["Agility"])
        self.assertEqual("1", stats["Cooking"])
        vitals = tables[1].rows[0]
        self.assertEqual(["100", "80", "70", "10", "1", "08:00", "harbor", "docks"], vitals)
        equipment = dict((row[0], row[1]) for row in tables[4].rows)
        self.assertEqual("Tee", equipment["Top"])
        self.assertEqual("-", equipment["Shoes"])

    def test_inventory_table_lists_items_with_weight(self) -> None:
        character = Character(name="Ari", inventory=Inventory(limit=10))
        self.assertEqual([["Empty", ""]], to_inventory_table(character).rows)

        character.inventory.add(Item(id="rice", name="Bag of rice", weight=2, type="ingredient"))
        table = to_inventory_table(character)

        self.assertEqual("Inventory (2/10)", table.title)
        self.assertEqual([["Bag of rice", "2"]], table.rows)


if __name__ == "__main__":
    unittest.main()
