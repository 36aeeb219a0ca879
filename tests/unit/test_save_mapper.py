import json
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from boroughs.application.mappers.save_mapper import (
    SAVE_FORMAT_VERSION,
    character_from_dict,
    session_from_payload,
    session_to_payload,
)
from boroughs.application.session import GameSession
from boroughs.domain.errors import SaveCorruptedError
from boroughs.domain.events import ContactAdded
from boroughs.domain.models.catalog import Catalogs
from boroughs.domain.models.character import Character
from boroughs.domain.models.delivery import DeliveryQuest
from boroughs.domain.models.item import EquipmentSlot, Item, ItemEffects
from boroughs.domain.models.world import World
from boroughs.domain.services.random_source import RandomSource


_ROSTER = [
    {"id": "mira", "name": "Mira", "role": "barista", "district": "downtown", "place": "cafe"},
    {"id": "dex", "name": "Dex", "role": "fixer", "district": "nightlife", "place": "bar"},
]


def _played_session() -> GameSession:
    character = Character(name="Ari", gender="female", job="courier", money=240, hunger=41)
    character.inventory.add(Item(id="soda", name="Soda", weight=1, type="food", price=3, nutrition=5))
    jacket = Item(
        id="leather_jacket",
        name="Leather jacket",
        weight=3,
        type="clothing",
        category="top",
        effects=ItemEffects(stats={"charisma": 2}, morale=2),
    )
    character.equip_item(EquipmentSlot.TOP, jacket)
    character.add_contact("mira")
    world = World(active_district="harbor", active_place="docks")
    world.advance_time(30)
    session = GameSession.from_roster(character, world, RandomSource(seed=3), Catalogs(npcs=_ROSTER))
    session.npcs[0].adjust_relationship(12)
    session.delivery = DeliveryQuest(
        total_tasks=3,
        pickup=("downtown", "courier office"),
        dropoff=("uptown", "park"),
        completed=1,
        picked_up=True,
    )
    session.publish(ContactAdded(npc_id="mira", npc_name="Mira"))
    return session


class SavePayloadTests(unittest.TestCase):
    def test_payload_is_plain_json(self) -> None:
        payload = session_to_payload(_played_session())

        self.assertEqual(SAVE_FORMAT_VERSION, payload["version"])
        self.assertEqual(payload, json.loads(json.dumps(payload)))
        self.assertEqual("park", payload["character"]["quest"]["dropoff"][1])

    def test_restored_session_keeps_progress(self) -> None:
        original = _played_session()
        payload = json.loads(json.dumps(session_to_payload(original)))

        restored = session_from_payload(payload, catalogs=Catalogs(npcs=_ROSTER), rng=RandomSource(seed=1))

        character = restored.character
        self.assertEqual(original.character.morale, character.morale)
        self.assertEqual(240, character.money)
        self.assertEqual(41, character.hunger)
        self.assertEqual(["soda"], [item.id for item in character.inventory])
        self.assertEqual("Leather jacket", character.equipment.get(EquipmentSlot.TOP).name)
        self.assertEqual(original.character.attractiveness, character.attractiveness)
        self.assertEqual(["mira"], character.contacts)
        self.assertEqual(("harbor", "docks"), restored.world.location)
        self.assertEqual((2, 14), (restored.world.time.day, restored.world.time.hour))
        self.assertEqual(12, restored.find_npc("mira").relationship)
        self.assertEqual(1, restored.delivery.completed)
        self.assertTrue(restored.delivery.picked_up)
        self.assertEqual(["New contact: Mira."], restored.journal.entries())
        self.assertIsNone(restored.menu)

    def test_property_and_worn_morale_survive_a_round_trip(self) -> None:
        original = _played_session()
        original.character.residence["address"] = "12 Canal St"
        payload = json.loads(json.dumps(session_to_payload(original)))
        self.assertEqual("12 Canal St", payload["character"]["property"]["address"])

        restored = session_from_payload(payload, catalogs=Catalogs(npcs=_ROSTER), rng=RandomSource(seed=1))
        character = restored.character
        morale = character.morale
        character.unequip_item(EquipmentSlot.TOP)

        self.assertEqual("12 Canal St", character.residence["address"])
        self.assertEqual(morale - 2, character.morale)

    def test_saves_without_worn_morale_reverse_the_full_item_bonus(self) -> None:
        row = {"id": "leather_jacket", "name": "Leather jacket", "type": "clothing", "category": "top"}
        row["effects"] = {"morale": 2}
        character = character_from_dict({"name": "Bo", "morale": 50, "equipment": {"top": row}})

        character.unequip_item(EquipmentSlot.TOP)

        self.assertEqual(48, character.morale)
        self.assertEqual(100, character.hp)

    def test_missing_fields_fall_back_to_defaults(self) -> None:
        character = character_from_dict({"name": "Bo", "stats": {"charisma": 15}})

        self.assertEqual(15, character.stats["charisma"])
        self.assertEqual(10, character.stats["strength"])
        self.assertEqual(100, character.money)
        self.assertEqual(1, character.skills["cooking"])
        self.assertEqual(0, len(character.inventory))
        self.assertTrue(character.is_naked())

    def test_equipment_in_the_wrong_slot_is_dropped(self) -> None:
        character = character_from_dict(
            {
                "name": "Bo",
                "equipment": {"shoes": {"id": "basic_tee", "name": "Basic tee", "type": "clothing", "category": "top"}},
            }
        )

        self.assertIsNone(character.equipment.get(EquipmentSlot.SHOES))

    def test_missing_sections_raise(self) -> None:
        with self.assertRaises(SaveCorruptedError):
            session_from_payload({"character": {"name": "Bo"}}, catalogs=Catalogs(), rng=RandomSource(seed=1))
        with self.assertRaises(SaveCorruptedError):
            session_from_payload([], catalogs=Catalogs(), rng=RandomSource(seed=1))

    def test_undecodable_values_raise(self) -> None:
        payload = {"character": {"name": "Bo", "money": "plenty"}, "world": {}}

        with self.assertRaises(SaveCorruptedError):
            session_from_payload(payload, catalogs=Catalogs(), rng=RandomSource(seed=1))

    def test_finished_or_broken_quest_is_not_restored(self) -> None:
        broken = {"character": {"name": "Bo", "quest": {"total_tasks": 2}}, "world": {}}
        finished = {
            "character": {
                "name": "Bo",
                "quest": {"total_tasks": 2, "completed": 2, "pickup": ["a", "b"], "dropoff": ["c", "d"]},
            },
            "world": {},
        }

        for payload in (broken, finished):
            restored = session_from_payload(payload, catalogs=Catalogs(), rng=RandomSource(seed=1))
            self.assertIsNone(restored.delivery)


if __name__ == "__main__":
    unittest.main()
