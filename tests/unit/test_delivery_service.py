import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from boroughs.application.services import delivery_service
from boroughs.application.session import GameSession
from boroughs.domain.models.character import Character
from boroughs.domain.models.delivery import DeliveryStage, stage_of
from boroughs.domain.models.world import World
from boroughs.domain.services.random_source import RandomSource


class _ScriptedRandom(RandomSource):
    def __init__(self, percentiles=(), picks=()) -> None:
        super().__init__(seed=0)
        self.percentiles = list(percentiles)
        self.picks = list(picks)

    def percentile(self) -> float:
        return self.percentiles.pop(0) if self.percentiles else 99.9

    def pick(self, options):
        if not options:
            raise ValueError("Cannot pick from an empty sequence")
        if self.picks and self.picks[0] in options:
            return self.picks.pop(0)
        return options[0]

    def shuffled(self, options):
        return list(options)


def _session(rng: RandomSource, *, job: str = "courier", district: str = "downtown", place: str = "courier office") -> GameSession:
    character = Character(name="Ari", job=job)
    world = World(active_district=district, active_place=place)
    return GameSession(character=character, world=world, rng=rng)


class DeliveryPreconditionTests(unittest.TestCase):
    def test_only_couriers_get_shifts(self) -> None:
        session = _session(_ScriptedRandom(), job="barista")

        result = delivery_service.start_shift(session)

        self.assertFalse(result.consumes_turn)
        self.assertIsNone(session.delivery)
        self.assertIn("courier", result.narration.system)

    def test_shift_requires_the_courier_office(self) -> None:
        session = _session(_ScriptedRandom(), district="slums", place="market")

        result = delivery_service.start_shift(session)

        self.assertFalse(result.consumes_turn)
        self.assertIsNone(session.delivery)

    def test_only_one_shift_at_a_time(self) -> None:
        session = _session(_ScriptedRandom(picks=[3]))
        delivery_service.start_shift(session)
        quest = session.delivery

        result = delivery_service.start_shift(session)

        self.assertFalse(result.consumes_turn)
        self.assertIs(quest, session.delivery)

    def test_pickup_and_deliver_without_shift(self) -> None:
        session = _session(_ScriptedRandom())

        self.assertFalse(delivery_service.pickup(session).consumes_turn)
        self.assertFalse(delivery_service.deliver(session).consumes_turn)
        self.assertIs(DeliveryStage.NONE, stage_of(session.delivery))


class DeliveryLifecycleTests(unittest.TestCase):
    def test_new_shift_is_assigned_with_dropoff_elsewhere(self) -> None:
        session = _session(_ScriptedRandom(picks=[3, ("harbor", "docks")]))

        result = delivery_service.start_shift(session)

        quest = session.delivery
        self.assertTrue(result.consumes_turn)
        self.assertIs(DeliveryStage.ASSIGNED, stage_of(quest))
        self.assertEqual(3, quest.total_tasks)
        self.assertEqual(("downtown", "courier office"), quest.pickup)
        self.assertEqual(("harbor", "docks"), quest.dropoff)
        self.assertEqual(1, len(session.journal.entries()))

    def test_dropoff_never_lands_on_the_pickup(self) -> None:
        session = _session(_ScriptedRandom(picks=[2, ("downtown", "courier office")]))

        delivery_service.start_shift(session)

        self.assertNotEqual(session.delivery.pickup, session.delivery.dropoff)

    def test_deliver_before_pickup_is_refused(self) -> None:
        session = _session(_ScriptedRandom(picks=[2, ("harbor", "docks")]))
        delivery_service.start_shift(session)
        session.world.move_to("harbor", "docks")

        result = delivery_service.deliver(session)

        self.assertFalse(result.consumes_turn)
        self.assertEqual(0, session.delivery.completed)

    def test_delivery_at_wrong_place_changes_nothing(self) -> None:
        session = _session(_ScriptedRandom(picks=[2, ("harbor", "docks")]))
        delivery_service.start_shift(session)
        delivery_service.pickup(session)
        money = session.character.money
        session.world.move_to("uptown", "park")

        result = delivery_service.deliver(session)

        self.assertFalse(result.consumes_turn)
        self.assertEqual(money, session.character.money)
        self.assertEqual(0, session.delivery.completed)

    def test_full_shift_pays_and_clears_the_quest(self) -> None:
        rng = _ScriptedRandom(
            percentiles=[10.0, 99.0],
            picks=[2, ("harbor", "docks"), ("uptown", "park")],
        )
        session = _session(rng)
        character = session.character

        delivery_service.start_shift(session)
        pickup = delivery_service.pickup(session)
        self.assertTrue(pickup.consumes_turn)
        self.assertIs(DeliveryStage.IN_TRANSIT, stage_of(session.delivery))
        self.assertEqual(78, character.energy)

        session.world.move_to("harbor", "docks")
        first = delivery_service.deliver(session)
        self.assertTrue(first.consumes_turn)
        self.assertEqual(100 + 35, character.money)
        self.assertEqual(2, character.skills["streetwise"])
        self.assertEqual(1, session.delivery.completed)
        self.assertEqual(("uptown", "park"), session.delivery.dropoff)

        session.world.move_to("uptown", "park")
        delivery_service.deliver(session)
        self.assertEqual(100 + 35 + 15 + 20, character.money)
        self.assertIsNone(session.delivery)
        self.assertIs(DeliveryStage.NONE, stage_of(session.delivery))

        again = delivery_service.deliver(session)
        self.assertFalse(again.consumes_turn)
        self.assertIn("no active", again.narration.system)

    def test_success_chance_averages_agility_and_intellect(self) -> None:
        session = _session(_ScriptedRandom())
        session.character.stats["agility"] = 14
        session.character.stats["intellect"] = 10

        self.assertEqual((72 + 60) // 2, delivery_service.delivery_chance(session))


if __name__ == "__main__":
    unittest.main()
