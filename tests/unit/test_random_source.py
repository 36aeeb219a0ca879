import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from boroughs.domain.services.random_source import RandomSource, clamp


class _FixedPercentile(RandomSource):
    def __init__(self, value: float) -> None:
        super().__init__(seed=0)
        self.value = value

    def percentile(self) -> float:
        return self.value


class RandomSourceTests(unittest.TestCase):
    def test_clamp_bounds_both_sides(self) -> None:
        self.assertEqual(1, clamp(-40, 1, 20))
        self.assertEqual(20, clamp(99, 1, 20))
        self.assertEqual(7, clamp(7, 1, 20))

    def test_roll_succeeds_when_percentile_equals_chance(self) -> None:
        self.assertTrue(_FixedPercentile(68.0).roll(68))
        self.assertFalse(_FixedPercentile(68.5).roll(68))

    def test_same_seed_reproduces_the_same_sequence(self) -> None:
        first = RandomSource(seed=42)
        second = RandomSource(seed=42)
        options = ["a", "b", "c", "d"]

        self.assertEqual(
            [first.pick(options) for _ in range(20)],
            [second.pick(options) for _ in range(20)],
        )
        self.assertEqual(first.shuffled(range(10)), second.shuffled(range(10)))
        self.assertEqual(first.percentile(), second.percentile())

    def test_pick_from_empty_sequence_raises(self) -> None:
        with self.assertRaises(ValueError):
            RandomSource(seed=1).pick([])

    def test_percentile_stays_in_range(self) -> None:
        rng = RandomSource(seed=3)
        values = [rng.percentile() for _ in range(200)]
        self.assertTrue(all(0 <= value < 100 for value in values))


if __name__ == "__main__":
    unittest.main()
