import unittest

from absl.testing import parameterized

from sulcalc.game.schema.enums import MAX_GEN, Generation, Terrain, Weather


class GenerationTest(parameterized.TestCase):
    @parameterized.parameters(
        ("1", Generation.RBY),
        ("rby", Generation.RBY),
        ("GSC", Generation.GSC),
        ("4", Generation.HGSS),
        ("b2w2", Generation.B2W2),
        ("B2/W2", Generation.B2W2),
        ("oras", Generation.ORAS),
        ("7", Generation.SM),
    )
    def test_from_name(self, name: str, expected: Generation) -> None:
        self.assertEqual(Generation.from_name(name), expected)

    @parameterized.parameters("0", "8", "xy", "")
    def test_from_name_unknown(self, name: str) -> None:
        with self.assertRaises(ValueError):
            Generation.from_name(name)

    def test_generations_are_ordered(self) -> None:
        self.assertLess(Generation.ADV, Generation.HGSS)
        self.assertEqual(MAX_GEN, Generation.SM)
        self.assertEqual(int(Generation.B2W2), 5)


class WeatherTest(parameterized.TestCase):
    @parameterized.parameters(
        ("Sunny Day", Weather.SUN),
        ("rain", Weather.RAIN),
        ("Sand", Weather.SANDSTORM),
        ("hail", Weather.HAIL),
        ("Desolate Land", Weather.HARSH_SUN),
        ("Heavy Rain", Weather.HEAVY_RAIN),
        ("Delta Stream", Weather.STRONG_WINDS),
        ("none", Weather.NONE),
    )
    def test_from_name(self, name: str, expected: Weather) -> None:
        self.assertEqual(Weather.from_name(name), expected)

    def test_from_name_unknown(self) -> None:
        with self.assertRaises(ValueError) as context:
            Weather.from_name("fog")
        self.assertIn("Unknown weather", str(context.exception))


class TerrainTest(parameterized.TestCase):
    @parameterized.parameters(
        ("Electric Terrain", Terrain.ELECTRIC),
        ("electric", Terrain.ELECTRIC),
        ("grassy", Terrain.GRASSY),
        ("Psychic Terrain", Terrain.PSYCHIC),
        ("misty", Terrain.MISTY),
        ("none", Terrain.NONE),
    )
    def test_from_name(self, name: str, expected: Terrain) -> None:
        self.assertEqual(Terrain.from_name(name), expected)

    def test_from_name_unknown(self) -> None:
        with self.assertRaises(ValueError) as context:
            Terrain.from_name("lava")
        self.assertIn("Unknown terrain", str(context.exception))


if __name__ == "__main__":
    unittest.main()
