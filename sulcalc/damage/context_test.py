import unittest
from typing import Optional

from absl.testing import parameterized

from sulcalc.damage.context import DamageContext, build_context
from sulcalc.game.data.game_data import GameData
from sulcalc.game.schema.combatant import AttackMove, Combatant
from sulcalc.game.schema.enums import Generation, Weather
from sulcalc.game.schema.field_state import FieldState


class BuildContextTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.game_data = GameData()

    def _context(
        self,
        attacker: Combatant,
        defender: Combatant,
        move: str,
        gen: Generation = Generation.SM,
        weather: Optional[Weather] = None,
    ) -> DamageContext:
        return build_context(
            attacker,
            defender,
            AttackMove(move),
            FieldState(gen=gen, weather=weather),
            self.game_data,
        )

    @parameterized.parameters(
        ("Crunch", Generation.ADV, "Special"),
        ("Crunch", Generation.HGSS, "Physical"),
        ("Shadow Ball", Generation.ADV, "Physical"),
        ("Shadow Ball", Generation.SM, "Special"),
        ("Swords Dance", Generation.ADV, "Status"),
    )
    def test_category(self, move: str, gen: Generation, expected: str) -> None:
        """Before the physical/special split the move type decides the category."""
        context = self._context(Combatant("Tyranitar"), Combatant("Snorlax"), move, gen)
        self.assertEqual(context.category, expected)

    @parameterized.parameters(
        (Generation.RBY, ""),
        (Generation.GSC, ""),
        (Generation.ADV, "flashfire"),
        (Generation.SM, "flashfire"),
    )
    def test_abilities_start_in_adv(self, gen: Generation, expected: str) -> None:
        context = self._context(
            Combatant("Heatran"), Combatant("Snorlax"), "Tackle", gen
        )
        self.assertEqual(context.attacker_ability, expected)

    def test_ability_from_later_generation_is_ignored(self) -> None:
        attacker = Combatant("Necrozma-Dawn-Wings", ability="Neuroforce")
        context = self._context(
            attacker, Combatant("Snorlax"), "Psychic", Generation.ORAS
        )
        self.assertEqual(context.attacker_ability, "")

    @parameterized.parameters(
        ("Assault Vest", Generation.B2W2, ""),
        ("Assault Vest", Generation.ORAS, "assaultvest"),
        ("Leftovers", Generation.RBY, ""),
        ("Leftovers", Generation.GSC, "leftovers"),
    )
    def test_items_from_later_generations_are_ignored(
        self, item: str, gen: Generation, expected: str
    ) -> None:
        defender = Combatant("Snorlax", item=item)
        context = self._context(Combatant("Tauros"), defender, "Body Slam", gen)
        self.assertEqual(context.defender_item, expected)

    @parameterized.parameters(
        ("Levitate", ""),
        ("Prism Armor", "prismarmor"),
    )
    def test_mold_breaker(self, ability: str, expected: str) -> None:
        attacker = Combatant("Garchomp", ability="Mold Breaker")
        defender = Combatant("Rotom-Wash", ability=ability)
        context = self._context(attacker, defender, "Earthquake")
        self.assertEqual(context.defender_ability, expected)

    def test_scrappy_hits_ghosts(self) -> None:
        attacker = Combatant("Tauros", ability="Scrappy")
        context = self._context(attacker, Combatant("Gengar"), "Body Slam")
        self.assertEqual(context.type_factors, (1.0, 1.0))

    @parameterized.parameters(
        (Generation.SM, Weather.STRONG_WINDS, 2.0),
        (Generation.ORAS, Weather.STRONG_WINDS, 2.0),
        (Generation.B2W2, Weather.STRONG_WINDS, 4.0),
        (Generation.SM, None, 4.0),
    )
    def test_delta_stream(
        self, gen: Generation, weather: Optional[Weather], expected: float
    ) -> None:
        """Strong winds remove the Flying-type weakness only."""
        context = self._context(
            Combatant("Starmie"), Combatant("Dragonite"), "Ice Beam", gen, weather
        )
        self.assertEqual(context.effectiveness, expected)

    @parameterized.parameters(
        ("Heatran", None, Generation.SM, True),
        ("Landorus-Therian", None, Generation.SM, False),
        ("Rotom-Wash", None, Generation.SM, False),
        ("Heatran", "Air Balloon", Generation.SM, False),
        ("Heatran", "Air Balloon", Generation.HGSS, True),
    )
    def test_defender_grounded(
        self, species: str, item: Optional[str], gen: Generation, expected: bool
    ) -> None:
        defender = Combatant(species, item=item)
        context = self._context(Combatant("Tauros"), defender, "Tackle", gen)
        self.assertEqual(context.defender_grounded(), expected)

    def test_defender_hp(self) -> None:
        context = self._context(
            Combatant("Tauros"), Combatant("Snorlax", current_hp=100), "Body Slam"
        )
        self.assertEqual(context.defender_hp(), 100)
        self.assertEqual(context.defender_max_hp, 461)

    def test_unknown_move(self) -> None:
        with self.assertRaises(ValueError):
            self._context(Combatant("Tauros"), Combatant("Snorlax"), "Not A Move")


if __name__ == "__main__":
    unittest.main()
