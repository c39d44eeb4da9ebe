import unittest

from absl.testing import parameterized

from sulcalc.damage.calculate import (
    adv_calculate,
    b2w2_calculate,
    calculate,
    gsc_calculate,
    hgss_calculate,
    rby_calculate,
    sm_calculate,
)
from sulcalc.exceptions import UnsupportedGenerationError
from sulcalc.game.data.game_data import GameData
from sulcalc.game.schema.combatant import AttackMove, Combatant, EffortValues
from sulcalc.game.schema.enums import (
    Generation,
    SideCondition,
    Stat,
    Status,
    Terrain,
    Weather,
)
from sulcalc.game.schema.field_state import FieldState


def heatran(**kwargs) -> Combatant:
    return Combatant(
        species="Heatran",
        nature="Timid",
        evs=EffortValues.from_list([252, 0, 0, 0, 4, 252]),
        **kwargs,
    )


def landorus_therian(**kwargs) -> Combatant:
    return Combatant(
        species="Landorus-Therian",
        nature="Impish",
        evs=EffortValues.from_list([252, 0, 216, 0, 24, 16]),
        **kwargs,
    )


def max_damage(rolls) -> int:
    return max(rolls)


class SanityTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.game_data = GameData()

    @parameterized.parameters(Generation.B2W2, Generation.ORAS, Generation.SM)
    def test_lava_plume_into_landorus(self, gen: Generation) -> None:
        damage = calculate(
            heatran(),
            landorus_therian(),
            AttackMove("Lava Plume"),
            FieldState(gen=gen),
            self.game_data,
        )
        self.assertEqual(max_damage(damage), 150)

    def test_lava_plume_rolls(self) -> None:
        damage = sm_calculate(heatran(), landorus_therian(), AttackMove("Lava Plume"))
        self.assertEqual(
            damage,
            [127, 129, 130, 132, 133, 135, 136, 138, 139, 141, 142, 144, 145, 147]
            + [148, 150],
        )

    def test_rolls_are_sorted(self) -> None:
        damage = b2w2_calculate(
            landorus_therian(), heatran(), AttackMove("Earthquake")
        )
        self.assertLen(damage, 16)
        self.assertEqual(damage, sorted(damage))

    def test_generation_wrappers_override_field_gen(self) -> None:
        field = FieldState(gen=Generation.SM, weather=Weather.SUN)
        via_wrapper = b2w2_calculate(
            heatran(), landorus_therian(), AttackMove("Lava Plume"), field
        )
        direct = calculate(
            heatran(),
            landorus_therian(),
            AttackMove("Lava Plume"),
            FieldState(gen=Generation.B2W2, weather=Weather.SUN),
        )
        self.assertEqual(via_wrapper, direct)

    def test_unsupported_generation(self) -> None:
        with self.assertRaises(UnsupportedGenerationError):
            calculate(
                heatran(),
                landorus_therian(),
                AttackMove("Lava Plume"),
                FieldState(gen=8),  # type: ignore[arg-type]
            )

    def test_unknown_move(self) -> None:
        with self.assertRaisesRegex(ValueError, "Move not found"):
            sm_calculate(heatran(), landorus_therian(), AttackMove("Not A Move"))


class BlockerTest(parameterized.TestCase):
    def test_psychic_terrain_blocks_priority_moves(self) -> None:
        field = FieldState(gen=Generation.SM, terrain=Terrain.PSYCHIC)
        damage = calculate(
            landorus_therian(), heatran(), AttackMove("Quick Attack"), field
        )
        self.assertEqual(damage, [0])

    def test_psychic_terrain_blocks_priority_into_airborne_target(self) -> None:
        field = FieldState(gen=Generation.SM, terrain=Terrain.PSYCHIC)
        damage = calculate(
            heatran(), landorus_therian(), AttackMove("Quick Attack"), field
        )
        self.assertEqual(damage, [0])

    def test_psychic_terrain_allows_normal_priority_moves(self) -> None:
        field = FieldState(gen=Generation.SM, terrain=Terrain.PSYCHIC)
        damage = calculate(
            landorus_therian(), heatran(), AttackMove("Earthquake"), field
        )
        self.assertEqual(damage, [0])

    @parameterized.named_parameters(
        ("ghost_immunity", "Tauros", "Gengar", "Body Slam", None),
        ("levitate", "Landorus-Therian", "Rotom-Wash", "Earthquake", None),
        ("flash_fire", "Heatran", "Heatran", "Flamethrower", None),
        ("ground_into_flying", "Garchomp", "Landorus-Therian", "Earthquake", None),
        ("electric_into_ground", "Pikachu", "Garchomp", "Thunderbolt", None),
        ("wonder_guard", "Garchomp", "Shedinja", "Earthquake", None),
        ("status_move", "Scizor", "Heatran", "Swords Dance", None),
        ("air_balloon", "Garchomp", "Heatran", "Earthquake", "Air Balloon"),
    )
    def test_blocked(
        self, attacker: str, defender: str, move: str, defender_item
    ) -> None:
        damage = sm_calculate(
            Combatant(attacker),
            Combatant(defender, item=defender_item),
            AttackMove(move),
        )
        self.assertEqual(damage, [0])

    def test_wonder_guard_allows_super_effective(self) -> None:
        damage = sm_calculate(
            Combatant("Heatran"), Combatant("Shedinja"), AttackMove("Flamethrower")
        )
        self.assertGreater(max_damage(damage), 0)

    def test_ability_immunities_need_abilities(self) -> None:
        damage = gsc_calculate(
            Combatant("Heatran"), Combatant("Heatran"), AttackMove("Flamethrower")
        )
        self.assertGreater(max_damage(damage), 0)

    def test_air_balloon_did_not_exist_in_hgss(self) -> None:
        damage = hgss_calculate(
            Combatant("Garchomp"),
            Combatant("Heatran", item="Air Balloon"),
            AttackMove("Earthquake"),
        )
        self.assertGreater(max_damage(damage), 0)

    def test_mold_breaker_ignores_levitate(self) -> None:
        damage = sm_calculate(
            Combatant("Garchomp", ability="Mold Breaker"),
            Combatant("Rotom-Wash"),
            AttackMove("Earthquake"),
        )
        self.assertGreater(max_damage(damage), 0)

    def test_scrappy_hits_ghosts(self) -> None:
        damage = sm_calculate(
            Combatant("Tauros", ability="Scrappy"),
            Combatant("Gengar"),
            AttackMove("Body Slam"),
        )
        self.assertGreater(max_damage(damage), 0)

    @parameterized.parameters(
        (Weather.HEAVY_RAIN, "Flamethrower"),
        (Weather.HARSH_SUN, "Surf"),
    )
    def test_primal_weather(self, weather: Weather, move: str) -> None:
        field = FieldState(gen=Generation.ORAS, weather=weather)
        damage = calculate(
            Combatant("Alakazam"), Combatant("Snorlax"), AttackMove(move), field
        )
        self.assertEqual(damage, [0])

    def test_primal_weather_is_plain_weather_before_oras(self) -> None:
        field = FieldState(gen=Generation.B2W2, weather=Weather.HEAVY_RAIN)
        damage = calculate(
            Combatant("Heatran"),
            Combatant("Snorlax"),
            AttackMove("Flamethrower"),
            field,
        )
        self.assertGreater(max_damage(damage), 0)


class FixedDamageTest(parameterized.TestCase):
    @parameterized.parameters(
        ("Chansey", "Snorlax", "Seismic Toss", 50, [50]),
        ("Gengar", "Alakazam", "Night Shade", 73, [73]),
        ("Dragonite", "Snorlax", "Dragon Rage", 100, [40]),
        ("Chansey", "Snorlax", "Sonic Boom", 100, [20]),
    )
    def test_fixed_damage(
        self, attacker: str, defender: str, move: str, level: int, expected
    ) -> None:
        damage = sm_calculate(
            Combatant(attacker, level=level), Combatant(defender), AttackMove(move)
        )
        self.assertEqual(damage, expected)

    def test_super_fang_halves_current_hp(self) -> None:
        damage = sm_calculate(
            Combatant("Snorlax"),
            Combatant("Chansey", current_hp=301),
            AttackMove("Super Fang"),
        )
        self.assertEqual(damage, [150])

    def test_fixed_damage_respects_immunity(self) -> None:
        damage = sm_calculate(
            Combatant("Chansey"), Combatant("Gengar"), AttackMove("Seismic Toss")
        )
        self.assertEqual(damage, [0])


class CartridgeGenerationTest(parameterized.TestCase):
    def test_rby_body_slam(self) -> None:
        damage = rby_calculate(
            Combatant("Tauros"), Combatant("Snorlax"), AttackMove("Body Slam")
        )
        self.assertLen(damage, 39)
        self.assertEqual(damage[0], 131)
        self.assertEqual(damage[-1], 154)

    def test_gsc_matches_rby_without_gsc_mechanics(self) -> None:
        args = (Combatant("Tauros"), Combatant("Snorlax"), AttackMove("Body Slam"))
        self.assertEqual(gsc_calculate(*args), rby_calculate(*args))

    def test_rby_critical_hit_doubles_level(self) -> None:
        damage = rby_calculate(
            Combatant("Tauros"),
            Combatant("Snorlax"),
            AttackMove("Body Slam", critical=True),
        )
        self.assertEqual(damage[-1], 300)

    def test_gsc_critical_hit_doubles_damage(self) -> None:
        damage = gsc_calculate(
            Combatant("Tauros"),
            Combatant("Snorlax"),
            AttackMove("Body Slam", critical=True),
        )
        self.assertEqual(damage[-1], 306)

    def test_rby_critical_hit_ignores_boosts(self) -> None:
        boosted = Combatant("Tauros", stat_boosts={Stat.ATK: 2})
        crit = AttackMove("Body Slam", critical=True)
        self.assertEqual(
            rby_calculate(boosted, Combatant("Snorlax"), crit),
            rby_calculate(Combatant("Tauros"), Combatant("Snorlax"), crit),
        )

    def test_gsc_held_type_item(self) -> None:
        plain = gsc_calculate(
            Combatant("Starmie"), Combatant("Snorlax"), AttackMove("Surf")
        )
        boosted = gsc_calculate(
            Combatant("Starmie", item="Mystic Water"),
            Combatant("Snorlax"),
            AttackMove("Surf"),
        )
        self.assertGreater(max_damage(boosted), max_damage(plain))

    def test_rby_ignores_items(self) -> None:
        plain = rby_calculate(
            Combatant("Tauros"), Combatant("Snorlax"), AttackMove("Body Slam")
        )
        holding = rby_calculate(
            Combatant("Tauros", item="Silk Scarf"),
            Combatant("Snorlax"),
            AttackMove("Body Slam"),
        )
        self.assertEqual(plain, holding)

    def test_reflect_weakens_physical_hits(self) -> None:
        plain = rby_calculate(
            Combatant("Tauros"), Combatant("Snorlax"), AttackMove("Body Slam")
        )
        screened = rby_calculate(
            Combatant("Tauros"),
            Combatant("Snorlax", side_conditions=frozenset({SideCondition.REFLECT})),
            AttackMove("Body Slam"),
        )
        self.assertLess(max_damage(screened), max_damage(plain))

    def test_gsc_rain_boosts_water(self) -> None:
        dry = gsc_calculate(
            Combatant("Starmie"), Combatant("Snorlax"), AttackMove("Surf")
        )
        rain = gsc_calculate(
            Combatant("Starmie"),
            Combatant("Snorlax"),
            AttackMove("Surf"),
            FieldState(weather=Weather.RAIN),
        )
        self.assertGreater(max_damage(rain), max_damage(dry))


class ModernGenerationTest(parameterized.TestCase):
    @parameterized.parameters(adv_calculate, hgss_calculate, b2w2_calculate)
    def test_body_slam_range(self, calculate_fn) -> None:
        damage = calculate_fn(
            Combatant("Tauros"), Combatant("Snorlax"), AttackMove("Body Slam")
        )
        self.assertLen(damage, 16)
        self.assertEqual(damage[0], 130)
        self.assertEqual(damage[-1], 154)

    def test_burn_halves_physical_damage(self) -> None:
        plain = sm_calculate(
            Combatant("Tauros"), Combatant("Snorlax"), AttackMove("Body Slam")
        )
        burned = sm_calculate(
            Combatant("Tauros", status=Status.BURN),
            Combatant("Snorlax"),
            AttackMove("Body Slam"),
        )
        self.assertEqual(max_damage(burned), 77)
        self.assertLess(max_damage(burned), max_damage(plain))

    def test_guts_ignores_burn(self) -> None:
        burned = sm_calculate(
            Combatant("Tauros", ability="Guts", status=Status.BURN),
            Combatant("Snorlax"),
            AttackMove("Body Slam"),
        )
        plain = sm_calculate(
            Combatant("Tauros"), Combatant("Snorlax"), AttackMove("Body Slam")
        )
        self.assertGreater(max_damage(burned), max_damage(plain))

    def test_neuroforce_boosts_super_effective_attacks(self) -> None:
        damage = sm_calculate(
            Combatant("Necrozma-Dawn-Wings"), heatran(), AttackMove("Surf")
        )
        boosted = sm_calculate(
            Combatant("Necrozma-Dawn-Wings", ability="Neuroforce"),
            heatran(),
            AttackMove("Surf"),
        )
        self.assertEqual(max_damage(damage), 216)
        self.assertEqual(max_damage(boosted), 270)

    def test_aurora_veil_single_and_multi_battles_differ(self) -> None:
        veiled = heatran(side_conditions=frozenset({SideCondition.AURORA_VEIL}))
        single = sm_calculate(landorus_therian(), veiled, AttackMove("Earthquake"))
        multi = sm_calculate(
            landorus_therian(),
            veiled,
            AttackMove("Earthquake"),
            FieldState(multi_battle=True),
        )
        plain = sm_calculate(landorus_therian(), heatran(), AttackMove("Earthquake"))
        self.assertNotEqual(single, multi)
        self.assertLess(max_damage(single), max_damage(plain))

    def test_aurora_veil_did_not_exist_in_oras(self) -> None:
        veiled = heatran(side_conditions=frozenset({SideCondition.AURORA_VEIL}))
        field = FieldState(gen=Generation.ORAS)
        self.assertEqual(
            calculate(landorus_therian(), veiled, AttackMove("Earthquake"), field),
            calculate(landorus_therian(), heatran(), AttackMove("Earthquake"), field),
        )

    def test_critical_hit_ignores_screens(self) -> None:
        screened = heatran(side_conditions=frozenset({SideCondition.REFLECT}))
        crit = AttackMove("Earthquake", critical=True)
        self.assertEqual(
            sm_calculate(landorus_therian(), screened, crit),
            sm_calculate(landorus_therian(), heatran(), crit),
        )

    def test_critical_hit_multiplier_by_generation(self) -> None:
        args = (Combatant("Tauros"), Combatant("Snorlax"))
        b2w2_crit = b2w2_calculate(*args, AttackMove("Body Slam", critical=True))
        sm_crit = sm_calculate(*args, AttackMove("Body Slam", critical=True))
        self.assertGreater(max_damage(b2w2_crit), max_damage(sm_crit))

    def test_fairy_aura_and_aura_break(self) -> None:
        xerneas = Combatant(
            "Xerneas",
            item="Life Orb",
            nature="Modest",
            evs=EffortValues.from_list([0, 0, 0, 252, 0, 0]),
        )
        garchomp = Combatant("Garchomp")
        moonblast = AttackMove("Moonblast")
        plain = sm_calculate(xerneas, garchomp, moonblast, FieldState())
        aura = sm_calculate(xerneas, garchomp, moonblast, FieldState(fairy_aura=True))
        broken = sm_calculate(
            xerneas, garchomp, moonblast, FieldState(fairy_aura=True, aura_break=True)
        )
        self.assertGreater(max_damage(aura), max_damage(plain))
        self.assertLess(max_damage(broken), max_damage(plain))

    def test_fairy_aura_did_not_exist_in_b2w2(self) -> None:
        xerneas = Combatant("Xerneas")
        garchomp = Combatant("Garchomp")
        moonblast = AttackMove("Moonblast")
        self.assertEqual(
            b2w2_calculate(xerneas, garchomp, moonblast, FieldState(fairy_aura=True)),
            b2w2_calculate(xerneas, garchomp, moonblast),
        )

    @parameterized.named_parameters(
        ("choice_band", {"item": "Choice Band"}),
        ("life_orb", {"item": "Life Orb"}),
        ("huge_power", {"ability": "Huge Power"}),
        ("attack_boost", {"stat_boosts": {Stat.ATK: 1}}),
        ("helping_hand", {"helping_hand": True}),
        ("type_item", {"item": "Silk Scarf"}),
    )
    def test_attacker_boosts(self, options) -> None:
        plain = sm_calculate(
            Combatant("Tauros"), Combatant("Snorlax"), AttackMove("Body Slam")
        )
        boosted = sm_calculate(
            Combatant(
                "Tauros", **options), Combatant("Snorlax"), AttackMove("Body Slam"
            )
        )
        self.assertGreater(max_damage(boosted), max_damage(plain))

    @parameterized.named_parameters(
        ("eviolite", "Tauros", "Chansey", "Body Slam", {"item": "Eviolite"}),
        ("fur_coat", "Tauros", "Snorlax", "Body Slam", {"ability": "Fur Coat"}),
        (
            "defense_boost",
            "Tauros",
            "Snorlax",
            "Body Slam",
            {"stat_boosts": {Stat.DEF: 2}},
        ),
        ("thick_fat", "Heatran", "Snorlax", "Flamethrower", {"ability": "Thick Fat"}),
        ("multiscale", "Tauros", "Dragonite", "Body Slam", {"ability": "Multiscale"}),
    )
    def test_defender_reductions(
        self, attacker: str, defender: str, move: str, options
    ) -> None:
        plain = sm_calculate(Combatant(attacker), Combatant(defender), AttackMove(move))
        reduced = sm_calculate(
            Combatant(attacker), Combatant(defender, **options), AttackMove(move)
        )
        self.assertLess(max_damage(reduced), max_damage(plain))

    def test_multiscale_only_at_full_hp(self) -> None:
        dragonite = Combatant("Dragonite", ability="Multiscale", current_hp=100)
        plain = Combatant("Dragonite", ability="Inner Focus", current_hp=100)
        self.assertEqual(
            sm_calculate(Combatant("Tauros"), dragonite, AttackMove("Body Slam")),
            sm_calculate(Combatant("Tauros"), plain, AttackMove("Body Slam")),
        )

    def test_expert_belt_only_on_super_effective(self) -> None:
        belt = Combatant("Garchomp", item="Expert Belt")
        neutral_plain = sm_calculate(
            Combatant("Garchomp"), Combatant("Snorlax"), AttackMove("Earthquake")
        )
        neutral_belt = sm_calculate(
            belt, Combatant("Snorlax"), AttackMove("Earthquake")
        )
        self.assertEqual(neutral_plain, neutral_belt)
        super_plain = sm_calculate(
            Combatant("Garchomp"), heatran(), AttackMove("Earthquake")
        )
        super_belt = sm_calculate(belt, heatran(), AttackMove("Earthquake"))
        self.assertGreater(max_damage(super_belt), max_damage(super_plain))

    def test_spread_moves_weaker_in_multi_battles(self) -> None:
        single = sm_calculate(landorus_therian(), heatran(), AttackMove("Earthquake"))
        multi = sm_calculate(
            landorus_therian(),
            heatran(),
            AttackMove("Earthquake"),
            FieldState(multi_battle=True),
        )
        self.assertLess(max_damage(multi), max_damage(single))

    def test_electric_terrain_boosts_grounded_attacker(self) -> None:
        plain = sm_calculate(
            Combatant("Pikachu"), Combatant("Snorlax"), AttackMove("Thunderbolt")
        )
        terrain = sm_calculate(
            Combatant("Pikachu"),
            Combatant("Snorlax"),
            AttackMove("Thunderbolt"),
            FieldState(terrain=Terrain.ELECTRIC),
        )
        self.assertGreater(max_damage(terrain), max_damage(plain))

    def test_minimum_damage_is_one(self) -> None:
        damage = sm_calculate(
            Combatant("Chansey", level=1), Combatant("Heatran"), AttackMove("Tackle")
        )
        self.assertEqual(min(damage), 1)


class TypeEffectivenessTest(parameterized.TestCase):
    """Surf into Garchomp: 1/2 from Dragon, 2 from Ground."""

    def test_hgss_truncates_after_each_type(self) -> None:
        damage = hgss_calculate(
            Combatant("Starmie"), Combatant("Garchomp"), AttackMove("Surf")
        )
        self.assertEqual(
            damage,
            [110, 112, 114, 114, 116, 118, 120, 120]
            + [120, 122, 124, 126, 126, 128, 130, 132],
        )

    @parameterized.parameters(Generation.B2W2, Generation.ORAS, Generation.SM)
    def test_modern_applies_combined_effectiveness(self, gen: Generation) -> None:
        damage = calculate(
            Combatant("Starmie"),
            Combatant("Garchomp"),
            AttackMove("Surf"),
            FieldState(gen=gen),
        )
        self.assertEqual(
            damage,
            [111, 112, 114, 115, 117, 118, 120, 120]
            + [121, 123, 124, 126, 127, 129, 130, 132],
        )


if __name__ == "__main__":
    unittest.main()
