"""Blockers, stat adjustments and modifiers shared by the generation rule sets.

Modifiers return 4096-scaled multipliers and are combined with `chain_mod`.
The cartridge-era helpers (generations 1 to 4) work on plain integers with
truncating multiplication instead.
"""

from fractions import Fraction
from typing import Dict, List, Tuple

from sulcalc.arith.fixed_point import IDENTITY_MOD, apply_mod, chain_mods
from sulcalc.damage.context import DamageContext
from sulcalc.damage.pipeline import Rolls
from sulcalc.damage.stats import boost_stat
from sulcalc.game.schema.enums import (
    Generation,
    SideCondition,
    Stat,
    Status,
    Terrain,
    Weather,
)
from sulcalc.game.schema.object_name_normalizer import normalize_name

TYPE_BOOST_ITEMS: Dict[str, str] = {
    "silkscarf": "Normal",
    "blackbelt": "Fighting",
    "sharpbeak": "Flying",
    "poisonbarb": "Poison",
    "softsand": "Ground",
    "hardstone": "Rock",
    "silverpowder": "Bug",
    "spelltag": "Ghost",
    "metalcoat": "Steel",
    "charcoal": "Fire",
    "mysticwater": "Water",
    "miracleseed": "Grass",
    "magnet": "Electric",
    "twistedspoon": "Psychic",
    "nevermeltice": "Ice",
    "dragonfang": "Dragon",
    "blackglasses": "Dark",
    "pixieplate": "Fairy",
}

# Abilities that boost a type when the holder is at 1/3 HP or less
PINCH_ABILITIES: Dict[str, str] = {
    "blaze": "Fire",
    "torrent": "Water",
    "overgrow": "Grass",
    "swarm": "Bug",
}

# Ability -> (absorbed move type, first generation with the immunity)
ABILITY_IMMUNITIES: Dict[str, Tuple[str, Generation]] = {
    "levitate": ("Ground", Generation.ADV),
    "flashfire": ("Fire", Generation.ADV),
    "waterabsorb": ("Water", Generation.ADV),
    "voltabsorb": ("Electric", Generation.ADV),
    "motordrive": ("Electric", Generation.HGSS),
    "dryskin": ("Water", Generation.HGSS),
    "lightningrod": ("Electric", Generation.B2W2),
    "stormdrain": ("Water", Generation.B2W2),
    "sapsipper": ("Grass", Generation.B2W2),
}

TERRAIN_BOOSTS: Dict[Terrain, str] = {
    Terrain.ELECTRIC: "Electric",
    Terrain.GRASSY: "Grass",
    Terrain.PSYCHIC: "Psychic",
}

GRASSY_WEAKENED_MOVES = frozenset({"earthquake", "bulldoze", "magnitude"})

STAB_MOD = 0x1800
ADAPTABILITY_MOD = 0x2000


# Blockers


def status_move(context: DamageContext) -> bool:
    return context.move_data.category == "Status"


def type_immunity(context: DamageContext) -> bool:
    return context.effectiveness == 0


def ability_immunity(context: DamageContext) -> bool:
    immunity = ABILITY_IMMUNITIES.get(context.defender_ability)
    if immunity is None:
        return False
    move_type, since = immunity
    return context.move_type == move_type and context.gen >= since


def air_balloon(context: DamageContext) -> bool:
    return context.move_type == "Ground" and context.defender_item == "airballoon"


def wonder_guard(context: DamageContext) -> bool:
    return context.defender_ability == "wonderguard" and context.effectiveness <= 1


def psychic_terrain_priority(context: DamageContext) -> bool:
    """Psychic Terrain stops priority moves."""
    return (
        context.field.get_terrain() == Terrain.PSYCHIC
        and context.move_data.priority > 0
    )


def primal_weather(context: DamageContext) -> bool:
    weather = context.field.get_weather()
    if weather == Weather.HARSH_SUN:
        return context.move_type == "Water"
    if weather == Weather.HEAVY_RAIN:
        return context.move_type == "Fire"
    return False


# Conditions


def is_burned(context: DamageContext) -> bool:
    return (
        context.is_physical
        and context.attacker.status == Status.BURN
        and context.attacker_ability != "guts"
    )


def screen_active(context: DamageContext) -> bool:
    """Whether a screen on the defender's side weakens this hit."""
    if context.is_critical:
        return False
    defender = context.defender
    if context.gen >= Generation.SM and defender.has_side_condition(
        SideCondition.AURORA_VEIL
    ):
        return True
    if context.is_physical:
        return defender.has_side_condition(SideCondition.REFLECT)
    return defender.has_side_condition(SideCondition.LIGHT_SCREEN)


def single_screen(context: DamageContext) -> bool:
    return screen_active(context) and not context.field.multi_battle


def multi_screen(context: DamageContext) -> bool:
    return screen_active(context) and context.field.multi_battle


def flash_fire_active(context: DamageContext) -> bool:
    return (
        context.attacker.flash_fire
        and context.attacker_ability == "flashfire"
        and context.move_type == "Fire"
    )


def holds_type_boost_item(context: DamageContext) -> bool:
    return TYPE_BOOST_ITEMS.get(context.attacker_item) == context.move_type


def pinch_active(context: DamageContext) -> bool:
    boosted_type = PINCH_ABILITIES.get(context.attacker_ability)
    return (
        boosted_type == context.move_type
        and context.attacker_hp() <= context.attacker_max_hp // 3
    )


def is_critical(context: DamageContext) -> bool:
    return context.is_critical


def is_stab(context: DamageContext) -> bool:
    return context.is_stab


def is_super_effective(context: DamageContext) -> bool:
    return context.effectiveness > 1


def is_not_very_effective(context: DamageContext) -> bool:
    return context.effectiveness < 1


def weather_multiplier(context: DamageContext) -> int:
    """Weather effect on the move as a percentage (100 when unaffected)."""
    weather = context.field.get_weather()
    move_type = context.move_type
    if weather in (Weather.RAIN, Weather.HEAVY_RAIN):
        if move_type == "Water":
            return 150
        if move_type == "Fire":
            return 50
    if weather in (Weather.SUN, Weather.HARSH_SUN):
        if move_type == "Fire":
            return 150
        if move_type == "Water":
            return 50
    return 100


# Stats


def _boost_stat_key(stat: Stat, gen: Generation) -> Stat:
    # Generation 1 has one Special stat, stored under special attack boosts
    if gen == Generation.RBY and stat == Stat.SPD:
        return Stat.SPA
    return stat


def attack_stage(context: DamageContext) -> int:
    return context.attacker.get_stat_boost(context.attack_stat)


def defense_stage(context: DamageContext) -> int:
    stat = _boost_stat_key(context.defense_stat, context.gen)
    return context.defender.get_stat_boost(stat)


def boosted_attack(context: DamageContext) -> int:
    """Attacking stat after stages; critical hits ignore drops."""
    stage = attack_stage(context)
    if context.is_critical and stage < 0:
        stage = 0
    return boost_stat(
        context.attacker_stats.get(context.attack_stat), stage, context.gen
    )


def boosted_defense(context: DamageContext) -> int:
    """Defending stat after stages; critical hits ignore raises."""
    stage = defense_stage(context)
    if context.is_critical and stage > 0:
        stage = 0
    return boost_stat(
        context.defender_stats.get(context.defense_stat), stage, context.gen
    )


def level_factor(level: int) -> int:
    return 2 * level // 5 + 2


# Type effectiveness, one defending type at a time up to generation 4


def apply_type_factor(value: int, factor: float) -> int:
    """Multiply by a single-type factor (0, 0.5, 1 or 2) and truncate."""
    return value * int(factor * 2) // 2


def type_stage(context: DamageContext, damage: Rolls) -> Rolls:
    result = list(damage)
    for factor in context.type_factors:
        result = [apply_type_factor(d, factor) for d in result]
    return result


def combined_type_stage(context: DamageContext, damage: Rolls) -> Rolls:
    """Multiply by the total effectiveness once and truncate.

    Example:
        A 1/2 and a 2 factor leave 111 at 111, where `type_stage` gives 110.
    """
    factor = Fraction(context.effectiveness)
    return [d * factor.numerator // factor.denominator for d in damage]


# Fixed-point modifiers, generation 5 onward


def _mod_if(condition: bool, modifier: int) -> int:
    return modifier if condition else IDENTITY_MOD


def technician_mod(context: DamageContext) -> int:
    return _mod_if(
        context.attacker_ability == "technician" and context.move_data.base_power <= 60,
        0x1800,
    )


def type_item_mod(context: DamageContext) -> int:
    return _mod_if(holds_type_boost_item(context), 0x1333)


def aura_mod(context: DamageContext) -> int:
    field = context.field
    if context.gen < Generation.ORAS:
        return IDENTITY_MOD
    aura = (context.move_type == "Fairy" and field.fairy_aura) or (
        context.move_type == "Dark" and field.dark_aura
    )
    if not aura:
        return IDENTITY_MOD
    return 0x0C00 if field.aura_break else 0x1548


def helping_hand_mod(context: DamageContext) -> int:
    return _mod_if(context.attacker.helping_hand, 0x1800)


def terrain_mod(context: DamageContext) -> int:
    """Terrain boosts for grounded attackers and weakening for grounded targets."""
    terrain = context.field.get_terrain()
    if terrain is None or context.gen < Generation.ORAS:
        return IDENTITY_MOD
    if TERRAIN_BOOSTS.get(terrain) == context.move_type:
        return _mod_if(context.attacker_grounded(), 0x1800)
    if terrain == Terrain.MISTY and context.move_type == "Dragon":
        return _mod_if(context.defender_grounded(), 0x0800)
    move_id = normalize_name(context.move_data.name)
    if terrain == Terrain.GRASSY and move_id in GRASSY_WEAKENED_MOVES:
        return _mod_if(context.defender_grounded(), 0x0800)
    return IDENTITY_MOD


BASE_POWER_MODS = (
    technician_mod,
    type_item_mod,
    aura_mod,
    helping_hand_mod,
    terrain_mod,
)


def power_mod(context: DamageContext) -> int:
    if context.is_physical and context.attacker_ability in ("hugepower", "purepower"):
        return 0x2000
    return IDENTITY_MOD


def guts_mod(context: DamageContext) -> int:
    return _mod_if(
        context.is_physical
        and context.attacker_ability == "guts"
        and context.attacker.status != Status.NONE,
        0x1800,
    )


def hustle_mod(context: DamageContext) -> int:
    return _mod_if(context.is_physical and context.attacker_ability == "hustle", 0x1800)


def choice_item_mod(context: DamageContext) -> int:
    item = context.attacker_item
    return _mod_if(
        (context.is_physical and item == "choiceband")
        or (context.is_special and item == "choicespecs"),
        0x1800,
    )


def thick_fat_mod(context: DamageContext) -> int:
    return _mod_if(
        context.defender_ability == "thickfat" and context.move_type in ("Fire", "Ice"),
        0x0800,
    )


def pinch_mod(context: DamageContext) -> int:
    return _mod_if(pinch_active(context), 0x1800)


def flash_fire_mod(context: DamageContext) -> int:
    return _mod_if(flash_fire_active(context), 0x1800)


def species_item_mod(context: DamageContext) -> int:
    species = context.attacker_species.name
    item = context.attacker_item
    if item == "lightball" and species == "Pikachu":
        return 0x2000
    if item == "thickclub" and species in ("Cubone", "Marowak"):
        return _mod_if(context.is_physical, 0x2000)
    return IDENTITY_MOD


ATTACK_MODS = (
    power_mod,
    guts_mod,
    hustle_mod,
    choice_item_mod,
    thick_fat_mod,
    pinch_mod,
    flash_fire_mod,
    species_item_mod,
)


def eviolite_mod(context: DamageContext) -> int:
    return _mod_if(
        context.defender_item == "eviolite" and context.defender_species.nfe, 0x1800
    )


def assault_vest_mod(context: DamageContext) -> int:
    return _mod_if(
        context.is_special and context.defender_item == "assaultvest", 0x1800
    )


def fur_coat_mod(context: DamageContext) -> int:
    return _mod_if(
        context.is_physical and context.defender_ability == "furcoat", 0x2000
    )


def sand_boosted(context: DamageContext) -> bool:
    """Rock types take special hits with 1.5x Sp. Def in a sandstorm."""
    return (
        context.is_special
        and context.field.get_weather() == Weather.SANDSTORM
        and "Rock" in context.defender_species.types
    )


def sandstorm_mod(context: DamageContext) -> int:
    return _mod_if(sand_boosted(context), 0x1800)


DEFENSE_MODS = (eviolite_mod, assault_vest_mod, fur_coat_mod, sandstorm_mod)


def spread_mod(context: DamageContext) -> int:
    return _mod_if(context.is_spread, 0x0C00)


def weather_mod(context: DamageContext) -> int:
    percent = weather_multiplier(context)
    if percent > 100:
        return 0x1800
    if percent < 100:
        return 0x0800
    return IDENTITY_MOD


def b2w2_critical_mod(context: DamageContext) -> int:
    return _mod_if(context.is_critical, 0x2000)


def critical_mod(context: DamageContext) -> int:
    return _mod_if(context.is_critical, 0x1800)


def stab_mod(context: DamageContext) -> int:
    if not context.is_stab:
        return IDENTITY_MOD
    if context.attacker_ability == "adaptability":
        return ADAPTABILITY_MOD
    return STAB_MOD


def burn_mod(context: DamageContext) -> int:
    return _mod_if(is_burned(context), 0x0800)


def screen_mod(context: DamageContext) -> int:
    if not screen_active(context):
        return IDENTITY_MOD
    if not context.field.multi_battle:
        return 0x0800
    return 0x0A8F if context.gen == Generation.B2W2 else 0x0AAC


def multiscale_mod(context: DamageContext) -> int:
    return _mod_if(
        context.defender_ability in ("multiscale", "shadowshield")
        and context.defender_hp() == context.defender_max_hp,
        0x0800,
    )


def neuroforce_mod(context: DamageContext) -> int:
    return _mod_if(
        context.attacker_ability == "neuroforce" and is_super_effective(context),
        0x1400,
    )


def sniper_mod(context: DamageContext) -> int:
    return _mod_if(
        context.is_critical and context.attacker_ability == "sniper", 0x1800
    )


def tinted_lens_mod(context: DamageContext) -> int:
    return _mod_if(
        context.attacker_ability == "tintedlens" and is_not_very_effective(context),
        0x2000,
    )


def filter_mod(context: DamageContext) -> int:
    return _mod_if(
        context.defender_ability in ("filter", "solidrock", "prismarmor")
        and is_super_effective(context),
        0x0C00,
    )


def expert_belt_mod(context: DamageContext) -> int:
    return _mod_if(
        context.attacker_item == "expertbelt" and is_super_effective(context), 0x1333
    )


def life_orb_mod(context: DamageContext) -> int:
    return _mod_if(context.attacker_item == "lifeorb", 0x14CC)


FINAL_MODS = (
    screen_mod,
    multiscale_mod,
    neuroforce_mod,
    sniper_mod,
    tinted_lens_mod,
    filter_mod,
    expert_belt_mod,
    life_orb_mod,
)


def modified_value(value: int, modifiers: List[int]) -> int:
    """Chain modifiers in order and apply the result to a stat or power."""
    return apply_mod(chain_mods(modifiers), value)
