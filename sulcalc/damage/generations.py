"""Damage rules for each generation, expressed as `DamagePipeline` tables.

Each generation lists its blockers and stages in the order the games apply
them. Later generations reuse earlier pieces where the games did.
"""

from typing import Dict, Tuple

from sulcalc.arith.fixed_point import needs_scaling, scale_stat
from sulcalc.damage import modifiers
from sulcalc.damage.context import DamageContext
from sulcalc.damage.modifiers import (
    ATTACK_MODS,
    BASE_POWER_MODS,
    DEFENSE_MODS,
    FINAL_MODS,
    attack_stage,
    boosted_attack,
    boosted_defense,
    combined_type_stage,
    defense_stage,
    level_factor,
    modified_value,
    type_stage,
    weather_multiplier,
)
from sulcalc.damage.pipeline import (
    Blocker,
    DamagePipeline,
    Rolls,
    add_stage,
    cap_stage,
    chained_mod_stage,
    floor_stage,
    mod_stage,
)
from sulcalc.damage.stats import boost_stat
from sulcalc.game.schema.enums import Generation, SideCondition, Status

CARTRIDGE_ROLL_LOW = 217
CARTRIDGE_ROLL_HIGH = 255
ROLL_LOW = 85
ROLL_HIGH = 100


def _weather_stage(context: DamageContext, damage: Rolls) -> Rolls:
    percent = weather_multiplier(context)
    if percent == 100:
        return damage
    return [d * percent // 100 for d in damage]


def _cartridge_type_stage(context: DamageContext, damage: Rolls) -> Rolls:
    # The 8-bit games multiply by tenths: x2 is *20/10 and x0.5 is *5/10.
    result = list(damage)
    for factor in context.type_factors:
        tenths = int(factor * 10)
        result = [d * tenths // 10 for d in result]
    return result


# Generations 1 and 2


def _cartridge_screen(context: DamageContext) -> bool:
    if context.is_physical:
        return context.defender.has_side_condition(SideCondition.REFLECT)
    return context.defender.has_side_condition(SideCondition.LIGHT_SCREEN)


def _cartridge_base_damage(context: DamageContext) -> int:
    """Base damage for generations 1 and 2, before the +2.

    A generation 1 critical hit doubles the level and uses unmodified stats.
    A generation 2 critical hit uses unmodified stats only when the attack
    stage is not higher than the defense stage.
    """
    gen = context.gen
    level = context.attacker.level
    attack = context.attacker_stats.get(context.attack_stat)
    defense = context.defender_stats.get(context.defense_stat)
    atk_stage = attack_stage(context)
    def_stage = defense_stage(context)

    if context.is_critical and gen == Generation.RBY:
        level *= 2
    ignore_modifiers = context.is_critical and (
        gen == Generation.RBY or atk_stage <= def_stage
    )
    if not ignore_modifiers:
        attack = boost_stat(attack, atk_stage, gen)
        defense = boost_stat(defense, def_stage, gen)
        if context.is_physical and context.attacker.status == Status.BURN:
            attack = max(1, attack // 2)
        if _cartridge_screen(context):
            defense *= 2

    species = context.attacker_species.name
    if context.attacker_item == "lightball" and species == "Pikachu":
        if context.is_special:
            attack *= 2
    if context.attacker_item == "thickclub" and species in ("Cubone", "Marowak"):
        if context.is_physical:
            attack *= 2

    if needs_scaling(attack, defense):
        attack = scale_stat(attack)
        defense = scale_stat(defense)
    defense = max(1, defense)

    power = context.move_data.base_power
    return level_factor(level) * power * attack // defense // 50


RBY = DamagePipeline(
    name="RBY",
    blockers=(modifiers.status_move, modifiers.type_immunity),
    base_damage=_cartridge_base_damage,
    pre_random=(
        cap_stage(997),
        add_stage(2),
        floor_stage(3, 2, modifiers.is_stab),
        _cartridge_type_stage,
    ),
    roll_low=CARTRIDGE_ROLL_LOW,
    roll_high=CARTRIDGE_ROLL_HIGH,
)

GSC = DamagePipeline(
    name="GSC",
    blockers=(modifiers.status_move, modifiers.type_immunity),
    base_damage=_cartridge_base_damage,
    pre_random=(
        floor_stage(2, 1, modifiers.is_critical),
        floor_stage(110, 100, modifiers.holds_type_boost_item),
        cap_stage(997),
        add_stage(2),
        _weather_stage,
        floor_stage(3, 2, modifiers.is_stab),
        _cartridge_type_stage,
    ),
    roll_low=CARTRIDGE_ROLL_LOW,
    roll_high=CARTRIDGE_ROLL_HIGH,
)


# Generations 3 and 4


def _truncated_attack(context: DamageContext) -> int:
    """Attacking stat with the ability and item boosts of generations 3 and 4."""
    gen = context.gen
    attack = boosted_attack(context)
    ability = context.attacker_ability
    item = context.attacker_item
    species = context.attacker_species.name

    if context.is_physical:
        if ability in ("hugepower", "purepower"):
            attack *= 2
        if item == "choiceband":
            attack = attack * 3 // 2
        if ability == "hustle":
            attack = attack * 3 // 2
        if ability == "guts" and context.attacker.status != Status.NONE:
            attack = attack * 3 // 2
        if item == "thickclub" and species in ("Cubone", "Marowak"):
            attack *= 2
    else:
        if item == "choicespecs":
            attack = attack * 3 // 2
    if item == "lightball" and species == "Pikachu":
        if context.is_special or gen >= Generation.HGSS:
            attack *= 2

    if gen == Generation.ADV and modifiers.holds_type_boost_item(context):
        attack = attack * 110 // 100
    if context.defender_ability == "thickfat" and context.move_type in ("Fire", "Ice"):
        attack //= 2
    return attack


def _truncated_defense(context: DamageContext) -> int:
    defense = boosted_defense(context)
    if context.gen >= Generation.HGSS and modifiers.sand_boosted(context):
        defense = defense * 3 // 2
    return max(1, defense)


def _truncated_power(context: DamageContext) -> int:
    power = context.move_data.base_power
    if context.attacker.helping_hand:
        power = power * 3 // 2
    if modifiers.pinch_active(context):
        power = power * 3 // 2
    if context.gen >= Generation.HGSS:
        if modifiers.holds_type_boost_item(context):
            power = power * 12 // 10
        if context.attacker_ability == "technician" and power <= 60:
            power = power * 3 // 2
    return power


def _truncated_base_damage(context: DamageContext) -> int:
    level = level_factor(context.attacker.level)
    power = _truncated_power(context)
    attack = _truncated_attack(context)
    defense = _truncated_defense(context)
    return level * power * attack // defense // 50


def _adv_spread(context: DamageContext) -> bool:
    return (
        context.field.multi_battle and context.move_data.target == "allAdjacentFoes"
    )


def _is_spread(context: DamageContext) -> bool:
    return context.is_spread


def _is_sniper(context: DamageContext) -> bool:
    return context.is_critical and context.attacker_ability == "sniper"


def _is_adaptability(context: DamageContext) -> bool:
    return context.is_stab and context.attacker_ability == "adaptability"


def _is_plain_stab(context: DamageContext) -> bool:
    return context.is_stab and context.attacker_ability != "adaptability"


def _holds_life_orb(context: DamageContext) -> bool:
    return context.attacker_item == "lifeorb"


def _filter_active(context: DamageContext) -> bool:
    return context.defender_ability in (
        "filter",
        "solidrock",
    ) and modifiers.is_super_effective(context)


def _expert_belt_active(context: DamageContext) -> bool:
    return context.attacker_item == "expertbelt" and modifiers.is_super_effective(
        context
    )


def _tinted_lens_active(context: DamageContext) -> bool:
    return context.attacker_ability == "tintedlens" and (
        modifiers.is_not_very_effective(context)
    )


ADV = DamagePipeline(
    name="ADV",
    blockers=(
        modifiers.status_move,
        modifiers.type_immunity,
        modifiers.ability_immunity,
        modifiers.wonder_guard,
    ),
    base_damage=_truncated_base_damage,
    pre_random=(
        floor_stage(1, 2, modifiers.is_burned),
        floor_stage(1, 2, modifiers.single_screen),
        floor_stage(2, 3, modifiers.multi_screen),
        floor_stage(1, 2, _adv_spread),
        _weather_stage,
        floor_stage(3, 2, modifiers.flash_fire_active),
        add_stage(2),
        floor_stage(2, 1, modifiers.is_critical),
        floor_stage(3, 2, modifiers.is_stab),
        type_stage,
    ),
    roll_low=ROLL_LOW,
    roll_high=ROLL_HIGH,
)

HGSS = DamagePipeline(
    name="HGSS",
    blockers=(
        modifiers.status_move,
        modifiers.type_immunity,
        modifiers.ability_immunity,
        modifiers.wonder_guard,
    ),
    base_damage=_truncated_base_damage,
    pre_random=(
        floor_stage(1, 2, modifiers.is_burned),
        floor_stage(1, 2, modifiers.single_screen),
        floor_stage(2, 3, modifiers.multi_screen),
        floor_stage(3, 4, _is_spread),
        _weather_stage,
        floor_stage(3, 2, modifiers.flash_fire_active),
        add_stage(2),
        floor_stage(2, 1, modifiers.is_critical),
        floor_stage(3, 2, _is_sniper),
        floor_stage(13, 10, _holds_life_orb),
    ),
    roll_low=ROLL_LOW,
    roll_high=ROLL_HIGH,
    post_random=(
        floor_stage(3, 2, _is_plain_stab),
        floor_stage(2, 1, _is_adaptability),
        type_stage,
        floor_stage(3, 4, _filter_active),
        floor_stage(6, 5, _expert_belt_active),
        floor_stage(2, 1, _tinted_lens_active),
    ),
)


# Generations 5 to 7


def _modern_base_damage(context: DamageContext) -> int:
    """Base damage from chained power, attack and defense modifiers, plus 2."""
    power = max(
        1,
        modified_value(
            context.move_data.base_power, [mod(context) for mod in BASE_POWER_MODS]
        ),
    )
    attack = modified_value(
        boosted_attack(context), [mod(context) for mod in ATTACK_MODS]
    )
    defense = max(
        1,
        modified_value(
            boosted_defense(context), [mod(context) for mod in DEFENSE_MODS]
        ),
    )
    level = level_factor(context.attacker.level)
    return level * power * attack // defense // 50 + 2


def _modern_blockers(gen: Generation) -> Tuple[Blocker, ...]:
    blockers = [
        modifiers.status_move,
        modifiers.type_immunity,
        modifiers.ability_immunity,
        modifiers.air_balloon,
        modifiers.wonder_guard,
    ]
    if gen >= Generation.ORAS:
        blockers.append(modifiers.primal_weather)
    if gen >= Generation.SM:
        blockers.append(modifiers.psychic_terrain_priority)
    return tuple(blockers)


def _modern_pipeline(gen: Generation) -> DamagePipeline:
    critical_mod = (
        modifiers.b2w2_critical_mod
        if gen == Generation.B2W2
        else modifiers.critical_mod
    )
    return DamagePipeline(
        name=gen.name,
        blockers=_modern_blockers(gen),
        base_damage=_modern_base_damage,
        pre_random=(
            mod_stage(modifiers.spread_mod),
            mod_stage(modifiers.weather_mod),
            mod_stage(critical_mod),
        ),
        roll_low=ROLL_LOW,
        roll_high=ROLL_HIGH,
        post_random=(
            mod_stage(modifiers.stab_mod),
            combined_type_stage,
            mod_stage(modifiers.burn_mod),
            chained_mod_stage(FINAL_MODS),
        ),
    )


B2W2 = _modern_pipeline(Generation.B2W2)
ORAS = _modern_pipeline(Generation.ORAS)
SM = _modern_pipeline(Generation.SM)

PIPELINES: Dict[Generation, DamagePipeline] = {
    Generation.RBY: RBY,
    Generation.GSC: GSC,
    Generation.ADV: ADV,
    Generation.HGSS: HGSS,
    Generation.B2W2: B2W2,
    Generation.ORAS: ORAS,
    Generation.SM: SM,
}
