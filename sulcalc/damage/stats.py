"""Stat formulas for each rule generation."""

from dataclasses import dataclass
from typing import Dict, Optional

from sulcalc.game.data.nature import Nature
from sulcalc.game.data.pokemon import Pokemon
from sulcalc.game.schema.combatant import Combatant
from sulcalc.game.schema.enums import Generation, Stat

# Stat stage multipliers in percent for stages -6 to +6 in the 8-bit games
CARTRIDGE_STAGE_PERCENTS = [25, 28, 33, 40, 50, 66, 100, 150, 200, 250, 300, 350, 400]

STAT_FIELD_NAMES: Dict[Stat, str] = {
    Stat.HP: "hp",
    Stat.ATK: "attack",
    Stat.DEF: "defense",
    Stat.SPA: "special_attack",
    Stat.SPD: "special_defense",
    Stat.SPE: "speed",
}


@dataclass(frozen=True)
class CombatantStats:
    """Calculated stats for a Pokemon, before stat stages."""

    hp: int
    attack: int
    defense: int
    special_attack: int
    special_defense: int
    speed: int

    def get(self, stat: Stat) -> int:
        return getattr(self, STAT_FIELD_NAMES[stat])


def nature_percent(nature: Optional[Nature], stat: Stat) -> int:
    if nature is None:
        return 100
    return nature.stat_percent(stat.value)


def _cartridge_stat(base: int, iv: int, ev: int, level: int, is_hp: bool) -> int:
    dv = iv // 2
    core = ((base + dv) * 2 + ev // 4) * level // 100
    if is_hp:
        return core + level + 10
    return core + 5


def _modern_stat(
    base: int, iv: int, ev: int, level: int, is_hp: bool, nature_pct: int
) -> int:
    core = (2 * base + iv + ev // 4) * level // 100
    if is_hp:
        # Shedinja always has exactly 1 HP.
        return 1 if base == 1 else core + level + 10
    return (core + 5) * nature_pct // 100


def calculate_stats(
    species: Pokemon,
    combatant: Combatant,
    nature: Optional[Nature],
    gen: Generation,
) -> CombatantStats:
    """Compute the six stats of a combatant under a generation's formula.

    Generations 1 and 2 use DVs (IV // 2) and ignore natures. Generation 1 has
    a single Special stat, taken from the special attack base stat and used
    for both special stats.

    Args:
        species: Species record supplying base stats
        combatant: Level, IVs and EVs of the Pokemon
        nature: Nature record, or None for a neutral nature
        gen: Rule generation

    Returns:
        CombatantStats with all six stats
    """
    base_stats = species.base_stats
    base_keys = {
        Stat.HP: "hp",
        Stat.ATK: "atk",
        Stat.DEF: "def",
        Stat.SPA: "spa",
        Stat.SPD: "spa" if gen == Generation.RBY else "spd",
        Stat.SPE: "spe",
    }
    values: Dict[str, int] = {}
    for stat, field_name in STAT_FIELD_NAMES.items():
        base = base_stats[base_keys[stat]]
        iv = getattr(combatant.ivs, field_name)
        ev = getattr(combatant.evs, field_name)
        if gen == Generation.RBY and stat == Stat.SPD:
            iv = combatant.ivs.special_attack
            ev = combatant.evs.special_attack
        if gen <= Generation.GSC:
            value = _cartridge_stat(base, iv, ev, combatant.level, stat == Stat.HP)
        else:
            value = _modern_stat(
                base,
                iv,
                ev,
                combatant.level,
                stat == Stat.HP,
                nature_percent(nature, stat),
            )
        values[field_name] = value
    return CombatantStats(**values)


def boost_stat(value: int, stage: int, gen: Generation) -> int:
    """Apply a stat stage to a stat.

    Example:
        >>> boost_stat(100, 1, Generation.SM)
        150
        >>> boost_stat(100, -1, Generation.RBY)
        66
    """
    if stage == 0:
        return value
    if gen <= Generation.GSC:
        boosted = value * CARTRIDGE_STAGE_PERCENTS[stage + 6] // 100
        return max(1, min(999, boosted))
    if stage > 0:
        return value * (2 + stage) // 2
    return value * 2 // (2 - stage)
