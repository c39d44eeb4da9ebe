"""12-bit fixed-point modifier math matching the cartridge damage routines.

A modifier is an integer multiplier scaled by 4096, so 4096 is x1.0, 6144 is
x1.5 and 2048 is x0.5.
"""

import math
from typing import List, Sequence, Union

MOD_SCALE = 0x1000
IDENTITY_MOD = MOD_SCALE


def round_half_to_zero(n: float) -> int:
    """Round to nearest, with exact halves rounding toward zero.

    Example:
        >>> round_half_to_zero(2.5)
        2
        >>> round_half_to_zero(2.51)
        3
        >>> round_half_to_zero(-2.5)
        -2
    """
    truncated = math.trunc(n)
    sign = (n > 0) - (n < 0)
    return truncated + sign * int(abs(n - truncated) > 0.5)


def chain_mod(modifier1: int, modifier2: int) -> int:
    return (modifier1 * modifier2 + 0x800) >> 12


def chain_mods(modifiers: Sequence[int]) -> int:
    """Fold a sequence of modifiers with `chain_mod`, in order."""
    chained = IDENTITY_MOD
    for modifier in modifiers:
        chained = chain_mod(chained, modifier)
    return chained


def apply_mod(
    modifier: int, value: Union[int, Sequence[int]]
) -> Union[int, List[int]]:
    if isinstance(value, int):
        return round_half_to_zero(value * modifier / MOD_SCALE)
    return [round_half_to_zero(v * modifier / MOD_SCALE) for v in value]


def damage_variation(base_damage: int, low: int, high: int) -> List[int]:
    """Expand a base damage into one value per random roll in [low, high].

    Args:
        base_damage: Non-negative damage before the random factor
        low: Smallest roll numerator (e.g. 85 or 217)
        high: Largest roll numerator, also the denominator (e.g. 100 or 255)

    Returns:
        List of high - low + 1 damage values in ascending roll order
    """
    return [base_damage * roll // high for roll in range(low, high + 1)]


def needs_scaling(*stats: int) -> bool:
    return any(stat > 255 for stat in stats)


def scale_stat(stat: int, bits: int = 2) -> int:
    """Shift a stat down and keep the low byte, as the 8-bit games do."""
    return (stat >> bits) & 0xFF
