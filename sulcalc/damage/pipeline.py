"""Generation-independent shape of a damage calculation.

Every generation runs the same steps: short-circuit checks, fixed damage,
base damage, an ordered list of stages before the random roll, the roll
itself, and an ordered list of stages after it. A generation supplies the
functions for each step; stage order decides where rounding happens, so it
is part of each generation's rules.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from absl import logging

from sulcalc.arith.fixed_point import (
    IDENTITY_MOD,
    apply_mod,
    chain_mods,
    damage_variation,
)
from sulcalc.damage.context import DamageContext

Rolls = List[int]

# A stage maps the current damage values to new ones. Before the random roll
# the list holds a single value.
Stage = Callable[[DamageContext, Rolls], Rolls]

# A blocker returns True when the move cannot damage the defender at all.
Blocker = Callable[[DamageContext], bool]

# A modifier returns a 4096-scaled multiplier, IDENTITY_MOD when inactive.
Modifier = Callable[[DamageContext], int]

BaseDamage = Callable[[DamageContext], int]

Condition = Callable[[DamageContext], bool]


def _always(context: DamageContext) -> bool:
    return True


def floor_stage(
    numerator: int, denominator: int, condition: Condition = _always
) -> Stage:
    """Multiply by a fraction and truncate, when the condition holds.

    Example:
        >>> floor_stage(3, 2)(context, [101])
        [151]
    """

    def stage(context: DamageContext, damage: Rolls) -> Rolls:
        if not condition(context):
            return damage
        return [d * numerator // denominator for d in damage]

    return stage


def add_stage(amount: int, condition: Condition = _always) -> Stage:
    def stage(context: DamageContext, damage: Rolls) -> Rolls:
        if not condition(context):
            return damage
        return [d + amount for d in damage]

    return stage


def cap_stage(limit: int) -> Stage:
    def stage(context: DamageContext, damage: Rolls) -> Rolls:
        return [min(limit, d) for d in damage]

    return stage


def mod_stage(modifier: Modifier) -> Stage:
    """Apply one fixed-point modifier with `apply_mod` rounding."""

    def stage(context: DamageContext, damage: Rolls) -> Rolls:
        value = modifier(context)
        if value == IDENTITY_MOD:
            return damage
        return apply_mod(value, damage)

    return stage


def chained_mod_stage(modifiers: Sequence[Modifier]) -> Stage:
    """Chain several modifiers with `chain_mod`, then apply the product once."""

    def stage(context: DamageContext, damage: Rolls) -> Rolls:
        chained = chain_mods([modifier(context) for modifier in modifiers])
        if chained == IDENTITY_MOD:
            return damage
        return apply_mod(chained, damage)

    return stage


def fixed_damage(context: DamageContext) -> Optional[int]:
    """Damage for moves that ignore stats, or None for ordinary moves.

    Args:
        context: Resolved calculation facts

    Returns:
        The attacker's level for "level" moves, half the defender's current
        HP (at least 1) for "half" moves, the stored amount for numeric
        entries, None otherwise
    """
    amount = context.move_data.fixed_damage
    if amount is None:
        return None
    if amount == "level":
        return context.attacker.level
    if amount == "half":
        return max(1, context.defender_hp() // 2)
    return int(amount)


@dataclass(frozen=True)
class DamagePipeline:
    """One generation's damage rules.

    Attributes:
        name: Short label used in log output
        blockers: Checks that make the move deal no damage, in order
        base_damage: Computes the value the stages start from
        pre_random: Stages applied before the random roll
        roll_low: Smallest random roll numerator
        roll_high: Largest random roll numerator and the roll denominator
        post_random: Stages applied to every roll after the random roll
        minimum: Smallest damage a hit that is not blocked can deal
    """

    name: str
    blockers: Tuple[Blocker, ...]
    base_damage: BaseDamage
    pre_random: Tuple[Stage, ...]
    roll_low: int
    roll_high: int
    post_random: Tuple[Stage, ...] = ()
    minimum: int = 1

    def blocked_by(self, context: DamageContext) -> Optional[str]:
        for blocker in self.blockers:
            if blocker(context):
                return blocker.__name__.lstrip("_")
        return None

    def roll(self, base: int) -> Rolls:
        # A single point of damage is never varied by the cartridge games.
        if base == 1 and self.roll_high == 255:
            return [1]
        return damage_variation(base, self.roll_low, self.roll_high)

    def run(self, context: DamageContext) -> Rolls:
        """Compute every possible damage roll for a resolved context.

        Returns:
            [0] when a blocker applies, a single value for fixed-damage moves,
            otherwise one value per random roll in ascending order
        """
        reason = self.blocked_by(context)
        if reason is not None:
            logging.debug(
                "%s: %s deals no damage (%s)",
                self.name,
                context.move_data.name,
                reason,
            )
            return [0]

        fixed = fixed_damage(context)
        if fixed is not None:
            logging.debug(
                "%s: %s deals fixed damage %s", self.name, context.move_data.name, fixed
            )
            return [fixed]

        damage = [self.base_damage(context)]
        for stage in self.pre_random:
            damage = stage(context, damage)

        rolls = self.roll(damage[0])
        for stage in self.post_random:
            rolls = stage(context, rolls)

        result = [max(self.minimum, value) for value in rolls]
        logging.debug(
            "%s: %s deals %s-%s",
            self.name,
            context.move_data.name,
            result[0],
            result[-1],
        )
        return result
