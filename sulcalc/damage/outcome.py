"""Exact knockout odds and summaries for a set of damage rolls.

Rolls from a single hit are equally likely, so they form a Multiset with
multiplicity 1 per roll. Several hits are combined with `Multiset.permute`,
which keeps exact digit-string counts however many hits are stacked.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from sulcalc.arith import digit_string
from sulcalc.arith.multiset import Multiset

Fraction = Tuple[str, str]


def roll_distribution(rolls: Sequence[int]) -> Multiset:
    return Multiset(rolls)


def hits_distribution(rolls: Sequence[int], hits: int = 1) -> Multiset:
    """Distribution of total damage after `hits` independent hits.

    Args:
        rolls: Damage rolls of a single hit
        hits: Number of hits, at least 1

    Raises:
        ValueError: If hits is less than 1

    Example:
        >>> str(hits_distribution([1, 2], hits=2))
        '2:1, 3:2, 4:1'
    """
    if hits < 1:
        raise ValueError(f"hits must be at least 1, got {hits}")
    single = roll_distribution(rolls)
    total = single
    for _ in range(hits - 1):
        total = total.permute(single)
    return total


def reduce_fraction(numerator: str, denominator: str) -> Fraction:
    """Reduce a digit-string fraction to lowest terms.

    Example:
        >>> reduce_fraction("6", "16")
        ('3', '8')
    """
    if numerator == digit_string.ZERO:
        return digit_string.ZERO, digit_string.ONE
    divisor = digit_string.gcd(numerator, denominator)
    return (
        digit_string.divide(numerator, divisor)[0],
        digit_string.divide(denominator, divisor)[0],
    )


def ko_chance(distribution: Multiset, hp: int) -> Fraction:
    """Exact chance that the total damage is at least `hp`, in lowest terms."""
    knocked_out = distribution.count(lambda damage, _: damage >= hp)
    return reduce_fraction(knocked_out, distribution.size)


def fraction_to_float(fraction: Fraction) -> float:
    numerator, denominator = fraction
    return int(numerator) / int(denominator)


def percent_of(damage: int, max_hp: int) -> float:
    """Damage as a percentage of max HP, truncated to one decimal place."""
    return damage * 1000 // max_hp / 10


@dataclass(frozen=True)
class DamageOutcome:
    """Summary of one attack repeated `hits` times against a defender.

    Attributes:
        rolls: Damage rolls of a single hit, ascending
        hits: Number of hits combined
        defender_hp: HP the defender has before the attack
        defender_max_hp: Defender's maximum HP, the base for percentages
        distribution: Multiset of total damage over all hits
        ko_chance: Exact probability of a knockout as (numerator, denominator)
        average_damage: Weighted mean total damage
    """

    rolls: Tuple[int, ...]
    hits: int
    defender_hp: int
    defender_max_hp: int
    distribution: Multiset
    ko_chance: Fraction
    average_damage: float

    @property
    def min_damage(self) -> int:
        return self.distribution.min()

    @property
    def max_damage(self) -> int:
        return self.distribution.max()

    @property
    def percent_range(self) -> Tuple[float, float]:
        return (
            percent_of(self.min_damage, self.defender_max_hp),
            percent_of(self.max_damage, self.defender_max_hp),
        )

    @property
    def ko_probability(self) -> float:
        return fraction_to_float(self.ko_chance)

    def describe(self) -> str:
        """One-line summary, e.g. "127 - 150 (33.2 - 39.2%) -- no chance to OHKO"."""
        low, high = self.percent_range
        numerator, denominator = self.ko_chance
        if numerator == digit_string.ZERO:
            chance = "no chance"
        elif numerator == denominator:
            chance = "guaranteed"
        else:
            chance = f"{numerator}/{denominator} chance"
        label = "OHKO" if self.hits == 1 else f"KO in {self.hits} hits"
        return (
            f"{self.min_damage} - {self.max_damage} ({low} - {high}%) "
            f"-- {chance} to {label}"
        )


def analyze(
    rolls: Sequence[int],
    defender_max_hp: int,
    defender_hp: Optional[int] = None,
    hits: int = 1,
) -> DamageOutcome:
    """Build the knockout summary for a list of rolls.

    Args:
        rolls: Output of `calculate`
        defender_max_hp: Defender's maximum HP
        defender_hp: Defender's current HP; max HP when None
        hits: Number of identical hits to combine

    Returns:
        DamageOutcome with exact KO odds and average damage

    Raises:
        ValueError: If rolls is empty, hits is below 1 or defender_max_hp is
            not positive
    """
    if not rolls:
        raise ValueError("rolls must not be empty")
    if defender_max_hp <= 0:
        raise ValueError(f"defender_max_hp must be positive, got {defender_max_hp}")
    if defender_hp is None:
        defender_hp = defender_max_hp

    distribution = hits_distribution(rolls, hits)
    return DamageOutcome(
        rolls=tuple(rolls),
        hits=hits,
        defender_hp=defender_hp,
        defender_max_hp=defender_max_hp,
        distribution=distribution,
        ko_chance=ko_chance(distribution, defender_hp),
        average_damage=Multiset.average(distribution),
    )
