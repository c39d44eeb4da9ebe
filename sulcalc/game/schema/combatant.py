"""Attacker and defender representation for damage calculation."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Sequence

from sulcalc.game.schema.enums import SideCondition, Stat, Status

_STAT_FIELDS = [
    "hp",
    "attack",
    "defense",
    "special_attack",
    "special_defense",
    "speed",
]


@dataclass(frozen=True)
class IndividualValues:
    """Individual Values (IVs) for a Pokemon, ranging from 0-31."""

    hp: int
    attack: int
    defense: int
    special_attack: int
    special_defense: int
    speed: int

    def __post_init__(self) -> None:
        for field_name in _STAT_FIELDS:
            value = getattr(self, field_name)
            if not isinstance(value, int) or value < 0 or value > 31:
                raise ValueError(
                    f"{field_name} IV must be between 0 and 31, got {value}"
                )

    @classmethod
    def from_list(cls, values: Sequence[int]) -> "IndividualValues":
        """Build from six values in HP/Atk/Def/SpA/SpD/Spe order."""
        return cls(*values)


@dataclass(frozen=True)
class EffortValues:
    """Effort Values (EVs) for a Pokemon, ranging from 0-252."""

    hp: int
    attack: int
    defense: int
    special_attack: int
    special_defense: int
    speed: int

    def __post_init__(self) -> None:
        for field_name in _STAT_FIELDS:
            value = getattr(self, field_name)
            if not isinstance(value, int) or value < 0 or value > 252:
                raise ValueError(
                    f"{field_name} EV must be between 0 and 252, got {value}"
                )

    @classmethod
    def from_list(cls, values: Sequence[int]) -> "EffortValues":
        """Build from six values in HP/Atk/Def/SpA/SpD/Spe order.

        Example:
            >>> EffortValues.from_list([252, 0, 0, 0, 4, 252]).speed
            252
        """
        return cls(*values)


PERFECT_IVS = IndividualValues(31, 31, 31, 31, 31, 31)
NO_EVS = EffortValues(0, 0, 0, 0, 0, 0)


@dataclass(frozen=True)
class Combatant:
    """Immutable snapshot of one side of an attack.

    The same type describes the attacker and the defender. Side conditions
    are those active on this Pokemon's side of the field, so screens matter
    when the Pokemon is defending.
    """

    species: str
    level: int = 100
    ivs: IndividualValues = PERFECT_IVS
    evs: EffortValues = NO_EVS
    nature: str = "Hardy"

    # Empty means the species' first listed ability
    ability: str = ""
    item: Optional[str] = None
    status: Status = Status.NONE

    stat_boosts: Dict[Stat, int] = field(default_factory=dict)

    # None means full HP
    current_hp: Optional[int] = None

    side_conditions: FrozenSet[SideCondition] = frozenset()

    helping_hand: bool = False
    flash_fire: bool = False

    def __post_init__(self) -> None:
        if self.level < 1 or self.level > 100:
            raise ValueError(f"level must be between 1 and 100, got {self.level}")
        for stat, stage in self.stat_boosts.items():
            if stage < -6 or stage > 6:
                raise ValueError(
                    f"{stat.value} boost must be between -6 and 6, got {stage}"
                )

    def get_stat_boost(self, stat: Stat) -> int:
        """Get the current stat boost stage for a stat.

        Args:
            stat: The stat to check

        Returns:
            Integer from -6 to +6 representing the boost stage
        """
        return self.stat_boosts.get(stat, 0)

    def has_side_condition(self, condition: SideCondition) -> bool:
        return condition in self.side_conditions

    def to_dict(self) -> Dict[str, Any]:
        """Convert the combatant to a dictionary for JSON serialization."""
        return {
            "species": self.species,
            "level": self.level,
            "ivs": [getattr(self.ivs, name) for name in _STAT_FIELDS],
            "evs": [getattr(self.evs, name) for name in _STAT_FIELDS],
            "nature": self.nature,
            "ability": self.ability,
            "item": self.item,
            "status": self.status.value,
            "stat_boosts": {
                stat.value: boost for stat, boost in self.stat_boosts.items()
            },
            "current_hp": self.current_hp,
            "side_conditions": sorted(c.value for c in self.side_conditions),
            "helping_hand": self.helping_hand,
            "flash_fire": self.flash_fire,
        }

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


@dataclass(frozen=True)
class AttackMove:
    """A move chosen for one calculation, with its per-use options."""

    name: str
    critical: bool = False
