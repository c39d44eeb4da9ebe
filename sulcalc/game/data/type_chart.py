from dataclasses import dataclass, field
from typing import Dict, List

from sulcalc.game.schema.enums import MAX_GEN


@dataclass(frozen=True)
class TypeChartChange:
    """A matchup whose multiplier differed up to and including `until_gen`."""

    attacking: str
    defending: str
    until_gen: int
    effectiveness: float


@dataclass(frozen=True)
class TypeChart:
    """Offensive type chart for the latest generation plus its history.

    `effectiveness` only lists non-neutral matchups; any pair of known types
    missing from it is neutral.
    """

    types: List[str]
    effectiveness: Dict[str, Dict[str, float]]
    introduced: Dict[str, int] = field(default_factory=dict)
    history: List[TypeChartChange] = field(default_factory=list)

    def has_type(self, type_name: str, gen: int = MAX_GEN) -> bool:
        type_name = type_name.lower()
        return type_name in self.types and self.introduced.get(type_name, 1) <= gen

    def get_effectiveness(
        self, attacking_type: str, defending_type: str, gen: int = MAX_GEN
    ) -> float:
        attacking_type = attacking_type.lower()
        defending_type = defending_type.lower()

        if attacking_type not in self.types:
            raise ValueError(f"Unknown attacking type: {attacking_type}")

        if defending_type not in self.types:
            raise ValueError(f"Unknown defending type: {defending_type}")

        # Types from later generations act typeless when simulating older ones.
        if not self.has_type(attacking_type, gen) or not self.has_type(
            defending_type, gen
        ):
            return 1.0

        applicable = [
            change
            for change in self.history
            if change.attacking == attacking_type
            and change.defending == defending_type
            and gen <= change.until_gen
        ]
        if applicable:
            return min(applicable, key=lambda change: change.until_gen).effectiveness

        return self.effectiveness.get(attacking_type, {}).get(defending_type, 1.0)
