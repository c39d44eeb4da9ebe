from dataclasses import dataclass
from typing import List, Optional, Union

from sulcalc.game.data.base import GameDataObject

SPREAD_TARGETS = frozenset({"allAdjacent", "allAdjacentFoes"})


@dataclass(frozen=True)
class Move(GameDataObject):
    name: str
    num: int
    type: str
    base_power: int
    accuracy: Optional[int]
    pp: int
    priority: int
    category: str
    description: str = ""
    target: str = "normal"
    fixed_damage: Optional[Union[int, str]] = None
    flags: Optional[List[str]] = None

    @property
    def is_spread(self) -> bool:
        return self.target in SPREAD_TARGETS

    def has_flag(self, flag: str) -> bool:
        return bool(self.flags) and flag in self.flags
