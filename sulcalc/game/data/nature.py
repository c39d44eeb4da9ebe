from dataclasses import dataclass
from typing import Optional

from sulcalc.game.data.base import GameDataObject


@dataclass(frozen=True)
class Nature(GameDataObject):
    name: str
    plus_stat: Optional[str]
    minus_stat: Optional[str]

    @property
    def is_neutral(self) -> bool:
        return self.plus_stat == self.minus_stat

    def stat_percent(self, stat: str) -> int:
        """Percentage applied to `stat` ("atk", "spa", ...): 110, 90 or 100."""
        if self.is_neutral:
            return 100
        if stat == self.plus_stat:
            return 110
        if stat == self.minus_stat:
            return 90
        return 100
