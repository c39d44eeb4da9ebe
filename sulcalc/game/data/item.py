from dataclasses import dataclass
from typing import Optional

from sulcalc.game.data.base import GameDataObject


@dataclass(frozen=True)
class Item(GameDataObject):
    """A held item. Items from later generations are ignored in older ones."""

    name: str
    num: int
    gen: int
    description: Optional[str] = None

    def available_in(self, gen: int) -> bool:
        return self.gen <= gen
