from dataclasses import dataclass

from sulcalc.game.data.base import GameDataObject


@dataclass(frozen=True)
class Ability(GameDataObject):
    """An ability and the generation that introduced it."""

    name: str
    num: int
    gen: int
    description: str = ""

    def available_in(self, gen: int) -> bool:
        return self.gen <= gen
