"""Field state representation for damage calculation."""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sulcalc.game.schema.enums import MAX_GEN, Generation, Terrain, Weather


@dataclass(frozen=True)
class FieldState:
    """Immutable global battlefield conditions for one calculation.

    This includes the rule generation, weather, terrain, whether the battle
    has several Pokemon per side, and field-wide auras.
    """

    gen: Generation = MAX_GEN

    weather: Optional[Weather] = None
    terrain: Optional[Terrain] = None

    # Doubles and triples: spread moves and screens are weaker
    multi_battle: bool = False

    # Auras from any Pokemon on the field
    fairy_aura: bool = False
    dark_aura: bool = False
    aura_break: bool = False

    def get_weather(self) -> Optional[Weather]:
        """Get the current weather condition.

        Returns:
            Current weather, or None if no weather is active
        """
        if self.weather == Weather.NONE:
            return None
        return self.weather

    def get_terrain(self) -> Optional[Terrain]:
        """Get the current terrain condition.

        Returns:
            Current terrain, or None if no terrain is active
        """
        if self.terrain == Terrain.NONE:
            return None
        return self.terrain

    def to_dict(self) -> Dict[str, Any]:
        """Convert Field state to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the field state
        """
        return {
            "gen": int(self.gen),
            "weather": self.weather.value if self.weather else None,
            "terrain": self.terrain.value if self.terrain else None,
            "multi_battle": self.multi_battle,
            "fairy_aura": self.fairy_aura,
            "dark_aura": self.dark_aura,
            "aura_break": self.aura_break,
        }

    def __str__(self) -> str:
        """Return JSON representation of Field state.

        Returns:
            JSON string of field state
        """
        return json.dumps(self.to_dict(), sort_keys=True)
