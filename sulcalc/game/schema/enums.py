"""Enums for calculation inputs."""

from enum import Enum, IntEnum

from sulcalc.game.schema.object_name_normalizer import normalize_name


class Generation(IntEnum):
    """Rule generations, named after the games whose mechanics they follow."""

    RBY = 1
    GSC = 2
    ADV = 3
    HGSS = 4
    B2W2 = 5
    ORAS = 6
    SM = 7

    @classmethod
    def from_name(cls, name: str) -> "Generation":
        """Parse a generation from a number or a game abbreviation.

        Raises:
            ValueError: If name is not recognized

        Examples:
            >>> Generation.from_name("7")
            Generation.SM
            >>> Generation.from_name("b2w2")
            Generation.B2W2
        """
        normalized = normalize_name(name)
        if normalized.isdigit():
            return cls(int(normalized))
        for gen in cls:
            if gen.name.lower() == normalized:
                return gen
        raise ValueError(f"Unknown generation: {name}")


MAX_GEN = max(Generation)


class Status(Enum):
    """Pokemon status conditions."""

    NONE = "none"
    BURN = "brn"
    PARALYSIS = "par"
    POISON = "psn"
    TOXIC = "tox"
    SLEEP = "slp"
    FREEZE = "frz"


class Weather(Enum):
    """Field weather conditions."""

    NONE = "none"
    SUN = "sun"
    RAIN = "rain"
    SANDSTORM = "sandstorm"
    HAIL = "hail"
    HARSH_SUN = "desolateland"
    HEAVY_RAIN = "primordialsea"
    STRONG_WINDS = "deltastream"

    @classmethod
    def from_name(cls, name: str) -> "Weather":
        """Parse weather from a name or the move/ability that sets it.

        Raises:
            ValueError: If name is not recognized

        Examples:
            >>> Weather.from_name("Sunny Day")
            Weather.SUN
        """
        mapping = {
            "none": cls.NONE,
            "sun": cls.SUN,
            "sunnyday": cls.SUN,
            "rain": cls.RAIN,
            "raindance": cls.RAIN,
            "sand": cls.SANDSTORM,
            "sandstorm": cls.SANDSTORM,
            "hail": cls.HAIL,
            "harshsun": cls.HARSH_SUN,
            "desolateland": cls.HARSH_SUN,
            "heavyrain": cls.HEAVY_RAIN,
            "primordialsea": cls.HEAVY_RAIN,
            "strongwinds": cls.STRONG_WINDS,
            "deltastream": cls.STRONG_WINDS,
        }
        normalized = normalize_name(name)
        if normalized not in mapping:
            raise ValueError(f"Unknown weather: {name}")
        return mapping[normalized]


class Terrain(Enum):
    """Field terrain conditions."""

    NONE = "none"
    ELECTRIC = "electricterrain"
    GRASSY = "grassyterrain"
    PSYCHIC = "psychicterrain"
    MISTY = "mistyterrain"

    @classmethod
    def from_name(cls, name: str) -> "Terrain":
        """Parse terrain from a name such as "Electric Terrain" or "electric".

        Raises:
            ValueError: If name is not recognized
        """
        normalized = normalize_name(name)
        if not normalized.endswith("terrain") and normalized != "none":
            normalized += "terrain"
        for terrain in cls:
            if terrain.value == normalized:
                return terrain
        raise ValueError(f"Unknown terrain: {name}")


class SideCondition(Enum):
    """Side-specific field conditions that affect damage taken."""

    REFLECT = "reflect"
    LIGHT_SCREEN = "lightscreen"
    AURORA_VEIL = "auroraveil"


class Stat(Enum):
    """Pokemon stats."""

    HP = "hp"
    ATK = "atk"
    DEF = "def"
    SPA = "spa"
    SPD = "spd"
    SPE = "spe"
