import json
from pathlib import Path
from typing import Dict, Generic, Optional, Type, TypeVar, Union

from sulcalc.game.data.ability import Ability
from sulcalc.game.data.base import GameDataObject
from sulcalc.game.data.item import Item
from sulcalc.game.data.move import Move
from sulcalc.game.data.nature import Nature
from sulcalc.game.data.pokemon import Pokemon
from sulcalc.game.data.type_chart import TypeChart, TypeChartChange
from sulcalc.game.schema.object_name_normalizer import normalize_name

T = TypeVar("T", bound=GameDataObject)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "tables"

NameOrNum = Union[str, int]


class _Table(Generic[T]):
    """Records of one kind, indexed by normalized name and by number."""

    def __init__(self, kind: str, path: Path, cls: Type[T]) -> None:
        self.kind = kind
        with open(path, "r") as f:
            rows = json.load(f)
        self.by_name: Dict[str, T] = {}
        self.by_num: Dict[int, T] = {}
        for row in rows:
            record = cls.from_dict(row)
            self.by_name[normalize_name(row["name"])] = record
            if "num" in row:
                self.by_num.setdefault(row["num"], record)

    def get(self, key: NameOrNum) -> T:
        if isinstance(key, int):
            record = self.by_num.get(key)
        else:
            record = self.by_name.get(normalize_name(key))
        if record is None:
            raise ValueError(f"{self.kind} not found: {key}")
        return record


class GameData:
    """Singleton class for accessing static game data.

    This class loads Pokemon, moves, abilities, items, natures, and type chart data
    once and provides read-only access throughout the application. The damage
    pipeline only reads these records; it never fetches or caches them itself.

    Records are looked up by name, ignoring case and punctuation, or by their
    number. When several forms share a number, the first one listed wins.
    """

    _instance: Optional["GameData"] = None

    def __new__(cls, data_dir: Union[str, Path] = DEFAULT_DATA_DIR) -> "GameData":
        """Create or return the singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, data_dir: Union[str, Path] = DEFAULT_DATA_DIR) -> None:
        """Initialize the game data (only runs once for the singleton)."""
        if self._initialized:  # type: ignore
            return

        self.data_dir = Path(data_dir)
        self._pokemon = _Table("Pokemon", self.data_dir / "pokemon.json", Pokemon)
        self._moves = _Table("Move", self.data_dir / "moves.json", Move)
        self._abilities = _Table(
            "Ability", self.data_dir / "abilities.json", Ability
        )
        self._items = _Table("Item", self.data_dir / "items.json", Item)
        self._natures = _Table("Nature", self.data_dir / "natures.json", Nature)
        self._type_chart = self._load_type_chart()
        self._initialized = True  # type: ignore

    def _load_type_chart(self) -> TypeChart:
        with open(self.data_dir / "type_chart.json", "r") as f:
            data = json.load(f)
        chart = data[0]
        return TypeChart(
            types=chart["types"],
            effectiveness=chart["effectiveness"],
            introduced=chart.get("introduced", {}),
            history=[TypeChartChange(**change) for change in chart.get("history", [])],
        )

    def get_pokemon(self, name: NameOrNum) -> Pokemon:
        """Look up a species by name or National Dex number.

        Raises:
            ValueError: If no species matches
        """
        return self._pokemon.get(name)

    def get_move(self, name: NameOrNum) -> Move:
        return self._moves.get(name)

    def get_ability(self, name: NameOrNum) -> Ability:
        return self._abilities.get(name)

    def get_item(self, name: NameOrNum) -> Item:
        return self._items.get(name)

    def get_nature(self, name: str) -> Nature:
        return self._natures.get(name)

    def get_type_chart(self) -> TypeChart:
        return self._type_chart
