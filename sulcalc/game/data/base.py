"""Base class for records loaded from the JSON tables."""

from dataclasses import dataclass, fields
from typing import Any, Dict, Type, TypeVar

T = TypeVar("T", bound="GameDataObject")


@dataclass(frozen=True)
class GameDataObject:
    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Build a record from a table row, ignoring columns it has no field for."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})
