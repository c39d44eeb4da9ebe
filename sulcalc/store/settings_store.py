"""Persist selected settings as JSON values under dotted key paths.

A `SettingsStore` owns a nested dict of settings. On `hydrate()` it reads
every whitelisted key path from a storage backend and deep-merges the
stored values over the current state. On `notify(event)` it writes the key
paths registered for that event back to storage. Storage failures never
propagate: the calculator works the same whether or not settings persist.
"""

import copy
import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from absl import logging

SaveOn = Mapping[str, Union[str, Sequence[str]]]

_MISSING = object()


class SettingsStorage(ABC):
    """Flat string key to serialized JSON value storage."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored text for key, or None if nothing is stored."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""


class InMemoryStorage(SettingsStorage):
    """Storage backed by a dict, mostly for tests and one-off runs."""

    def __init__(self, items: Optional[Dict[str, str]] = None) -> None:
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class JsonFileStorage(SettingsStorage):
    """Storage backed by a single JSON object on disk.

    The file is read on every lookup and rewritten on every write, so
    several stores can share it. This class is thread-safe for concurrent
    access within one process.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        """Initialize the storage.

        Args:
            path: JSON file to use. It and its parent directories are created
                on the first write.
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {self.path} is not a JSON object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)


def get_path(state: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Read a dotted key path such as "enabled_sets.smogon" from nested dicts."""
    value: Any = state
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return default
        value = value[part]
    return value


def set_path(state: Dict[str, Any], path: str, value: Any) -> None:
    """Write a dotted key path, creating intermediate dicts as needed."""
    parts = path.split(".")
    target = state
    for part in parts[:-1]:
        child = target.get(part)
        if not isinstance(child, dict):
            child = {}
            target[part] = child
        target = child
    target[parts[-1]] = value


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new dict with override merged into base, recursing into dicts.

    Example:
        >>> deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}})
        {'a': {'b': 1, 'c': 3}}
    """
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _as_paths(paths: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(paths, str):
        return [paths]
    return list(paths)


class SettingsStore:
    """Nested settings dict kept in sync with a storage backend.

    Example:
        >>> store = SettingsStore(
        ...     {"gen": 7, "enabled_sets": {"smogon": True}},
        ...     save_on={"set_gen": "gen"},
        ...     prefix="sulcalc",
        ... )
        >>> store.set("gen", 5)
        >>> store.notify("set_gen")
        >>> store.storage.get_item("(sulcalc).gen")
        '5'
    """

    def __init__(
        self,
        state: Optional[Mapping[str, Any]] = None,
        save_on: Optional[SaveOn] = None,
        prefix: str = "",
        storage: Optional[SettingsStorage] = None,
    ) -> None:
        """Initialize the store.

        Args:
            state: Initial settings; copied, never mutated
            save_on: Event name to the key path or paths saved on that event
            prefix: Namespace for storage keys; empty means bare paths
            storage: Backend; a fresh InMemoryStorage when None
        """
        self._state: Dict[str, Any] = copy.deepcopy(dict(state or {}))
        self.save_on: Dict[str, List[str]] = {
            event: _as_paths(paths) for event, paths in (save_on or {}).items()
        }
        self.prefix = prefix
        self.storage = storage if storage is not None else InMemoryStorage()

    @property
    def state(self) -> Dict[str, Any]:
        return self._state

    def storage_key(self, path: str) -> str:
        if self.prefix:
            return f"({self.prefix}).{path}"
        return path

    def get(self, path: str, default: Any = None) -> Any:
        return get_path(self._state, path, default)

    def set(self, path: str, value: Any) -> None:
        set_path(self._state, path, value)

    def hydrate(self) -> Dict[str, Any]:
        """Merge every stored whitelisted path over the current state.

        Paths with nothing stored keep their current value. Unreadable or
        malformed entries are logged and skipped.

        Returns:
            The hydrated state
        """
        stored: Dict[str, Any] = {}
        for paths in self.save_on.values():
            for path in paths:
                key = self.storage_key(path)
                try:
                    text = self.storage.get_item(key)
                    if text is None:
                        continue
                    set_path(stored, path, json.loads(text))
                except (OSError, ValueError) as e:
                    logging.warning("Failed to read setting %s: %s", key, e)
        self._state = deep_merge(self._state, stored)
        logging.debug("Hydrated settings: %s", self._state)
        return self._state

    def notify(self, event: str) -> None:
        """Persist the key paths registered for event.

        Events without a registration are ignored. Write failures are logged
        and swallowed.
        """
        if event not in self.save_on:
            return
        for path in self.save_on[event]:
            value = get_path(self._state, path, _MISSING)
            if value is _MISSING:
                logging.debug("Setting %s is unset; not saving", path)
                continue
            key = self.storage_key(path)
            try:
                self.storage.set_item(key, json.dumps(value))
            except (OSError, TypeError, ValueError) as e:
                logging.warning("Failed to save setting %s: %s", key, e)
