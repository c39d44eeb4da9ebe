"""Tests for the settings store."""

import json
import tempfile
import unittest
from pathlib import Path
from typing import Optional

from absl.testing import absltest, parameterized

from sulcalc.store.settings_store import (
    InMemoryStorage,
    JsonFileStorage,
    SettingsStorage,
    SettingsStore,
    deep_merge,
    get_path,
    set_path,
)


class FailingStorage(SettingsStorage):
    """Storage whose every access fails, like a full or unreadable disk."""

    def get_item(self, key: str) -> Optional[str]:
        raise OSError("disk unavailable")

    def set_item(self, key: str, value: str) -> None:
        raise OSError("quota exceeded")


class PathHelpersTest(parameterized.TestCase):
    @parameterized.parameters(
        ("gen", 7),
        ("enabled_sets.smogon", True),
        ("enabled_sets.custom", None),
        ("gen.nested", None),
        ("missing", None),
    )
    def test_get_path(self, path: str, expected) -> None:
        state = {"gen": 7, "enabled_sets": {"smogon": True}}
        self.assertEqual(get_path(state, path), expected)

    def test_set_path_creates_parents(self) -> None:
        state = {"gen": 7}
        set_path(state, "enabled_sets.smogon", False)
        self.assertEqual(state, {"gen": 7, "enabled_sets": {"smogon": False}})

    def test_set_path_replaces_non_dict(self) -> None:
        state = {"enabled_sets": 1}
        set_path(state, "enabled_sets.smogon", True)
        self.assertEqual(state, {"enabled_sets": {"smogon": True}})

    def test_deep_merge(self) -> None:
        base = {"gen": 7, "enabled_sets": {"smogon": True, "pokemonPerfect": True}}
        merged = deep_merge(base, {"enabled_sets": {"smogon": False}})
        self.assertEqual(
            merged,
            {"gen": 7, "enabled_sets": {"smogon": False, "pokemonPerfect": True}},
        )
        self.assertTrue(base["enabled_sets"]["smogon"])


class SettingsStoreTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.storage = InMemoryStorage()
        self.save_on = {
            "set_gen": "gen",
            "toggle_sets": ["enabled_sets.smogon", "enabled_sets.custom"],
        }

    def _store(self, prefix: str = "sulcalc") -> SettingsStore:
        return SettingsStore(
            {"gen": 7, "enabled_sets": {"smogon": True, "custom": True}},
            save_on=self.save_on,
            prefix=prefix,
            storage=self.storage,
        )

    @parameterized.parameters(
        ("sulcalc", "(sulcalc).enabled_sets.smogon"),
        ("", "enabled_sets.smogon"),
    )
    def test_storage_key(self, prefix: str, expected: str) -> None:
        store = self._store(prefix)
        self.assertEqual(store.storage_key("enabled_sets.smogon"), expected)

    def test_notify_saves_event_paths(self) -> None:
        store = self._store()
        store.set("enabled_sets.smogon", False)
        store.notify("toggle_sets")
        self.assertEqual(
            self.storage.items,
            {
                "(sulcalc).enabled_sets.smogon": "false",
                "(sulcalc).enabled_sets.custom": "true",
            },
        )

    def test_notify_ignores_unregistered_event(self) -> None:
        store = self._store()
        store.set("gen", 3)
        store.notify("set_level")
        self.assertEqual(self.storage.items, {})

    def test_notify_skips_unset_path(self) -> None:
        store = SettingsStore({}, save_on=self.save_on, storage=self.storage)
        store.notify("set_gen")
        self.assertEqual(self.storage.items, {})

    def test_hydrate_merges_stored_values(self) -> None:
        self.storage.set_item("(sulcalc).gen", "5")
        self.storage.set_item("(sulcalc).enabled_sets.custom", "false")
        store = self._store()
        state = store.hydrate()
        self.assertEqual(
            state, {"gen": 5, "enabled_sets": {"smogon": True, "custom": False}}
        )
        self.assertIs(store.state, state)

    def test_hydrate_ignores_other_prefixes(self) -> None:
        self.storage.set_item("(other).gen", "1")
        self.storage.set_item("gen", "2")
        self.assertEqual(self._store().hydrate()["gen"], 7)

    def test_hydrate_skips_malformed_json(self) -> None:
        self.storage.set_item("(sulcalc).gen", "{not json")
        self.storage.set_item("(sulcalc).enabled_sets.smogon", "false")
        state = self._store().hydrate()
        self.assertEqual(state["gen"], 7)
        self.assertFalse(state["enabled_sets"]["smogon"])

    def test_saved_settings_survive_a_new_store(self) -> None:
        first = self._store()
        first.set("gen", 4)
        first.notify("set_gen")
        self.assertEqual(self._store().hydrate()["gen"], 4)

    def test_initial_state_is_copied(self) -> None:
        initial = {"enabled_sets": {"smogon": True}}
        store = SettingsStore(initial, save_on=self.save_on)
        store.set("enabled_sets.smogon", False)
        self.assertTrue(initial["enabled_sets"]["smogon"])

    def test_write_failure_is_swallowed(self) -> None:
        store = SettingsStore(
            {"gen": 7}, save_on=self.save_on, storage=FailingStorage()
        )
        store.notify("set_gen")
        self.assertEqual(store.get("gen"), 7)

    def test_read_failure_keeps_state(self) -> None:
        store = SettingsStore(
            {"gen": 7}, save_on=self.save_on, storage=FailingStorage()
        )
        self.assertEqual(store.hydrate(), {"gen": 7})

    def test_unserializable_value_is_not_saved(self) -> None:
        store = self._store()
        store.set("gen", object())
        store.notify("set_gen")
        self.assertEqual(self.storage.items, {})


class JsonFileStorageTest(absltest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = Path(self.temp_dir.name) / "nested" / "settings.json"

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_missing_file_reads_as_empty(self) -> None:
        self.assertIsNone(JsonFileStorage(self.path).get_item("gen"))

    def test_set_item_creates_file(self) -> None:
        storage = JsonFileStorage(self.path)
        storage.set_item("(sulcalc).gen", "5")
        storage.set_item("(sulcalc).level", "50")
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data, {"(sulcalc).gen": "5", "(sulcalc).level": "50"})
        self.assertEqual(JsonFileStorage(self.path).get_item("(sulcalc).gen"), "5")

    def test_round_trip_through_store(self) -> None:
        save_on = {"set_gen": "gen"}
        writer = SettingsStore(
            {"gen": 7}, save_on=save_on, storage=JsonFileStorage(self.path)
        )
        writer.set("gen", 3)
        writer.notify("set_gen")
        reader = SettingsStore(
            {"gen": 7}, save_on=save_on, storage=JsonFileStorage(self.path)
        )
        self.assertEqual(reader.hydrate(), {"gen": 3})

    def test_corrupt_file_is_logged_not_raised(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("[1, 2", encoding="utf-8")
        store = SettingsStore(
            {"gen": 7}, save_on={"set_gen": "gen"}, storage=JsonFileStorage(self.path)
        )
        self.assertEqual(store.hydrate(), {"gen": 7})
        store.notify("set_gen")


if __name__ == "__main__":
    unittest.main()
