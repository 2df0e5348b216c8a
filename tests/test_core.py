from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from filepick.config.models import AppSettings, DisplaySettings
from filepick.config.store import SettingsStore
from filepick.paths import display_path, resolve_display_path


class SettingsStoreTests(unittest.TestCase):
    def test_load_save_update_roundtrip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "settings.json"
            store = SettingsStore(path)

            settings = store.load()
            self.assertTrue(path.exists())
            self.assertEqual(settings.schema_version, 1)
            self.assertEqual(settings.scan.time_budget_ms, 100)
            self.assertEqual(settings.scan.interval_ms, 500)

            updated = store.update("scan.interval_ms", 250)
            self.assertEqual(updated.scan.interval_ms, 250)

            reloaded = store.load()
            self.assertEqual(reloaded.scan.interval_s, 0.25)

    def test_unknown_key_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = SettingsStore(Path(tmp) / "settings.json")
            with self.assertRaises(KeyError):
                store.update("scan.nope", 1)
            with self.assertRaises(KeyError):
                store.update("scan.interval_ms.deeper", 1)

    def test_invalid_value_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = SettingsStore(Path(tmp) / "settings.json")
            with self.assertRaises(ValidationError):
                store.update("scan.interval_ms", 0)

    def test_corrupt_file_is_backed_up(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "settings.json"
            path.write_text("{not json", encoding="utf-8")

            settings = SettingsStore(path).load()

            self.assertEqual(settings, AppSettings(paths=settings.paths))
            self.assertEqual(path.with_suffix(".corrupt.json").read_text(encoding="utf-8"), "{not json")
            self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["schema_version"], 1)

    def test_display_bounds_are_validated(self) -> None:
        with self.assertRaises(ValidationError):
            DisplaySettings(min_width=90, max_width=50)


class DisplayPathTests(unittest.TestCase):
    def test_relative_to_cwd_then_home(self) -> None:
        home = Path("/home/me")
        self.assertEqual(display_path("/home/me/proj/a.c", cwd=Path("/home/me/proj"), home=home), "a.c")
        self.assertEqual(display_path("/home/me/other/a.c", cwd=Path("/home/me/proj"), home=home), "~/other/a.c")
        self.assertEqual(display_path("/srv/a.c", cwd=Path("/home/me/proj"), home=home), "/srv/a.c")

    def test_resolve_inverts_display_path(self) -> None:
        home = Path("/home/me")
        cwd = Path("/home/me/proj")
        for original in ["/home/me/proj/src/a.c", "/home/me/notes.txt", "/srv/data/x"]:
            label = display_path(original, cwd=cwd, home=home)
            self.assertEqual(resolve_display_path(label, cwd=cwd, home=home), Path(original))

    def test_tilde_named_entries_under_cwd_stay_cwd_relative(self) -> None:
        home = Path("/home/me")
        cwd = Path("/work/proj")
        for original, expected in [
            ("/work/proj/~/notes.txt", "./~/notes.txt"),
            ("/work/proj/~", "./~"),
            ("/work/proj/a/~/b", "a/~/b"),
        ]:
            label = display_path(original, cwd=cwd, home=home)
            self.assertEqual(label, expected)
            self.assertEqual(resolve_display_path(label, cwd=cwd, home=home), Path(original))


if __name__ == "__main__":
    unittest.main()
