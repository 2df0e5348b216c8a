from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from filepick.cli import main
from filepick.config.store import SettingsStore

from helpers import make_tree


class CliE2ETests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name) / "project"
        self.root.mkdir()
        self.settings_file = Path(self.tmp.name) / "settings.json"
        for target in ("filepick.cli.SettingsStore", "filepick.app.SettingsStore"):
            patcher = patch(target, lambda: SettingsStore(self.settings_file))
            patcher.start()
            self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_help(self) -> None:
        result = self.runner.invoke(main, ["--help"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Commands:", result.output)
        self.assertIn("scan", result.output)

    def test_about(self) -> None:
        result = self.runner.invoke(main, ["about"])
        self.assertEqual(result.exit_code, 0)
        payload = json.loads(result.output)
        self.assertEqual(payload["name"], "filepick")
        self.assertIn("version", payload)

    def test_settings_path(self) -> None:
        result = self.runner.invoke(main, ["settings-path"])
        self.assertEqual(result.exit_code, 0)
        self.assertTrue(result.output.strip().endswith("settings.json"))

    def test_settings_set_updates_stored_value(self) -> None:
        result = self.runner.invoke(main, ["settings-set", "scan.interval_ms", "250"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("scan.interval_ms = 250", result.output)
        self.assertEqual(SettingsStore(self.settings_file).load().scan.interval_ms, 250)

        result = self.runner.invoke(main, ["settings-set", "display.title", "Pick"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(SettingsStore(self.settings_file).load().display.title, "Pick")

    def test_settings_set_rejects_unknown_keys_and_bad_values(self) -> None:
        result = self.runner.invoke(main, ["settings-set", "scan.nope", "1"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Unknown setting path", result.output)

        result = self.runner.invoke(main, ["settings-set", "scan.interval_ms", "0"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Invalid value for scan.interval_ms", result.output)
        self.assertEqual(SettingsStore(self.settings_file).load().scan.interval_ms, 500)

    def test_scan_prints_ranked_matches(self) -> None:
        make_tree(self.root, ["src/lib/util.c", "src/main.c", "README.md", ".git/HEAD"])

        result = self.runner.invoke(main, ["scan", str(self.root), "--query", "util", "--raw"])

        self.assertEqual(result.exit_code, 0, result.output)
        lines = result.output.strip().splitlines()
        self.assertEqual(len(lines), 1)
        self.assertTrue(lines[0].endswith("src/lib/util.c"))

    def test_scan_prints_labels_with_limit(self) -> None:
        make_tree(self.root, ["a.c", "b.c", "sub/c.c"])

        result = self.runner.invoke(main, ["scan", str(self.root), "--limit", "2"])

        self.assertEqual(result.exit_code, 0, result.output)
        lines = result.output.strip().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith("a.c"))
        self.assertTrue(lines[1].startswith("b.c"))

    def test_scan_of_empty_tree_fails(self) -> None:
        make_tree(self.root, ["only/dirs/", ".hidden"])
        result = self.runner.invoke(main, ["scan", str(self.root)])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No files found", result.output)

    def test_run_constructs_app(self) -> None:
        with patch("filepick.cli.FilePickApp.run", return_value=None) as run_mock:
            result = self.runner.invoke(main, ["run", str(self.root), "--query", "abc"])

        self.assertEqual(result.exit_code, 0, result.output)
        run_mock.assert_called_once()


if __name__ == "__main__":
    unittest.main()
