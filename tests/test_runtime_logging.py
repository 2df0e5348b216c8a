from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from filepick.runtime_logging import configure_runtime_logging, parse_level


class RuntimeLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        configure_runtime_logging(level="off")

    def test_writes_jsonl_and_filters_by_level(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "runtime.jsonl"
            logger = configure_runtime_logging(level="info", log_file=path)
            logger.debug("debug.hidden", foo="bar")
            logger.info("info.visible", foo="bar", root=Path("/tmp"))

            payloads = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
            events = [item["event"] for item in payloads]
            self.assertIn("logging.configured", events)
            self.assertIn("info.visible", events)
            self.assertNotIn("debug.hidden", events)
            visible = next(item for item in payloads if item["event"] == "info.visible")
            self.assertEqual(visible["root"], "/tmp")

    def test_uses_environment_variables(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "from-env.jsonl"
            with patch.dict(
                os.environ,
                {"FILEPICK_LOG_LEVEL": "debug", "FILEPICK_LOG_FILE": str(path)},
                clear=False,
            ):
                logger = configure_runtime_logging()
                logger.debug("env.debug", alpha=1)

            payloads = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
            self.assertTrue(any(item["event"] == "env.debug" for item in payloads))

    def test_off_writes_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "off.jsonl"
            logger = configure_runtime_logging(level="off", log_file=path)
            logger.error("never.written")
            self.assertFalse(path.exists())

    def test_parse_level_aliases(self) -> None:
        self.assertEqual(parse_level("WARN"), "warning")
        self.assertEqual(parse_level("none"), "off")
        self.assertEqual(parse_level("bogus", default="info"), "info")
        self.assertEqual(parse_level(None), "warning")


if __name__ == "__main__":
    unittest.main()
