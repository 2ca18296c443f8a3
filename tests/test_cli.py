from __future__ import annotations

import contextlib
import io
import json
import os
import tempfile
import unittest
from unittest import mock

from tdbalance.cli import main


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch.dict(os.environ, {}, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop("TDBALANCE_PRESET", None)
        os.environ.pop("TDBALANCE_ASSUMPTIONS", None)

    def _run(self, *argv: str) -> str:
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            code = main(list(argv))
        self.assertEqual(code, 0)
        return buffer.getvalue()

    def test_summary_json(self) -> None:
        payload = json.loads(self._run("--format", "json", "summary", "--wave", "12"))
        self.assertEqual(len(payload), 3)
        self.assertEqual(payload[0]["snapshot"]["wave"], 12)

    def test_profile_json_uses_selected_preset(self) -> None:
        payload = json.loads(self._run("--format", "json", "--preset", "hardcore", "profile"))
        self.assertEqual(payload["id"], "hardcore")
        self.assertIn("analytics", payload)

    def test_wave_and_timeline_json(self) -> None:
        wave = json.loads(self._run("--format", "json", "wave", "7"))
        self.assertEqual(wave["snapshot"]["wave"], 7)
        self.assertEqual(wave["route_snapshot"]["wave"], 7)

        timeline = json.loads(self._run("--format", "json", "timeline", "--start", "3", "--end", "6"))
        self.assertEqual([item["wave"] for item in timeline["timeline"]], [3, 4, 5, 6])

    def test_sensitivity_json(self) -> None:
        payload = json.loads(
            self._run("--format", "json", "sensitivity", "enemy_count_scale", "--values", "0.9", "1.1")
        )
        self.assertEqual(payload["parameter"], "enemy_count_scale")
        self.assertEqual(len(payload["points"]), 2)

    def test_table_output(self) -> None:
        self.assertIn("Preset", self._run("summary"))
        self.assertIn("Standard (standard)", self._run("profile"))
        self.assertIn("Wave 4", self._run("wave", "4"))
        self.assertIn("Risk", self._run("timeline", "--end", "3"))
        self.assertIn("economy_scale", self._run("sensitivity", "economy_scale"))

    def test_missing_assumptions_file_is_a_usage_error(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--assumptions", "/nonexistent/presets.json", "summary"])
        self.assertEqual(ctx.exception.code, 2)

    def test_overflowing_assumptions_file_is_a_usage_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "presets.json")
            with open(path, "w", encoding="utf-8") as handle:
                json.dump({"standard": {"economy_scale": 1e308}}, handle)
            stderr = io.StringIO()
            with contextlib.redirect_stderr(stderr):
                with self.assertRaises(SystemExit) as ctx:
                    main(["--assumptions", path, "summary"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("Invalid balance preset", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
