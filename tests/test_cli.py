"""
Tests for CLI entry points.

These tests focus on:
- Basic CLI argument validation
- Selection add/remove using a temporary selection file
- The schedules command with catalog access replaced by fixed sections
"""

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

import requests

from senehorario.cli import main
from senehorario.storage import load_selected_codes
from tests.test_generator import MON, TUE, section


def run_cli(argv: list) -> tuple:
    """Run main() and return (exit code, captured stdout)."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        try:
            main(argv)
        except SystemExit as exc:
            return exc.code, buf.getvalue()
    return None, buf.getvalue()


class TestCLI(unittest.TestCase):
    def test_cli_search_requires_text(self) -> None:
        code, out = run_cli(["search", ""])
        self.assertNotEqual(code, 0)
        self.assertIn("search text", out)

    def test_cli_add_and_remove_roundtrip(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "selected_courses.json"
            code, _ = run_cli(["--selection", str(p), "add", "isis1204"])
            self.assertEqual(code, 0)
            run_cli(["--selection", str(p), "add", "MATE1203"])
            code, out = run_cli(["--selection", str(p), "add", "ISIS1204"])
            self.assertIn("Already selected", out)
            self.assertEqual(load_selected_codes(p), ["ISIS1204", "MATE1203"])

            run_cli(["--selection", str(p), "remove", "ISIS1204"])
            self.assertEqual(load_selected_codes(p), ["MATE1203"])

            code, out = run_cli(["--selection", str(p), "selected"])
            self.assertEqual(code, 0)
            self.assertEqual(out.strip(), "MATE1203")


class TestSchedulesCommand(unittest.TestCase):
    def setUp(self) -> None:
        self.sections = {
            "AAAA1000": [section("A1", (MON, "09:00", "10:00")), section("A2", (TUE, "09:00", "10:00"))],
            "BBBB1000": [section("B1", (MON, "09:30", "10:30"))],
            "CCCC1000": [section("C1", (MON, "09:00", "10:00"))],
            "EMPTY000": [],
        }
        patcher = mock.patch(
            "senehorario.cli.find_sections_by_course_code",
            side_effect=lambda code, **kwargs: self.sections.get(code, []),
        )
        self.find = patcher.start()
        self.addCleanup(patcher.stop)

    def test_schedules_printed(self) -> None:
        code, out = run_cli(["--offline", "schedules", "AAAA1000", "BBBB1000"])
        self.assertEqual(code, 0)
        self.assertIn("Schedules found: 1", out)
        self.assertIn("A2", out)
        self.assertIn("B1", out)
        self.assertTrue(self.find.call_args.kwargs["offline"])

    def test_empty_course_is_named(self) -> None:
        code, out = run_cli(["schedules", "AAAA1000", "EMPTY000"])
        self.assertEqual(code, 1)
        self.assertIn("No sections found for course EMPTY000", out)

    def test_no_compatible_schedule_lists_conflicts(self) -> None:
        code, out = run_cli(["schedules", "BBBB1000", "CCCC1000"])
        self.assertEqual(code, 0)
        self.assertIn("No compatible schedule found.", out)
        self.assertIn("BBBB1000 (B1) Mon 09:30-10:30", out)

    def test_no_courses_selected(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            code, out = run_cli(["--selection", str(Path(d) / "s.json"), "schedules"])
        self.assertEqual(code, 1)
        self.assertIn("No courses selected.", out)

    def test_catalog_error_reported(self) -> None:
        self.find.side_effect = requests.ConnectionError("down")
        code, out = run_cli(["schedules", "AAAA1000"])
        self.assertEqual(code, 1)
        self.assertIn("Could not load catalog data", out)


if __name__ == "__main__":
    unittest.main()
