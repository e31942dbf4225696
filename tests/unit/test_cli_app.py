# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

import re
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import httpx
from typer.testing import CliRunner

from receiptkit.cli import app
from receiptkit.config import DEFAULT_CONFIG_PATH

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")


def _strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


class TestCliApp(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def test_root_info_commands(self) -> None:
        cases = (
            {"args": ["--help"], "contains": ("render", "fonts")},
            {"args": ["--version"], "contains": ("receiptkit",)},
        )
        for case in cases:
            with self.subTest(args=case["args"]):
                result = self.runner.invoke(app, case["args"])
                self.assertEqual(result.exit_code, 0)
                for expected in case["contains"]:
                    self.assertIn(expected, _strip_ansi(result.output))

    def test_render_help_lists_options(self) -> None:
        result = self.runner.invoke(app, ["render", "--help"])
        self.assertEqual(result.exit_code, 0)
        output = _strip_ansi(result.output)
        for option in ("--kind", "--resolution", "--format", "--publish", "--dry-run"):
            self.assertIn(option, output)

    def test_unknown_kind_is_rejected(self) -> None:
        result = self.runner.invoke(app, ["render", "-", "--kind", "invoice"], input="{}")
        self.assertEqual(result.exit_code, 2)


class TestFontsCommands(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def test_status_reports_missing_fonts(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            result = self.runner.invoke(app, ["fonts", "status", "--dir", tmpdir])
        self.assertEqual(result.exit_code, 1)
        output = _strip_ansi(result.output)
        self.assertIn("RedHatDisplay-Regular.ttf", output)
        self.assertIn("missing", output)

    def test_status_ok_when_complete(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            for name in (
                "RedHatDisplay-Regular.ttf",
                "RedHatDisplay-Bold.ttf",
                "RedHatDisplay-Italic.ttf",
                "RedHatDisplay-BoldItalic.ttf",
            ):
                Path(tmpdir, name).write_bytes(b"ttf")
            result = self.runner.invoke(app, ["fonts", "status", "--dir", tmpdir])
        self.assertEqual(result.exit_code, 0)
        self.assertNotIn("missing", _strip_ansi(result.output))

    def test_download_failure_exits_with_error(self) -> None:
        error = httpx.ConnectError("unreachable")
        with (
            tempfile.TemporaryDirectory() as tmpdir,
            mock.patch(
                "receiptkit.cli.commands.fonts.download_fonts", side_effect=error
            ) as download,
        ):
            result = self.runner.invoke(
                app,
                ["--config", str(DEFAULT_CONFIG_PATH), "fonts", "download", "--dir", tmpdir],
            )
        self.assertEqual(result.exit_code, 2)
        self.assertIn("font download failed", _strip_ansi(result.output))
        download.assert_called_once()

    def test_download_lists_written_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            written = [Path(tmpdir) / "RedHatDisplay-Bold.ttf"]
            with mock.patch(
                "receiptkit.cli.commands.fonts.download_fonts", return_value=written
            ) as download:
                result = self.runner.invoke(app, ["fonts", "download", "--dir", tmpdir, "--force"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("RedHatDisplay-Bold.ttf", _strip_ansi(result.output))
        self.assertTrue(download.call_args.kwargs["overwrite"])


if __name__ == "__main__":
    unittest.main()
