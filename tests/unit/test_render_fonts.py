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

import tempfile
import unittest
from pathlib import Path

import httpx

from receiptkit.render.fonts import (
    FONT_FACES,
    FontSet,
    LoadedFont,
    default_fonts_dir,
    download_fonts,
)


class TestFontSet(unittest.TestCase):
    def test_empty_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            fonts = FontSet(Path(tmpdir))
            self.assertEqual(fonts.missing(), list(FONT_FACES))
            self.assertEqual(fonts.load(), ())
            self.assertIsNone(fonts.pdf_paths())

    def test_partial_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            fonts = FontSet(Path(tmpdir))
            fonts.path_for(FONT_FACES[0]).write_bytes(b"regular")
            loaded = fonts.load()
            self.assertEqual(loaded, (LoadedFont(FONT_FACES[0], b"regular"),))
            self.assertEqual(len(fonts.missing()), 3)
            self.assertIsNone(fonts.pdf_paths())

    def test_complete_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            fonts = FontSet(Path(tmpdir))
            for face in FONT_FACES:
                fonts.path_for(face).write_bytes(face.filename.encode())
            paths = fonts.pdf_paths()
            self.assertIsNotNone(paths)
            self.assertEqual(set(paths), {"", "B", "I", "BI"})
            self.assertEqual(paths["B"].name, "RedHatDisplay-Bold.ttf")

    def test_face_urls(self) -> None:
        self.assertTrue(FONT_FACES[1].url.endswith("/latin-700-normal.ttf"))
        self.assertTrue(FONT_FACES[2].url.endswith("/latin-400-italic.ttf"))

    def test_default_dir(self) -> None:
        path = default_fonts_dir()
        self.assertEqual(path.name, "fonts")
        self.assertIn("receiptkit", str(path))


class TestDownloadFonts(unittest.TestCase):
    def test_downloads_missing_faces(self) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, content=b"ttf-data")

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with tempfile.TemporaryDirectory() as tmpdir:
            fonts = FontSet(Path(tmpdir) / "nested")
            fonts.directory.mkdir()
            fonts.path_for(FONT_FACES[0]).write_bytes(b"existing")
            with self.assertLogs("receiptkit.render.fonts", level="INFO"):
                written = download_fonts(fonts, client=client)
            self.assertEqual(len(written), 3)
            self.assertEqual(len(requested), 3)
            self.assertEqual(fonts.path_for(FONT_FACES[0]).read_bytes(), b"existing")
            self.assertEqual(fonts.path_for(FONT_FACES[3]).read_bytes(), b"ttf-data")
            self.assertEqual(fonts.missing(), [])

            self.assertEqual(download_fonts(fonts, client=client), [])
            with self.assertLogs("receiptkit.render.fonts", level="INFO"):
                self.assertEqual(len(download_fonts(fonts, client=client, overwrite=True)), 4)

    def test_http_failure_raises(self) -> None:
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(503)))
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(httpx.HTTPStatusError):
                download_fonts(FontSet(Path(tmpdir)), client=client)


if __name__ == "__main__":
    unittest.main()
