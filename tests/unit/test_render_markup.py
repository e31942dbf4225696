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

from receiptkit.core.errors import RenderingError
from receiptkit.core.models import DocumentKind
from receiptkit.render.fonts import FONT_FACES, LoadedFont
from receiptkit.render.layout import CanvasSize
from receiptkit.render.markup import render_markup, style_to_css
from receiptkit.render.nodes import container, text
from receiptkit.render.tree import build_document_tree
from tests.test_support import make_fields


class TestStyleToCss(unittest.TestCase):
    def test_lengths_get_pixel_units(self) -> None:
        css = style_to_css({"height": 36, "margin-left": -30, "line-height": 1.5})
        self.assertEqual(css, "height: 36px; margin-left: -30px; line-height: 1.5px")

    def test_unitless_and_zero_values(self) -> None:
        css = style_to_css({"font-weight": 700, "z-index": 10, "top": 0, "opacity": 0.5})
        self.assertEqual(css, "font-weight: 700; z-index: 10; top: 0; opacity: 0.5")

    def test_strings_pass_through(self) -> None:
        self.assertEqual(
            style_to_css({"flex-direction": "row", "background": "#0a3d62"}),
            "flex-direction: row; background: #0a3d62",
        )

    def test_boolean_is_rejected(self) -> None:
        with self.assertRaises(RenderingError):
            style_to_css({"opacity": True})


class TestRenderMarkup(unittest.TestCase):
    def test_document_markup(self) -> None:
        fields = make_fields(DocumentKind.PAYMENT)
        tree = build_document_tree(DocumentKind.PAYMENT, fields)
        markup = render_markup(tree, CanvasSize(750, 991))

        self.assertTrue(markup.startswith("<!DOCTYPE html>"))
        self.assertIn("width: 750px;", markup)
        self.assertIn("height: 991px;", markup)
        self.assertIn('data-role="transaction-card"', markup)
        self.assertIn("COP $ 74,970", markup)
        self.assertIn(f'src="{fields.logo_src}"', markup)
        self.assertNotIn("@font-face", markup)

    def test_text_is_escaped(self) -> None:
        tree = container("document", [text("title", "<b>Tom & Jerry</b>", height=10)])
        markup = render_markup(tree, CanvasSize(10, 10))
        self.assertIn("&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;", markup)
        self.assertNotIn("<b>Tom", markup)

    def test_font_faces_are_embedded(self) -> None:
        fonts = [LoadedFont(face=face, data=b"ttf") for face in FONT_FACES[:2]]
        tree = container("document", [])
        markup = render_markup(tree, CanvasSize(10, 10), fonts=fonts)
        self.assertEqual(markup.count("@font-face"), 2)
        self.assertIn("font-weight: 700;", markup)
        self.assertIn("data:font/ttf;base64,dHRm", markup)

    def test_background(self) -> None:
        markup = render_markup(container("document", []), CanvasSize(5, 5), background="#000000")
        self.assertIn("background: #000000;", markup)

    def test_invalid_size(self) -> None:
        with self.assertRaises(RenderingError):
            render_markup(container("document", []), CanvasSize(0, 10))

    def test_custom_template_dir(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            Path(tmpdir, "document.html.j2").write_text(
                "{{ width }}x{{ height }} {{ tree.role }}", encoding="utf-8"
            )
            markup = render_markup(
                container("document", []), CanvasSize(3, 4), template_dir=Path(tmpdir)
            )
        self.assertEqual(markup, "3x4 document")

    def test_template_errors_become_rendering_errors(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            Path(tmpdir, "document.html.j2").write_text("{{ missing }}", encoding="utf-8")
            with self.assertRaises(RenderingError):
                render_markup(
                    container("document", []), CanvasSize(3, 4), template_dir=Path(tmpdir)
                )


if __name__ == "__main__":
    unittest.main()
