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

import unittest

from receiptkit.render.metrics import CLIENT_WRAP, DESCRIPTION_WRAP
from receiptkit.render.text import ELLIPSIS, WrappedText, clip_text, wrap_text


class TestWrapText(unittest.TestCase):
    def test_empty_and_none_give_two_empty_lines(self) -> None:
        self.assertEqual(wrap_text("", 30), WrappedText("", ""))
        self.assertEqual(wrap_text(None, 30), WrappedText("", ""))

    def test_text_within_budget_is_returned_unchanged(self) -> None:
        self.assertEqual(wrap_text("Plan mensual", 30), WrappedText("Plan mensual", ""))
        exact = "x" * 30
        self.assertEqual(wrap_text(exact, 30), WrappedText(exact, ""))

    def test_breaks_at_last_whitespace_before_budget(self) -> None:
        wrapped = wrap_text("aaaa bbbb cccc dddd eeee ffff gggg hhhh", 30)
        self.assertEqual(wrapped.line1, "aaaa bbbb cccc dddd eeee ffff")
        self.assertEqual(wrapped.line2, "gggg hhhh")
        self.assertTrue(wrapped.has_second_line)

    def test_whitespace_exactly_at_budget_is_a_breakpoint(self) -> None:
        wrapped = wrap_text("a" * 30 + " " + "b" * 5, 30)
        self.assertEqual(wrapped, WrappedText("a" * 30, "b" * 5))

    def test_hard_break_without_whitespace(self) -> None:
        wrapped = wrap_text("x" * 40, 30)
        self.assertEqual(wrapped, WrappedText("x" * 30, "x" * 10))

    def test_leading_whitespace_only_forces_hard_break(self) -> None:
        wrapped = wrap_text(" " + "x" * 40, 30)
        self.assertEqual(wrapped, WrappedText("x" * 29, "x" * 11))

    def test_overflowing_second_line_is_cut_and_marked(self) -> None:
        wrapped = wrap_text("a" * 10 + " " + "b" * 50, 30)
        self.assertEqual(wrapped.line1, "a" * 10)
        self.assertEqual(wrapped.line2, "b" * 27 + ELLIPSIS)
        self.assertEqual(len(wrapped.line2), 30)

    def test_first_line_never_exceeds_budget(self) -> None:
        samples = [
            "Pago de la orden " + "x" * 63,
            "Suscripción anual al plan empresarial con soporte prioritario",
            "y" * 100,
            "  espacios   al   inicio y al final de la descripción  ",
        ]
        for text in samples:
            with self.subTest(text=text):
                wrapped = wrap_text(text, 30)
                self.assertLessEqual(len(wrapped.line1), 30)
                self.assertLessEqual(len(wrapped.line2), 30)

    def test_wrapping_the_first_line_again_is_stable(self) -> None:
        for text in ("aaaa bbbb cccc dddd eeee ffff gggg", "z" * 75, "corto"):
            with self.subTest(text=text):
                first = wrap_text(text, 30).line1
                self.assertEqual(wrap_text(first, 30), WrappedText(first, ""))

    def test_lines_property(self) -> None:
        self.assertEqual(WrappedText("a", "").lines, ("a",))
        self.assertEqual(WrappedText("a", "b").lines, ("a", "b"))

    def test_shared_budgets(self) -> None:
        self.assertEqual(DESCRIPTION_WRAP, 30)
        self.assertEqual(CLIENT_WRAP, 30)


class TestClipText(unittest.TestCase):
    def test_clip_long_text(self) -> None:
        self.assertEqual(clip_text("a" * 50, 45), "a" * 44 + ELLIPSIS)

    def test_short_and_missing_text(self) -> None:
        self.assertEqual(clip_text("abc", 45), "abc")
        self.assertEqual(clip_text("a" * 45, 45), "a" * 45)
        self.assertEqual(clip_text(None, 45), "")


if __name__ == "__main__":
    unittest.main()
