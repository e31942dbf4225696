#!/usr/bin/env python3
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

from __future__ import annotations

import re
from dataclasses import dataclass

ELLIPSIS = "..."

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class WrappedText:
    line1: str = ""
    line2: str = ""

    @property
    def has_second_line(self) -> bool:
        return bool(self.line2)

    @property
    def lines(self) -> tuple[str, ...]:
        if self.line2:
            return (self.line1, self.line2)
        return (self.line1,)


def _last_break(text: str, max_line_length: int) -> int:
    last = -1
    for match in _WHITESPACE.finditer(text, 0, max_line_length + 1):
        last = match.start()
    return last


def wrap_text(text: str | None, max_line_length: int) -> WrappedText:
    """Split text into at most two display lines under a character budget.

    The break goes at the last whitespace at or before the budget, or is a
    hard break when the first line has none. An overflowing second line is cut
    to ``max_line_length - 3`` characters and marked with ``...``.
    """
    if not text:
        return WrappedText()
    if len(text) <= max_line_length:
        return WrappedText(text, "")

    cut = _last_break(text, max_line_length)
    if cut <= 0:
        first = text[:max_line_length].strip()
        second = text[max_line_length:].strip()
    else:
        first = text[:cut].strip()
        second = text[cut + 1 :].strip()

    if len(second) > max_line_length:
        keep = max(0, max_line_length - len(ELLIPSIS))
        second = second[:keep].strip() + ELLIPSIS
    return WrappedText(first, second)


def clip_text(text: str | None, max_length: int) -> str:
    """Cut text longer than max_length to its first max_length - 1 characters plus ``...``."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + ELLIPSIS


__all__ = ["ELLIPSIS", "WrappedText", "clip_text", "wrap_text"]
