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

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Literal, Mapping, Sequence

NodeTag = Literal["container", "text", "image", "rule"]
StyleValue = str | int | float

_EMPTY_STYLE: Mapping[str, StyleValue] = MappingProxyType({})


@dataclass(frozen=True)
class StyleNode:
    """One element of a document tree.

    Style keys are CSS property names (builders pass them with underscores).
    Numeric values are pixels, except for the unitless properties listed in
    ``render.markup``.
    """

    tag: NodeTag
    role: str
    style: Mapping[str, StyleValue] = field(default_factory=lambda: _EMPTY_STYLE)
    text: str | None = None
    src: str | None = None
    children: tuple["StyleNode", ...] = field(default_factory=tuple)

    @property
    def is_absolute(self) -> bool:
        return self.style.get("position") == "absolute"

    def iter_nodes(self) -> Iterator["StyleNode"]:
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def find(self, role: str) -> "StyleNode | None":
        for node in self.iter_nodes():
            if node.role == role:
                return node
        return None

    def find_all(self, role: str) -> list["StyleNode"]:
        return [node for node in self.iter_nodes() if node.role == role]

    def roles(self) -> list[str]:
        return [node.role for node in self.iter_nodes()]


def _freeze(style: Mapping[str, StyleValue] | None) -> Mapping[str, StyleValue]:
    if not style:
        return _EMPTY_STYLE
    return MappingProxyType({key.replace("_", "-"): value for key, value in style.items()})


def container(
    role: str,
    children: Sequence[StyleNode | None],
    **style: StyleValue,
) -> StyleNode:
    """Build a flow container. ``None`` children are dropped."""
    return StyleNode(
        tag="container",
        role=role,
        style=_freeze(style),
        children=tuple(child for child in children if child is not None),
    )


def text(role: str, value: str, **style: StyleValue) -> StyleNode:
    return StyleNode(tag="text", role=role, style=_freeze(style), text=value)


def image(role: str, src: str, **style: StyleValue) -> StyleNode:
    return StyleNode(tag="image", role=role, style=_freeze(style), src=src)


def rule(role: str, **style: StyleValue) -> StyleNode:
    return StyleNode(tag="rule", role=role, style=_freeze(style))


__all__ = [
    "NodeTag",
    "StyleNode",
    "StyleValue",
    "container",
    "image",
    "rule",
    "text",
]
