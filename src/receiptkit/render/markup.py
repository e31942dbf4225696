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

from functools import lru_cache
from pathlib import Path
from typing import Mapping, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ..core.errors import RenderingError
from .fonts import FONT_FAMILY, LoadedFont
from .layout import CanvasSize
from .nodes import StyleNode, StyleValue

_TEMPLATES_ROOT = Path(__file__).parent.parent / "templates"
DOCUMENT_TEMPLATE = "document.html.j2"

UNITLESS_PROPERTIES = frozenset({"font-weight", "opacity", "flex-grow", "flex-shrink", "z-index"})


def _css_value(key: str, value: StyleValue) -> str:
    if isinstance(value, bool):
        raise RenderingError(f"style {key} cannot be a boolean")
    if isinstance(value, (int, float)):
        if key in UNITLESS_PROPERTIES or value == 0:
            return f"{value:g}"
        return f"{value:g}px"
    return str(value)


def style_to_css(style: Mapping[str, StyleValue]) -> str:
    """Serialise a node style to an inline CSS declaration list."""
    return "; ".join(f"{key}: {_css_value(key, value)}" for key, value in style.items())


@lru_cache(maxsize=4)
def _get_env(template_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters["css"] = style_to_css
    return env


def render_markup(
    tree: StyleNode,
    size: CanvasSize,
    *,
    fonts: Sequence[LoadedFont] = (),
    background: str = "#ffffff",
    template_dir: Path | None = None,
) -> str:
    """Serialise a document tree to a standalone HTML page of exactly ``size``."""
    if size.width <= 0 or size.height <= 0:
        raise RenderingError(f"invalid canvas size {size.width}x{size.height}")
    env = _get_env((template_dir or _TEMPLATES_ROOT).resolve())
    try:
        template = env.get_template(DOCUMENT_TEMPLATE)
        return template.render(
            tree=tree,
            width=size.width,
            height=size.height,
            fonts=fonts,
            font_family=FONT_FAMILY,
            background=background,
        )
    except TemplateError as exc:
        raise RenderingError(f"failed to render document markup: {exc}") from exc


__all__ = ["DOCUMENT_TEMPLATE", "UNITLESS_PROPERTIES", "render_markup", "style_to_css"]
