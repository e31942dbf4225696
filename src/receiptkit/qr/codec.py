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

import base64
import io
from dataclasses import dataclass
from typing import Any

import segno
from PIL import Image, ImageColor, ImageDraw


@dataclass(frozen=True)
class QrConfig:
    error: str = "M"
    border: int = 2
    dark: str = "#000000"
    light: str = "#ffffff"
    module_shape: str = "square"
    boost_error: bool = True


_ROUNDED_RATIO = 0.2


def _rgba(value: str, fallback: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
    if not value or value.strip().lower() in ("none", "transparent"):
        return fallback
    rgba = ImageColor.getcolor(value.strip(), "RGBA")
    if isinstance(rgba, int):
        return (rgba, rgba, rgba, 255)
    return (int(rgba[0]), int(rgba[1]), int(rgba[2]), int(rgba[3]))


def make_qr(data: bytes | str, *, error: str = "M", boost_error: bool = True) -> Any:
    return segno.make(data, error=error, micro=False, boost_error=boost_error)


def scale_for_size(qr: Any, size_px: int, *, border: int) -> int:
    """Largest integer module scale whose symbol still fits in size_px."""
    modules, _ = qr.symbol_size(scale=1, border=border)
    return max(1, size_px // modules)


def qr_png(data: bytes | str, size_px: int, config: QrConfig | None = None) -> bytes:
    """Encode data as a PNG QR symbol no larger than size_px square."""
    if size_px <= 0:
        raise ValueError("size_px must be positive")
    config = config or QrConfig()
    qr = make_qr(data, error=config.error, boost_error=config.boost_error)
    scale = scale_for_size(qr, size_px, border=config.border)
    shape = config.module_shape.strip().lower()
    if shape not in {"square", "rounded"}:
        raise ValueError(f"unsupported module_shape: {config.module_shape}")
    if shape == "rounded":
        return _render_rounded(qr, scale=scale, border=config.border, config=config)

    buf = io.BytesIO()
    qr.save(
        buf,
        kind="png",
        scale=scale,
        border=config.border,
        dark=config.dark,
        light=config.light,
    )
    return buf.getvalue()


def qr_data_uri(data: bytes | str, size_px: int, config: QrConfig | None = None) -> str:
    encoded = base64.b64encode(qr_png(data, size_px, config)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def _render_rounded(qr: Any, *, scale: int, border: int, config: QrConfig) -> bytes:
    light = _rgba(config.light, (255, 255, 255, 255))
    dark = _rgba(config.dark, (0, 0, 0, 255))
    width, height = qr.symbol_size(scale=scale, border=border)
    image = Image.new("RGBA", (width, height), light)
    draw = ImageDraw.Draw(image)
    radius = _ROUNDED_RATIO * scale
    for row_idx, row in enumerate(qr.matrix_iter(scale=1, border=border)):
        for col_idx, is_dark in enumerate(row):
            if not is_dark:
                continue
            x = col_idx * scale
            y = row_idx * scale
            draw.rounded_rectangle((x, y, x + scale - 1, y + scale - 1), radius=radius, fill=dark)
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


__all__ = ["QrConfig", "make_qr", "qr_data_uri", "qr_png", "scale_for_size"]
