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

import atexit
import logging
import threading
from typing import Literal

from playwright.sync_api import Browser, Error as PlaywrightError, Playwright, sync_playwright

from ..core.errors import RenderingError
from .layout import CanvasSize

logger = logging.getLogger(__name__)

ImageFormat = Literal["jpeg", "png"]

_PLAYWRIGHT: Playwright | None = None
_BROWSER: Browser | None = None
_LOCK = threading.RLock()


def _shutdown_playwright() -> None:
    global _BROWSER, _PLAYWRIGHT
    browser = _BROWSER
    playwright = _PLAYWRIGHT
    _BROWSER = None
    _PLAYWRIGHT = None
    if browser is not None:
        browser.close()
    if playwright is not None:
        playwright.stop()


def _get_browser() -> Browser:
    global _BROWSER, _PLAYWRIGHT
    if _BROWSER is not None:
        return _BROWSER
    logger.debug("starting headless chromium")
    _PLAYWRIGHT = sync_playwright().start()
    _BROWSER = _PLAYWRIGHT.chromium.launch()
    atexit.register(_shutdown_playwright)
    return _BROWSER


def encode_raster(
    markup: str,
    size: CanvasSize,
    *,
    background: str = "#ffffff",
    quality: int = 90,
    image_format: ImageFormat = "jpeg",
) -> bytes:
    """Screenshot markup in a viewport of exactly ``size`` and return the image bytes."""
    if size.width <= 0 or size.height <= 0:
        raise RenderingError(f"invalid canvas size {size.width}x{size.height}")
    if image_format not in ("jpeg", "png"):
        raise RenderingError(f"unsupported image format: {image_format}")
    # The sync API is bound to the thread that started it.
    with _LOCK:
        try:
            browser = _get_browser()
            page = browser.new_page(viewport={"width": size.width, "height": size.height})
            try:
                page.set_content(markup, wait_until="load")
                page.add_style_tag(content=f"html, body {{ background: {background}; }}")
                options: dict[str, object] = {
                    "type": image_format,
                    "clip": {"x": 0, "y": 0, "width": size.width, "height": size.height},
                }
                if image_format == "jpeg":
                    options["quality"] = quality
                return page.screenshot(**options)
            finally:
                page.close()
        except PlaywrightError as exc:
            raise RenderingError(f"raster encoder failed: {exc}") from exc


__all__ = ["ImageFormat", "encode_raster"]
