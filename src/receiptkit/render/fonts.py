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
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import httpx
from platformdirs import user_data_dir

logger = logging.getLogger(__name__)

FONT_FAMILY: Final = "Red Hat Display"
FONT_CDN_URL: Final = (
    "https://cdn.jsdelivr.net/fontsource/fonts/red-hat-display@latest/latin-{weight}-{style}.ttf"
)
DOWNLOAD_TIMEOUT_SECONDS: Final = 30.0


@dataclass(frozen=True)
class FontFace:
    weight: int
    style: str
    filename: str
    pdf_style: str

    @property
    def url(self) -> str:
        return FONT_CDN_URL.format(weight=self.weight, style=self.style)


FONT_FACES: Final[tuple[FontFace, ...]] = (
    FontFace(400, "normal", "RedHatDisplay-Regular.ttf", ""),
    FontFace(700, "normal", "RedHatDisplay-Bold.ttf", "B"),
    FontFace(400, "italic", "RedHatDisplay-Italic.ttf", "I"),
    FontFace(700, "italic", "RedHatDisplay-BoldItalic.ttf", "BI"),
)


@dataclass(frozen=True)
class LoadedFont:
    face: FontFace
    data: bytes

    @property
    def weight(self) -> int:
        return self.face.weight

    @property
    def style(self) -> str:
        return self.face.style

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:font/ttf;base64,{encoded}"


def default_fonts_dir() -> Path:
    return Path(user_data_dir("receiptkit")) / "fonts"


@dataclass(frozen=True)
class FontSet:
    """The four Red Hat Display variants in one directory."""

    directory: Path

    def path_for(self, face: FontFace) -> Path:
        return self.directory / face.filename

    def missing(self) -> list[FontFace]:
        return [face for face in FONT_FACES if not self.path_for(face).is_file()]

    def load(self) -> tuple[LoadedFont, ...]:
        """Read the variants that exist on disk. Missing ones are skipped."""
        loaded: list[LoadedFont] = []
        for face in FONT_FACES:
            path = self.path_for(face)
            if not path.is_file():
                logger.debug("font %s not found, skipping", path)
                continue
            loaded.append(LoadedFont(face=face, data=path.read_bytes()))
        return tuple(loaded)

    def pdf_paths(self) -> dict[str, Path] | None:
        """Return fpdf style -> TTF path, or None unless every variant exists."""
        if self.missing():
            return None
        return {face.pdf_style: self.path_for(face) for face in FONT_FACES}


def download_fonts(
    font_set: FontSet,
    *,
    client: httpx.Client | None = None,
    overwrite: bool = False,
) -> list[Path]:
    """Fetch missing font files from the fontsource CDN.

    Returns the paths written. HTTP failures raise ``httpx.HTTPError``.
    """
    faces = list(FONT_FACES) if overwrite else font_set.missing()
    if not faces:
        return []
    font_set.directory.mkdir(parents=True, exist_ok=True)
    owns_client = client is None
    http = client or httpx.Client(timeout=DOWNLOAD_TIMEOUT_SECONDS, follow_redirects=True)
    written: list[Path] = []
    try:
        for face in faces:
            response = http.get(face.url)
            response.raise_for_status()
            path = font_set.path_for(face)
            path.write_bytes(response.content)
            logger.info("downloaded %s", path.name)
            written.append(path)
    finally:
        if owns_client:
            http.close()
    return written


__all__ = [
    "FONT_FACES",
    "FONT_FAMILY",
    "FontFace",
    "FontSet",
    "LoadedFont",
    "default_fonts_dir",
    "download_fonts",
]
