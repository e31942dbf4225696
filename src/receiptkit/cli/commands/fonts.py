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

from pathlib import Path

import httpx
import typer

from ...render.fonts import FONT_FACES, FontSet, default_fonts_dir, download_fonts
from ..core.common import _ctx_value, _load_config, _run_cli
from ..ui import build_kv_table, console

fonts_app = typer.Typer(help="Manage the Red Hat Display font files.", no_args_is_help=True)


def register(app: typer.Typer) -> None:
    app.add_typer(fonts_app, name="fonts")


def _font_set(ctx: typer.Context, directory: Path | None) -> FontSet:
    if directory is not None:
        return FontSet(directory)
    config = _load_config(ctx)
    return FontSet(config.fonts.directory or default_fonts_dir())


@fonts_app.command("download")
def download(
    ctx: typer.Context,
    directory: Path | None = typer.Option(
        None, "--dir", help="Target directory (defaults to fonts.directory)."
    ),
    force: bool = typer.Option(False, "--force", help="Download even if the files exist."),
) -> None:
    """Download missing font files from the fontsource CDN."""
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        font_set = _font_set(ctx, directory)
        try:
            written = download_fonts(font_set, overwrite=force)
        except httpx.HTTPError as exc:
            raise RuntimeError(f"font download failed: {exc}") from exc
        if quiet_value:
            return
        if not written:
            console.print(f"[muted]All fonts present in {font_set.directory}[/muted]")
        for path in written:
            console.print(str(path))

    _run_cli(_run, debug=debug_value)


@fonts_app.command("status")
def status(
    ctx: typer.Context,
    directory: Path | None = typer.Option(None, "--dir", help="Directory to inspect."),
) -> None:
    """Show which font variants are installed."""
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> int:
        font_set = _font_set(ctx, directory)
        missing = set(font_set.missing())
        rows = [
            (face.filename, "missing" if face in missing else "ok") for face in FONT_FACES
        ]
        console.print(build_kv_table(rows, title=str(font_set.directory)))
        return 1 if missing else 0

    _run_cli(_run, debug=debug_value)
