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

import json
import re
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Literal

import typer

from ...config import AppConfig
from ...core.models import DocumentRequest, Resolution
from ...core.validation import parse_request
from ...render.service import RenderedDocument, RenderService
from ...storage.s3 import S3ObjectStore
from ..core.common import _ctx_value, _load_config, _run_cli
from ..ui import build_kv_table, console

RenderFormat = Literal["jpeg", "png", "pdf"]
KindOption = Literal["payment", "payout", "qr"]
_UNSAFE_FILENAME_RE = re.compile(r"[^\w.-]+")

_RENDER_HELP = (
    "Render a receipt, payout confirmation or QR card from a JSON payload.\n\n"
    "Examples:\n"
    "  receiptkit render payment.json -o receipt.jpg\n"
    "  receiptkit render payout.json --kind payout --format pdf\n"
    "  cat qr.json | receiptkit render - --kind qr --publish\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_RENDER_HELP)(render)


def _read_payload(source: str) -> Any:
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"payload is not valid JSON: {exc}") from exc


def _service_config(config: AppConfig, image_format: RenderFormat) -> AppConfig:
    if image_format == "pdf" or image_format == config.render.image_format:
        return config
    return replace(config, render=replace(config.render, image_format=image_format))


def _default_output(request: DocumentRequest, document: RenderedDocument) -> Path:
    reference = _UNSAFE_FILENAME_RE.sub("_", request.external_reference).strip("._") or "document"
    return Path.cwd() / f"{request.kind.value}-{reference}.{document.extension}"


def render(
    ctx: typer.Context,
    payload: str = typer.Argument(..., help="JSON payload file, or - to read stdin."),
    kind: KindOption | None = typer.Option(
        None,
        "--kind",
        "-k",
        help="Document kind (overrides the payload's kind field).",
        rich_help_panel="Inputs",
    ),
    resolution: Resolution | None = typer.Option(
        None,
        "--resolution",
        "-r",
        help="Pixel density multiplier (overrides the payload).",
        rich_help_panel="Inputs",
    ),
    format: RenderFormat | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (defaults to render.image_format).",
        rich_help_panel="Outputs",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (defaults to <kind>-<reference>.<ext>).",
        rich_help_panel="Outputs",
    ),
    publish: bool = typer.Option(
        False,
        "--publish",
        help="Upload to the configured S3 bucket and print the public URL.",
        rich_help_panel="Outputs",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the computed canvas size without rendering.",
        rich_help_panel="Outputs",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        request = parse_request(_read_payload(payload), kind=kind)
        if resolution is not None:
            request = replace(request, resolution=resolution)
        image_format = format or config.render.image_format
        service = RenderService(config=_service_config(config, image_format))

        if dry_run:
            prepared = service.prepare(request)
            console.print(
                build_kv_table(
                    [
                        ("kind", request.kind.value),
                        ("resolution", request.resolution.value),
                        ("width", str(prepared.size.width)),
                        ("height", str(prepared.size.height)),
                    ]
                )
            )
            return

        if publish:
            store = S3ObjectStore.from_config(config.storage)
            stored = service.publish(request, store, pdf=image_format == "pdf")
            console.print(stored.url)
            return

        if image_format == "pdf":
            document = service.render_pdf(request)
        else:
            document = service.render_request(request)
        output_path = output or _default_output(request, document)
        output_path.write_bytes(document.content)
        if not quiet_value:
            console.print(str(output_path))

    _run_cli(_run, debug=debug_value)
