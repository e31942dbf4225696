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
import binascii
import io
import logging
from typing import Any, Final, cast

from fpdf import FPDF
from fpdf.errors import FPDFException

from ..core.errors import RenderingError
from ..core.models import DocumentKind
from .fields import DocumentFields
from .fonts import FONT_FAMILY, FontSet
from .formatting import TRUNCATION_MARK, truncate
from .layout import compute_pdf_page_size, has_provider_note, sizing_parameters
from .text import WrappedText
from .tree import (
    CUSTOMER_HEADING,
    PROVIDER_NOTE_TEMPLATE,
    PROVIDER_SOURCE_MAX_CHARS,
    TITLES,
    TRANSACTION_HEADING,
)

logger = logging.getLogger(__name__)

CORE_FONT: Final = "helvetica"
CARD_MARGIN: Final = 20.0
CONTENT_MARGIN: Final = 40.0
ROW_HEIGHT: Final = 30.0
PAYOUT_VALUE_CHARS: Final = 28
LABEL_COLOR: Final = (107, 114, 128)
TEXT_COLOR: Final = (17, 24, 39)
WATERMARK_TEXT: Final = "DOCUMENTO DE PRUEBA"


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def decode_data_uri(uri: str) -> bytes | None:
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:"):
        return None
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            return None
    return payload.encode("utf-8")


class _ReceiptPdf:
    def __init__(self, fields: DocumentFields, fonts: FontSet | None) -> None:
        self.fields = fields
        width, height = compute_pdf_page_size(fields.kind, sizing_parameters(fields))
        self.width = width
        self.height = height
        self.pdf = FPDF(unit="pt", format=cast(Any, (width, height)))
        self.pdf.set_auto_page_break(False)
        self.pdf.set_margin(0)
        self.family = CORE_FONT
        self.unicode = False
        paths = fonts.pdf_paths() if fonts is not None else None
        if paths:
            for style, path in paths.items():
                self.pdf.add_font(FONT_FAMILY, style=style, fname=str(path))
            self.family = FONT_FAMILY
            self.unicode = True
        self.y = CONTENT_MARGIN

    def _text(self, value: str) -> str:
        if self.unicode:
            return value
        # Core fonts are limited to latin-1.
        value = value.replace(TRUNCATION_MARK, "...")
        return value.encode("latin-1", "replace").decode("latin-1")

    def _cell(
        self,
        value: str,
        *,
        x: float,
        width: float,
        size: float,
        bold: bool = False,
        align: str = "L",
        color: tuple[int, int, int] = TEXT_COLOR,
        height: float = ROW_HEIGHT,
    ) -> None:
        self.pdf.set_font(self.family, style="B" if bold else "", size=size)
        self.pdf.set_text_color(*color)
        self.pdf.set_xy(x, self.y)
        self.pdf.cell(width, height, text=self._text(value), align=align)

    def background(self) -> None:
        self.pdf.add_page()
        self.pdf.set_fill_color(*hex_to_rgb(self.fields.main_color))
        self.pdf.rect(0, 0, self.width, self.height, style="F")
        self.pdf.set_fill_color(255, 255, 255)
        self.pdf.rect(
            CARD_MARGIN,
            CARD_MARGIN,
            self.width - 2 * CARD_MARGIN,
            self.height - 2 * CARD_MARGIN,
            style="F",
        )

    def logo(self) -> None:
        data = decode_data_uri(self.fields.logo_src)
        box_w, box_h = 140.0, 50.0
        if data:
            try:
                self.pdf.image(
                    io.BytesIO(data),
                    x=(self.width - box_w) / 2,
                    y=self.y,
                    w=box_w,
                    h=box_h,
                    keep_aspect_ratio=True,
                )
            except (FPDFException, OSError, ValueError) as exc:
                logger.warning("logo could not be placed in PDF: %s", exc)
        self.y += box_h + 10

    def heading(self) -> None:
        inner = self.width - 2 * CONTENT_MARGIN
        self._cell(
            TITLES[self.fields.kind],
            x=CONTENT_MARGIN,
            width=inner,
            size=20,
            bold=True,
            align="C",
            height=24,
        )
        self.y += 26
        self._cell(
            self.fields.date,
            x=CONTENT_MARGIN,
            width=inner,
            size=10,
            align="C",
            color=LABEL_COLOR,
            height=16,
        )
        self.y += 26
        self.divider()

    def divider(self) -> None:
        self.pdf.set_draw_color(229, 231, 235)
        self.pdf.line(CONTENT_MARGIN, self.y, self.width - CONTENT_MARGIN, self.y)
        self.y += 10

    def section(self, title: str) -> None:
        inner = self.width - 2 * CONTENT_MARGIN
        self._cell(title, x=CONTENT_MARGIN, width=inner, size=13, bold=True, height=20)
        self.y += 24

    def row(self, label: str, value: str | WrappedText) -> None:
        inner = self.width - 2 * CONTENT_MARGIN
        half = inner / 2
        lines = value.lines if isinstance(value, WrappedText) else (value,)
        self._cell(label, x=CONTENT_MARGIN, width=half, size=11, color=LABEL_COLOR)
        for line in lines:
            self._cell(line, x=CONTENT_MARGIN + half, width=half, size=11, bold=True, align="R")
            self.y += ROW_HEIGHT

    def note(self, value: str) -> None:
        inner = self.width - 2 * CONTENT_MARGIN
        self._cell(
            value,
            x=CONTENT_MARGIN,
            width=inner,
            size=10,
            align="C",
            color=LABEL_COLOR,
            height=20,
        )
        self.y += 24

    def footer(self) -> None:
        band = 40.0
        top = self.height - CARD_MARGIN - band
        self.pdf.set_fill_color(*hex_to_rgb(self.fields.secondary_color))
        self.pdf.rect(CARD_MARGIN, top, self.width - 2 * CARD_MARGIN, band, style="F")
        self.y = top
        inner = self.width - 2 * CONTENT_MARGIN
        self._cell(
            self.fields.attribution,
            x=CONTENT_MARGIN,
            width=inner,
            size=9,
            color=LABEL_COLOR,
            height=band,
        )

    def watermark(self) -> None:
        self.pdf.set_font(self.family, style="B", size=48)
        self.pdf.set_text_color(240, 200, 200)
        center_x = self.width / 2
        center_y = self.height / 2
        text_w = self.pdf.get_string_width(WATERMARK_TEXT)
        with self.pdf.rotation(angle=35, x=center_x, y=center_y):
            self.pdf.text(center_x - text_w / 2, center_y, WATERMARK_TEXT)

    def output(self) -> bytes:
        return bytes(self.pdf.output())


def _one_line(value: WrappedText) -> str:
    return truncate(" ".join(value.lines).strip(), PAYOUT_VALUE_CHARS)


def render_receipt_pdf(fields: DocumentFields, *, fonts: FontSet | None = None) -> bytes:
    """Draw a payment or payout receipt as a single-page PDF.

    Payment pages grow by one row per wrapped second line. Payout pages keep
    a fixed size and cut long values to one line instead.
    """
    try:
        doc = _ReceiptPdf(fields, fonts)
        _draw_receipt(doc, fields)
        return doc.output()
    except FPDFException as exc:
        raise RenderingError(f"PDF rendering failed: {exc}") from exc


def _draw_receipt(doc: _ReceiptPdf, fields: DocumentFields) -> None:
    payout = fields.kind is DocumentKind.PAYOUT
    doc.background()
    doc.logo()
    doc.heading()

    doc.section(TRANSACTION_HEADING)
    doc.row("Código:", fields.reference)
    doc.row("Descripción:", _one_line(fields.description) if payout else fields.description)
    doc.row("Valor:", fields.amount)
    if payout:
        doc.row("Entidad bancaria:", fields.bank_name)
        doc.row("Tipo de cuenta:", fields.bank_account_type)
        doc.row("Número de cuenta:", fields.bank_account_number)
    else:
        doc.row("Método de pago:", fields.payment_method)
        doc.row("Medio de pago:", fields.payment_source)
    doc.divider()
    if has_provider_note(fields):
        source = truncate(fields.provider_source, PROVIDER_SOURCE_MAX_CHARS)
        doc.note(PROVIDER_NOTE_TEMPLATE.format(source=source))
        doc.divider()

    doc.section(CUSTOMER_HEADING)
    doc.row("Nombre:", _one_line(fields.client) if payout else fields.client)
    doc.row("Identificación:", fields.identification)
    doc.row("Contacto:", fields.contact)
    doc.footer()
    if fields.watermark:
        doc.watermark()


__all__ = ["decode_data_uri", "hex_to_rgb", "render_receipt_pdf"]
