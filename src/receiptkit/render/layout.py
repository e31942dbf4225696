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

"""Canvas sizing for the image documents.

``compute_canvas_size`` is the single source of the canvas dimensions. The
tree builder asks the same predicates below before inserting any optional
block, and ``measure_node`` recomputes a tree's height from its explicit
metrics so the two can be checked against each other.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.errors import ValidationError
from ..core.models import DocumentKind, Resolution
from . import metrics
from .fields import DocumentFields
from .nodes import StyleNode

__all__ = [
    "CanvasSize",
    "SizingParameters",
    "compute_canvas_size",
    "compute_pdf_page_size",
    "has_provider_note",
    "has_second_client_line",
    "has_second_description_line",
    "has_terminal_box",
    "measure_node",
    "sizing_parameters",
]


@dataclass(frozen=True)
class SizingParameters:
    kind: DocumentKind
    second_description_line: bool = False
    second_client_line: bool = False
    terminal: bool = False
    provider_note: bool = False
    resolution: Resolution = Resolution.X1


@dataclass(frozen=True)
class CanvasSize:
    width: int
    height: int


def has_second_description_line(fields: DocumentFields) -> bool:
    return fields.kind.is_receipt and fields.description.has_second_line


def has_second_client_line(fields: DocumentFields) -> bool:
    return fields.kind.is_receipt and fields.client.has_second_line


def has_terminal_box(fields: DocumentFields) -> bool:
    return fields.kind is DocumentKind.QR and bool(fields.terminal_label)


def has_provider_note(fields: DocumentFields) -> bool:
    return fields.kind is DocumentKind.PAYOUT and bool(fields.provider_source)


def sizing_parameters(fields: DocumentFields) -> SizingParameters:
    resolution = Resolution.X2 if fields.scale == 2 else Resolution.X1
    return SizingParameters(
        kind=fields.kind,
        second_description_line=has_second_description_line(fields),
        second_client_line=has_second_client_line(fields),
        terminal=has_terminal_box(fields),
        provider_note=has_provider_note(fields),
        resolution=resolution,
    )


def compute_canvas_size(kind: DocumentKind, params: SizingParameters) -> CanvasSize:
    """Return the canvas size for a document.

    Flags that do not apply to ``kind`` are ignored, so a QR card never grows
    for a wrapped description and a payment receipt never grows for a
    terminal label.
    """
    if kind is DocumentKind.QR:
        width = metrics.QR_WIDTH
        height = metrics.QR_BASE_HEIGHT
        if params.terminal:
            height += metrics.TERMINAL_BOX_INCREMENT
    else:
        height = metrics.RECEIPT_BASE_HEIGHT
        if params.second_description_line:
            height += metrics.SECOND_LINE_INCREMENT
        if params.second_client_line:
            height += metrics.SECOND_LINE_INCREMENT
        if kind is DocumentKind.PAYOUT:
            width = metrics.PAYOUT_WIDTH
            height += metrics.BANK_ROWS_INCREMENT
            if params.provider_note:
                height += metrics.PROVIDER_NOTE_INCREMENT
        else:
            width = metrics.PAYMENT_WIDTH

    multiplier = params.resolution.multiplier
    return CanvasSize(width=width * multiplier, height=height * multiplier)


def compute_pdf_page_size(kind: DocumentKind, params: SizingParameters) -> tuple[float, float]:
    """Return the PDF page size in points.

    Payment pages grow with wrapped lines. Payout pages have a fixed size
    because their text is truncated instead of wrapped.
    """
    if kind is DocumentKind.PAYMENT:
        extra_lines = int(params.second_description_line) + int(params.second_client_line)
        height = metrics.PDF_PAYMENT_BASE_HEIGHT + metrics.PDF_LINE_INCREMENT * extra_lines
        return float(metrics.PDF_PAYMENT_WIDTH), float(height)
    if kind is DocumentKind.PAYOUT:
        return float(metrics.PDF_PAYOUT_WIDTH), float(metrics.PDF_PAYOUT_HEIGHT)
    raise ValidationError(f"PDF output is not available for {kind.value} documents", field="kind")


def _px(node: StyleNode, key: str) -> float:
    value = node.style.get(key, 0)
    if isinstance(value, str):
        raise ValueError(f"{node.role}: {key} must be numeric, got {value!r}")
    return float(value)


def _content_height(node: StyleNode) -> float:
    if "height" in node.style:
        return _px(node, "height")
    if node.tag != "container":
        raise ValueError(f"{node.role}: {node.tag} node has no explicit height")
    children = [child for child in node.children if not child.is_absolute]
    heights = [measure_node(child) for child in children]
    if not heights:
        return 0.0
    if node.style.get("flex-direction") == "row":
        return max(heights)
    return sum(heights) + _px(node, "gap") * (len(heights) - 1)


def measure_node(node: StyleNode) -> float:
    """Outer height of a node: content, padding and vertical margins.

    Explicit heights include padding (border-box). Column containers stack
    their children with ``gap`` between them, row containers take the tallest
    child. Absolutely positioned children take no space.
    """
    height = _content_height(node)
    if "height" not in node.style:
        height += _px(node, "padding-top") + _px(node, "padding-bottom")
    return height + _px(node, "margin-top") + _px(node, "margin-bottom")
