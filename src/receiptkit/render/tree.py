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

"""Document trees for receipts and QR cards.

One builder per layout family, selected by document kind. Optional blocks are
inserted only when the matching predicate in ``render.layout`` holds, which is
what keeps the tree height equal to ``compute_canvas_size``.
"""

from __future__ import annotations

from typing import Callable, Final

from ..core.errors import ValidationError
from ..core.models import DocumentKind
from . import metrics as m
from .fields import DocumentFields
from .formatting import truncate
from .layout import (
    has_provider_note,
    has_second_client_line,
    has_second_description_line,
    has_terminal_box,
)
from .nodes import StyleNode, container, image, rule, text
from .text import WrappedText

TITLES: Final[dict[DocumentKind, str]] = {
    DocumentKind.PAYMENT: "¡Pago exitoso!",
    DocumentKind.PAYOUT: "¡Transferencia confirmada!",
}
TRANSACTION_HEADING: Final = "Información de la transacción"
CUSTOMER_HEADING: Final = "Datos del cliente"
POWERED_BY_TEXT: Final = "Con la tecnología de"
REFERENCE_LABEL: Final = "REFERENCIA"
WATERMARK_TEXT: Final = "DOCUMENTO DE PRUEBA"
PROVIDER_NOTE_TEMPLATE: Final = "Este pago aparecerá como {source} en tus movimientos."
TERMINAL_NOTE_TEMPLATE: Final = "Este cobro aparecerá en tu extracto como {label}."

TEXT_COLOR: Final = "#111827"
MUTED_COLOR: Final = "#6b7280"
DIVIDER_COLOR: Final = "#e5e7eb"
CARD_COLOR: Final = "#ffffff"
WATERMARK_COLOR: Final = "rgba(220, 38, 38, 0.22)"

PROVIDER_SOURCE_MAX_CHARS: Final = 20

Row = tuple[str, str, str | WrappedText]


def _divider(s: int) -> StyleNode:
    return rule(
        "divider",
        height=m.DIVIDER_THICKNESS * s,
        margin_top=m.DIVIDER_MARGIN * s,
        margin_bottom=m.DIVIDER_MARGIN * s,
        background=DIVIDER_COLOR,
    )


def _line(role: str, value: str, s: int, **style: str | int) -> StyleNode:
    return text(
        role,
        value,
        height=m.LINE_HEIGHT * s,
        line_height=m.LINE_HEIGHT * s,
        font_size=m.ROW_FONT * s,
        **style,
    )


def _row(role: str, label: str, value: str | WrappedText, s: int) -> StyleNode:
    value_style = dict(font_weight=700, color=TEXT_COLOR, text_align="right")
    if isinstance(value, WrappedText):
        if value.has_second_line:
            value_node = container(
                f"{role}-value",
                [
                    _line(f"{role}-line-1", value.line1, s, **value_style),
                    _line(f"{role}-line-2", value.line2, s, **value_style),
                ],
                align_items="flex-end",
                max_width=m.VALUE_MAX_WIDTH * s,
            )
        else:
            value_node = _line(
                f"{role}-line-1", value.line1, s, max_width=m.VALUE_MAX_WIDTH * s, **value_style
            )
    else:
        value_node = _line(
            f"{role}-value", value, s, max_width=m.VALUE_MAX_WIDTH * s, **value_style
        )
    return container(
        f"{role}-row",
        [_line(f"{role}-label", label, s, color=MUTED_COLOR), value_node],
        flex_direction="row",
        justify_content="space-between",
        align_items="flex-start",
        gap=m.ROW_GAP * s,
    )


def _card(
    role: str, heading: str, rows: list[Row], padding_bottom: int, fields: DocumentFields
) -> StyleNode:
    s = fields.scale
    return container(
        role,
        [
            text(
                f"{role}-heading",
                heading,
                height=m.CARD_HEADING_HEIGHT * s,
                line_height=m.CARD_HEADING_HEIGHT * s,
                font_size=m.CARD_HEADING_FONT * s,
                font_weight=700,
                color=TEXT_COLOR,
                margin_bottom=m.CARD_HEADING_MARGIN_BOTTOM * s,
            ),
            container(
                f"{role}-rows",
                [_row(row_role, label, value, s) for row_role, label, value in rows],
                gap=m.ROW_GAP * s,
            ),
        ],
        background=fields.secondary_color,
        border_radius=m.CARD_RADIUS * s,
        padding_top=m.CARD_PADDING_TOP * s,
        padding_bottom=padding_bottom * s,
        padding_left=m.CARD_PADDING_TOP * s,
        padding_right=m.CARD_PADDING_TOP * s,
    )


def _payment_method_rows(fields: DocumentFields) -> list[Row]:
    return [
        ("payment-method", "Método de pago:", fields.payment_method),
        ("payment-source", "Medio de pago:", fields.payment_source),
    ]


def _bank_rows(fields: DocumentFields) -> list[Row]:
    return [
        ("bank-name", "Entidad bancaria:", fields.bank_name),
        ("bank-account-type", "Tipo de cuenta:", fields.bank_account_type),
        ("bank-account-number", "Número de cuenta:", fields.bank_account_number),
    ]


_DETAIL_ROWS: Final[dict[DocumentKind, Callable[[DocumentFields], list[Row]]]] = {
    DocumentKind.PAYMENT: _payment_method_rows,
    DocumentKind.PAYOUT: _bank_rows,
}


def _transaction_card(fields: DocumentFields) -> StyleNode:
    description: str | WrappedText = fields.description
    if not has_second_description_line(fields):
        description = fields.description.line1
    rows: list[Row] = [
        ("reference", "Código:", fields.reference),
        ("description", "Descripción:", description),
        ("amount", "Valor:", fields.amount),
        *_DETAIL_ROWS[fields.kind](fields),
    ]
    return _card(
        "transaction-card",
        TRANSACTION_HEADING,
        rows,
        m.TRANSACTION_CARD_PADDING_BOTTOM,
        fields,
    )


def _customer_card(fields: DocumentFields) -> StyleNode:
    client: str | WrappedText = fields.client
    if not has_second_client_line(fields):
        client = fields.client.line1
    rows: list[Row] = [
        ("client", "Nombre:", client),
        ("identification", "Identificación:", fields.identification),
        ("contact", "Contacto:", fields.contact),
    ]
    return _card("customer-card", CUSTOMER_HEADING, rows, m.CUSTOMER_CARD_PADDING_BOTTOM, fields)


def _provider_note(fields: DocumentFields) -> list[StyleNode]:
    if not has_provider_note(fields):
        return []
    s = fields.scale
    source = truncate(fields.provider_source, PROVIDER_SOURCE_MAX_CHARS)
    note = text(
        "provider-note",
        PROVIDER_NOTE_TEMPLATE.format(source=source),
        height=m.PROVIDER_NOTE_HEIGHT * s,
        line_height=m.PROVIDER_NOTE_HEIGHT * s,
        font_size=m.PROVIDER_NOTE_FONT * s,
        margin_bottom=m.PROVIDER_NOTE_MARGIN_BOTTOM * s,
        color=MUTED_COLOR,
        text_align="center",
    )
    return [note, _divider(s)]


def _footer(fields: DocumentFields) -> StyleNode:
    s = fields.scale
    small = dict(
        height=m.FOOTER_LINE_HEIGHT * s,
        line_height=m.FOOTER_LINE_HEIGHT * s,
        font_size=m.FOOTER_FONT * s,
        color=MUTED_COLOR,
    )
    powered_by: list[StyleNode | None] = [text("powered-by-text", POWERED_BY_TEXT, **small)]
    if fields.powered_by_src:
        powered_by.append(
            image(
                "powered-by-logo",
                fields.powered_by_src,
                width=m.POWERED_BY_LOGO_WIDTH * s,
                height=m.POWERED_BY_LOGO_HEIGHT * s,
                object_fit="contain",
            )
        )
    return container(
        "footer",
        [
            text("attribution", fields.attribution, **small),
            container(
                "powered-by",
                powered_by,
                flex_direction="row",
                align_items="center",
                gap=8 * s,
            ),
        ],
        flex_direction="row",
        justify_content="space-between",
        align_items="center",
        height=(m.FOOTER_LINE_HEIGHT + 2 * m.FOOTER_PADDING_Y) * s,
        padding_top=m.FOOTER_PADDING_Y * s,
        padding_bottom=m.FOOTER_PADDING_Y * s,
        padding_left=m.FOOTER_PADDING_X * s,
        padding_right=m.FOOTER_PADDING_X * s,
        margin_left=-m.INNER_PADDING * s,
        margin_right=-m.INNER_PADDING * s,
        background=fields.secondary_color,
    )


def _receipt(fields: DocumentFields) -> list[StyleNode]:
    s = fields.scale
    logo = container(
        "logo",
        [
            image(
                "logo-image",
                fields.logo_src,
                width=m.LOGO_WIDTH * s,
                height=m.LOGO_HEIGHT * s,
                object_fit="contain",
            )
        ],
        height=m.LOGO_HEIGHT * s,
        margin_top=m.LOGO_MARGIN_TOP * s,
        margin_bottom=m.LOGO_MARGIN_BOTTOM * s,
        flex_direction="row",
        justify_content="center",
        align_items="center",
    )
    title = text(
        "title",
        TITLES[fields.kind],
        height=m.TITLE_HEIGHT * s,
        line_height=m.TITLE_HEIGHT * s,
        font_size=m.TITLE_FONT * s,
        font_weight=700,
        color=TEXT_COLOR,
        text_align="center",
        margin_bottom=m.TITLE_MARGIN_BOTTOM * s,
    )
    date = text(
        "date",
        fields.date,
        height=m.DATE_HEIGHT * s,
        line_height=m.DATE_HEIGHT * s,
        font_size=m.DATE_FONT * s,
        color=MUTED_COLOR,
        text_align="center",
        margin_bottom=m.DATE_MARGIN_BOTTOM * s,
    )
    inner = container(
        "inner-card",
        [
            logo,
            title,
            date,
            _divider(s),
            _transaction_card(fields),
            _divider(s),
            *_provider_note(fields),
            _customer_card(fields),
            _footer(fields),
        ],
        background=CARD_COLOR,
        border_radius=m.INNER_RADIUS * s,
        overflow="hidden",
        padding_top=m.INNER_PADDING * s,
        padding_left=m.INNER_PADDING * s,
        padding_right=m.INNER_PADDING * s,
    )
    return [inner]


def _qr_card(fields: DocumentFields) -> list[StyleNode]:
    s = fields.scale
    reference = container(
        "reference-block",
        [
            text(
                "reference-label",
                REFERENCE_LABEL,
                height=m.QR_REFERENCE_LABEL_HEIGHT * s,
                line_height=m.QR_REFERENCE_LABEL_HEIGHT * s,
                font_size=m.QR_REFERENCE_LABEL_FONT * s,
                color=MUTED_COLOR,
            ),
            text(
                "reference",
                fields.reference,
                height=m.QR_REFERENCE_HEIGHT * s,
                line_height=m.QR_REFERENCE_HEIGHT * s,
                font_size=m.QR_REFERENCE_FONT * s,
                font_weight=700,
                color=TEXT_COLOR,
            ),
        ],
        align_items="flex-end",
    )
    bottom = container(
        "bottom-row",
        [
            image(
                "brand-logo",
                fields.logo_src,
                width=m.QR_LOGO_WIDTH * s,
                height=m.QR_BOTTOM_HEIGHT * s,
                object_fit="contain",
            ),
            reference,
        ],
        flex_direction="row",
        justify_content="space-between",
        align_items="center",
        height=m.QR_BOTTOM_HEIGHT * s,
        margin_top=m.QR_BOTTOM_MARGIN_TOP * s,
    )
    children: list[StyleNode | None] = [
        image(
            "qr-image",
            fields.qr_src or "",
            width=m.QR_IMAGE_SIZE * s,
            height=m.QR_IMAGE_SIZE * s,
        ),
        bottom,
    ]
    if has_terminal_box(fields):
        children.append(
            container(
                "terminal-disclosure",
                [
                    text(
                        "terminal-disclosure-text",
                        TERMINAL_NOTE_TEMPLATE.format(label=fields.terminal_label),
                        height=m.TERMINAL_TEXT_HEIGHT * s,
                        line_height=m.TERMINAL_TEXT_LINE * s,
                        font_size=m.TERMINAL_TEXT_FONT * s,
                        color=TEXT_COLOR,
                        white_space="normal",
                    )
                ],
                margin_top=m.TERMINAL_BOX_MARGIN_TOP * s,
                padding_top=m.TERMINAL_BOX_PADDING * s,
                padding_bottom=m.TERMINAL_BOX_PADDING * s,
                padding_left=m.TERMINAL_BOX_PADDING * s,
                padding_right=m.TERMINAL_BOX_PADDING * s,
                background=fields.secondary_color,
                border_radius=m.TERMINAL_BOX_PADDING * s,
            )
        )
    inner = container(
        "inner-card",
        children,
        background=CARD_COLOR,
        border_radius=m.QR_INNER_RADIUS * s,
        padding_top=m.QR_INNER_PADDING * s,
        padding_bottom=m.QR_INNER_PADDING * s,
        padding_left=m.QR_INNER_PADDING * s,
        padding_right=m.QR_INNER_PADDING * s,
    )
    return [inner]


def _watermark(fields: DocumentFields) -> StyleNode:
    s = fields.scale
    return container(
        "watermark",
        [
            text(
                "watermark-text",
                WATERMARK_TEXT,
                height=80 * s,
                line_height=80 * s,
                font_size=56 * s,
                font_weight=700,
                color=WATERMARK_COLOR,
                transform="rotate(-30deg)",
            )
        ],
        position="absolute",
        top=0,
        left=0,
        right=0,
        bottom=0,
        justify_content="center",
        align_items="center",
        pointer_events="none",
        z_index=10,
    )


_LAYOUTS: Final[dict[DocumentKind, Callable[[DocumentFields], list[StyleNode]]]] = {
    DocumentKind.PAYMENT: _receipt,
    DocumentKind.PAYOUT: _receipt,
    DocumentKind.QR: _qr_card,
}
_OUTER_PADDING: Final[dict[DocumentKind, int]] = {
    DocumentKind.PAYMENT: m.OUTER_PADDING,
    DocumentKind.PAYOUT: m.OUTER_PADDING,
    DocumentKind.QR: m.QR_OUTER_PADDING,
}
_WIDTHS: Final[dict[DocumentKind, int]] = {
    DocumentKind.PAYMENT: m.PAYMENT_WIDTH,
    DocumentKind.PAYOUT: m.PAYOUT_WIDTH,
    DocumentKind.QR: m.QR_WIDTH,
}


def build_document_tree(kind: DocumentKind, fields: DocumentFields) -> StyleNode:
    """Build the node tree for a document.

    The root has no explicit height. Its measured height is what
    ``compute_canvas_size`` returns for the same fields.
    """
    if kind is not fields.kind:
        raise ValidationError(
            f"fields were normalized for {fields.kind.value}, not {kind.value}", field="kind"
        )
    s = fields.scale
    padding = _OUTER_PADDING[kind] * s
    children: list[StyleNode | None] = list(_LAYOUTS[kind](fields))
    if fields.watermark:
        children.append(_watermark(fields))
    return container(
        "document",
        children,
        position="relative",
        width=_WIDTHS[kind] * s,
        background=fields.main_color,
        padding_top=padding,
        padding_bottom=padding,
        padding_left=padding,
        padding_right=padding,
    )


__all__ = [
    "CUSTOMER_HEADING",
    "REFERENCE_LABEL",
    "TITLES",
    "TRANSACTION_HEADING",
    "build_document_tree",
]
