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
from datetime import datetime

from ..core.models import DocumentKind, DocumentRequest
from .formatting import (
    DEFAULT_TIMEZONE,
    NOT_AVAILABLE,
    PLACEHOLDER,
    format_amount,
    format_date,
    mask_identifier,
    mask_terminal_label,
    truncate,
)
from .metrics import CLIENT_CLIP, CLIENT_WRAP, DESCRIPTION_WRAP
from .text import WrappedText, clip_text, wrap_text

# Single-line row values; longer text is cut before it reaches the canvas.
VALUE_MAX_CHARS = 26
TERMINAL_MAX_CHARS = 40


@dataclass(frozen=True)
class DocumentFields:
    """Display-ready strings for one document.

    Everything the tree builder and the sizing function read comes from here,
    so both see the same wrapped lines.
    """

    kind: DocumentKind
    scale: int
    main_color: str
    secondary_color: str
    logo_src: str
    reference: str
    date: str = ""
    amount: str = ""
    description: WrappedText = field(default_factory=WrappedText)
    payment_method: str = NOT_AVAILABLE
    payment_source: str = NOT_AVAILABLE
    bank_name: str = NOT_AVAILABLE
    bank_account_type: str = NOT_AVAILABLE
    bank_account_number: str = NOT_AVAILABLE
    provider_source: str | None = None
    client: WrappedText = field(default_factory=lambda: WrappedText(NOT_AVAILABLE))
    identification: str = NOT_AVAILABLE
    contact: str = NOT_AVAILABLE
    attribution: str = ""
    powered_by_src: str | None = None
    qr_src: str | None = None
    terminal_label: str | None = None
    watermark: bool = False


def _value(value: str | None) -> str:
    if not value:
        return NOT_AVAILABLE
    return truncate(value, VALUE_MAX_CHARS)


def _description(request: DocumentRequest) -> WrappedText:
    description = (request.description or "").strip()
    if request.reference_one:
        description = f"{description} ({request.reference_one})".strip()
    return wrap_text(description or PLACEHOLDER, DESCRIPTION_WRAP)


def _client(request: DocumentRequest) -> WrappedText:
    client = (request.contact.client or "").strip()
    if not client:
        return WrappedText(NOT_AVAILABLE)
    return wrap_text(clip_text(client, CLIENT_CLIP), CLIENT_WRAP)


def _identification(request: DocumentRequest) -> str:
    contact = request.contact
    if not contact.user_id:
        return NOT_AVAILABLE
    masked = mask_identifier(contact.user_id)
    if contact.user_id_type:
        return f"{contact.user_id_type} {masked}"
    return masked


def normalize_fields(
    request: DocumentRequest,
    *,
    logo_src: str,
    powered_by_src: str | None = None,
    qr_src: str | None = None,
    now: datetime | None = None,
    tz: str = DEFAULT_TIMEZONE,
) -> DocumentFields:
    """Apply formatting, masking and wrapping to a validated request.

    Image sources are passed in already resolved (data URIs), which keeps this
    step free of I/O.
    """
    branding = request.branding
    common = dict(
        kind=request.kind,
        scale=request.resolution.multiplier,
        main_color=branding.main_color,
        secondary_color=branding.secondary_color,
        logo_src=logo_src,
        reference=truncate(request.external_reference, VALUE_MAX_CHARS),
        watermark=request.watermark,
    )
    if request.kind is DocumentKind.QR:
        terminal = (request.terminal or "").strip()
        terminal_label = None
        if terminal:
            terminal_label = truncate(mask_terminal_label(terminal), TERMINAL_MAX_CHARS)
        return DocumentFields(**common, qr_src=qr_src, terminal_label=terminal_label)

    bank = request.bank
    provider_source = (request.payment_provider_source or "").strip()
    return DocumentFields(
        **common,
        date=request.manual_date or format_date(request.created_at or now, tz=tz),
        amount=format_amount(request.amount, request.currency),
        description=_description(request),
        payment_method=_value(request.payment_method),
        payment_source=_value(provider_source),
        bank_name=_value(bank.bank_name if bank else None),
        bank_account_type=_value(bank.account_type if bank else None),
        bank_account_number=_value(bank.account_number if bank else None),
        provider_source=provider_source or None,
        client=_client(request),
        identification=_identification(request),
        contact=_value(request.contact.channel),
        attribution=request.merchant.attribution,
        powered_by_src=powered_by_src,
    )


__all__ = ["DocumentFields", "TERMINAL_MAX_CHARS", "VALUE_MAX_CHARS", "normalize_fields"]
