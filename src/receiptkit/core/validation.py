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

import math
import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from .errors import ValidationError
from .models import (
    DEFAULT_MAIN_COLOR,
    DEFAULT_SECONDARY_COLOR,
    BankTransfer,
    Branding,
    Contact,
    DocumentKind,
    DocumentRequest,
    Merchant,
    Resolution,
)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def require_dict(value: object, *, label: str) -> dict[Any, Any]:
    """Validate that value is a dict."""
    if not isinstance(value, dict):
        raise ValidationError(f"{label} must be an object", field=label)
    return value


def require_keys(mapping: Mapping[str, Any], keys: Iterable[str], *, label: str) -> None:
    """Validate that all keys are present and non-empty in mapping."""
    for key in keys:
        value = mapping.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{label} {key} is required", field=key)


def require_string(value: object, *, label: str) -> str:
    """Validate that value is a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} must be a non-empty string", field=label)
    return value


def optional_string(value: object, *, label: str) -> str | None:
    """Normalize an optional string field; None and blank strings become None."""
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string", field=label)
    return value if value.strip() else None


def require_amount(value: object, *, label: str = "amount") -> float:
    """Validate that value is a finite, non-negative number."""
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a number", field=label)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError(f"{label} must be a number", field=label) from None
    if not isinstance(value, (int, float)):
        raise ValidationError(f"{label} must be a number", field=label)
    amount = float(value)
    if not math.isfinite(amount) or amount < 0:
        raise ValidationError(f"{label} must be a finite non-negative number", field=label)
    return amount


def optional_color(value: object, *, label: str, default: str) -> str:
    """Validate a hex color triplet, falling back to default when absent."""
    text = optional_string(value, label=label)
    if text is None:
        return default
    text = text.strip()
    if not _HEX_COLOR.match(text):
        raise ValidationError(f"{label} must be a hex color (#rgb or #rrggbb)", field=label)
    return text


def optional_timestamp(value: object, *, label: str) -> datetime | None:
    """Parse an ISO-8601 timestamp."""
    text = optional_string(value, label=label)
    if text is None:
        return None
    normalized = text.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise ValidationError(f"{label} must be an ISO-8601 timestamp", field=label) from exc


def parse_kind(value: object) -> DocumentKind:
    if not isinstance(value, str):
        raise ValidationError("kind is required", field="kind")
    try:
        return DocumentKind(value.strip().lower())
    except ValueError:
        allowed = ", ".join(kind.value for kind in DocumentKind)
        raise ValidationError(f"kind must be one of: {allowed}", field="kind") from None


def parse_resolution(value: object) -> Resolution:
    if value is None or value == "":
        return Resolution.X1
    if not isinstance(value, str):
        raise ValidationError("resolution must be 1x or 2x", field="resolution")
    try:
        return Resolution(value.strip().lower())
    except ValueError:
        raise ValidationError("resolution must be 1x or 2x", field="resolution") from None


def _parse_bool(value: object, *, label: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise ValidationError(f"{label} must be a boolean", field=label)


def _branding(payload: Mapping[str, Any]) -> Branding:
    # QR payloads carry branding in a nested "business" object.
    source: Mapping[str, Any] = payload
    if "business" in payload:
        source = require_dict(payload["business"], label="business")
    require_keys(source, ("logo",), label="branding")
    return Branding(
        logo_url=require_string(source["logo"], label="logo").strip(),
        main_color=optional_color(
            source.get("main_color_brand"), label="main_color_brand", default=DEFAULT_MAIN_COLOR
        ),
        secondary_color=optional_color(
            source.get("secondary_color_brand"),
            label="secondary_color_brand",
            default=DEFAULT_SECONDARY_COLOR,
        ),
    )


def parse_request(payload: object, *, kind: str | None = None) -> DocumentRequest:
    """Validate a JSON payload and build a DocumentRequest.

    ``kind`` overrides the payload's own ``kind`` key, which lets callers
    route a bare receipt payload to a specific document type.
    """
    data = require_dict(payload, label="request")
    document_kind = parse_kind(kind if kind is not None else data.get("kind"))
    branding = _branding(data)
    external_reference = require_string(
        data.get("external_reference"), label="external_reference"
    ).strip()
    resolution = parse_resolution(data.get("resolution"))
    watermark = _parse_bool(data.get("watermark"), label="watermark")
    manual_date = optional_string(data.get("manual_date"), label="manual_date")
    created_at = optional_timestamp(data.get("created_at"), label="created_at")

    if document_kind is DocumentKind.QR:
        return DocumentRequest(
            kind=document_kind,
            branding=branding,
            external_reference=external_reference,
            qr_data=require_string(data.get("data"), label="data"),
            terminal=optional_string(data.get("terminal"), label="terminal"),
            resolution=resolution,
            watermark=watermark,
        )

    require_keys(data, ("amount", "description"), label=document_kind.value)
    bank = None
    if document_kind is DocumentKind.PAYOUT:
        bank = BankTransfer(
            bank_name=optional_string(data.get("bank_name"), label="bank_name"),
            account_type=optional_string(data.get("bank_account_type"), label="bank_account_type"),
            account_number=optional_string(
                data.get("bank_account_number"), label="bank_account_number"
            ),
        )
    return DocumentRequest(
        kind=document_kind,
        branding=branding,
        external_reference=external_reference,
        amount=require_amount(data.get("amount")),
        currency=optional_string(data.get("currency"), label="currency"),
        description=require_string(data.get("description"), label="description"),
        reference_one=optional_string(data.get("reference_one"), label="reference_one"),
        payment_method=optional_string(data.get("payment_method"), label="payment_method"),
        payment_provider_source=optional_string(
            data.get("payment_provider_source"), label="payment_provider_source"
        ),
        contact=Contact(
            client=optional_string(data.get("client"), label="client"),
            phone=optional_string(data.get("user_phone"), label="user_phone"),
            email=optional_string(data.get("user_email"), label="user_email"),
            user_id=optional_string(data.get("user_id"), label="user_id"),
            user_id_type=optional_string(data.get("user_id_type"), label="user_id_type"),
        ),
        merchant=Merchant(
            name=optional_string(data.get("merchant_name"), label="merchant_name"),
            merchant_id=optional_string(data.get("merchant_id"), label="merchant_id"),
            merchant_id_type=optional_string(
                data.get("merchant_id_type"), label="merchant_id_type"
            ),
        ),
        bank=bank,
        manual_date=manual_date,
        created_at=created_at,
        resolution=resolution,
        watermark=watermark,
    )


__all__ = [
    "optional_color",
    "optional_string",
    "optional_timestamp",
    "parse_kind",
    "parse_request",
    "parse_resolution",
    "require_amount",
    "require_dict",
    "require_keys",
    "require_string",
]
