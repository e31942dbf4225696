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

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/Bogota"
PLACEHOLDER = "-"
NOT_AVAILABLE = "N/A"
MASK_TOKEN = "***"
TRUNCATION_MARK = "…"

_MONTHS_ES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def _to_decimal(amount: object) -> Decimal | None:
    if isinstance(amount, bool) or amount is None:
        return None
    try:
        value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def _group_thousands(digits: str) -> str:
    groups: list[str] = []
    while len(digits) > 3:
        groups.append(digits[-3:])
        digits = digits[:-3]
    groups.append(digits)
    return ",".join(reversed(groups))


def _format_decimal(value: Decimal) -> str:
    # Enough precision to hold every integral digit plus two decimals.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        quantized = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        sign = "-" if quantized < 0 else ""
        integral, _, fraction = f"{abs(quantized):.2f}".partition(".")
    fraction = fraction.rstrip("0")
    grouped = _group_thousands(integral)
    if fraction:
        return f"{sign}{grouped}.{fraction}"
    return f"{sign}{grouped}"


def format_amount(amount: object, currency: str | None = None) -> str:
    """Format an amount for display, e.g. ``COP $ 74,970``.

    Non-numeric or non-finite input yields ``"0"`` without a prefix.
    """
    value = _to_decimal(amount)
    if value is None:
        return "0"
    code = (currency or "").strip().upper()
    if code:
        return f"{code} $ {_format_decimal(value)}"
    return f"$ {_format_decimal(value)}"


def format_date(timestamp: datetime | None = None, *, tz: str = DEFAULT_TIMEZONE) -> str:
    """Spanish (Colombia) long date with a 12-hour clock.

    ``format_date(datetime(2026, 10, 19, 22, 35, tzinfo=timezone.utc))``
    returns ``"19 de octubre de 2026, 05:35 p. m."``.
    """
    zone = ZoneInfo(tz)
    if timestamp is None:
        local = datetime.now(zone)
    else:
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        local = timestamp.astimezone(zone)
    hour = local.hour % 12 or 12
    meridiem = "a. m." if local.hour < 12 else "p. m."
    month = _MONTHS_ES[local.month - 1]
    return f"{local.day} de {month} de {local.year}, {hour:02d}:{local.minute:02d} {meridiem}"


def mask_identifier(value: str | None) -> str:
    """Hide the middle of an identifier.

    Short values (6 characters or fewer) keep the first and last character,
    longer ones keep the first three and the last two.
    """
    if not value:
        return PLACEHOLDER
    text = str(value)
    if len(text) <= 6:
        return f"{text[:1]}{MASK_TOKEN}{text[-1:]}"
    return f"{text[:3]}{MASK_TOKEN}{text[-2:]}"


def mask_terminal_label(label: str | None) -> str:
    """Mask a terminal label word by word.

    Words longer than three characters keep their first two characters,
    shorter words are left as they are.
    """
    if not label:
        return ""
    words = label.split()
    return " ".join(word if len(word) <= 3 else f"{word[:2]}{MASK_TOKEN}" for word in words)


def truncate(value: object, max_len: int = 40) -> str:
    if value is None:
        return PLACEHOLDER
    text = str(value)
    if len(text) <= max_len:
        return text
    return f"{text[: max_len - 1]}{TRUNCATION_MARK}"


__all__ = [
    "DEFAULT_TIMEZONE",
    "MASK_TOKEN",
    "NOT_AVAILABLE",
    "PLACEHOLDER",
    "format_amount",
    "format_date",
    "mask_identifier",
    "mask_terminal_label",
    "truncate",
]
