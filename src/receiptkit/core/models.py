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
from enum import Enum

DEFAULT_MAIN_COLOR = "#000000"
DEFAULT_SECONDARY_COLOR = "#f3f4f6"


class DocumentKind(str, Enum):
    PAYMENT = "payment"
    PAYOUT = "payout"
    QR = "qr"

    @property
    def is_receipt(self) -> bool:
        return self is not DocumentKind.QR


class Resolution(str, Enum):
    X1 = "1x"
    X2 = "2x"

    @property
    def multiplier(self) -> int:
        return 2 if self is Resolution.X2 else 1


@dataclass(frozen=True)
class BankTransfer:
    bank_name: str | None = None
    account_type: str | None = None
    account_number: str | None = None


@dataclass(frozen=True)
class Branding:
    logo_url: str
    main_color: str = DEFAULT_MAIN_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR


@dataclass(frozen=True)
class Contact:
    client: str | None = None
    phone: str | None = None
    email: str | None = None
    user_id: str | None = None
    user_id_type: str | None = None

    @property
    def channel(self) -> str | None:
        return self.phone or self.email


@dataclass(frozen=True)
class Merchant:
    name: str | None = None
    merchant_id: str | None = None
    merchant_id_type: str | None = None

    @property
    def attribution(self) -> str:
        if self.name and self.merchant_id:
            return f"{self.name} ({self.merchant_id})"
        return ""


@dataclass(frozen=True)
class DocumentRequest:
    kind: DocumentKind
    branding: Branding
    external_reference: str
    amount: float | None = None
    currency: str | None = None
    description: str | None = None
    reference_one: str | None = None
    payment_method: str | None = None
    payment_provider_source: str | None = None
    contact: Contact = field(default_factory=Contact)
    merchant: Merchant = field(default_factory=Merchant)
    bank: BankTransfer | None = None
    qr_data: str | None = None
    terminal: str | None = None
    manual_date: str | None = None
    created_at: datetime | None = None
    resolution: Resolution = Resolution.X1
    watermark: bool = False
