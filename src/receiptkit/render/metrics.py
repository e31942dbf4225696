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

"""Layout metrics for the image documents, in CSS pixels at 1x.

The base heights are literal constants. Each one is the sum of the fixed
element heights listed next to it; ``tests/unit/test_render_metrics.py``
recomputes the sums and ``measure_node`` checks them against built trees.
"""

from __future__ import annotations

from typing import Final

# Text budgets shared by sizing and rendering.
DESCRIPTION_WRAP: Final = 30
CLIENT_WRAP: Final = 30
CLIENT_CLIP: Final = 45

# Receipt (payment / payout) card.
PAYMENT_WIDTH: Final = 750
PAYOUT_WIDTH: Final = 720
OUTER_PADDING: Final = 36
INNER_PADDING: Final = 30
INNER_RADIUS: Final = 18
CARD_RADIUS: Final = 12

LOGO_MARGIN_TOP: Final = 15
LOGO_HEIGHT: Final = 90
LOGO_WIDTH: Final = 240
LOGO_MARGIN_BOTTOM: Final = 30

TITLE_FONT: Final = 38
TITLE_HEIGHT: Final = 46
TITLE_MARGIN_BOTTOM: Final = 18

DATE_FONT: Final = 18
DATE_HEIGHT: Final = 24
DATE_MARGIN_BOTTOM: Final = 24

DIVIDER_MARGIN: Final = 12
DIVIDER_THICKNESS: Final = 1

CARD_PADDING_TOP: Final = 24
TRANSACTION_CARD_PADDING_BOTTOM: Final = 12
CUSTOMER_CARD_PADDING_BOTTOM: Final = 24
CARD_HEADING_FONT: Final = 24
CARD_HEADING_HEIGHT: Final = 32
CARD_HEADING_MARGIN_BOTTOM: Final = 18

ROW_FONT: Final = 24
LINE_HEIGHT: Final = 36
ROW_GAP: Final = 12
VALUE_MAX_WIDTH: Final = 330

PROVIDER_NOTE_FONT: Final = 21
PROVIDER_NOTE_HEIGHT: Final = 30
PROVIDER_NOTE_MARGIN_BOTTOM: Final = 12

FOOTER_PADDING_Y: Final = 12
FOOTER_PADDING_X: Final = 30
FOOTER_LINE_HEIGHT: Final = 24
FOOTER_FONT: Final = 15
POWERED_BY_LOGO_HEIGHT: Final = 22
POWERED_BY_LOGO_WIDTH: Final = 72

PAYMENT_ROWS: Final = 5
PAYOUT_ROWS: Final = 6
CUSTOMER_ROWS: Final = 3

# 36 + 30 (paddings) + 135 (logo) + 64 (title) + 48 (date) + 25 (divider)
# + 314 (transaction card, 5 rows) + 25 (divider) + 230 (customer card, 3 rows)
# + 48 (footer) + 36 (padding) = 991
RECEIPT_BASE_HEIGHT: Final = 991

# One extra text line inside a row.
SECOND_LINE_INCREMENT: Final = 36
# Payout bank block has one more row than the payment-method block: 36 + 12.
BANK_ROWS_INCREMENT: Final = 48
# 30 (note) + 12 (margin) + 25 (divider)
PROVIDER_NOTE_INCREMENT: Final = 67

# QR card.
QR_WIDTH: Final = 700
QR_OUTER_PADDING: Final = 25
QR_INNER_PADDING: Final = 20
QR_INNER_RADIUS: Final = 10
QR_IMAGE_SIZE: Final = 610
QR_BOTTOM_MARGIN_TOP: Final = 15
QR_BOTTOM_HEIGHT: Final = 45
QR_LOGO_WIDTH: Final = 130
QR_REFERENCE_LABEL_FONT: Final = 16
QR_REFERENCE_LABEL_HEIGHT: Final = 18
QR_REFERENCE_FONT: Final = 26
QR_REFERENCE_HEIGHT: Final = 27

TERMINAL_BOX_MARGIN_TOP: Final = 12
TERMINAL_BOX_PADDING: Final = 8
TERMINAL_TEXT_FONT: Final = 13
TERMINAL_TEXT_LINE: Final = 16
TERMINAL_TEXT_HEIGHT: Final = 32

# 25 + 20 (paddings) + 610 (QR) + 15 + 45 (bottom row) + 20 + 25 (paddings) = 760
QR_BASE_HEIGHT: Final = 760
# 12 (margin) + 8 + 32 + 8 (box) = 60
TERMINAL_BOX_INCREMENT: Final = 60

# PDF pages, in points.
PDF_PAYMENT_WIDTH: Final = 500
PDF_PAYMENT_BASE_HEIGHT: Final = 560
PDF_LINE_INCREMENT: Final = 30
PDF_PAYOUT_WIDTH: Final = 578
PDF_PAYOUT_HEIGHT: Final = 827
