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

import unittest
from dataclasses import replace

from receiptkit.core.errors import ValidationError
from receiptkit.core.models import DocumentKind
from receiptkit.core.validation import parse_request
from receiptkit.render.fields import normalize_fields
from receiptkit.render.layout import compute_canvas_size, measure_node, sizing_parameters
from receiptkit.render.tree import (
    CUSTOMER_HEADING,
    REFERENCE_LABEL,
    TITLES,
    TRANSACTION_HEADING,
    build_document_tree,
)
from tests.test_support import (
    EIGHTY_CHAR_DESCRIPTION,
    FIXED_NOW,
    LOGO_ASSET,
    make_fields,
    payment_payload,
    qr_payload,
)


def _texts(tree) -> list[str]:
    return [node.text for node in tree.iter_nodes() if node.text is not None]


class TestReceiptTree(unittest.TestCase):
    def test_payment_with_long_description(self) -> None:
        request = parse_request(payment_payload(description=EIGHTY_CHAR_DESCRIPTION))
        fields = normalize_fields(request, logo_src=LOGO_ASSET.data_uri, now=FIXED_NOW)
        tree = build_document_tree(request.kind, fields)
        size = compute_canvas_size(request.kind, sizing_parameters(fields))

        self.assertEqual((size.width, size.height), (750, 1027))
        self.assertEqual(measure_node(tree), 1027)
        self.assertIsNotNone(tree.find("description-line-2"))
        self.assertEqual(tree.find("amount-value").text, "COP $ 74,970")
        self.assertEqual(tree.find("title").text, TITLES[DocumentKind.PAYMENT])

    def test_payment_sections_in_order(self) -> None:
        tree = build_document_tree(DocumentKind.PAYMENT, make_fields(DocumentKind.PAYMENT))
        inner = tree.find("inner-card")
        self.assertEqual(
            [child.role for child in inner.children],
            [
                "logo",
                "title",
                "date",
                "divider",
                "transaction-card",
                "divider",
                "customer-card",
                "footer",
            ],
        )
        self.assertEqual(tree.find("transaction-card-heading").text, TRANSACTION_HEADING)
        self.assertEqual(tree.find("customer-card-heading").text, CUSTOMER_HEADING)
        self.assertIsNotNone(tree.find("payment-method-row"))
        self.assertIsNone(tree.find("bank-name-row"))
        self.assertIsNone(tree.find("description-line-2"))

    def test_payout_rows_and_provider_note(self) -> None:
        fields = make_fields(DocumentKind.PAYOUT, provider_note=True, bank_name="Banco Uno")
        tree = build_document_tree(DocumentKind.PAYOUT, fields)
        for role in ("bank-name-row", "bank-account-type-row", "bank-account-number-row"):
            self.assertIsNotNone(tree.find(role), role)
        self.assertIsNone(tree.find("payment-method-row"))
        self.assertEqual(tree.find("bank-name-value").text, "Banco Uno")
        self.assertIn("PSE", tree.find("provider-note").text)
        self.assertEqual(len(tree.find_all("divider")), 3)

    def test_payout_without_provider_source_has_no_note(self) -> None:
        tree = build_document_tree(DocumentKind.PAYOUT, make_fields(DocumentKind.PAYOUT))
        self.assertIsNone(tree.find("provider-note"))
        self.assertEqual(len(tree.find_all("divider")), 2)

    def test_second_client_line(self) -> None:
        fields = make_fields(DocumentKind.PAYMENT, second_client_line=True)
        tree = build_document_tree(DocumentKind.PAYMENT, fields)
        self.assertEqual(tree.find("client-line-1").text, "Ana María")
        self.assertEqual(tree.find("client-line-2").text, "Pérez Gómez")

    def test_footer_without_powered_by_logo(self) -> None:
        fields = make_fields(DocumentKind.PAYMENT, powered_by_src=None)
        tree = build_document_tree(DocumentKind.PAYMENT, fields)
        self.assertIsNone(tree.find("powered-by-logo"))
        self.assertEqual(tree.find("attribution").text, "Tienda Central (900123456)")

    def test_colors_come_from_branding(self) -> None:
        fields = make_fields(DocumentKind.PAYMENT, main_color="#123456", secondary_color="#abcdef")
        tree = build_document_tree(DocumentKind.PAYMENT, fields)
        self.assertEqual(tree.style["background"], "#123456")
        self.assertEqual(tree.find("transaction-card").style["background"], "#abcdef")


class TestQrTree(unittest.TestCase):
    def test_terminal_disclosure(self) -> None:
        request = parse_request(qr_payload(terminal="Tienda La Esquina"))
        fields = normalize_fields(
            request, logo_src=LOGO_ASSET.data_uri, qr_src=LOGO_ASSET.data_uri
        )
        tree = build_document_tree(DocumentKind.QR, fields)

        size = compute_canvas_size(DocumentKind.QR, sizing_parameters(fields))
        self.assertEqual(size.height, 820)
        self.assertEqual(measure_node(tree), 820)
        disclosure = tree.find("terminal-disclosure-text")
        self.assertIsNotNone(disclosure)
        self.assertIn("Ti*** La Es***", disclosure.text)

    def test_without_terminal(self) -> None:
        request = parse_request(qr_payload())
        fields = normalize_fields(
            request, logo_src=LOGO_ASSET.data_uri, qr_src=LOGO_ASSET.data_uri
        )
        tree = build_document_tree(DocumentKind.QR, fields)
        self.assertEqual(measure_node(tree), 760)
        self.assertIsNone(tree.find("terminal-disclosure"))
        self.assertEqual(tree.find("reference-label").text, REFERENCE_LABEL)
        self.assertEqual(tree.find("reference").text, "QR-778899")
        self.assertEqual(tree.find("qr-image").src, LOGO_ASSET.data_uri)

    def test_receipt_blocks_are_absent(self) -> None:
        tree = build_document_tree(DocumentKind.QR, make_fields(DocumentKind.QR))
        roles = tree.roles()
        self.assertNotIn("transaction-card", roles)
        self.assertNotIn("footer", roles)
        self.assertIn("brand-logo", roles)


class TestTreeDetails(unittest.TestCase):
    def test_logo_source_is_passed_through(self) -> None:
        fields = make_fields(DocumentKind.PAYMENT, logo_src="data:image/svg+xml;base64,PHN2Zz4=")
        tree = build_document_tree(DocumentKind.PAYMENT, fields)
        self.assertEqual(tree.find("logo-image").src, "data:image/svg+xml;base64,PHN2Zz4=")

    def test_watermark_overlay(self) -> None:
        plain = build_document_tree(DocumentKind.PAYOUT, make_fields(DocumentKind.PAYOUT))
        marked = build_document_tree(
            DocumentKind.PAYOUT, make_fields(DocumentKind.PAYOUT, watermark=True)
        )
        overlay = marked.find("watermark")
        self.assertIsNotNone(overlay)
        self.assertTrue(overlay.is_absolute)
        self.assertIsNone(plain.find("watermark"))
        self.assertEqual(measure_node(marked), measure_node(plain))

    def test_scale_doubles_lengths(self) -> None:
        single = build_document_tree(DocumentKind.PAYMENT, make_fields(DocumentKind.PAYMENT))
        double = build_document_tree(
            DocumentKind.PAYMENT, make_fields(DocumentKind.PAYMENT, scale=2)
        )
        self.assertEqual(double.style["width"], 2 * single.style["width"])
        self.assertEqual(
            double.find("title").style["font-size"], 2 * single.find("title").style["font-size"]
        )

    def test_styles_are_read_only(self) -> None:
        tree = build_document_tree(DocumentKind.PAYMENT, make_fields(DocumentKind.PAYMENT))
        with self.assertRaises(TypeError):
            tree.style["width"] = 1  # type: ignore[index]

    def test_same_fields_build_equal_trees(self) -> None:
        fields = make_fields(DocumentKind.PAYOUT, provider_note=True)
        self.assertEqual(
            build_document_tree(DocumentKind.PAYOUT, fields).roles(),
            build_document_tree(DocumentKind.PAYOUT, replace(fields)).roles(),
        )

    def test_kind_must_match_fields(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            build_document_tree(DocumentKind.PAYOUT, make_fields(DocumentKind.PAYMENT))
        self.assertEqual(ctx.exception.field, "kind")

    def test_texts_include_date(self) -> None:
        tree = build_document_tree(DocumentKind.PAYMENT, make_fields(DocumentKind.PAYMENT))
        self.assertIn(make_fields(DocumentKind.PAYMENT).date, _texts(tree))


if __name__ == "__main__":
    unittest.main()
