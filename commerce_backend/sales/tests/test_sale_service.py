# sales/tests/test_sale_service.py

from decimal import Decimal
from io import StringIO
from unittest import mock

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.test import TestCase

from audit.models import AuditRecord
from clients.models import Client
from products.models import Product
from sales.services.results import EntityKind, FailureKind
from sales.services.sale_service import process_sale


class SaleProcessingTests(TestCase):
    """
    Tests for the sale transaction.

    GUARANTEES:
    - Valid sales move stock, credit and audit together
    - Stock is checked before credit
    - Rejected sales change nothing
    - System failures roll back partial writes
    """

    def setUp(self):
        self.corporate = Client.objects.create(
            id=1,
            name="Empresa Tech SAC",
            credit_limit=Decimal("5000.00"),
        )
        self.consultancy = Client.objects.create(
            id=2,
            name="Consultora Global",
            credit_limit=Decimal("1000.00"),
        )

        self.server = Product.objects.create(
            id=100,
            name="Servidor Rack",
            stock_quantity=5,
            unit_price=Decimal("2000.00"),
        )
        self.license = Product.objects.create(
            id=101,
            name="Licencia Software",
            stock_quantity=50,
            unit_price=Decimal("300.00"),
        )

    def _assert_state(self, *, client, credit, product, stock, audits=0):
        client.refresh_from_db()
        product.refresh_from_db()
        self.assertEqual(client.credit_limit, Decimal(credit))
        self.assertEqual(product.stock_quantity, stock)
        self.assertEqual(AuditRecord.objects.count(), audits)

    # ======================================================
    # SUCCESSFUL SALE
    # ======================================================

    def test_sale_debits_credit_and_deducts_stock(self):
        result = process_sale(client_id=1, product_id=100, quantity=2)

        self.assertTrue(result.success)
        self.assertIsNone(result.failure)
        self.assertEqual(result.total, Decimal("4000.00"))

        self._assert_state(
            client=self.corporate,
            credit="1000.00",
            product=self.server,
            stock=3,
            audits=1,
        )

    def test_sale_appends_exactly_one_audit_record(self):
        result = process_sale(client_id=1, product_id=100, quantity=2)

        record = AuditRecord.objects.get()
        self.assertEqual(record.id, result.audit_record_id)
        self.assertEqual(record.client_id, 1)
        self.assertEqual(record.product_id, 100)
        self.assertEqual(record.quantity, 2)
        self.assertEqual(record.total, Decimal("4000.00"))
        self.assertIsNotNone(record.created_at)
        self.assertEqual(
            record.message,
            "SALE COMPLETED: Client 1 purchased 2 units of product 100 for $4000.00",
        )

    def test_success_acknowledgement_is_written_to_output(self):
        out = StringIO()

        process_sale(client_id=1, product_id=100, quantity=2, output=out)

        self.assertEqual(
            out.getvalue(),
            ">> Transaction processed successfully. Total: $4000.00\n",
        )

    def test_sale_may_consume_all_stock_and_credit(self):
        Client.objects.create(id=3, name="Exact Buyer", credit_limit=Decimal("10000.00"))

        result = process_sale(client_id=3, product_id=100, quantity=5)

        self.assertTrue(result.success)
        buyer = Client.objects.get(id=3)
        self.server.refresh_from_db()
        self.assertEqual(buyer.credit_limit, Decimal("0.00"))
        self.assertEqual(self.server.stock_quantity, 0)

    def test_quantity_given_as_digit_string_is_accepted(self):
        result = process_sale(client_id=2, product_id=101, quantity="3")

        self.assertTrue(result.success)
        self.assertEqual(result.total, Decimal("900.00"))

    # ======================================================
    # BUSINESS-RULE REJECTIONS
    # ======================================================

    def test_insufficient_stock_is_rejected(self):
        result = process_sale(client_id=1, product_id=100, quantity=10)

        self.assertFalse(result.success)
        self.assertEqual(result.kind, FailureKind.INSUFFICIENT_STOCK)
        self.assertIn("INSUFFICIENT STOCK", result.failure.message)
        self.assertIsNone(result.total)

        self._assert_state(
            client=self.corporate, credit="5000.00", product=self.server, stock=5
        )

    def test_stock_is_checked_before_credit(self):
        # Both rules fail: 6 units exceed stock 5, and $12000 exceeds $1000 credit.
        result = process_sale(client_id=2, product_id=100, quantity=6)

        self.assertEqual(result.kind, FailureKind.INSUFFICIENT_STOCK)

    def test_insufficient_credit_is_rejected(self):
        result = process_sale(client_id=2, product_id=101, quantity=4)

        self.assertFalse(result.success)
        self.assertEqual(result.kind, FailureKind.INSUFFICIENT_CREDIT)
        self.assertIn("INSUFFICIENT CREDIT", result.failure.message)

        self._assert_state(
            client=self.consultancy, credit="1000.00", product=self.license, stock=50
        )

    def test_failed_sale_is_idempotent(self):
        out = StringIO()

        kinds = [
            process_sale(client_id=1, product_id=100, quantity=10, output=out).kind
            for _ in range(3)
        ]

        self.assertEqual(kinds, [FailureKind.INSUFFICIENT_STOCK] * 3)
        self.assertEqual(out.getvalue(), "")
        self._assert_state(
            client=self.corporate, credit="5000.00", product=self.server, stock=5
        )

    # ======================================================
    # MISSING ENTITIES
    # ======================================================

    def test_missing_product_is_reported(self):
        result = process_sale(client_id=1, product_id=999, quantity=1)

        self.assertEqual(result.kind, FailureKind.ENTITY_NOT_FOUND)
        self.assertEqual(result.failure.entity, EntityKind.PRODUCT)
        self.assertEqual(result.failure.message, "ERROR: Product 999 does not exist.")
        self._assert_state(
            client=self.corporate, credit="5000.00", product=self.server, stock=5
        )

    def test_missing_client_is_reported(self):
        result = process_sale(client_id=999, product_id=100, quantity=1)

        self.assertEqual(result.kind, FailureKind.ENTITY_NOT_FOUND)
        self.assertEqual(result.failure.entity, EntityKind.CLIENT)
        self.assertEqual(result.failure.message, "ERROR: Client 999 does not exist.")
        self._assert_state(
            client=self.corporate, credit="5000.00", product=self.server, stock=5
        )

    def test_malformed_product_id_is_reported_as_missing(self):
        result = process_sale(client_id=1, product_id="abc", quantity=1)

        self.assertEqual(result.kind, FailureKind.ENTITY_NOT_FOUND)
        self.assertEqual(result.failure.entity, EntityKind.PRODUCT)
        self.assertEqual(result.failure.message, "ERROR: Product abc does not exist.")
        self._assert_state(
            client=self.corporate, credit="5000.00", product=self.server, stock=5
        )

    def test_malformed_client_id_is_reported_as_missing(self):
        result = process_sale(client_id="abc", product_id=100, quantity=1)

        self.assertEqual(result.kind, FailureKind.ENTITY_NOT_FOUND)
        self.assertEqual(result.failure.entity, EntityKind.CLIENT)
        self.assertIsNone(result.failure.cause)

    def test_product_is_reported_when_both_are_missing(self):
        result = process_sale(client_id=998, product_id=999, quantity=1)

        self.assertEqual(result.failure.entity, EntityKind.PRODUCT)

    # ======================================================
    # SYSTEM FAILURES (ROLLBACK)
    # ======================================================

    def test_audit_failure_rolls_back_stock_and_credit(self):
        with mock.patch(
            "sales.services.sale_service.record_sale",
            side_effect=DatabaseError("audit table unavailable"),
        ):
            result = process_sale(client_id=1, product_id=100, quantity=2)

        self.assertFalse(result.success)
        self.assertEqual(result.kind, FailureKind.SYSTEM_FAILURE)
        self.assertIsInstance(result.failure.cause, DatabaseError)
        self.assertEqual(
            result.failure.message,
            "CRITICAL SYSTEM ERROR: audit table unavailable",
        )

        self._assert_state(
            client=self.corporate, credit="5000.00", product=self.server, stock=5
        )

    def test_credit_failure_rolls_back_stock(self):
        with mock.patch(
            "sales.services.sale_service.debit_credit",
            side_effect=RuntimeError("connection reset"),
        ):
            result = process_sale(client_id=1, product_id=100, quantity=1)

        self.assertEqual(result.kind, FailureKind.SYSTEM_FAILURE)
        self.assertIn("connection reset", result.failure.message)
        self._assert_state(
            client=self.corporate, credit="5000.00", product=self.server, stock=5
        )

    def test_system_failure_is_reported_to_sentry(self):
        with mock.patch(
            "sales.services.sale_service.record_sale",
            side_effect=DatabaseError("boom"),
        ), mock.patch(
            "sales.services.sale_service.sentry_sdk.capture_exception"
        ) as capture:
            result = process_sale(client_id=1, product_id=100, quantity=1)

        capture.assert_called_once_with(result.failure.cause)

    def test_business_rejection_is_not_reported_to_sentry(self):
        with mock.patch(
            "sales.services.sale_service.sentry_sdk.capture_exception"
        ) as capture:
            process_sale(client_id=1, product_id=100, quantity=10)

        capture.assert_not_called()

    # ======================================================
    # INPUT CONTRACT
    # ======================================================

    def test_non_positive_quantity_is_refused(self):
        for bad in (0, -1):
            with self.assertRaises(ValidationError):
                process_sale(client_id=1, product_id=100, quantity=bad)

        self._assert_state(
            client=self.corporate, credit="5000.00", product=self.server, stock=5
        )

    def test_non_integer_quantity_is_refused(self):
        for bad in (True, 1.5, "two", None):
            with self.assertRaises(ValidationError):
                process_sale(client_id=1, product_id=100, quantity=bad)

    # ======================================================
    # OVERSUBSCRIPTION
    # ======================================================

    def test_repeated_sales_never_overdraw_stock(self):
        Client.objects.create(id=4, name="Bulk Buyer", credit_limit=Decimal("100000.00"))

        results = [
            process_sale(client_id=4, product_id=100, quantity=2) for _ in range(4)
        ]

        successes = [r for r in results if r.success]
        self.assertEqual(len(successes), 2)
        self.assertTrue(
            all(r.kind == FailureKind.INSUFFICIENT_STOCK for r in results if not r.success)
        )

        self.server.refresh_from_db()
        self.assertEqual(self.server.stock_quantity, 1)
        self.assertEqual(AuditRecord.objects.count(), 2)
