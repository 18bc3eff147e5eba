# sales/tests/test_commands.py

from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from audit.models import AuditRecord
from clients.models import Client
from products.models import Product


class ProcessSaleCommandTests(TestCase):
    def setUp(self):
        Client.objects.create(id=1, name="Empresa Tech SAC", credit_limit=Decimal("5000.00"))
        Product.objects.create(
            id=100,
            name="Servidor Rack",
            stock_quantity=5,
            unit_price=Decimal("2000.00"),
        )

    def test_successful_sale_prints_acknowledgement(self):
        out = StringIO()

        call_command("process_sale", client_id=1, product_id=100, quantity=2, stdout=out)

        self.assertEqual(
            out.getvalue(),
            ">> Transaction processed successfully. Total: $4000.00\n",
        )
        self.assertEqual(AuditRecord.objects.count(), 1)

    def test_rejected_sale_raises_command_error(self):
        out = StringIO()

        with self.assertRaisesMessage(CommandError, "INSUFFICIENT STOCK"):
            call_command(
                "process_sale", client_id=1, product_id=100, quantity=10, stdout=out
            )

        self.assertEqual(out.getvalue(), "")
        self.assertEqual(AuditRecord.objects.count(), 0)

    def test_missing_client_raises_command_error(self):
        with self.assertRaisesMessage(CommandError, "ERROR: Client 7 does not exist."):
            call_command(
                "process_sale", client_id=7, product_id=100, quantity=1, stdout=StringIO()
            )

    def test_invalid_quantity_raises_command_error(self):
        with self.assertRaisesMessage(CommandError, "quantity must be greater than zero"):
            call_command(
                "process_sale", client_id=1, product_id=100, quantity=0, stdout=StringIO()
            )
