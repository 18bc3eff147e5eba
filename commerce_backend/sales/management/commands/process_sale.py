# sales/management/commands/process_sale.py

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from sales.services.sale_service import process_sale


class Command(BaseCommand):
    help = "Sell units of a product to a client (stock, credit and audit in one transaction)"

    def add_arguments(self, parser):
        parser.add_argument("--client", dest="client_id", type=int, required=True)
        parser.add_argument("--product", dest="product_id", type=int, required=True)
        parser.add_argument("--quantity", type=int, required=True)

    def handle(self, *args, **options):
        try:
            result = process_sale(
                client_id=options["client_id"],
                product_id=options["product_id"],
                quantity=options["quantity"],
                output=self.stdout,
            )
        except ValidationError as exc:
            raise CommandError("; ".join(exc.messages)) from exc

        if not result.success:
            raise CommandError(result.failure.message)
