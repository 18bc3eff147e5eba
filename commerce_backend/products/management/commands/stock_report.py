# products/management/commands/stock_report.py

from django.core.management.base import BaseCommand, CommandError

from products.services.stock_report import (
    StockReportError,
    render_stock_report,
    scan_inventory,
)


class Command(BaseCommand):
    help = "Batch stock audit: flag products below the critical stock threshold"

    def handle(self, *args, **options):
        try:
            for line in render_stock_report(scan_inventory()):
                self.stdout.write(line)
        except StockReportError as exc:
            raise CommandError(str(exc)) from exc
