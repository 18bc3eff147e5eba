# audit/models/audit_record.py

"""
TRANSACTION AUDIT RECORD (IMMUTABLE)

Purpose:
- Append-only log entry for every committed sale (created once; never updated/deleted).
- Structured: who bought what, how many, for how much, and when.
- `message` is a human-readable view rendered from the structured fields at
  insert time, so nothing ever needs to parse it back.
"""

from decimal import Decimal, ROUND_HALF_UP

from django.db import models

from clients.models import Client
from products.models import Product

TWOPLACES = Decimal("0.01")


class AuditRecord(models.Model):
    """
    Immutable audit log for completed sales.
    Created once. Never updated. Never deleted.
    """

    # System-assigned, monotonically increasing.
    id = models.BigAutoField(primary_key=True)

    client = models.ForeignKey(
        Client,
        on_delete=models.PROTECT,
        related_name="audit_records",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="audit_records",
    )

    quantity = models.PositiveIntegerField()

    total = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        help_text="Sale total charged against the client's credit (snapshot).",
    )

    message = models.CharField(max_length=400, editable=False)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["id"]

    def render_message(self) -> str:
        total = Decimal(self.total).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
        return (
            f"SALE COMPLETED: Client {self.client_id} purchased {self.quantity} "
            f"units of product {self.product_id} for ${total}"
        )

    # ======================================================
    # IMMUTABILITY
    # ======================================================

    def save(self, *args, **kwargs):
        # Allow creation, block updates
        if not self._state.adding:
            raise RuntimeError("AuditRecord records are immutable")

        self.message = self.render_message()
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise RuntimeError("AuditRecord records cannot be deleted")

    def __str__(self):
        return f"Audit #{self.id} | {self.message}"
