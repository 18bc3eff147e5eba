# clients/models/client.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Client(models.Model):
    """
    A buying client with a single-currency credit line.

    CREDIT MODEL (IMPORTANT):
    - credit_limit is the REMAINING purchasing power, not a ceiling
    - It is decremented only by the sale processor when a sale commits
    - Never negative at a committed state (DB-enforced)

    IDENTITY:
    - id is assigned at provisioning time and never reused
    - Clients are never deleted by this system
    """

    id = models.PositiveBigIntegerField(primary_key=True)

    name = models.CharField(max_length=100)

    credit_limit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Remaining purchasing power (single currency).",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(credit_limit__gte=Decimal("0")),
                name="client_credit_limit_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.name} (#{self.id})"

    def clean(self):
        if self.credit_limit is None:
            raise ValidationError("credit_limit is required")

        if Decimal(self.credit_limit) < Decimal("0.00"):
            raise ValidationError("credit_limit cannot be negative")

    def delete(self, *args, **kwargs):
        raise ValidationError("Client records cannot be deleted")
