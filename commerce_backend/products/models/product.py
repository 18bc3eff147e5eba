# products/models/product.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Product(models.Model):
    """
    Represents a sellable product.

    STOCK MODEL (IMPORTANT):
    - Product stores its own stock_quantity (integer units)
    - stock_quantity is mutated ONLY by the sale processor
    - Never negative (PositiveIntegerField is DB-checked)

    PRICING:
    - unit_price is fixed once the product is provisioned
    - No price history is kept
    """

    id = models.PositiveBigIntegerField(primary_key=True)

    name = models.CharField(max_length=100, db_index=True)

    stock_quantity = models.PositiveIntegerField(default=0)

    unit_price = models.DecimalField(max_digits=12, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(unit_price__gt=Decimal("0")),
                name="product_unit_price_positive",
            ),
        ]

    def __str__(self):
        return f"{self.name} (#{self.id})"

    def clean(self):
        if self.unit_price is None or Decimal(self.unit_price) <= 0:
            raise ValidationError("Unit price must be greater than zero")

        if self.stock_quantity is None or int(self.stock_quantity) < 0:
            raise ValidationError("stock_quantity cannot be negative")

    def save(self, *args, **kwargs):
        update_fields = kwargs.get("update_fields")
        checks_price = update_fields is None or "unit_price" in update_fields

        if checks_price and self.pk is not None and not self._state.adding:
            previous_price = (
                Product.objects.filter(pk=self.pk)
                .values_list("unit_price", flat=True)
                .first()
            )
            if previous_price is not None and Decimal(previous_price) != Decimal(
                self.unit_price
            ):
                raise ValidationError("Product unit_price is immutable")

        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Product records cannot be deleted")
