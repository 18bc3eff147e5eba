# products/services/inventory.py

"""
======================================================
PATH: products/services/inventory.py
======================================================
INVENTORY CORE SERVICES

Purpose:
- Locked read of a product row for a sale transaction.
- Deduct sold units from a product's stock.
- Ordered listing of all products (store iteration order for reports).

Rules:
- Quantities are integer units.
- get_product_for_update() must run inside transaction.atomic().
- Stock never goes negative; the DB column check is the final authority.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import transaction

from products.models import Product


def _to_int(value, *, field_name="value") -> int:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def _require_positive_int(value, *, field_name: str) -> int:
    v = _to_int(value, field_name=field_name)
    if v <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return v


def get_product_for_update(product_id) -> Product:
    """
    Raises Product.DoesNotExist when no product matches.
    """
    return Product.objects.select_for_update().get(pk=product_id)


@transaction.atomic
def deduct_stock(*, product: Product, quantity) -> Product:
    qty = _require_positive_int(quantity, field_name="quantity")

    current = int(product.stock_quantity or 0)
    new_quantity = current - qty
    if new_quantity < 0:
        raise ValidationError(
            f"Stock deduction would result in negative stock. Remaining={current}, quantity={qty}"
        )

    product.stock_quantity = new_quantity
    product.save(update_fields=["stock_quantity", "updated_at"])
    return product


def list_products():
    """
    All products in store iteration order (ascending id).
    Lazy: nothing is read until the queryset is iterated.
    """
    return Product.objects.order_by("id")
