# clients/services/credit.py

"""
CLIENT CREDIT SERVICES

Purpose:
- Locked read of a client row for a sale transaction.
- Debit a completed sale total from the client's remaining credit.

Rules:
- get_client_for_update() must run inside transaction.atomic()
  (Django raises TransactionManagementError otherwise).
- Credit never goes negative; the DB constraint is the final authority.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from django.core.exceptions import ValidationError
from django.db import transaction

from clients.models import Client

TWOPLACES = Decimal("0.01")


def _to_amount(value, *, field_name="amount") -> Decimal:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    try:
        return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except Exception as exc:
        raise ValidationError(f"{field_name} must be a valid decimal") from exc


def get_client_for_update(client_id) -> Client:
    """
    Raises Client.DoesNotExist when no client matches.
    """
    return Client.objects.select_for_update().get(pk=client_id)


@transaction.atomic
def debit_credit(*, client: Client, amount) -> Client:
    amt = _to_amount(amount)
    if amt < Decimal("0.00"):
        raise ValidationError("amount cannot be negative")

    current = Decimal(client.credit_limit)
    if current < amt:
        raise ValidationError(
            f"Debit would result in negative credit. Available={current}, amount={amt}"
        )

    client.credit_limit = current - amt
    client.save(update_fields=["credit_limit", "updated_at"])
    return client
