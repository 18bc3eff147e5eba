# sales/services/sale_service.py

"""
CORE SALES DOMAIN SERVICE

SINGLE SOURCE OF TRUTH for:
- Sale validation (stock first, then credit)
- Stock deduction + credit debit + audit append
- Sale outcome classification

GUARANTEES:
- Product and client rows are locked (SELECT ... FOR UPDATE) before validation,
  so the checked snapshot is the written snapshot
- Fully atomic: stock, credit and audit commit together or not at all
- Every exit path other than normal completion rolls back
- Callers receive a SaleResult; only input-contract violations raise
"""

from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP

import sentry_sdk
from django.core.exceptions import ValidationError
from django.db import transaction

from audit.models import AuditRecord
from audit.services.audit_trail import record_sale
from clients.models import Client
from clients.services.credit import debit_credit, get_client_for_update
from products.models import Product
from products.services.inventory import deduct_stock, get_product_for_update
from sales.services.exceptions import (
    EntityNotFoundError,
    InsufficientCreditError,
    InsufficientStockError,
    SaleServiceError,
)
from sales.services.results import EntityKind, FailureKind, SaleFailure, SaleResult

logger = logging.getLogger("sales")

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    return Decimal(str(v or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _to_int_qty(value) -> int:
    """
    Quantity normalizer.
    HARD RULE: quantities are positive whole integer units.
    """
    if isinstance(value, bool):
        raise ValidationError("quantity must be a whole integer unit")

    if isinstance(value, int):
        qty = value
    elif isinstance(value, str) and value.strip().isdigit():
        qty = int(value.strip())
    else:
        raise ValidationError("quantity must be a whole integer unit")

    if qty <= 0:
        raise ValidationError("quantity must be greater than zero")
    return qty


def _emit(output, line: str) -> None:
    if output is not None:
        output.write(f"{line}\n")


def _lock_product(product_id) -> Product:
    # A malformed identifier cannot match any row.
    try:
        return get_product_for_update(product_id)
    except (Product.DoesNotExist, ValueError, TypeError) as exc:
        raise EntityNotFoundError(entity=EntityKind.PRODUCT, identifier=product_id) from exc


def _lock_client(client_id) -> Client:
    try:
        return get_client_for_update(client_id)
    except (Client.DoesNotExist, ValueError, TypeError) as exc:
        raise EntityNotFoundError(entity=EntityKind.CLIENT, identifier=client_id) from exc


def _apply_sale(*, client_id, product_id, quantity: int) -> tuple[Decimal, AuditRecord]:
    """
    Read-validate-write. Must run inside transaction.atomic().

    Lock order is always product, then client.
    """
    product = _lock_product(product_id)
    client = _lock_client(client_id)

    total = _money(Decimal(product.unit_price) * quantity)

    if product.stock_quantity < quantity:
        raise InsufficientStockError(
            requested=quantity,
            available=product.stock_quantity,
        )

    if Decimal(client.credit_limit) < total:
        raise InsufficientCreditError(total=total, available=client.credit_limit)

    deduct_stock(product=product, quantity=quantity)
    debit_credit(client=client, amount=total)
    audit_record = record_sale(
        client=client,
        product=product,
        quantity=quantity,
        total=total,
    )

    return total, audit_record


def process_sale(*, client_id, product_id, quantity, output=None) -> SaleResult:
    """
    Sell `quantity` units of a product to a client.

    Success:
    - product.stock_quantity -= quantity
    - client.credit_limit -= unit_price * quantity
    - exactly one AuditRecord appended
    - acknowledgement line written to `output` (any object with .write())

    Rejection (nothing committed):
    - ENTITY_NOT_FOUND     product or client missing (product checked first)
    - INSUFFICIENT_STOCK   checked before credit
    - INSUFFICIENT_CREDIT
    - SYSTEM_FAILURE       anything unexpected; cause attached

    Raises ValidationError only when `quantity` is not a positive integer.
    """
    qty = _to_int_qty(quantity)

    logger.info(
        "Initiating sale",
        extra={"client_id": client_id, "product_id": product_id, "quantity": qty},
    )

    try:
        with transaction.atomic():
            total, audit_record = _apply_sale(
                client_id=client_id,
                product_id=product_id,
                quantity=qty,
            )
    except SaleServiceError as exc:
        logger.warning(
            "Sale rejected",
            extra={
                "client_id": client_id,
                "product_id": product_id,
                "quantity": qty,
                "failure_kind": exc.kind.value,
            },
        )
        return SaleResult.rejected(
            SaleFailure(
                kind=exc.kind,
                message=str(exc),
                entity=getattr(exc, "entity", None),
            )
        )
    except Exception as exc:
        logger.exception(
            "Unexpected failure processing sale; transaction rolled back",
            extra={"client_id": client_id, "product_id": product_id, "quantity": qty},
        )
        sentry_sdk.capture_exception(exc)
        return SaleResult.rejected(
            SaleFailure(
                kind=FailureKind.SYSTEM_FAILURE,
                message=f"CRITICAL SYSTEM ERROR: {exc}",
                cause=exc,
            )
        )

    logger.info(
        "Sale completed successfully",
        extra={
            "client_id": client_id,
            "product_id": product_id,
            "quantity": qty,
            "total": str(total),
            "audit_record_id": audit_record.id,
        },
    )

    _emit(output, f">> Transaction processed successfully. Total: ${total}")

    return SaleResult.completed(total=total, audit_record_id=audit_record.id)
