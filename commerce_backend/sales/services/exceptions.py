# sales/services/exceptions.py

"""
SALE SERVICE ERRORS

Business-rule violations raised inside the sale transaction.
Raising one of these out of transaction.atomic() rolls the transaction back;
the sale service converts them into a SaleResult at its boundary.
"""

from sales.services.results import EntityKind, FailureKind


class SaleServiceError(Exception):
    """Base exception for expected, user-facing sale rejections."""

    kind: FailureKind


class EntityNotFoundError(SaleServiceError):
    """Raised when the referenced client or product does not exist."""

    kind = FailureKind.ENTITY_NOT_FOUND

    def __init__(self, *, entity: EntityKind, identifier):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"ERROR: {entity.value} {identifier} does not exist.")


class InsufficientStockError(SaleServiceError):
    """Raised when the product has fewer units than requested."""

    kind = FailureKind.INSUFFICIENT_STOCK

    def __init__(self, *, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            "INSUFFICIENT STOCK: no units available. "
            f"Requested: {requested}, Available: {available}"
        )


class InsufficientCreditError(SaleServiceError):
    """Raised when the client's remaining credit cannot cover the total."""

    kind = FailureKind.INSUFFICIENT_CREDIT

    def __init__(self, *, total, available):
        self.total = total
        self.available = available
        super().__init__(
            "INSUFFICIENT CREDIT: client has no balance for this purchase. "
            f"Total: {total}, Available credit: {available}"
        )
