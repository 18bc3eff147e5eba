# sales/services/results.py

"""
SALE OUTCOMES

A sale either completes (with its total) or is rejected with exactly one
failure kind. Callers branch on `result.success` / `result.kind` instead of
catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INSUFFICIENT_CREDIT = "INSUFFICIENT_CREDIT"
    SYSTEM_FAILURE = "SYSTEM_FAILURE"


class EntityKind(str, Enum):
    CLIENT = "Client"
    PRODUCT = "Product"


@dataclass(frozen=True, slots=True)
class SaleFailure:
    """
    Why a sale did not commit.

    entity: set only for ENTITY_NOT_FOUND
    cause: set only for SYSTEM_FAILURE (the underlying exception)
    """

    kind: FailureKind
    message: str
    entity: Optional[EntityKind] = None
    cause: Optional[BaseException] = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class SaleResult:
    success: bool
    total: Optional[Decimal] = None
    audit_record_id: Optional[int] = None
    failure: Optional[SaleFailure] = None

    @classmethod
    def completed(cls, *, total: Decimal, audit_record_id: int) -> "SaleResult":
        return cls(success=True, total=total, audit_record_id=audit_record_id)

    @classmethod
    def rejected(cls, failure: SaleFailure) -> "SaleResult":
        return cls(success=False, failure=failure)

    @property
    def kind(self) -> Optional[FailureKind]:
        return self.failure.kind if self.failure is not None else None
