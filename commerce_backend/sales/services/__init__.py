from .results import EntityKind, FailureKind, SaleFailure, SaleResult
from .sale_service import process_sale

__all__ = [
    "EntityKind",
    "FailureKind",
    "SaleFailure",
    "SaleResult",
    "process_sale",
]
