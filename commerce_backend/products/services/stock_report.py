# products/services/stock_report.py

"""
BATCH STOCK REPORT

Purpose:
- One forward pass over every product, classifying stock as CRITICAL / HEALTHY.
- Read-only. No locks, no writes.

Rules:
- stock_quantity < CRITICAL_STOCK_THRESHOLD -> CRITICAL, otherwise HEALTHY.
- Rows are produced lazily from a single query; each call re-reads the store.
- A store read error aborts the scan with StockReportError (cause attached).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from django.db import DatabaseError

from products.services.inventory import list_products

logger = logging.getLogger("inventory")

CRITICAL_STOCK_THRESHOLD = 10

REPORT_START_MARKER = "--- STOCK AUDIT START (BATCH) ---"
REPORT_END_MARKER = "--- END OF PROCESS ---"


class StockReportError(Exception):
    """Store read failure during a stock scan."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"CRITICAL SYSTEM ERROR: {cause}")


class StockStatus(str, Enum):
    CRITICAL = "Critical"
    HEALTHY = "Healthy"


@dataclass(frozen=True, slots=True)
class StockLine:
    name: str
    status: StockStatus
    stock_quantity: int


def classify_stock(stock_quantity: int) -> StockStatus:
    if int(stock_quantity) < CRITICAL_STOCK_THRESHOLD:
        return StockStatus.CRITICAL
    return StockStatus.HEALTHY


def scan_inventory() -> Iterator[StockLine]:
    """
    Lazily yield one StockLine per product, in store order.

    The query runs on first iteration, not on call.
    """
    rows = list_products().values_list("name", "stock_quantity")

    try:
        for name, stock_quantity in rows.iterator():
            yield StockLine(
                name=name,
                status=classify_stock(stock_quantity),
                stock_quantity=int(stock_quantity),
            )
    except DatabaseError as exc:
        logger.exception("Stock scan aborted by store read error")
        raise StockReportError(exc) from exc


def render_stock_report(lines: Iterable[StockLine]) -> Iterator[str]:
    yield REPORT_START_MARKER

    for line in lines:
        if line.status is StockStatus.CRITICAL:
            yield (
                f"[ALERT] Critical stock detected: {line.name} "
                f"(Remaining: {line.stock_quantity})"
            )
        else:
            yield f"[OK] Healthy stock: {line.name}"

    yield REPORT_END_MARKER
