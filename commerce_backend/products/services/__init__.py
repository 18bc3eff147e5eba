from .inventory import deduct_stock, get_product_for_update, list_products
from .stock_report import render_stock_report, scan_inventory

__all__ = [
    "deduct_stock",
    "get_product_for_update",
    "list_products",
    "render_stock_report",
    "scan_inventory",
]
