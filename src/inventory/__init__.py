"""Inventory reorder engine.

Modules:
- engine: pure reorder decision rules (recommend, simulate)
- report: batch report generation and summary
- stock: stock mutations and sales-history maintenance
- service: store-backed orchestration and input validation
- exporter: CSV / JSON report export
- seed: sample products
"""

from .engine import (
    days_of_stock_remaining,
    needs_reorder,
    recommend,
    reorder_quantity,
    safety_stock_threshold,
    simulate,
)
from .report import build_report, generate_report, summarize
from .service import InvalidRequestError, InventoryService, ProductNotFoundError
from .stock import record_sale, set_stock

__version__ = "0.1.0"

__all__ = [
    "days_of_stock_remaining",
    "needs_reorder",
    "recommend",
    "reorder_quantity",
    "safety_stock_threshold",
    "simulate",
    "build_report",
    "generate_report",
    "summarize",
    "InvalidRequestError",
    "InventoryService",
    "ProductNotFoundError",
    "record_sale",
    "set_stock",
]
