"""Stock mutations and sales-history maintenance.

Kept apart from the reorder engine: these functions produce updated
``Product`` snapshots that the caller persists. The reference date is
always passed in explicitly.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from ..common.models import Product, SalesEntry

# Trailing window the average daily sales is computed over
HISTORY_WINDOW_DAYS = 30


def trailing_average(sales_history: list[SalesEntry], as_of: date) -> float:
    """Mean units/day over the HISTORY_WINDOW_DAYS ending at ``as_of``.

    Always divides by the full window length, so days without an entry
    count as zero sales. Rounded to 2 decimal places.
    """
    window_start = as_of - timedelta(days=HISTORY_WINDOW_DAYS)
    total = sum(
        entry.quantity
        for entry in sales_history
        if window_start < entry.date <= as_of
    )
    return round(total / HISTORY_WINDOW_DAYS, 2)


def record_sale(product: Product, quantity: int, on_date: date) -> Product:
    """Merge ``quantity`` units sold on ``on_date`` into the sales history.

    Same-day sales accumulate into one entry. The returned product carries
    the average daily sales recomputed over the window ending at the latest
    recorded day, so a backdated sale never hides later entries. Its stock
    is unchanged.
    """
    if quantity < 0:
        raise ValueError(f"Sale quantity must be non-negative, got {quantity}")

    history: list[SalesEntry] = []
    merged = False
    for entry in product.sales_history:
        if entry.date == on_date:
            history.append(SalesEntry(date=on_date, quantity=entry.quantity + quantity))
            merged = True
        else:
            history.append(entry)
    if not merged:
        history.append(SalesEntry(date=on_date, quantity=quantity))
        history.sort(key=lambda entry: entry.date)
    window_end = max(on_date, history[-1].date)

    return product.model_copy(
        update={
            "sales_history": history,
            "average_daily_sales": trailing_average(history, window_end),
        }
    )


def set_stock(
    product: Product,
    new_stock: int,
    on_date: date,
    now: datetime | None = None,
) -> Product:
    """Set the on-hand quantity, recording any decrease as a sale.

    Replenishments (increases) leave the sales history and average alone.
    """
    if new_stock < 0:
        raise ValueError(f"Stock must be non-negative, got {new_stock}")

    updated = product
    stock_change = new_stock - product.current_stock
    if stock_change < 0:
        updated = record_sale(product, -stock_change, on_date)

    return updated.model_copy(
        update={
            "current_stock": new_stock,
            "last_updated": now or product.last_updated,
        }
    )
