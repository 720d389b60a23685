"""Inventory reorder decision engine.

Pure functions over a ``Product`` snapshot. Given a product's stock state
the engine decides whether to reorder, how much, at what cost and with what
urgency. Nothing here touches storage, the clock or shared state, so every
function is safe to call concurrently.

Rules:
    safety stock   = average daily sales × (lead time + BUFFER_DAYS)
    reorder when   current stock ≤ safety stock
    order quantity = max(sales × TARGET_DAYS − stock, 0), floored by the
                     supplier minimum

Inputs are assumed valid. Negative stock or costs are data-integrity faults
upstream; they pass through the arithmetic unchanged rather than being
clamped here.
"""

from __future__ import annotations

import math
from decimal import Decimal

from ..common.models import Product, ReorderRecommendation

# Safety margin beyond supplier lead time
BUFFER_DAYS = 5
# Coverage horizon a reorder restores stock to
TARGET_DAYS = 60

REASON_URGENT = "URGENT: stock exhausts before next delivery"
REASON_BELOW_THRESHOLD = "stock below safety threshold"
REASON_ADEQUATE = "stock levels adequate"


def days_of_stock_remaining(current_stock: float, average_daily_sales: float) -> int | float:
    """Whole days until stock runs out; ``inf`` when nothing sells."""
    if average_daily_sales <= 0:
        return math.inf
    return math.floor(current_stock / average_daily_sales)


def safety_stock_threshold(average_daily_sales: float, supplier_lead_time: float) -> float:
    return average_daily_sales * (supplier_lead_time + BUFFER_DAYS)


def needs_reorder(product: Product) -> bool:
    """True when stock is at or below the safety threshold."""
    threshold = safety_stock_threshold(product.average_daily_sales, product.supplier_lead_time)
    return product.current_stock <= threshold


def reorder_quantity(
    current_stock: float,
    average_daily_sales: float,
    minimum_reorder_quantity: float,
) -> float:
    """Units needed to cover TARGET_DAYS, never below the supplier minimum."""
    required_stock = average_daily_sales * TARGET_DAYS
    needed_quantity = max(0, required_stock - current_stock)
    return max(needed_quantity, minimum_reorder_quantity)


def recommend(product: Product) -> ReorderRecommendation:
    """Build the reorder recommendation for one product snapshot."""
    days_of_stock = days_of_stock_remaining(product.current_stock, product.average_daily_sales)
    reorder = needs_reorder(product)

    suggested_quantity: float = 0
    estimated_cost: float = 0
    if reorder:
        suggested_quantity = reorder_quantity(
            product.current_stock,
            product.average_daily_sales,
            product.minimum_reorder_quantity,
        )
        estimated_cost = suggested_quantity * product.cost_per_unit

        if days_of_stock <= product.supplier_lead_time:
            reason = REASON_URGENT
        else:
            reason = REASON_BELOW_THRESHOLD
    else:
        reason = REASON_ADEQUATE

    return ReorderRecommendation(
        product_id=product.product_id,
        product_name=product.name,
        current_stock=product.current_stock,
        days_of_stock_remaining=days_of_stock,
        needs_reorder=reorder,
        suggested_reorder_quantity=suggested_quantity,
        estimated_cost=estimated_cost,
        criticality_level=product.criticality_level,
        reason=reason,
    )


def simulate(product: Product, multiplier: float, duration_days: int) -> ReorderRecommendation:
    """What-if recommendation with sales velocity scaled by ``multiplier``.

    Callers must ensure ``multiplier > 0`` and ``duration_days > 0``.
    ``duration_days`` only appears in the reason text; the arithmetic uses
    the scaled average alone. The input product is left untouched.
    """
    spiked = product.model_copy(
        update={"average_daily_sales": product.average_daily_sales * multiplier}
    )
    recommendation = recommend(spiked)
    return recommendation.model_copy(
        update={
            "reason": (
                f"demand spike simulation: {_format_number(multiplier)}x normal sales "
                f"for {_format_number(duration_days)} days"
            )
        }
    )


def _format_number(value: float) -> str:
    """Render 2.0 as "2", 1.5 as "1.5" and 1e-05 as "0.00001"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    # repr gives the shortest round-tripping digits; Decimal drops the exponent
    return format(Decimal(repr(value)), "f")
