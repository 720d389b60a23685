"""Batch reorder report generation.

Runs the engine over every product and orders the results so the most
pressing reorders come first:

1. products needing reorder before those that don't
2. higher criticality first (high > medium > low)
3. fewer days of stock remaining first (never-runs-out last)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from ..common.models import Product, ReorderRecommendation, ReorderReport, ReportSummary
from .engine import recommend

logger = logging.getLogger(__name__)


def _sort_key(rec: ReorderRecommendation) -> tuple:
    return (not rec.needs_reorder, -rec.criticality_level.rank, rec.days_of_stock_remaining)


def generate_report(products: Iterable[Product]) -> list[ReorderRecommendation]:
    """Recommend for each product independently, then sort by urgency."""
    recommendations = [recommend(product) for product in products]
    return sorted(recommendations, key=_sort_key)


def summarize(recommendations: list[ReorderRecommendation]) -> ReportSummary:
    """Aggregate the dashboard summary figures."""
    needing = [r for r in recommendations if r.needs_reorder]
    return ReportSummary(
        total_products=len(recommendations),
        products_needing_reorder=len(needing),
        total_estimated_cost=round(sum(r.estimated_cost for r in needing), 2),
        urgent_products=sum(1 for r in needing if r.is_urgent),
    )


def build_report(
    products: Iterable[Product],
    generated_at: datetime | None = None,
) -> ReorderReport:
    """Sorted recommendations plus summary for a set of products."""
    recommendations = generate_report(products)
    summary = summarize(recommendations)

    logger.info(
        "Reorder report: %d products, %d need reorder (%d urgent), est. cost %.2f",
        summary.total_products,
        summary.products_needing_reorder,
        summary.urgent_products,
        summary.total_estimated_cost,
    )
    return ReorderReport(
        recommendations=recommendations,
        summary=summary,
        generated_at=generated_at or datetime.now(),
    )
