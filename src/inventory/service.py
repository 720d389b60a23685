"""Inventory service: the boundary between callers and the reorder engine.

Loads product snapshots from an injected ``ProductStore``, validates
caller input, invokes the pure engine and persists stock changes.

Usage:
    service = InventoryService(ProductStore("data/warehouse.db"))
    report = service.generate_reorder_report()
    sim = service.simulate_demand_spike("PROD003", multiplier=2, duration_days=7)
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from ..common.database import ProductStore
from ..common.models import Product, ReorderRecommendation, ReorderReport
from . import engine
from .report import build_report
from .stock import set_stock

logger = logging.getLogger(__name__)


class InvalidRequestError(ValueError):
    """Caller input rejected before reaching the engine."""


class ProductNotFoundError(LookupError):
    """No product is stored under the requested ID."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class InventoryService:
    """Product lookups, stock updates, recommendations and reports."""

    def __init__(self, store: ProductStore) -> None:
        self.store = store

    # --- Products ---

    def list_products(self) -> list[Product]:
        return self.store.list_all()

    def get_product(self, product_id: str) -> Product:
        """Load a product or raise ProductNotFoundError."""
        if not product_id:
            raise InvalidRequestError("Missing required parameter: productId")
        product = self.store.get(product_id)
        if product is None:
            logger.warning("Product %s not found", product_id)
            raise ProductNotFoundError(product_id)
        return product

    def create_product(self, data: dict) -> Product:
        """Validate and insert a new product."""
        payload = {k: v for k, v in data.items() if k not in ("last_updated", "lastUpdated")}
        product = Product.model_validate({**payload, "lastUpdated": datetime.now()})
        self.store.insert(product)
        logger.info("Created product %s (%s)", product.product_id, product.name)
        return product

    def update_product(
        self,
        product_id: str,
        updates: dict,
        as_of: date | None = None,
    ) -> Product:
        """Apply field updates (snake_case or camelCase) to a stored product.

        A stock change goes through the same path as ``update_stock``, so a
        decrease is recorded as a sale on ``as_of`` (default today).
        """
        current = self.get_product(product_id)
        merged = current.model_dump(by_alias=True)
        new_stock = None
        for key, value in updates.items():
            field = Product.model_fields.get(key)
            alias = field.alias if field and field.alias else key
            if alias == "currentStock":
                new_stock = value
                continue
            merged[alias] = value
        merged["productId"] = product_id
        now = datetime.now()
        merged["lastUpdated"] = now

        product = Product.model_validate(merged)
        if new_stock is not None:
            if new_stock < 0:
                raise InvalidRequestError(f"currentStock must be non-negative, got {new_stock}")
            product = set_stock(product, new_stock, on_date=as_of or now.date(), now=now)
        self.store.save(product)
        logger.info("Updated product %s: %s", product_id, ", ".join(sorted(updates)))
        return product

    def update_stock(
        self,
        product_id: str,
        new_stock: int | None,
        reason: str | None = None,
        as_of: date | None = None,
    ) -> str:
        """Set a product's stock, recording decreases as today's sales.

        Returns a human-readable confirmation message.
        """
        if not product_id or new_stock is None:
            raise InvalidRequestError("Missing required parameters: productId, newStock")
        if new_stock < 0:
            raise InvalidRequestError(f"newStock must be non-negative, got {new_stock}")

        product = self.get_product(product_id)
        now = datetime.now()
        updated = set_stock(product, new_stock, on_date=as_of or now.date(), now=now)
        self.store.save(updated)

        logger.info(
            "Stock for %s: %d -> %d (avg daily sales %.2f -> %.2f)",
            product_id,
            product.current_stock,
            updated.current_stock,
            product.average_daily_sales,
            updated.average_daily_sales,
        )
        return f"Stock updated for {product.name}. {reason or 'Stock adjustment'}"

    # --- Recommendations ---

    def get_recommendation(self, product_id: str) -> ReorderRecommendation:
        return engine.recommend(self.get_product(product_id))

    def simulate_demand_spike(
        self,
        product_id: str,
        multiplier: float | None,
        duration_days: int | None,
    ) -> ReorderRecommendation:
        """Run a what-if recommendation without touching stored state."""
        if not product_id or multiplier is None or duration_days is None:
            raise InvalidRequestError(
                "Missing required parameters: productId, multiplier, durationDays"
            )
        if multiplier <= 0:
            raise InvalidRequestError(f"multiplier must be positive, got {multiplier}")
        if duration_days <= 0:
            raise InvalidRequestError(f"durationDays must be positive, got {duration_days}")

        product = self.get_product(product_id)
        result = engine.simulate(product, multiplier, duration_days)
        logger.info(
            "Simulated %sx demand for %s over %d days: reorder=%s qty=%s",
            multiplier,
            product_id,
            duration_days,
            result.needs_reorder,
            result.suggested_reorder_quantity,
        )
        return result

    def generate_reorder_report(self) -> ReorderReport:
        return build_report(self.store.list_all())
