"""Sample warehouse products for local development and demos."""

from __future__ import annotations

import logging
import random
from datetime import date, datetime, timedelta

from ..common.database import ProductStore
from ..common.models import CriticalityLevel, Product, SalesEntry

logger = logging.getLogger(__name__)

HISTORY_DAYS = 30
# Daily sales vary ±30% around the product's average
SALES_VARIATION = 0.6

SAMPLE_PRODUCTS: list[dict] = [
    {
        "product_id": "PROD001",
        "name": "Wireless Headphones",
        "current_stock": 45,
        "average_daily_sales": 8,
        "supplier_lead_time": 7,
        "minimum_reorder_quantity": 50,
        "cost_per_unit": 75.99,
        "criticality_level": CriticalityLevel.HIGH,
    },
    {
        "product_id": "PROD002",
        "name": "Smartphone Case",
        "current_stock": 120,
        "average_daily_sales": 15,
        "supplier_lead_time": 5,
        "minimum_reorder_quantity": 100,
        "cost_per_unit": 12.5,
        "criticality_level": CriticalityLevel.MEDIUM,
    },
    {
        "product_id": "PROD003",
        "name": "USB Cable",
        "current_stock": 25,
        "average_daily_sales": 12,
        "supplier_lead_time": 3,
        "minimum_reorder_quantity": 200,
        "cost_per_unit": 8.99,
        "criticality_level": CriticalityLevel.HIGH,
    },
    {
        "product_id": "PROD004",
        "name": "Bluetooth Speaker",
        "current_stock": 80,
        "average_daily_sales": 5,
        "supplier_lead_time": 10,
        "minimum_reorder_quantity": 30,
        "cost_per_unit": 45.0,
        "criticality_level": CriticalityLevel.MEDIUM,
    },
    {
        "product_id": "PROD005",
        "name": "Screen Protector",
        "current_stock": 15,
        "average_daily_sales": 20,
        "supplier_lead_time": 4,
        "minimum_reorder_quantity": 500,
        "cost_per_unit": 3.99,
        "criticality_level": CriticalityLevel.HIGH,
    },
    {
        "product_id": "PROD006",
        "name": "Power Bank",
        "current_stock": 200,
        "average_daily_sales": 3,
        "supplier_lead_time": 14,
        "minimum_reorder_quantity": 50,
        "cost_per_unit": 29.99,
        "criticality_level": CriticalityLevel.LOW,
    },
]


def generate_sales_history(
    average_sales: float,
    as_of: date,
    rng: random.Random,
    days: int = HISTORY_DAYS,
) -> list[SalesEntry]:
    """One entry per day for the ``days`` days ending at ``as_of``."""
    history = []
    for offset in range(days - 1, -1, -1):
        variation = (rng.random() - 0.5) * SALES_VARIATION
        quantity = max(0, round(average_sales * (1 + variation)))
        history.append(SalesEntry(date=as_of - timedelta(days=offset), quantity=quantity))
    return history


def sample_products(as_of: date, rng: random.Random | None = None) -> list[Product]:
    rng = rng or random.Random()
    now = datetime.combine(as_of, datetime.min.time())
    return [
        Product(
            **data,
            sales_history=generate_sales_history(data["average_daily_sales"], as_of, rng),
            last_updated=now,
        )
        for data in SAMPLE_PRODUCTS
    ]


def seed_database(
    store: ProductStore,
    as_of: date | None = None,
    rng: random.Random | None = None,
) -> int:
    """Replace every stored product with the samples. Returns the count inserted."""
    removed = store.delete_all()
    logger.info("Cleared %d existing products", removed)

    products = sample_products(as_of or date.today(), rng)
    for product in products:
        store.insert(product)
        logger.info(
            "  %s (%s): %d units, %s daily sales",
            product.name,
            product.product_id,
            product.current_stock,
            product.average_daily_sales,
        )

    logger.info("Inserted %d sample products", len(products))
    return len(products)
