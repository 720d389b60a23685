"""Shared test fixtures for the warehouse reorder engine."""

import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.database import ProductStore, init_db
from src.common.models import Product, SalesEntry


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def temp_db(tmp_path) -> Path:
    """Provide a path to a temporary SQLite database with the schema created."""
    db_file = tmp_path / "test_warehouse.db"
    init_db(db_file)
    return db_file


@pytest.fixture
def store(temp_db) -> ProductStore:
    return ProductStore(temp_db)


@pytest.fixture
def today() -> date:
    return date(2026, 2, 7)


@pytest.fixture
def usb_cable_data() -> dict:
    """The seeded USB Cable product: urgent, reorder floor below need."""
    return {
        "product_id": "PROD003",
        "name": "USB Cable",
        "current_stock": 25,
        "average_daily_sales": 12,
        "supplier_lead_time": 3,
        "minimum_reorder_quantity": 200,
        "cost_per_unit": 8.99,
        "criticality_level": "high",
    }


@pytest.fixture
def usb_cable(usb_cable_data) -> Product:
    return Product(**usb_cable_data)


@pytest.fixture
def make_product():
    """Factory for products with sensible defaults and keyword overrides."""

    def _make(**overrides) -> Product:
        data = {
            "product_id": "SKU-1",
            "name": "Test Widget",
            "current_stock": 100,
            "average_daily_sales": 10,
            "supplier_lead_time": 7,
            "minimum_reorder_quantity": 10,
            "cost_per_unit": 2.5,
            "criticality_level": "medium",
        }
        data.update(overrides)
        return Product(**data)

    return _make


@pytest.fixture
def daily_history(today):
    """Factory for one entry per day over the ``days`` days ending today."""

    def _history(quantity: int, days: int = 30) -> list[SalesEntry]:
        return [
            SalesEntry(date=today - timedelta(days=offset), quantity=quantity)
            for offset in range(days - 1, -1, -1)
        ]

    return _history
