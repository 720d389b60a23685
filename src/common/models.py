"""Shared Pydantic data models for the warehouse reorder engine.

These models define the data contracts between the product store, the
reorder engine and the report consumers. All modules import from here.

Python attributes are snake_case; serialized field names are the camelCase
names the dashboard and CSV consumers already expect (``productId``,
``currentStock``, ...). Both spellings are accepted on input.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

_CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}


# === Enums ===

class CriticalityLevel(str, Enum):
    """Fixed business classification of a product's importance."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort weight: high outranks medium outranks low."""
        return _CRITICALITY_RANK[self]


_CRITICALITY_RANK = {
    CriticalityLevel.HIGH: 3,
    CriticalityLevel.MEDIUM: 2,
    CriticalityLevel.LOW: 1,
}


# === Stored entities ===

class SalesEntry(BaseModel):
    """Units sold on one calendar day."""
    date: date
    quantity: int = Field(ge=0)

    model_config = {**_CAMEL_CONFIG, "frozen": True}


class Product(BaseModel):
    """Snapshot of a product's stock state as loaded from the store."""
    product_id: str = Field(min_length=1)
    name: str
    current_stock: int = Field(ge=0, description="Units on hand")
    average_daily_sales: float = Field(ge=0, description="Trailing 30-day mean units/day")
    supplier_lead_time: int = Field(ge=0, description="Days from order to delivery")
    minimum_reorder_quantity: int = Field(ge=0, description="Supplier order floor")
    cost_per_unit: float = Field(ge=0)
    criticality_level: CriticalityLevel
    sales_history: list[SalesEntry] = Field(default_factory=list)
    last_updated: datetime | None = None

    model_config = {**_CAMEL_CONFIG, "frozen": True}

    @field_validator("sales_history")
    @classmethod
    def one_entry_per_day(cls, history: list[SalesEntry]) -> list[SalesEntry]:
        ordered = sorted(history, key=lambda entry: entry.date)
        for previous, current in zip(ordered, ordered[1:]):
            if previous.date == current.date:
                raise ValueError(f"duplicate sales history entry for {current.date}")
        return ordered


# === Engine output ===

class ReorderRecommendation(BaseModel):
    """Reorder decision for one product. Computed on demand, never stored."""
    product_id: str
    product_name: str
    current_stock: int
    days_of_stock_remaining: int | float = Field(
        description="Whole days of cover; +inf when nothing sells"
    )
    needs_reorder: bool
    suggested_reorder_quantity: float = 0
    estimated_cost: float = 0
    criticality_level: CriticalityLevel
    reason: str

    model_config = _CAMEL_CONFIG

    @field_serializer("days_of_stock_remaining")
    def serialize_days(self, value: int | float, info):
        # JSON has no infinity; consumers read null as "never runs out".
        if info.mode_is_json() and isinstance(value, float) and math.isinf(value):
            return None
        return value

    @property
    def is_urgent(self) -> bool:
        """Reorder needed and at most URGENT_DAYS of cover left."""
        return self.needs_reorder and self.days_of_stock_remaining <= URGENT_DAYS

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


URGENT_DAYS = 3


# === Report ===

class ReportSummary(BaseModel):
    """Dashboard summary card figures for a reorder report."""
    total_products: int
    products_needing_reorder: int
    total_estimated_cost: float = Field(description="Rounded to 2 decimal places")
    urgent_products: int

    model_config = _CAMEL_CONFIG


class ReorderReport(BaseModel):
    """Sorted recommendations for every product plus their summary."""
    recommendations: list[ReorderRecommendation]
    summary: ReportSummary
    generated_at: datetime

    model_config = _CAMEL_CONFIG

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
