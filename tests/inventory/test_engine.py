"""Tests for the reorder decision engine."""

from __future__ import annotations

import math

import pytest

from src.common.models import CriticalityLevel, Product
from src.inventory.engine import (
    BUFFER_DAYS,
    REASON_ADEQUATE,
    REASON_BELOW_THRESHOLD,
    REASON_URGENT,
    TARGET_DAYS,
    days_of_stock_remaining,
    needs_reorder,
    recommend,
    reorder_quantity,
    safety_stock_threshold,
    simulate,
)


class TestDaysOfStockRemaining:
    @pytest.mark.parametrize("stock", [0, 1, 1000])
    def test_zero_sales_never_runs_out(self, stock):
        assert days_of_stock_remaining(stock, 0) == math.inf

    def test_negative_sales_treated_as_zero_velocity(self):
        assert days_of_stock_remaining(50, -1) == math.inf

    def test_exact_division(self):
        assert days_of_stock_remaining(100, 10) == 10

    def test_floors_instead_of_rounding(self):
        assert days_of_stock_remaining(105, 10) == 10
        assert days_of_stock_remaining(119, 10) == 11

    def test_fractional_sales(self):
        assert days_of_stock_remaining(10, 3.3) == 3

    def test_negative_stock_passes_through(self):
        # Negative stock is an upstream data fault; the arithmetic is not clamped.
        assert days_of_stock_remaining(-10, 4) == -3


class TestSafetyStockThreshold:
    @pytest.mark.parametrize(
        "sales, lead",
        [(0, 0), (0, 10), (12, 3), (2.5, 7), (100, 0)],
    )
    def test_formula(self, sales, lead):
        assert safety_stock_threshold(sales, lead) == sales * (lead + 5)

    def test_buffer_is_five_days(self):
        assert BUFFER_DAYS == 5
        assert safety_stock_threshold(1, 0) == 5


class TestNeedsReorder:
    def test_below_threshold(self, make_product):
        # threshold = 10 * (7 + 5) = 120
        assert needs_reorder(make_product(current_stock=100)) is True

    def test_equal_to_threshold_reorders(self, make_product):
        assert needs_reorder(make_product(current_stock=120)) is True

    def test_above_threshold(self, make_product):
        assert needs_reorder(make_product(current_stock=121)) is False

    def test_zero_velocity_with_stock(self, make_product):
        assert needs_reorder(make_product(current_stock=5, average_daily_sales=0)) is False

    def test_zero_velocity_zero_stock(self, make_product):
        # 0 <= 0 threshold
        assert needs_reorder(make_product(current_stock=0, average_daily_sales=0)) is True

    def test_monotonic_in_stock(self, make_product):
        decisions = [
            needs_reorder(make_product(current_stock=stock))
            for stock in range(300, -1, -1)
        ]
        first_true = decisions.index(True)
        assert all(decisions[first_true:])


class TestReorderQuantity:
    def test_need_exceeds_minimum(self):
        assert reorder_quantity(25, 12, 200) == 695

    def test_minimum_wins_when_need_is_lower(self):
        # need = 60 - 50 = 10
        assert reorder_quantity(50, 1, 100) == 100

    def test_minimum_applies_when_need_is_zero(self):
        assert reorder_quantity(1000, 1, 30) == 30

    def test_no_minimum_and_no_need(self):
        assert reorder_quantity(1000, 1, 0) == 0

    def test_target_horizon_is_sixty_days(self):
        assert TARGET_DAYS == 60
        assert reorder_quantity(0, 2, 0) == 120

    @pytest.mark.parametrize("stock", [0, 10, 500, 5000])
    @pytest.mark.parametrize("minimum", [0, 1, 50, 1000])
    def test_never_below_minimum(self, stock, minimum):
        assert reorder_quantity(stock, 7.5, minimum) >= minimum


class TestRecommend:
    def test_idle_product_is_adequate(self, make_product):
        product = make_product(
            current_stock=1000,
            average_daily_sales=0,
            supplier_lead_time=7,
            minimum_reorder_quantity=10,
        )
        rec = recommend(product)
        assert rec.needs_reorder is False
        assert rec.days_of_stock_remaining == math.inf
        assert rec.reason == REASON_ADEQUATE
        assert rec.suggested_reorder_quantity == 0
        assert rec.estimated_cost == 0

    def test_urgent_usb_cable(self, usb_cable):
        rec = recommend(usb_cable)

        assert rec.product_id == "PROD003"
        assert rec.product_name == "USB Cable"
        assert rec.current_stock == 25
        assert rec.days_of_stock_remaining == 2
        assert rec.needs_reorder is True  # 25 <= 12 * (3 + 5) = 96
        assert rec.reason == REASON_URGENT
        assert rec.suggested_reorder_quantity == 695
        assert rec.estimated_cost == pytest.approx(6248.05)
        assert rec.criticality_level == CriticalityLevel.HIGH

    def test_below_threshold_but_not_urgent(self, make_product):
        # days = 100 / 10 = 10 > lead 7, threshold 120
        rec = recommend(make_product(current_stock=100))
        assert rec.needs_reorder is True
        assert rec.reason == REASON_BELOW_THRESHOLD
        assert rec.suggested_reorder_quantity == 500
        assert rec.estimated_cost == pytest.approx(1250.0)

    def test_days_equal_to_lead_time_is_urgent(self, make_product):
        rec = recommend(make_product(current_stock=70))
        assert rec.days_of_stock_remaining == 7
        assert rec.reason == REASON_URGENT

    def test_zero_stock_zero_velocity_orders_minimum(self, make_product):
        rec = recommend(
            make_product(current_stock=0, average_daily_sales=0, minimum_reorder_quantity=40)
        )
        assert rec.needs_reorder is True
        assert rec.suggested_reorder_quantity == 40
        assert rec.estimated_cost == pytest.approx(100.0)
        # Infinite runway is never within the lead time
        assert rec.reason == REASON_BELOW_THRESHOLD

    def test_idempotent(self, usb_cable):
        assert recommend(usb_cable) == recommend(usb_cable)

    def test_negative_cost_propagates(self, make_product):
        data = make_product(current_stock=0).model_dump()
        data["cost_per_unit"] = -1.0
        # model_construct skips the >= 0 validation a stored product would get
        product = Product.model_construct(**data)
        rec = recommend(product)
        assert rec.estimated_cost == pytest.approx(-600.0)

    def test_serializes_with_camel_case_names(self, usb_cable):
        data = recommend(usb_cable).to_dict()
        assert set(data) == {
            "productId",
            "productName",
            "currentStock",
            "daysOfStockRemaining",
            "needsReorder",
            "suggestedReorderQuantity",
            "estimatedCost",
            "criticalityLevel",
            "reason",
        }
        assert data["criticalityLevel"] == "high"

    def test_infinite_days_serialize_as_null(self, make_product):
        rec = recommend(make_product(average_daily_sales=0))
        assert rec.to_dict()["daysOfStockRemaining"] is None
        assert '"daysOfStockRemaining":null' in rec.model_dump_json(by_alias=True)


class TestSimulate:
    def test_matches_recommend_on_scaled_product(self, usb_cable):
        simulated = simulate(usb_cable, multiplier=2, duration_days=7)
        scaled = recommend(usb_cable.model_copy(update={"average_daily_sales": 24}))

        assert simulated.needs_reorder == scaled.needs_reorder
        assert simulated.suggested_reorder_quantity == scaled.suggested_reorder_quantity
        assert simulated.estimated_cost == pytest.approx(scaled.estimated_cost)
        assert simulated.days_of_stock_remaining == 1

    def test_reason_describes_the_spike(self, usb_cable):
        rec = simulate(usb_cable, multiplier=2, duration_days=7)
        assert rec.reason == "demand spike simulation: 2x normal sales for 7 days"

    def test_reason_keeps_fractional_multiplier(self, usb_cable):
        rec = simulate(usb_cable, multiplier=1.5, duration_days=14)
        assert rec.reason == "demand spike simulation: 1.5x normal sales for 14 days"

    def test_tiny_multiplier_renders_in_plain_notation(self, usb_cable):
        rec = simulate(usb_cable, multiplier=1e-05, duration_days=7)
        assert rec.reason == "demand spike simulation: 0.00001x normal sales for 7 days"

    def test_whole_float_multiplier_renders_without_decimal(self, usb_cable):
        rec = simulate(usb_cable, multiplier=3.0, duration_days=5)
        assert rec.reason.startswith("demand spike simulation: 3x ")

    def test_reason_overrides_adequate(self, make_product):
        rec = simulate(make_product(current_stock=10_000), multiplier=2, duration_days=3)
        assert rec.needs_reorder is False
        assert rec.reason == "demand spike simulation: 2x normal sales for 3 days"

    def test_spike_can_trigger_reorder(self, make_product):
        product = make_product(current_stock=200)  # threshold 120
        assert recommend(product).needs_reorder is False
        assert simulate(product, multiplier=2, duration_days=10).needs_reorder is True

    def test_duration_does_not_change_arithmetic(self, usb_cable):
        short = simulate(usb_cable, multiplier=2, duration_days=1)
        long = simulate(usb_cable, multiplier=2, duration_days=90)
        assert short.model_dump(exclude={"reason"}) == long.model_dump(exclude={"reason"})

    def test_original_product_untouched(self, usb_cable):
        before = usb_cable.model_dump()
        simulate(usb_cable, multiplier=4, duration_days=7)
        assert usb_cable.model_dump() == before
        assert usb_cable.average_daily_sales == 12
