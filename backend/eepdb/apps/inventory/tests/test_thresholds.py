from __future__ import annotations

import pytest

from eepdb.apps.inventory import thresholds
from eepdb.apps.inventory.models import StockStatusEnum


@pytest.mark.parametrize(
    "level, tier",
    [
        (0, StockStatusEnum.CRITICAL),
        (4, StockStatusEnum.CRITICAL),
        (5, StockStatusEnum.LOW),
        (14, StockStatusEnum.LOW),
        (15, StockStatusEnum.AVAILABLE),
        (500, StockStatusEnum.AVAILABLE),
    ],
)
def test_tier_boundaries(level, tier):
    assert thresholds.classify(level).tier == tier


def test_no_message_without_previous_level():
    assert thresholds.classify(2).message is None


def test_drop_into_low_fires_once():
    crossing = thresholds.classify(10, 20, part_name="Relay")
    assert crossing.tier == StockStatusEnum.LOW
    assert crossing.message == "Low stock alert for Relay! 10 units remaining."

    # Staying in the same tier is not a new crossing.
    assert thresholds.classify(9, 10, part_name="Relay").message is None


def test_drop_into_critical_fires_once():
    crossing = thresholds.classify(2, 10, part_name="Relay")
    assert crossing.tier == StockStatusEnum.CRITICAL
    assert crossing.message == "Critical stock level for Relay! Only 2 units left."

    assert thresholds.classify(1, 2, part_name="Relay").message is None


def test_drop_through_both_boundaries_reports_critical_only():
    result = thresholds.classify(3, 40, part_name="Relay")
    assert result.message.startswith("Critical stock level")


def test_rising_stock_is_silent():
    assert thresholds.classify(20, 2).message is None
    assert thresholds.classify(8, 3).message is None


def test_restock_recommendation_bands():
    urgent = thresholds.recommend_restock(3)
    assert urgent.priority == "high"
    assert urgent.suggested_quantity == 12

    plan = thresholds.recommend_restock(10)
    assert plan.action == "Plan Restocking"
    assert plan.suggested_quantity == 20

    assert thresholds.recommend_restock(20).priority == "low"
    assert thresholds.recommend_restock(30).priority == "none"
