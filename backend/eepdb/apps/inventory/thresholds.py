"""
Stock tiers and the alerts raised when a part drops into a lower tier.

Alerts are edge-triggered: they fire on the change that crosses a boundary
downwards and stay silent while the part remains in the same tier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import StockStatusEnum

CRITICAL_BELOW = 5
LOW_BELOW = 15
MONITOR_BELOW = 30

RESTOCK_TARGET_CRITICAL = 15
RESTOCK_TARGET_LOW = 30


@dataclass(frozen=True)
class Classification:
    tier: StockStatusEnum
    message: Optional[str] = None


@dataclass(frozen=True)
class RestockRecommendation:
    action: str
    recommendation: str
    priority: str
    suggested_quantity: int = 0


def tier_for(stock_level: int) -> StockStatusEnum:
    if stock_level < CRITICAL_BELOW:
        return StockStatusEnum.CRITICAL
    if stock_level < LOW_BELOW:
        return StockStatusEnum.LOW
    return StockStatusEnum.AVAILABLE


def classify(
    stock_level: int,
    previous_level: Optional[int] = None,
    *,
    part_name: str = "part",
) -> Classification:
    tier = tier_for(stock_level)
    if previous_level is None:
        return Classification(tier=tier)

    # A drop through both boundaries reports only the critical one.
    if previous_level >= CRITICAL_BELOW > stock_level:
        return Classification(
            tier=tier,
            message=f"Critical stock level for {part_name}! Only {stock_level} units left.",
        )
    if previous_level >= LOW_BELOW > stock_level:
        return Classification(
            tier=tier,
            message=f"Low stock alert for {part_name}! {stock_level} units remaining.",
        )
    return Classification(tier=tier)


def recommend_restock(stock_level: int) -> RestockRecommendation:
    if stock_level < CRITICAL_BELOW:
        shortfall = RESTOCK_TARGET_CRITICAL - stock_level
        return RestockRecommendation(
            action="URGENT RESTOCK NEEDED",
            recommendation=(
                f"Order immediately. Minimum safe stock: {RESTOCK_TARGET_CRITICAL} units. "
                f"Need to order at least {shortfall} units."
            ),
            priority="high",
            suggested_quantity=shortfall,
        )
    if stock_level < LOW_BELOW:
        shortfall = RESTOCK_TARGET_LOW - stock_level
        return RestockRecommendation(
            action="Plan Restocking",
            recommendation=(
                f"Consider ordering soon. Recommended stock: {RESTOCK_TARGET_LOW} units. "
                f"Suggested order: {shortfall} units."
            ),
            priority="medium",
            suggested_quantity=shortfall,
        )
    if stock_level < MONITOR_BELOW:
        return RestockRecommendation(
            action="Monitor Stock",
            recommendation="Stock level is acceptable. Continue monitoring usage patterns.",
            priority="low",
        )
    return RestockRecommendation(
        action="Stock Level Optimal",
        recommendation="No immediate action needed. Maintain current inventory levels.",
        priority="none",
    )
