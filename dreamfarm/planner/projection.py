# dreamfarm/planner/projection.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..schemas.outputs import FarmPlan, Projection
from .allocation import Allocation
from .catalog import FarmCatalog
from .errors import CatalogInconsistencyError

logger = logging.getLogger(__name__)

BEST_CASE_FACTOR = 1.2
WORST_CASE_FACTOR = 0.7


def round_half_up(x: float) -> int:
    """Nearest integer with .5 rounded up: 62.5 -> 63, -2.5 -> -2."""
    return int(math.floor(x + 0.5))


def _unknown_id(kind: str, option_id: str, strict: bool) -> None:
    if strict:
        raise CatalogInconsistencyError(kind, option_id)
    logger.warning("Skipping unknown %s id '%s' (not in catalog).", kind, option_id)


def project(allocation: Allocation, catalog: FarmCatalog, strict: bool = True) -> Projection:
    revenue = 0.0
    costs = 0.0
    max_time = 0

    for item in allocation.crops:
        crop = catalog.find_crop(item.crop_id)
        if crop is None:
            _unknown_id("crop", item.crop_id, strict)
            continue
        revenue += crop.revenue_per_acre * item.allocation
        costs += crop.investment_per_acre * item.allocation
        max_time = max(max_time, crop.time_to_yield)

    for item in allocation.livestock:
        animal = catalog.find_livestock(item.livestock_id)
        if animal is None:
            _unknown_id("livestock", item.livestock_id, strict)
            continue
        revenue += animal.revenue_per_unit * item.units
        costs += animal.investment_per_unit * item.units
        max_time = max(max_time, animal.time_to_yield)

    return Projection(
        revenue=revenue,
        costs=costs,
        profit=revenue - costs,
        time_to_profit=max_time,
    )


# =============================================================================
# Financial summary (best/worst case, monthly profit, ROI, goal tracking)
# =============================================================================

@dataclass(frozen=True)
class FinancialSummary:
    revenue: float
    costs: float
    profit: float
    time_to_profit: int
    best_case_profit: int
    worst_case_profit: int
    monthly_profit: int
    roi_pct: Optional[int]
    goal_progress_pct: float
    meets_target_income: bool
    meets_timeframe: bool


def summarize_projection(plan: FarmPlan) -> FinancialSummary:
    profit = float(plan.projected_profit)
    costs = float(plan.projected_costs)
    months = int(plan.time_to_profit)
    target = float(plan.goal.target_income)

    monthly = round_half_up(profit / months) if months > 0 else 0
    roi = round_half_up(profit / costs * 100) if costs > 0 else None

    return FinancialSummary(
        revenue=float(plan.projected_revenue),
        costs=costs,
        profit=profit,
        time_to_profit=months,
        best_case_profit=round_half_up(profit * BEST_CASE_FACTOR),
        worst_case_profit=round_half_up(max(0.0, profit * WORST_CASE_FACTOR)),
        monthly_profit=monthly,
        roi_pct=roi,
        goal_progress_pct=profit / target * 100.0,
        meets_target_income=profit >= target,
        meets_timeframe=months <= int(plan.goal.timeframe),
    )
