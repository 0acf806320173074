from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal, Optional

WaterSource = Literal["rain-fed", "borehole", "river", "none"]
LaborType = Literal["family", "hired", "both", "none"]

WATER_SOURCES = ("rain-fed", "borehole", "river", "none")
LABOR_TYPES = ("family", "hired", "both", "none")


def _finite(value: Any) -> Optional[float]:
    """float(value), or None for bools, non-numbers, NaN and +/-inf."""
    if isinstance(value, bool):
        return None
    try:
        x = float(value)
    except (TypeError, ValueError):
        return None
    return x if math.isfinite(x) else None


@dataclass(frozen=True)
class FarmGoal:
    target_income: float
    timeframe: int  # months
    land_size: float  # acres

    def validate(self) -> None:
        income = _finite(self.target_income)
        if income is None or income <= 0:
            raise ValueError("target_income invalid: must be a finite number > 0.")
        months = _finite(self.timeframe)
        if months is None or months != int(months) or months <= 0:
            raise ValueError("timeframe invalid: must be a whole number of months > 0.")
        land = _finite(self.land_size)
        if land is None or land <= 0:
            raise ValueError("land_size invalid: must be a finite number of acres > 0.")


@dataclass(frozen=True)
class FarmResources:
    budget: float
    water_source: WaterSource = "rain-fed"
    labor_type: LaborType = "family"

    def validate(self) -> None:
        budget = _finite(self.budget)
        if budget is None or budget < 0:
            raise ValueError("budget invalid: must be a finite number >= 0.")
        if self.water_source not in WATER_SOURCES:
            raise ValueError(f"water_source invalid: expected one of {', '.join(WATER_SOURCES)}.")
        if self.labor_type not in LABOR_TYPES:
            raise ValueError(f"labor_type invalid: expected one of {', '.join(LABOR_TYPES)}.")
