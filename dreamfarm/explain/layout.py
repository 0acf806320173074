# dreamfarm/explain/layout.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from ..planner.catalog import FarmCatalog
from ..schemas.outputs import FarmPlan

CROP_COLORS: Dict[str, str] = {
    "maize": "#F9D949",
    "tomatoes": "#E74C3C",
    "cabbage": "#7DCE82",
}
LIVESTOCK_COLORS: Dict[str, str] = {
    "broilers": "#F5B041",
    "layers": "#D35400",
    "rabbits": "#A1887F",
}
DEFAULT_CROP_COLOR = "#8BC34A"
DEFAULT_LIVESTOCK_COLOR = "#BCAAA4"


@dataclass(frozen=True)
class LayoutBlock:
    kind: str  # "crop" | "livestock"
    option_id: str
    name: str
    acres: float
    share_pct: float
    color: str
    units: int = 0


def farm_layout(plan: FarmPlan, catalog: FarmCatalog) -> List[LayoutBlock]:
    """
    Land blocks for the plan map. Livestock land = units / units_per_acre.
    Ids missing from the catalog show up as "Unknown ..." with 0 acres.
    """
    total = float(plan.goal.land_size)
    blocks: List[LayoutBlock] = []

    for item in plan.crops:
        crop = catalog.find_crop(item.crop_id)
        acres = float(item.allocation)
        blocks.append(
            LayoutBlock(
                kind="crop",
                option_id=item.crop_id,
                name=crop.name if crop else "Unknown Crop",
                acres=acres,
                share_pct=acres / total * 100.0,
                color=CROP_COLORS.get(item.crop_id, DEFAULT_CROP_COLOR),
            )
        )

    for item in plan.livestock:
        animal = catalog.find_livestock(item.livestock_id)
        acres = item.units / animal.units_per_acre if animal else 0.0
        blocks.append(
            LayoutBlock(
                kind="livestock",
                option_id=item.livestock_id,
                name=animal.name if animal else "Unknown Livestock",
                acres=acres,
                share_pct=acres / total * 100.0,
                color=LIVESTOCK_COLORS.get(item.livestock_id, DEFAULT_LIVESTOCK_COLOR),
                units=int(item.units),
            )
        )

    return blocks


def unused_acres(plan: FarmPlan, catalog: FarmCatalog) -> float:
    used = sum(b.acres for b in farm_layout(plan, catalog))
    return max(0.0, float(plan.goal.land_size) - used)
