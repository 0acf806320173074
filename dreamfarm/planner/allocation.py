# dreamfarm/planner/allocation.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, TypeVar

from ..config import DEFAULT_SETTINGS, PlannerSettings
from ..schemas.inputs import FarmGoal, FarmResources
from ..schemas.outputs import CropAllocation, LivestockAllocation
from .catalog import CropOption, LivestockOption
from .eligibility import EligibleOptions

logger = logging.getLogger(__name__)

Option = TypeVar("Option", CropOption, LivestockOption)


@dataclass(frozen=True)
class Allocation:
    crops: Tuple[CropAllocation, ...] = ()
    livestock: Tuple[LivestockAllocation, ...] = ()

    def crop_acres(self) -> float:
        return float(sum(c.allocation for c in self.crops))


def rank_by_profit(options: Sequence[Option]) -> List[Option]:
    """
    Best profit score first. sorted() is stable, so ties keep catalog order.
    """
    return sorted(options, key=lambda o: o.profit_score(), reverse=True)


def _livestock_units(land_acres: float, option: LivestockOption) -> int:
    return int(math.floor(land_acres * option.units_per_acre))


def allocate(
    goal: FarmGoal,
    resources: FarmResources,
    eligible: EligibleOptions,
    settings: Optional[PlannerSettings] = None,
) -> Allocation:
    """
    Greedy split of the land:
      - crops + livestock: best crop gets primary_crop_share of the land,
        best livestock gets the units that fit in livestock_share
      - crops only: best crop gets all the land
      - livestock only: best livestock gets the units that fit in all the land
      - diversification: budget > diversification_budget and 2+ eligible crops
        -> primary crop drops to diversified_primary_share and the next best
        crop gets secondary_crop_share
    """
    settings = settings or DEFAULT_SETTINGS
    land = float(goal.land_size)

    crops = rank_by_profit(eligible.crops)
    livestock = rank_by_profit(eligible.livestock)

    crop_alloc: List[CropAllocation] = []
    livestock_alloc: List[LivestockAllocation] = []

    if crops and livestock:
        crop_alloc.append(CropAllocation(crops[0].crop_id, land * settings.primary_crop_share))
        best = livestock[0]
        livestock_alloc.append(
            LivestockAllocation(best.livestock_id, _livestock_units(land * settings.livestock_share, best))
        )
    elif crops:
        crop_alloc.append(CropAllocation(crops[0].crop_id, land))
    elif livestock:
        best = livestock[0]
        livestock_alloc.append(LivestockAllocation(best.livestock_id, _livestock_units(land, best)))

    if float(resources.budget) > settings.diversification_budget and len(crops) > 1:
        primary_id = crop_alloc[0].crop_id
        second = next((c for c in crops if c.crop_id != primary_id), None)
        if second is not None:
            crop_alloc[0] = CropAllocation(primary_id, land * settings.diversified_primary_share)
            crop_alloc.append(CropAllocation(second.crop_id, land * settings.secondary_crop_share))
            logger.debug("Diversified crops: %s + %s", primary_id, second.crop_id)

    return Allocation(crops=tuple(crop_alloc), livestock=tuple(livestock_alloc))
