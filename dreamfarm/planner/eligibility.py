# dreamfarm/planner/eligibility.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, TypeVar, Union

from ..schemas.inputs import FarmGoal, FarmResources
from .catalog import CropOption, FarmCatalog, LivestockOption

Option = TypeVar("Option", CropOption, LivestockOption)


@dataclass(frozen=True)
class EligibleOptions:
    crops: Tuple[CropOption, ...] = ()
    livestock: Tuple[LivestockOption, ...] = ()

    def is_empty(self) -> bool:
        return not self.crops and not self.livestock


def _water_ok(option: Union[CropOption, LivestockOption], water_source: str) -> bool:
    if water_source == "none":
        return option.water_requirement == "low"
    if water_source == "rain-fed":
        return option.water_requirement != "high"
    # borehole / river
    return True


def _labor_ok(option: Union[CropOption, LivestockOption], labor_type: str) -> bool:
    if labor_type == "none":
        return option.labor_requirement == "low"
    if labor_type == "family":
        return option.labor_requirement != "high"
    # hired / both
    return True


def filter_options(options: Sequence[Option], resources: FarmResources) -> Tuple[Option, ...]:
    """Keeps the options compatible with the stated water and labor, in input order."""
    return tuple(
        o for o in options
        if _water_ok(o, resources.water_source) and _labor_ok(o, resources.labor_type)
    )


def filter_eligible(goal: FarmGoal, resources: FarmResources, catalog: FarmCatalog) -> EligibleOptions:
    # goal is part of the contract; eligibility today depends only on resources
    return EligibleOptions(
        crops=filter_options(catalog.crops, resources),
        livestock=filter_options(catalog.livestock, resources),
    )
