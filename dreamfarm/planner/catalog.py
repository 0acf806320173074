# dreamfarm/planner/catalog.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Set, Tuple

from ..config import CATALOG_PATH
from ..schemas.outputs import FarmTask

Requirement = Literal["low", "medium", "high"]

REQUIREMENT_LEVELS = ("low", "medium", "high")


@dataclass(frozen=True)
class CropOption:
    crop_id: str
    name: str
    harvest_time: int  # months
    investment_per_acre: float
    revenue_per_acre: float
    water_requirement: Requirement
    labor_requirement: Requirement
    tasks: Tuple[FarmTask, ...] = ()
    description: str = ""
    image_url: str = ""

    @property
    def time_to_yield(self) -> int:
        return self.harvest_time

    def profit_score(self) -> float:
        return self.revenue_per_acre - self.investment_per_acre


@dataclass(frozen=True)
class LivestockOption:
    livestock_id: str
    name: str
    maturity_time: int  # months
    investment_per_unit: float
    revenue_per_unit: float
    units_per_acre: float
    water_requirement: Requirement
    labor_requirement: Requirement
    tasks: Tuple[FarmTask, ...] = ()
    description: str = ""
    image_url: str = ""

    @property
    def time_to_yield(self) -> int:
        return self.maturity_time

    def profit_score(self) -> float:
        # profit per acre-equivalent
        return (self.revenue_per_unit - self.investment_per_unit) * self.units_per_acre


@dataclass(frozen=True)
class FarmCatalog:
    """Read-only, ordered set of crop and livestock options."""
    crops: Tuple[CropOption, ...] = ()
    livestock: Tuple[LivestockOption, ...] = ()
    version: str = ""

    def find_crop(self, crop_id: str) -> Optional[CropOption]:
        return next((c for c in self.crops if c.crop_id == crop_id), None)

    def find_livestock(self, livestock_id: str) -> Optional[LivestockOption]:
        return next((l for l in self.livestock if l.livestock_id == livestock_id), None)


def _parse_requirement(value: Any, field_name: str, option_id: str) -> str:
    level = str(value if value is not None else "medium").strip().lower()
    if level not in REQUIREMENT_LEVELS:
        raise ValueError(f"{field_name} invalid for '{option_id}': expected low/medium/high, got '{value}'.")
    return level


def _parse_months(value: Any, field_name: str, option_id: str) -> int:
    try:
        months = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} invalid for '{option_id}': expected a whole number of months.") from None
    if months <= 0:
        raise ValueError(f"{field_name} invalid for '{option_id}': expected months > 0.")
    return months


def _parse_tasks(raw_tasks: Any) -> Tuple[FarmTask, ...]:
    tasks: List[FarmTask] = []
    for item in raw_tasks or []:
        if not isinstance(item, dict):
            continue
        task_id = str(item.get("task_id", "")).strip()
        title = str(item.get("title", "")).strip()
        if not task_id or not title:
            # incomplete task: skip
            continue
        tasks.append(
            FarmTask(
                task_id=task_id,
                title=title,
                description=str(item.get("description", "") or ""),
                timeframe=str(item.get("timeframe", "") or ""),
                inputs=tuple(str(x) for x in (item.get("inputs") or [])),
            )
        )
    return tuple(tasks)


def _parse_crop(item: Dict[str, Any]) -> Optional[CropOption]:
    crop_id = str(item.get("crop_id", "")).strip()
    name = str(item.get("name", "")).strip()
    if not crop_id or not name:
        return None

    return CropOption(
        crop_id=crop_id,
        name=name,
        harvest_time=_parse_months(item.get("harvest_time"), "harvest_time", crop_id),
        investment_per_acre=float(item.get("investment_per_acre", 0)),
        revenue_per_acre=float(item.get("revenue_per_acre", 0)),
        water_requirement=_parse_requirement(item.get("water_requirement"), "water_requirement", crop_id),  # type: ignore[arg-type]
        labor_requirement=_parse_requirement(item.get("labor_requirement"), "labor_requirement", crop_id),  # type: ignore[arg-type]
        tasks=_parse_tasks(item.get("tasks")),
        description=str(item.get("description", "") or ""),
        image_url=str(item.get("image_url", "") or ""),
    )


def _parse_livestock(item: Dict[str, Any]) -> Optional[LivestockOption]:
    livestock_id = str(item.get("livestock_id", "")).strip()
    name = str(item.get("name", "")).strip()
    if not livestock_id or not name:
        return None

    units_per_acre = float(item.get("units_per_acre", 0))
    if units_per_acre <= 0:
        raise ValueError(f"units_per_acre invalid for '{livestock_id}': expected > 0.")

    return LivestockOption(
        livestock_id=livestock_id,
        name=name,
        maturity_time=_parse_months(item.get("maturity_time"), "maturity_time", livestock_id),
        investment_per_unit=float(item.get("investment_per_unit", 0)),
        revenue_per_unit=float(item.get("revenue_per_unit", 0)),
        units_per_acre=units_per_acre,
        water_requirement=_parse_requirement(item.get("water_requirement"), "water_requirement", livestock_id),  # type: ignore[arg-type]
        labor_requirement=_parse_requirement(item.get("labor_requirement"), "labor_requirement", livestock_id),  # type: ignore[arg-type]
        tasks=_parse_tasks(item.get("tasks")),
        description=str(item.get("description", "") or ""),
        image_url=str(item.get("image_url", "") or ""),
    )


def catalog_from_dict(raw: Any, source: str = "<dict>") -> FarmCatalog:
    if not isinstance(raw, dict) or "crops" not in raw or "livestock" not in raw:
        raise ValueError("Invalid catalog: expected an object with 'crops' and 'livestock' keys.")

    crops: List[CropOption] = []
    for item in raw.get("crops") or []:
        if isinstance(item, dict):
            crop = _parse_crop(item)
            if crop is not None:
                crops.append(crop)

    livestock: List[LivestockOption] = []
    for item in raw.get("livestock") or []:
        if isinstance(item, dict):
            animal = _parse_livestock(item)
            if animal is not None:
                livestock.append(animal)

    if not crops and not livestock:
        raise ValueError(f"Catalog loaded, but without valid items: {source}")

    seen: Set[str] = set()
    for option_id in [c.crop_id for c in crops] + [l.livestock_id for l in livestock]:
        if option_id in seen:
            raise ValueError(f"Duplicate option id in catalog: '{option_id}' ({source})")
        seen.add(option_id)

    return FarmCatalog(
        crops=tuple(crops),
        livestock=tuple(livestock),
        version=str(raw.get("version", "") or ""),
    )


def load_catalog_from_json(path: Path = CATALOG_PATH) -> FarmCatalog:
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    return catalog_from_dict(raw, source=str(path))
