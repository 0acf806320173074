# dreamfarm/planner/timeline.py
from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Dict, Iterable, List, Sequence, Tuple, Union

import pandas as pd

from ..schemas.outputs import FarmTask
from .allocation import Allocation
from .catalog import CropOption, FarmCatalog, LivestockOption
from .errors import CatalogInconsistencyError
from .ids import IdFactory

logger = logging.getLogger(__name__)

_FIRST_INT = re.compile(r"\d+")

TIMELINE_COLUMNS = ["timeframe", "sort_key", "title", "description", "inputs"]


def timeframe_key(timeframe: str, weeks_per_month: int = 4) -> int:
    """
    "Week 4-5" -> 4, "Month 3" -> 12, "Various weeks" -> 0.
    Uses the first integer in the label; Month labels count in weeks.
    """
    match = _FIRST_INT.search(timeframe or "")
    n = int(match.group(0)) if match else 0
    if (timeframe or "").startswith("Month"):
        return n * weeks_per_month
    return n


def _included_options(
    allocation: Allocation,
    catalog: FarmCatalog,
    strict: bool,
) -> List[Union[CropOption, LivestockOption]]:
    out: List[Union[CropOption, LivestockOption]] = []
    for item in allocation.crops:
        crop = catalog.find_crop(item.crop_id)
        if crop is None:
            if strict:
                raise CatalogInconsistencyError("crop", item.crop_id)
            logger.warning("Skipping tasks for unknown crop id '%s'.", item.crop_id)
            continue
        out.append(crop)
    for item in allocation.livestock:
        animal = catalog.find_livestock(item.livestock_id)
        if animal is None:
            if strict:
                raise CatalogInconsistencyError("livestock", item.livestock_id)
            logger.warning("Skipping tasks for unknown livestock id '%s'.", item.livestock_id)
            continue
        out.append(animal)
    return out


def instantiate_tasks(option: Union[CropOption, LivestockOption], id_factory: IdFactory) -> List[FarmTask]:
    return [
        replace(
            task,
            task_id=f"{task.task_id}-{id_factory()}",
            title=f"[{option.name}] {task.title}",
        )
        for task in option.tasks
    ]


def build_timeline(
    allocation: Allocation,
    catalog: FarmCatalog,
    id_factory: IdFactory,
    strict: bool = True,
    weeks_per_month: int = 4,
) -> List[FarmTask]:
    """
    Copies the task templates of every allocated option (crops first, then
    livestock) and sorts them by timeframe. Equal keys keep insertion order.
    """
    tasks: List[FarmTask] = []
    for option in _included_options(allocation, catalog, strict):
        tasks.extend(instantiate_tasks(option, id_factory))

    return sorted(tasks, key=lambda t: timeframe_key(t.timeframe, weeks_per_month))


# =============================================================================
# Views
# =============================================================================

def group_by_timeframe(
    tasks: Iterable[FarmTask],
    weeks_per_month: int = 4,
) -> Dict[str, Dict[str, List[FarmTask]]]:
    """
    {"week": {"Week 1": [...], ...}, "month": {"Month 3": [...], ...}}
    Labels that start with neither "Week" nor "Month" are left out.
    """
    grouped: Dict[str, List[FarmTask]] = {}
    for task in tasks:
        grouped.setdefault(task.timeframe, []).append(task)

    labels = sorted(grouped, key=lambda tf: timeframe_key(tf, weeks_per_month))

    return {
        "week": {tf: grouped[tf] for tf in labels if tf.startswith("Week")},
        "month": {tf: grouped[tf] for tf in labels if tf.startswith("Month")},
    }


def timeline_frame(tasks: Sequence[FarmTask], weeks_per_month: int = 4) -> pd.DataFrame:
    rows: List[Tuple[str, int, str, str, str]] = [
        (
            t.timeframe,
            timeframe_key(t.timeframe, weeks_per_month),
            t.title,
            t.description,
            ", ".join(t.inputs),
        )
        for t in tasks
    ]
    return pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
