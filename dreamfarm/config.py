# dreamfarm/config.py
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# =============================================================================
# BASIC PATHS
# =============================================================================
BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "planner" / "data"

CATALOG_PATH = DATA_DIR / "catalog_v1.json"

# Optional planner overrides (JSON). Missing file -> defaults.
SETTINGS_JSON = DATA_DIR / "planner_settings.json"

PROJECT_NAME = "DreamFarm Planner"
PROJECT_VERSION = "0.1.0"

_SHARE_FIELDS = (
    "primary_crop_share",
    "livestock_share",
    "diversified_primary_share",
    "secondary_crop_share",
)

# every other field is a finite number; bool is not a number here
_INT_FIELDS = ("weeks_per_month",)
_BOOL_FIELDS = ("strict_catalog",)


# =============================================================================
# PLANNER SETTINGS
# =============================================================================

@dataclass(frozen=True)
class PlannerSettings:
    # land split when both crops and livestock are eligible
    primary_crop_share: float = 0.7
    livestock_share: float = 0.3

    # diversification (budget above threshold and more than one eligible crop)
    diversification_budget: float = 2000.0
    diversified_primary_share: float = 0.6
    secondary_crop_share: float = 0.1

    # timeline ordering: "Month n" compares as n * weeks_per_month weeks
    weeks_per_month: int = 4

    # unknown crop/livestock ids: raise (True) or skip with a warning (False)
    strict_catalog: bool = True

    def validate(self) -> None:
        for name in _SHARE_FIELDS:
            value = float(getattr(self, name))
            if not (0.0 <= value <= 1.0):
                raise ValueError(f"{name} invalid: must be between 0 and 1 (got {value}).")
        if self.primary_crop_share + self.livestock_share > 1.0 + 1e-9:
            raise ValueError("primary_crop_share + livestock_share must not exceed 1.")
        if self.diversified_primary_share + self.secondary_crop_share > self.primary_crop_share + 1e-9:
            raise ValueError("diversified shares must not exceed primary_crop_share.")
        if float(self.diversification_budget) < 0:
            raise ValueError("diversification_budget invalid: must be >= 0.")
        if int(self.weeks_per_month) <= 0:
            raise ValueError("weeks_per_month invalid: must be > 0.")


DEFAULT_SETTINGS = PlannerSettings()


def _check_types(raw: Dict[str, Any]) -> None:
    for name, value in raw.items():
        if name in _BOOL_FIELDS:
            ok = isinstance(value, bool)
            expected = "true/false"
        elif name in _INT_FIELDS:
            ok = isinstance(value, int) and not isinstance(value, bool)
            expected = "a whole number"
        else:
            ok = isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
            expected = "a finite number"
        if not ok:
            raise ValueError(f"{name} invalid: expected {expected} (got {value!r}).")


def settings_from_dict(raw: Dict[str, Any]) -> PlannerSettings:
    if not isinstance(raw, dict):
        raise ValueError("Invalid planner settings: expected a JSON object.")

    known = {f.name for f in fields(PlannerSettings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown planner settings: {', '.join(unknown)}")

    _check_types(raw)
    settings = replace(DEFAULT_SETTINGS, **raw)
    settings.validate()
    return settings


def load_settings(path: Optional[Path] = None) -> PlannerSettings:
    """
    Loads planner settings from the JSON file.
    A missing file falls back to the defaults; malformed content raises ValueError.
    """
    path = SETTINGS_JSON if path is None else Path(path)

    if not path.exists():
        logger.warning("Settings file %s not found. Using default planner settings.", path)
        return DEFAULT_SETTINGS

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in planner settings {path}: {e}") from e

    return settings_from_dict(raw)
