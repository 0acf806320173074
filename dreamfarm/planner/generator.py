# dreamfarm/planner/generator.py
from __future__ import annotations

import logging
from typing import Optional

from ..config import DEFAULT_SETTINGS, PlannerSettings
from ..schemas.inputs import FarmGoal, FarmResources
from ..schemas.outputs import FarmPlan
from .allocation import allocate
from .catalog import FarmCatalog
from .eligibility import filter_eligible
from .ids import IdFactory, random_id_factory
from .projection import project
from .timeline import build_timeline

logger = logging.getLogger(__name__)

DEFAULT_PLAN_NAME = "My Dream Farm"


def generate_farm_plan(
    name: str,
    goal: FarmGoal,
    resources: FarmResources,
    catalog: FarmCatalog,
    id_factory: Optional[IdFactory] = None,
    settings: Optional[PlannerSettings] = None,
) -> FarmPlan:
    """
    Full pipeline:
      1) eligibility (water / labor)
      2) land and unit allocation
      3) financial projection
      4) merged task timeline

    Everything except the plan/task ids is deterministic for the same inputs.
    """
    goal.validate()
    resources.validate()

    settings = settings or DEFAULT_SETTINGS
    id_factory = id_factory or random_id_factory()

    eligible = filter_eligible(goal, resources, catalog)
    logger.debug(
        "Eligible: crops=%s livestock=%s",
        [c.crop_id for c in eligible.crops],
        [l.livestock_id for l in eligible.livestock],
    )

    allocation = allocate(goal, resources, eligible, settings=settings)
    projection = project(allocation, catalog, strict=settings.strict_catalog)
    tasks = build_timeline(
        allocation,
        catalog,
        id_factory,
        strict=settings.strict_catalog,
        weeks_per_month=settings.weeks_per_month,
    )

    plan = FarmPlan(
        plan_id=id_factory(),
        name=name,
        goal=goal,
        resources=resources,
        crops=allocation.crops,
        livestock=allocation.livestock,
        projected_revenue=projection.revenue,
        projected_costs=projection.costs,
        projected_profit=projection.profit,
        time_to_profit=projection.time_to_profit,
        tasks=tuple(tasks),
    )

    logger.info(
        "Plan %s '%s': %d crop(s), %d livestock, profit=%.2f, time_to_profit=%d months, %d tasks",
        plan.plan_id,
        plan.name,
        len(plan.crops),
        len(plan.livestock),
        plan.projected_profit,
        plan.time_to_profit,
        len(plan.tasks),
    )
    return plan
