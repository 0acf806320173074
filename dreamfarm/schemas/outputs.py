from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .inputs import FarmGoal, FarmResources


@dataclass(frozen=True)
class FarmTask:
    task_id: str
    title: str
    description: str
    timeframe: str  # "Week 4-5", "Month 3", ...
    inputs: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.task_id,
            "title": self.title,
            "description": self.description,
            "timeframe": self.timeframe,
            "inputs": list(self.inputs),
        }


@dataclass(frozen=True)
class CropAllocation:
    crop_id: str
    allocation: float  # acres


@dataclass(frozen=True)
class LivestockAllocation:
    livestock_id: str
    units: int


@dataclass(frozen=True)
class Projection:
    revenue: float
    costs: float
    profit: float
    time_to_profit: int  # months


@dataclass(frozen=True)
class FarmPlan:
    plan_id: str
    name: str
    goal: FarmGoal
    resources: FarmResources
    crops: Tuple[CropAllocation, ...] = ()
    livestock: Tuple[LivestockAllocation, ...] = ()
    projected_revenue: float = 0.0
    projected_costs: float = 0.0
    projected_profit: float = 0.0
    time_to_profit: int = 0
    tasks: Tuple[FarmTask, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.plan_id,
            "name": self.name,
            "goal": {
                "targetIncome": self.goal.target_income,
                "timeframe": self.goal.timeframe,
                "landSize": self.goal.land_size,
            },
            "resources": {
                "budget": self.resources.budget,
                "waterSource": self.resources.water_source,
                "laborType": self.resources.labor_type,
            },
            "crops": [
                {"cropId": c.crop_id, "allocation": c.allocation}
                for c in self.crops
            ],
            "livestock": [
                {"livestockId": l.livestock_id, "units": l.units}
                for l in self.livestock
            ],
            "projectedRevenue": self.projected_revenue,
            "projectedCosts": self.projected_costs,
            "projectedProfit": self.projected_profit,
            "timeToProfit": self.time_to_profit,
            "tasks": [t.to_dict() for t in self.tasks],
        }


@dataclass(frozen=True)
class FarmScenario:
    """
    Set of alternative plans for the same farm; one of them may be selected.
    Every change returns a new scenario.
    """
    scenario_id: str
    name: str
    plans: Tuple[FarmPlan, ...] = field(default_factory=tuple)
    selected_plan_id: Optional[str] = None

    def with_plan(self, plan: FarmPlan) -> "FarmScenario":
        return replace(self, plans=self.plans + (plan,))

    def select(self, plan_id: str) -> "FarmScenario":
        if not any(p.plan_id == plan_id for p in self.plans):
            raise KeyError(f"Plan not found in scenario '{self.scenario_id}': {plan_id}")
        return replace(self, selected_plan_id=plan_id)

    def selected_plan(self) -> Optional[FarmPlan]:
        if self.selected_plan_id is None:
            return None
        return next((p for p in self.plans if p.plan_id == self.selected_plan_id), None)

    def to_dict(self) -> Dict[str, Any]:
        plans: List[Dict[str, Any]] = [p.to_dict() for p in self.plans]
        out: Dict[str, Any] = {"id": self.scenario_id, "name": self.name, "plans": plans}
        if self.selected_plan_id is not None:
            out["selectedPlanId"] = self.selected_plan_id
        return out
