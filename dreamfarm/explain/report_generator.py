# dreamfarm/explain/report_generator.py
from __future__ import annotations

import math
from datetime import datetime
from typing import Any, List

from ..planner.catalog import FarmCatalog
from ..planner.projection import round_half_up, summarize_projection
from ..planner.timeline import group_by_timeframe
from ..schemas.outputs import FarmPlan, FarmTask
from .layout import farm_layout, unused_acres

NEXT_STEPS = (
    "Purchase inputs for your first week's tasks",
    "Follow the task timeline to stay on schedule",
    "Track your progress against the projections",
    "Adjust your plan as needed based on real-world results",
)


# =============================================================================
# Helpers
# =============================================================================

def _now_str() -> str:
    return datetime.now().strftime("%d/%m/%Y %H:%M")


def format_currency(amount: Any) -> str:
    """$1,234 style, no cents. Negative values as -$1,234."""
    try:
        x = float(amount)
    except (TypeError, ValueError):
        return "N/A"
    if not math.isfinite(x):
        return "N/A"
    n = round_half_up(x)
    sign = "-" if n < 0 else ""
    return f"{sign}${abs(n):,}"


def _fmt(v: Any, digits: int = 1) -> str:
    try:
        x = float(v)
        if x != x:
            return "N/A"
        return f"{x:.{digits}f}"
    except (TypeError, ValueError):
        return "N/A"


def _months(n: int) -> str:
    return f"{n} month" if n == 1 else f"{n} months"


def _allocation_table(plan: FarmPlan, catalog: FarmCatalog) -> str:
    blocks = farm_layout(plan, catalog)
    if not blocks:
        return "no suitable crops or livestock for these resources"

    header = "Option                  | Allocation         | Land (%) | Yield in"
    sep = "-" * len(header)
    rows: List[str] = []
    for b in blocks:
        if b.kind == "crop":
            option = catalog.find_crop(b.option_id)
            amount = f"{_fmt(b.acres, 2)} acres"
        else:
            option = catalog.find_livestock(b.option_id)
            amount = f"{b.units:,} units"
        months = _months(option.time_to_yield) if option else "N/A"
        rows.append(f"{b.name[:23]:<23} | {amount:<18} | {_fmt(b.share_pct, 0):>8} | {months}")

    free = unused_acres(plan, catalog)
    if free > 1e-9:
        rows.append(f"{'(unallocated)':<23} | {_fmt(free, 2) + ' acres':<18} |")

    return "\n".join([header, sep] + rows)


def _task_line(task: FarmTask) -> str:
    line = f"  - {task.title}"
    if task.inputs:
        line += f" (inputs: {', '.join(task.inputs)})"
    return line


def _timeline_section(plan: FarmPlan, weeks_per_month: int = 4) -> List[str]:
    grouped = group_by_timeframe(plan.tasks, weeks_per_month)
    lines: List[str] = []
    for section, title in (("week", "WEEKLY TASKS"), ("month", "MONTHLY TASKS")):
        lines.append(title)
        if not grouped[section]:
            lines.append("  no tasks")
        for timeframe, tasks in grouped[section].items():
            lines.append(f"{timeframe}")
            lines.extend(_task_line(t) for t in tasks)
        lines.append("")
    other = [t for t in plan.tasks if not t.timeframe.startswith(("Week", "Month"))]
    if other:
        lines.append("ONGOING / FLEXIBLE")
        for t in other:
            lines.append(f"{t.timeframe}")
            lines.append(_task_line(t))
        lines.append("")
    return lines


# =============================================================================
# Report
# =============================================================================

def generate_report(
    project_name: str,
    project_version: str,
    plan: FarmPlan,
    catalog: FarmCatalog,
    quote: str = "",
    weeks_per_month: int = 4,
) -> str:
    goal = plan.goal
    res = plan.resources
    summary = summarize_projection(plan)

    lines: List[str] = []
    lines.append(f"{project_name} (v{project_version}) — {_now_str()}")
    lines.append(f"Plan: {plan.name} [{plan.plan_id}]")
    if quote:
        lines.append(f'"{quote}"')
    lines.append("")
    lines.append(
        f"Goal: {format_currency(goal.target_income)} in {_months(int(goal.timeframe))} "
        f"on {_fmt(goal.land_size, 2)} acres"
    )
    lines.append(
        f"Resources: budget={format_currency(res.budget)} | water={res.water_source} | labor={res.labor_type}"
    )
    lines.append("")
    lines.append("ALLOCATION")
    lines.append(_allocation_table(plan, catalog))
    lines.append("")
    lines.append("FINANCIAL PROJECTION")
    lines.append(f"Revenue:        {format_currency(summary.revenue)}")
    lines.append(f"Costs:          {format_currency(summary.costs)}")
    lines.append(f"Profit:         {format_currency(summary.profit)}")
    lines.append(
        f"Range:          {format_currency(summary.worst_case_profit)} (worst) .. "
        f"{format_currency(summary.best_case_profit)} (best)"
    )
    lines.append(f"Time to profit: {_months(summary.time_to_profit)}")
    lines.append(f"Monthly profit: {format_currency(summary.monthly_profit)}")
    lines.append(f"ROI:            {str(summary.roi_pct) + '%' if summary.roi_pct is not None else 'N/A'}")
    lines.append(
        f"Target income:  {_fmt(summary.goal_progress_pct, 0)}% of goal"
        f"{' (met)' if summary.meets_target_income else ''}"
        f"{'' if summary.meets_timeframe else ' | first returns arrive after the goal timeframe'}"
    )
    lines.append("")
    lines.append("TASK TIMELINE")
    lines.extend(_timeline_section(plan, weeks_per_month))
    lines.append("NEXT STEPS")
    lines.append(f"1. Secure your land and initial budget of {format_currency(plan.projected_costs)}")
    for i, step in enumerate(NEXT_STEPS, start=2):
        lines.append(f"{i}. {step}")

    return "\n".join(lines)
