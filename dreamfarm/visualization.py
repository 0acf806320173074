# dreamfarm/visualization.py

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .explain.layout import farm_layout, unused_acres
from .planner.catalog import FarmCatalog
from .planner.projection import summarize_projection
from .schemas.outputs import FarmPlan


def _finish(fig: Figure, show: bool, save_path: str | None) -> Figure:
    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, bbox_inches="tight")

    if show:
        plt.show()

    # release the pyplot reference; the caller keeps the Figure
    plt.close(fig)
    return fig


def plot_land_use(
    plan: FarmPlan,
    catalog: FarmCatalog,
    show: bool = True,
    save_path: str | None = None,
) -> Figure:
    """
    Horizontal stacked bar with the share of land per crop / livestock block.
    """
    blocks = farm_layout(plan, catalog)
    free = unused_acres(plan, catalog)

    fig, ax = plt.subplots(figsize=(10, 2.5))
    ax.set_title(f"Farm layout - {plan.name} ({plan.goal.land_size:g} acres)")

    left = 0.0
    for b in blocks:
        ax.barh(0, b.share_pct, left=left, color=b.color, edgecolor="white", label=f"{b.name} ({b.acres:.2f} ac)")
        left += b.share_pct

    if free > 1e-9:
        free_pct = free / float(plan.goal.land_size) * 100.0
        ax.barh(0, free_pct, left=left, color="lightgray", edgecolor="white", label=f"Unallocated ({free:.2f} ac)")

    ax.set_xlim(0, 100)
    ax.set_xlabel("Land (%)")
    ax.set_yticks([])
    if blocks or free > 1e-9:
        ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.45), ncol=3, frameon=False)

    return _finish(fig, show, save_path)


def plot_financials(
    plan: FarmPlan,
    show: bool = True,
    save_path: str | None = None,
) -> Figure:
    """
    Revenue / costs / profit bars plus the worst..best profit range and the income target.
    """
    summary = summarize_projection(plan)

    labels = ["Revenue", "Costs", "Profit"]
    values = [summary.revenue, summary.costs, summary.profit]
    colors = ["seagreen", "indianred", "steelblue" if summary.profit >= 0 else "firebrick"]

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.set_title(f"Financial projection - {plan.name}")
    ax.bar(labels, values, color=colors)

    # profit range (worst..best); the range collapses when profit is negative
    low = max(0.0, summary.profit - summary.worst_case_profit)
    high = max(0.0, summary.best_case_profit - summary.profit)
    ax.errorbar(
        [2],
        [summary.profit],
        yerr=[[low], [high]],
        fmt="none",
        ecolor="black",
        capsize=8,
        label="Profit range (worst..best)",
    )
    ax.axhline(float(plan.goal.target_income), color="orange", linestyle="--", label="Target income")
    ax.axhline(0, color="gray", linestyle=":", linewidth=1)

    ax.set_ylabel("USD")
    ax.legend(loc="upper right")

    return _finish(fig, show, save_path)
