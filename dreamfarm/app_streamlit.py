# dreamfarm/app_streamlit.py

from __future__ import annotations

import json
import math
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import pandas as pd
import streamlit as st

# -------------------------------------------------------------------------
# Path setup so this runs with:
#   streamlit run dreamfarm/app_streamlit.py
# -------------------------------------------------------------------------
THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = THIS_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dreamfarm.config import PROJECT_NAME, PROJECT_VERSION, load_settings
from dreamfarm.explain.layout import farm_layout
from dreamfarm.explain.quotes import random_quote
from dreamfarm.explain.report_generator import format_currency
from dreamfarm.planner.catalog import FarmCatalog, load_catalog_from_json
from dreamfarm.planner.generator import DEFAULT_PLAN_NAME, generate_farm_plan
from dreamfarm.planner.projection import summarize_projection
from dreamfarm.planner.timeline import group_by_timeframe, timeline_frame
from dreamfarm.schemas.inputs import LABOR_TYPES, WATER_SOURCES, FarmGoal, FarmResources
from dreamfarm.schemas.outputs import FarmPlan
from dreamfarm.visualization import plot_financials

STEPS = ("Goals", "Resources", "Your Plan")

TIMEFRAME_CHOICES = (3, 6, 12, 24, 36)

WATER_LABELS = {
    "rain-fed": "Rain-fed (seasonal rainfall)",
    "borehole": "Borehole / well",
    "river": "River or stream nearby",
    "none": "No reliable water source",
}
LABOR_LABELS = {
    "family": "Family labor",
    "hired": "Hired workers",
    "both": "Family and hired",
    "none": "Just me, little time",
}


# =============================================================================
# FORM PARSING (pure, no Streamlit calls)
# =============================================================================

def _to_number(raw: Any) -> Optional[float]:
    if raw is None:
        return None
    text = str(raw).strip().replace(",", "")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_goal_form(
    target_income: Any,
    timeframe: Any,
    land_size: Any,
) -> Tuple[Optional[FarmGoal], Dict[str, str]]:
    errors: Dict[str, str] = {}

    income = _to_number(target_income)
    if income is None or income <= 0:
        errors["target_income"] = "Please enter a valid target income"

    months = _to_number(timeframe)
    if months is None or months <= 0 or months != int(months):
        errors["timeframe"] = "Please select a timeframe"

    land = _to_number(land_size)
    if land is None or land <= 0:
        errors["land_size"] = "Please enter a valid land size"

    if errors:
        return None, errors
    return FarmGoal(target_income=income, timeframe=int(months), land_size=land), {}


def parse_resources_form(
    budget: Any,
    water_source: str,
    labor_type: str,
) -> Tuple[Optional[FarmResources], Dict[str, str]]:
    errors: Dict[str, str] = {}

    amount = _to_number(budget)
    if amount is None or amount < 0:
        errors["budget"] = "Please enter a valid budget amount"
    if water_source not in WATER_SOURCES:
        errors["water_source"] = "Please select a water source"
    if labor_type not in LABOR_TYPES:
        errors["labor_type"] = "Please select a labor type"

    if errors:
        return None, errors
    return FarmResources(budget=amount, water_source=water_source, labor_type=labor_type), {}  # type: ignore[arg-type]


# =============================================================================
# CACHE
# =============================================================================

@st.cache_resource(show_spinner=False)
def get_catalog() -> FarmCatalog:
    return load_catalog_from_json()


# =============================================================================
# STEPS
# =============================================================================

def _goto(step: int) -> None:
    st.session_state["step"] = step


def _show_errors(errors: Dict[str, str]) -> None:
    for msg in errors.values():
        st.error(msg)


def _goal_step() -> None:
    st.subheader("Set Your Farming Goals")
    with st.form("goal_form"):
        income = st.text_input("How much income do you want to earn?", placeholder="5000")
        timeframe = st.selectbox(
            "In what timeframe?",
            options=TIMEFRAME_CHOICES,
            index=2,
            format_func=lambda m: f"{m} months",
        )
        land = st.text_input("How much land do you have (acres)?", placeholder="2")
        submitted = st.form_submit_button("Continue", type="primary")

    if submitted:
        goal, errors = parse_goal_form(income, timeframe, land)
        if errors:
            _show_errors(errors)
            return
        st.session_state["goal"] = goal
        _goto(1)
        st.rerun()


def _resources_step() -> None:
    st.subheader("Your Available Resources")
    with st.form("resources_form"):
        budget = st.text_input("What is your available budget to start?", placeholder="1000")
        water = st.radio(
            "Water source",
            options=WATER_SOURCES,
            format_func=lambda w: WATER_LABELS.get(w, w),
        )
        labor = st.radio(
            "Labor",
            options=LABOR_TYPES,
            format_func=lambda l: LABOR_LABELS.get(l, l),
        )
        c1, c2 = st.columns([1, 1])
        back = c1.form_submit_button("Back")
        submitted = c2.form_submit_button("Generate my plan", type="primary")

    if back:
        _goto(0)
        st.rerun()

    if submitted:
        resources, errors = parse_resources_form(budget, water, labor)
        if errors:
            _show_errors(errors)
            return
        try:
            with st.spinner("Generating your farm plan..."):
                plan = generate_farm_plan(
                    DEFAULT_PLAN_NAME,
                    st.session_state["goal"],
                    resources,
                    get_catalog(),
                    settings=load_settings(),
                )
        except ValueError as e:
            st.error(f"Could not generate the plan: {e}")
            st.stop()

        st.session_state["plan"] = plan
        _goto(2)
        st.rerun()


def _layout_frame(plan: FarmPlan, catalog: FarmCatalog) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Option": b.name,
                "Type": b.kind,
                "Acres": round(b.acres, 2),
                "Units": b.units if b.kind == "livestock" else None,
                "Land (%)": round(b.share_pct, 1),
            }
            for b in farm_layout(plan, catalog)
        ]
    )


def _plan_step() -> None:
    plan: FarmPlan = st.session_state["plan"]
    catalog = get_catalog()
    summary = summarize_projection(plan)
    weeks_per_month = load_settings().weeks_per_month

    st.subheader(f"🌱 {plan.name}")
    st.caption(random_quote())

    c1, c2 = st.columns([1, 1])
    with c1:
        st.markdown("#### Your Farm Layout")
        layout = _layout_frame(plan, catalog)
        if layout.empty:
            st.warning("No crops or livestock fit these resources. Try another water source or labor option.")
        else:
            st.dataframe(layout, use_container_width=True, hide_index=True)

    with c2:
        st.markdown("#### Financial Projection")
        m1, m2, m3 = st.columns(3)
        m1.metric("Revenue", format_currency(summary.revenue))
        m2.metric("Costs", format_currency(summary.costs))
        m3.metric("Profit", format_currency(summary.profit))
        st.write(
            f"**Range:** {format_currency(summary.worst_case_profit)} – {format_currency(summary.best_case_profit)}"
        )
        months = summary.time_to_profit
        st.write(f"**Time to profit:** {months} {'month' if months == 1 else 'months'}")
        st.write(f"**Monthly profit:** {format_currency(summary.monthly_profit)}")
        st.write(f"**ROI:** {str(summary.roi_pct) + '%' if summary.roi_pct is not None else 'N/A'}")
        st.progress(min(max(summary.goal_progress_pct, 0.0), 100.0) / 100.0, text="Progress to target income")
        st.pyplot(plot_financials(plan, show=False))

    st.markdown("#### Task Timeline")
    grouped = group_by_timeframe(plan.tasks, weeks_per_month)
    tab_weeks, tab_months, tab_all = st.tabs(["Weekly Tasks", "Monthly Tasks", "All"])
    for tab, section in ((tab_weeks, "week"), (tab_months, "month")):
        with tab:
            if not grouped[section]:
                st.info("No tasks in this period.")
            for timeframe, tasks in grouped[section].items():
                st.markdown(f"**{timeframe}**")
                for t in tasks:
                    st.checkbox(t.title, key=f"done_{t.task_id}", help=t.description)
                    if t.inputs:
                        st.caption("Inputs: " + ", ".join(t.inputs))
    with tab_all:
        st.dataframe(timeline_frame(plan.tasks, weeks_per_month), use_container_width=True, hide_index=True)

    st.download_button(
        "Download plan (JSON)",
        data=json.dumps(plan.to_dict(), ensure_ascii=False, indent=2),
        file_name=f"farm_plan_{plan.plan_id}.json",
        mime="application/json",
    )

    if st.button("Create New Plan"):
        for key in ("goal", "plan"):
            st.session_state.pop(key, None)
        _goto(0)
        st.rerun()


# =============================================================================
# APP
# =============================================================================

def main():
    st.set_page_config(page_title=PROJECT_NAME, page_icon="🌾", layout="wide")
    st.title(f"🌾 {PROJECT_NAME}")
    st.caption(f"v{PROJECT_VERSION}")

    step = int(st.session_state.get("step", 0))
    if step >= 1 and "goal" not in st.session_state:
        step = 0
    if step >= 2 and "plan" not in st.session_state:
        step = 1

    st.progress((step + 1) / len(STEPS), text=f"Step {step + 1} of {len(STEPS)}: {STEPS[step]}")

    if step == 0:
        _goal_step()
    elif step == 1:
        _resources_step()
    else:
        _plan_step()


if __name__ == "__main__":
    main()
