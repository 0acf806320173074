import pytest

from dreamfarm.app_streamlit import parse_goal_form, parse_resources_form
from dreamfarm.schemas.inputs import FarmGoal, FarmResources


def test_goal_form_accepts_thousands_separator():
    goal, errors = parse_goal_form("5,000", 12, " 2.5 ")
    assert errors == {}
    assert goal == FarmGoal(target_income=5000.0, timeframe=12, land_size=2.5)


def test_goal_form_reports_every_field():
    goal, errors = parse_goal_form("", None, "abc")
    assert goal is None
    assert errors == {
        "target_income": "Please enter a valid target income",
        "timeframe": "Please select a timeframe",
        "land_size": "Please enter a valid land size",
    }


@pytest.mark.parametrize("income", ["0", "-10", "nan", "inf"])
def test_goal_form_rejects_bad_income(income):
    _, errors = parse_goal_form(income, 6, "1")
    assert list(errors) == ["target_income"]


def test_goal_form_rejects_fractional_months():
    _, errors = parse_goal_form("100", "2.5", "1")
    assert list(errors) == ["timeframe"]


def test_resources_form_ok():
    resources, errors = parse_resources_form("0", "river", "both")
    assert errors == {}
    assert resources == FarmResources(budget=0.0, water_source="river", labor_type="both")


def test_resources_form_errors():
    resources, errors = parse_resources_form("-5", "well", "")
    assert resources is None
    assert errors == {
        "budget": "Please enter a valid budget amount",
        "water_source": "Please select a water source",
        "labor_type": "Please select a labor type",
    }
