import matplotlib

matplotlib.use("Agg")

import pytest

from dreamfarm.planner.catalog import catalog_from_dict, load_catalog_from_json


def _task(task_id, timeframe, title=None):
    return {
        "task_id": task_id,
        "title": title or task_id.title(),
        "description": f"{task_id} description",
        "timeframe": timeframe,
        "inputs": ["Labor"],
    }


def _crop(crop_id, investment, revenue, water="low", labor="low", months=3, tasks=None):
    return {
        "crop_id": crop_id,
        "name": crop_id.title(),
        "harvest_time": months,
        "investment_per_acre": investment,
        "revenue_per_acre": revenue,
        "water_requirement": water,
        "labor_requirement": labor,
        "tasks": tasks if tasks is not None else [_task(f"{crop_id}-1", "Week 1")],
    }


def _animal(livestock_id, investment, revenue, per_acre, water="low", labor="low", months=2, tasks=None):
    return {
        "livestock_id": livestock_id,
        "name": livestock_id.title(),
        "maturity_time": months,
        "investment_per_unit": investment,
        "revenue_per_unit": revenue,
        "units_per_acre": per_acre,
        "water_requirement": water,
        "labor_requirement": labor,
        "tasks": tasks if tasks is not None else [_task(f"{livestock_id}-1", "Week 1")],
    }


@pytest.fixture(scope="session")
def catalog():
    return load_catalog_from_json()


@pytest.fixture
def make_catalog():
    def _make(crops=(), livestock=()):
        return catalog_from_dict({"crops": list(crops), "livestock": list(livestock)})
    return _make


@pytest.fixture
def crop_item():
    return _crop


@pytest.fixture
def animal_item():
    return _animal


@pytest.fixture
def task_item():
    return _task
