import pytest

from dreamfarm.planner.allocation import Allocation
from dreamfarm.planner.errors import CatalogInconsistencyError
from dreamfarm.planner.ids import SequentialIds
from dreamfarm.planner.timeline import (
    TIMELINE_COLUMNS,
    build_timeline,
    group_by_timeframe,
    timeframe_key,
    timeline_frame,
)
from dreamfarm.schemas.outputs import CropAllocation, FarmTask, LivestockAllocation


@pytest.mark.parametrize(
    "label,key",
    [
        ("Week 1", 1),
        ("Week 4-5", 4),
        ("Week 6, 9, 12", 6),
        ("Week 20/21 onward", 20),
        ("Month 3", 12),
        ("Month 4-5", 16),
        ("Various weeks", 0),
        ("", 0),
    ],
)
def test_timeframe_key(label, key):
    assert timeframe_key(label) == key


@pytest.mark.parametrize("week,month", [(3, 1), (4, 1), (5, 1), (12, 3), (13, 3)])
def test_month_sorts_after_week_only_when_later(week, month):
    assert (timeframe_key(f"Month {month}") > timeframe_key(f"Week {week}")) == (month * 4 > week)


def test_maize_timeline_sorted(catalog):
    tasks = build_timeline(Allocation(crops=(CropAllocation("maize", 1),)), catalog, SequentialIds("x"))

    assert [t.timeframe for t in tasks] == [
        "Week 1", "Week 2", "Week 4-5", "Week 6", "Week 7-14", "Week 8", "Month 4-5",
    ]
    assert tasks[0].title == "[Maize (Corn)] Land Preparation"
    assert tasks[0].task_id == "maize-1-x1"
    assert tasks[0].inputs == ("Tractor hire or hoes", "Labor")


def test_templates_are_not_modified(catalog):
    build_timeline(Allocation(crops=(CropAllocation("maize", 1),)), catalog, SequentialIds())
    assert catalog.find_crop("maize").tasks[0].task_id == "maize-1"
    assert catalog.find_crop("maize").tasks[0].title == "Land Preparation"


def test_equal_keys_keep_crops_before_livestock(catalog):
    alloc = Allocation(
        crops=(CropAllocation("maize", 1),),
        livestock=(LivestockAllocation("layers", 100),),
    )
    tasks = build_timeline(alloc, catalog, SequentialIds())

    # "Various weeks" has no number and sorts first
    assert tasks[0].title == "[Layer Chickens] Feed Changes"

    week_one = [t.title for t in tasks if timeframe_key(t.timeframe) == 1]
    assert week_one == [
        "[Maize (Corn)] Land Preparation",
        "[Layer Chickens] Housing Preparation",
        "[Layer Chickens] Chick Purchase and Setup",
        "[Layer Chickens] Vaccination Schedule",
        "[Layer Chickens] Daily Management",
    ]


def test_ids_unique_within_plan(catalog):
    alloc = Allocation(
        crops=(CropAllocation("tomatoes", 6), CropAllocation("cabbage", 1)),
        livestock=(LivestockAllocation("layers", 9000),),
    )
    tasks = build_timeline(alloc, catalog, SequentialIds())
    ids = [t.task_id for t in tasks]
    assert len(ids) == len(set(ids)) == 8 + 7 + 8


def test_empty_allocation_gives_empty_timeline(catalog):
    assert build_timeline(Allocation(), catalog, SequentialIds()) == []


def test_unknown_id_strict_and_lenient(catalog):
    alloc = Allocation(crops=(CropAllocation("coffee", 1), CropAllocation("maize", 1)))
    with pytest.raises(CatalogInconsistencyError):
        build_timeline(alloc, catalog, SequentialIds())

    tasks = build_timeline(alloc, catalog, SequentialIds(), strict=False)
    assert len(tasks) == 7


def test_group_by_timeframe(catalog):
    alloc = Allocation(
        crops=(CropAllocation("maize", 1),),
        livestock=(LivestockAllocation("layers", 100),),
    )
    tasks = build_timeline(alloc, catalog, SequentialIds())
    grouped = group_by_timeframe(tasks)

    weeks = list(grouped["week"])
    assert weeks[0] == "Week 1"
    assert "Week 20/21 onward" in weeks
    assert list(grouped["month"]) == ["Month 4-5"]
    assert "Various weeks" not in weeks
    assert [t.title for t in grouped["week"]["Week 1"]] == [
        "[Maize (Corn)] Land Preparation",
        "[Layer Chickens] Housing Preparation",
        "[Layer Chickens] Chick Purchase and Setup",
    ]


def test_timeline_frame():
    tasks = [
        FarmTask("a-1", "Plant", "Plant it", "Week 2", ("Seed", "Labor")),
        FarmTask("a-2", "Harvest", "Pick it", "Month 3"),
    ]
    df = timeline_frame(tasks)
    assert list(df.columns) == TIMELINE_COLUMNS
    assert df["sort_key"].tolist() == [2, 12]
    assert df.loc[0, "inputs"] == "Seed, Labor"
    assert timeline_frame([]).empty
