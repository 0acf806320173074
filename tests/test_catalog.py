import json

import pytest

from dreamfarm.planner.catalog import catalog_from_dict, load_catalog_from_json


def test_default_catalog_order_and_rates(catalog):
    """Packaged catalog keeps the published order and rates."""
    assert [c.crop_id for c in catalog.crops] == ["maize", "tomatoes", "cabbage"]
    assert [l.livestock_id for l in catalog.livestock] == ["broilers", "layers", "rabbits"]

    maize = catalog.find_crop("maize")
    assert maize.harvest_time == 4
    assert maize.investment_per_acre == 500
    assert maize.revenue_per_acre == 1200
    assert maize.water_requirement == "medium"
    assert maize.profit_score() == 700

    layers = catalog.find_livestock("layers")
    assert layers.time_to_yield == 5
    assert layers.profit_score() == (25 - 7) * 3000


def test_task_templates_loaded(catalog):
    maize = catalog.find_crop("maize")
    assert len(maize.tasks) == 7
    first = maize.tasks[0]
    assert first.task_id == "maize-1"
    assert first.timeframe == "Week 1"
    assert first.inputs == ("Tractor hire or hoes", "Labor")


def test_find_unknown_returns_none(catalog):
    assert catalog.find_crop("coffee") is None
    assert catalog.find_livestock("goats") is None


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog_from_json(tmp_path / "nope.json")


def test_load_from_custom_path(tmp_path, crop_item):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"version": "test", "crops": [crop_item("beans", 100, 300)], "livestock": []}))

    cat = load_catalog_from_json(path)

    assert cat.version == "test"
    assert [c.crop_id for c in cat.crops] == ["beans"]
    assert cat.livestock == ()


def test_missing_top_level_keys():
    with pytest.raises(ValueError):
        catalog_from_dict({"crops": []})


def test_incomplete_items_are_skipped(crop_item):
    raw = {
        "crops": [{"crop_id": "", "name": "No id"}, crop_item("beans", 100, 300)],
        "livestock": [{"name": "Nameless"}],
    }
    cat = catalog_from_dict(raw)
    assert [c.crop_id for c in cat.crops] == ["beans"]
    assert cat.livestock == ()


def test_empty_catalog_rejected():
    with pytest.raises(ValueError):
        catalog_from_dict({"crops": [], "livestock": []})


def test_invalid_requirement_level(crop_item):
    with pytest.raises(ValueError, match="water_requirement"):
        catalog_from_dict({"crops": [crop_item("beans", 100, 300, water="extreme")], "livestock": []})


def test_invalid_months(crop_item):
    with pytest.raises(ValueError, match="harvest_time"):
        catalog_from_dict({"crops": [crop_item("beans", 100, 300, months=0)], "livestock": []})


def test_duplicate_ids(crop_item, animal_item):
    raw = {"crops": [crop_item("beans", 100, 300)], "livestock": [animal_item("beans", 1, 2, 10)]}
    with pytest.raises(ValueError, match="Duplicate"):
        catalog_from_dict(raw)


def test_catalog_is_read_only(catalog):
    with pytest.raises(AttributeError):
        catalog.crops = ()
