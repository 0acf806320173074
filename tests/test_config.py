import json
import logging

import pytest

from dreamfarm.config import DEFAULT_SETTINGS, PlannerSettings, load_settings, settings_from_dict


def test_packaged_settings_match_defaults():
    assert load_settings() == DEFAULT_SETTINGS


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        settings = load_settings(tmp_path / "absent.json")
    assert settings == DEFAULT_SETTINGS
    assert "not found" in caplog.text


def test_partial_override(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"diversification_budget": 500, "strict_catalog": False}))

    settings = load_settings(path)

    assert settings.diversification_budget == 500
    assert settings.strict_catalog is False
    assert settings.primary_crop_share == 0.7


def test_malformed_json(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    with pytest.raises(ValueError, match="Invalid JSON"):
        load_settings(path)


def test_unknown_keys_rejected():
    with pytest.raises(ValueError, match="crop_share_typo"):
        settings_from_dict({"crop_share_typo": 0.5})


def test_non_object_rejected():
    with pytest.raises(ValueError):
        settings_from_dict([0.7, 0.3])


@pytest.mark.parametrize(
    "overrides",
    [
        {"primary_crop_share": 1.5},
        {"livestock_share": -0.1},
        {"primary_crop_share": 0.8, "livestock_share": 0.3},
        {"diversified_primary_share": 0.65, "secondary_crop_share": 0.1},
        {"diversification_budget": -1},
        {"weeks_per_month": 0},
        {"primary_crop_share": "0.7"},
        {"livestock_share": None},
        {"diversification_budget": True},
        {"diversification_budget": float("inf")},
        {"weeks_per_month": 4.5},
        {"weeks_per_month": "4"},
        {"strict_catalog": "false"},
        {"strict_catalog": 0},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValueError):
        settings_from_dict(overrides)


def test_settings_are_frozen():
    with pytest.raises(AttributeError):
        PlannerSettings().primary_crop_share = 0.5


def test_strict_catalog_string_in_file_is_rejected(tmp_path):
    """A quoted "false" would otherwise leave strict mode on."""
    path = tmp_path / "settings.json"
    path.write_text('{"strict_catalog": "false"}')
    with pytest.raises(ValueError, match="strict_catalog"):
        load_settings(path)


def test_integral_budget_accepted():
    assert settings_from_dict({"diversification_budget": 1500}).diversification_budget == 1500
