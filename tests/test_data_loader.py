import json
from pathlib import Path

import pytest

from planner.data_loader import DataError, load_data

SHIPPED_DATA = Path(__file__).resolve().parents[1] / "data"


def _write(path: Path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


def test_shipped_data_loads():
    """The bundled catalog should load with the fertilizers plans reference."""
    loaded = load_data(SHIPPED_DATA)
    ids = {crop.id for crop in loaded.crops}
    assert {"parsnip", "green_bean", "blueberry", "ancient_fruit"} <= ids
    assert {"none", "speed_gro", "delux_speed_gro", "deluxe_retaining_soil"} <= set(loaded.config.fertilizers)
    assert loaded.config.events


def test_crops_file_replaces_config_crops(tmp_path):
    _write(tmp_path / "config.json", {"crops": [{"name": "Kale", "seasons": ["spring"], "growthDays": 6}]})
    assert [c.id for c in load_data(tmp_path).crops] == ["kale"]

    _write(tmp_path / "crops.json", {"crops": [{"name": "Parsnip", "seasons": ["spring"], "growthDays": 4}]})
    assert [c.id for c in load_data(tmp_path).crops] == ["parsnip"]

    _write(tmp_path / "crops.json", [{"name": "Garlic", "seasons": ["spring"], "growthDays": 4}])
    assert [c.id for c in load_data(tmp_path).crops] == ["garlic"]


def test_missing_config(tmp_path):
    with pytest.raises(DataError):
        load_data(tmp_path)


def test_invalid_json(tmp_path):
    (tmp_path / "config.json").write_text("{nope", encoding="utf-8")
    with pytest.raises(DataError):
        load_data(tmp_path)


def test_invalid_config(tmp_path):
    _write(tmp_path / "config.json", {"fertilizer": "speed_gro", "crops": [{"name": "Kale"}]})
    with pytest.raises(DataError):
        load_data(tmp_path)
    _write(tmp_path / "config.json", ["not", "an", "object"])
    with pytest.raises(DataError):
        load_data(tmp_path)


def test_no_crops(tmp_path):
    _write(tmp_path / "config.json", {"fertilizer": []})
    with pytest.raises(DataError):
        load_data(tmp_path)


def test_scalar_catalog_fields_are_coerced(tmp_path):
    _write(tmp_path / "config.json", {"fertilizer": []})
    _write(
        tmp_path / "crops.json",
        [
            {"name": "Parsnip", "sell": 35, "seedPrice": 20, "stages": 4, "seasons": "spring"},
            {"name": "Kale", "sell": 110, "stages": [6], "seasons": 3},
        ],
    )
    parsnip, kale = load_data(tmp_path).crops
    assert parsnip.base_growth_days == 4
    assert parsnip.seasons == ("spring",)
    assert kale.seasons == ()


def test_non_list_crop_catalog_is_a_data_error(tmp_path):
    _write(tmp_path / "config.json", {"fertilizer": []})
    _write(tmp_path / "crops.json", {"crops": 5})
    with pytest.raises(DataError):
        load_data(tmp_path)
