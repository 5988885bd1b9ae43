import json

import pytest

from planner.config import PlannerConfig, PlayerSettings, normalize_profession, toggle_perk


def test_player_settings_to_dict():
    player = PlayerSettings(profession="agriculturist", farming_level=7)
    data = player.to_dict()
    assert data["profession"] == "agriculturist"
    assert data["tiller"] is True
    assert data["agriculturist"] is True
    assert data["level"] == 7
    assert data["settings"] == {"show_events": True}
    assert "tiller" not in PlayerSettings().to_dict()


def test_player_settings_from_dict():
    """Saved player data should load, including first-release perk flags."""
    assert PlayerSettings.from_dict(None) == PlayerSettings()
    assert PlayerSettings.from_dict({"profession": "Tiller", "level": 12}) == PlayerSettings("tiller", 10)
    assert PlayerSettings.from_dict({"tiller": True}).profession == "tiller"
    assert PlayerSettings.from_dict({"tiller": True, "agriculturist": True}).profession == "agriculturist"
    assert PlayerSettings.from_dict({"farming_level": "4"}).farming_level == 4
    restored = PlayerSettings.from_dict(PlayerSettings("tiller", 3, {"show_events": False}).to_dict())
    assert restored.settings == {"show_events": False}


def test_normalize_profession():
    assert normalize_profession(" AGRICULTURIST ") == "agriculturist"
    assert normalize_profession("farmer") == "none"
    assert normalize_profession(None) == "none"


def test_toggle_perk():
    player = PlayerSettings(farming_level=5)
    tiller = toggle_perk(player, "tiller")
    assert tiller.profession == "tiller"
    assert tiller.farming_level == 5
    agri = toggle_perk(tiller, "agriculturist")
    assert agri.profession == "agriculturist"
    assert toggle_perk(agri, "tiller").profession == "none"
    assert toggle_perk(agri, "agriculturist").profession == "tiller"
    assert toggle_perk(player, "agriculturist").profession == "agriculturist"


def test_planner_config_from_dict():
    config = PlannerConfig.from_dict(
        {
            "fertilizer": [{"id": "speed_gro", "name": "Speed-Gro", "buy": 100}],
            "crops": [{"name": "Parsnip"}],
            "events": {"spring": [{"day": 13, "name": "Egg Festival", "festival": True}], "summer": [{"day": 13, "name": "Haley"}]},
        }
    )
    assert set(config.fertilizers) == {"none", "speed_gro"}
    assert config.crops == ({"name": "Parsnip"},)
    assert config.events[13].get_text() == "Egg Festival"
    assert config.events[41].get_text() == "Haley's Birthday"


def test_planner_config_rejects_bad_types():
    with pytest.raises(ValueError):
        PlannerConfig.from_dict({"crops": "parsnip"})
    with pytest.raises(ValueError):
        PlannerConfig.from_dict({"events": ["spring"]})
    with pytest.raises(ValueError):
        PlannerConfig.from_dict({"fertilizer": {"id": "none"}})
    with pytest.raises(ValueError):
        PlannerConfig.from_dict({"fertilizer": ["none"]})


def test_planner_config_from_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"fertilizer": [], "events": {}}), encoding="utf-8")
    config = PlannerConfig.from_json_file(path)
    assert list(config.fertilizers) == ["none"]
    assert config.events == {}
