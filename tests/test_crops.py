from planner.crops import (
    Crop,
    HarvestSpec,
    adapt_planner_crop,
    crop_from_dict,
    crop_id_from_name,
    load_crops,
)
from planner.seasons import SEASONS


def _make_crop(**overrides) -> Crop:
    values = dict(
        id="parsnip",
        name="Parsnip",
        sell=35,
        seed_price=20,
        stages=(4,),
        regrow=None,
        seasons=("spring",),
    )
    values.update(overrides)
    return Crop(**values)


def test_adapt_planner_crop():
    crop = adapt_planner_crop(
        {"name": "Green Bean", "seasons": ["Spring"], "seedPrice": 60, "sellPrice": 40, "growthDays": 10, "regrowDays": 3}
    )
    assert crop.id == "green_bean"
    assert crop.seasons == ("spring",)
    assert crop.stages == (10,)
    assert crop.regrow_days == 3
    assert crop.regrows
    assert (crop.start, crop.end) == (1, 28)
    assert crop.harvest == HarvestSpec()


def test_crop_from_dict_coerces_values():
    crop = crop_from_dict(
        {
            "name": "Blueberry",
            "sell": "50",
            "seedPrice": "abc",
            "buy": 80,
            "stages": [1, 3, 3, 4, 2],
            "regrow": 4,
            "seasons": ["Summer", "Monsoon"],
            "harvest": {"min": 3, "max": 3, "level_increase": 0, "extra_chance": 0.02},
        }
    )
    assert crop.id == "blueberry"
    assert crop.sell == 50
    assert crop.seed_price == 80
    assert crop.base_growth_days == 13
    assert crop.seasons == ("summer",)
    assert crop.harvest.level_increase == 1
    assert crop.harvest.min == 3


def test_regrow_sentinel():
    assert _make_crop(regrow=None).regrow_days == -1
    assert crop_from_dict({"name": "X", "sell": 1, "stages": [2], "regrow": -1}).regrow_days == -1
    assert crop_from_dict({"name": "X", "sell": 1, "stages": [2], "regrow": 0}).regrow is None


def test_growth_days_minimum_one():
    assert _make_crop(stages=(0,)).base_growth_days == 1
    assert _make_crop(stages=()).base_growth_days == 1


def test_get_sell_quality():
    crop = _make_crop()
    assert crop.get_sell(0) == 35
    assert crop.get_sell(1) == 43
    assert crop.get_sell(2) == 52


def test_can_grow():
    crop = _make_crop()
    assert crop.can_grow(1)
    assert crop.can_grow(28)
    assert not crop.can_grow(29)
    assert crop.can_grow(100, in_greenhouse=True)
    assert not crop.can_grow(113, in_greenhouse=True)
    assert not _make_crop(greenhouse_only=True).can_grow(5)


def test_multi_season_range():
    crop = _make_crop(seasons=("summer", "fall"))
    assert (crop.start, crop.end) == (29, 84)
    assert crop.can_grow_in_season(SEASONS[2])
    assert not crop.can_grow_in_season(SEASONS[0])
    assert crop.can_grow_in_season(SEASONS[0], in_greenhouse=True)


def test_crop_without_seasons():
    crop = _make_crop(seasons=())
    assert (crop.start, crop.end) == (0, 0)
    assert not crop.can_grow(1)


def test_load_crops_accepts_both_shapes():
    crops = load_crops(
        [
            {"name": "Parsnip", "seasons": ["Spring"], "seedPrice": 20, "sellPrice": 35, "growthDays": 4},
            {"id": "potato", "name": "Potato", "sell": 80, "stages": [1, 1, 1, 2, 1], "seasons": ["spring"]},
            "not a crop",
        ]
    )
    assert [c.id for c in crops] == ["parsnip", "potato"]
    assert crops[1].base_growth_days == 6
    assert load_crops(None) == []


def test_crop_id_from_name():
    assert crop_id_from_name("Ancient  Fruit") == "ancient_fruit"
    assert crop_id_from_name(None) == ""


def test_crop_from_dict_scalar_fields():
    crop = crop_from_dict({"name": "Garlic", "sell": 60, "stages": "4 days", "seasons": {"spring": True}})
    assert crop.stages == (4,)
    assert crop.seasons == ()
