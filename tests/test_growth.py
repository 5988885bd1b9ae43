from planner.crops import Crop
from planner.growth import days_to_first_harvest, growth_modifier, regrow_days


def _make_crop(growth: int = 10, regrow: int | None = None) -> Crop:
    return Crop(
        id="test",
        name="Test",
        sell=10,
        seed_price=5,
        stages=(growth,),
        regrow=regrow,
        seasons=("spring",),
    )


def test_days_to_first_harvest_with_fertilizer():
    crop = _make_crop(10)
    assert days_to_first_harvest(crop) == 10
    assert days_to_first_harvest(crop, "speed_gro") == 9
    assert days_to_first_harvest(crop, "deluxe_speed_gro") == 7
    assert days_to_first_harvest(crop, "basic_fertilizer") == 10


def test_days_to_first_harvest_with_profession():
    crop = _make_crop(10)
    assert days_to_first_harvest(crop, None, "agriculturist") == 9
    assert days_to_first_harvest(crop, "speed_gro", "agriculturist") == 8
    assert days_to_first_harvest(crop, None, "tiller") == 10


def test_days_to_first_harvest_minimum():
    assert days_to_first_harvest(_make_crop(1), "hyper_speed_gro") == 1
    assert days_to_first_harvest(None) == 1


def test_growth_modifier_stacks():
    assert growth_modifier(None) == 1
    assert growth_modifier("speed_gro", "agriculturist") == 0.9 * 0.9


def test_regrow_days():
    assert regrow_days(_make_crop(regrow=4)) == 4
    assert regrow_days(_make_crop()) == -1
    assert regrow_days(None) == -1
