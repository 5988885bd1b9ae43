from planner.config import PlayerSettings
from planner.crops import Crop
from planner.farm import Farm, FarmTotals, Plan, Year, build_harvest, plan_from_data
from planner.fertilizers import NO_FERTILIZER, Fertilizer
from planner.finance import Span
from planner.seasons import SEASONS

SPEED_GRO = Fertilizer(id="speed_gro", name="Speed-Gro", buy=100)
DELUXE = Fertilizer(id="deluxe_fertilizer", name="Deluxe Fertilizer", buy=None)
RETAINING = Fertilizer(id="quality_retaining_soil", name="Quality Retaining Soil", buy=150)


def _make_crop(crop_id: str = "parsnip", growth: int = 4, regrow=None, seasons=("spring",)) -> Crop:
    return Crop(
        id=crop_id,
        name=crop_id.title(),
        sell=35,
        seed_price=20,
        stages=(growth,),
        regrow=regrow,
        seasons=tuple(seasons),
    )


def test_plan_costs_on_creation():
    plan = Plan(crop=_make_crop(), date=1, amount=3, fertilizer=SPEED_GRO)
    assert plan.seed_cost == 60
    assert plan.fertilizer_cost == 300
    assert plan.total_cost == 360
    assert plan.get_cost(locale=True) == "360"
    assert plan.get_grow_time() == 3
    assert plan.get_grow_time("agriculturist") == 3


def test_plan_water_retention():
    assert Plan(crop=_make_crop(), date=1, fertilizer=RETAINING).water_retention_chance == 0.66
    assert Plan(crop=_make_crop(), date=1).water_retention_chance == 0


def test_plan_get_data():
    assert Plan(crop=_make_crop(), date=1, amount=2).get_data() == {"crop": "parsnip", "amount": 2}
    assert Plan(crop=_make_crop(), date=1, fertilizer=SPEED_GRO).get_data() == {
        "crop": "parsnip",
        "amount": 1,
        "fertilizer": "speed_gro",
    }


def test_build_harvest_charges_cost_once():
    plan = Plan(crop=_make_crop(regrow=3), date=1, amount=2)
    first = build_harvest(plan, 5, False, PlayerSettings())
    again = build_harvest(plan, 8, True, PlayerSettings())
    assert first.harvest_yield == Span(2, 2)
    assert first.revenue == Span(70, 70)
    assert first.cost == 40
    assert first.profit == Span(30, 30)
    assert again.cost == 0
    assert again.profit == Span(70, 70)
    assert again.crop is plan.crop


def test_build_harvest_tiller():
    plan = Plan(crop=_make_crop(), date=1, amount=10)
    harvest = build_harvest(plan, 5, False, PlayerSettings(profession="agriculturist"))
    assert harvest.revenue == Span(385, 385)


def test_greenhouse_fertilizer_expires_with_season():
    same = Plan(crop=_make_crop(), date=1, fertilizer=DELUXE, greenhouse=True)
    crossing = Plan(crop=_make_crop(), date=26, fertilizer=DELUXE, greenhouse=True)
    assert build_harvest(same, 5, False, PlayerSettings()).revenue == Span(35, 36)
    assert build_harvest(crossing, 30, False, PlayerSettings()).revenue == Span(35, 35)


def test_farm_regrowing_crops():
    farm = Farm()
    assert not farm.has_regrowing_crops()
    farm.plans[30].append(Plan(crop=_make_crop("blueberry", regrow=4, seasons=("summer",)), date=30))
    farm.plans[2].append(Plan(crop=_make_crop(), date=2))
    assert farm.has_regrowing_crops()
    assert farm.has_regrowing_crops(SEASONS[1])
    assert not farm.has_regrowing_crops(SEASONS[0])
    assert [plan.date for plan in farm.iter_plans()] == [2, 30]
    assert farm.plan_count() == 2

    farm.clear(SEASONS[1].start, SEASONS[1].end)
    assert farm.plan_count() == 1


def test_farm_totals_day_finance():
    totals = FarmTotals()
    assert totals.is_zero()
    totals.day_finance(4).add_planting(10)
    assert 4 in totals.day
    assert not totals.is_zero()


def test_year_bounds_and_farms():
    year = Year(2)
    assert year.start == 225
    assert year.end == 336
    assert year.farm("farm").year_index == 2
    assert year.farm("greenhouse").greenhouse
    assert year.farm("greenhouse").kind == "greenhouse"


def test_year_data_round_trip():
    parsnip = _make_crop()
    crops = {"parsnip": parsnip}
    fertilizers = {"none": NO_FERTILIZER, "speed_gro": SPEED_GRO}

    year = Year(0)
    assert year.get_data() is None
    year.farm_data.plans[1].append(Plan(crop=parsnip, date=1, amount=2, fertilizer=SPEED_GRO))
    year.greenhouse_data.plans[90].append(Plan(crop=parsnip, date=90, greenhouse=True))
    data = year.get_data()
    assert data == {
        "farm": {"1": [{"crop": "parsnip", "amount": 2, "fertilizer": "speed_gro"}]},
        "greenhouse": {"90": [{"crop": "parsnip", "amount": 1}]},
    }

    restored = Year(0)
    assert restored.set_data(data, crops, fertilizers) == 2
    assert restored.get_data() == data
    assert restored.farm_data.plans[1] == year.farm_data.plans[1]
    assert restored.greenhouse_data.plans[90][0].greenhouse


def test_year_set_data_skips_bad_entries():
    crops = {"parsnip": _make_crop()}
    data = {
        "farm": {"1": [{"crop": "parsnip"}, {"crop": "ghost"}, "junk"], "200": [{"crop": "parsnip"}], "4": 5, "5": {"crop": "parsnip"}},
        "barn": {"1": [{"crop": "parsnip"}]},
    }
    year = Year(0)
    assert year.set_data(data, crops, {"none": NO_FERTILIZER}) == 1
    assert year.set_data([1], crops, {}) == 0
    assert year.set_data("x", crops, {}) == 0
    assert year.set_data(None, crops, {}) == 0


def test_plan_from_data_defaults():
    crops = {"parsnip": _make_crop()}
    plan = plan_from_data({"crop": "parsnip", "amount": "0", "fertilizer": "gone"}, 3, False, crops, {})
    assert plan.amount == 1
    assert plan.fertilizer is NO_FERTILIZER
    assert plan_from_data({"crop": "ghost"}, 3, False, crops, {}) is None
