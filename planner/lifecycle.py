from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from planner.crops import Crop
from planner.economy import total_planting_cost, units_for_budget
from planner.fertilizers import FertilizerRef
from planner.growth import days_to_first_harvest, regrow_days
from planner.numeric import clamp_farming_level, is_number, parse_float, parse_int, round_to
from planner.pricing import TILLER_MULTIPLIER, average_sell_price
from planner.seasons import SEASON_DAYS, season_end_for_day, year_end_for_day

FIXED_BUDGET_GOLD = 1000


@dataclass(frozen=True)
class LifecycleEvent:
    day: int
    crop: Crop


def iter_lifecycle(
    crop: Crop | None,
    plant_day: int | None,
    limit_day: int | None = None,
    fertilizer: FertilizerRef = None,
    profession: str = "none",
    greenhouse: bool = False,
) -> Iterator[LifecycleEvent]:
    """
    Yield the harvest days of one planting up to and including `limit_day`.

    Without an explicit limit the window ends with the planting's season, or with
    its year when the planting is in a greenhouse.
    """
    if crop is None or not plant_day:
        return
    if limit_day is None:
        limit_day = year_end_for_day(plant_day) if greenhouse else season_end_for_day(plant_day)

    day = plant_day + days_to_first_harvest(crop, fertilizer, profession)
    if day > limit_day:
        return
    yield LifecycleEvent(day, crop)

    interval = regrow_days(crop)
    if interval <= 0:
        return
    day += interval
    while day <= limit_day:
        yield LifecycleEvent(day, crop)
        day += interval


def crop_lifecycle(
    crop: Crop | None,
    plant_day: int | None,
    limit_day: int | None = None,
    fertilizer: FertilizerRef = None,
    profession: str = "none",
    greenhouse: bool = False,
) -> list[LifecycleEvent]:
    return list(iter_lifecycle(crop, plant_day, limit_day, fertilizer, profession, greenhouse))


@dataclass(frozen=True)
class MultiSeasonOptions:
    fertilizer: FertilizerRef = None
    profession: str = "none"
    farming_level: int = 0
    avg_sell_price: float | None = None
    harvest_yield: Any = None
    planting_multiplier: Any = 1


def multi_season_profit(
    crop: Crop | None,
    plant_day: Any,
    season_count: Any,
    options: MultiSeasonOptions | None = None,
) -> float:
    """
    Expected profit of farming one crop continuously for `season_count` seasons.

    Regrowing crops are bought once and harvested on their regrow interval.
    Single-harvest crops are replanted on the day of each harvest until no
    further harvest fits in the window.
    """
    options = options or MultiSeasonOptions()
    if crop is None:
        return 0

    plant_day = parse_int(plant_day, 1)
    if plant_day < 1:
        plant_day = 1
    season_count = parse_int(season_count, 1)
    if season_count < 1:
        season_count = 1
    limit_day = plant_day + (season_count * SEASON_DAYS) - 1

    multiplier = parse_int(options.planting_multiplier, 1)
    if multiplier < 1:
        multiplier = 1
    produce = parse_float(options.harvest_yield, 0.0)
    if produce <= 0:
        produce = crop.harvest.min or 1

    avg_sell = options.avg_sell_price
    if not is_number(avg_sell):
        avg_sell = average_sell_price(crop.sell or 0, clamp_farming_level(options.farming_level), options.fertilizer)

    harvest_value = avg_sell * produce * multiplier
    planting_cost = total_planting_cost(crop, options.fertilizer, multiplier).total_cost
    regrows = regrow_days(crop) > 0

    total = 0.0
    current_day = plant_day
    while current_day <= limit_day:
        events = crop_lifecycle(crop, current_day, limit_day, options.fertilizer, options.profession)
        if not events:
            break
        total -= planting_cost
        total += harvest_value * sum(1 for event in events if event.day <= limit_day)
        if regrows:
            break
        current_day = events[0].day
    return total


@dataclass(frozen=True)
class ProfitSettings:
    profession: str = "none"
    farming_level: int = 0
    fertilizer: FertilizerRef = None
    use_fixed_budget: bool = False
    season_count: Any = None


@dataclass(frozen=True)
class CropMetrics:
    sell_price: float
    growth_days: int
    avg_sell_price: float
    season_count: int
    total_days: int
    total_season_profit: float
    profit_per_day: float


def planting_multiplier(crop: Crop, use_fixed_budget: bool) -> int:
    """Units bought per planting: 1, or as many seeds as the fixed gold budget buys."""
    if not use_fixed_budget:
        return 1
    return units_for_budget(crop, FIXED_BUDGET_GOLD)


def calculate_profit(crop: Crop, settings: ProfitSettings | None = None) -> CropMetrics:
    """Profit metrics for farming `crop` through all of its seasons from day 1."""
    settings = settings or ProfitSettings()
    profession = settings.profession or "none"
    level = clamp_farming_level(settings.farming_level)

    season_count = parse_int(settings.season_count, 0)
    if season_count < 1:
        season_count = max(1, len(crop.seasons))

    sell_price = crop.sell or 0
    if profession in ("tiller", "agriculturist"):
        sell_price *= TILLER_MULTIPLIER
    sell_price = round_to(sell_price, 2)

    avg_sell = average_sell_price(sell_price, level, settings.fertilizer)
    total_days = season_count * SEASON_DAYS
    total = multi_season_profit(
        crop,
        1,
        season_count,
        MultiSeasonOptions(
            fertilizer=settings.fertilizer,
            profession=profession,
            farming_level=level,
            avg_sell_price=avg_sell,
            harvest_yield=crop.harvest.min or 1,
            planting_multiplier=planting_multiplier(crop, settings.use_fixed_budget),
        ),
    )
    return CropMetrics(
        sell_price=sell_price,
        growth_days=days_to_first_harvest(crop, settings.fertilizer, profession),
        avg_sell_price=avg_sell,
        season_count=season_count,
        total_days=total_days,
        total_season_profit=total,
        profit_per_day=round_to(total / total_days, 1),
    )
