from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from planner.config import PlayerSettings
from planner.crops import Crop
from planner.economy import PlantingCost, total_planting_cost
from planner.fertilizers import NO_FERTILIZER, Fertilizer, fertilizer_effect
from planner.finance import Finance, Number, Span, render_value
from planner.growth import days_to_first_harvest
from planner.numeric import clean_zero, parse_int
from planner.pricing import harvest_revenue, harvest_yield
from planner.seasons import SEASONS, YEAR_DAYS, Season, season_index_for_day

FarmKind = Literal["farm", "greenhouse"]
FARM_KINDS: tuple[FarmKind, ...] = ("farm", "greenhouse")


@dataclass
class Plan:
    """Seeds planted on one day of a year."""

    crop: Crop
    date: int
    amount: int = 1
    fertilizer: Fertilizer = NO_FERTILIZER
    greenhouse: bool = False
    seed_cost: Number = field(default=0, compare=False)
    fertilizer_cost: Number = field(default=0, compare=False)
    total_cost: Number = field(default=0, compare=False)
    water_retention_chance: float = field(default=0.0, compare=False)
    harvests: list["Harvest"] = field(default_factory=list, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.cost_breakdown()
        self.refresh_water_retention()

    def cost_breakdown(self) -> PlantingCost:
        breakdown = total_planting_cost(self.crop, self.fertilizer, self.amount)
        self.seed_cost = breakdown.seed_cost
        self.fertilizer_cost = breakdown.fertilizer_cost
        self.total_cost = breakdown.total_cost
        return breakdown

    def refresh_water_retention(self) -> None:
        self.water_retention_chance = fertilizer_effect(self.fertilizer).water_retention

    def get_data(self) -> dict[str, Any]:
        data: dict[str, Any] = {"crop": self.crop.id, "amount": self.amount}
        if self.fertilizer and not self.fertilizer.is_none():
            data["fertilizer"] = self.fertilizer.id
        return data

    def get_grow_time(self, profession: str = "none") -> int:
        return days_to_first_harvest(self.crop, self.fertilizer, profession)

    def get_cost(self, locale: bool = False) -> Number | str:
        return render_value(self.total_cost, locale)

    def get_revenue(self, locale: bool = False, use_max: bool = False) -> Number | str:
        return render_value(sum(h.revenue.pick(use_max) for h in self.harvests), locale)

    def get_profit(self, locale: bool = False, use_max: bool = False) -> Number | str:
        revenue = sum(h.revenue.pick(use_max) for h in self.harvests)
        return render_value(revenue - self.total_cost, locale)


@dataclass(frozen=True)
class Harvest:
    plan: Plan = field(compare=False, repr=False)
    date: int
    harvest_yield: Span
    revenue: Span
    cost: Number
    profit: Span
    is_regrowth: bool = False

    @property
    def crop(self) -> Crop:
        return self.plan.crop

    def get_cost(self, locale: bool = False) -> Number | str:
        return render_value(self.cost, locale)

    def get_revenue(self, locale: bool = False, use_max: bool = False) -> Number | str:
        return render_value(self.revenue.pick(use_max), locale)

    def get_profit(self, locale: bool = False, use_max: bool = False) -> Number | str:
        return render_value(self.profit.pick(use_max), locale)


def build_harvest(plan: Plan, date: int, is_regrowth: bool, player: PlayerSettings) -> Harvest:
    """
    Value one harvest of a plan. Greenhouse fertilizer expires when a new season
    starts, so later-season greenhouse harvests lose the quality bonus.
    """
    produce = harvest_yield(plan.crop, plan.amount, player.farming_level)
    quality_bonus = fertilizer_effect(plan.fertilizer).quality_bonus
    if plan.greenhouse and season_index_for_day(date) != season_index_for_day(plan.date):
        quality_bonus = 0.0
    revenue = harvest_revenue(plan.crop, produce, player.farming_level, quality_bonus, player.tiller)
    cost = 0 if is_regrowth else plan.total_cost
    return Harvest(
        plan=plan,
        date=date,
        harvest_yield=produce,
        revenue=revenue,
        cost=cost,
        profit=Span(clean_zero(revenue.min - cost), clean_zero(revenue.max - cost)),
        is_regrowth=is_regrowth,
    )


@dataclass
class FarmTotals:
    day: dict[int, Finance] = field(default_factory=dict)
    season: list[Finance] = field(default_factory=lambda: [Finance() for _ in SEASONS])
    year: Finance = field(default_factory=Finance)

    def day_finance(self, date: int) -> Finance:
        if date not in self.day:
            self.day[date] = Finance()
        return self.day[date]

    def is_zero(self) -> bool:
        return (
            all(f.is_zero() for f in self.day.values())
            and all(f.is_zero() for f in self.season)
            and self.year.is_zero()
        )


def _empty_days() -> dict[int, list]:
    return {date: [] for date in range(1, YEAR_DAYS + 1)}


@dataclass(eq=False)
class Farm:
    """Open-field or greenhouse plantings of one year, plus aggregation caches."""

    greenhouse: bool = False
    year_index: int = 0
    plans: dict[int, list[Plan]] = field(default_factory=_empty_days)
    harvests: dict[int, list[Harvest]] = field(default_factory=dict)
    totals: FarmTotals = field(default_factory=FarmTotals)

    @property
    def kind(self) -> FarmKind:
        return "greenhouse" if self.greenhouse else "farm"

    def iter_plans(self):
        """Plans by ascending day, then insertion order."""
        for date in sorted(self.plans):
            yield from self.plans[date]

    def plan_count(self) -> int:
        return sum(len(plans) for plans in self.plans.values())

    def has_regrowing_crops(self, season: Season | None = None) -> bool:
        start, end = (season.start, season.end) if season else (1, YEAR_DAYS)
        for date in range(start, end + 1):
            if any(plan.crop.regrows for plan in self.plans.get(date, ())):
                return True
        return False

    def clear(self, start: int = 1, end: int = YEAR_DAYS) -> None:
        for date in range(start, end + 1):
            self.plans[date] = []


@dataclass(eq=False)
class Year:
    index: int
    farm_data: Farm = field(default_factory=Farm)
    greenhouse_data: Farm = field(default_factory=lambda: Farm(greenhouse=True))

    def __post_init__(self) -> None:
        for farm in self.farms():
            farm.year_index = self.index

    @property
    def start(self) -> int:
        return self.index * YEAR_DAYS + 1

    @property
    def end(self) -> int:
        return self.start + YEAR_DAYS - 1

    def farm(self, kind: str) -> Farm:
        return self.greenhouse_data if kind == "greenhouse" else self.farm_data

    def farms(self) -> tuple[Farm, Farm]:
        return (self.farm_data, self.greenhouse_data)

    def get_data(self) -> dict[str, dict[str, list[dict[str, Any]]]] | None:
        """Persisted form: {kind: {day: [plan data]}}, or None when the year has no plans."""
        year_plans = {}
        for farm in self.farms():
            farm_plans = {
                str(date): [plan.get_data() for plan in plans]
                for date, plans in sorted(farm.plans.items())
                if plans
            }
            if farm_plans:
                year_plans[farm.kind] = farm_plans
        return year_plans or None

    def set_data(
        self,
        data: Mapping[str, Any] | None,
        crops: Mapping[str, Crop],
        fertilizers: Mapping[str, Fertilizer],
    ) -> int:
        """Load persisted plans, skipping unknown crops. Returns the number of plans loaded."""
        if not isinstance(data, Mapping):
            return 0
        count = 0
        for kind, days in data.items():
            if kind not in FARM_KINDS or not isinstance(days, Mapping):
                continue
            farm = self.farm(kind)
            for raw_date, plans in days.items():
                date = parse_int(raw_date, 0)
                if date < 1 or date > YEAR_DAYS or not isinstance(plans, list):
                    continue
                for raw in plans:
                    plan = plan_from_data(raw, date, farm.greenhouse, crops, fertilizers)
                    if plan is None:
                        continue
                    farm.plans[date].append(plan)
                    count += 1
        return count


def plan_from_data(
    raw: Any,
    date: int,
    greenhouse: bool,
    crops: Mapping[str, Crop],
    fertilizers: Mapping[str, Fertilizer],
) -> Plan | None:
    """Rebuild a Plan from its persisted form; unknown crops yield None."""
    if not isinstance(raw, Mapping):
        return None
    crop = crops.get(str(raw.get("crop") or ""))
    if crop is None:
        return None
    amount = parse_int(raw.get("amount"), 1)
    return Plan(
        crop=crop,
        date=date,
        amount=amount if amount > 0 else 1,
        fertilizer=fertilizers.get(str(raw.get("fertilizer") or "none"), NO_FERTILIZER),
        greenhouse=greenhouse,
    )

