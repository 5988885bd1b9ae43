from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Sequence

from planner.crops import Crop
from planner.lifecycle import CropMetrics, ProfitSettings, calculate_profit
from planner.numeric import parse_float, parse_int

GREEDY_STRATEGY = "greedy-profit-per-day"

# Numeric sort keys start out descending.
DESCENDING_KEYS = frozenset(
    {"profitPerDay", "fixed_profit", "sellPrice", "growthDays", "sell", "grow", "buy"}
)


@dataclass(frozen=True)
class CropRow:
    """A crop with its profit metrics for the current player settings."""

    crop: Crop
    metrics: CropMetrics
    fixed_metrics: CropMetrics

    @property
    def id(self) -> str:
        return self.crop.id

    @property
    def name(self) -> str:
        return self.crop.name

    @property
    def growth_days(self) -> int:
        return self.metrics.growth_days

    @property
    def sell_price(self) -> float:
        return self.metrics.sell_price

    @property
    def buy(self) -> float:
        return self.crop.seed_price

    @property
    def net_profit(self) -> float:
        return self.metrics.total_season_profit

    @property
    def profit_per_day(self) -> float:
        return self.metrics.profit_per_day

    @property
    def fixed_profit(self) -> float:
        return self.fixed_metrics.profit_per_day


def crop_rows(crops: Iterable[Crop], profession: str = "none", farming_level: int = 0) -> list[CropRow]:
    """Compute per-unit and fixed-budget metrics for every crop."""
    rows = []
    for crop in crops:
        season_count = max(1, len(crop.seasons))
        settings = ProfitSettings(profession=profession, farming_level=farming_level, season_count=season_count)
        rows.append(
            CropRow(
                crop=crop,
                metrics=calculate_profit(crop, settings),
                fixed_metrics=calculate_profit(crop, replace(settings, use_fixed_budget=True)),
            )
        )
    return rows


def _number(value: Any) -> float:
    return parse_float(value, 0.0)


def profit_per_tile(row: CropRow | None) -> float:
    if row is None:
        return 0
    return _number(row.net_profit)


def profit_per_day(row: CropRow | None) -> float:
    """The computed profit/day when set, else net profit spread over growth days."""
    if row is None:
        return 0
    existing = _number(row.profit_per_day)
    if existing:
        return existing
    growth = _number(row.growth_days)
    if growth <= 0:
        return 0
    return _number(row.net_profit) / growth


def best_crop_by_profit_per_tile(rows: Sequence[CropRow]) -> CropRow | None:
    best = None
    for row in rows:
        if best is None or profit_per_tile(row) > profit_per_tile(best):
            best = row
    return best


def best_crop_by_profit_per_day(rows: Sequence[CropRow]) -> CropRow | None:
    best = None
    for row in rows:
        if best is None or profit_per_day(row) > profit_per_day(best):
            best = row
    return best


@dataclass(frozen=True)
class Allocation:
    crop_name: str
    tiles_assigned: int
    expected_profit: float
    profit_per_day: float


@dataclass(frozen=True)
class OptimalPlan:
    allocations: tuple[Allocation, ...] = ()
    total_expected_profit: float = 0
    strategy: str = GREEDY_STRATEGY


def generate_optimal_plan(rows: Iterable[CropRow], tiles: Any, days_remaining: Any) -> OptimalPlan:
    """
    Greedy tile allocation: rank crops that can finish a harvest in the remaining
    days by profit/day and fill all tiles with the best one.
    """
    tiles = parse_int(tiles, 1)
    if tiles < 1:
        tiles = 1
    days_remaining = parse_int(days_remaining, 0)
    if days_remaining < 1:
        return OptimalPlan()

    feasible = [
        row
        for row in rows or ()
        if 0 < _number(row.growth_days) <= days_remaining and profit_per_day(row) > 0
    ]
    if not feasible:
        return OptimalPlan()
    top = max(feasible, key=profit_per_day)
    expected = profit_per_tile(top) * tiles
    allocation = Allocation(
        crop_name=top.name or "Unknown",
        tiles_assigned=tiles,
        expected_profit=expected,
        profit_per_day=profit_per_day(top),
    )
    return OptimalPlan(allocations=(allocation,), total_expected_profit=expected)


@dataclass(frozen=True)
class CropInfoSettings:
    """Search, filter and sort state for the crop info table."""

    search: str = ""
    season_filter: str = "all"
    seasons: tuple[str, ...] = ("spring",)
    sort: str = "profitPerDay"
    # True means descending.
    order: bool = True
    regrows: bool = False
    use_fbp: bool = False

    def with_sort(self, key: str) -> "CropInfoSettings":
        """Sort by `key`; choosing the current key again flips the order."""
        if self.sort == key:
            return replace(self, order=not self.order)
        return self.apply_sort(key)

    def apply_sort(self, key: str) -> "CropInfoSettings":
        return replace(self, sort=key, order=key in DESCENDING_KEYS)


def sort_value(row: CropRow, key: str, use_fbp: bool = False) -> Any:
    if key in ("growthDays", "grow"):
        return row.growth_days
    if key in ("sellPrice", "sell"):
        return row.sell_price
    if key in ("profitPerDay", "profit", "fixed_profit"):
        return row.fixed_profit if use_fbp else row.profit_per_day
    if key == "buy":
        return row.buy
    return (row.name or "").lower()


def _in_season(row: CropRow, settings: CropInfoSettings) -> bool:
    if settings.season_filter != "all":
        return settings.season_filter in row.crop.seasons
    if settings.seasons:
        return any(season in row.crop.seasons for season in settings.seasons)
    return True


def visible_crops(rows: Iterable[CropRow], settings: CropInfoSettings) -> list[CropRow]:
    search = (settings.search or "").lower()
    visible = [
        row
        for row in rows
        if (not search or search in row.name.lower())
        and (not settings.regrows or row.crop.regrows)
        and _in_season(row, settings)
    ]
    key = settings.sort or "profitPerDay"
    visible.sort(key=lambda row: sort_value(row, key, settings.use_fbp))
    if settings.order:
        visible.reverse()
    return visible


def best_visible_crop(rows: Sequence[CropRow]) -> CropRow | None:
    """The first row with the highest profit/day."""
    best = None
    for row in rows:
        if best is None or row.profit_per_day > best.profit_per_day:
            best = row
    return best
