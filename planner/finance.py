from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from planner.formatting import format_number
from planner.numeric import clean_zero

Number = Union[int, float]


@dataclass
class Span:
    """A min/max pair of expected values."""

    min: Number = 0
    max: Number = 0

    def add(self, low: Number, high: Number) -> None:
        self.min += low
        self.max += high

    def pick(self, use_max: bool = False) -> Number:
        return self.max if use_max else self.min


def render_value(value: Number, locale: bool) -> Number | str:
    value = clean_zero(value)
    if locale:
        return format_number(value, 2)
    return value


@dataclass
class Finance:
    """Cost/revenue/profit accumulator for a day, season or year."""

    cost: Number = 0
    revenue: Span = field(default_factory=Span)
    profit: Span = field(default_factory=Span)
    plantings: int = 0
    harvests: Span = field(default_factory=Span)

    def add_planting(self, cost: Number, amount: int = 0) -> None:
        self.cost += cost
        self.profit.add(-cost, -cost)
        self.plantings += amount

    def add_revenue(self, revenue: Span) -> None:
        self.revenue.add(revenue.min, revenue.max)
        self.profit.add(revenue.min, revenue.max)

    def absorb(self, other: "Finance") -> None:
        self.cost += other.cost
        self.revenue.add(other.revenue.min, other.revenue.max)
        self.profit.add(other.profit.min, other.profit.max)
        self.plantings += other.plantings
        self.harvests.add(other.harvests.min, other.harvests.max)

    def get_cost(self, locale: bool = False) -> Number | str:
        return render_value(self.cost, locale)

    def get_revenue(self, locale: bool = False, use_max: bool = False) -> Number | str:
        return render_value(self.revenue.pick(use_max), locale)

    def get_profit(self, locale: bool = False, use_max: bool = False) -> Number | str:
        return render_value(self.profit.pick(use_max), locale)

    def get_plantings(self, locale: bool = False) -> Number | str:
        return format_number(self.plantings) if locale else self.plantings

    def get_harvests(self, locale: bool = False, use_max: bool = False) -> Number | str:
        value = self.harvests.pick(use_max)
        return format_number(value, 2) if locale else value

    def is_zero(self) -> bool:
        return self == Finance()
