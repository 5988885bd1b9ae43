from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from planner.crops import Crop
from planner.fertilizers import FertilizerRef, fertilizer_cost
from planner.numeric import is_number, parse_int


@dataclass(frozen=True)
class PlantingCost:
    seed_cost: float
    fertilizer_cost: float
    total_cost: float


def seed_cost(crop: Crop | None) -> float:
    """Per-unit seed price; malformed or missing crops cost nothing."""
    if crop is None:
        return 0
    return crop.seed_price if is_number(crop.seed_price) else 0


def total_planting_cost(crop: Crop | None, fertilizer: FertilizerRef, amount: Any = 1) -> PlantingCost:
    """Seed and fertilizer cost for `amount` units; invalid amounts count as 1."""
    amount = parse_int(amount, 1)
    if amount < 1:
        amount = 1
    seeds = seed_cost(crop) * amount
    fert = fertilizer_cost(fertilizer) * amount
    return PlantingCost(seed_cost=seeds, fertilizer_cost=fert, total_cost=seeds + fert)


def units_for_budget(crop: Crop | None, gold: int) -> int:
    """Number of seeds a gold budget buys, at least 1."""
    price = seed_cost(crop)
    units = int(gold // price) if price > 0 else 1
    return units or 1
