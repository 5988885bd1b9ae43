from __future__ import annotations

import math
from dataclasses import dataclass

from planner.crops import Crop
from planner.finance import Span
from planner.fertilizers import FertilizerRef, fertilizer_effect
from planner.numeric import clamp_farming_level, parse_float

SILVER_MULTIPLIER = 1.25
GOLD_MULTIPLIER = 1.5
TILLER_MULTIPLIER = 1.1
MAX_QUALITY_CHANCE = 0.75


@dataclass(frozen=True)
class QualityDistribution:
    normal: float
    silver: float
    gold: float

    def chance(self, quality: int) -> float:
        """Chance for a quality tier (0 normal, 1 silver, 2 gold)."""
        if quality == 1:
            return min(1, self.silver)
        if quality == 2:
            return min(1, self.gold)
        return self.normal


def quality_distribution(level: object, quality_bonus: object = 0.0) -> QualityDistribution:
    """
    Quality tier chances for a farming level and fertilizer quality bonus.

    Gold and silver are each capped at 0.75 and the result is deliberately not
    renormalized, so the three chances can sum above 1 at high bonuses.
    """
    level = clamp_farming_level(level)
    bonus = parse_float(quality_bonus or 0, 0.0)
    gold = min(MAX_QUALITY_CHANCE, (level * 0.01) + bonus)
    silver = min(MAX_QUALITY_CHANCE, gold * 2)
    normal = max(0, 1 - (gold + silver))
    return QualityDistribution(normal=normal, silver=silver, gold=gold)


def average_sell_price(sell_price: float, level: object, fertilizer: FertilizerRef = None) -> float:
    dist = quality_distribution(level, fertilizer_effect(fertilizer).quality_bonus)
    return (
        (sell_price * dist.normal)
        + (sell_price * SILVER_MULTIPLIER * dist.silver)
        + (sell_price * GOLD_MULTIPLIER * dist.gold)
    )


def harvest_yield(crop: Crop, amount: int, level: object) -> Span:
    """
    Expected produce count range for `amount` plants.

    The max is a continuous bound on level-based bonus drops, not a sampled value.
    """
    level = clamp_farming_level(level)
    harvest = crop.harvest
    low = harvest.min * amount
    high = (min(harvest.min + 1, harvest.max + 1 + (level / harvest.level_increase)) - 1) * amount
    return Span(low, high)


def harvest_revenue(
    crop: Crop,
    produce: Span,
    level: object,
    quality_bonus: float = 0.0,
    tiller: bool = False,
) -> Span:
    """
    Revenue range for one harvest. Fertilizer quality only applies to the picked
    item, so extra drops are valued at normal quality.
    """
    dist = quality_distribution(level, quality_bonus)
    min_unit = crop.get_sell(0)
    max_unit = (
        (min_unit * dist.chance(0))
        + (crop.get_sell(1) * dist.chance(1))
        + (crop.get_sell(2) * dist.chance(2))
    )
    max_unit = min(crop.get_sell(2), max_unit)

    low = math.floor(min_unit) * produce.min
    high = math.floor(max_unit) + (math.floor(min_unit) * max(0, produce.max - 1))
    if tiller:
        low = math.floor(low * TILLER_MULTIPLIER)
        high = math.floor(high * TILLER_MULTIPLIER)
    return Span(low, high)
