from __future__ import annotations

import math
from typing import Literal

from planner.crops import Crop
from planner.fertilizers import FertilizerRef, fertilizer_effect

Profession = Literal["none", "tiller", "agriculturist"]

AGRICULTURIST_GROWTH = 0.9


def growth_modifier(fertilizer: FertilizerRef, profession: str = "none") -> float:
    """Combined growth-time multiplier; fertilizer and profession stack multiplicatively."""
    modifier = fertilizer_effect(fertilizer).growth_modifier or 1
    if profession == "agriculturist":
        modifier *= AGRICULTURIST_GROWTH
    return modifier


def days_to_first_harvest(crop: Crop | None, fertilizer: FertilizerRef = None, profession: str = "none") -> int:
    """Return days from planting to first harvest after fertilizer and profession modifiers."""
    base = crop.base_growth_days if crop is not None else 1
    return max(1, math.floor(base * growth_modifier(fertilizer, profession)))


def regrow_days(crop: Crop | None) -> int:
    """Regrow interval in days, or -1 when the crop does not regrow."""
    if crop is None:
        return -1
    return crop.regrow_days
