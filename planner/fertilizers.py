from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union

from planner.numeric import is_number, parse_float


@dataclass(frozen=True)
class FertilizerEffect:
    quality_bonus: float = 0.0
    growth_modifier: float = 1.0
    water_retention: float = 0.0


@dataclass(frozen=True)
class Fertilizer:
    id: str
    name: str
    buy: float | None = 0

    def is_none(self) -> bool:
        return self.id == "none"

    @property
    def effect(self) -> FertilizerEffect:
        return fertilizer_effect(self)

    @staticmethod
    def from_dict(raw: dict[str, Any]) -> "Fertilizer":
        buy = raw.get("buy")
        return Fertilizer(
            id=str(raw.get("id") or "none"),
            name=str(raw.get("name") or raw.get("id") or "None"),
            buy=parse_float(buy, 0.0) if buy is not None else None,
        )


NO_FERTILIZER = Fertilizer(id="none", name="None", buy=0)

FertilizerRef = Union[Fertilizer, str, None]

# Canonical names are lower-case, space separated.
_EFFECTS: dict[str, FertilizerEffect] = {
    "basic fertilizer": FertilizerEffect(quality_bonus=0.01),
    "quality fertilizer": FertilizerEffect(quality_bonus=0.02),
    "deluxe fertilizer": FertilizerEffect(quality_bonus=0.04),
    "speed-gro": FertilizerEffect(growth_modifier=0.9),
    "deluxe speed-gro": FertilizerEffect(growth_modifier=0.75),
    "hyper speed-gro": FertilizerEffect(growth_modifier=0.67),
    "basic retaining soil": FertilizerEffect(water_retention=0.33),
    "quality retaining soil": FertilizerEffect(water_retention=0.66),
    "deluxe retaining soil": FertilizerEffect(water_retention=1.0),
}

_COSTS: dict[str, int] = {
    "basic fertilizer": 100,
    "quality fertilizer": 150,
    "speed-gro": 100,
    "deluxe speed-gro": 150,
    "basic retaining soil": 100,
    "quality retaining soil": 150,
}

_ID_TO_EFFECT_KEY: dict[str, str] = {
    "basic_fertilizer": "basic fertilizer",
    "quality_fertilizer": "quality fertilizer",
    "deluxe_fertilizer": "deluxe fertilizer",
    "speed_gro": "speed-gro",
    "delux_speed_gro": "deluxe speed-gro",
    "deluxe_speed_gro": "deluxe speed-gro",
    "hyper_speed_gro": "hyper speed-gro",
    "basic_retaining_soil": "basic retaining soil",
    "quality_retaining_soil": "quality retaining soil",
    "deluxe_retaining_soil": "deluxe retaining soil",
}


def normalize_effect_name(raw: Any) -> str:
    """Lower-case, trim and collapse whitespace."""
    return re.sub(r"\s+", " ", str(raw or "").lower().strip())


def fertilizer_effect_key(fertilizer: FertilizerRef) -> str:
    """
    Resolve a fertilizer reference (id string, display name or Fertilizer) to its
    canonical effect name. Stale or unknown references resolve to "".
    """
    if not fertilizer:
        return ""
    if isinstance(fertilizer, str):
        fertilizer_id = fertilizer.lower().strip()
        fertilizer_name = normalize_effect_name(fertilizer)
    else:
        fertilizer_id = str(fertilizer.id or "").lower().strip()
        fertilizer_name = normalize_effect_name(fertilizer.name or fertilizer_id)

    if fertilizer_id and fertilizer_id in _ID_TO_EFFECT_KEY:
        return _ID_TO_EFFECT_KEY[fertilizer_id]
    if fertilizer_name and fertilizer_name in _EFFECTS:
        return fertilizer_name

    from_id = normalize_effect_name(fertilizer_id.replace("_", " "))
    if from_id and from_id in _EFFECTS:
        return from_id
    return ""


def fertilizer_effect(fertilizer: FertilizerRef) -> FertilizerEffect:
    return _EFFECTS.get(fertilizer_effect_key(fertilizer), FertilizerEffect())


def fertilizer_cost(fertilizer: FertilizerRef) -> float:
    """Per-unit buy price: the catalog price when known, else the canonical price table."""
    if isinstance(fertilizer, Fertilizer):
        if fertilizer.is_none():
            return 0
        if is_number(fertilizer.buy):
            return fertilizer.buy
        name = normalize_effect_name(fertilizer.name)
        if name in _COSTS:
            return _COSTS[name]
    return _COSTS.get(fertilizer_effect_key(fertilizer), 0)
