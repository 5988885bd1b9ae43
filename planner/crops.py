from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from planner.numeric import is_number, parse_float, parse_int
from planner.seasons import YEAR_DAYS, Season, season_by_id


@dataclass(frozen=True)
class HarvestSpec:
    min: int = 1
    max: int = 1
    # Farming levels per extra max-yield drop.
    level_increase: float = 1
    extra_chance: float = 0.0


@dataclass(frozen=True)
class Crop:
    id: str
    name: str
    sell: float
    seed_price: float
    # Growth stage durations; their sum is the base days to first harvest.
    stages: tuple[int, ...]
    regrow: int | None  # None = single-harvest
    seasons: tuple[str, ...]
    harvest: HarvestSpec = HarvestSpec()
    wild: bool = False
    greenhouse_only: bool = False
    note: str = ""

    @property
    def start(self) -> int:
        """First day-of-year the crop can be planted outdoors (0 if it has no season)."""
        season = season_by_id(self.seasons[0]) if self.seasons else None
        return season.start if season else 0

    @property
    def end(self) -> int:
        """Last day-of-year of the crop's final growing season (0 if it has no season)."""
        season = season_by_id(self.seasons[-1]) if self.seasons else None
        return season.end if season else 0

    @property
    def base_growth_days(self) -> int:
        return max(1, sum(self.stages))

    @property
    def regrow_days(self) -> int:
        """Regrow interval, or -1 when the crop is single-harvest."""
        if self.regrow is None or self.regrow <= 0:
            return -1
        return self.regrow

    @property
    def regrows(self) -> bool:
        return self.regrow_days > 0

    def get_sell(self, quality: int = 0) -> int:
        """Sell price for a quality tier (0 normal, 1 silver, 2 gold)."""
        return math.floor(self.sell * (1 + (quality * 0.25)))

    def can_grow(self, date: int, in_greenhouse: bool = False) -> bool:
        """Return True if the crop can be planted on a day-of-year."""
        if in_greenhouse and date <= YEAR_DAYS:
            return True
        if self.greenhouse_only:
            return False
        return self.start <= date <= self.end

    def can_grow_in_season(self, season: Season, in_greenhouse: bool = False) -> bool:
        if in_greenhouse:
            return True
        if self.greenhouse_only:
            return False
        return self.start <= season.start and self.end >= season.end


def crop_id_from_name(name: Any) -> str:
    return re.sub(r"\s+", "_", str(name or "").lower())


def _normalize_seasons(raw: Any) -> tuple[str, ...]:
    """Keep known seasons in catalog order, lower-cased."""
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        return ()
    seasons = []
    for value in raw:
        season = season_by_id(value)
        if season is not None:
            seasons.append(season.id)
    return tuple(seasons)


def _parse_regrow(raw: Any) -> int | None:
    regrow = parse_int(raw, -1)
    return regrow if regrow > 0 else None


def _parse_harvest(raw: Any) -> HarvestSpec:
    raw = raw if isinstance(raw, dict) else {}
    harvest_min = parse_int(raw.get("min"), 0) or 1
    harvest_max = parse_int(raw.get("max"), 0) or 1
    return HarvestSpec(
        min=harvest_min,
        max=harvest_max,
        level_increase=parse_float(raw.get("level_increase"), 0.0) or 1,
        extra_chance=parse_float(raw.get("extra_chance"), 0.0),
    )


def _seed_price(raw: dict[str, Any]) -> float:
    """Seed price from the first numeric of seedPrice, seedCost or buy."""
    for key in ("seedPrice", "seedCost", "seed_price", "buy"):
        value = raw.get(key)
        if is_number(value):
            return float(value)
        parsed = parse_float(value, math.nan)
        if not math.isnan(parsed):
            return parsed
    return 0.0


def crop_from_dict(raw: dict[str, Any]) -> Crop:
    """Build a Crop from a full catalog record (stages, harvest block, flags)."""
    stages_raw = raw.get("stages")
    if stages_raw and not isinstance(stages_raw, (list, tuple)):
        stages = (parse_int(stages_raw, 1),)
    elif stages_raw:
        stages = tuple(parse_int(s, 0) for s in stages_raw)
    else:
        stages = (parse_int(raw.get("growthDays") or raw.get("grow"), 1),)
    regrow_raw = raw.get("regrow")
    if regrow_raw is None:
        regrow_raw = raw.get("regrowDays")
    return Crop(
        id=str(raw.get("id") or crop_id_from_name(raw.get("name"))),
        name=str(raw.get("name") or raw.get("id") or ""),
        sell=parse_float(raw.get("sell", raw.get("sellPrice")), 0.0),
        seed_price=_seed_price(raw),
        stages=stages,
        regrow=_parse_regrow(regrow_raw),
        seasons=_normalize_seasons(raw.get("seasons")),
        harvest=_parse_harvest(raw.get("harvest")),
        wild=bool(raw.get("wild", False)),
        greenhouse_only=bool(raw.get("greenhouse_only", raw.get("greenhouseOnly", False))),
        note=str(raw.get("note") or ""),
    )


def adapt_planner_crop(raw: dict[str, Any]) -> Crop:
    """
    Convert an external planner-ready crop record
    ({name, seasons, seedPrice, sellPrice, growthDays, regrowDays}) into a Crop
    with a single growth stage and a one-item harvest.
    """
    return Crop(
        id=crop_id_from_name(raw.get("name")),
        name=str(raw.get("name") or ""),
        sell=parse_float(raw.get("sellPrice"), 0.0),
        seed_price=_seed_price(raw),
        stages=(parse_int(raw.get("growthDays"), 1),),
        regrow=_parse_regrow(raw.get("regrowDays")),
        seasons=_normalize_seasons(raw.get("seasons")),
        harvest=HarvestSpec(),
    )


def load_crops(raw_crops: Any) -> list[Crop]:
    """Adapt a catalog list, accepting both full records and planner-ready records."""
    crops: list[Crop] = []
    for raw in raw_crops or ():
        if not isinstance(raw, dict):
            continue
        if "stages" in raw or "sell" in raw:
            crops.append(crop_from_dict(raw))
        else:
            crops.append(adapt_planner_crop(raw))
    return crops
