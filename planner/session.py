from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Iterable

from planner import aggregator, storage
from planner.config import PlayerSettings, normalize_profession, toggle_perk
from planner.data_loader import LoadedData
from planner.economy import units_for_budget
from planner.farm import Farm, Plan, Year
from planner.fertilizers import NO_FERTILIZER, Fertilizer
from planner.history import History, Snapshot, snapshot_state
from planner.lifecycle import crop_lifecycle
from planner.numeric import clamp_farming_level, clean_zero, parse_int, round_to
from planner.optimizer import CropInfoSettings, CropRow, best_visible_crop, crop_rows, visible_crops
from planner.seasons import SEASONS, YEAR_DAYS, CalendarEvent, Season
from planner.state import PlannerState
from planner.validation import DATA_VERSION, ImportDataError, parse_import_payload, validate_legacy_payload

logger = logging.getLogger(__name__)

_GOLD_AMOUNT = re.compile(r"^([0-9]+)g$", re.IGNORECASE)
_INT_AMOUNT = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class PlanRequest:
    """A planting as entered by the user; amount may be a count or a gold budget like "500g"."""

    crop_id: str | None
    amount: Any = 1
    fertilizer_id: str = "none"


@dataclass(frozen=True)
class ProfitSummary:
    investment: float = 0
    revenue: float = 0
    net: float = 0
    per_tile: float = 0
    roi: float = 0


class Planner:
    """A planning session: the planner state plus history, persistence and crop info."""

    def __init__(self, state: PlannerState, store: storage.KeyValueStore | None = None) -> None:
        self.state = state
        self.store = store if store is not None else storage.MemoryStore()
        self.history = History(self.snapshot, self.restore)
        self.crop_info = CropInfoSettings()
        self.rows: list[CropRow] = []
        self.best_crop_id: str | None = None
        self.refresh_crop_metrics()

    @classmethod
    def from_data(cls, loaded: LoadedData, store: storage.KeyValueStore | None = None) -> "Planner":
        """Start a session from the loaded catalog, restoring saved player settings and plans."""
        planner = cls(PlannerState.from_catalog(list(loaded.crops), loaded.config), store)
        planner.load_player()
        count = planner.load_data()
        planner.update_all()
        logger.info("Loaded %d plans into %d year(s)", count, len(planner.state.years))
        return planner

    # Persistence

    def save_data(self) -> None:
        storage.save_plans(self.store, self.state.years)

    def load_data(self) -> int:
        plan_data = storage.load_plans(self.store)
        if not isinstance(plan_data, list):
            return 0
        return self._set_years(plan_data)

    def _set_years(self, plan_data: Iterable[Any]) -> int:
        state = self.state
        years = []
        count = 0
        for index, year_data in enumerate(plan_data):
            year = Year(index)
            count += year.set_data(year_data or {}, state.crops_by_id, state.fertilizers)
            years.append(year)
        state.years = years or [Year(0)]
        state.year_index = 0
        return count

    def save_player(self) -> None:
        storage.save_player(self.store, self.state.player.to_dict())

    def load_player(self) -> None:
        self.state.player = PlayerSettings.from_dict(storage.load_player(self.store))

    # Aggregation

    def update(self, farm: Farm | None = None, full_update: bool = False) -> None:
        aggregator.update(self.state, farm or self.state.years[0].farm(self.state.mode), full_update)

    def update_all(self) -> None:
        first = self.state.years[0]
        for farm in first.farms():
            self.update(farm, full_update=True)

    # Navigation

    @property
    def cyear(self) -> Year:
        return self.state.current_year

    @property
    def cseason(self) -> Season:
        return self.state.current_season

    def cfarm(self) -> Farm:
        return self.state.current_farm()

    def inc_year(self, direction: int) -> None:
        """Move one year forward (creating it if needed) or back."""
        state = self.state
        if direction > 0:
            state.next_year(state.year_index, force_create=True)
            state.year_index += 1
        elif state.previous_year(state.year_index) is not None:
            state.year_index -= 1

    def inc_season(self, direction: int) -> None:
        state = self.state
        index = state.season_index + (1 if direction > 0 else -1)
        if index >= len(SEASONS):
            index = 0
            state.next_year(state.year_index, force_create=True)
            state.year_index += 1
        elif index < 0:
            if state.previous_year(state.year_index) is None:
                return
            index = len(SEASONS) - 1
            state.year_index -= 1
        self.set_season(index)

    def set_season(self, index: int) -> None:
        self.state.season_index = max(0, min(len(SEASONS) - 1, parse_int(index, 0)))

    def set_mode(self, mode: str) -> None:
        self.state.mode = "greenhouse" if mode == "greenhouse" else "farm"

    def toggle_mode(self) -> None:
        self.set_mode("farm" if self.state.in_greenhouse else "greenhouse")

    def events_for_season(self, season: Season | None = None) -> list[CalendarEvent]:
        season = season or self.cseason
        return [
            event
            for date, event in sorted(self.state.events.items())
            if season.start <= date <= season.end
        ]

    # Plans

    def validate_plan_amount(self, request: PlanRequest) -> int | None:
        """
        Resolve the requested amount to a unit count. Blank input means 1 and a
        gold budget buys as many seeds as it covers (at least 1).
        """
        amount = re.sub(r"\s", "", str(request.amount if request.amount is not None else ""))
        if not amount:
            return 1
        if amount.lower().endswith("g"):
            match = _GOLD_AMOUNT.match(amount)
            crop = self.state.crops_by_id.get(request.crop_id or "")
            if not match or crop is None:
                return None
            return units_for_budget(crop, int(match.group(1)))
        if not _INT_AMOUNT.match(amount):
            return None
        units = int(amount)
        return units if units > 0 else None

    def find_fertilizer(self, fertilizer_id: str | None) -> Fertilizer | None:
        """Catalog fertilizer for an id; blank means none, unknown ids return None."""
        if not fertilizer_id or fertilizer_id == NO_FERTILIZER.id:
            return self.state.fertilizers.get(NO_FERTILIZER.id, NO_FERTILIZER)
        return self.state.fertilizers.get(fertilizer_id)

    def add_plan(self, date: int, request: PlanRequest, auto_replant: bool = False) -> bool:
        amount = self.validate_plan_amount(request)
        if amount is None:
            return False
        return self.history.run(lambda: self._add_plan(self.cyear, date, request, amount, auto_replant))

    def _add_plan(self, year: Year, date: int, request: PlanRequest, amount: int, auto_replant: bool) -> bool:
        state = self.state
        if not request.crop_id:
            return False
        if date < 1 or date > YEAR_DAYS:
            return False
        crop = state.crops_by_id.get(request.crop_id)
        in_greenhouse = state.in_greenhouse
        if crop is None or not crop.can_grow(date, in_greenhouse):
            return False
        if amount <= 0:
            return False

        fertilizer = self.find_fertilizer(request.fertilizer_id)
        if fertilizer is None:
            return False
        farm = year.farm(state.mode)
        limit = YEAR_DAYS if in_greenhouse else crop.end
        while True:
            farm.plans[date].append(
                Plan(crop=crop, date=date, amount=amount, fertilizer=fertilizer, greenhouse=in_greenhouse)
            )
            if not auto_replant or crop.regrows:
                break
            # Replant single-harvest crops on their harvest day while another harvest still fits.
            lifecycle = crop_lifecycle(crop, date, limit, fertilizer, state.player.profession)
            if not lifecycle:
                break
            next_day = lifecycle[0].day
            if not crop_lifecycle(crop, next_day, limit, fertilizer, state.player.profession):
                break
            date = next_day

        self.save_data()
        self.update(farm)
        return True

    def remove_plan(self, date: int, index: int) -> bool:
        return self.history.run(lambda: self._remove_plan(date, index))

    def _remove_plan(self, date: int, index: int) -> bool:
        farm = self.cfarm()
        plans = farm.plans.get(date) or []
        if index < 0 or index >= len(plans):
            return False
        plan = plans.pop(index)
        self.save_data()
        self.update(farm, full_update=plan.crop.regrows)
        return True

    def edit_plan(self, date: int, index: int, amount: Any = None, fertilizer_id: str | None = None) -> bool:
        """Change the amount and/or fertilizer of an existing plan."""
        return self.history.run(lambda: self._edit_plan(date, index, amount, fertilizer_id))

    def _edit_plan(self, date: int, index: int, amount: Any, fertilizer_id: str | None) -> bool:
        farm = self.cfarm()
        plans = farm.plans.get(date) or []
        if index < 0 or index >= len(plans):
            return False
        plan = plans[index]
        units = plan.amount
        if amount is not None:
            units = self.validate_plan_amount(PlanRequest(crop_id=plan.crop.id, amount=amount))
            if units is None:
                return False
        fertilizer = plan.fertilizer
        if fertilizer_id is not None:
            fertilizer = self.find_fertilizer(fertilizer_id)
            if fertilizer is None:
                return False
        plan.amount = units
        plan.fertilizer = fertilizer
        plan.cost_breakdown()
        plan.refresh_water_retention()
        self.save_data()
        self.update(farm, full_update=plan.crop.regrows)
        return True

    def clear_season(self, season: Season | None = None) -> None:
        season = season or self.cseason
        self.history.clear()
        farm = self.cfarm()
        full_update = farm.has_regrowing_crops(season)
        farm.clear(season.start, season.end)
        self.save_data()
        self.update(farm, full_update)

    def clear_year(self, year: Year | None = None) -> None:
        year = year or self.cyear
        self.history.clear()
        farm = year.farm(self.state.mode)
        full_update = farm.has_regrowing_crops()
        farm.clear()
        self.save_data()
        self.update(farm, full_update)

    def clear_all(self) -> None:
        self.history.clear()
        self.state.reset_years()
        self.save_data()
        self.update_all()

    # Player

    def set_profession(self, profession: str) -> None:
        self.state.player = replace(self.state.player, profession=normalize_profession(profession))
        self._player_changed()

    def set_farming_level(self, level: Any) -> None:
        self.state.player = replace(self.state.player, farming_level=clamp_farming_level(level))
        self._player_changed()

    def toggle_perk(self, key: str) -> None:
        self.state.player = toggle_perk(self.state.player, key)
        self._player_changed()

    def _player_changed(self) -> None:
        self.refresh_crop_metrics()
        self.save_player()
        self.update_all()

    # Crop info

    def refresh_crop_metrics(self) -> None:
        player = self.state.player
        self.rows = crop_rows(self.state.crops, player.profession, player.farming_level)

    def set_sort(self, key: str) -> None:
        self.crop_info = self.crop_info.with_sort(key)

    def visible_crops(self) -> list[CropRow]:
        rows = visible_crops(self.rows, self.crop_info)
        best = best_visible_crop(rows)
        self.best_crop_id = best.id if best else None
        return rows

    def is_best_crop(self, row: CropRow | None) -> bool:
        return row is not None and row.id == self.best_crop_id

    def season_summary(self) -> ProfitSummary:
        """Investment, revenue and returns of the current farm's season."""
        farm = self.cfarm()
        season = self.cseason
        investment = 0.0
        revenue = 0.0
        for date in range(season.start, season.end + 1):
            investment += sum(plan.total_cost for plan in farm.plans.get(date, ()))
            revenue += sum(harvest.revenue.min for harvest in farm.harvests.get(date, ()))
        totals = farm.totals.season[season.index]
        net = totals.profit.min
        plantings = totals.plantings
        return ProfitSummary(
            investment=investment,
            revenue=revenue,
            net=clean_zero(net),
            per_tile=clean_zero(round_to(net / plantings, 1)) if plantings > 0 else 0,
            roi=clean_zero(round_to((net / investment) * 100, 1)) if investment > 0 else 0,
        )

    # History

    def snapshot(self) -> Snapshot:
        return snapshot_state(self.state)

    def restore(self, snapshot: Snapshot) -> bool:
        if not snapshot:
            return False
        state = self.state
        self._set_years(snapshot.get("years") or [{}])
        state.mode = "greenhouse" if snapshot.get("mode") == "greenhouse" else "farm"
        state.year_index = max(0, min(parse_int(snapshot.get("year_index"), 0), len(state.years) - 1))
        state.season_index = max(0, min(parse_int(snapshot.get("season_index"), 0), len(SEASONS) - 1))
        self.save_data()
        self.update_all()
        return True

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # Import / export

    def export_data(self) -> str:
        self.save_data()
        return json.dumps({"plans": storage.load_plans(self.store), "version": DATA_VERSION})

    def import_data(self, raw: str | bytes | dict[str, Any]) -> int:
        """Replace all plans with an exported payload. Rejected payloads raise ImportDataError."""
        plan_data = parse_import_payload(raw)
        self.history.clear()
        storage.save_json(self.store, storage.PLANS_KEY, plan_data)
        count = self.load_data()
        self.update_all()
        logger.info("Imported %d plans into %d year(s)", count, len(self.state.years))
        return count

    def legacy_import_data(self, payload: Any = None) -> int:
        """
        Import a first-release save: a flat {day: [plans]} map. Plans flagged
        greenhouse go to the greenhouse of year 1, unknown crops are dropped.
        """
        if payload is None:
            payload = storage.load_legacy_plans(self.store)
        if not payload:
            raise ImportDataError("no legacy plan data to import")
        payload = validate_legacy_payload(payload)

        year_data: dict[str, dict[str, list[dict[str, Any]]]] = {"farm": {}, "greenhouse": {}}
        for raw_date, plans in payload.items():
            date = parse_int(raw_date, 0)
            for raw in plans:
                if not isinstance(raw, dict) or raw.get("crop") not in self.state.crops_by_id:
                    continue
                plan = {key: value for key, value in raw.items() if key not in ("greenhouse", "date")}
                kind = "greenhouse" if raw.get("greenhouse") else "farm"
                year_data[kind].setdefault(str(date), []).append(plan)

        self.history.clear()
        storage.save_json(self.store, storage.PLANS_KEY, [year_data])
        count = self.load_data()
        self.update_all()
        logger.info("Imported %d legacy plans into %d year(s)", count, len(self.state.years))
        return count
