from __future__ import annotations

from dataclasses import dataclass, field

from planner.config import PlannerConfig, PlayerSettings
from planner.crops import Crop
from planner.farm import Farm, FarmKind, Year
from planner.fertilizers import NO_FERTILIZER, Fertilizer
from planner.seasons import SEASONS, CalendarEvent, Season


@dataclass
class PlannerState:
    """Everything the planner works on. Passed explicitly to every operation."""

    crops: list[Crop] = field(default_factory=list)
    crops_by_id: dict[str, Crop] = field(default_factory=dict)
    fertilizers: dict[str, Fertilizer] = field(default_factory=lambda: {"none": NO_FERTILIZER})
    events: dict[int, CalendarEvent] = field(default_factory=dict)
    player: PlayerSettings = field(default_factory=PlayerSettings)
    years: list[Year] = field(default_factory=lambda: [Year(0)])
    year_index: int = 0
    season_index: int = 0
    mode: FarmKind = "farm"

    @staticmethod
    def from_catalog(crops: list[Crop], config: PlannerConfig | None = None) -> "PlannerState":
        config = config or PlannerConfig()
        return PlannerState(
            crops=list(crops),
            crops_by_id={crop.id: crop for crop in crops},
            fertilizers=dict(config.fertilizers),
            events=dict(config.events),
        )

    @property
    def in_greenhouse(self) -> bool:
        return self.mode == "greenhouse"

    @property
    def current_year(self) -> Year:
        return self.years[self.year_index]

    @property
    def current_season(self) -> Season:
        return SEASONS[self.season_index]

    def current_farm(self) -> Farm:
        return self.current_year.farm(self.mode)

    def next_year(self, year_index: int, force_create: bool = False) -> Year | None:
        """Year after `year_index`; appended only when `force_create` is set."""
        next_index = year_index + 1
        if next_index >= len(self.years):
            if not force_create:
                return None
            year = Year(len(self.years))
            self.years.append(year)
            return year
        return self.years[next_index]

    def previous_year(self, year_index: int) -> Year | None:
        if year_index - 1 < 0:
            return None
        return self.years[year_index - 1]

    def reset_years(self) -> None:
        self.years = [Year(0)]
        self.year_index = 0
