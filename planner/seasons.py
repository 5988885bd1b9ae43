from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

from planner.numeric import parse_int

SeasonId = Literal["spring", "summer", "fall", "winter"]

SEASON_DAYS = 28
YEAR_DAYS = SEASON_DAYS * 4
SEASON_IDS: tuple[SeasonId, ...] = ("spring", "summer", "fall", "winter")

_WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


@dataclass(frozen=True)
class Season:
    index: int
    id: SeasonId

    @property
    def name(self) -> str:
        return self.id.capitalize()

    @property
    def start(self) -> int:
        """First day-of-year of this season (1-based)."""
        return self.index * SEASON_DAYS + 1

    @property
    def end(self) -> int:
        return self.start + SEASON_DAYS - 1


SEASONS: tuple[Season, ...] = tuple(Season(i, sid) for i, sid in enumerate(SEASON_IDS))


def season_index_for_day(day_of_year: int) -> int:
    """Return the 0-based season index for a 1-based day-of-year."""
    #  1..28  = spring
    # 29..56  = summer
    # 57..84  = fall
    # 85..112 = winter
    if day_of_year < 1:
        raise ValueError("day_of_year must be >= 1")
    return ((day_of_year - 1) // SEASON_DAYS) % 4  # wrap years


def season_for_day(day_of_year: int) -> Season:
    return SEASONS[season_index_for_day(day_of_year)]


def season_by_id(raw: Any) -> Season | None:
    """Look up a season by id, case-insensitively. Unknown ids return None."""
    key = str(raw or "").strip().lower()
    for season in SEASONS:
        if season.id == key:
            return season
    return None


def season_end_for_day(day: int) -> int:
    """Last day of the season containing `day` (days may run past the first year)."""
    return ((max(1, day) - 1) // SEASON_DAYS + 1) * SEASON_DAYS


def year_end_for_day(day: int) -> int:
    return ((max(1, day) - 1) // YEAR_DAYS + 1) * YEAR_DAYS


def day_of_year_from_season_day(season: SeasonId, day: int) -> int:
    """Convert a season/day pair (1..28) to day-of-year (1..112)."""
    if day < 1 or day > SEASON_DAYS:
        raise ValueError(f"day must be in 1..{SEASON_DAYS}")
    found = season_by_id(season)
    if found is None:
        raise ValueError(f"Unknown season: {season}")
    return found.start - 1 + day


def format_date(day_of_year: int, fmt: str) -> str:
    """
    Render a day-of-year with a small strftime-like vocabulary:
    %l weekday name, %j day of month, %S ordinal suffix, %F season name.
    """
    date = day_of_year % SEASON_DAYS or SEASON_DAYS

    nth = "th"
    if date <= 3 or date >= 21:
        nth = {1: "st", 2: "nd", 3: "rd"}.get(date % 10, "th")

    weekday = _WEEKDAYS[date % 7]
    season = season_for_day(day_of_year)
    return (
        fmt.replace("%l", weekday)
        .replace("%j", str(date))
        .replace("%S", nth)
        .replace("%F", season.name)
    )


@dataclass(frozen=True)
class CalendarEvent:
    day: int
    season: Season
    name: str
    festival: bool = False

    @property
    def date(self) -> int:
        return self.season.index * SEASON_DAYS + self.day

    def get_text(self) -> str:
        if not self.festival:
            return f"{self.name}'s Birthday"
        return self.name


def build_event_calendar(raw: Mapping[str, Any] | None) -> dict[int, CalendarEvent]:
    """Build a date -> event map from the config's season-keyed event lists."""
    events: dict[int, CalendarEvent] = {}
    if not raw:
        return events
    for season_index, (_, entries) in enumerate(raw.items()):
        if season_index >= len(SEASONS):
            break
        for entry in entries or ():
            event = CalendarEvent(
                day=parse_int(entry.get("day"), 1),
                season=SEASONS[season_index],
                name=str(entry.get("name", "")),
                festival=bool(entry.get("festival", False)),
            )
            events[event.date] = event
    return events
