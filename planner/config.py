from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from planner.fertilizers import NO_FERTILIZER, Fertilizer
from planner.numeric import clamp_farming_level
from planner.seasons import CalendarEvent, build_event_calendar

Profession = Literal["none", "tiller", "agriculturist"]

_PROFESSIONS = ("none", "tiller", "agriculturist")


@dataclass(frozen=True)
class PlayerSettings:
    profession: Profession = "none"
    farming_level: int = 0
    settings: dict[str, Any] = field(default_factory=lambda: {"show_events": True}, compare=False)

    @property
    def tiller(self) -> bool:
        """Agriculturist requires Tiller, so both get the sell bonus."""
        return self.profession in ("tiller", "agriculturist")

    @property
    def agriculturist(self) -> bool:
        return self.profession == "agriculturist"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"profession": self.profession}
        if self.tiller:
            data["tiller"] = True
        if self.agriculturist:
            data["agriculturist"] = True
        data["settings"] = dict(self.settings)
        data["level"] = clamp_farming_level(self.farming_level)
        return data

    @staticmethod
    def from_dict(raw: dict[str, Any] | None) -> "PlayerSettings":
        """Build settings from saved player data, including legacy tiller/agriculturist flags."""
        if not raw:
            return PlayerSettings()
        profession = normalize_profession(raw.get("profession"))
        if profession == "none":
            if raw.get("agriculturist"):
                profession = "agriculturist"
            elif raw.get("tiller"):
                profession = "tiller"
        settings = raw.get("settings")
        return PlayerSettings(
            profession=profession,
            farming_level=clamp_farming_level(raw.get("level", raw.get("farming_level", 0))),
            settings=dict(settings) if isinstance(settings, dict) else {"show_events": True},
        )


def normalize_profession(raw: Any) -> Profession:
    """Normalize a profession name; unknown values become "none"."""
    key = str(raw or "").strip().lower()
    if key in _PROFESSIONS:
        return key  # type: ignore[return-value]
    return "none"


def toggle_perk(player: PlayerSettings, key: str) -> PlayerSettings:
    """
    Toggle a profession perk checkbox. Agriculturist needs Tiller: enabling it
    enables Tiller, and disabling Tiller drops Agriculturist.
    """
    tiller = player.tiller
    agriculturist = player.agriculturist
    if key == "tiller":
        tiller = not tiller
        if not tiller:
            agriculturist = False
    elif key == "agriculturist":
        agriculturist = not agriculturist
        if agriculturist:
            tiller = True
    profession: Profession = "none"
    if agriculturist:
        profession = "agriculturist"
    elif tiller:
        profession = "tiller"
    return PlayerSettings(profession=profession, farming_level=player.farming_level, settings=player.settings)


@dataclass(frozen=True)
class PlannerConfig:
    """Static planner data: crop records, fertilizer catalog and event calendar."""

    crops: tuple[dict[str, Any], ...] = ()
    fertilizers: dict[str, Fertilizer] = field(default_factory=lambda: {"none": NO_FERTILIZER})
    events: dict[int, CalendarEvent] = field(default_factory=dict)

    @staticmethod
    def from_json_file(path: str | Path) -> "PlannerConfig":
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return PlannerConfig.from_dict(raw)

    @staticmethod
    def from_dict(raw: dict[str, Any]) -> "PlannerConfig":
        fertilizers = _parse_fertilizers(raw.get("fertilizer"))
        crops_raw = raw.get("crops") or ()
        if not isinstance(crops_raw, (list, tuple)):
            raise ValueError("config crops must be a list")
        events_raw = raw.get("events") or {}
        if not isinstance(events_raw, dict):
            raise ValueError("config events must be a mapping of season -> events")
        return PlannerConfig(
            crops=tuple(crops_raw),
            fertilizers=fertilizers,
            events=build_event_calendar(events_raw),
        )


def _parse_fertilizers(raw: Any) -> dict[str, Fertilizer]:
    """Parse the fertilizer list, always keeping the "none" sentinel."""
    fertilizers: dict[str, Fertilizer] = {"none": NO_FERTILIZER}
    if raw is None:
        return fertilizers
    if not isinstance(raw, (list, tuple)):
        raise ValueError("config fertilizer must be a list")
    for entry in raw:
        if not isinstance(entry, dict):
            raise ValueError("fertilizer entries must be objects")
        fertilizer = Fertilizer.from_dict(entry)
        fertilizers[fertilizer.id] = fertilizer
    return fertilizers
