from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from planner.config import PlannerConfig
from planner.crops import Crop, load_crops

logger = logging.getLogger(__name__)


class DataError(RuntimeError):
    pass


DATA_DIR = Path(os.getenv("PLANNER_DATA_DIR", Path(__file__).resolve().parents[1] / "data"))

CONFIG_FILENAME = "config.json"
CROPS_FILENAME = "crops.json"


def _load_json(path: Path) -> Any:
    if not path.exists():
        raise DataError(f"Missing data file: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DataError(f"Invalid JSON in {path}: {exc.msg}") from exc


@dataclass(frozen=True)
class LoadedData:
    config: PlannerConfig
    crops: tuple[Crop, ...]


def load_data(data_dir: Path = DATA_DIR) -> LoadedData:
    """
    Load the planner config and crop catalog once at startup.

    Crops from the crop catalog file replace any crops listed in the config.
    """
    data_dir = Path(data_dir)
    raw_config = _load_json(data_dir / CONFIG_FILENAME)
    if not isinstance(raw_config, dict):
        raise DataError(f"{data_dir / CONFIG_FILENAME} must contain a JSON object")
    try:
        config = PlannerConfig.from_dict(raw_config)
    except (ValueError, TypeError, AttributeError) as exc:
        raise DataError(f"Invalid planner config: {exc}") from exc

    raw_crops: Any = config.crops
    crops_path = data_dir / CROPS_FILENAME
    if crops_path.exists():
        catalog = _load_json(crops_path)
        if isinstance(catalog, dict) and catalog.get("crops"):
            raw_crops = catalog["crops"]
        elif isinstance(catalog, list):
            raw_crops = catalog

    try:
        crops = tuple(load_crops(raw_crops))
    except (ValueError, TypeError, AttributeError) as exc:
        raise DataError(f"Invalid crop catalog in {data_dir}: {exc}") from exc
    if not crops:
        raise DataError(f"No crops found in {data_dir}")
    logger.info("Loaded %d crops and %d fertilizers from %s", len(crops), len(config.fertilizers), data_dir)
    return LoadedData(config=config, crops=crops)
