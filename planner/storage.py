from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Protocol

from planner.farm import Year
from planner.validation import DATA_VERSION

logger = logging.getLogger(__name__)

PLANS_KEY = "plans"
PLAYER_KEY = "player"
# Unversioned key written by the first planner release.
LEGACY_PLANS_KEY = "crops"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get(self, key: str) -> str | None:
        return self.items.get(key)

    def set(self, key: str, value: str) -> None:
        self.items[key] = value


class JsonFileStore:
    """A key-value store persisted as one JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")


def versioned_key(key: str, version: str = DATA_VERSION) -> str:
    return f"{key}_v{version}"


def save_json(store: KeyValueStore, key: str, data: Any, version: str = DATA_VERSION) -> None:
    store.set(versioned_key(key, version), json.dumps(data))


def load_json(store: KeyValueStore, key: str, version: str = DATA_VERSION) -> Any:
    raw = store.get(versioned_key(key, version))
    if not raw:
        return None
    return json.loads(raw)


def save_plans(store: KeyValueStore, years: Iterable[Year], version: str = DATA_VERSION) -> None:
    save_json(store, PLANS_KEY, [year.get_data() for year in years], version)


def load_plans(store: KeyValueStore, version: str = DATA_VERSION) -> list[Any] | None:
    return load_json(store, PLANS_KEY, version)


def save_player(store: KeyValueStore, player_data: dict[str, Any], version: str = DATA_VERSION) -> None:
    save_json(store, PLAYER_KEY, player_data, version)


def load_player(store: KeyValueStore, version: str = DATA_VERSION) -> dict[str, Any] | None:
    return load_json(store, PLAYER_KEY, version)


def load_legacy_plans(store: KeyValueStore) -> Any:
    raw = store.get(LEGACY_PLANS_KEY)
    if not raw:
        return None
    return json.loads(raw)
