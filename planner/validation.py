from __future__ import annotations

import json
from typing import Any

DATA_VERSION = "2"


class ValidationError(ValueError):
    """Raised when input data is logically invalid."""


class ImportDataError(ValidationError):
    """Raised when an imported plan payload is rejected."""


def parse_import_payload(raw: str | bytes | dict[str, Any], version: str = DATA_VERSION) -> list[Any]:
    """
    Validate an exported plan payload and return its per-year plan list.

    Accepts the JSON text or an already decoded object.
    """
    if isinstance(raw, (str, bytes)):
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ImportDataError(f"import is not valid JSON: {exc.msg}") from exc
    else:
        payload = raw
    validate_import_payload(payload, version)
    return list(payload["plans"])


def validate_import_payload(payload: Any, version: str = DATA_VERSION) -> None:
    if not isinstance(payload, dict):
        raise ImportDataError("import must be a JSON object")
    if not isinstance(payload.get("plans"), list):
        raise ImportDataError("import has no plan list")
    found = payload.get("version")
    if str(found) != str(version):
        raise ImportDataError(f"import version {found!r} does not match data version {version!r}")
    for index, year in enumerate(payload["plans"]):
        _validate_year(year, index)


def _validate_year(year: Any, index: int) -> None:
    """A year is null or {kind: {day: [plans]}}."""
    if year is None:
        return
    if not isinstance(year, dict):
        raise ImportDataError(f"year {index + 1} must be an object or null")
    for kind, days in year.items():
        if not isinstance(days, dict):
            raise ImportDataError(f"year {index + 1} {kind} plans must be a day -> plans object")
        for day, plans in days.items():
            if not isinstance(plans, list):
                raise ImportDataError(f"year {index + 1} {kind} plans for day {day!r} must be a list")


def validate_legacy_payload(payload: Any) -> dict[str, Any]:
    """Legacy saves are a flat {day: [plans]} map with greenhouse plans flagged inline."""
    if not isinstance(payload, dict):
        raise ImportDataError("legacy import must be a day -> plans object")
    for day, plans in payload.items():
        if not isinstance(plans, list):
            raise ImportDataError(f"legacy plans for day {day!r} must be a list")
    return payload
