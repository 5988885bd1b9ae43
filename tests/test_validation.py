import json

import pytest

from planner.validation import (
    ImportDataError,
    ValidationError,
    parse_import_payload,
    validate_legacy_payload,
)


def test_parse_import_payload_accepts_text_and_objects():
    payload = {"plans": [{"farm": {"1": [{"crop": "parsnip", "amount": 1}]}}], "version": "2"}
    assert parse_import_payload(json.dumps(payload)) == payload["plans"]
    assert parse_import_payload(json.dumps(payload).encode("utf-8")) == payload["plans"]
    assert parse_import_payload(payload) == payload["plans"]
    assert parse_import_payload({"plans": [], "version": "2"}) == []
    assert parse_import_payload({"plans": [None, {}], "version": "2"}) == [None, {}]


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[]",
        json.dumps({"version": "2"}),
        json.dumps({"plans": {}, "version": "2"}),
        json.dumps({"plans": []}),
        json.dumps({"plans": [], "version": "1"}),
        json.dumps({"plans": [[1]], "version": "2"}),
        json.dumps({"plans": ["x"], "version": "2"}),
        json.dumps({"plans": [{"farm": {"1": 5}}], "version": "2"}),
        json.dumps({"plans": [{"farm": ["1"]}], "version": "2"}),
    ],
)
def test_parse_import_payload_rejects(raw):
    with pytest.raises(ImportDataError):
        parse_import_payload(raw)


def test_import_error_is_validation_error():
    assert issubclass(ImportDataError, ValidationError)
    assert issubclass(ValidationError, ValueError)


def test_validate_legacy_payload():
    payload = {"1": [{"crop": "parsnip"}]}
    assert validate_legacy_payload(payload) is payload
    with pytest.raises(ImportDataError):
        validate_legacy_payload([])
    with pytest.raises(ImportDataError):
        validate_legacy_payload({"1": {"crop": "parsnip"}})
