# tests/test_timestamps.py

from datetime import date, datetime, timezone

import pytest

from core.errors import ValidationError
from core.timestamps import (
    normalize_document,
    normalize_timestamp,
    parse_timestamp,
    serialize_for_store,
    to_datetime,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-05-01T10:00:00Z", "2024-05-01T10:00:00+00:00"),
        ("2024-05-01T13:00:00+03:00", "2024-05-01T10:00:00+00:00"),
        (datetime(2024, 5, 1, 10, 0), "2024-05-01T10:00:00+00:00"),
        (date(2024, 5, 1), "2024-05-01T00:00:00+00:00"),
        (1714557600, "2024-05-01T10:00:00+00:00"),
        (1714557600000, "2024-05-01T10:00:00+00:00"),
        ({"seconds": 1714557600, "nanoseconds": 0}, "2024-05-01T10:00:00+00:00"),
    ],
)
def test_normalize_timestamp(value, expected):
    assert normalize_timestamp(value) == expected


def test_store_native_timestamp_object():
    class NativeTimestamp:
        def to_datetime(self):
            return datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    assert normalize_timestamp(NativeTimestamp()) == "2024-05-01T10:00:00+00:00"


@pytest.mark.parametrize("value", ["next tuesday", "", None, True, {"foo": 1}])
def test_unparseable_values_pass_through(value):
    assert to_datetime(value) is None
    assert normalize_timestamp(value) == value


def test_normalize_document_only_touches_timestamp_fields():
    doc = normalize_document({"id": "1", "createdAt": "2024-05-01T10:00:00Z", "quantity": 1714557600})
    assert doc == {"id": "1", "createdAt": "2024-05-01T10:00:00+00:00", "quantity": 1714557600}
    assert normalize_document(None) is None


def test_serialize_for_store():
    payload = serialize_for_store({"date": datetime(2024, 5, 1, tzinfo=timezone.utc), "name": "x"})
    assert payload == {"date": "2024-05-01T00:00:00+00:00", "name": "x"}


def test_parse_timestamp_for_writes():
    assert parse_timestamp("2024-05-01T10:00:00Z") == "2024-05-01T10:00:00+00:00"

    with pytest.raises(ValidationError) as exc:
        parse_timestamp("next tuesday", "startDate")
    assert "'startDate'" in exc.value.message
