# tests/test_core.py

from datetime import datetime, timedelta, timezone

import pytest

from barbershop.core import (
    day_bounds,
    is_reference,
    join_full_name,
    new_reference,
    parse_timestamp,
    split_full_name,
    to_iso,
)
from barbershop.errors import InvalidInput


def test_split_full_name_at_first_space():
    assert split_full_name("Anna Maria Lopez") == {"first": "Anna", "last": "Maria Lopez"}


def test_split_full_name_without_space_goes_to_last():
    assert split_full_name("Prince") == {"first": "", "last": "Prince"}


def test_join_full_name():
    assert join_full_name({"first": "Anna", "last": "Maria Lopez"}) == "Anna Maria Lopez"


def test_references():
    ref = new_reference()
    assert len(ref) == 24
    assert is_reference(ref)
    assert not is_reference("not-an-id")
    assert not is_reference(ref + "0")
    assert not is_reference(None)


def test_parse_timestamp_accepts_z_and_offsets():
    expected = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert parse_timestamp("2024-03-01T10:00:00Z") == expected
    assert parse_timestamp("2024-03-01T12:00:00+02:00") == expected
    assert parse_timestamp("2024-03-01T10:00:00") == expected


def test_parse_timestamp_keeps_milliseconds_only():
    parsed = parse_timestamp("2024-03-01T10:00:00.123456Z")
    assert parsed.microsecond == 123000


def test_parse_timestamp_rejects_garbage():
    with pytest.raises(InvalidInput):
        parse_timestamp("tomorrow-ish")


def test_day_bounds():
    start, end = day_bounds("2024-02-28")
    assert start == datetime(2024, 2, 28, tzinfo=timezone.utc)
    assert end - start == timedelta(days=1)

    with pytest.raises(InvalidInput):
        day_bounds("28/02/2024")


def test_to_iso():
    value = datetime(2024, 3, 1, 23, 59, 59, 5000, tzinfo=timezone.utc)
    assert to_iso(value) == "2024-03-01T23:59:59.005Z"
    assert to_iso(datetime(2024, 3, 2, 1, 0, tzinfo=timezone(timedelta(hours=1)))) == "2024-03-02T00:00:00.000Z"


def test_parse_timestamp_lowercase_z_and_short_fraction():
    assert parse_timestamp("2024-03-01T10:00:00z") == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert parse_timestamp("2024-03-01T10:00:00.5Z").microsecond == 500000
