# barbershop/core.py

import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from .errors import InvalidInput

REFERENCE_PATTERN = re.compile(r"[0-9a-fA-F]{24}")
UTC_SUFFIX = re.compile(r"[zZ]$")


# References: 24 hex characters, like document-store object ids
def new_reference() -> str:
    return secrets.token_hex(12)


def is_reference(value: Optional[str]) -> bool:
    return isinstance(value, str) and REFERENCE_PATTERN.fullmatch(value) is not None


# Full name <-> {first, last}: join with a space, split at the first space
def join_full_name(name: Optional[dict]) -> str:
    name = name or {}
    return f"{name.get('first', '')} {name.get('last', '')}"


def split_full_name(full_name: str) -> dict:
    first, space, last = full_name.partition(" ")
    if not space:
        # no space: everything lands in the last name
        return {"first": "", "last": full_name}
    return {"first": first, "last": last}


# Timestamps are UTC with millisecond precision
def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(UTC_SUFFIX.sub("+00:00", value.strip()))
    except (AttributeError, ValueError):
        raise InvalidInput(f"Invalid time: {value!r}")
    parsed = as_utc(parsed)
    return parsed.replace(microsecond=parsed.microsecond // 1000 * 1000)


def parse_day(value: str) -> datetime:
    # date: yyyy-mm-dd, start of that day in UTC
    try:
        day = datetime.strptime(value, "%Y-%m-%d")
    except (TypeError, ValueError):
        raise InvalidInput(f"Invalid date: {value!r}")
    return day.replace(tzinfo=timezone.utc)


def day_bounds(value: str) -> tuple[datetime, datetime]:
    start = parse_day(value)
    return start, start + timedelta(days=1)


def to_iso(value: datetime) -> str:
    value = as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
