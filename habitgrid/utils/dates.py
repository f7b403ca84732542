"""
Reference-timezone helpers

Every "today" and every canonical YYYY-MM-DD day string in the system is
computed in one fixed zone (Settings.TIMEZONE), never in the caller's local
zone, so that clients in different zones classify the same stored days
identically.
"""
import re
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from habitgrid.config import get_settings

DAY_FORMAT = "%Y-%m-%d"
_DAY_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def reference_zone(tz_name: str | None = None) -> ZoneInfo:
    return ZoneInfo(tz_name or get_settings().TIMEZONE)


def local_now(tz_name: str | None = None) -> datetime:
    """Current instant as an aware datetime in the reference zone."""
    return datetime.now(reference_zone(tz_name))


def local_today(tz_name: str | None = None) -> date:
    return local_now(tz_name).date()


def to_day(value: date | datetime | str, tz_name: str | None = None) -> date:
    """
    Normalize a day-like value to a calendar date.

    - "YYYY-MM-DD" strings are parsed strictly
    - aware datetimes are converted to the reference zone first
    - naive datetimes are taken as already local
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(reference_zone(tz_name)).date()
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not _DAY_PATTERN.fullmatch(text):
            raise ValueError(f"Invalid day {value!r}, expected YYYY-MM-DD")
        return date.fromisoformat(text)
    raise TypeError(f"Cannot interpret {value!r} as a calendar day")


def format_day(value: date | datetime | str, tz_name: str | None = None) -> str:
    """Canonical YYYY-MM-DD form of a day-like value."""
    return to_day(value, tz_name).strftime(DAY_FORMAT)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
