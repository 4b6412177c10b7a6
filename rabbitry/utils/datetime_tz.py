from __future__ import annotations

from datetime import date, datetime, time, timezone

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE_NAME = "UTC"


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive values (SQLite drops tzinfo) and normalize aware ones."""
    if dt is None:
        return None
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def start_of_day_utc(d: date) -> datetime:
    if isinstance(d, datetime):
        return ensure_utc(d)
    return datetime.combine(d, time(0, 0), tzinfo=timezone.utc)


def is_valid_timezone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def farm_today(tz_name: str | None = None) -> date:
    """Today's calendar date in the farm's timezone."""
    tz = ZoneInfo(tz_name or DEFAULT_TIMEZONE_NAME)
    return datetime.now(timezone.utc).astimezone(tz).date()
