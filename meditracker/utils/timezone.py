from datetime import datetime, timezone as dt_timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from meditracker.core.config import settings

# Everything is persisted as UTC-naive; these helpers sit at the edges.


def get_zoneinfo(tz_name: Optional[str] = None) -> Optional[ZoneInfo]:
    """Resolve a zone name (default DEFAULT_TIMEZONE); None for unknown names."""
    name = tz_name or settings.DEFAULT_TIMEZONE
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def utcnow() -> datetime:
    return datetime.now(dt_timezone.utc)


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Aware values are converted to UTC and stripped; naive values are taken as UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(dt_timezone.utc).replace(tzinfo=None)


def to_utc_aware(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=dt_timezone.utc)
    return value.astimezone(dt_timezone.utc)


def format_local(value: datetime, tz_name: Optional[str] = None) -> str:
    """e.g. '10 Jan 2025, 10:00 AM UTC' in the requested (or default) zone."""
    aware = to_utc_aware(value)
    tz = get_zoneinfo(tz_name)
    if tz is not None:
        aware = aware.astimezone(tz)
    return aware.strftime("%d %b %Y, %I:%M %p %Z").strip()
