from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union

from babel.dates import format_date, format_datetime

# "19 Oct 2026, 09:47 am" in en_IN
DISPLAY_DATETIME_PATTERN = "d MMM yyyy, hh:mm a"
DISPLAY_DATE_PATTERN = "d MMM yyyy"

DateLike = Optional[Union[datetime, date, str]]


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 datetime string and normalize to UTC-naive datetime.

    - None / "" -> None
    - "YYYY-MM-DDTHH:MM" (naive) is interpreted as UTC
    - "...Z" or "...+/-HH:MM" is converted to UTC and tzinfo is stripped
    """
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None

    # Accept trailing Z
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)

    if dt.tzinfo is None:
        return dt

    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse "YYYY-MM-DD" (or a full timestamp, keeping its date part)."""
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None
    if len(s) == 10:
        return date.fromisoformat(s)
    dt = parse_iso_datetime(s)
    return dt.date() if dt else None


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt_utc.isoformat().replace("+00:00", "Z")


def to_iso_date(value: Optional[Union[date, str]]) -> Optional[str]:
    """Query-string form of a calendar date: YYYY-MM-DD."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    parsed = parse_iso_date(value)
    return parsed.isoformat() if parsed else None


def format_display_datetime(value: DateLike, locale: str = "en_IN") -> str:
    """
    Render a stored timestamp as "day month-abbrev year, hour:minute".

    The value is shown in whatever offset it already carries; naive values
    are rendered as-is. Date-only values fall back to format_display_date.
    A missing or blank value renders as "".
    """
    if isinstance(value, str):
        s = value.strip()
        if len(s) == 10:
            return format_display_date(s, locale)
        value = parse_iso_datetime(s)
    if value is None:
        return ""
    if not isinstance(value, datetime):
        return format_display_date(value, locale)
    return format_datetime(
        value,
        DISPLAY_DATETIME_PATTERN,
        tzinfo=value.tzinfo or timezone.utc,
        locale=locale,
    )


def format_display_date(value: DateLike, locale: str = "en_IN") -> str:
    if isinstance(value, str):
        value = parse_iso_date(value)
    if value is None:
        # babel reads None as "now"
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return format_date(value, DISPLAY_DATE_PATTERN, locale=locale)
