"""Timezone helpers.

Rows store naive wall-clock times in the application timezone (India by
default, where the telecalling team works); entities carry aware datetimes.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from leaddesk.config import get_settings

FALLBACK_TIMEZONE: Final[str] = "Asia/Kolkata"
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)\s*(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def _parse_utc_offset(value: str) -> tzinfo | None:
    match = _UTC_OFFSET.match(value)
    if match is None:
        return None
    delta = timedelta(hours=int(match["hours"]), minutes=int(match["minutes"] or 0))
    return timezone(-delta if match["sign"] == "-" else delta)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the zone named by ``APP_TIMEZONE``.

    Both IANA names and ``UTC+05:30`` style offsets are accepted; anything else
    resolves to ``Asia/Kolkata``.
    """

    name = (get_settings().app_timezone or "").strip() or FALLBACK_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return _parse_utc_offset(name) or ZoneInfo(FALLBACK_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current wall-clock time in the app timezone, used as a column default."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach (naive input) or convert to (aware input) the app timezone."""

    if value is None:
        return None
    zone = get_app_timezone()
    return value.replace(tzinfo=zone) if value.tzinfo is None else value.astimezone(zone)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` as a naive wall-clock time in the app timezone."""

    if value is None:
        return None
    return ensure_app_timezone(value).replace(tzinfo=None)
