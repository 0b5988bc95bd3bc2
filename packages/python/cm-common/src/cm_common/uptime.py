"""Human-readable uptime from a stack's ``started_at`` timestamp."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

log = logging.getLogger(__name__)

_MINUTE = 60
_HOUR = 3600
_DAY = 86400


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 or epoch-seconds timestamp; naive values are UTC."""
    if not value or not value.strip():
        return None
    raw = value.strip()
    try:
        if raw.lstrip("-").isdigit():
            return datetime.fromtimestamp(int(raw), tz=timezone.utc)
        parsed = datetime.fromisoformat(raw)
    except (ValueError, OverflowError, OSError):
        log.debug("Unparseable timestamp: %r", raw)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}" + ("" if value == 1 else "s")


def humanize_elapsed(seconds: int) -> str:
    """Bucket an elapsed duration into mins/hours/days/weeks/months/years."""
    seconds = max(seconds, 0)
    mins = seconds // _MINUTE
    hours = seconds // _HOUR
    days = seconds // _DAY
    if mins < 120:
        return _plural(mins, "min")
    if hours < 48:
        return _plural(hours, "hour")
    if days < 14:
        return _plural(days, "day")
    if days // 7 < 8:
        return _plural(days // 7, "week")
    if days // 30 < 24:
        return _plural(days // 30, "month")
    return _plural(days // 365, "year")


def format_uptime(started_at: str | None, now: datetime | None = None) -> str:
    """Return e.g. ``"3 hours"``, or ``""`` when the start time is unknown."""
    start = parse_timestamp(started_at)
    if start is None:
        return ""
    now = now or datetime.now(timezone.utc)
    return humanize_elapsed(int((now - start).total_seconds()))
