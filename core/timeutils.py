"""
core/timeutils.py
────────────────────────────────────────────────────────────────────────
Calendar-day and duration helpers shared by the timer and the
aggregation engine.

Days are always *local* days: an aware timestamp is converted into the
caller's timezone before its date is taken.  Naive timestamps are
assumed to already be local.
"""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo

MS_PER_HOUR = 3_600_000


def local_day(ts: datetime, tz: tzinfo | None = None) -> date:
    if tz is not None and ts.tzinfo is not None:
        ts = ts.astimezone(tz)
    return ts.date()


def start_of_day(day: date, tz: tzinfo | None = None) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def millis_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() * 1000


def hours_between(start: datetime, end: datetime) -> float:
    return millis_between(start, end) / MS_PER_HOUR


def parse_timestamp(value: str | datetime, tz: tzinfo | None = None) -> datetime:
    """
    Accept a datetime or an ISO-8601 string (a trailing ``Z`` is allowed).
    Naive results are pinned to `tz` when one is given.

    Raises ValueError on anything unparseable.
    """
    if isinstance(value, datetime):
        ts = value
    else:
        text = str(value).strip()
        if not text:
            raise ValueError("empty timestamp")
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        ts = datetime.fromisoformat(text)
    if ts.tzinfo is None and tz is not None:
        ts = ts.replace(tzinfo=tz)
    return ts


def format_clock(ms: float) -> str:
    """HH:MM:SS of the absolute value of `ms`."""
    total = int(abs(ms) // 1000)
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_duration(start: datetime, end: datetime | None) -> str:
    if end is None:
        return "In progress..."
    ms = millis_between(start, end)
    h = int(ms // MS_PER_HOUR)
    m = int((ms % MS_PER_HOUR) // 60_000)
    return f"{h}h {m}m"


def format_stamp(ts: datetime, tz: tzinfo | None = None) -> str:
    """e.g. 'Jan 5, 2025 · 7:30 AM'"""
    if tz is not None and ts.tzinfo is not None:
        ts = ts.astimezone(tz)
    hour = ts.hour % 12 or 12
    return f"{ts:%b} {ts.day}, {ts.year} · {hour}:{ts:%M %p}"
