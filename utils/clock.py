"""
utils/clock.py
-----------------
Time helpers for attendance.

Timestamps are stored as naive UTC datetimes (what PyMongo hands back).
Calendar days ("today", date-only query bounds) are computed in the
configured ATTENDANCE_TIMEZONE, falling back to the server's local time.
"""

import calendar
from datetime import datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from flask import current_app, has_app_context

PERIODS = ("week", "month", "quarter", "year")
DEFAULT_PERIOD = "month"


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def local_tz():
    """
    Configured zone, or None for the system zone. None is passed straight to
    astimezone(), which applies the system rules (DST included) per instant.
    """
    name = current_app.config.get("ATTENDANCE_TIMEZONE") if has_app_context() else None
    return ZoneInfo(name) if name else None


def to_utc(dt):
    """Aware (or system-local naive) datetime -> naive UTC."""
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def to_local(dt, tz=None):
    """Naive UTC datetime -> aware datetime in the attendance timezone."""
    return dt.replace(tzinfo=timezone.utc).astimezone(tz or local_tz())


def day_key(now=None, tz=None):
    """Local calendar date of `now` as YYYY-MM-DD."""
    return to_local(now or utcnow(), tz).date().isoformat()


def day_window(now=None, tz=None):
    """
    Half-open UTC window [local midnight, next local midnight) containing `now`.
    """
    tz = tz or local_tz()
    today = to_local(now or utcnow(), tz).date()
    start = datetime.combine(today, time.min, tzinfo=tz)
    end = datetime.combine(today + timedelta(days=1), time.min, tzinfo=tz)
    return to_utc(start), to_utc(end)


def local_time_of_day(now=None, tz=None):
    return to_local(now or utcnow(), tz).time()


def parse_clock(value):
    """'HH:MM' or 'HH:MM:SS' -> time"""
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Bad time: {value}")


def months_ago(dt, months):
    # clamps to the last day of the target month (Mar 31 - 1 month -> Feb 28/29)
    month_index = dt.year * 12 + (dt.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def period_start(period, now=None):
    """Cutoff for the stats window; unknown periods behave like 'month'."""
    now = now or utcnow()
    if period == "week":
        return now - timedelta(days=7)
    if period == "quarter":
        return months_ago(now, 3)
    if period == "year":
        return months_ago(now, 12)
    return months_ago(now, 1)


def is_date_only(value):
    return len(value) == 10 and value[4] == "-" and value[7] == "-"


def parse_datetime(value, tz=None):
    """
    Parse a query-string date into naive UTC.

    Accepts YYYY-MM-DD (local midnight) or an ISO-8601 datetime; a datetime
    without an offset is read as local time. Raises ValueError.
    """
    value = value.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz or local_tz())
    return to_utc(parsed)


def isoformat(dt):
    """Datetime -> ISO-8601 UTC string with a Z suffix."""
    if dt.tzinfo is not None:
        dt = to_utc(dt)
    return dt.isoformat(timespec="milliseconds") + "Z"
