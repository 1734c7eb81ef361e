import math
from datetime import date, datetime, timedelta
from typing import Optional, Union

import pandas as pd
import pytz

DateLike = Union[str, date, datetime, None]

_DAY = timedelta(days=1)

_STATUS_STYLES = {
    "active": {"label": "Current Session", "icon": "✅", "color": "green"},
    "upcoming": {"label": "Upcoming", "icon": "🕒", "color": "blue"},
    "completed": {"label": "Completed", "icon": "⚠️", "color": "gray"},
}


def to_utc(value: DateLike) -> Optional[datetime]:
    """
    Coerce an API date ("2025-01-05", "2025-01-05T00:00:00.000Z") or a
    date/datetime to an aware UTC datetime. Empty/invalid -> None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        ts = pd.to_datetime(str(value).strip(), errors="coerce", utc=True)
        if pd.isna(ts):
            return None
        return ts.to_pydatetime()
    if dt.tzinfo is None:
        return pytz.UTC.localize(dt)
    return dt.astimezone(pytz.UTC)


def now_utc() -> datetime:
    return datetime.now(pytz.UTC)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def calculate_progress(start: DateLike, end: DateLike, now: DateLike = None) -> int:
    """Elapsed share of [start, end] as a whole percentage in [0, 100]."""
    start_dt, end_dt = to_utc(start), to_utc(end)
    now_dt = to_utc(now) or now_utc()
    if start_dt is None or end_dt is None:
        return 0

    total = (end_dt - start_dt).total_seconds()
    elapsed = (now_dt - start_dt).total_seconds()

    if elapsed <= 0:
        return 0
    if elapsed >= total:
        return 100
    return min(100, max(0, _round_half_up(elapsed / total * 100)))


def calculate_days_remaining(end: DateLike, now: DateLike = None) -> int:
    end_dt = to_utc(end)
    if end_dt is None:
        return 0
    now_dt = to_utc(now) or now_utc()
    return max(0, math.ceil((end_dt - now_dt) / _DAY))


def status_style(status: Optional[str]) -> dict:
    style = _STATUS_STYLES.get(status or "")
    if style is None:
        return {"label": status or "", "icon": "📅", "color": "gray"}
    return dict(style)


def display_progress(status: Optional[str], start: DateLike, end: DateLike, now: DateLike = None) -> int:
    # Only active sessions track real progress
    if status == "active":
        return calculate_progress(start, end, now)
    if status == "completed":
        return 100
    return 0


def format_date(value: DateLike) -> str:
    dt = to_utc(value)
    if dt is None:
        return "—"
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


def to_input_date(value: DateLike) -> Optional[date]:
    """Date part of an API timestamp, for st.date_input defaults."""
    dt = to_utc(value)
    return dt.date() if dt else None
