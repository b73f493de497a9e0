from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    if not value.strip():
        return None
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_window(moment: datetime) -> tuple[datetime, datetime]:
    """Half-open ``[local midnight, next local midnight)`` around ``moment``."""
    start = datetime.combine(moment.date(), time.min)
    return start, start + timedelta(days=1)


def inclusive_day_range(start: date, end: date) -> tuple[datetime, datetime]:
    """``start 00:00:00.000`` to ``end 23:59:59.999`` (millisecond precision)."""
    return (
        datetime.combine(start, time.min),
        datetime.combine(end, time(23, 59, 59, 999000)),
    )


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def truncate_to_millis(moment: datetime) -> datetime:
    """Drop sub-millisecond precision so the value survives DATETIME(3) unchanged."""
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)
