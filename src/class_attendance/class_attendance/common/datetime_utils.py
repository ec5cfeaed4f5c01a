from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DATE_FORMAT, DEFAULT_TIMEZONE
from ..core.enums import RecapPeriod
from ..core.exceptions import ValidationError

_tz = ZoneInfo(DEFAULT_TIMEZONE)


def configure_timezone(name: str) -> None:
    """Set the local timezone used for day boundaries and display dates."""
    global _tz
    _tz = ZoneInfo(name)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Tanggal tidak valid: {value!r}") from None


def now_local() -> datetime:
    """Current time in the configured timezone.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now(_tz)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=_tz)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=_tz)


def to_local_date(value: datetime) -> date:
    """Local calendar date of a stored timestamp (naive values are taken as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(_tz).date()


def period_range(period: RecapPeriod, today: date) -> tuple[date, date]:
    """Date range covered by a recap period.

    Weeks run Sunday to Saturday.
    """
    period = RecapPeriod(period)
    if period == RecapPeriod.DAILY:
        return today, today
    if period == RecapPeriod.WEEKLY:
        # date.weekday(): Monday=0 .. Sunday=6
        start = today - timedelta(days=(today.weekday() + 1) % 7)
        return start, start + timedelta(days=6)

    start = today.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


def resolve_range(
    *,
    period: Optional[str],
    start: Optional[str],
    end: Optional[str],
    today: Optional[date] = None,
) -> tuple[date, date]:
    """Explicit start/end win over a named period; monthly is the default."""
    if start or end:
        if not (start and end):
            raise ValidationError("Parameter start dan end harus diisi bersamaan")
        start_d, end_d = parse_iso_date(start), parse_iso_date(end)
        if end_d < start_d:
            raise ValidationError("Tanggal akhir sebelum tanggal awal")
        return start_d, end_d

    try:
        recap_period = RecapPeriod(period or RecapPeriod.MONTHLY.value)
    except ValueError:
        raise ValidationError(f"Periode tidak dikenal: {period!r}") from None
    return period_range(recap_period, today or now_local().date())
