"""Local calendar helpers.

Timestamps are stored timezone-aware; "today" is always the calendar day of the
condominium's configured timezone.
"""

from datetime import UTC, date, datetime, time, tzinfo
from zoneinfo import ZoneInfo

from src.core.config import settings


def local_tz() -> ZoneInfo:
    """Timezone used for calendar-day comparisons."""
    return ZoneInfo(settings.timezone)


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(UTC)


def local_date(value: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of a timestamp in the given timezone.

    Naive datetimes are taken to be local already.
    """
    if tz is None or value.tzinfo is None:
        return value.date()
    return value.astimezone(tz).date()


def local_day_bounds(day: date, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """First and last instant of a local calendar day."""
    return datetime.combine(day, time.min, tzinfo=tz), datetime.combine(day, time.max, tzinfo=tz)


def ensure_aware(value: datetime, tz: tzinfo | None = None) -> datetime:
    """Attach the local timezone to a naive datetime; aware values pass through."""
    if value.tzinfo is not None:
        return value
    return value.replace(tzinfo=tz or local_tz())
