import datetime
from zoneinfo import ZoneInfo


def today_in(tz_name: str, now: datetime.datetime | None = None) -> datetime.date:
    """Civil date in *tz_name* at *now* (default: the current instant)."""
    instant = now if now is not None else datetime.datetime.now(datetime.UTC)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=datetime.UTC)
    return instant.astimezone(ZoneInfo(tz_name)).date()


def date_range(start: datetime.date, days: int) -> list[datetime.date]:
    """*days* consecutive dates beginning with *start*."""
    if days < 1:
        raise ValueError(f"days must be positive, got {days}")
    return [start + datetime.timedelta(days=offset) for offset in range(days)]


def parse_date(value: str) -> datetime.date:
    return datetime.date.fromisoformat(value)
