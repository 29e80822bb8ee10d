import time
from datetime import datetime, timezone

_started = time.monotonic()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def uptime_seconds() -> float:
    return round(time.monotonic() - _started, 3)


def start_of_month(now: datetime = None) -> datetime:
    """
    First instant of the current calendar month in server-local time,
    returned as a UTC datetime so it compares against stored timestamps.
    """
    local = (now or utcnow()).astimezone()
    # naive local wall time, so the offset in force on the 1st is applied
    first = datetime(local.year, local.month, 1).astimezone()
    return first.astimezone(timezone.utc)
