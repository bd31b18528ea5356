from datetime import datetime, timedelta, timezone

SECONDS_PER_HOUR = 3600
TWO_DAYS_S = 60 * 60 * 24 * 2
THIRTY_DAYS_S = 60 * 60 * 24 * 30


def to_utc(dt: datetime) -> datetime:
    """Returns `dt` in UTC. Naive datetimes are assumed to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def current_hour_utc() -> datetime:
    """Returns the start of the current hour in UTC."""
    return datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)


def hourly_timestamps(start: datetime, count: int) -> list[float]:
    """Returns `count` POSIX timestamps, one hour apart, beginning at `start`.

    Args:
        start: The first timestamp. Naive datetimes are treated as UTC.
        count: How many timestamps to generate.

    Raises:
        ValueError: If `count` is negative.
    """
    if count < 0:
        err_msg = "Timestamp count must be non-negative."
        raise ValueError(err_msg)
    start_utc = to_utc(start)
    return [(start_utc + timedelta(hours=i)).timestamp() for i in range(count)]


def tick_format(span_seconds: float) -> str:
    """Chooses a strftime format suited to the visible time span."""
    if span_seconds < TWO_DAYS_S:
        return "%H:%M"
    if span_seconds < THIRTY_DAYS_S:
        return "%b %d"
    return "%Y-%m-%d"


def format_tick(value: float, span_seconds: float) -> str:
    """Formats a POSIX timestamp as an axis label for the given span."""
    return datetime.fromtimestamp(value, tz=timezone.utc).strftime(
        tick_format(span_seconds)
    )
