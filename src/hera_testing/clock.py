"""Wall clock helpers.

Timestamps exchanged through templates and documents are ISO-8601 UTC
strings with millisecond precision, e.g. `2025-01-01T00:01:00.000Z`.
"""

from datetime import UTC, date, datetime


def now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def parse_timestamp(value: str | datetime | date) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive values are assumed to be UTC. Dates are taken at midnight.

    Args:
        value: ISO-8601 string, datetime or date.

    Returns:
        Parsed datetime, or `None` if the value is not a timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)  # noqa: DTZ001
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)

    return parsed.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with milliseconds and `Z` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)

    value = value.astimezone(UTC)
    millis = value.microsecond // 1000

    return f'{value:%Y-%m-%dT%H:%M:%S}.{millis:03d}Z'


def epoch_millis(value: datetime) -> int:
    """Return milliseconds since the Unix epoch."""
    return int(value.timestamp() * 1000)
