from datetime import UTC, datetime


def utc_now() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.now(UTC).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp read from the store."""
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value
