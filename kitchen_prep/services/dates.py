"""Calendar date helpers.

Dates are computed from UTC wall-clock time. Callers that need a
deterministic result pass the reference date explicitly.
"""

from datetime import date, datetime, timedelta, timezone


def utc_today(now: datetime | None = None) -> date:
    """Return the current calendar date in UTC.

    Args:
        now: Reference instant. Naive values are taken to be UTC.

    Returns:
        The UTC calendar date of ``now`` (or of the current time).
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date()


def tomorrow(today: date | None = None) -> date:
    """Return the day after ``today`` (defaults to the UTC date)."""
    if today is None:
        today = utc_today()
    return today + timedelta(days=1)


def resolve_date(value: str, today: date | None = None) -> date:
    """Resolve ``today``, ``tomorrow`` or an ISO ``YYYY-MM-DD`` string.

    Raises:
        ValueError: If the value is neither keyword nor a valid ISO date.
    """
    if today is None:
        today = utc_today()
    keyword = value.strip().lower()
    if keyword == "today":
        return today
    if keyword == "tomorrow":
        return tomorrow(today)
    return date.fromisoformat(value.strip())
