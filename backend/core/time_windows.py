"""
Week and timestamp helpers.

Weeks start on Monday at 00:00:00 in the timezone of the instant passed in.
Pod commitments are keyed by that Monday's ISO date, and progress, streaks
and fatigue all bucket sessions with the helpers below.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

ONE_WEEK = timedelta(days=7)


def _local_now() -> datetime:
    return datetime.now().astimezone()


def current_week_start(now: Optional[datetime] = None) -> datetime:
    """
    Get the start of the week containing ``now``.

    Args:
        now: Reference instant. Defaults to the current local time.

    Returns:
        Monday 00:00:00 of that week, carrying ``now``'s tzinfo
    """
    if now is None:
        now = _local_now()
    monday = now.date() - timedelta(days=now.weekday())
    return datetime.combine(monday, time.min, tzinfo=now.tzinfo)


def week_window(week_start: datetime, weeks_back: int = 0) -> Tuple[datetime, datetime]:
    """
    Get the half-open window [start, end) of a week relative to ``week_start``.

    Args:
        week_start: Start of the reference week
        weeks_back: 0 for the reference week, 1 for the week before, ...

    Returns:
        (start, end) where end = start + 7 days
    """
    start = week_start - ONE_WEEK * weeks_back
    return start, start + ONE_WEEK


def week_start_date(now: Optional[datetime] = None) -> str:
    """ISO date of the Monday of the week containing ``now`` (YYYY-MM-DD)."""
    return current_week_start(now).date().isoformat()


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse a store timestamp into an aware datetime.

    Accepts datetimes, dates and ISO-8601 strings with a ``Z`` suffix or an
    explicit offset. Naive values are taken to be UTC.

    Returns:
        Aware datetime, or None when the value is empty or unparseable
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Current local time when ``now`` is None; naive values are taken to be UTC."""
    if now is None:
        return _local_now()
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now
