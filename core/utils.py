import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to aware UTC.

    Naive values are assumed to already be in UTC (SQLite drops tzinfo on
    round-trip, and callers commonly pass naive UTC timestamps).
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round half away from zero, e.g. 4.25 -> 4.3 at one decimal.

    The builtin round() uses banker's rounding on binary floats, which
    gives 4.2 for the example above.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes between two datetimes, rounded half up."""
    seconds = (end - start).total_seconds()
    return int(round_half_up(seconds / 60.0, 0))
