"""Trade lock estimation.

Items received in a trade become tradable again once the restriction
period elapses, and Steam only lifts restrictions at its daily rollover
(08:00 UTC).
"""

from datetime import datetime, timedelta, timezone

ONE_DAY_SECONDS = 24 * 60 * 60
ONE_WEEK_SECONDS = 7 * ONE_DAY_SECONDS

ROLLOVER_HOUR_UTC = 8


def estimate_tradelock_end(trade_time: int, lock_seconds: int = ONE_WEEK_SECONDS) -> datetime:
    """Estimate when items from a trade become tradable.

    Args:
        trade_time: Unix timestamp the trade was initiated (time_init)
        lock_seconds: Restriction period

    Returns:
        Timezone-aware UTC datetime of the first rollover at or after
        `trade_time + lock_seconds`

    Example:
        >>> estimate_tradelock_end(1603998438).timestamp()
        1604649600.0
    """
    unlocked = datetime.fromtimestamp(trade_time + lock_seconds, tz=timezone.utc)
    rollover = unlocked.replace(hour=ROLLOVER_HOUR_UTC, minute=0, second=0, microsecond=0)
    if rollover < unlocked:
        rollover += timedelta(days=1)
    return rollover
