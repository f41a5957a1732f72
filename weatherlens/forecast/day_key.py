"""Calendar-day grouping keys for forecast timestamps."""

from datetime import UTC, datetime, timedelta

from weatherlens.config.schema import DayKeyClock


def day_key(timestamp: int | float, utc_offset: int | None = None) -> str:
    """Map an epoch-seconds timestamp to a YYYY-MM-DD day key.

    With utc_offset=None the day is taken from the viewer's local clock (the
    host timezone). With an offset in seconds the day is taken from that
    location's clock instead. Near midnight the two can disagree.
    """
    if utc_offset is None:
        return datetime.fromtimestamp(timestamp).date().isoformat()
    shifted = datetime.fromtimestamp(timestamp, UTC) + timedelta(seconds=utc_offset)
    return shifted.date().isoformat()


def offset_for_clock(clock: DayKeyClock, location_offset: int | None) -> int | None:
    """Pick the utc_offset argument for day_key() from the configured clock."""
    if clock == DayKeyClock.LOCATION:
        return location_offset if location_offset is not None else 0
    return None
