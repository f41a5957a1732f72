"""Near-term hourly view of the forecast feed."""

from collections.abc import Sequence

from weatherlens.models.forecast import ForecastEntry, HourlySlice

DEFAULT_HOURLY_COUNT = 8  # 24 hours at 3-hour resolution


def hourly_slice(
    entries: Sequence[ForecastEntry], count: int = DEFAULT_HOURLY_COUNT
) -> list[HourlySlice]:
    """Return the first `count` samples unchanged.

    No alignment to the wall clock is done: index 0 is whatever the feed
    lists first, and the caller labels it "now".
    """
    return [HourlySlice.from_entry(e) for e in entries[:max(count, 0)]]
