"""Fold the 3-hour forecast feed into per-day summaries."""

from collections.abc import Iterable
from dataclasses import dataclass, replace

from weatherlens.forecast.day_key import day_key
from weatherlens.models.forecast import DailyAggregate, ForecastEntry

DEFAULT_MAX_DAYS = 6


def aggregate_daily(
    entries: Iterable[ForecastEntry],
    utc_offset: int | None = None,
    max_days: int = DEFAULT_MAX_DAYS,
) -> list[DailyAggregate]:
    """Group entries by calendar day and return one summary per day.

    The first day seen is dropped (it belongs to the hourly "today" view) and
    the result is capped at max_days. Within a day temp_max/temp_min are
    running extrema; all other fields come from the day's first sample.

    Args:
        entries: Forecast samples in chronological order.
        utc_offset: Passed through to day_key(); None means viewer clock.
        max_days: Maximum number of days returned.

    Returns:
        Day summaries in first-seen order.
    """
    days: dict[str, _DayBuilder] = {}
    for entry in entries:
        key = day_key(entry.timestamp, utc_offset)
        builder = days.get(key)
        if builder is None:
            days[key] = _DayBuilder.seed(key, entry)
        else:
            builder.fold(entry)

    summaries = [b.build() for b in days.values()]
    return summaries[1:][:max(max_days, 0)]


@dataclass
class _DayBuilder:
    first: DailyAggregate
    temp_max: float
    temp_min: float

    @classmethod
    def seed(cls, key: str, entry: ForecastEntry) -> "_DayBuilder":
        first = DailyAggregate(
            day_key=key,
            representative_timestamp=entry.timestamp,
            temp_max=entry.temp_max,
            temp_min=entry.temp_min,
            weather_code=entry.weather_code,
            humidity=entry.humidity,
            wind_speed=entry.wind_speed,
            precipitation_probability=entry.precipitation_probability,
            temperature=entry.temperature,
            description=entry.description,
        )
        return cls(first=first, temp_max=entry.temp_max, temp_min=entry.temp_min)

    def fold(self, entry: ForecastEntry) -> None:
        if entry.temp_max > self.temp_max:
            self.temp_max = entry.temp_max
        if entry.temp_min < self.temp_min:
            self.temp_min = entry.temp_min

    def build(self) -> DailyAggregate:
        return replace(self.first, temp_max=self.temp_max, temp_min=self.temp_min)
