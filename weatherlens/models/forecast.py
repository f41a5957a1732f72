"""OpenWeatherMap forecast and current-conditions data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ForecastEntry:
    """One 3-hour sample of the 5 day forecast feed."""

    timestamp: int  # epoch seconds
    temperature: float
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: int
    wind_speed: float
    weather_code: int
    precipitation_probability: float  # 0..1
    description: str = ""


@dataclass(frozen=True)
class HourlySlice:
    timestamp: int
    temperature: float
    feels_like: float
    humidity: int
    wind_speed: float
    weather_code: int
    precipitation_probability: float
    description: str = ""

    @classmethod
    def from_entry(cls, entry: ForecastEntry) -> "HourlySlice":
        return cls(
            timestamp=entry.timestamp,
            temperature=entry.temperature,
            feels_like=entry.feels_like,
            humidity=entry.humidity,
            wind_speed=entry.wind_speed,
            weather_code=entry.weather_code,
            precipitation_probability=entry.precipitation_probability,
            description=entry.description,
        )


@dataclass(frozen=True)
class DailyAggregate:
    """Per-calendar-day summary.

    Only temp_max/temp_min are aggregated across the day. Every other field is
    copied from the first sample of that day.
    """

    day_key: str
    representative_timestamp: int
    temp_max: float
    temp_min: float
    weather_code: int
    humidity: int
    wind_speed: float
    precipitation_probability: float
    temperature: float = 0.0
    description: str = ""


@dataclass(frozen=True)
class Forecast:
    entries: list[ForecastEntry] = field(default_factory=list)
    utc_offset: int | None = None  # seconds, from the feed's city block

    @property
    def is_empty(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class CurrentConditions:
    name: str
    country: str
    lat: float
    lon: float
    timestamp: int
    utc_offset: int  # seconds east of UTC
    sunrise: int
    sunset: int
    temperature: float
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: int
    pressure: int
    wind_speed: float
    wind_deg: int
    weather_code: int
    description: str
    clouds: int = 0
    visibility: int = 0
