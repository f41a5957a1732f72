"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field


class DayKeyClock(StrEnum):
    VIEWER = "viewer"      # host's local timezone
    LOCATION = "location"  # forecast location's UTC offset


class SamplingMode(StrEnum):
    CENTER_BIASED = "center_biased"
    UNIFORM_AREA = "uniform_area"


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"
    STANDARD = "standard"


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = "https://api.openweathermap.org"
    units: Units = Units.METRIC
    timeout: float = Field(default=10.0, gt=0.0)
    max_retries: int = Field(default=2, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    hourly_count: int = Field(default=8, ge=0)
    daily_days: int = Field(default=6, ge=0)
    day_key_clock: DayKeyClock = DayKeyClock.VIEWER


class PrivacyConfig(BaseModel):
    model_config = {"extra": "forbid"}

    approximate_radius_m: float = Field(default=10000.0, ge=0.0)
    sampling: SamplingMode = SamplingMode.CENTER_BIASED


class RecentSearchConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_entries: int = Field(default=5, ge=1)
    storage_key: str = "recent_searches"


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: LogLevel = LogLevel.INFO


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    forecast: ForecastConfig = ForecastConfig()
    privacy: PrivacyConfig = PrivacyConfig()
    recent: RecentSearchConfig = RecentSearchConfig()
    logging: LoggingConfig = LoggingConfig()
