"""Shared test fixtures."""

import json
import sqlite3
from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from weatherlens.config.schema import AppConfig, DayKeyClock
from weatherlens.ingest.owm_client import OpenWeatherMapClient
from weatherlens.models.forecast import ForecastEntry
from weatherlens.storage.database import open_store
from weatherlens.storage.recent_searches import RecentSearchStore

TEST_BASE_URL = "https://test-owm.example.com"

# 2026-03-02T00:00:00Z
DAY0_MIDNIGHT_UTC = 1772409600


@pytest.fixture
def default_config() -> AppConfig:
    """Defaults, but with a location-clock day key so tests are TZ-independent."""
    config = AppConfig()
    return config.model_copy(
        update={
            "api": config.api.model_copy(
                update={
                    "api_key": "test-key",
                    "base_url": TEST_BASE_URL,
                    "retry_base_delay": 0.0,
                    "max_retries": 1,
                }
            ),
            "forecast": config.forecast.model_copy(
                update={"day_key_clock": DayKeyClock.LOCATION}
            ),
        }
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"api_key": "yaml-key", "timeout": 5},
        "privacy": {"approximate_radius_m": 2500},
        "forecast": {"day_key_clock": "location"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture(fixtures_dir: Path) -> Callable[[str], object]:
    def _load(name: str):
        with open(fixtures_dir / name) as f:
            return json.load(f)

    return _load


@pytest.fixture
def owm() -> OpenWeatherMapClient:
    return OpenWeatherMapClient(
        api_key="test-key",
        base_url=TEST_BASE_URL,
        max_retries=1,
        retry_base_delay=0.01,  # Fast retries in tests
    )


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    conn = open_store(tmp_path / "test.db")
    yield conn
    conn.close()


@pytest.fixture
def store(db: sqlite3.Connection) -> RecentSearchStore:
    return RecentSearchStore(db)


@pytest.fixture
def make_entry() -> Callable[..., ForecastEntry]:
    """Factory for ForecastEntry with sensible defaults."""

    def _make(timestamp: int, **overrides) -> ForecastEntry:
        fields = {
            "timestamp": timestamp,
            "temperature": 10.0,
            "feels_like": 9.0,
            "temp_min": 8.0,
            "temp_max": 12.0,
            "humidity": 70,
            "wind_speed": 3.5,
            "weather_code": 800,
            "precipitation_probability": 0.0,
            "description": "clear sky",
        }
        fields.update(overrides)
        return ForecastEntry(**fields)

    return _make


@pytest.fixture
def forecast_payload() -> Callable[..., dict]:
    """Build a /data/2.5/forecast style payload: `days` days x 8 samples, UTC."""

    def _build(days: int = 5, start: int = DAY0_MIDNIGHT_UTC, timezone: int = 0) -> dict:
        items = []
        for d in range(days):
            for slot in range(8):
                temp = 5.0 + d * 2 + slot * 0.5
                items.append({
                    "dt": start + d * 86400 + slot * 10800,
                    "main": {
                        "temp": temp,
                        "feels_like": temp - 1,
                        "temp_min": temp - 1,
                        "temp_max": temp + 1,
                        "humidity": 60 + slot,
                    },
                    "weather": [{"id": 500 + slot, "description": f"slot {slot}"}],
                    "wind": {"speed": 2.0 + slot, "deg": 180},
                    "pop": slot / 10,
                })
        return {
            "cod": "200",
            "cnt": len(items),
            "list": items,
            "city": {"name": "London", "country": "GB", "timezone": timezone},
        }

    return _build
