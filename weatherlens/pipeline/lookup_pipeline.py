"""Lookup pipeline: search-by-name and map-selection orchestration."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from weatherlens.config.schema import AppConfig, Units
from weatherlens.forecast.aggregator import aggregate_daily
from weatherlens.forecast.day_key import offset_for_clock
from weatherlens.forecast.hourly import hourly_slice
from weatherlens.ingest.forecast_fetcher import ForecastFetcher, parse_current_conditions
from weatherlens.ingest.owm_client import OpenWeatherMapClient
from weatherlens.location.resolver import LocationResolver
from weatherlens.models.forecast import CurrentConditions, DailyAggregate, HourlySlice
from weatherlens.models.location import (
    Coordinate,
    LocationResolution,
    ObfuscatedCoordinate,
)
from weatherlens.storage.recent_searches import RecentSearchStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherReport:
    current: CurrentConditions
    hourly: list[HourlySlice]
    daily: list[DailyAggregate]
    utc_offset: int
    units: Units = Units.METRIC


@dataclass(frozen=True)
class CoordinateReport:
    resolution: LocationResolution
    report: WeatherReport | None = None
    error: str | None = None


class LookupPipeline:
    def __init__(
        self,
        config: AppConfig,
        client: OpenWeatherMapClient,
        store: RecentSearchStore | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.client = client
        self.store = store
        self.fetcher = ForecastFetcher(client)
        self.resolver = LocationResolver(
            client,
            radius_m=config.privacy.approximate_radius_m,
            sampling=config.privacy.sampling,
            rng=rng,
        )

    def by_name(self, city: str) -> WeatherReport:
        """Search path: current conditions plus forecast for a place name.

        The search is recorded before the lookup, as submitted.

        Raises:
            CityNotFoundError: the place is unknown upstream.
            httpx.RequestError: the current-conditions call could not be made.
            ValueError: the current-conditions payload is malformed.
        """
        if self.store is not None:
            self.store.add(city)
        raw = self.client.get_current_weather(city)
        current = parse_current_conditions(raw)
        logger.info("Current conditions for %s, %s", current.name, current.country)
        return self._build_report(current)

    def by_coordinate(
        self,
        coordinate: Coordinate,
        on_approximate: Callable[[ObfuscatedCoordinate], None] | None = None,
    ) -> CoordinateReport:
        """Map path: resolve an approximate name, then look up its weather.

        Weather is requested for the obfuscated point, never the true one.
        Naming failures do not stop the weather lookup.
        """
        resolution = self.resolver.resolve(coordinate, on_approximate=on_approximate)
        if resolution.display_name and self.store is not None:
            self.store.add(resolution.display_name)

        approx = resolution.approximate
        try:
            raw = self.client.get_current_weather_by_coord(approx.lat, approx.lng)
            current = parse_current_conditions(raw)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "Weather lookup failed near %.4f,%.4f: %s", approx.lat, approx.lng, e
            )
            return CoordinateReport(resolution=resolution, error=str(e))

        return CoordinateReport(resolution=resolution, report=self._build_report(current))

    def _build_report(self, current: CurrentConditions) -> WeatherReport:
        forecast = self.fetcher.fetch(current.lat, current.lon)
        location_offset = (
            forecast.utc_offset if forecast.utc_offset is not None else current.utc_offset
        )
        key_offset = offset_for_clock(self.config.forecast.day_key_clock, location_offset)
        return WeatherReport(
            current=current,
            hourly=hourly_slice(forecast.entries, self.config.forecast.hourly_count),
            daily=aggregate_daily(
                forecast.entries,
                utc_offset=key_offset,
                max_days=self.config.forecast.daily_days,
            ),
            utc_offset=current.utc_offset,
            units=self.config.api.units,
        )
