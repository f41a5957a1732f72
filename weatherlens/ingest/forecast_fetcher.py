"""Forecast fetcher: retrieves and parses OpenWeatherMap payloads."""

import logging

from weatherlens.ingest.owm_client import OpenWeatherMapClient
from weatherlens.models.forecast import CurrentConditions, Forecast, ForecastEntry

logger = logging.getLogger(__name__)


class ForecastFetcher:
    def __init__(self, client: OpenWeatherMapClient):
        self.client = client

    def fetch(self, lat: float, lon: float) -> Forecast:
        """Fetch the 3-hour forecast for a coordinate.

        Any transport, status or parse failure degrades to an empty Forecast
        so the caller can still render current conditions.
        """
        try:
            raw = self.client.get_forecast(lat, lon)
            forecast = parse_forecast(raw)
        except Exception:
            logger.exception("Failed to fetch forecast for %.4f,%.4f", lat, lon)
            return Forecast()

        if forecast.is_empty:
            logger.warning("Forecast for %.4f,%.4f has no entries", lat, lon)
        return forecast


def parse_forecast(raw: dict) -> Forecast:
    """Convert a /data/2.5/forecast payload into a Forecast.

    Raises:
        ValueError: if the payload is not shaped like a forecast response.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("list", []), list):
        raise ValueError("Forecast payload must be an object with a 'list' array")

    entries = [_parse_entry(item) for item in raw.get("list", [])]

    utc_offset = None
    city = raw.get("city")
    if isinstance(city, dict) and city.get("timezone") is not None:
        utc_offset = int(city["timezone"])

    return Forecast(entries=entries, utc_offset=utc_offset)


def _parse_entry(item: dict) -> ForecastEntry:
    try:
        main = item["main"]
        wind = item.get("wind", {})
        weather = _first_condition(item)
        return ForecastEntry(
            timestamp=int(item["dt"]),
            temperature=float(main["temp"]),
            feels_like=float(main.get("feels_like", main["temp"])),
            temp_min=float(main.get("temp_min", main["temp"])),
            temp_max=float(main.get("temp_max", main["temp"])),
            humidity=int(main.get("humidity", 0)),
            wind_speed=float(wind.get("speed", 0)),
            weather_code=int(weather.get("id", 0)),
            precipitation_probability=float(item.get("pop") or 0),
            description=weather.get("description", ""),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed forecast entry: {e!r}") from e


def parse_current_conditions(raw: dict) -> CurrentConditions:
    """Convert a /data/2.5/weather payload into CurrentConditions.

    Raises:
        ValueError: if required fields are missing.
    """
    try:
        main = raw["main"]
        coord = raw["coord"]
        sys_block = raw.get("sys", {})
        wind = raw.get("wind", {})
        weather = _first_condition(raw)
        return CurrentConditions(
            name=raw.get("name", ""),
            country=sys_block.get("country", ""),
            lat=float(coord["lat"]),
            lon=float(coord["lon"]),
            timestamp=int(raw.get("dt", 0)),
            utc_offset=int(raw.get("timezone", 0)),
            sunrise=int(sys_block.get("sunrise", 0)),
            sunset=int(sys_block.get("sunset", 0)),
            temperature=float(main["temp"]),
            feels_like=float(main.get("feels_like", main["temp"])),
            temp_min=float(main.get("temp_min", main["temp"])),
            temp_max=float(main.get("temp_max", main["temp"])),
            humidity=int(main.get("humidity", 0)),
            pressure=int(main.get("pressure", 0)),
            wind_speed=float(wind.get("speed", 0)),
            wind_deg=int(wind.get("deg", 0)),
            weather_code=int(weather.get("id", 0)),
            description=weather.get("description", ""),
            clouds=int(raw.get("clouds", {}).get("all", 0)),
            visibility=int(raw.get("visibility", 0)),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed current weather payload: {e!r}") from e


def _first_condition(item: dict) -> dict:
    conditions = item.get("weather") or [{}]
    return conditions[0]
