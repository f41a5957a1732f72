"""OpenWeatherMap API client with retry and rate limit handling."""

import logging
import time

import httpx

from weatherlens.config.schema import ApiConfig, Units

logger = logging.getLogger(__name__)

OWM_BASE_URL = "https://api.openweathermap.org"
DEFAULT_USER_AGENT = "weatherlens/0.1.0"

CURRENT_WEATHER_PATH = "/data/2.5/weather"
FORECAST_PATH = "/data/2.5/forecast"
REVERSE_GEOCODING_PATH = "/geo/1.0/reverse"


class CityNotFoundError(Exception):
    """The named place does not exist upstream."""

    def __init__(self, city: str, status_code: int | None = None):
        super().__init__(f"City not found: {city}")
        self.city = city
        self.status_code = status_code


class OpenWeatherMapClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OWM_BASE_URL,
        units: Units = Units.METRIC,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.units = units
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    @classmethod
    def from_config(cls, api: ApiConfig) -> "OpenWeatherMapClient":
        return cls(
            api_key=api.api_key,
            base_url=api.base_url,
            units=api.units,
            timeout=api.timeout,
            max_retries=api.max_retries,
            retry_base_delay=api.retry_base_delay,
        )

    def get_current_weather(self, city: str) -> dict:
        """Fetch current conditions by place name.

        Any non-success status is reported as CityNotFoundError.
        """
        try:
            return self._get(CURRENT_WEATHER_PATH, {"q": city, "units": self.units.value})
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Current weather lookup for %r failed with %d",
                city, e.response.status_code,
            )
            raise CityNotFoundError(city, e.response.status_code) from e

    def get_current_weather_by_coord(self, lat: float, lon: float) -> dict:
        """Fetch current conditions for a coordinate."""
        return self._get(
            CURRENT_WEATHER_PATH,
            {"lat": lat, "lon": lon, "units": self.units.value},
        )

    def get_forecast(self, lat: float, lon: float) -> dict:
        """Fetch the 5 day / 3 hour forecast for a coordinate."""
        return self._get(
            FORECAST_PATH, {"lat": lat, "lon": lon, "units": self.units.value}
        )

    def reverse_geocode(self, lat: float, lon: float, limit: int = 1) -> list:
        """Resolve a coordinate to at most `limit` named places."""
        data = self._get(REVERSE_GEOCODING_PATH, {"lat": lat, "lon": lon, "limit": limit})
        if not isinstance(data, list):
            raise ValueError(
                f"Reverse geocoding returned {type(data).__name__}, expected list"
            )
        return data

    def _get(self, path: str, params: dict):
        """GET a JSON document, retrying on 503/429 with exponential backoff."""
        url = f"{self.base_url}{path}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        params = {**params, "appid": self.api_key}

        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(url, params=params, headers=headers, timeout=self.timeout)
                if resp.status_code in (503, 429) and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "OpenWeatherMap %s returned %d, retrying in %.1fs (attempt %d/%d)",
                        path, resp.status_code, delay, attempt + 1, self.max_retries,
                    )
                    time.sleep(delay)
                    continue
                resp.raise_for_status()
                return resp.json()
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "OpenWeatherMap request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                raise
