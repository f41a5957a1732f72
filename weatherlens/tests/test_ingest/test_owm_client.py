"""Tests for the OpenWeatherMap client with mocked httpx."""

from unittest.mock import patch

import httpx
import pytest
import respx

from weatherlens.config.schema import ApiConfig, Units
from weatherlens.ingest.owm_client import CityNotFoundError, OpenWeatherMapClient

BASE = "https://test-owm.example.com"


class TestGetCurrentWeather:
    @respx.mock
    def test_success(self, owm: OpenWeatherMapClient, load_fixture):
        route = respx.get(f"{BASE}/data/2.5/weather").mock(
            return_value=httpx.Response(200, json=load_fixture("owm_current_london.json"))
        )

        result = owm.get_current_weather("London")
        assert result["name"] == "London"
        params = route.calls[0].request.url.params
        assert params["q"] == "London"
        assert params["units"] == "metric"
        assert params["appid"] == "test-key"

    @respx.mock
    def test_not_found(self, owm: OpenWeatherMapClient):
        respx.get(f"{BASE}/data/2.5/weather").mock(
            return_value=httpx.Response(404, json={"cod": "404", "message": "city not found"})
        )

        with pytest.raises(CityNotFoundError) as exc_info:
            owm.get_current_weather("Atlantis")
        assert exc_info.value.city == "Atlantis"
        assert exc_info.value.status_code == 404

    @respx.mock
    def test_any_failure_status_is_not_found(self, owm: OpenWeatherMapClient):
        respx.get(f"{BASE}/data/2.5/weather").mock(return_value=httpx.Response(401))
        with pytest.raises(CityNotFoundError):
            owm.get_current_weather("London")

    @respx.mock
    def test_by_coordinate(self, owm: OpenWeatherMapClient, load_fixture):
        route = respx.get(f"{BASE}/data/2.5/weather").mock(
            return_value=httpx.Response(200, json=load_fixture("owm_current_london.json"))
        )

        owm.get_current_weather_by_coord(51.5, -0.12)
        params = route.calls[0].request.url.params
        assert params["lat"] == "51.5"
        assert params["lon"] == "-0.12"
        assert "q" not in params


class TestGetForecast:
    @respx.mock
    def test_success(self, owm: OpenWeatherMapClient, forecast_payload):
        route = respx.get(f"{BASE}/data/2.5/forecast").mock(
            return_value=httpx.Response(200, json=forecast_payload())
        )

        result = owm.get_forecast(51.5, -0.12)
        assert len(result["list"]) == 40
        params = route.calls[0].request.url.params
        assert params["units"] == "metric"

    @respx.mock
    def test_user_agent_header(self, owm: OpenWeatherMapClient, forecast_payload):
        route = respx.get(f"{BASE}/data/2.5/forecast").mock(
            return_value=httpx.Response(200, json=forecast_payload())
        )

        owm.get_forecast(51.5, -0.12)
        assert "weatherlens" in route.calls[0].request.headers["user-agent"]

    @respx.mock
    def test_retry_on_503(self, owm: OpenWeatherMapClient, forecast_payload):
        route = respx.get(f"{BASE}/data/2.5/forecast").mock(
            side_effect=[
                httpx.Response(503),
                httpx.Response(200, json=forecast_payload()),
            ]
        )

        with patch("weatherlens.ingest.owm_client.time.sleep"):
            result = owm.get_forecast(51.5, -0.12)
        assert "list" in result
        assert route.call_count == 2

    @respx.mock
    def test_retry_on_429(self, owm: OpenWeatherMapClient, forecast_payload):
        route = respx.get(f"{BASE}/data/2.5/forecast").mock(
            side_effect=[
                httpx.Response(429),
                httpx.Response(200, json=forecast_payload()),
            ]
        )

        with patch("weatherlens.ingest.owm_client.time.sleep") as sleep:
            owm.get_forecast(51.5, -0.12)
        assert route.call_count == 2
        sleep.assert_called_once()

    @respx.mock
    def test_exhausted_retries(self, owm: OpenWeatherMapClient):
        respx.get(f"{BASE}/data/2.5/forecast").mock(return_value=httpx.Response(503))

        with patch("weatherlens.ingest.owm_client.time.sleep"), pytest.raises(httpx.HTTPStatusError):
            owm.get_forecast(51.5, -0.12)

    @respx.mock
    def test_transport_error_retried_then_raised(self, owm: OpenWeatherMapClient):
        route = respx.get(f"{BASE}/data/2.5/forecast").mock(
            side_effect=httpx.ConnectError("refused")
        )

        with patch("weatherlens.ingest.owm_client.time.sleep"), pytest.raises(httpx.ConnectError):
            owm.get_forecast(51.5, -0.12)
        assert route.call_count == 2


class TestReverseGeocode:
    @respx.mock
    def test_limit_param(self, owm: OpenWeatherMapClient, load_fixture):
        route = respx.get(f"{BASE}/geo/1.0/reverse").mock(
            return_value=httpx.Response(200, json=load_fixture("owm_reverse_paris.json"))
        )

        result = owm.reverse_geocode(48.85, 2.35)
        assert result[0]["name"] == "Paris"
        params = route.calls[0].request.url.params
        assert params["limit"] == "1"
        assert params["lat"] == "48.85"

    @respx.mock
    def test_empty_list(self, owm: OpenWeatherMapClient):
        respx.get(f"{BASE}/geo/1.0/reverse").mock(return_value=httpx.Response(200, json=[]))
        assert owm.reverse_geocode(0.0, -30.0) == []

    @respx.mock
    def test_non_list_payload(self, owm: OpenWeatherMapClient):
        respx.get(f"{BASE}/geo/1.0/reverse").mock(
            return_value=httpx.Response(200, json={"cod": 401, "message": "Invalid API key"})
        )
        with pytest.raises(ValueError, match="expected list"):
            owm.reverse_geocode(0.0, 0.0)


class TestFromConfig:
    def test_copies_settings(self):
        api = ApiConfig(
            api_key="k",
            base_url="https://example.com/",
            units=Units.IMPERIAL,
            timeout=3.0,
            max_retries=0,
        )
        client = OpenWeatherMapClient.from_config(api)
        assert client.api_key == "k"
        assert client.base_url == "https://example.com"
        assert client.units == Units.IMPERIAL
        assert client.timeout == 3.0
        assert client.max_retries == 0
