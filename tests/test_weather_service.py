"""
Tests for the OpenWeatherMap client.

HTTP is mocked at requests.get; caching is disabled in conftest.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

from services.weather_service import (
    WeatherAuthError,
    WeatherRateLimitError,
    WeatherService,
    WeatherServiceError,
    parse_openweather_response,
    weather_from_dict,
)


PAYLOAD = {
    "dt": 1736942400,  # 2025-01-15 12:00 UTC
    "name": "Boulder",
    "main": {"temp": 41.2, "feels_like": 35.6, "humidity": 60, "pressure": 1015},
    "wind": {"speed": 12.5},
    "clouds": {"all": 40},
    "rain": {"1h": 2.54},
    "weather": [{"description": "light rain"}],
    "sys": {"country": "US", "sunrise": 1736949600, "sunset": 1736985600},
}


def _response(status_code, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    return response


class TestParseOpenweatherResponse:
    """Tests for mapping the provider payload."""

    def test_fields(self):
        sample = parse_openweather_response(PAYLOAD, uv_index=2.5)
        assert sample.temperature == 41.2
        assert sample.feels_like == 35.6
        assert sample.precipitation == 0.1
        assert sample.uv_index == 2.5
        assert sample.wind_speed == 12.5
        assert sample.cloud_cover == 40
        assert sample.description == "light rain"
        assert sample.location == "Boulder, US"
        assert sample.observed_at == datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert sample.sunrise.tzinfo is not None

    def test_missing_optional_sections(self):
        sample = parse_openweather_response({"main": {"temp": 70}, "weather": []})
        assert sample.feels_like == 70
        assert sample.precipitation == 0
        assert sample.description == "Unknown"
        assert sample.observed_at is None

    def test_cached_dict_round_trip(self):
        sample = parse_openweather_response(PAYLOAD, uv_index=1)
        assert weather_from_dict(sample.to_dict()) == sample


class TestWeatherService:
    """Tests for fetching current weather."""

    def test_not_configured(self):
        service = WeatherService(api_key="")
        service.api_key = ""
        with pytest.raises(WeatherServiceError):
            service.get_current_weather(40.0, -105.3)

    @patch("services.weather_service.requests.get")
    def test_success_with_uv(self, mock_get):
        mock_get.side_effect = [_response(200, PAYLOAD), _response(200, {"value": 3.2})]

        sample = WeatherService(api_key="abc").get_current_weather(40.015, -105.27)

        assert sample.uv_index == 3.2
        assert sample.location == "Boulder, US"
        url = mock_get.call_args_list[0][0][0]
        assert url.endswith("/weather")
        assert mock_get.call_args_list[0][1]["params"]["units"] == "imperial"

    @patch("services.weather_service.requests.get")
    def test_uv_failure_is_not_fatal(self, mock_get):
        mock_get.side_effect = [_response(200, PAYLOAD), requests.exceptions.Timeout("slow")]
        sample = WeatherService(api_key="abc").get_current_weather(40.0, -105.3)
        assert sample.uv_index == 0.0

    @pytest.mark.parametrize("status_code,error", [
        (401, WeatherAuthError),
        (429, WeatherRateLimitError),
        (500, WeatherServiceError),
    ])
    @patch("services.weather_service.requests.get")
    def test_error_statuses(self, mock_get, status_code, error):
        mock_get.return_value = _response(status_code)
        with pytest.raises(error):
            WeatherService(api_key="abc").get_current_weather(40.0, -105.3)

    @patch("services.weather_service.requests.get")
    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("down")
        with pytest.raises(WeatherServiceError):
            WeatherService(api_key="abc").get_current_weather(40.0, -105.3)

    @patch("services.weather_service.requests.get")
    @patch("services.weather_service.get_cache")
    def test_cache_hit_skips_request(self, mock_get_cache, mock_get):
        cached = parse_openweather_response(PAYLOAD, uv_index=1).to_dict()
        mock_get_cache.return_value = cached

        sample = WeatherService(api_key="abc").get_current_weather(40.0, -105.3)

        assert sample.temperature == 41.2
        mock_get.assert_not_called()

    @patch("services.weather_service.delete_cache")
    @patch("services.weather_service.get_cache")
    @patch("services.weather_service.requests.get")
    def test_unreadable_cache_entry_is_evicted(self, mock_get, mock_get_cache, mock_delete_cache):
        mock_get_cache.return_value = {"location": "Boulder, US"}
        mock_get.side_effect = [_response(200, PAYLOAD), _response(200, {"value": 0})]

        sample = WeatherService(api_key="abc").get_current_weather(40.0, -105.3)

        assert sample.temperature == 41.2
        mock_delete_cache.assert_called_once_with(mock_get_cache.call_args[0][0])

    @patch("services.weather_service.set_cache")
    @patch("services.weather_service.requests.get")
    def test_result_is_cached(self, mock_get, mock_set_cache):
        mock_get.side_effect = [_response(200, PAYLOAD), _response(200, {"value": 0})]
        WeatherService(api_key="abc").get_current_weather(40.0149, -105.2705)
        key = mock_set_cache.call_args[0][0]
        assert "40.01" in key and "-105.27" in key


class TestCacheHelpers:
    """Tests for the Redis cache helpers with caching disabled."""

    def test_cache_key_sorted_and_skips_none(self):
        from core.cache import cache_key
        assert cache_key("weather", lon=-105.27, lat=40.01, extra=None) == "weather:lat:40.01:lon:-105.27"

    def test_disabled_cache_degrades(self):
        from core.cache import delete_cache, get_cache, set_cache
        assert get_cache("weather:lat:1:lon:2") is None
        assert set_cache("weather:lat:1:lon:2", {"a": 1}) is False
        assert delete_cache("weather:lat:1:lon:2") is False
