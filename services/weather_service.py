"""
Weather Service

Fetches current conditions from OpenWeatherMap (imperial units) and turns
them into a WeatherSample. UV comes from a separate endpoint and is optional.

Results are cached in Redis per rounded coordinate for WEATHER_CACHE_TTL
seconds. The cache degrades to a straight fetch when Redis is unavailable.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from core.cache import cache_key, delete_cache, get_cache, set_cache
from core.config import settings
from services.session_types import WeatherSample

logger = logging.getLogger(__name__)


MM_PER_INCH = 25.4
COORD_PRECISION = 2  # ~1 km


class WeatherServiceError(RuntimeError):
    """Weather provider failed or is not configured."""


class WeatherAuthError(WeatherServiceError):
    """Provider rejected the API key."""


class WeatherRateLimitError(WeatherServiceError):
    """Provider rate limit exceeded."""


def _from_epoch(value: Optional[float]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _from_iso(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def parse_openweather_response(data: Dict[str, Any], uv_index: float = 0.0) -> WeatherSample:
    """Map an OpenWeatherMap /weather payload onto a WeatherSample."""
    main = data.get("main", {})
    sys = data.get("sys", {})
    conditions = data.get("weather") or [{}]

    # rain/snow volumes are mm over the last hour
    precipitation_mm = (data.get("rain") or {}).get("1h", 0) + (data.get("snow") or {}).get("1h", 0)

    name = data.get("name") or ""
    country = sys.get("country") or ""
    location = f"{name}, {country}" if name and country else name

    return WeatherSample(
        temperature=float(main.get("temp", 0.0)),
        feels_like=float(main.get("feels_like", main.get("temp", 0.0))),
        humidity=float(main.get("humidity", 0.0)),
        pressure=float(main.get("pressure", 0.0)),
        precipitation=round(precipitation_mm / MM_PER_INCH, 3),
        uv_index=float(uv_index or 0.0),
        wind_speed=float((data.get("wind") or {}).get("speed", 0.0)),
        cloud_cover=float((data.get("clouds") or {}).get("all", 0.0)),
        description=conditions[0].get("description") or "Unknown",
        observed_at=_from_epoch(data.get("dt")),
        sunrise=_from_epoch(sys.get("sunrise")),
        sunset=_from_epoch(sys.get("sunset")),
        location=location,
    )


def weather_from_dict(data: Dict[str, Any]) -> WeatherSample:
    """Inverse of WeatherSample.to_dict(), used for cached values."""
    return WeatherSample(
        temperature=data["temperature"],
        feels_like=data["feels_like"],
        humidity=data.get("humidity", 0.0),
        pressure=data.get("pressure", 0.0),
        precipitation=data.get("precipitation", 0.0),
        uv_index=data.get("uv_index", 0.0),
        wind_speed=data.get("wind_speed", 0.0),
        cloud_cover=data.get("cloud_cover", 0.0),
        description=data.get("description", ""),
        observed_at=_from_iso(data.get("observed_at")),
        sunrise=_from_iso(data.get("sunrise")),
        sunset=_from_iso(data.get("sunset")),
        location=data.get("location", ""),
    )


class WeatherService:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.api_key = api_key or settings.OPENWEATHERMAP_API_KEY
        self.base_url = (base_url or settings.OPENWEATHERMAP_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.EXTERNAL_API_TIMEOUT

    def get_current_weather(self, lat: float, lon: float, force_refresh: bool = False) -> WeatherSample:
        """
        Current conditions at a coordinate.

        Raises:
            WeatherAuthError: 401 from the provider
            WeatherRateLimitError: 429 from the provider
            WeatherServiceError: anything else (not configured, network, bad status)
        """
        if not self.api_key:
            raise WeatherServiceError("Weather API key not configured")

        key = cache_key(
            "weather",
            lat=round(lat, COORD_PRECISION),
            lon=round(lon, COORD_PRECISION),
        )
        if not force_refresh:
            cached = get_cache(key)
            if cached:
                try:
                    sample = weather_from_dict(cached)
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning(f"Discarding unreadable weather cache entry {key}: {e}")
                    delete_cache(key)
                else:
                    logger.debug(f"Weather cache hit {key}")
                    return sample

        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": "imperial"}
        try:
            r = requests.get(f"{self.base_url}/weather", params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Weather request failed: {e}")
            raise WeatherServiceError(f"Weather request failed: {e}") from e

        if r.status_code == 401:
            raise WeatherAuthError("Invalid weather API key")
        if r.status_code == 429:
            raise WeatherRateLimitError("Weather API rate limit exceeded. Please try again later.")
        if r.status_code >= 400:
            raise WeatherServiceError(f"Weather API error: {r.status_code}")

        sample = parse_openweather_response(r.json(), self._fetch_uv_index(lat, lon))
        set_cache(key, sample.to_dict(), ttl=settings.WEATHER_CACHE_TTL)
        logger.info(f"Fetched weather for {sample.location or (lat, lon)}: {sample.temperature}°F")
        return sample

    def _fetch_uv_index(self, lat: float, lon: float) -> float:
        # UV is optional; any failure means 0
        try:
            r = requests.get(
                f"{self.base_url}/uvi",
                params={"lat": lat, "lon": lon, "appid": self.api_key},
                timeout=self.timeout,
            )
            if r.status_code == 200:
                return float(r.json().get("value", 0.0))
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"Could not fetch UV index: {e}")
        return 0.0
