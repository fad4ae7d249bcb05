"""
Weather condition classification shared by safety overrides, lighting and the
fallback selector.
"""

from dataclasses import dataclass
from typing import Any, Dict

from services.session_types import WeatherSample, as_utc


SNOW_TERMS = ("snow", "flurr", "sleet")
RAIN_TERMS = ("rain", "drizzle", "shower")
CLEAR_TERMS = ("clear", "sun")

FREEZING_F = 32.0
WINDY_MPH = 10.0
SUNNY_UV = 3.0
SUNNY_MAX_CLOUD = 75.0
CLEAR_MAX_CLOUD = 25.0


def is_snowing(weather: WeatherSample) -> bool:
    desc = weather.description.lower()
    if any(term in desc for term in SNOW_TERMS):
        return True
    return weather.temperature < FREEZING_F and weather.precipitation > 0


def is_raining(weather: WeatherSample) -> bool:
    if is_snowing(weather):
        return False
    desc = weather.description.lower()
    return weather.precipitation > 0 or any(term in desc for term in RAIN_TERMS)


def is_windy(weather: WeatherSample) -> bool:
    return weather.wind_speed > WINDY_MPH


def is_dark(weather: WeatherSample) -> bool:
    """Before sunrise or after sunset. Unknown unless all three times are known."""
    if weather.observed_at is None or weather.sunrise is None or weather.sunset is None:
        return False
    now = as_utc(weather.observed_at)
    return now < as_utc(weather.sunrise) or now > as_utc(weather.sunset)


def is_sunny(weather: WeatherSample) -> bool:
    if is_dark(weather) or is_raining(weather) or is_snowing(weather):
        return False
    if weather.uv_index >= SUNNY_UV and weather.cloud_cover < SUNNY_MAX_CLOUD:
        return True
    desc = weather.description.lower()
    return weather.cloud_cover <= CLEAR_MAX_CLOUD and any(term in desc for term in CLEAR_TERMS)


@dataclass(frozen=True)
class WeatherConditions:
    raining: bool
    snowing: bool
    windy: bool
    sunny: bool
    dark: bool

    @property
    def wet(self) -> bool:
        return self.raining or self.snowing

    def holds(self, condition: str) -> bool:
        """Evaluate a modifier condition name (rain, snow, wind, sun, dark)."""
        return {
            "rain": self.raining,
            "snow": self.snowing,
            "wind": self.windy,
            "sun": self.sunny,
            "dark": self.dark,
        }.get(condition, False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "raining": self.raining,
            "snowing": self.snowing,
            "windy": self.windy,
            "sunny": self.sunny,
            "dark": self.dark,
        }


def classify_weather(weather: WeatherSample) -> WeatherConditions:
    return WeatherConditions(
        raining=is_raining(weather),
        snowing=is_snowing(weather),
        windy=is_windy(weather),
        sunny=is_sunny(weather),
        dark=is_dark(weather),
    )
