"""
Thermal Comfort Normalizer

Reduces a weather sample to a single comparable "comfort temperature" for a
given activity and user:

    Δ = clamp(feelsLikeC − actualC, −15, +8)
    T_comfort = actualC + B(activity) + I(intensity) + wΔ(activity) × Δ + offset(preference)

B is the body heat an activity generates, wΔ how much wind chill / heat index
still matters once moving. Both come from the activity registry. The clamp on
Δ keeps extreme wind-chill or heat-index readings from dominating.

T_comfort values are only comparable within one activity.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from services.activity_registry import (
    ACTIVITY_LEVEL_OFFSETS,
    THERMAL_OFFSETS,
    get_activity_profile,
)
from services.session_types import (
    ActivityLevel,
    ActivityType,
    ThermalPreference,
    WeatherSample,
)
from services.temperature_utils import celsius_to_fahrenheit, fahrenheit_to_celsius


DELTA_MIN_C = -15.0
DELTA_MAX_C = 8.0


@dataclass(frozen=True)
class ComfortTemperature:
    """T_comfort plus every intermediate value, for diagnostics."""
    actual_c: float
    feels_like_c: float
    raw_delta_c: float
    delta_c: float  # clamped
    b: float
    w_delta: float
    intensity_offset: float
    thermal_offset: float
    comfort_c: float

    @property
    def comfort_f(self) -> float:
        return celsius_to_fahrenheit(self.comfort_c)

    @property
    def actual_f(self) -> float:
        return celsius_to_fahrenheit(self.actual_c)

    @property
    def feels_like_f(self) -> float:
        return celsius_to_fahrenheit(self.feels_like_c)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "actual_c": round(self.actual_c, 2),
            "actual_f": round(self.actual_f, 1),
            "feels_like_c": round(self.feels_like_c, 2),
            "feels_like_f": round(self.feels_like_f, 1),
            "raw_delta_c": round(self.raw_delta_c, 2),
            "delta_c": round(self.delta_c, 2),
            # Differences scale without the 32° offset
            "delta_f": round(self.delta_c * 9 / 5, 1),
            "b": self.b,
            "w_delta": self.w_delta,
            "intensity_offset_c": self.intensity_offset,
            "thermal_offset_c": self.thermal_offset,
            "comfort_c": round(self.comfort_c, 2),
            "comfort_f": round(self.comfort_f, 1),
        }


def clamp_delta(delta_c: float) -> float:
    return max(DELTA_MIN_C, min(DELTA_MAX_C, delta_c))


def calculate_comfort_temperature(
    weather: WeatherSample,
    activity: Union[str, ActivityType],
    thermal_preference: ThermalPreference = ThermalPreference.AVERAGE,
    activity_level: Optional[ActivityLevel] = None,
) -> ComfortTemperature:
    """
    Compute T_comfort (°C) for one weather sample.

    ``activity_level`` is optional; without it the intensity offset is 0.
    """
    profile = get_activity_profile(activity)
    actual_c = fahrenheit_to_celsius(weather.temperature)
    feels_like_c = fahrenheit_to_celsius(weather.feels_like)
    raw_delta = feels_like_c - actual_c
    delta = clamp_delta(raw_delta)

    intensity_offset = ACTIVITY_LEVEL_OFFSETS[activity_level] if activity_level else 0.0
    thermal_offset = THERMAL_OFFSETS[ThermalPreference(thermal_preference)]

    comfort_c = (
        actual_c
        + profile.thermal.b
        + intensity_offset
        + profile.thermal.w_delta * delta
        + thermal_offset
    )

    return ComfortTemperature(
        actual_c=actual_c,
        feels_like_c=feels_like_c,
        raw_delta_c=raw_delta,
        delta_c=delta,
        b=profile.thermal.b,
        w_delta=profile.thermal.w_delta,
        intensity_offset=intensity_offset,
        thermal_offset=thermal_offset,
        comfort_c=comfort_c,
    )
