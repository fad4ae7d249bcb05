"""
Temperature and wind speed conversions.

Weather is stored imperial (°F, mph); the engine works in °C internally.
"""
from typing import Literal

TemperatureUnit = Literal["fahrenheit", "celsius"]

KPH_PER_MPH = 1.60934


def fahrenheit_to_celsius(temp_f: float) -> float:
    return (temp_f - 32) * 5 / 9


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9 / 5 + 32


def convert_temperature(temp_f: float, unit: TemperatureUnit) -> int:
    """Rounded display value in the requested unit."""
    if unit == "celsius":
        return round(fahrenheit_to_celsius(temp_f))
    return round(temp_f)


def get_unit_symbol(unit: TemperatureUnit) -> str:
    return "°C" if unit == "celsius" else "°F"


def format_temperature(temp_f: float, unit: TemperatureUnit) -> str:
    return f"{convert_temperature(temp_f, unit)}{get_unit_symbol(unit)}"


def format_temperature_difference(diff_c: float, unit: TemperatureUnit) -> str:
    """
    Format an absolute temperature *difference* given in °C.

    Differences scale by 9/5 without the +32 offset.
    """
    diff = abs(diff_c)
    if unit == "celsius":
        return f"{diff:.1f}°C"
    return f"{diff * 9 / 5:.0f}°F"


def convert_wind_speed(mph: float, unit: TemperatureUnit) -> int:
    if unit == "celsius":
        return round(mph * KPH_PER_MPH)
    return round(mph)


def format_wind_speed(mph: float, unit: TemperatureUnit) -> str:
    if unit == "celsius":
        return f"{convert_wind_speed(mph, unit)} km/h"
    return f"{convert_wind_speed(mph, unit)} mph"
