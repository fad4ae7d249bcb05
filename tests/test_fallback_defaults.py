"""
Tests for the fallback default selector.
"""
import pytest

from services.activity_registry import TempBand, get_activity_profile, get_temp_band
from services.fallback_defaults import find_nearby_feedback, select_fallback
from services.session_types import ComfortLevel
from services.weather_conditions import WeatherConditions
from session_factories import make_feedback, make_weather


def _conditions(**flags):
    values = dict(raining=False, snowing=False, windy=False, sunny=False, dark=False)
    values.update(flags)
    return WeatherConditions(**values)


class TestGetTempBand:
    """Tests for band boundaries (°F of T_comfort)."""

    @pytest.mark.parametrize("temp_f,band", [
        (-10, TempBand.EXTREME_COLD),
        (4.9, TempBand.EXTREME_COLD),
        (5, TempBand.FREEZING),
        (14.9, TempBand.FREEZING),
        (15, TempBand.VERY_COLD),
        (25, TempBand.COLD),
        (39.9, TempBand.COLD),
        (40, TempBand.COOL),
        (55, TempBand.MILD),
        (65, TempBand.WARM),
        (74.9, TempBand.WARM),
        (75, TempBand.HOT),
        (110, TempBand.HOT),
    ])
    def test_boundaries(self, temp_f, band):
        assert get_temp_band(temp_f) == band


class TestBandDefaults:
    """Tests for defaults without feedback."""

    def test_cool_running(self):
        result = select_fallback(get_activity_profile("running"), make_weather(41), 51.8, _conditions())
        assert result.band == TempBand.COOL
        assert result.clothing["headCover"] == "Headband"
        assert result.clothing["tops"] == "Long sleeve"
        assert result.feedback_session is None
        assert result.applied_modifiers == []

    def test_every_category_filled(self):
        profile = get_activity_profile("hiking")
        result = select_fallback(profile, make_weather(70), 75, _conditions())
        assert set(result.clothing) == set(profile.category_keys)


class TestWeatherModifiers:
    """Tests for modifier application on band defaults."""

    def test_cold_rain_running(self):
        result = select_fallback(
            get_activity_profile("running"), make_weather(34), 36.9, _conditions(raining=True)
        )
        assert result.band == TempBand.COLD
        assert result.clothing["rainGear"] == "Waterproof jacket"

    def test_mild_rain_running(self):
        result = select_fallback(
            get_activity_profile("running"), make_weather(50), 60, _conditions(raining=True)
        )
        assert result.clothing["rainGear"] == "Light rain jacket"

    def test_walking_rain(self):
        result = select_fallback(
            get_activity_profile("walking"), make_weather(35), 35.9, _conditions(raining=True)
        )
        assert result.clothing["outerLayer"] == "Rain jacket"
        assert result.clothing["accessories"] == "Umbrella"
        assert "rain:outerLayer=Rain jacket" in result.applied_modifiers

    def test_wind_only_in_listed_bands(self):
        profile = get_activity_profile("running")
        mild = select_fallback(profile, make_weather(50), 60, _conditions(windy=True))
        hot = select_fallback(profile, make_weather(80), 85, _conditions(windy=True))
        assert mild.clothing["tops"] == "Long sleeve"
        assert hot.clothing["tops"] == "Singlet"

    def test_dark_applied_after_sun(self):
        result = select_fallback(
            get_activity_profile("running"), make_weather(60), 70, _conditions(sunny=True, dark=True)
        )
        assert result.clothing["accessories"] == "Headlamp + reflective vest"
        assert result.applied_modifiers[-1].startswith("dark:")

    def test_snow_swaps_trail_shoes(self):
        result = select_fallback(
            get_activity_profile("trail_running"), make_weather(28), 30, _conditions(snowing=True)
        )
        assert result.clothing["shoes"] == "Waterproof trail shoes"


class TestNearbyFeedback:
    """Tests for reusing feedback within 10°F."""

    def test_feedback_clothing_used(self):
        feedback = [make_feedback(45, {"tops": "Singlet", "gloves": "Light gloves"})]
        result = select_fallback(
            get_activity_profile("running"), make_weather(50), 60, _conditions(raining=True), feedback
        )
        assert result.feedback_session is feedback[0]
        assert result.clothing["tops"] == "Singlet"
        assert result.clothing["gloves"] == "Light gloves"
        # Remaining categories come from the band
        assert result.clothing["bottoms"] == "Shorts"
        assert result.applied_modifiers == []

    def test_just_right_preferred_over_recent(self):
        happy = make_feedback(48, {}, comfort=ComfortLevel.JUST_RIGHT, days_ago=20)
        cold = make_feedback(49, {}, comfort=ComfortLevel.TOO_COLD, days_ago=1)
        assert find_nearby_feedback(make_weather(50), [cold, happy]) is happy

    def test_most_recent_among_equals(self):
        older = make_feedback(48, {}, days_ago=20)
        newer = make_feedback(52, {}, days_ago=3)
        assert find_nearby_feedback(make_weather(50), [older, newer]) is newer

    def test_far_feedback_ignored(self):
        assert find_nearby_feedback(make_weather(50), [make_feedback(61, {})]) is None
