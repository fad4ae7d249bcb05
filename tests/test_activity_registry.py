"""
Tests for the activity registry and its clothing tables.
"""
import pytest

from services.activity_registry import (
    ACTIVITY_REGISTRY,
    NONE_ITEM,
    TempBand,
    get_activity_profile,
    list_activity_profiles,
    normalize_item,
    parse_activity,
)
from services.session_types import ActivityType


class TestRegistryTables:
    """Every table entry must point at a real category option."""

    def test_every_activity_registered(self):
        assert set(ACTIVITY_REGISTRY) == set(ActivityType)
        assert len(list_activity_profiles()) == 7

    def test_category_defaults_are_options(self):
        for profile in list_activity_profiles():
            for category in profile.categories:
                assert category.is_valid(category.default), (profile.activity, category.key)

    def test_band_defaults_cover_every_band(self):
        for profile in list_activity_profiles():
            assert set(profile.band_defaults) == set(TempBand)

    def test_band_defaults_are_valid(self):
        for profile in list_activity_profiles():
            for band, clothing in profile.band_defaults.items():
                for key, value in clothing.items():
                    category = profile.category(key)
                    assert category is not None, (profile.activity, band, key)
                    assert category.canonical(value) == value, (profile.activity, band, key, value)

    def test_modifier_values_are_valid(self):
        for profile in list_activity_profiles():
            for rule in profile.modifiers:
                category = profile.category(rule.category)
                assert category is not None, (profile.activity, rule)
                assert category.is_valid(rule.value), (profile.activity, rule)

    def test_lighting_values_are_valid(self):
        for profile in list_activity_profiles():
            for rule in profile.lighting:
                category = profile.category(rule.category)
                for value in (rule.sunny, rule.dark, rule.neutral):
                    if value is not None:
                        assert category.is_valid(value), (profile.activity, rule)

    def test_thermal_params_ordered_by_effort(self):
        walking = get_activity_profile("walking").thermal
        running = get_activity_profile("running").thermal
        assert walking.b < running.b
        assert walking.w_delta > running.w_delta


class TestParseActivity:
    """Tests for activity lookup."""

    @pytest.mark.parametrize("value,expected", [
        ("running", ActivityType.RUNNING),
        ("Trail Running", ActivityType.TRAIL_RUNNING),
        ("cross-country-skiing", ActivityType.CROSS_COUNTRY_SKIING),
        (ActivityType.HIKING, ActivityType.HIKING),
    ])
    def test_accepted(self, value, expected):
        assert parse_activity(value) == expected

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown activity"):
            parse_activity("kayaking")


class TestClothingNormalization:
    """Tests for item normalization and canonical spelling."""

    def test_blank_is_absent(self):
        assert normalize_item(None) is None
        assert normalize_item("   ") is None

    @pytest.mark.parametrize("value", ["none", "N/A", "no", "-", " None "])
    def test_none_markers(self, value):
        assert normalize_item(value) == NONE_ITEM

    def test_whitespace_collapsed(self):
        assert normalize_item("  Long   sleeve ") == "Long sleeve"

    def test_canonical_spelling(self):
        tops = get_activity_profile("running").category("tops")
        assert tops.canonical("long SLEEVE") == "Long sleeve"
        assert tops.canonical("Kimono") is None
        assert tops.canonical("none") == NONE_ITEM

    def test_canonical_clothing_drops_unknowns(self):
        profile = get_activity_profile("running")
        clothing = profile.canonical_clothing({"tops": "t-shirt", "helmet": "Road helmet", "socks": "Silk"})
        assert clothing == {"tops": "T-shirt"}

    def test_defaults_for_band(self):
        profile = get_activity_profile("running")
        clothing = profile.defaults_for_band(TempBand.HOT)
        assert clothing["tops"] == "Singlet"
        assert set(clothing) == set(profile.category_keys)

    def test_profile_to_dict(self):
        data = get_activity_profile("cycling").to_dict()
        assert data["activity"] == "cycling"
        assert data["categories"][0]["key"] == "helmet"
        assert "mild" in data["band_defaults"]
