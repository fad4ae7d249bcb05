"""
Activity Registry

One entry per activity, consulted by every stage of the recommendation
pipeline instead of branching on activity identity:
- ordered clothing categories with default value and allowed options
- thermal parameters (B, wΔ) and the similarity threshold
- default clothing per temperature band
- weather-modifier overrides and lighting slots

The raw tables live in services.activity_defaults.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from services.activity_defaults import (
    ACTIVITY_NAMES,
    BAND_DEFAULTS,
    CATEGORY_TABLE,
    LIGHTING_SLOTS,
    SIMILARITY_THRESHOLDS,
    THERMAL_PARAMS,
    WEATHER_MODIFIERS,
)
from services.session_types import ActivityLevel, ActivityType, ThermalPreference


NONE_ITEM = "None"

# Values that mean "nothing worn in this category"
NONE_ALIASES = frozenset({"none", "n/a", "na", "no", "-", "--"})

# °C shift applied to T_comfort
THERMAL_OFFSETS = {
    ThermalPreference.COLD: -4.4,
    ThermalPreference.AVERAGE: 0.0,
    ThermalPreference.WARM: 4.4,
}

ACTIVITY_LEVEL_OFFSETS = {
    ActivityLevel.LOW: -0.5,
    ActivityLevel.MEDIUM: 0.0,
    ActivityLevel.HIGH: 1.5,
}


class TempBand(str, Enum):
    EXTREME_COLD = "extremeCold"
    FREEZING = "freezing"
    VERY_COLD = "veryCold"
    COLD = "cold"
    COOL = "cool"
    MILD = "mild"
    WARM = "warm"
    HOT = "hot"


# Exclusive upper bound (°F) of each band, coldest first. HOT is open-ended.
_BAND_UPPER_BOUNDS = [
    (5, TempBand.EXTREME_COLD),
    (15, TempBand.FREEZING),
    (25, TempBand.VERY_COLD),
    (40, TempBand.COLD),
    (55, TempBand.COOL),
    (65, TempBand.MILD),
    (75, TempBand.WARM),
]


def get_temp_band(temp_f: float) -> TempBand:
    """Map a comfort temperature in °F onto its band."""
    for upper, band in _BAND_UPPER_BOUNDS:
        if temp_f < upper:
            return band
    return TempBand.HOT


def normalize_item(value: Any) -> Optional[str]:
    """
    Normalize a free-text clothing item once, at ingestion.

    Returns None for blank values (category absent), the NONE_ITEM sentinel
    for explicit "nothing worn" markers, and the stripped text otherwise.
    """
    if value is None:
        return None
    text = " ".join(str(value).split())
    if not text:
        return None
    if text.lower() in NONE_ALIASES:
        return NONE_ITEM
    return text


@dataclass(frozen=True)
class ClothingCategory:
    key: str
    label: str
    default: str
    options: Tuple[str, ...]

    def canonical(self, value: Optional[str]) -> Optional[str]:
        """Resolve a value to its canonical option spelling, or None if not allowed."""
        item = normalize_item(value)
        if item is None:
            return None
        if item == NONE_ITEM:
            return NONE_ITEM
        folded = item.casefold()
        for option in self.options:
            if option.casefold() == folded:
                return option
        return None

    def is_valid(self, value: Optional[str]) -> bool:
        return self.canonical(value) is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "default": self.default,
            "options": list(self.options),
        }


@dataclass(frozen=True)
class ThermalParams:
    b: float  # baseline body-heat offset, °C
    w_delta: float  # feels-like sensitivity


@dataclass(frozen=True)
class WeatherModifierRule:
    """Fallback override: when ``condition`` holds, set ``category`` to ``value``."""
    condition: str  # rain | snow | wind | sun | dark
    category: str
    value: str
    bands: Optional[Tuple[TempBand, ...]] = None  # None = every band

    def applies_to(self, band: TempBand) -> bool:
        return self.bands is None or band in self.bands


@dataclass(frozen=True)
class LightingRule:
    """A slot whose item always tracks current lighting."""
    category: str
    sunny: Optional[str]
    dark: Optional[str]
    neutral: str


@dataclass(frozen=True)
class ActivityProfile:
    activity: ActivityType
    name: str
    categories: Tuple[ClothingCategory, ...]
    thermal: ThermalParams
    similarity_threshold: float  # °C
    band_defaults: Mapping[TempBand, Mapping[str, str]] = field(default_factory=dict)
    modifiers: Tuple[WeatherModifierRule, ...] = ()
    lighting: Tuple[LightingRule, ...] = ()

    @property
    def category_keys(self) -> List[str]:
        return [c.key for c in self.categories]

    def category(self, key: str) -> Optional[ClothingCategory]:
        for c in self.categories:
            if c.key == key:
                return c
        return None

    def default_clothing(self) -> Dict[str, str]:
        return {c.key: c.default for c in self.categories}

    def defaults_for_band(self, band: TempBand) -> Dict[str, str]:
        clothing = self.default_clothing()
        clothing.update(self.band_defaults.get(band, {}))
        return clothing

    def canonical_clothing(self, clothing: Mapping[str, str]) -> Dict[str, str]:
        """Keep only known categories with allowed values, in canonical spelling."""
        result: Dict[str, str] = {}
        for key, value in clothing.items():
            category = self.category(key)
            if category is None:
                continue
            resolved = category.canonical(value)
            if resolved is not None:
                result[key] = resolved
        return result

    def merged_with_defaults(self, clothing: Mapping[str, str]) -> Dict[str, str]:
        merged = self.default_clothing()
        merged.update(self.canonical_clothing(clothing))
        return merged

    def to_dict(self) -> Dict[str, Any]:
        return {
            "activity": self.activity.value,
            "name": self.name,
            "categories": [c.to_dict() for c in self.categories],
            "thermal": {"b": self.thermal.b, "w_delta": self.thermal.w_delta},
            "similarity_threshold_c": self.similarity_threshold,
            "band_defaults": {
                band.value: dict(values) for band, values in self.band_defaults.items()
            },
        }


def _build_profile(activity: ActivityType) -> ActivityProfile:
    key = activity.value
    categories = tuple(
        ClothingCategory(key=cat_key, label=label, default=default, options=tuple(options))
        for cat_key, label, default, options in CATEGORY_TABLE[key]
    )
    b, w_delta = THERMAL_PARAMS[key]
    band_defaults = {
        TempBand(band): dict(values) for band, values in BAND_DEFAULTS[key].items()
    }
    modifiers = tuple(
        WeatherModifierRule(
            condition=condition,
            category=category,
            value=value,
            bands=tuple(TempBand(band) for band in bands) if bands is not None else None,
        )
        for condition, category, value, bands in WEATHER_MODIFIERS.get(key, [])
    )
    lighting = tuple(
        LightingRule(category=category, sunny=sunny, dark=dark, neutral=neutral)
        for category, sunny, dark, neutral in LIGHTING_SLOTS.get(key, [])
    )
    return ActivityProfile(
        activity=activity,
        name=ACTIVITY_NAMES[key],
        categories=categories,
        thermal=ThermalParams(b=b, w_delta=w_delta),
        similarity_threshold=SIMILARITY_THRESHOLDS[key],
        band_defaults=band_defaults,
        modifiers=modifiers,
        lighting=lighting,
    )


ACTIVITY_REGISTRY: Dict[ActivityType, ActivityProfile] = {
    activity: _build_profile(activity) for activity in ActivityType
}


def parse_activity(value: Union[str, ActivityType]) -> ActivityType:
    """Accept an ActivityType or its string value (hyphens and spaces allowed)."""
    if isinstance(value, ActivityType):
        return value
    normalized = str(value).strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return ActivityType(normalized)
    except ValueError:
        raise ValueError(f"Unknown activity: {value}")


def get_activity_profile(activity: Union[str, ActivityType]) -> ActivityProfile:
    return ACTIVITY_REGISTRY[parse_activity(activity)]


def list_activity_profiles() -> List[ActivityProfile]:
    return [ACTIVITY_REGISTRY[a] for a in ActivityType]
