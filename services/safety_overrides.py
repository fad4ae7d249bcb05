"""
Safety Override Engine

Deterministic corrective pass run after voting or fallback. When the current
comfort temperature is below a category's danger threshold (or it is wet, for
footwear and rain gear) and the chosen item is classed as too light, the item
is replaced with the first preference that exists in the activity's options.

Rules only upgrade. An adequate item is never touched, and a replacement is
never invented outside the registry. Tiers are listed coldest first so a lower
temperature can only ever select an equal or heavier tier.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from services.activity_registry import ActivityProfile, NONE_ITEM
from services.weather_conditions import WeatherConditions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SafetyTier:
    below_f: float
    preferences: Tuple[str, ...]
    when_wet: bool = False  # also fires when raining or snowing

    def fires(self, comfort_f: float, wet: bool) -> bool:
        return comfort_f < self.below_f or (self.when_wet and wet)


@dataclass(frozen=True)
class SafetyRule:
    name: str
    categories: Tuple[str, ...]
    light_terms: Tuple[str, ...]
    tiers: Tuple[SafetyTier, ...]
    requires_precipitation: bool = False

    def is_too_light(self, item: str) -> bool:
        lowered = item.lower()
        for term in self.light_terms:
            # "none" is an exact sentinel; everything else is a substring
            if term == "none":
                if lowered == "none":
                    return True
            elif term in lowered:
                return True
        return False

    def tier_for(self, comfort_f: float, wet: bool) -> Optional[SafetyTier]:
        for tier in self.tiers:
            if tier.fires(comfort_f, wet):
                return tier
        return None


@dataclass
class SafetyOverride:
    category: str
    original: str
    replacement: str
    rule: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "original": self.original,
            "replacement": self.replacement,
            "rule": self.rule,
            "reason": self.reason,
        }


HEAVY_TOPS = (
    "Base layer + jacket", "Thermal jersey", "Jersey + jacket", "Wind jacket + fleece",
    "Heavy merino", "Expedition weight", "Merino base", "Fleece", "Sweater",
    "Long sleeve", "Long sleeve jersey",
)
LONG_SLEEVE_TOPS = (
    "Long sleeve", "Long sleeve jersey", "Merino base", "Light synthetic", "Sweater", "XC jacket",
)
INSULATED_BOTTOMS = (
    "Insulated pants", "Thermal tights", "Thermal bib tights", "Wind pants over tights", "Bibs",
    "Fleece-lined leggings", "Softshell pants", "Bib tights", "Tights", "XC pants",
)
COVERED_BOTTOMS = (
    "Tights", "Bib tights", "Hiking pants", "Softshell pants", "Casual pants", "XC pants",
    "3/4 bibs", "Fleece-lined leggings", "Insulated pants",
)
WARM_HATS = (
    "Beanie", "Balaclava", "Light beanie", "Fleece headband", "Headband", "Ear warmers", "Buff",
)
HEADBANDS = (
    "Headband", "Fleece headband", "Ear warmers", "Buff", "Light beanie", "Beanie",
)
PROTECTIVE_FOOTWEAR = (
    "Waterproof boots", "Winter boots", "Boots", "Waterproof trail shoes",
    "Waterproof running shoes", "Hiking boots", "Winter hiking boots",
)
WATERPROOF_SHELLS = ("Waterproof jacket", "Rain jacket", "Hardshell", "Full rain kit")
LIGHT_SHELLS = ("Light rain jacket", "Rain jacket", "Full rain kit")


SAFETY_RULES: Tuple[SafetyRule, ...] = (
    SafetyRule(
        name="warm_top",
        categories=("tops", "baseLayer"),
        light_terms=("none", "t-shirt", "singlet", "tank", "sleeveless", "short sleeve", "race suit"),
        tiers=(SafetyTier(25, HEAVY_TOPS), SafetyTier(40, LONG_SLEEVE_TOPS)),
    ),
    SafetyRule(
        name="covered_legs",
        categories=("bottoms",),
        light_terms=("none", "shorts", "skirt"),
        tiers=(SafetyTier(25, INSULATED_BOTTOMS), SafetyTier(45, COVERED_BOTTOMS)),
    ),
    SafetyRule(
        name="warm_head",
        categories=("headCover",),
        light_terms=("none", "cap", "visor", "sun hat"),
        tiers=(SafetyTier(25, WARM_HATS), SafetyTier(40, HEADBANDS)),
    ),
    SafetyRule(
        name="protective_footwear",
        categories=("shoes", "boots"),
        light_terms=("none", "sandal", "flip", "slide", "barefoot", "sneaker"),
        tiers=(SafetyTier(32, PROTECTIVE_FOOTWEAR, when_wet=True),),
    ),
    SafetyRule(
        name="rain_shell",
        categories=("rainGear", "outerLayer"),
        light_terms=("none",),
        tiers=(SafetyTier(50, WATERPROOF_SHELLS), SafetyTier(float("inf"), LIGHT_SHELLS)),
        requires_precipitation=True,
    ),
)


def _describe(rule: SafetyRule, tier: SafetyTier, comfort_f: float, wet: bool) -> str:
    if rule.requires_precipitation:
        return f"precipitation at {comfort_f:.0f}°F comfort"
    if comfort_f < tier.below_f:
        return f"comfort {comfort_f:.0f}°F below {tier.below_f:.0f}°F"
    return "wet conditions"


def apply_safety_overrides(
    clothing: Mapping[str, str],
    profile: ActivityProfile,
    comfort_f: float,
    conditions: WeatherConditions,
    rules: Tuple[SafetyRule, ...] = SAFETY_RULES,
) -> Tuple[Dict[str, str], List[SafetyOverride]]:
    """
    Upgrade too-light items. Returns (new clothing, trace of every firing).

    The input mapping is not modified.
    """
    result = dict(clothing)
    trace: List[SafetyOverride] = []
    wet = conditions.wet

    for rule in rules:
        if rule.requires_precipitation and not wet:
            continue
        tier = rule.tier_for(comfort_f, wet)
        if tier is None:
            continue
        for key in rule.categories:
            category = profile.category(key)
            if category is None:
                continue
            current = result.get(key, category.default) or NONE_ITEM
            if not rule.is_too_light(current):
                continue
            replacement = next(
                (category.canonical(p) for p in tier.preferences if category.canonical(p)),
                None,
            )
            if replacement is None or replacement == current:
                continue
            result[key] = replacement
            trace.append(SafetyOverride(
                category=key,
                original=current,
                replacement=replacement,
                rule=rule.name,
                reason=_describe(rule, tier, comfort_f, wet),
            ))
            logger.debug(f"Safety override {rule.name}: {key} {current} -> {replacement}")

    return result, trace
