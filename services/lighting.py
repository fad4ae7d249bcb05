"""
Lighting-dependent accessories.

Eyewear and visibility slots describe *now*, not history: they are set from
the current sun/dark state after voting and safety overrides, overwriting
whatever was voted. Dark wins over sunny. With neither, a slot still holding a
lighting item falls back to its neutral value.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from services.activity_registry import ActivityProfile, LightingRule
from services.weather_conditions import WeatherConditions


LIGHTING_TERMS = ("sunglasses", "headlamp", "lights", "clear glasses", "reflective")


def is_lighting_item(item: Optional[str]) -> bool:
    if not item:
        return False
    lowered = item.lower()
    return any(term in lowered for term in LIGHTING_TERMS)


@dataclass
class LightingChange:
    category: str
    original: Optional[str]
    replacement: str
    reason: str  # dark | sunny | neutral

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "original": self.original,
            "replacement": self.replacement,
            "reason": self.reason,
        }


def _target(rule: LightingRule, current: Optional[str], conditions: WeatherConditions) -> Tuple[Optional[str], str]:
    if conditions.dark and rule.dark:
        return rule.dark, "dark"
    if conditions.sunny and not conditions.dark and rule.sunny:
        return rule.sunny, "sunny"
    if is_lighting_item(current):
        return rule.neutral, "neutral"
    return None, "neutral"


def apply_lighting(
    clothing: Mapping[str, str],
    profile: ActivityProfile,
    conditions: WeatherConditions,
) -> Tuple[Dict[str, str], List[LightingChange]]:
    """Set every lighting slot of the activity from current conditions."""
    result = dict(clothing)
    changes: List[LightingChange] = []

    for rule in profile.lighting:
        category = profile.category(rule.category)
        if category is None:
            continue
        current = result.get(rule.category)
        target, reason = _target(rule, current, conditions)
        if target is None:
            continue
        resolved = category.canonical(target)
        if resolved is None or resolved == current:
            continue
        result[rule.category] = resolved
        changes.append(LightingChange(
            category=rule.category,
            original=current,
            replacement=resolved,
            reason=reason,
        ))

    return result, changes
