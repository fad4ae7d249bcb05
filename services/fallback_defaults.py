"""
Fallback Default Selector

Used when no past session clears the similarity gate, including when there is
no history at all.

1. Feedback within 10°F of the current raw temperature: prefer "just right"
   sessions, then the most recent.
2. Otherwise the activity's defaults for the current comfort band, with
   weather modifiers applied in order: rain, snow, wind, sun, dark. A modifier
   is skipped when its value is not an option for the category.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from services.activity_registry import ActivityProfile, TempBand, get_temp_band
from services.session_types import FeedbackSession, WeatherSample, as_utc
from services.weather_conditions import WeatherConditions


NEARBY_FEEDBACK_F = 10.0
MODIFIER_ORDER = ("rain", "snow", "wind", "sun", "dark")


@dataclass
class FallbackResult:
    clothing: Dict[str, str]
    band: TempBand
    feedback_session: Optional[FeedbackSession] = None
    applied_modifiers: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "band": self.band.value,
            "from_feedback": self.feedback_session is not None,
            "applied_modifiers": list(self.applied_modifiers),
        }


def find_nearby_feedback(
    weather: WeatherSample,
    feedback: Sequence[FeedbackSession],
) -> Optional[FeedbackSession]:
    nearby = [
        f for f in feedback
        if abs(f.weather.temperature - weather.temperature) <= NEARBY_FEEDBACK_F
    ]
    if not nearby:
        return None
    # max() keeps the first of equal keys
    return max(nearby, key=lambda f: (f.is_satisfied, as_utc(f.occurred_at)))


def apply_weather_modifiers(
    clothing: Dict[str, str],
    profile: ActivityProfile,
    band: TempBand,
    conditions: WeatherConditions,
) -> List[str]:
    """Apply modifiers in place. Returns a description of each one applied."""
    applied = []
    for condition in MODIFIER_ORDER:
        if not conditions.holds(condition):
            continue
        for rule in profile.modifiers:
            if rule.condition != condition or not rule.applies_to(band):
                continue
            category = profile.category(rule.category)
            if category is None:
                continue
            value = category.canonical(rule.value)
            if value is None:
                continue
            clothing[rule.category] = value
            applied.append(f"{condition}:{rule.category}={value}")
    return applied


def select_fallback(
    profile: ActivityProfile,
    weather: WeatherSample,
    comfort_f: float,
    conditions: WeatherConditions,
    feedback: Sequence[FeedbackSession] = (),
) -> FallbackResult:
    band = get_temp_band(comfort_f)

    nearby = find_nearby_feedback(weather, feedback)
    if nearby is not None:
        clothing = profile.defaults_for_band(band)
        clothing.update(profile.canonical_clothing(nearby.clothing))
        return FallbackResult(clothing=clothing, band=band, feedback_session=nearby)

    clothing = profile.defaults_for_band(band)
    applied = apply_weather_modifiers(clothing, profile, band, conditions)
    return FallbackResult(clothing=clothing, band=band, applied_modifiers=applied)
