"""
Clothing Suggestions

For low and medium confidence recommendations (< 70), explain where the
recommendation might be off and suggest layer changes.

Current T_comfort is compared with the average T_comfort of the sessions the
recommendation was built from. A gap of 2°C or more turns into "add a layer" /
"remove a layer" guidance; otherwise the recommendation is compared with the
typical defaults for the conditions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from services.activity_registry import (
    ActivityProfile,
    ClothingCategory,
    NONE_ITEM,
    get_activity_profile,
)
from services.fallback_defaults import select_fallback
from services.recommendation_engine import ClothingRecommendation
from services.session_types import ActivityLevel, ActivityType, ThermalPreference, WeatherSample
from services.temperature_utils import TemperatureUnit, format_temperature_difference
from services.thermal_comfort import calculate_comfort_temperature
from services.weather_conditions import classify_weather


SUGGESTION_CONFIDENCE_CEILING = 70
LOW_CONFIDENCE = 40
SIGNIFICANT_DIFF_C = 2.0
LARGE_DIFF_C = 5.0
COLD_F = 40.0
VERY_COLD_F = 25.0

WARM_TERMS = (
    "merino", "base layer + jacket", "expedition", "heavy", "fleece", "puffy",
    "jacket", "softshell", "thermal", "insulated", "winter",
)
COLD_TERMS = ("t-shirt", "singlet", "tank", "short sleeve", "short", "none")

LAYER_CATEGORIES = ("midLayer", "outerLayer")
TOP_CATEGORIES = ("baseLayer", "tops")
EXTREMITY_CATEGORIES = ("headCover", "gloves")


@dataclass
class ClothingSuggestion:
    category: str
    category_label: str
    current: str
    suggested: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "category_label": self.category_label,
            "current": self.current,
            "suggested": self.suggested,
            "reason": self.reason,
        }


@dataclass
class SuggestionContext:
    explanation: str
    confidence: int
    matching_runs: int
    suggestions: List[ClothingSuggestion] = field(default_factory=list)
    comfort_diff_c: Optional[float] = None  # current minus historical average

    def to_dict(self) -> Dict[str, Any]:
        return {
            "explanation": self.explanation,
            "confidence": self.confidence,
            "matching_runs": self.matching_runs,
            "comfort_diff_c": round(self.comfort_diff_c, 2) if self.comfort_diff_c is not None else None,
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


def _has_term(item: str, terms: Tuple[str, ...]) -> bool:
    lowered = item.lower()
    return any(term in lowered for term in terms)


def is_warmer_option(option: str, other: str) -> bool:
    """True when ``option`` reads as a warmer item than ``other``."""
    option_warm = _has_term(option, WARM_TERMS)
    other_warm = _has_term(other, WARM_TERMS)
    return option_warm and (not other_warm or _has_term(other, COLD_TERMS))


def warmer_option(category: ClothingCategory, current: str) -> str:
    if not _has_term(current, COLD_TERMS):
        return current
    for option in category.options:
        if _has_term(option, WARM_TERMS):
            return option
    return current


def cooler_option(category: ClothingCategory, current: str) -> str:
    if not _has_term(current, WARM_TERMS):
        return current
    for option in category.options:
        if not _has_term(option, WARM_TERMS) and option.lower() != current.lower():
            return option
    return current


def _historical_comfort_diff(
    profile: ActivityProfile,
    weather: WeatherSample,
    recommendation: ClothingRecommendation,
    thermal_preference: ThermalPreference,
    activity_level: Optional[ActivityLevel],
) -> Tuple[float, Optional[float]]:
    current = calculate_comfort_temperature(weather, profile.activity, thermal_preference, activity_level)
    sessions = recommendation.similar_conditions
    if not sessions:
        return current.comfort_f, None
    past = [
        calculate_comfort_temperature(s.weather, profile.activity, thermal_preference, s.activity_level).comfort_c
        for s in sessions
    ]
    return current.comfort_f, current.comfort_c - sum(past) / len(past)


def _reason(
    key: str,
    current: str,
    suggested: str,
    diff_c: Optional[float],
    comfort_f: float,
    raining: bool,
    low_confidence: bool,
    unit: TemperatureUnit,
) -> Optional[str]:
    cur = current.lower()
    sug = suggested.lower()
    none = NONE_ITEM.lower()

    if diff_c is not None and abs(diff_c) >= SIGNIFICANT_DIFF_C:
        gap = format_temperature_difference(diff_c, unit)
        if diff_c < 0:
            if key in LAYER_CATEGORIES and cur == none and sug != none:
                verb = "Add a layer for warmth." if low_confidence or abs(diff_c) >= LARGE_DIFF_C else "Consider adding a layer."
                return f"Current conditions are {gap} colder than your historical sessions. {verb}"
            if key in TOP_CATEGORIES and is_warmer_option(suggested, current):
                if abs(diff_c) >= LARGE_DIFF_C:
                    return f"Current conditions are {gap} colder. Upgrade to a warmer top."
                verb = "Use" if low_confidence else "Consider"
                return f"Current conditions are {gap} colder. {verb} a warmer top."
            if key in EXTREMITY_CATEGORIES and cur == none and sug != none:
                if abs(diff_c) >= LARGE_DIFF_C:
                    return f"Current conditions are {gap} colder. Essential for protecting extremities."
                return f"Current conditions are {gap} colder. Recommended for warmth."
            if key == "bottoms" and "short" in cur and ("tight" in sug or "pant" in sug):
                return f"Current conditions are {gap} colder. Long bottoms recommended."
        else:
            if key in LAYER_CATEGORIES and cur != none and sug == none:
                verb = "Remove this layer." if low_confidence else "Consider removing this layer."
                return f"Current conditions are {gap} warmer than your historical sessions. {verb}"
            if key in TOP_CATEGORIES and is_warmer_option(current, suggested):
                verb = "Use" if low_confidence else "Consider"
                return f"Current conditions are {gap} warmer. {verb} a lighter top."

    cold = comfort_f < COLD_F
    very_cold = comfort_f < VERY_COLD_F

    if key in LAYER_CATEGORIES and cur == none and sug != none:
        if very_cold:
            return "Very cold conditions typically require an additional layer"
        if cold:
            return "Cold conditions often benefit from an extra layer"
    if key in TOP_CATEGORIES and "short" in cur and "long" in sug:
        return "Long sleeves are more appropriate for this temperature"
    if key in EXTREMITY_CATEGORIES and cur == none and sug != none:
        if very_cold:
            return "Essential for protecting extremities in very cold weather"
        if cold:
            return "Recommended for cold conditions"
    if key == "bottoms" and "short" in cur and ("tight" in sug or "pant" in sug) and cold:
        return "Long bottoms are more appropriate for this temperature"
    if key == "rainGear" and raining and cur == none and sug != none:
        return "Rain protection is recommended when precipitation is expected"
    if cur == none and sug != none:
        return "Consider adding this item based on typical recommendations"
    if cur != none and sug == none:
        # Removing an item is only suggested on a clear temperature gap
        return None
    return "Default recommendation differs from your current selection"


def _explanation(
    confidence: int,
    matching_runs: int,
    diff_c: Optional[float],
    unit: TemperatureUnit,
) -> str:
    low_confidence = confidence < LOW_CONFIDENCE
    if matching_runs == 0:
        text = "No similar sessions found. These suggestions are based on typical recommendations for these conditions."
    elif matching_runs == 1:
        text = "Based on only 1 similar session."
    elif low_confidence:
        text = f"Low confidence ({confidence}%) from {matching_runs} sessions."
    else:
        text = f"Medium confidence ({confidence}%) from {matching_runs} sessions."

    if diff_c is not None and abs(diff_c) >= SIGNIFICANT_DIFF_C:
        gap = format_temperature_difference(diff_c, unit)
        if diff_c < 0:
            advice = "Add layers for warmth." if low_confidence else "Consider adding layers."
            text += f" Current conditions are {gap} colder than your historical sessions. {advice}"
        else:
            advice = "Remove layers to avoid overheating." if low_confidence else "Consider removing layers."
            text += f" Current conditions are {gap} warmer than your historical sessions. {advice}"
    elif matching_runs > 0:
        text += " Follow these recommendations:" if low_confidence else " Consider these recommendations:"
    return text


def generate_clothing_suggestions(
    recommendation: ClothingRecommendation,
    weather: WeatherSample,
    activity: Union[str, ActivityType],
    thermal_preference: ThermalPreference = ThermalPreference.AVERAGE,
    activity_level: Optional[ActivityLevel] = None,
    temperature_unit: TemperatureUnit = "fahrenheit",
) -> Optional[SuggestionContext]:
    """
    Suggest changes to a recommendation. None when confidence is 70 or more.
    """
    if recommendation.confidence >= SUGGESTION_CONFIDENCE_CEILING:
        return None

    profile = get_activity_profile(activity)
    preference = ThermalPreference(thermal_preference)
    comfort_f, diff_c = _historical_comfort_diff(
        profile, weather, recommendation, preference, activity_level
    )
    conditions = classify_weather(weather)
    typical = select_fallback(profile, weather, comfort_f, conditions).clothing

    needs_warmer = diff_c is not None and diff_c <= -SIGNIFICANT_DIFF_C
    needs_cooler = diff_c is not None and diff_c >= SIGNIFICANT_DIFF_C
    low_confidence = recommendation.confidence < LOW_CONFIDENCE

    suggestions = []
    for category in profile.categories:
        current = recommendation.clothing.get(category.key) or NONE_ITEM
        default_item = typical.get(category.key) or NONE_ITEM
        if current.lower() == default_item.lower() and not (needs_warmer or needs_cooler):
            continue

        reason = _reason(
            category.key, current, default_item, diff_c, comfort_f,
            conditions.wet, low_confidence, temperature_unit,
        )
        if reason is None:
            continue

        suggested = default_item
        if needs_warmer:
            if default_item != NONE_ITEM and is_warmer_option(default_item, current):
                suggested = default_item
            else:
                suggested = warmer_option(category, current)
        elif needs_cooler:
            if default_item != NONE_ITEM and is_warmer_option(current, default_item):
                suggested = default_item
            else:
                suggested = cooler_option(category, current)

        if suggested.lower() != current.lower():
            suggestions.append(ClothingSuggestion(
                category=category.key,
                category_label=category.label,
                current=current,
                suggested=suggested,
                reason=reason,
            ))

    return SuggestionContext(
        explanation=_explanation(
            recommendation.confidence, recommendation.matching_runs, diff_c, temperature_unit
        ),
        confidence=recommendation.confidence,
        matching_runs=recommendation.matching_runs,
        suggestions=suggestions,
        comfort_diff_c=diff_c,
    )
