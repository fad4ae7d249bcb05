"""
Recommendation Engine

Pipeline for one recommendation:

    T_comfort → similarity → recent match | voting | fallback
              → safety overrides → lighting accessories

Pure over its inputs. Everything worth inspecting afterwards is returned in a
per-call DiagnosticSnapshot alongside the recommendation; RecommendationEngine
keeps the last snapshot for its own caller only.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from core.logging import log_event
from services.activity_registry import TempBand, get_activity_profile, get_temp_band
from services.fallback_defaults import FallbackResult, select_fallback
from services.historical_matcher import CategoryTally, HistoricalMatcher, ScoredSession
from services.lighting import LightingChange, apply_lighting
from services.safety_overrides import SafetyOverride, apply_safety_overrides
from services.session_similarity import SessionSimilarityScorer
from services.session_types import (
    ActivityLevel,
    ActivityType,
    FeedbackSession,
    ImportedSession,
    Session,
    ThermalPreference,
    WeatherSample,
    as_utc,
)
from services.thermal_comfort import ComfortTemperature
from services.weather_conditions import WeatherConditions, classify_weather

logger = logging.getLogger(__name__)


SIMILAR_CONDITIONS_LIMIT = 5
DIAGNOSTIC_SESSIONS_LIMIT = 10


class RecommendationSource(str, Enum):
    RECENT_MATCH = "recent_match"
    SIMILAR_SESSIONS = "similar_sessions"
    FALLBACK_DEFAULTS = "fallback_defaults"


@dataclass
class ClothingRecommendation:
    clothing: Dict[str, str]
    confidence: int  # 0-100
    matching_runs: int
    total_runs: int
    similar_conditions: List[Session] = field(default_factory=list)
    source: RecommendationSource = RecommendationSource.FALLBACK_DEFAULTS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "clothing": dict(self.clothing),
            "confidence": self.confidence,
            "matching_runs": self.matching_runs,
            "total_runs": self.total_runs,
            "similar_conditions": [s.to_dict() for s in self.similar_conditions],
            "source": self.source.value,
        }


@dataclass
class DiagnosticSnapshot:
    """Everything that went into one recommendation."""
    weather: WeatherSample
    activity: ActivityType
    thermal_preference: ThermalPreference
    activity_level: Optional[ActivityLevel]
    comfort: ComfortTemperature
    band: TempBand
    conditions: WeatherConditions
    ranked_sessions: List[ScoredSession]
    vote_tallies: Dict[str, CategoryTally]
    safety_overrides: List[SafetyOverride]
    lighting_changes: List[LightingChange]
    recommendation: ClothingRecommendation
    fallback: Optional[FallbackResult] = None

    @property
    def confidence(self) -> int:
        return self.recommendation.confidence

    @property
    def source(self) -> RecommendationSource:
        return self.recommendation.source

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weather": self.weather.to_dict(),
            "activity": self.activity.value,
            "thermal_preference": self.thermal_preference.value,
            "activity_level": self.activity_level.value if self.activity_level else None,
            "comfort": self.comfort.to_dict(),
            "band": self.band.value,
            "conditions": self.conditions.to_dict(),
            "ranked_sessions": [s.to_dict() for s in self.ranked_sessions],
            "vote_tallies": {k: t.to_dict() for k, t in self.vote_tallies.items()},
            "safety_overrides": [o.to_dict() for o in self.safety_overrides],
            "lighting_changes": [c.to_dict() for c in self.lighting_changes],
            "fallback": self.fallback.to_dict() if self.fallback else None,
            "recommendation": self.recommendation.to_dict(),
            "confidence": self.confidence,
            "source": self.source.value,
        }


@dataclass
class RecommendationResult:
    recommendation: ClothingRecommendation
    diagnostics: DiagnosticSnapshot


def _resolve_reference_time(weather: WeatherSample, reference_time: Optional[datetime]) -> datetime:
    if reference_time is not None:
        return as_utc(reference_time)
    if weather.observed_at is not None:
        return as_utc(weather.observed_at)
    return datetime.now(timezone.utc)


def build_recommendation(
    weather: WeatherSample,
    history: Sequence[ImportedSession],
    feedback: Sequence[FeedbackSession],
    activity: Union[str, ActivityType],
    thermal_preference: Union[str, ThermalPreference] = ThermalPreference.AVERAGE,
    activity_level: Optional[Union[str, ActivityLevel]] = None,
    reference_time: Optional[datetime] = None,
) -> RecommendationResult:
    """
    Recommend clothing for current conditions.

    ``reference_time`` anchors the recent-match window and recency boosts. It
    defaults to ``weather.observed_at`` so identical inputs always produce
    identical output.

    Raises ValueError for an unknown activity.
    """
    profile = get_activity_profile(activity)
    preference = ThermalPreference(thermal_preference)
    level = ActivityLevel(activity_level) if activity_level else None

    # Never compare T_comfort across activities
    history = [s for s in history if s.activity == profile.activity]
    feedback = [s for s in feedback if s.activity == profile.activity]
    total_runs = len(history) + len(feedback)

    scorer = SessionSimilarityScorer(profile, weather, preference, level)
    comfort = scorer.current_comfort
    comfort_f = comfort.comfort_f
    band = get_temp_band(comfort_f)
    conditions = classify_weather(weather)

    matcher = HistoricalMatcher(scorer, _resolve_reference_time(weather, reference_time))
    scored = matcher.score_sessions(history + feedback)
    match = matcher.select(scored)

    fallback = None
    tallies: Dict[str, CategoryTally] = {}
    if match is not None:
        clothing = match.clothing
        confidence = match.confidence
        matching_runs = len(match.matched)
        similar = [m.session for m in match.matched[:SIMILAR_CONDITIONS_LIMIT]]
        source = RecommendationSource(match.source)
        tallies = match.tallies
    else:
        fallback = select_fallback(profile, weather, comfort_f, conditions, feedback)
        clothing = fallback.clothing
        confidence = 0
        matching_runs = 0
        similar = [fallback.feedback_session] if fallback.feedback_session else []
        source = RecommendationSource.FALLBACK_DEFAULTS

    clothing, overrides = apply_safety_overrides(clothing, profile, comfort_f, conditions)
    clothing, lighting_changes = apply_lighting(clothing, profile, conditions)

    recommendation = ClothingRecommendation(
        clothing=clothing,
        confidence=confidence,
        matching_runs=matching_runs,
        total_runs=total_runs,
        similar_conditions=similar,
        source=source,
    )

    log_event(
        logger,
        "recommendation",
        f"Recommendation for {profile.activity.value}: source={source.value} "
        f"confidence={confidence} matches={matching_runs}/{total_runs}",
        activity=profile.activity.value,
        source=source.value,
        confidence=confidence,
        matching_runs=matching_runs,
        total_runs=total_runs,
        comfort_c=round(comfort.comfort_c, 1),
        band=band.value,
        safety_overrides=len(overrides),
    )

    diagnostics = DiagnosticSnapshot(
        weather=weather,
        activity=profile.activity,
        thermal_preference=preference,
        activity_level=level,
        comfort=comfort,
        band=band,
        conditions=conditions,
        ranked_sessions=matcher.rank(scored)[:DIAGNOSTIC_SESSIONS_LIMIT],
        vote_tallies=tallies,
        safety_overrides=overrides,
        lighting_changes=lighting_changes,
        recommendation=recommendation,
        fallback=fallback,
    )
    return RecommendationResult(recommendation=recommendation, diagnostics=diagnostics)


class RecommendationEngine:
    """
    Stateful wrapper for callers that want ``get_last_diagnostics()``.

    One instance per caller; the snapshot is never shared between instances.
    """

    def __init__(self):
        self._last_diagnostics: Optional[DiagnosticSnapshot] = None

    def recommend(
        self,
        weather: WeatherSample,
        history: Sequence[ImportedSession],
        feedback: Sequence[FeedbackSession],
        activity: Union[str, ActivityType],
        thermal_preference: Union[str, ThermalPreference] = ThermalPreference.AVERAGE,
        activity_level: Optional[Union[str, ActivityLevel]] = None,
        reference_time: Optional[datetime] = None,
    ) -> ClothingRecommendation:
        result = build_recommendation(
            weather,
            history,
            feedback,
            activity,
            thermal_preference,
            activity_level,
            reference_time,
        )
        self._last_diagnostics = result.diagnostics
        return result.recommendation

    def get_last_diagnostics(self) -> Optional[DiagnosticSnapshot]:
        return self._last_diagnostics
