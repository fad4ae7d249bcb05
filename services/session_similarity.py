"""
Session Similarity Scorer

Scores how comparable current conditions are to one past session, for
clothing purposes. Both sides are first reduced to T_comfort with the same
activity and thermal preference, so a 40°F run is compared as a runner feels
it, not as a thermometer reads it.

Terms:
- comfort (5.0): taper on |ΔT_comfort| against the activity threshold
- precipitation (2.5): 1 when both agree on wet/dry, 0.3 otherwise
- uv (0.5): taper on |ΔUV| against 2 units

Feedback sessions only carry a reliable temperature, so they are scored on the
comfort term alone. Score = Σ(term × weight) / Σ(weight), always in [0, 1].
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from services.activity_registry import ActivityProfile
from services.session_types import (
    ActivityLevel,
    Provenance,
    Session,
    ThermalPreference,
    WeatherSample,
)
from services.thermal_comfort import ComfortTemperature, calculate_comfort_temperature


def taper_score(diff: float, threshold: float) -> float:
    """
    1.0 inside the threshold, linear down to 0 at twice the threshold.

    - diff <= t: 1.0
    - t < diff <= 2t: 2 - diff/t
    - diff > 2t: 0.0
    """
    diff = abs(diff)
    if diff <= threshold:
        return 1.0
    if diff <= 2 * threshold:
        return 2.0 - diff / threshold
    return 0.0


@dataclass
class SimilarityBreakdown:
    """Why a session scored the way it did"""
    comfort_diff_c: float
    comfort_score: float
    precipitation_score: Optional[float]  # None for feedback sessions
    uv_score: Optional[float]
    total_score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "comfort_diff_c": round(self.comfort_diff_c, 2),
            "comfort_score": round(self.comfort_score, 3),
            "precipitation_score": self.precipitation_score,
            "uv_score": round(self.uv_score, 3) if self.uv_score is not None else None,
            "total_score": round(self.total_score, 3),
        }


class SessionSimilarityScorer:
    """
    Compares past sessions against one set of current conditions.

    Built once per recommendation: the current T_comfort is computed up front
    and every candidate is scored against it.
    """

    WEIGHTS = {
        "comfort": 5.0,
        "precipitation": 2.5,
        "uv": 0.5,
    }

    UV_THRESHOLD = 2.0
    PRECIPITATION_MISMATCH = 0.3

    def __init__(
        self,
        profile: ActivityProfile,
        current: WeatherSample,
        thermal_preference: ThermalPreference = ThermalPreference.AVERAGE,
        activity_level: Optional[ActivityLevel] = None,
    ):
        self.profile = profile
        self.current = current
        self.thermal_preference = thermal_preference
        self.current_comfort = calculate_comfort_temperature(
            current, profile.activity, thermal_preference, activity_level
        )

    @property
    def threshold(self) -> float:
        return self.profile.similarity_threshold

    def comfort_for(self, session: Session) -> ComfortTemperature:
        """Past T_comfort, using the session's own intensity when it was recorded."""
        return calculate_comfort_temperature(
            session.weather,
            self.profile.activity,
            self.thermal_preference,
            session.activity_level,
        )

    def comfort_difference(self, session: Session) -> float:
        return abs(self.current_comfort.comfort_c - self.comfort_for(session).comfort_c)

    def is_candidate(self, session: Session) -> bool:
        """Cheap pre-filter: sessions beyond 2x the threshold can never score on comfort."""
        return self.comfort_difference(session) <= 2 * self.threshold

    def score(self, session: Session) -> Tuple[float, SimilarityBreakdown]:
        """
        Calculate similarity between current conditions and a past session.
        Returns: (total_score, breakdown)
        """
        diff = self.comfort_difference(session)
        comfort_score = taper_score(diff, self.threshold)

        if session.provenance == Provenance.FEEDBACK:
            total = comfort_score
            precipitation_score = None
            uv_score = None
        else:
            precipitation_score = self._score_precipitation(session.weather)
            uv_score = self._score_uv(session.weather)
            total = (
                comfort_score * self.WEIGHTS["comfort"] +
                precipitation_score * self.WEIGHTS["precipitation"] +
                uv_score * self.WEIGHTS["uv"]
            ) / sum(self.WEIGHTS.values())

        total = max(0.0, min(1.0, total))

        return total, SimilarityBreakdown(
            comfort_diff_c=diff,
            comfort_score=comfort_score,
            precipitation_score=precipitation_score,
            uv_score=uv_score,
            total_score=total,
        )

    def _score_precipitation(self, past: WeatherSample) -> float:
        # A wet/dry mismatch lowers the score but never vetoes a close match
        if self.current.has_precipitation == past.has_precipitation:
            return 1.0
        return self.PRECIPITATION_MISMATCH

    def _score_uv(self, past: WeatherSample) -> float:
        return taper_score(self.current.uv_index - past.uv_index, self.UV_THRESHOLD)
