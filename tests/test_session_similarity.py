"""
Tests for the session similarity scorer.

Running similarity threshold is 3.5°C, so a full match is within 3.5°C of
T_comfort and nothing beyond 7°C scores on comfort.
"""
import pytest

from services.activity_registry import get_activity_profile
from services.session_similarity import SessionSimilarityScorer, taper_score
from services.session_types import ActivityLevel, ActivityType, ComfortLevel
from session_factories import make_feedback, make_imported, make_weather


def _scorer(weather, activity=ActivityType.RUNNING):
    return SessionSimilarityScorer(get_activity_profile(activity), weather)


class TestTaperScore:
    """Tests for the linear taper."""

    def test_inside_threshold(self):
        assert taper_score(1.0, 3.5) == 1.0
        assert taper_score(3.5, 3.5) == 1.0

    def test_halfway(self):
        assert taper_score(5.25, 3.5) == pytest.approx(0.5)

    def test_at_and_beyond_twice_threshold(self):
        assert taper_score(7.0, 3.5) == pytest.approx(0.0)
        assert taper_score(8.0, 3.5) == 0.0

    def test_sign_ignored(self):
        assert taper_score(-5.25, 3.5) == pytest.approx(0.5)


class TestSessionSimilarityScorer:
    """Tests for scoring past sessions against current conditions."""

    def test_identical_imported_session(self):
        scorer = _scorer(make_weather(50))
        score, breakdown = scorer.score(make_imported(50, {"tops": "Long sleeve"}))
        assert score == pytest.approx(1.0)
        assert breakdown.precipitation_score == 1.0
        assert breakdown.uv_score == 1.0

    def test_feedback_scored_on_comfort_only(self):
        """Precipitation mismatch does not affect feedback sessions."""
        scorer = _scorer(make_weather(50, precipitation=0.1))
        score, breakdown = scorer.score(make_feedback(50, {"tops": "Long sleeve"}))
        assert score == pytest.approx(1.0)
        assert breakdown.precipitation_score is None
        assert breakdown.uv_score is None

    def test_feedback_taper(self):
        """5.25°C away (9.45°F) is half a match."""
        scorer = _scorer(make_weather(50))
        score, _ = scorer.score(make_feedback(59.45, {}))
        assert score == pytest.approx(0.5)

    def test_precipitation_mismatch_reduces_not_vetoes(self):
        scorer = _scorer(make_weather(50, precipitation=0.1))
        score, breakdown = scorer.score(make_imported(50, {}))
        assert breakdown.precipitation_score == 0.3
        assert score == pytest.approx((5.0 + 2.5 * 0.3 + 0.5) / 8.0)

    def test_uv_taper(self):
        scorer = _scorer(make_weather(50, uv_index=0))
        score, breakdown = scorer.score(make_imported(50, {}, uv_index=3))
        assert breakdown.uv_score == pytest.approx(0.5)
        assert score == pytest.approx((5.0 + 2.5 + 0.25) / 8.0)

    def test_far_session_is_not_candidate(self):
        """15°F warmer is 8.3°C of T_comfort, beyond twice the threshold."""
        scorer = _scorer(make_weather(50))
        assert not scorer.is_candidate(make_imported(65, {}))
        assert scorer.is_candidate(make_imported(55, {}))

    def test_session_intensity_is_used(self):
        scorer = _scorer(make_weather(50))
        session = make_imported(50, {}, activity_level=ActivityLevel.HIGH)
        assert scorer.comfort_difference(session) == pytest.approx(1.5)

    def test_threshold_depends_on_activity(self):
        """Walking (1.5°C) is stricter than running (3.5°C) for the same gap."""
        weather = make_weather(50)
        running, _ = _scorer(weather).score(make_imported(58, {}))
        walking, _ = _scorer(weather, ActivityType.WALKING).score(
            make_imported(58, {}, activity=ActivityType.WALKING)
        )
        assert running > walking

    def test_scores_stay_in_range(self):
        scorer = _scorer(make_weather(45, 38, uv_index=4, precipitation=0.05))
        for temp in range(0, 100, 7):
            for uv in (0, 2, 6, 11):
                imported_score, _ = scorer.score(make_imported(temp, {}, uv_index=uv))
                assert 0.0 <= imported_score <= 1.0
            feedback_score, _ = scorer.score(make_feedback(temp, {}, comfort=ComfortLevel.TOO_HOT))
            assert 0.0 <= feedback_score <= 1.0
