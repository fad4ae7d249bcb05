"""
End-to-end tests for the recommendation pipeline.
"""
from datetime import datetime, timedelta, timezone

import pytest

from services.recommendation_engine import (
    RecommendationEngine,
    RecommendationSource,
    build_recommendation,
)
from services.session_types import ActivityType, ComfortLevel
from session_factories import REFERENCE_TIME, make_feedback, make_imported, make_weather


class TestFallbackPath:
    """Tests for recommendations without usable history."""

    def test_no_history(self):
        rec = RecommendationEngine().recommend(make_weather(41), [], [], ActivityType.RUNNING)
        assert rec.source == RecommendationSource.FALLBACK_DEFAULTS
        assert rec.confidence == 0
        assert rec.matching_runs == 0
        assert rec.total_runs == 0
        assert rec.clothing["tops"] == "Long sleeve"
        assert rec.clothing["headCover"] == "Headband"

    def test_distant_history_is_filtered(self):
        """Sessions beyond twice the threshold never match."""
        history = [
            make_imported(65, {"tops": "Singlet"}),
            make_imported(70, {"tops": "Singlet"}),
            make_imported(30, {"tops": "Base layer + jacket"}),
        ]
        rec = RecommendationEngine().recommend(make_weather(50), history, [], ActivityType.RUNNING)
        assert rec.matching_runs == 0
        assert rec.total_runs == 3
        assert rec.source == RecommendationSource.FALLBACK_DEFAULTS

    def test_nearby_feedback_reported(self):
        """Feedback 9°F away is outside walking's similarity range but close enough to reuse."""
        feedback = [make_feedback(51, {"tops": "Long sleeve"}, activity=ActivityType.WALKING, days_ago=40)]
        result = build_recommendation(make_weather(60), [], feedback, "walking")
        assert result.recommendation.source == RecommendationSource.FALLBACK_DEFAULTS
        assert result.recommendation.similar_conditions == feedback
        assert result.diagnostics.fallback.feedback_session is feedback[0]


class TestRecentMatchPath:
    """Tests for the recent-feedback fast path through the engine."""

    def test_recent_feedback(self):
        history = [make_imported(60, {"tops": "Long sleeve"}) for _ in range(4)]
        feedback = [make_feedback(60, {"tops": "Singlet", "bottoms": "Short shorts"}, days_ago=2)]
        rec = RecommendationEngine().recommend(make_weather(60), history, feedback, ActivityType.RUNNING)
        assert rec.source == RecommendationSource.RECENT_MATCH
        assert rec.confidence == 95
        assert rec.matching_runs == 1
        assert rec.total_runs == 5
        assert rec.clothing["tops"] == "Singlet"
        assert rec.similar_conditions == feedback

    def test_reference_time_controls_window(self):
        feedback = [make_feedback(60, {"tops": "Singlet"}, days_ago=2)]
        rec = RecommendationEngine().recommend(
            make_weather(60), [], feedback, ActivityType.RUNNING,
            reference_time=REFERENCE_TIME + timedelta(days=30),
        )
        assert rec.source == RecommendationSource.SIMILAR_SESSIONS


class TestVotingPath:
    """Tests for voting through the engine."""

    def test_feedback_weighted_double(self):
        history = [make_imported(60, {"tops": "Long sleeve"})]
        feedback = [make_feedback(60, {"tops": "T-shirt"}, comfort=ComfortLevel.TOO_COLD, days_ago=150)]
        engine = RecommendationEngine()
        rec = engine.recommend(make_weather(60), history, feedback, ActivityType.RUNNING)

        diagnostics = engine.get_last_diagnostics()
        assert rec.source == RecommendationSource.SIMILAR_SESSIONS
        assert diagnostics.vote_tallies["tops"].votes == {"Long sleeve": 3, "T-shirt": 6}
        assert rec.clothing["tops"] == "T-shirt"

    def test_confidence_and_similar_conditions(self):
        history = [make_imported(60, {"tops": "T-shirt"}, days_ago=d) for d in range(10, 18)]
        rec = RecommendationEngine().recommend(make_weather(60), history, [], ActivityType.RUNNING)
        assert rec.matching_runs == 8
        assert rec.confidence == 94
        assert len(rec.similar_conditions) == 5

    def test_other_activities_ignored(self):
        history = [
            make_imported(60, {"tops": "Long sleeve"}),
            make_imported(60, {"tops": "Thermal jersey"}, activity=ActivityType.CYCLING),
        ]
        rec = RecommendationEngine().recommend(make_weather(60), history, [], ActivityType.RUNNING)
        assert rec.total_runs == 1
        assert rec.matching_runs == 1

    def test_every_category_present(self):
        history = [make_imported(60, {"tops": "Long sleeve"})]
        rec = RecommendationEngine().recommend(make_weather(60), history, [], "running")
        assert set(rec.clothing) == {
            "headCover", "tops", "bottoms", "shoes", "socks", "gloves", "rainGear", "accessories",
        }


class TestPostProcessing:
    """Safety overrides and lighting run after voting."""

    def test_safety_upgrades_voted_items(self):
        history = [make_imported(20, {"tops": "T-shirt", "bottoms": "Shorts"}) for _ in range(3)]
        engine = RecommendationEngine()
        rec = engine.recommend(make_weather(20), history, [], ActivityType.RUNNING)
        assert rec.clothing["tops"] == "Long sleeve"
        assert rec.clothing["bottoms"] == "Tights"
        rules = {o.rule for o in engine.get_last_diagnostics().safety_overrides}
        assert {"warm_top", "covered_legs"} <= rules

    def test_voted_bare_items_covered_in_deep_cold(self):
        bare = {"tops": "None", "bottoms": "None", "shoes": "None"}
        history = [make_imported(0, bare) for _ in range(3)]
        rec = RecommendationEngine().recommend(make_weather(0), history, [], ActivityType.RUNNING)
        assert rec.source == RecommendationSource.SIMILAR_SESSIONS
        assert rec.clothing["tops"] == "Base layer + jacket"
        assert rec.clothing["bottoms"] == "Thermal tights"
        assert rec.clothing["shoes"] == "Waterproof running shoes"

    def test_voted_headlamp_removed_in_daylight(self):
        history = [make_imported(60, {"accessories": "Headlamp"}) for _ in range(3)]
        rec = RecommendationEngine().recommend(make_weather(60), history, [], ActivityType.RUNNING)
        assert rec.clothing["accessories"] == "None"

    def test_dark_adds_headlamp(self):
        day = datetime(2025, 1, 15, tzinfo=timezone.utc)
        weather = make_weather(
            60,
            observed_at=day + timedelta(hours=5),
            sunrise=day + timedelta(hours=7),
            sunset=day + timedelta(hours=17),
        )
        history = [make_imported(60, {"accessories": "None"})]
        rec = RecommendationEngine().recommend(weather, history, [], ActivityType.RUNNING)
        assert rec.clothing["accessories"] == "Headlamp + reflective vest"


class TestDiagnostics:
    """Tests for the per-call diagnostic snapshot."""

    def test_none_before_first_call(self):
        assert RecommendationEngine().get_last_diagnostics() is None

    def test_snapshot_contents(self):
        history = [make_imported(60, {"tops": "T-shirt"})]
        engine = RecommendationEngine()
        engine.recommend(make_weather(60), history, [], ActivityType.RUNNING)
        data = engine.get_last_diagnostics().to_dict()
        assert data["activity"] == "running"
        assert data["band"] == "warm"
        assert data["source"] == "similar_sessions"
        assert len(data["ranked_sessions"]) == 1
        assert data["comfort"]["comfort_c"] == pytest.approx(21.56, abs=0.01)

    def test_engines_do_not_share_diagnostics(self):
        first, second = RecommendationEngine(), RecommendationEngine()
        first.recommend(make_weather(60), [], [], ActivityType.RUNNING)
        assert second.get_last_diagnostics() is None

    def test_deterministic(self):
        history = [make_imported(t, {"tops": "T-shirt"}, days_ago=t) for t in range(50, 65)]
        feedback = [make_feedback(55, {"tops": "Long sleeve"}, days_ago=30)]
        first = build_recommendation(make_weather(57), history, feedback, "running")
        second = build_recommendation(make_weather(57), history, feedback, "running")
        assert first.recommendation.to_dict() == second.recommendation.to_dict()
        assert first.diagnostics.to_dict() == second.diagnostics.to_dict()

    def test_unknown_activity(self):
        with pytest.raises(ValueError):
            build_recommendation(make_weather(60), [], [], "kayaking")
