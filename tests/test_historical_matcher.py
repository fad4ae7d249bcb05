"""
Tests for the historical matcher and voting aggregator.
"""
import pytest

from services.activity_registry import get_activity_profile
from services.historical_matcher import (
    FAST_PATH_CONFIDENCE,
    HistoricalMatcher,
    ScoredSession,
    calculate_confidence,
    days_between,
    recency_multiplier,
)
from services.session_similarity import SessionSimilarityScorer, SimilarityBreakdown
from services.session_types import ActivityType, ComfortLevel
from session_factories import REFERENCE_TIME, make_feedback, make_imported, make_weather


def _matcher(weather=None, activity=ActivityType.RUNNING):
    scorer = SessionSimilarityScorer(get_activity_profile(activity), weather or make_weather(50))
    return HistoricalMatcher(scorer, REFERENCE_TIME)


def _scored(session, score):
    breakdown = SimilarityBreakdown(
        comfort_diff_c=0.0,
        comfort_score=score,
        precipitation_score=None,
        uv_score=None,
        total_score=score,
    )
    return ScoredSession(session=session, similarity=score, breakdown=breakdown, comfort_c=10.0, score=score)


class TestRecencyMultiplier:
    """Tests for the feedback recency boost."""

    def test_full_boost_within_a_week(self):
        assert recency_multiplier(0) == pytest.approx(1.05)
        assert recency_multiplier(7) == pytest.approx(1.05)

    def test_fades_to_nothing_at_100_days(self):
        assert recency_multiplier(53.5) == pytest.approx(1.025)
        assert recency_multiplier(100) == pytest.approx(1.0)
        assert recency_multiplier(365) == pytest.approx(1.0)

    def test_future_sessions_count_as_today(self):
        later = REFERENCE_TIME.replace(year=2026)
        assert days_between(REFERENCE_TIME, later) == 0.0


class TestCalculateConfidence:
    """Tests for the 30/70 confidence split."""

    def test_empty(self):
        assert calculate_confidence([]) == 0

    def test_single_perfect_match(self):
        assert calculate_confidence([1.0]) == 73

    def test_count_saturates_at_ten(self):
        assert calculate_confidence([1.0] * 10) == 100
        assert calculate_confidence([1.0] * 25) == 100

    def test_average_similarity(self):
        assert calculate_confidence([0.5] * 5) == 50

    def test_always_in_range(self):
        for n in range(1, 15):
            for score in (0.4, 0.7, 1.0):
                assert 0 <= calculate_confidence([score] * n) <= 100


class TestBallots:
    """Tests for ballot counts."""

    def test_imported_ballots(self):
        assert _scored(make_imported(50, {}), 1.0).ballots == 3
        assert _scored(make_imported(50, {}), 0.8).ballots == 3
        assert _scored(make_imported(50, {}), 0.34).ballots == 2

    def test_feedback_ballots_doubled(self):
        assert _scored(make_feedback(50, {}), 1.0).ballots == 6
        assert _scored(make_feedback(50, {}), 0.8).ballots == 6


class TestVoting:
    """Tests for the weighted category vote."""

    def test_feedback_outweighs_imported_two_to_one(self):
        matcher = _matcher()
        history = [make_imported(50, {"tops": "Long sleeve"})]
        feedback = [make_feedback(50, {"tops": "T-shirt"}, comfort=ComfortLevel.TOO_COLD, days_ago=150)]

        result = matcher.match(history, feedback)

        assert result.source == "similar_sessions"
        assert result.tallies["tops"].votes == {"Long sleeve": 3, "T-shirt": 6}
        assert result.clothing["tops"] == "T-shirt"

    def test_case_insensitive_tally(self):
        matcher = _matcher()
        history = [
            make_imported(50, {"tops": "long sleeve"}),
            make_imported(50, {"tops": "LONG SLEEVE"}),
            make_imported(50, {"tops": "T-shirt"}),
        ]
        result = matcher.match(history, [])
        assert result.tallies["tops"].votes == {"long sleeve": 6, "T-shirt": 3}
        assert result.clothing["tops"] == "Long sleeve"

    def test_tie_goes_to_first_seen(self):
        matcher = _matcher()
        history = [
            make_imported(50, {"tops": "Long sleeve"}),
            make_imported(50, {"tops": "T-shirt"}),
        ]
        result = matcher.match(history, [])
        assert result.clothing["tops"] == "Long sleeve"

    def test_invalid_winner_keeps_default(self):
        matcher = _matcher()
        result = matcher.match([make_imported(50, {"tops": "Kimono"})], [])
        assert result.tallies["tops"].winner == "Kimono"
        assert result.tallies["tops"].resolved is None
        assert result.clothing["tops"] == "T-shirt"

    def test_none_is_a_valid_choice(self):
        matcher = _matcher()
        result = matcher.match([make_imported(50, {"gloves": "n/a"})], [])
        assert result.clothing["gloves"] == "None"

    def test_uncovered_categories_use_defaults(self):
        matcher = _matcher()
        result = matcher.match([make_imported(50, {"tops": "Long sleeve"})], [])
        assert result.clothing["shoes"] == "Running shoes"
        assert set(result.clothing) == set(get_activity_profile("running").category_keys)

    def test_gate_excludes_weak_matches(self):
        """A session scored below 0.4 never votes."""
        matcher = _matcher()
        scored = [_scored(make_imported(50, {"tops": "Singlet"}), 0.39)]
        assert matcher.select(scored) is None

    def test_nothing_in_range_returns_none(self):
        matcher = _matcher()
        assert matcher.match([make_imported(80, {"tops": "Singlet"})], []) is None

    def test_sorted_by_score(self):
        matcher = _matcher()
        history = [make_imported(56, {}), make_imported(50, {})]
        result = matcher.match(history, [])
        scores = [m.score for m in result.matched]
        assert scores == sorted(scores, reverse=True)


class TestRecentMatch:
    """Tests for the recent-feedback fast path."""

    def test_recent_close_feedback_wins(self):
        matcher = _matcher()
        history = [make_imported(50, {"tops": "Long sleeve"}) for _ in range(5)]
        feedback = [make_feedback(50, {"tops": "Singlet"}, days_ago=2)]

        result = matcher.match(history, feedback)

        assert result.source == "recent_match"
        assert result.confidence == FAST_PATH_CONFIDENCE
        assert len(result.matched) == 1
        assert result.clothing["tops"] == "Singlet"

    def test_old_feedback_goes_to_voting(self):
        matcher = _matcher()
        result = matcher.match([], [make_feedback(50, {"tops": "Singlet"}, days_ago=10)])
        assert result.source == "similar_sessions"

    def test_needs_more_than_085_similarity(self):
        """4.5°C away tapers to about 0.71."""
        matcher = _matcher()
        result = matcher.match([], [make_feedback(58.1, {"tops": "Singlet"}, days_ago=1)])
        assert result.source == "similar_sessions"

    def test_most_recent_wins_equal_similarity(self):
        matcher = _matcher()
        feedback = [
            make_feedback(50, {"tops": "Long sleeve"}, days_ago=5),
            make_feedback(50, {"tops": "Singlet"}, days_ago=1),
        ]
        result = matcher.match([], feedback)
        assert result.clothing["tops"] == "Singlet"


class TestFeedbackBoosts:
    """Tests for recency and comfort boosts on feedback scores."""

    def test_just_right_gets_comfort_boost(self):
        matcher = _matcher()
        happy, cold = matcher.score_sessions([
            make_feedback(58.1, {}, comfort=ComfortLevel.JUST_RIGHT, days_ago=200),
            make_feedback(58.1, {}, comfort=ComfortLevel.TOO_COLD, days_ago=200),
        ])
        assert happy.comfort_boost == 1.05
        assert cold.comfort_boost == 1.0
        assert happy.score == pytest.approx(happy.similarity * 1.05)
        assert cold.score == pytest.approx(cold.similarity)

    def test_boosted_score_is_clamped(self):
        matcher = _matcher()
        [entry] = matcher.score_sessions([make_feedback(50, {}, days_ago=1)])
        assert entry.similarity == pytest.approx(1.0)
        assert entry.score == 1.0

    def test_imported_sessions_are_not_boosted(self):
        matcher = _matcher()
        [entry] = matcher.score_sessions([make_imported(58.1, {}, days_ago=1)])
        assert entry.score == entry.similarity
        assert entry.recency_boost == 1.0
