"""
Historical Matcher / Voting Aggregator

Turns scored past sessions into one clothing choice per category.

Two paths:
1. Recent match: a feedback session from the last 7 days that is more than
   0.85 similar is returned as-is (confidence 95). Very recent, very close
   personal experience beats aggregated history.
2. Voting: every session clearing the 0.4 gate casts ceil(score × 3) ballots
   per category for the item it wore, doubled for feedback sessions. Feedback
   scores get multiplicative recency and comfort boosts before the ballot
   count is taken.

Confidence = min(100, min(n, 10)/10 × 30 + avg(score) × 70).
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from services.activity_registry import ActivityProfile, normalize_item
from services.session_similarity import SessionSimilarityScorer, SimilarityBreakdown
from services.session_types import (
    ComfortLevel,
    FeedbackSession,
    ImportedSession,
    Provenance,
    Session,
    as_utc,
)

logger = logging.getLogger(__name__)


MIN_SIMILARITY = 0.4

FAST_PATH_WINDOW_DAYS = 7
FAST_PATH_MIN_SIMILARITY = 0.85
FAST_PATH_CONFIDENCE = 95

BALLOTS_PER_SESSION = 3
FEEDBACK_BALLOT_MULTIPLIER = 2

RECENCY_MAX_BOOST = 1.05
RECENCY_FULL_DAYS = 7
RECENCY_FADE_DAYS = 100
COMFORT_BOOST = 1.05

CONFIDENCE_COUNT_CAP = 10
CONFIDENCE_COUNT_POINTS = 30
CONFIDENCE_SIMILARITY_POINTS = 70


def days_between(reference_time: datetime, occurred_at: datetime) -> float:
    """Days from occurred_at to reference_time, floored at 0."""
    seconds = (as_utc(reference_time) - as_utc(occurred_at)).total_seconds()
    return max(0.0, seconds / 86400)


def recency_multiplier(days_since: float) -> float:
    """
    1.05 within a week, fading linearly to 1.0 at 100 days.
    """
    if days_since <= RECENCY_FULL_DAYS:
        return RECENCY_MAX_BOOST
    fade_span = RECENCY_FADE_DAYS - RECENCY_FULL_DAYS
    remaining = max(0.0, 1 - (days_since - RECENCY_FULL_DAYS) / fade_span)
    return 1.0 + (RECENCY_MAX_BOOST - 1.0) * remaining


def comfort_multiplier(session: FeedbackSession) -> float:
    return COMFORT_BOOST if session.comfort == ComfortLevel.JUST_RIGHT else 1.0


def calculate_confidence(scores: Sequence[float]) -> int:
    """0-100. Count contributes up to 30 points, average similarity up to 70."""
    if not scores:
        return 0
    count_part = min(len(scores), CONFIDENCE_COUNT_CAP) / CONFIDENCE_COUNT_CAP * CONFIDENCE_COUNT_POINTS
    similarity_part = sum(scores) / len(scores) * CONFIDENCE_SIMILARITY_POINTS
    return int(round(min(100.0, count_part + similarity_part)))


@dataclass
class ScoredSession:
    session: Session
    similarity: float  # raw, gate applies to this
    breakdown: SimilarityBreakdown
    comfort_c: float
    score: float = 0.0  # boosted and clamped, used for ballots
    recency_boost: float = 1.0
    comfort_boost: float = 1.0

    @property
    def provenance(self) -> Provenance:
        return self.session.provenance

    @property
    def ballots(self) -> int:
        votes = math.ceil(self.score * BALLOTS_PER_SESSION)
        if self.provenance == Provenance.FEEDBACK:
            votes *= FEEDBACK_BALLOT_MULTIPLIER
        return votes

    def to_dict(self) -> Dict[str, Any]:
        session = self.session
        data = {
            "provenance": self.provenance.value,
            "date": session.date.isoformat(),
            "temperature": session.weather.temperature,
            "feels_like": session.weather.feels_like,
            "comfort_c": round(self.comfort_c, 2),
            "similarity": round(self.similarity, 3),
            "score": round(self.score, 3),
            "recency_boost": round(self.recency_boost, 4),
            "comfort_boost": self.comfort_boost,
            "ballots": self.ballots,
            "breakdown": self.breakdown.to_dict(),
            "clothing": dict(session.clothing),
        }
        if isinstance(session, FeedbackSession):
            data["comfort"] = session.comfort.value
        elif isinstance(session, ImportedSession):
            data["location"] = session.location
        return data


@dataclass
class CategoryTally:
    category: str
    votes: Dict[str, int] = field(default_factory=dict)  # first-seen spelling -> ballots
    winner: Optional[str] = None
    resolved: Optional[str] = None  # canonical option written, None if invalid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "votes": dict(self.votes),
            "winner": self.winner,
            "resolved": self.resolved,
        }


@dataclass
class MatchResult:
    source: str  # recent_match | similar_sessions
    clothing: Dict[str, str]
    confidence: int
    matched: List[ScoredSession]
    tallies: Dict[str, CategoryTally] = field(default_factory=dict)


class HistoricalMatcher:
    """
    Scores, gates, boosts and tallies past sessions for one recommendation.

    ``reference_time`` anchors recency so repeated calls with the same inputs
    give the same answer.
    """

    def __init__(self, scorer: SessionSimilarityScorer, reference_time: datetime):
        self.scorer = scorer
        self.profile: ActivityProfile = scorer.profile
        self.reference_time = reference_time

    def score_sessions(self, sessions: Sequence[Session]) -> List[ScoredSession]:
        """Score every candidate, in input order. Nothing is gated here."""
        scored = []
        for session in sessions:
            if not self.scorer.is_candidate(session):
                continue
            similarity, breakdown = self.scorer.score(session)
            entry = ScoredSession(
                session=session,
                similarity=similarity,
                breakdown=breakdown,
                comfort_c=self.scorer.comfort_for(session).comfort_c,
                score=similarity,
            )
            if isinstance(session, FeedbackSession):
                entry.recency_boost = recency_multiplier(
                    days_between(self.reference_time, session.occurred_at)
                )
                entry.comfort_boost = comfort_multiplier(session)
                entry.score = min(1.0, similarity * entry.recency_boost * entry.comfort_boost)
            scored.append(entry)
        return scored

    def find_recent_match(self, scored: Sequence[ScoredSession]) -> Optional[ScoredSession]:
        """Best feedback session from the last week above 0.85; ties go to the most recent."""
        best = None
        for entry in scored:
            if entry.provenance != Provenance.FEEDBACK:
                continue
            if entry.similarity <= FAST_PATH_MIN_SIMILARITY:
                continue
            days = days_between(self.reference_time, entry.session.occurred_at)
            if days > FAST_PATH_WINDOW_DAYS:
                continue
            if (
                best is None
                or entry.similarity > best.similarity
                or (
                    entry.similarity == best.similarity
                    and as_utc(entry.session.occurred_at) > as_utc(best.session.occurred_at)
                )
            ):
                best = entry
        return best

    def tally(self, matched: Sequence[ScoredSession]) -> Dict[str, CategoryTally]:
        """
        Case-insensitive ballot count per category.

        Ties go to the item seen first while tallying (matched order).
        """
        tallies: Dict[str, CategoryTally] = {}
        folded_totals: Dict[str, Dict[str, int]] = {}
        spellings: Dict[str, Dict[str, str]] = {}

        for entry in matched:
            ballots = entry.ballots
            for key, value in entry.session.clothing.items():
                category = self.profile.category(key)
                item = normalize_item(value)
                if category is None or item is None:
                    continue
                folded = item.casefold()
                totals = folded_totals.setdefault(key, {})
                names = spellings.setdefault(key, {})
                if folded not in totals:
                    totals[folded] = 0
                    names[folded] = item
                totals[folded] += ballots

        for key, totals in folded_totals.items():
            names = spellings[key]
            tally = CategoryTally(category=key)
            best_folded = None
            for folded, count in totals.items():
                tally.votes[names[folded]] = count
                if best_folded is None or count > totals[best_folded]:
                    best_folded = folded
            if best_folded is not None:
                tally.winner = names[best_folded]
                tally.resolved = self.profile.category(key).canonical(tally.winner)
            tallies[key] = tally
        return tallies

    def vote(self, matched: Sequence[ScoredSession]) -> MatchResult:
        tallies = self.tally(matched)
        clothing = self.profile.default_clothing()
        for key, tally in tallies.items():
            if tally.resolved is not None:
                clothing[key] = tally.resolved
            else:
                logger.debug(f"Dropping invalid winner {tally.winner!r} for {key}")

        return MatchResult(
            source="similar_sessions",
            clothing=clothing,
            confidence=calculate_confidence([m.score for m in matched]),
            matched=list(matched),
            tallies=tallies,
        )

    def match(
        self,
        history: Sequence[ImportedSession],
        feedback: Sequence[FeedbackSession],
    ) -> Optional[MatchResult]:
        return self.select(self.score_sessions(list(history) + list(feedback)))

    def select(self, scored: Sequence[ScoredSession]) -> Optional[MatchResult]:
        """
        Run the fast path, then voting. None when nothing clears the gate.
        """
        recent = self.find_recent_match(scored)
        if recent is not None:
            return MatchResult(
                source="recent_match",
                clothing=self.profile.merged_with_defaults(recent.session.clothing),
                confidence=FAST_PATH_CONFIDENCE,
                matched=[recent],
            )

        matched = [s for s in scored if s.similarity >= MIN_SIMILARITY]
        if not matched:
            return None

        # Stable: equal scores keep history-then-feedback input order
        matched.sort(key=lambda s: s.score, reverse=True)
        return self.vote(matched)

    def rank(self, scored: Sequence[ScoredSession]) -> List[ScoredSession]:
        return sorted(scored, key=lambda s: s.score, reverse=True)
