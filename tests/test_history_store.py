"""
Tests for the SQLAlchemy history store.
"""
from services.history_store import HistoryStore
from services.session_types import (
    ActivityLevel,
    ActivityType,
    ComfortLevel,
    FeedbackSession,
    ImportedSession,
    as_utc,
)
from session_factories import make_feedback, make_imported


class TestHistoryStore:
    """Tests for storing and reading past sessions."""

    def test_imported_round_trip(self, db_session):
        store = HistoryStore(db_session)
        session = make_imported(
            42, {"tops": "Long sleeve"}, feels_like=36, precipitation=0.05,
            activity_level=ActivityLevel.HIGH,
        )
        assert store.add_imported([session]) == 1

        [loaded] = store.get_history(ActivityType.RUNNING)
        assert isinstance(loaded, ImportedSession)
        assert loaded.date == session.date
        assert loaded.weather.temperature == 42
        assert loaded.weather.feels_like == 36
        assert loaded.weather.precipitation == 0.05
        assert loaded.clothing == {"tops": "Long sleeve"}
        assert loaded.activity_level == ActivityLevel.HIGH
        assert loaded.location == "Boulder, US"

    def test_feedback_round_trip(self, db_session):
        store = HistoryStore(db_session)
        session = make_feedback(38, {"gloves": "Light gloves"}, comfort=ComfortLevel.TOO_COLD)
        record = store.add_feedback(session)
        assert record.id is not None

        [loaded] = store.get_feedback("running")
        assert isinstance(loaded, FeedbackSession)
        assert loaded.comfort == ComfortLevel.TOO_COLD
        assert loaded.occurred_at == as_utc(session.recorded_at)
        assert loaded.clothing == {"gloves": "Light gloves"}

    def test_reads_filtered_by_activity_and_provenance(self, db_session):
        store = HistoryStore(db_session)
        store.add_imported([
            make_imported(50, {}),
            make_imported(50, {}, activity=ActivityType.CYCLING),
        ])
        store.add_feedback(make_feedback(50, {}))

        assert len(store.get_history("running")) == 1
        assert len(store.get_history("cycling")) == 1
        assert len(store.get_feedback("running")) == 1
        assert store.get_feedback("cycling") == []
        assert store.count() == 3
        assert store.count("running") == 2

    def test_most_recent_first(self, db_session):
        store = HistoryStore(db_session)
        store.add_imported([make_imported(50, {}, days_ago=30), make_imported(51, {}, days_ago=3)])
        store.add_many_feedback([make_feedback(50, {}, days_ago=9), make_feedback(52, {}, days_ago=1)])

        assert [s.weather.temperature for s in store.get_history("running")] == [51, 50]
        assert [s.weather.temperature for s in store.get_feedback("running")] == [52, 50]
