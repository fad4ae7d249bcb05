"""
History Store

SQLAlchemy-backed persistence for past sessions. Reads are always filtered by
activity and come back as the immutable session types the engine consumes.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

from sqlalchemy.orm import Session as DbSession

from models import SessionRecord
from services.activity_registry import parse_activity
from services.session_types import (
    ActivityLevel,
    ActivityType,
    ComfortLevel,
    FeedbackSession,
    ImportedSession,
    Provenance,
    WeatherSample,
    as_utc,
)

logger = logging.getLogger(__name__)


def _weather_columns(weather: WeatherSample) -> dict:
    return {
        "temperature": weather.temperature,
        "feels_like": weather.feels_like,
        "humidity": weather.humidity,
        "pressure": weather.pressure,
        "precipitation": weather.precipitation,
        "uv_index": weather.uv_index,
        "wind_speed": weather.wind_speed,
        "cloud_cover": weather.cloud_cover,
        "description": weather.description or None,
    }


def _weather_from_record(record: SessionRecord, observed_at: Optional[datetime]) -> WeatherSample:
    return WeatherSample(
        temperature=record.temperature,
        feels_like=record.feels_like,
        humidity=record.humidity or 0.0,
        pressure=record.pressure or 0.0,
        precipitation=record.precipitation or 0.0,
        uv_index=record.uv_index or 0.0,
        wind_speed=record.wind_speed or 0.0,
        cloud_cover=record.cloud_cover or 0.0,
        description=record.description or "",
        observed_at=observed_at,
        location=record.location or "",
    )


def _level(value: Optional[str]) -> Optional[ActivityLevel]:
    return ActivityLevel(value) if value else None


def record_to_session(record: SessionRecord) -> Union[ImportedSession, FeedbackSession]:
    """Convert a row to its session type, dispatching on the provenance tag."""
    activity = ActivityType(record.activity)
    if record.provenance == Provenance.FEEDBACK.value:
        recorded_at = as_utc(record.recorded_at) if record.recorded_at else datetime.combine(
            record.session_date, datetime.min.time(), tzinfo=timezone.utc
        )
        return FeedbackSession(
            recorded_at=recorded_at,
            weather=_weather_from_record(record, recorded_at),
            activity=activity,
            comfort=ComfortLevel(record.comfort),
            clothing=dict(record.clothing or {}),
            comments=record.comments or "",
            activity_level=_level(record.activity_level),
        )
    return ImportedSession(
        date=record.session_date,
        weather=_weather_from_record(record, None),
        activity=activity,
        clothing=dict(record.clothing or {}),
        time=record.session_time or "",
        location=record.location or "",
        activity_level=_level(record.activity_level),
    )


class HistoryStore:
    """Read and write past sessions for the recommendation engine."""

    def __init__(self, db: DbSession):
        self.db = db

    def _query(self, activity: Union[str, ActivityType], provenance: Provenance):
        return (
            self.db.query(SessionRecord)
            .filter(
                SessionRecord.activity == parse_activity(activity).value,
                SessionRecord.provenance == provenance.value,
            )
        )

    def get_history(self, activity: Union[str, ActivityType]) -> List[ImportedSession]:
        records = (
            self._query(activity, Provenance.IMPORTED)
            .order_by(SessionRecord.session_date.desc(), SessionRecord.created_at.desc())
            .all()
        )
        return [record_to_session(r) for r in records]

    def get_feedback(self, activity: Union[str, ActivityType]) -> List[FeedbackSession]:
        records = (
            self._query(activity, Provenance.FEEDBACK)
            .order_by(SessionRecord.recorded_at.desc())
            .all()
        )
        return [record_to_session(r) for r in records]

    def add_imported(self, sessions: Iterable[ImportedSession]) -> int:
        count = 0
        for session in sessions:
            self.db.add(SessionRecord(
                provenance=Provenance.IMPORTED.value,
                activity=session.activity.value,
                activity_level=session.activity_level.value if session.activity_level else None,
                session_date=session.date,
                session_time=session.time or None,
                location=session.location or None,
                clothing=dict(session.clothing),
                **_weather_columns(session.weather),
            ))
            count += 1
        self.db.flush()
        logger.info(f"Stored {count} imported sessions")
        return count

    def add_feedback(self, session: FeedbackSession) -> SessionRecord:
        record = SessionRecord(
            provenance=Provenance.FEEDBACK.value,
            activity=session.activity.value,
            activity_level=session.activity_level.value if session.activity_level else None,
            session_date=session.date,
            recorded_at=session.occurred_at,
            location=session.weather.location or None,
            clothing=dict(session.clothing),
            comfort=session.comfort.value,
            comments=session.comments or None,
            **_weather_columns(session.weather),
        )
        self.db.add(record)
        self.db.flush()
        logger.info(f"Stored {session.activity.value} feedback ({session.comfort.value})")
        return record

    def add_many_feedback(self, sessions: Iterable[FeedbackSession]) -> int:
        count = 0
        for session in sessions:
            self.add_feedback(session)
            count += 1
        return count

    def count(self, activity: Optional[Union[str, ActivityType]] = None) -> int:
        query = self.db.query(SessionRecord)
        if activity is not None:
            query = query.filter(SessionRecord.activity == parse_activity(activity).value)
        return query.count()
