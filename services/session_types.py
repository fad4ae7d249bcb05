"""
Session and weather value objects.

Everything here is immutable input to the recommendation engine. Sessions are a
tagged union: ImportedSession (bulk CSV) | FeedbackSession (the user's own
completed sessions). Provenance-specific behaviour dispatches on the
``provenance`` tag, never on which optional fields happen to be present.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Union


class ActivityType(str, Enum):
    RUNNING = "running"
    TRAIL_RUNNING = "trail_running"
    HIKING = "hiking"
    WALKING = "walking"
    CYCLING = "cycling"
    SNOWSHOEING = "snowshoeing"
    CROSS_COUNTRY_SKIING = "cross_country_skiing"


class ThermalPreference(str, Enum):
    """How the user runs: cold (dress warmer), average, warm (dress lighter)."""
    COLD = "cold"
    AVERAGE = "average"
    WARM = "warm"


class ActivityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str) and value.strip().lower() == "moderate":
            return cls.MEDIUM
        return None


class ComfortLevel(str, Enum):
    TOO_COLD = "too_cold"
    JUST_RIGHT = "just_right"
    TOO_HOT = "too_hot"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower().replace(" ", "_").replace("-", "_")
            if normalized == "satisfied":
                return cls.JUST_RIGHT
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class Provenance(str, Enum):
    IMPORTED = "imported"
    FEEDBACK = "feedback"


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so aware/naive values compare safely."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class WeatherSample:
    """Observed (or historical) weather. Imperial units."""
    temperature: float  # °F
    feels_like: float  # °F
    humidity: float = 0.0  # %
    pressure: float = 0.0
    precipitation: float = 0.0  # inches
    uv_index: float = 0.0
    wind_speed: float = 0.0  # mph
    cloud_cover: float = 0.0  # %
    description: str = ""
    observed_at: Optional[datetime] = None
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    location: str = ""

    @property
    def has_precipitation(self) -> bool:
        return self.precipitation > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "feels_like": self.feels_like,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "precipitation": self.precipitation,
            "uv_index": self.uv_index,
            "wind_speed": self.wind_speed,
            "cloud_cover": self.cloud_cover,
            "description": self.description,
            "observed_at": self.observed_at.isoformat() if self.observed_at else None,
            "sunrise": self.sunrise.isoformat() if self.sunrise else None,
            "sunset": self.sunset.isoformat() if self.sunset else None,
            "location": self.location,
        }


@dataclass(frozen=True)
class ImportedSession:
    """A session from a bulk import (third-party log or spreadsheet)."""
    date: date
    weather: WeatherSample
    activity: ActivityType
    clothing: Mapping[str, str] = field(default_factory=dict)
    time: str = ""
    location: str = ""
    activity_level: Optional[ActivityLevel] = None

    provenance: ClassVar[Provenance] = Provenance.IMPORTED

    @property
    def occurred_at(self) -> datetime:
        return datetime.combine(self.date, time(0, 0), tzinfo=timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provenance": self.provenance.value,
            "date": self.date.isoformat(),
            "time": self.time,
            "location": self.location,
            "activity": self.activity.value,
            "activity_level": self.activity_level.value if self.activity_level else None,
            "weather": self.weather.to_dict(),
            "clothing": dict(self.clothing),
        }


@dataclass(frozen=True)
class FeedbackSession:
    """A session the user completed and rated."""
    recorded_at: datetime
    weather: WeatherSample
    activity: ActivityType
    comfort: ComfortLevel
    clothing: Mapping[str, str] = field(default_factory=dict)
    comments: str = ""
    activity_level: Optional[ActivityLevel] = None

    provenance: ClassVar[Provenance] = Provenance.FEEDBACK

    @property
    def occurred_at(self) -> datetime:
        return as_utc(self.recorded_at)

    @property
    def date(self) -> date:
        return self.occurred_at.date()

    @property
    def is_satisfied(self) -> bool:
        return self.comfort == ComfortLevel.JUST_RIGHT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provenance": self.provenance.value,
            "date": self.date.isoformat(),
            "recorded_at": self.occurred_at.isoformat(),
            "activity": self.activity.value,
            "activity_level": self.activity_level.value if self.activity_level else None,
            "comfort": self.comfort.value,
            "comments": self.comments,
            "weather": self.weather.to_dict(),
            "clothing": dict(self.clothing),
        }


Session = Union[ImportedSession, FeedbackSession]
