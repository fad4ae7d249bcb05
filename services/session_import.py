"""
CSV Session Import

Turns a spreadsheet or third-party export into sessions for the history store.

- Column names are matched through HEADER_ALIASES (alias -> canonical key);
  unknown columns are reported as warnings and ignored.
- ``date`` and ``temperature`` columns are required.
- An ``activity`` column files each row under its activity; without one every
  row goes to the default activity chosen by the caller.
- Rows with a ``comfort`` value become feedback sessions.
- Clothing values are normalized once here: canonical option spelling for the
  activity, explicit "none" markers become "None".

Problems with individual rows are row-numbered warnings, never exceptions.
"""

import csv
import io
import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional, Tuple

from core.logging import log_event
from services.activity_registry import get_activity_profile, normalize_item
from services.session_types import (
    ActivityLevel,
    ActivityType,
    ComfortLevel,
    FeedbackSession,
    ImportedSession,
    WeatherSample,
)

logger = logging.getLogger(__name__)


REQUIRED_COLUMNS = ("date", "temperature")

# alias (lowercase header) -> canonical key
HEADER_ALIASES: Dict[str, str] = {
    # when / where / what
    "date": "date",
    "time": "time",
    "location": "location",
    "activity": "activity",
    "source": "source",
    # weather
    "temperature": "temperature",
    "temp": "temperature",
    "feels_like": "feels_like",
    "feelslike": "feels_like",
    "feels like": "feels_like",
    "humidity": "humidity",
    "pressure": "pressure",
    "precipitation": "precipitation",
    "precip": "precipitation",
    "uv": "uv_index",
    "uv_index": "uv_index",
    "uvindex": "uv_index",
    "wind_speed": "wind_speed",
    "windspeed": "wind_speed",
    "wind speed": "wind_speed",
    "wind": "wind_speed",
    "cloud_cover": "cloud_cover",
    "cloudcover": "cloud_cover",
    "cloud cover": "cloud_cover",
    "clouds": "cloud_cover",
    "description": "description",
    "conditions": "description",
    # feedback
    "comfort": "comfort",
    "comments": "comments",
    "activity_level": "activity_level",
    "activitylevel": "activity_level",
    "activity level": "activity_level",
    "duration": "duration",
    # clothing, common
    "head_cover": "headCover",
    "headcover": "headCover",
    "head cover": "headCover",
    "hat": "headCover",
    "tops": "tops",
    "top": "tops",
    "shirt": "tops",
    "bottoms": "bottoms",
    "bottom": "bottoms",
    "pants": "bottoms",
    "shoes": "shoes",
    "shoe": "shoes",
    "footwear": "shoes",
    "socks": "socks",
    "sock": "socks",
    "gloves": "gloves",
    "glove": "gloves",
    "rain_gear": "rainGear",
    "raingear": "rainGear",
    "rain gear": "rainGear",
    "rain": "rainGear",
    "accessories": "accessories",
    # layering
    "base_layer": "baseLayer",
    "baselayer": "baseLayer",
    "base layer": "baseLayer",
    "mid_layer": "midLayer",
    "midlayer": "midLayer",
    "mid layer": "midLayer",
    "outer_layer": "outerLayer",
    "outerlayer": "outerLayer",
    "outer layer": "outerLayer",
    "jacket": "outerLayer",
    # cycling
    "helmet": "helmet",
    "jersey": "tops",
    "bibs": "bottoms",
    "bib": "bottoms",
    "bib_shorts": "bottoms",
    "arm_warmers": "armWarmers",
    "armwarmers": "armWarmers",
    "arm warmers": "armWarmers",
    "leg_warmers": "armWarmers",
    "legwarmers": "armWarmers",
    "leg warmers": "armWarmers",
    "eyewear": "eyewear",
    # winter / hiking / trail
    "boots": "boots",
    "gaiters": "gaiters",
    "pack": "pack",
    "hydration": "hydration",
}

NON_CLOTHING_KEYS = frozenset({
    "date", "time", "location", "activity", "source",
    "temperature", "feels_like", "humidity", "pressure", "precipitation",
    "uv_index", "wind_speed", "cloud_cover", "description",
    "comfort", "comments", "activity_level", "duration",
})

ACTIVITY_ALIASES: Dict[str, ActivityType] = {
    "running": ActivityType.RUNNING,
    "run": ActivityType.RUNNING,
    "trail_running": ActivityType.TRAIL_RUNNING,
    "trailrunning": ActivityType.TRAIL_RUNNING,
    "trail_run": ActivityType.TRAIL_RUNNING,
    "hiking": ActivityType.HIKING,
    "hike": ActivityType.HIKING,
    "walking": ActivityType.WALKING,
    "walk": ActivityType.WALKING,
    "cycling": ActivityType.CYCLING,
    "cycle": ActivityType.CYCLING,
    "bike": ActivityType.CYCLING,
    "biking": ActivityType.CYCLING,
    "snowshoeing": ActivityType.SNOWSHOEING,
    "snowshoe": ActivityType.SNOWSHOEING,
    "cross_country_skiing": ActivityType.CROSS_COUNTRY_SKIING,
    "crosscountryskiing": ActivityType.CROSS_COUNTRY_SKIING,
    "xc_skiing": ActivityType.CROSS_COUNTRY_SKIING,
    "xcskiing": ActivityType.CROSS_COUNTRY_SKIING,
    "xc_ski": ActivityType.CROSS_COUNTRY_SKIING,
    "nordic_skiing": ActivityType.CROSS_COUNTRY_SKIING,
}

DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%d.%m.%Y", "%Y/%m/%d")
TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M%p")


class RowError(ValueError):
    """A data row that cannot become a session."""


@dataclass
class ImportResult:
    imported: List[ImportedSession] = field(default_factory=list)
    feedback: List[FeedbackSession] = field(default_factory=list)
    has_activity_column: bool = False
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors and bool(self.imported or self.feedback)

    @property
    def total(self) -> int:
        return len(self.imported) + len(self.feedback)

    def counts_by_activity(self) -> Dict[str, int]:
        counts = Counter(s.activity.value for s in self.imported)
        counts.update(s.activity.value for s in self.feedback)
        return dict(counts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "imported": len(self.imported),
            "feedback": len(self.feedback),
            "total": self.total,
            "by_activity": self.counts_by_activity(),
            "has_activity_column": self.has_activity_column,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def parse_activity_name(value: str) -> Optional[ActivityType]:
    normalized = "_".join(value.strip().lower().replace("-", " ").split())
    return ACTIVITY_ALIASES.get(normalized)


def parse_date(value: str) -> date:
    text = value.strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise RowError(f"Unrecognized date '{value}'")


def parse_time(value: str) -> Optional[time]:
    text = value.strip()
    if not text:
        return None
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    return None


def _number(value: Optional[str], default: float = 0.0) -> float:
    if value is None or not value.strip():
        return default
    try:
        number = float(value.strip())
    except ValueError:
        return default
    return number if math.isfinite(number) else default


def map_headers(headers: List[str]) -> Tuple[Dict[int, str], List[str]]:
    """Column index -> canonical key, plus warnings for unknown columns."""
    column_map: Dict[int, str] = {}
    warnings = []
    for index, header in enumerate(headers):
        key = HEADER_ALIASES.get(header.strip().lower())
        if key:
            column_map[index] = key
        elif header.strip():
            warnings.append(f'Unknown column "{header.strip()}" will be ignored')
    return column_map, warnings


def normalize_clothing(raw: Dict[str, str], activity: ActivityType) -> Dict[str, str]:
    """Canonical option spelling where the activity knows the item; blanks dropped."""
    profile = get_activity_profile(activity)
    clothing: Dict[str, str] = {}
    for key, value in raw.items():
        item = normalize_item(value)
        if item is None:
            continue
        category = profile.category(key)
        canonical = category.canonical(item) if category else None
        clothing[key] = canonical or item
    return clothing


def _build_session(data: Dict[str, str], activity: ActivityType):
    if not data.get("date") or not data.get("temperature", "").strip():
        raise RowError("Missing required fields (date or temperature)")

    session_date = parse_date(data["date"])
    try:
        temperature = float(data["temperature"].strip())
    except ValueError:
        raise RowError(f"Invalid temperature '{data['temperature']}'")
    if not math.isfinite(temperature):
        raise RowError(f"Invalid temperature '{data['temperature']}'")

    session_time = parse_time(data.get("time", ""))
    occurred_at = datetime.combine(session_date, session_time or time(0, 0), tzinfo=timezone.utc)

    weather = WeatherSample(
        temperature=temperature,
        feels_like=_number(data.get("feels_like"), temperature),
        humidity=_number(data.get("humidity")),
        pressure=_number(data.get("pressure")),
        precipitation=_number(data.get("precipitation")),
        uv_index=_number(data.get("uv_index")),
        wind_speed=_number(data.get("wind_speed")),
        cloud_cover=_number(data.get("cloud_cover")),
        description=data.get("description", "").strip(),
        observed_at=occurred_at,
        location=data.get("location", "").strip(),
    )

    level = None
    if data.get("activity_level", "").strip():
        try:
            level = ActivityLevel(data["activity_level"].strip().lower())
        except ValueError:
            level = None

    clothing = normalize_clothing(
        {k: v for k, v in data.items() if k not in NON_CLOTHING_KEYS}, activity
    )

    comfort_text = data.get("comfort", "").strip()
    if comfort_text:
        try:
            comfort = ComfortLevel(comfort_text)
        except ValueError:
            raise RowError(f"Unknown comfort value '{comfort_text}'")
        return FeedbackSession(
            recorded_at=occurred_at,
            weather=weather,
            activity=activity,
            comfort=comfort,
            clothing=clothing,
            comments=data.get("comments", "").strip(),
            activity_level=level,
        )

    return ImportedSession(
        date=session_date,
        weather=weather,
        activity=activity,
        clothing=clothing,
        time=session_time.strftime("%H:%M") if session_time else "00:00",
        location=data.get("location", "").strip() or "Unknown",
        activity_level=level,
    )


def parse_sessions_csv(
    content: str,
    default_activity: ActivityType = ActivityType.RUNNING,
) -> ImportResult:
    """
    Parse CSV text into sessions.

    File-level problems (no header, missing required columns, no usable rows)
    are reported in ``errors``; row-level problems in ``warnings``.
    """
    result = ImportResult()
    rows = list(csv.reader(io.StringIO(content.lstrip("\ufeff").strip())))
    rows = [r for r in rows if any(cell.strip() for cell in r)]

    if len(rows) < 2:
        result.errors.append("CSV file must have a header row and at least one data row")
        return result

    column_map, header_warnings = map_headers(rows[0])
    result.warnings.extend(header_warnings)

    found = set(column_map.values())
    for required in REQUIRED_COLUMNS:
        if required not in found:
            result.errors.append(f"Missing required column: {required}")
    if result.errors:
        return result

    result.has_activity_column = "activity" in found

    for line_number, values in enumerate(rows[1:], start=2):
        data: Dict[str, str] = {}
        for index, value in enumerate(values):
            key = column_map.get(index)
            if key and key not in data:
                data[key] = value.strip()

        activity = default_activity
        activity_text = data.get("activity", "")
        if result.has_activity_column and activity_text:
            parsed = parse_activity_name(activity_text)
            if parsed is None:
                result.warnings.append(f"Row {line_number}: Unknown activity '{activity_text}'")
                continue
            activity = parsed

        try:
            session = _build_session(data, activity)
        except RowError as e:
            result.warnings.append(f"Row {line_number}: {e}")
            continue

        if isinstance(session, FeedbackSession):
            result.feedback.append(session)
        else:
            result.imported.append(session)

    if not result.imported and not result.feedback:
        result.errors.append("No valid records found in CSV")
        return result

    log_event(
        logger,
        "csv_import",
        f"Parsed CSV: {len(result.imported)} imported, {len(result.feedback)} feedback, "
        f"{len(result.warnings)} warnings",
        imported=len(result.imported),
        feedback=len(result.feedback),
        warnings=len(result.warnings),
        by_activity=result.counts_by_activity(),
    )
    return result
