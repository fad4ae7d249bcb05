"""
Session history endpoints.

- POST /v1/sessions/import: bulk CSV upload (imported + feedback rows)
- POST /v1/sessions/feedback: one rated session
- GET  /v1/sessions/{activity}/history and /feedback: stored sessions
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from core.exceptions import APIException, PayloadTooLargeError, ValidationError
from schemas import FeedbackCreate, FeedbackResponse, ImportResponse, SessionListResponse
from services.activity_registry import get_activity_profile, parse_activity
from services.history_store import HistoryStore
from services.session_import import normalize_clothing, parse_sessions_csv
from services.session_types import FeedbackSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/sessions", tags=["sessions"])


def _activity_or_422(activity: str):
    try:
        return parse_activity(activity)
    except ValueError as e:
        raise ValidationError(str(e), field="activity")


@router.post("/import", response_model=ImportResponse)
async def import_sessions(
    file: UploadFile = File(...),
    activity: str = Query(default="running", description="Activity for files without an activity column"),
    db: Session = Depends(get_db),
):
    """
    Upload a CSV of past sessions.

    Rows are filed under their ``activity`` column when present, otherwise
    under the ``activity`` query parameter.
    """
    default_activity = _activity_or_422(activity)

    filename = (file.filename or "").lower()
    if filename and not filename.endswith(".csv"):
        raise APIException(status.HTTP_400_BAD_REQUEST, "File must be a CSV file", error_code="INVALID_FILE")

    total = 0
    chunks = []
    try:
        while True:
            chunk = await file.read(1024 * 1024)
            if not chunk:
                break
            total += len(chunk)
            if total > settings.MAX_IMPORT_BYTES:
                raise PayloadTooLargeError(settings.MAX_IMPORT_BYTES)
            chunks.append(chunk)
    finally:
        await file.close()

    try:
        content = b"".join(chunks).decode("utf-8-sig")
    except UnicodeDecodeError:
        raise APIException(status.HTTP_400_BAD_REQUEST, "File must be UTF-8 text", error_code="INVALID_FILE")

    result = parse_sessions_csv(content, default_activity)
    if not result.success:
        logger.info(f"Rejected CSV import: {result.errors}")
        raise APIException(status.HTTP_400_BAD_REQUEST, "; ".join(result.errors), error_code="INVALID_CSV")

    store = HistoryStore(db)
    store.add_imported(result.imported)
    store.add_many_feedback(result.feedback)

    return result.to_dict()


@router.post("/feedback", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
def create_feedback(request: FeedbackCreate, db: Session = Depends(get_db)):
    weather = request.weather.to_sample()
    recorded_at = request.recorded_at or weather.observed_at or datetime.now(timezone.utc)

    profile = get_activity_profile(request.activity)
    unknown = [k for k in request.clothing if profile.category(k) is None]
    if unknown:
        raise ValidationError(
            f"Unknown clothing categories for {profile.activity.value}: {', '.join(sorted(unknown))}",
            field="clothing",
        )

    session = FeedbackSession(
        recorded_at=recorded_at,
        weather=weather,
        activity=profile.activity,
        comfort=request.comfort,
        clothing=normalize_clothing(request.clothing, profile.activity),
        comments=request.comments,
        activity_level=request.activity_level,
    )
    record = HistoryStore(db).add_feedback(session)

    return {
        "id": str(record.id),
        "activity": session.activity.value,
        "comfort": session.comfort.value,
        "recorded_at": session.occurred_at,
        "clothing": dict(session.clothing),
    }


@router.get("/{activity}/history", response_model=SessionListResponse)
def list_history(
    activity: str,
    limit: Optional[int] = Query(default=None, ge=1, le=5000),
    db: Session = Depends(get_db),
):
    parsed = _activity_or_422(activity)
    sessions = HistoryStore(db).get_history(parsed)
    if limit:
        sessions = sessions[:limit]
    return {"activity": parsed.value, "count": len(sessions), "sessions": [s.to_dict() for s in sessions]}


@router.get("/{activity}/feedback", response_model=SessionListResponse)
def list_feedback(
    activity: str,
    limit: Optional[int] = Query(default=None, ge=1, le=5000),
    db: Session = Depends(get_db),
):
    parsed = _activity_or_422(activity)
    sessions = HistoryStore(db).get_feedback(parsed)
    if limit:
        sessions = sessions[:limit]
    return {"activity": parsed.value, "count": len(sessions), "sessions": [s.to_dict() for s in sessions]}
