"""
Recommendation endpoint.

Weather comes inline or is fetched for lat/lon; history and feedback come from
the store. Low and medium confidence answers carry layer suggestions.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from core.exceptions import ServiceUnavailableError
from schemas import RecommendationRequest, RecommendationResponse
from services.clothing_suggestions import generate_clothing_suggestions
from services.history_store import HistoryStore
from services.recommendation_engine import RecommendationEngine
from services.session_types import ThermalPreference
from services.weather_service import (
    WeatherAuthError,
    WeatherRateLimitError,
    WeatherService,
    WeatherServiceError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/recommendations", tags=["recommendations"])


def get_weather_service() -> WeatherService:
    return WeatherService()


@router.post("", response_model=RecommendationResponse)
def create_recommendation(
    request: RecommendationRequest,
    db: Session = Depends(get_db),
    weather_service: WeatherService = Depends(get_weather_service),
):
    if request.weather is not None:
        weather = request.weather.to_sample()
    else:
        try:
            weather = weather_service.get_current_weather(request.lat, request.lon)
        except WeatherRateLimitError as e:
            raise ServiceUnavailableError(str(e), status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        except WeatherAuthError as e:
            raise ServiceUnavailableError(str(e), status_code=status.HTTP_502_BAD_GATEWAY)
        except WeatherServiceError as e:
            raise ServiceUnavailableError(str(e))

    if weather.observed_at is None:
        # Lighting and recency must agree on "now"
        weather = replace(weather, observed_at=request.reference_time or datetime.now(timezone.utc))

    preference = request.thermal_preference or ThermalPreference(settings.DEFAULT_THERMAL_PREFERENCE)

    store = HistoryStore(db)
    history = store.get_history(request.activity)
    feedback = store.get_feedback(request.activity)

    # Fresh engine per request: diagnostics never leak between callers
    engine = RecommendationEngine()
    recommendation = engine.recommend(
        weather,
        history,
        feedback,
        request.activity,
        preference,
        request.activity_level,
        request.reference_time,
    )

    suggestions = generate_clothing_suggestions(
        recommendation,
        weather,
        request.activity,
        preference,
        request.activity_level,
        request.temperature_unit,
    )

    diagnostics = engine.get_last_diagnostics() if request.include_diagnostics else None

    return {
        "activity": request.activity.value,
        "weather": weather.to_dict(),
        "recommendation": recommendation.to_dict(),
        "suggestions": suggestions.to_dict() if suggestions else None,
        "diagnostics": diagnostics.to_dict() if diagnostics else None,
    }
