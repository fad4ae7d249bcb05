"""
Activity registry endpoints.

Read-only view of the clothing categories, options, thermal parameters and
band defaults for each supported activity.
"""

from fastapi import APIRouter

from core.exceptions import NotFoundError
from schemas import ActivityListResponse, ActivityResponse
from services.activity_registry import get_activity_profile, list_activity_profiles


router = APIRouter(prefix="/v1/activities", tags=["activities"])


@router.get("", response_model=ActivityListResponse)
def list_activities():
    return {"activities": [p.to_dict() for p in list_activity_profiles()]}


@router.get("/{activity}", response_model=ActivityResponse)
def get_activity(activity: str):
    try:
        profile = get_activity_profile(activity)
    except ValueError:
        raise NotFoundError("Activity", activity)
    return profile.to_dict()
