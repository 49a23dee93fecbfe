"""
Preferences router.
"""
from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_user_id, get_preferences_service
from app.models.schemas import FeedPreferences, UpdatePreferencesRequest
from app.services.preferences import PreferencesService

router = APIRouter(prefix="/v1/preferences", tags=["preferences"])


@router.get("", response_model=FeedPreferences, summary="Get Preferences")
async def get_preferences(
    user_id: str = Depends(get_current_user_id),
    service: PreferencesService = Depends(get_preferences_service),
) -> FeedPreferences:
    return await service.get_preferences(user_id)


@router.put("", response_model=FeedPreferences, summary="Update Preferences")
async def update_preferences(
    body: UpdatePreferencesRequest,
    user_id: str = Depends(get_current_user_id),
    service: PreferencesService = Depends(get_preferences_service),
) -> FeedPreferences:
    """Partial update; omitted fields keep their current value."""
    return await service.update_preferences(user_id, body)
