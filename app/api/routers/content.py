"""
Content interaction router.
POST /v1/content/{content_id}/<action> records a user interaction.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from app.api.dependencies import get_current_user_id, get_interaction_service
from app.models.schemas import (
    ContentInteraction,
    DismissContentRequest,
    SaveContentRequest,
    WatchContentRequest,
)
from app.services.interactions import InteractionService

router = APIRouter(prefix="/v1/content", tags=["content"])


@router.post(
    "/{content_id}/watch",
    response_model=ContentInteraction,
    status_code=status.HTTP_201_CREATED,
    summary="Mark Watched",
)
async def watch_content(
    content_id: str,
    body: Optional[WatchContentRequest] = Body(default=None),
    user_id: str = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service),
) -> ContentInteraction:
    body = body or WatchContentRequest()
    return await service.record_watch(
        user_id,
        content_id,
        watch_duration=body.watch_duration,
        completion_rate=body.completion_rate,
    )


@router.post(
    "/{content_id}/save",
    response_model=ContentInteraction,
    status_code=status.HTTP_201_CREATED,
    summary="Save For Later",
)
async def save_content(
    content_id: str,
    body: Optional[SaveContentRequest] = Body(default=None),
    user_id: str = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service),
) -> ContentInteraction:
    body = body or SaveContentRequest()
    return await service.save_content(user_id, content_id, collection=body.collection)


@router.post(
    "/{content_id}/dismiss",
    response_model=ContentInteraction,
    status_code=status.HTTP_201_CREATED,
    summary="Dismiss Permanently",
)
async def dismiss_content(
    content_id: str,
    body: Optional[DismissContentRequest] = Body(default=None),
    user_id: str = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service),
) -> ContentInteraction:
    body = body or DismissContentRequest()
    return await service.dismiss(user_id, content_id, reason=body.reason)


@router.post(
    "/{content_id}/not-now",
    response_model=ContentInteraction,
    status_code=status.HTTP_201_CREATED,
    summary="Not Now",
    description="Hide the item for now; it may return in a later feed.",
)
async def not_now_content(
    content_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service),
) -> ContentInteraction:
    return await service.not_now(user_id, content_id)


@router.post(
    "/{content_id}/block",
    response_model=ContentInteraction,
    status_code=status.HTTP_201_CREATED,
    summary="Block",
)
async def block_content(
    content_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service),
) -> ContentInteraction:
    return await service.block(user_id, content_id)
