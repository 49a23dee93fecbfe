"""
Source management router.
List, mute/unmute and remove subscribed sources.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_current_user_id, get_source_service
from app.models.schemas import ContentSource, UpdateSourceRequest
from app.services.sources import SourceService

router = APIRouter(prefix="/v1/sources", tags=["sources"])


@router.get("", response_model=List[ContentSource], summary="List Sources")
async def list_sources(
    user_id: str = Depends(get_current_user_id),
    service: SourceService = Depends(get_source_service),
) -> List[ContentSource]:
    """All subscriptions, muted ones included."""
    return await service.list_sources(user_id)


@router.get("/{source_id}", response_model=ContentSource, summary="Get Source")
async def get_source(
    source_id: str,
    user_id: str = Depends(get_current_user_id),
    service: SourceService = Depends(get_source_service),
) -> ContentSource:
    return await service.get_source(user_id, source_id)


@router.patch(
    "/{source_id}",
    response_model=ContentSource,
    summary="Update Source",
    description="Mute or unmute a source. Muted sources are left out of the feed.",
)
async def update_source(
    source_id: str,
    body: UpdateSourceRequest,
    user_id: str = Depends(get_current_user_id),
    service: SourceService = Depends(get_source_service),
) -> ContentSource:
    return await service.update_source(user_id, source_id, body)


@router.delete(
    "/{source_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Source",
)
async def remove_source(
    source_id: str,
    user_id: str = Depends(get_current_user_id),
    service: SourceService = Depends(get_source_service),
) -> Response:
    await service.remove_source(user_id, source_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
