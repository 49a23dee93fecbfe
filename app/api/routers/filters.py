"""
Filter management router.
Keyword filters, duration bounds and allowed content types.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_current_user_id, get_filter_service
from app.models.schemas import (
    AddFilterRequest,
    DurationRange,
    FilterConfiguration,
    FilterKeyword,
    SourceType,
    UpdateContentTypesRequest,
    UpdateDurationFilterRequest,
)
from app.services.filters import FilterService

router = APIRouter(prefix="/v1/filters", tags=["filters"])


@router.get("", response_model=FilterConfiguration, summary="Get Filters")
async def get_filters(
    user_id: str = Depends(get_current_user_id),
    service: FilterService = Depends(get_filter_service),
) -> FilterConfiguration:
    return await service.get_filter_configuration(user_id)


@router.post(
    "",
    response_model=FilterKeyword,
    status_code=status.HTTP_201_CREATED,
    summary="Add Keyword Filter",
)
async def add_filter(
    body: AddFilterRequest,
    user_id: str = Depends(get_current_user_id),
    service: FilterService = Depends(get_filter_service),
) -> FilterKeyword:
    return await service.add_keyword(user_id, body.keyword, body.is_wildcard)


@router.delete(
    "/{filter_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Keyword Filter",
)
async def remove_filter(
    filter_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FilterService = Depends(get_filter_service),
) -> Response:
    await service.remove_keyword(user_id, filter_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/duration", response_model=DurationRange, summary="Set Duration Bounds")
async def update_duration(
    body: UpdateDurationFilterRequest,
    user_id: str = Depends(get_current_user_id),
    service: FilterService = Depends(get_filter_service),
) -> DurationRange:
    return await service.update_duration_filter(
        user_id, body.min_duration, body.max_duration
    )


@router.put(
    "/content-types",
    response_model=List[SourceType],
    summary="Set Allowed Content Types",
)
async def update_content_types(
    body: UpdateContentTypesRequest,
    user_id: str = Depends(get_current_user_id),
    service: FilterService = Depends(get_filter_service),
) -> List[SourceType]:
    return await service.update_content_types(user_id, body.content_types)
