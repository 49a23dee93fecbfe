"""
History router.
Reads back the interaction log: full history and saved items.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_current_user_id, get_interaction_service
from app.models.schemas import HistoryEntry, InteractionType
from app.services.interactions import DEFAULT_HISTORY_LIMIT, InteractionService

router = APIRouter(prefix="/v1", tags=["history"])


@router.get(
    "/history",
    response_model=List[HistoryEntry],
    summary="Interaction History",
)
async def get_history(
    interaction_type: Optional[InteractionType] = Query(default=None, alias="type"),
    limit: int = Query(default=DEFAULT_HISTORY_LIMIT, ge=1, le=200),
    user_id: str = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service),
) -> List[HistoryEntry]:
    """Newest first, optionally restricted to one interaction type."""
    return await service.get_history(user_id, interaction_type, limit)


@router.get("/saved", response_model=List[HistoryEntry], summary="Saved Content")
async def get_saved(
    collection: Optional[str] = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    service: InteractionService = Depends(get_interaction_service),
) -> List[HistoryEntry]:
    return await service.get_saved(user_id, collection)
