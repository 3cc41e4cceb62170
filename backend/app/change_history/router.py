from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.change_history.models import VALID_CHANGE_TYPES
from app.change_history.schemas import ChangeHistoryFilter, ChangeHistoryResponse
from app.change_history.service import get_change_history_by_id, get_server_history, list_change_history
from app.config import settings
from app.database import get_db

router = APIRouter(tags=["change-history"])

CHANGE_TYPE_PATTERN = f"^({'|'.join(VALID_CHANGE_TYPES)})$"


@router.get("/change-history", response_model=list[ChangeHistoryResponse])
async def list_history(
    server_id: int | None = Query(None),
    change_type: str | None = Query(None, pattern=CHANGE_TYPE_PATTERN),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    limit: int = Query(settings.HISTORY_DEFAULT_LIMIT, ge=1),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    filters = ChangeHistoryFilter(
        server_id=server_id,
        change_type=change_type,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset,
    )
    history = await list_change_history(db, filters)
    return [ChangeHistoryResponse.model_validate(h) for h in history]


@router.get("/change-history/{history_id}", response_model=ChangeHistoryResponse)
async def get_history_record(history_id: int, db: AsyncSession = Depends(get_db)):
    record = await get_change_history_by_id(db, history_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Change history record not found")
    return ChangeHistoryResponse.model_validate(record)


@router.get("/servers/{server_id}/history", response_model=list[ChangeHistoryResponse])
async def server_history(
    server_id: int,
    limit: int = Query(settings.SERVER_HISTORY_DEFAULT_LIMIT, ge=1),
    db: AsyncSession = Depends(get_db),
):
    history = await get_server_history(db, server_id, limit)
    return [ChangeHistoryResponse.model_validate(h) for h in history]
