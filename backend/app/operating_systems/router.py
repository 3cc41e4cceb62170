from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.compliance.aggregation import find_by_os_id
from app.compliance.lifecycle import (
    VALID_STATUSES,
    classify,
    days_until_end_of_support,
    filter_catalog_by_status,
    support_status_label,
)
from app.database import get_db
from app.operating_systems.schemas import (
    OperatingSystemCreate,
    OperatingSystemResponse,
    OperatingSystemUpdate,
    SupportStatusResponse,
)
from app.operating_systems.service import (
    count_servers_using,
    create_operating_system,
    delete_operating_system,
    get_operating_system_by_id,
    list_operating_systems,
    update_operating_system,
)
from app.servers.schemas import ServerResponse
from app.servers.service import list_servers

logger = structlog.get_logger()

router = APIRouter(prefix="/os", tags=["operating-systems"])

STATUS_PATTERN = f"^({'|'.join(VALID_STATUSES)})$"


async def _get_or_404(db: AsyncSession, os_id: int):
    os_record = await get_operating_system_by_id(db, os_id)
    if not os_record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Operating system not found")
    return os_record


@router.get("", response_model=list[OperatingSystemResponse])
async def list_os(
    status_filter: str | None = Query(None, alias="status", pattern=STATUS_PATTERN),
    db: AsyncSession = Depends(get_db),
):
    catalog = await list_operating_systems(db)
    if status_filter:
        catalog = filter_catalog_by_status(catalog, datetime.now(timezone.utc), status_filter)
    return [OperatingSystemResponse.model_validate(o) for o in catalog]


@router.post("", response_model=OperatingSystemResponse, status_code=status.HTTP_201_CREATED)
async def create(data: OperatingSystemCreate, db: AsyncSession = Depends(get_db)):
    try:
        os_record = await create_operating_system(db, data)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Operating system {data.name} {data.version} already exists",
        )
    logger.info("os_created", os_id=os_record.id, name=os_record.name, version=os_record.version)
    return OperatingSystemResponse.model_validate(os_record)


@router.get("/{os_id}", response_model=OperatingSystemResponse)
async def get_os(os_id: int, db: AsyncSession = Depends(get_db)):
    os_record = await _get_or_404(db, os_id)
    return OperatingSystemResponse.model_validate(os_record)


@router.get("/{os_id}/support", response_model=SupportStatusResponse)
async def get_support_status(os_id: int, db: AsyncSession = Depends(get_db)):
    os_record = await _get_or_404(db, os_id)
    now = datetime.now(timezone.utc)
    return SupportStatusResponse(
        os_id=os_record.id,
        status=classify(os_record, now),
        label=support_status_label(os_record, now),
        days_until_end_of_support=days_until_end_of_support(os_record, now),
    )


@router.get("/{os_id}/servers", response_model=list[ServerResponse])
async def get_os_servers(os_id: int, db: AsyncSession = Depends(get_db)):
    await _get_or_404(db, os_id)
    servers = await list_servers(db)
    return [ServerResponse.model_validate(s) for s in find_by_os_id(servers, os_id)]


@router.put("/{os_id}", response_model=OperatingSystemResponse)
async def update(os_id: int, data: OperatingSystemUpdate, db: AsyncSession = Depends(get_db)):
    os_record = await _get_or_404(db, os_id)
    try:
        updated = await update_operating_system(db, os_record, data)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Another operating system already has this name and version",
        )
    return OperatingSystemResponse.model_validate(updated)


@router.delete("/{os_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(os_id: int, db: AsyncSession = Depends(get_db)):
    os_record = await _get_or_404(db, os_id)
    in_use = await count_servers_using(db, os_id)
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot delete operating system: {in_use} servers are using it",
        )
    await delete_operating_system(db, os_record)
    logger.info("os_deleted", os_id=os_id)
