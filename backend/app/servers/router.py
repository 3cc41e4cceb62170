from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.operating_systems.service import get_operating_system_by_id
from app.servers.schemas import ServerCreate, ServerResponse, ServerUpdate
from app.servers.service import create_server, delete_server, get_server_by_id, list_servers, update_server

router = APIRouter(prefix="/servers", tags=["servers"])


async def _get_os_or_404(db: AsyncSession, os_id: int):
    os_record = await get_operating_system_by_id(db, os_id)
    if not os_record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Operating system with id {os_id} does not exist",
        )
    return os_record


@router.get("", response_model=list[ServerResponse])
async def list_all(db: AsyncSession = Depends(get_db)):
    servers = await list_servers(db)
    return [ServerResponse.model_validate(s) for s in servers]


@router.post("", response_model=ServerResponse, status_code=status.HTTP_201_CREATED)
async def create(data: ServerCreate, db: AsyncSession = Depends(get_db)):
    os_record = await _get_os_or_404(db, data.os_id)
    try:
        server = await create_server(db, data, os_record)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Server {data.name} already exists",
        )
    return ServerResponse.model_validate(server)


@router.get("/{server_id}", response_model=ServerResponse)
async def get_server(server_id: int, db: AsyncSession = Depends(get_db)):
    server = await get_server_by_id(db, server_id)
    if not server:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Server not found")
    return ServerResponse.model_validate(server)


@router.put("/{server_id}", response_model=ServerResponse)
async def update(server_id: int, data: ServerUpdate, db: AsyncSession = Depends(get_db)):
    server = await get_server_by_id(db, server_id)
    if not server:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Server not found")

    new_os = await _get_os_or_404(db, data.os_id) if data.os_id else None
    try:
        updated = await update_server(db, server, data, new_os)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Server {data.name} already exists",
        )
    return ServerResponse.model_validate(updated)


@router.delete("/{server_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(server_id: int, db: AsyncSession = Depends(get_db)):
    server = await get_server_by_id(db, server_id)
    if not server:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Server not found")
    await delete_server(db, server)
