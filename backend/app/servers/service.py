import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.change_history.models import CHANGE_CREATED, CHANGE_DELETED, CHANGE_OS_CHANGED
from app.change_history.service import record_change
from app.operating_systems.models import OperatingSystem
from app.servers.models import Server
from app.servers.schemas import ServerCreate, ServerUpdate

logger = structlog.get_logger()


async def list_servers(db: AsyncSession) -> list[Server]:
    result = await db.execute(select(Server).order_by(Server.created_at.desc(), Server.id.desc()))
    return list(result.scalars().all())


async def get_server_by_id(db: AsyncSession, server_id: int) -> Server | None:
    result = await db.execute(
        select(Server).where(Server.id == server_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_server(db: AsyncSession, data: ServerCreate, os_record: OperatingSystem) -> Server:
    server = Server(name=data.name, os_id=os_record.id)
    db.add(server)
    await db.flush()

    record_change(db, server, CHANGE_CREATED, new_os=os_record)
    await db.commit()

    logger.info("server_created", server_id=server.id, name=server.name, os_id=os_record.id)
    return await get_server_by_id(db, server.id)


async def update_server(
    db: AsyncSession,
    server: Server,
    data: ServerUpdate,
    new_os: OperatingSystem | None = None,
) -> Server:
    """Apply a partial update; ``new_os`` is the resolved record for ``data.os_id``."""
    changed = False

    if data.name and data.name != server.name:
        server.name = data.name
        changed = True

    if new_os is not None and new_os.id != server.os_id:
        record_change(db, server, CHANGE_OS_CHANGED, old_os=server.os, new_os=new_os)
        logger.info("server_os_changed", server_id=server.id, old_os_id=server.os_id, new_os_id=new_os.id)
        server.os = new_os
        server.os_id = new_os.id
        changed = True

    if not changed:
        return server

    await db.commit()
    return await get_server_by_id(db, server.id)


async def delete_server(db: AsyncSession, server: Server) -> None:
    record_change(db, server, CHANGE_DELETED, old_os=server.os)
    await db.flush()
    await db.delete(server)
    await db.commit()
    logger.info("server_deleted", server_id=server.id, name=server.name)
