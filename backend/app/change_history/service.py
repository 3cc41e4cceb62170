from datetime import datetime, time, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.change_history.models import ServerChangeHistory
from app.change_history.schemas import ChangeHistoryFilter
from app.operating_systems.models import OperatingSystem
from app.servers.models import Server


def record_change(
    db: AsyncSession,
    server: Server,
    change_type: str,
    old_os: OperatingSystem | None = None,
    new_os: OperatingSystem | None = None,
) -> ServerChangeHistory:
    """Stage a history row in the caller's transaction; the caller commits."""
    entry = ServerChangeHistory(
        server_id=server.id,
        server_name=server.name,
        change_type=change_type,
        old_os_id=old_os.id if old_os else None,
        old_os_name=old_os.name if old_os else None,
        old_os_version=old_os.version if old_os else None,
        new_os_id=new_os.id if new_os else None,
        new_os_name=new_os.name if new_os else None,
        new_os_version=new_os.version if new_os else None,
    )
    db.add(entry)
    return entry


def _day_start(day) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


async def list_change_history(db: AsyncSession, filters: ChangeHistoryFilter) -> list[ServerChangeHistory]:
    query = select(ServerChangeHistory)

    if filters.server_id is not None:
        query = query.where(ServerChangeHistory.server_id == filters.server_id)
    if filters.change_type:
        query = query.where(ServerChangeHistory.change_type == filters.change_type)
    if filters.start_date:
        query = query.where(ServerChangeHistory.changed_at >= _day_start(filters.start_date))
    if filters.end_date:
        # end_date covers the whole day
        query = query.where(ServerChangeHistory.changed_at < _day_start(filters.end_date + timedelta(days=1)))

    query = query.order_by(ServerChangeHistory.changed_at.desc(), ServerChangeHistory.id.desc())
    query = query.offset(filters.offset).limit(filters.limit)

    result = await db.execute(query)
    return list(result.scalars().all())


async def get_server_history(db: AsyncSession, server_id: int, limit: int = 50) -> list[ServerChangeHistory]:
    result = await db.execute(
        select(ServerChangeHistory)
        .where(ServerChangeHistory.server_id == server_id)
        .order_by(ServerChangeHistory.changed_at.desc(), ServerChangeHistory.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def get_change_history_by_id(db: AsyncSession, history_id: int) -> ServerChangeHistory | None:
    result = await db.execute(select(ServerChangeHistory).where(ServerChangeHistory.id == history_id))
    return result.scalar_one_or_none()
