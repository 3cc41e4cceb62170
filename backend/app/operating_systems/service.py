from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.operating_systems.models import OperatingSystem
from app.operating_systems.schemas import OperatingSystemCreate, OperatingSystemUpdate
from app.servers.models import Server


async def create_operating_system(db: AsyncSession, data: OperatingSystemCreate) -> OperatingSystem:
    os_record = OperatingSystem(
        name=data.name,
        version=data.version,
        end_of_support=data.end_of_support,
    )
    db.add(os_record)
    await db.commit()
    await db.refresh(os_record)
    return os_record


async def list_operating_systems(db: AsyncSession) -> list[OperatingSystem]:
    result = await db.execute(
        select(OperatingSystem).order_by(OperatingSystem.name, OperatingSystem.version)
    )
    return list(result.scalars().all())


async def get_operating_system_by_id(db: AsyncSession, os_id: int) -> OperatingSystem | None:
    result = await db.execute(select(OperatingSystem).where(OperatingSystem.id == os_id))
    return result.scalar_one_or_none()


async def update_operating_system(
    db: AsyncSession, os_record: OperatingSystem, data: OperatingSystemUpdate
) -> OperatingSystem:
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        return os_record
    for field, value in update_data.items():
        setattr(os_record, field, value)
    await db.commit()
    await db.refresh(os_record)
    return os_record


async def count_servers_using(db: AsyncSession, os_id: int) -> int:
    result = await db.execute(
        select(func.count()).select_from(Server).where(Server.os_id == os_id)
    )
    return result.scalar_one()


async def delete_operating_system(db: AsyncSession, os_record: OperatingSystem) -> None:
    await db.delete(os_record)
    await db.commit()
