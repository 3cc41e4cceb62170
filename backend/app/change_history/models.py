from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, utcnow

CHANGE_CREATED = "created"
CHANGE_OS_CHANGED = "os_changed"
CHANGE_DELETED = "deleted"

VALID_CHANGE_TYPES = (CHANGE_CREATED, CHANGE_OS_CHANGED, CHANGE_DELETED)


class ServerChangeHistory(Base):
    __tablename__ = "server_change_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Nulled when the server row is deleted; server_name keeps the record readable
    server_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("servers.id", ondelete="SET NULL"), index=True
    )
    server_name: Mapped[str] = mapped_column(String(255), nullable=False)
    change_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # created, os_changed, deleted
    old_os_id: Mapped[int | None] = mapped_column(Integer)
    new_os_id: Mapped[int | None] = mapped_column(Integer)
    old_os_name: Mapped[str | None] = mapped_column(String(100))
    old_os_version: Mapped[str | None] = mapped_column(String(100))
    new_os_name: Mapped[str | None] = mapped_column(String(100))
    new_os_version: Mapped[str | None] = mapped_column(String(100))
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
