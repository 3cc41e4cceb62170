from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin
from app.operating_systems.models import OperatingSystem


class Server(TimestampMixin, Base):
    __tablename__ = "servers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    os_id: Mapped[int] = mapped_column(Integer, ForeignKey("operating_systems.id"), nullable=False, index=True)

    # None when the OS row cannot be resolved; compliance treats such servers as unclassified
    os: Mapped[OperatingSystem | None] = relationship(lazy="joined")
