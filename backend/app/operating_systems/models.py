from datetime import date

from sqlalchemy import Date, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class OperatingSystem(TimestampMixin, Base):
    __tablename__ = "operating_systems"
    __table_args__ = (UniqueConstraint("name", "version"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)  # distribution family
    version: Mapped[str] = mapped_column(String(100), nullable=False)
    end_of_support: Mapped[date] = mapped_column(Date, nullable=False, index=True)
