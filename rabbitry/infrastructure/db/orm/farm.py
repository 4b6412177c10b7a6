from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from rabbitry.infrastructure.db.base import Base
from rabbitry.infrastructure.db.types import JSONDocument


class FarmORM(Base):
    __tablename__ = "farms"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    owner_user_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    gestation_days: Mapped[int] = mapped_column(Integer, nullable=False, default=31)
    palpation_days: Mapped[int] = mapped_column(Integer, nullable=False, default=14)
    weaning_days: Mapped[int] = mapped_column(Integer, nullable=False, default=35)
    breeds: Mapped[list[dict]] = mapped_column(JSONDocument, nullable=False, default=list)
    tag_prefix: Mapped[str] = mapped_column(String(4), nullable=False, default="SN")
    capacity_policy: Mapped[str] = mapped_column(String(8), nullable=False, default="soft")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class TagCounterORM(Base):
    __tablename__ = "tag_counters"

    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    last_sequence: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
