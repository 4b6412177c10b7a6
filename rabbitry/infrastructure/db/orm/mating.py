from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from rabbitry.infrastructure.db.base import Base
from rabbitry.infrastructure.db.types import StringList


class MatingORM(Base):
    __tablename__ = "matings"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    doe_tag: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    sire_tag: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    mating_date: Mapped[date] = mapped_column(Date, nullable=False)
    expected_palpation_date: Mapped[date] = mapped_column(Date, nullable=False)
    expected_delivery_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    palpation_result: Mapped[str | None] = mapped_column(String(16), nullable=True)
    palpation_checked_on: Mapped[date | None] = mapped_column(Date, nullable=True)
    actual_delivery_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    kits_born: Mapped[int | None] = mapped_column(Integer, nullable=True)
    kits_live: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class DeliveryORM(Base):
    __tablename__ = "deliveries"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    mating_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("matings.id"), nullable=False, unique=True
    )
    doe_tag: Mapped[str] = mapped_column(String(64), nullable=False)
    sire_tag: Mapped[str] = mapped_column(String(64), nullable=False)
    delivery_date: Mapped[date] = mapped_column(Date, nullable=False)
    kits_born: Mapped[int] = mapped_column(Integer, nullable=False)
    kits_live: Mapped[int] = mapped_column(Integer, nullable=False)
    kit_ids: Mapped[list[str]] = mapped_column(StringList, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
