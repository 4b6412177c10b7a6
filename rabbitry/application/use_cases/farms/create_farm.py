from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import ConflictError, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.update_farm_settings import (
    validate_currency,
    validate_day_ranges,
    validate_tag_prefix,
    validate_timezone,
)
from rabbitry.domain.models.farm import Farm

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateFarmInput:
    name: str
    currency: str = "USD"
    timezone: str = "UTC"
    gestation_days: int = 31
    palpation_days: int = 14
    weaning_days: int = 35
    tag_prefix: str | None = None


async def execute(uow: UnitOfWork, owner_user_id: UUID, payload: CreateFarmInput) -> Farm:
    name = (payload.name or "").strip()
    if not name:
        raise ValidationError("Farm name is required")
    currency = validate_currency(payload.currency)
    validate_timezone(payload.timezone)
    validate_day_ranges(payload.gestation_days, payload.palpation_days, payload.weaning_days)
    tag_prefix = validate_tag_prefix(payload.tag_prefix) if payload.tag_prefix else None
    if await uow.farms.get_by_owner(owner_user_id):
        raise ConflictError("Account already owns a farm")
    farm = Farm.create(
        owner_user_id=owner_user_id,
        name=name,
        currency=currency,
        timezone_name=payload.timezone,
        gestation_days=payload.gestation_days,
        palpation_days=payload.palpation_days,
        weaning_days=payload.weaning_days,
        tag_prefix=tag_prefix,
    )
    created = await uow.farms.add(farm)
    await uow.commit()
    logger.info("Created farm %s (%s) for owner %s", created.id, created.name, owner_user_id)
    return created
