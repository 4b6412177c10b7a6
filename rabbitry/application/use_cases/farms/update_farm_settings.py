from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm import require_farm
from rabbitry.domain.models.farm import (
    GESTATION_DAYS_RANGE,
    PALPATION_DAYS_RANGE,
    SUPPORTED_CURRENCIES,
    WEANING_DAYS_RANGE,
    Farm,
)
from rabbitry.domain.value_objects.capacity_policy import CapacityPolicy
from rabbitry.utils.datetime_tz import is_valid_timezone


@dataclass(slots=True)
class UpdateFarmSettingsInput:
    name: str | None = None
    currency: str | None = None
    timezone: str | None = None
    gestation_days: int | None = None
    palpation_days: int | None = None
    weaning_days: int | None = None
    tag_prefix: str | None = None
    capacity_policy: str | None = None


def _check_range(field_name: str, value: int | None, bounds: tuple[int, int]) -> None:
    if value is None:
        return
    low, high = bounds
    if not (low <= value <= high):
        raise ValidationError(f"{field_name} must be between {low} and {high}")


def validate_day_ranges(
    gestation_days: int | None, palpation_days: int | None, weaning_days: int | None
) -> None:
    _check_range("gestation_days", gestation_days, GESTATION_DAYS_RANGE)
    _check_range("palpation_days", palpation_days, PALPATION_DAYS_RANGE)
    _check_range("weaning_days", weaning_days, WEANING_DAYS_RANGE)


def validate_currency(currency: str) -> str:
    code = (currency or "").strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise ValidationError(
            f"Unsupported currency. Must be one of: {', '.join(sorted(SUPPORTED_CURRENCIES))}"
        )
    return code


def validate_timezone(name: str) -> None:
    if not is_valid_timezone(name):
        raise ValidationError(f"Unknown timezone: {name}")


def validate_tag_prefix(prefix: str) -> str:
    value = prefix.strip().upper()
    if not (2 <= len(value) <= 4 and value.isalpha() and value.isascii()):
        raise ValidationError("tag_prefix must be 2 to 4 letters")
    return value


async def execute(
    uow: UnitOfWork, farm_id: UUID, payload: UpdateFarmSettingsInput
) -> Farm:
    farm = await require_farm(uow, farm_id)
    validate_day_ranges(payload.gestation_days, payload.palpation_days, payload.weaning_days)
    if payload.name is not None:
        if not payload.name.strip():
            raise ValidationError("Farm name cannot be blank")
        farm.name = payload.name.strip()
    if payload.currency is not None:
        farm.currency = validate_currency(payload.currency)
    if payload.timezone is not None:
        validate_timezone(payload.timezone)
        farm.timezone = payload.timezone
    if payload.gestation_days is not None:
        farm.gestation_days = payload.gestation_days
    if payload.palpation_days is not None:
        farm.palpation_days = payload.palpation_days
    if payload.weaning_days is not None:
        farm.weaning_days = payload.weaning_days
    if payload.tag_prefix is not None:
        farm.tag_prefix = validate_tag_prefix(payload.tag_prefix)
    if payload.capacity_policy is not None:
        if payload.capacity_policy not in {p.value for p in CapacityPolicy}:
            raise ValidationError("capacity_policy must be soft or hard")
        farm.capacity_policy = payload.capacity_policy
    farm.touch()
    saved = await uow.farms.save(farm)
    await uow.commit()
    return saved
