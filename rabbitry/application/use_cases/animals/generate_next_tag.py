from __future__ import annotations

import logging
from uuid import UUID

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm import require_farm
from rabbitry.domain.models.farm import Farm, is_valid_breed_code
from rabbitry.domain.services.tags import DEFAULT_SEQUENCE_WIDTH, format_tag

logger = logging.getLogger(__name__)


def resolve_breed_code(farm: Farm, breed: str) -> str:
    """Breed code for ``breed``, given either as a registered code or name."""
    value = (breed or "").strip()
    if not value:
        raise ValidationError("Breed code is required to generate a tag")
    registered = farm.find_breed(value)
    if registered:
        return registered.code
    for candidate in farm.breeds:
        if candidate.name.strip().lower() == value.lower():
            return candidate.code
    if is_valid_breed_code(value.upper()):
        return value.upper()
    raise ValidationError(f"Unknown breed '{value}'; register a breed code first")


async def allocate_tag(
    uow: UnitOfWork, farm: Farm, breed: str, width: int = DEFAULT_SEQUENCE_WIDTH
) -> str:
    """Advance the sequence until it yields a tag no animal of the farm carries."""
    code = resolve_breed_code(farm, breed)
    while True:
        sequence = await uow.tag_counters.next_sequence(farm.id)
        tag = format_tag(farm.tag_prefix, code, sequence, width)
        if not await uow.animals.get_by_tag(farm.id, tag):
            return tag
        logger.info("Skipping tag %s for farm %s: already in use", tag, farm.id)


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    breed_code: str,
    width: int = DEFAULT_SEQUENCE_WIDTH,
) -> str:
    """Tag the next registration of this breed would receive. Nothing is reserved."""
    farm = await require_farm(uow, farm_id)
    code = resolve_breed_code(farm, breed_code)
    sequence = await uow.tag_counters.peek_sequence(farm.id)
    tag = format_tag(farm.tag_prefix, code, sequence, width)
    while await uow.animals.get_by_tag(farm.id, tag):
        sequence += 1
        tag = format_tag(farm.tag_prefix, code, sequence, width)
    return tag
