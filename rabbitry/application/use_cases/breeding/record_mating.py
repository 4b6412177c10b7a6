from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from rabbitry.application.errors import AnimalNotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm import require_farm
from rabbitry.application.use_cases.housing.ledger import CapacityWarning, MoveResult, move_animal
from rabbitry.domain.models.animal import Animal
from rabbitry.domain.models.mating import Mating
from rabbitry.domain.services.inbreeding import detect_inbreeding
from rabbitry.domain.value_objects.housing_purpose import HousingPurpose
from rabbitry.domain.value_objects.inbreeding_relation import InbreedingRelation
from rabbitry.domain.value_objects.sex import Sex
from rabbitry.utils.datetime_tz import farm_today

logger = logging.getLogger(__name__)

MOVE_MODES = ("sire_visits_doe", "doe_visits_sire", "neutral")


@dataclass(slots=True)
class MatingMove:
    mode: str
    hutch_id: UUID | None = None  # neutral only


@dataclass(slots=True)
class RecordMatingInput:
    doe_tag: str
    sire_tag: str
    mating_date: date | None = None
    notes: str | None = None
    move: MatingMove | None = None


@dataclass(slots=True)
class RecordMatingOutput:
    mating: Mating
    inbreeding: InbreedingRelation
    moves: list[MoveResult] = field(default_factory=list)

    @property
    def capacity_warnings(self) -> list[CapacityWarning]:
        return [m.capacity_warning for m in self.moves if m.capacity_warning]


async def _breeder(uow: UnitOfWork, farm_id: UUID, tag: str, sex: Sex, role: str) -> Animal:
    animal = await uow.animals.get_by_tag(farm_id, tag.strip())
    if not animal:
        raise AnimalNotFound(f"{role} {tag} not found")
    if animal.sex != sex.value:
        raise ValidationError(f"{role} {animal.tag} must be {sex.value}")
    if animal.is_terminal:
        raise ValidationError(f"{role} {animal.tag} is {animal.status}")
    return animal


def _plan_moves(move: MatingMove, doe: Animal, sire: Animal) -> list[tuple[Animal, UUID]]:
    if move.mode not in MOVE_MODES:
        raise ValidationError(f"Invalid move mode. Must be one of: {', '.join(MOVE_MODES)}")
    if move.mode == "sire_visits_doe":
        if doe.current_hutch_id is None:
            raise ValidationError(f"Doe {doe.tag} is not housed")
        return [(sire, doe.current_hutch_id)]
    if move.mode == "doe_visits_sire":
        if sire.current_hutch_id is None:
            raise ValidationError(f"Sire {sire.tag} is not housed")
        return [(doe, sire.current_hutch_id)]
    if move.hutch_id is None:
        raise ValidationError("hutch_id is required for a neutral mating hutch")
    return [(doe, move.hutch_id), (sire, move.hutch_id)]


async def execute(
    uow: UnitOfWork, farm_id: UUID, payload: RecordMatingInput
) -> RecordMatingOutput:
    farm = await require_farm(uow, farm_id)
    doe = await _breeder(uow, farm_id, payload.doe_tag, Sex.FEMALE, "Doe")
    sire = await _breeder(uow, farm_id, payload.sire_tag, Sex.MALE, "Sire")
    relation = detect_inbreeding(doe, sire)
    planned = _plan_moves(payload.move, doe, sire) if payload.move else []

    mating = await uow.matings.add(
        Mating.create(
            farm_id=farm_id,
            doe_tag=doe.tag,
            sire_tag=sire.tag,
            mating_date=payload.mating_date or farm_today(farm.timezone),
            palpation_days=farm.palpation_days,
            gestation_days=farm.gestation_days,
            notes=payload.notes,
        )
    )
    output = RecordMatingOutput(mating=mating, inbreeding=relation)
    for animal, hutch_id in planned:
        output.moves.append(
            await move_animal(
                uow,
                farm_id,
                animal,
                hutch_id,
                purpose=HousingPurpose.MATING.value,
                notes=f"Mating {doe.tag} x {sire.tag}",
                capacity_policy=farm.capacity_policy,
            )
        )

    await uow.commit()
    logger.info(
        "Recorded mating %s x %s on %s (palpation %s, delivery %s)",
        doe.tag,
        sire.tag,
        mating.mating_date,
        mating.expected_palpation_date,
        mating.expected_delivery_date,
    )
    if relation.is_related:
        logger.warning("Mating %s x %s: %s", doe.tag, sire.tag, relation.value)
    return output
