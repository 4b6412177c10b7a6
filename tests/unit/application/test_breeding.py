from __future__ import annotations

from datetime import date

import pytest

from rabbitry.application.errors import AnimalNotFound, ConflictError, ValidationError
from rabbitry.application.use_cases.animals import create_animals
from rabbitry.application.use_cases.breeding import (
    list_matings,
    record_delivery,
    record_mating,
    record_palpation,
    update_delivery,
)
from rabbitry.domain.value_objects.inbreeding_relation import InbreedingRelation


async def _mate(uow, farm, doe, buck, **extra):
    return await record_mating.execute(
        uow,
        farm.id,
        record_mating.RecordMatingInput(
            doe_tag=doe.tag, sire_tag=buck.tag, mating_date=date(2024, 1, 1), **extra
        ),
    )


async def test_mating_projects_dates_from_farm_settings(uow, farm, make_animal):
    doe = await make_animal(sex="Female")
    buck = await make_animal(sex="Male")

    result = await _mate(uow, farm, doe, buck)

    assert result.mating.status == "Pending"
    assert result.mating.expected_palpation_date == date(2024, 1, 15)
    assert result.mating.expected_delivery_date == date(2024, 2, 1)
    assert result.inbreeding is InbreedingRelation.NO_RELATION_FOUND
    assert result.moves == []


async def test_mating_reports_full_siblings_but_records(uow, farm, make_animal):
    doe = await make_animal(sex="Female", sire_tag="S1", doe_tag="D1")
    buck = await make_animal(sex="Male", sire_tag="S1", doe_tag="D1")

    result = await _mate(uow, farm, doe, buck)

    assert result.inbreeding is InbreedingRelation.FULL_SIBLINGS
    assert await list_matings.execute(uow, farm.id) == [result.mating]


async def test_mating_checks_roles(uow, farm, make_animal):
    doe = await make_animal(sex="Female")
    other_doe = await make_animal(sex="Female")
    with pytest.raises(ValidationError):
        await _mate(uow, farm, doe, other_doe)
    with pytest.raises(AnimalNotFound):
        await record_mating.execute(
            uow, farm.id, record_mating.RecordMatingInput(doe_tag=doe.tag, sire_tag="NOPE")
        )


async def test_sire_visits_doe_moves_buck_into_doe_hutch(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    h2 = await make_hutch(2)
    doe = await make_animal(sex="Female", hutch_id=h1.id)
    buck = await make_animal(sex="Male", hutch_id=h2.id)

    result = await _mate(
        uow, farm, doe, buck, move=record_mating.MatingMove(mode="sire_visits_doe")
    )

    assert [m.animal.id for m in result.moves] == [buck.id]
    assert (await uow.animals.get(farm.id, buck.id)).current_hutch_id == h1.id
    assert (await uow.hutches.get(farm.id, h1.id)).current_occupancy == 2
    assert (await uow.hutches.get(farm.id, h2.id)).current_occupancy == 0
    stays = await uow.hutch_assignments.list_open_for_animal(farm.id, buck.id)
    assert stays[0].purpose == "Mating"


async def test_neutral_move_requires_hutch(uow, farm, make_animal):
    doe = await make_animal(sex="Female")
    buck = await make_animal(sex="Male")
    with pytest.raises(ValidationError):
        await _mate(uow, farm, doe, buck, move=record_mating.MatingMove(mode="neutral"))
    with pytest.raises(ValidationError):
        await _mate(uow, farm, doe, buck, move=record_mating.MatingMove(mode="sideways"))


async def test_palpation_outcomes_drive_doe_status(uow, farm, make_animal):
    doe = await make_animal(sex="Female")
    buck = await make_animal(sex="Male")
    first = (await _mate(uow, farm, doe, buck)).mating

    confirmed = await record_palpation.execute(
        uow,
        farm.id,
        first.id,
        record_palpation.RecordPalpationInput(result="Positive", checked_on=date(2024, 1, 15)),
    )

    assert confirmed.status == "Pregnant"
    assert confirmed.palpation_result == "Positive"
    assert (await uow.animals.get(farm.id, doe.id)).status == "Pregnant"
    with pytest.raises(ValidationError):
        await record_palpation.execute(
            uow, farm.id, first.id, record_palpation.RecordPalpationInput(result="Negative")
        )


async def test_negative_palpation_fails_mating(uow, farm, make_animal):
    doe = await make_animal(sex="Female")
    buck = await make_animal(sex="Male")
    mating = (await _mate(uow, farm, doe, buck)).mating

    failed = await record_palpation.execute(
        uow,
        farm.id,
        mating.id,
        record_palpation.RecordPalpationInput(result="Negative", checked_on=date(2024, 1, 15)),
    )

    assert failed.status == "Failed"
    assert (await uow.animals.get(farm.id, doe.id)).status == "Active"
    with pytest.raises(ValidationError):
        await record_delivery.execute(
            uow,
            farm.id,
            mating.id,
            record_delivery.RecordDeliveryInput(
                delivery_date=date(2024, 2, 1), kits_born=6, kits_live=5
            ),
        )


async def test_delivery_closes_mating_and_links_kits(uow, farm, make_animal):
    doe = await make_animal(sex="Female", tag="D-7")
    buck = await make_animal(sex="Male", tag="B-3")
    mating = (await _mate(uow, farm, doe, buck)).mating
    await record_palpation.execute(
        uow, farm.id, mating.id, record_palpation.RecordPalpationInput(result="Positive")
    )

    recorded = await record_delivery.execute(
        uow,
        farm.id,
        mating.id,
        record_delivery.RecordDeliveryInput(
            delivery_date=date(2024, 2, 1), kits_born=6, kits_live=5
        ),
    )

    assert recorded.mating.status == "Delivered"
    assert recorded.mating.kits_live == 5
    assert (await uow.animals.get(farm.id, doe.id)).status == "Active"
    with pytest.raises(ConflictError):
        await record_delivery.execute(
            uow,
            farm.id,
            mating.id,
            record_delivery.RecordDeliveryInput(
                delivery_date=date(2024, 2, 1), kits_born=6, kits_live=5
            ),
        )

    kits = await create_animals.execute(
        uow,
        farm.id,
        create_animals.CreateAnimalsInput(
            breed="REX", sex="Female", count=2, delivery_id=recorded.delivery.id
        ),
    )
    assert {k.doe_tag for k in kits.animals} == {"D-7"}
    assert {k.sire_tag for k in kits.animals} == {"B-3"}
    assert {k.date_of_birth for k in kits.animals} == {date(2024, 2, 1)}
    _, delivery = await list_matings.get_mating(uow, farm.id, mating.id)
    assert delivery.kit_ids == [k.id for k in kits.animals]


async def test_delivery_validates_litter(uow, farm, make_animal):
    doe = await make_animal(sex="Female")
    buck = await make_animal(sex="Male")
    mating = (await _mate(uow, farm, doe, buck)).mating
    with pytest.raises(ValidationError):
        await record_delivery.execute(
            uow,
            farm.id,
            mating.id,
            record_delivery.RecordDeliveryInput(
                delivery_date=date(2024, 2, 1), kits_born=3, kits_live=4
            ),
        )
    with pytest.raises(ValidationError):
        await record_delivery.execute(
            uow,
            farm.id,
            mating.id,
            record_delivery.RecordDeliveryInput(
                delivery_date=date(2023, 12, 1), kits_born=3, kits_live=3
            ),
        )


async def test_delivery_correction_updates_mating_copy(uow, farm, make_animal):
    doe = await make_animal(sex="Female")
    buck = await make_animal(sex="Male")
    mating = (await _mate(uow, farm, doe, buck)).mating
    recorded = await record_delivery.execute(
        uow,
        farm.id,
        mating.id,
        record_delivery.RecordDeliveryInput(
            delivery_date=date(2024, 2, 1), kits_born=6, kits_live=5
        ),
    )

    await update_delivery.execute(
        uow, farm.id, recorded.delivery.id, update_delivery.UpdateDeliveryInput(kits_live=4)
    )

    stored, delivery = await list_matings.get_mating(uow, farm.id, mating.id)
    assert delivery.kits_live == 4
    assert stored.kits_live == 4
    with pytest.raises(ValidationError):
        await update_delivery.execute(
            uow, farm.id, recorded.delivery.id, update_delivery.UpdateDeliveryInput(kits_born=2)
        )
