from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from rabbitry.application.errors import ConflictError, NotFound, ValidationError
from rabbitry.application.use_cases.animals import (
    add_weight,
    check_inbreeding,
    create_animals,
    get_animal_details,
    list_animals,
    update_animal,
)
from rabbitry.application.use_cases.finance import transactions
from rabbitry.application.use_cases.health import create_medical_record
from rabbitry.domain.value_objects.inbreeding_relation import InbreedingRelation


async def test_batch_with_base_tag_gets_suffixes(uow, farm):
    result = await create_animals.execute(
        uow,
        farm.id,
        create_animals.CreateAnimalsInput(breed="REX", sex="Male", tag="L1", count=3),
    )
    assert [a.tag for a in result.animals] == ["L1-1", "L1-2", "L1-3"]
    assert all(a.status == "Active" and a.version == 1 for a in result.animals)

    with pytest.raises(ConflictError):
        await create_animals.execute(
            uow,
            farm.id,
            create_animals.CreateAnimalsInput(breed="REX", sex="Male", tag="L1-2"),
        )


async def test_generated_tags_and_purchase_expense(uow, farm):
    result = await create_animals.execute(
        uow,
        farm.id,
        create_animals.CreateAnimalsInput(
            breed="Rex",
            sex="Female",
            count=2,
            source="Purchased",
            purchase_cost=Decimal("15.00"),
            date_of_acquisition=date(2024, 6, 1),
            weight=Decimal("2.4"),
        ),
    )

    assert [a.tag for a in result.animals] == ["SN-REX-0001", "SN-REX-0002"]
    expense = result.purchase_transaction
    assert expense is not None
    assert expense.type == "Expense"
    assert expense.category == "Livestock Purchase"
    assert expense.amount == Decimal("30.00")
    assert expense.date == date(2024, 6, 1)
    weights = await uow.weights.list(farm.id, animal_id=result.animals[0].id)
    assert [w.weight for w in weights] == [Decimal("2.4")]


@pytest.mark.parametrize(
    "overrides",
    [
        {"sex": "Unknown"},
        {"count": 0},
        {"count": 51},
        {"source": "Gift"},
        {"breed": " "},
        {"purchase_cost": Decimal("-1")},
    ],
)
async def test_create_validation(uow, farm, overrides):
    payload = {"breed": "REX", "sex": "Female", **overrides}
    with pytest.raises(ValidationError):
        await create_animals.execute(uow, farm.id, create_animals.CreateAnimalsInput(**payload))


async def test_update_checks_version_and_tag(uow, farm, make_animal):
    doe = await make_animal(tag="D1")
    await make_animal(tag="D2")

    updated = await update_animal.execute(
        uow, farm.id, doe.id, update_animal.UpdateAnimalInput(version=doe.version, name="Clover")
    )
    assert updated.name == "Clover"
    assert updated.version == doe.version + 1

    with pytest.raises(ConflictError):
        await update_animal.execute(
            uow, farm.id, doe.id, update_animal.UpdateAnimalInput(version=doe.version, name="X")
        )
    with pytest.raises(ConflictError):
        await update_animal.execute(
            uow, farm.id, doe.id, update_animal.UpdateAnimalInput(version=updated.version, tag="D2")
        )


async def test_list_filters_and_search(uow, farm, make_animal):
    await make_animal(sex="Female", name="Clover")
    await make_animal(sex="Male", name="Thumper")

    males = await list_animals.execute(uow, farm.id, sex="Male")
    assert [a.name for a in males.items] == ["Thumper"]
    assert males.total == 1
    found = await list_animals.execute(uow, farm.id, search="clo")
    assert [a.name for a in found.items] == ["Clover"]
    with pytest.raises(ValidationError):
        await list_animals.execute(uow, farm.id, statuses=["Sleeping"])


async def test_inbreeding_check_by_tag(uow, farm, make_animal):
    await make_animal(tag="A", sire_tag="S1", doe_tag="D1")
    await make_animal(tag="B", sex="Male", sire_tag="S1", doe_tag="D2")

    relation = await check_inbreeding.execute(uow, farm.id, "A", " B ")

    assert relation is InbreedingRelation.SHARED_FATHER


async def test_latest_weight_follows_newest_reading(uow, farm, make_animal):
    doe = await make_animal()
    await add_weight.execute(
        uow, farm.id, doe.id, add_weight.AddWeightInput(Decimal("3.1"), date(2024, 5, 1))
    )
    await add_weight.execute(
        uow, farm.id, doe.id, add_weight.AddWeightInput(Decimal("2.0"), date(2024, 1, 1))
    )

    assert (await uow.animals.get(farm.id, doe.id)).weight == Decimal("3.1")
    with pytest.raises(ValidationError):
        await add_weight.execute(
            uow, farm.id, doe.id, add_weight.AddWeightInput(weight=Decimal("0"), date=date.today())
        )


async def test_medical_cost_is_booked_and_shown_in_details(uow, farm, make_animal):
    doe = await make_animal()
    result = await create_medical_record.execute(
        uow,
        farm.id,
        create_medical_record.CreateMedicalRecordInput(
            animal_id=doe.id,
            date=date(2024, 3, 3),
            type="Vaccination",
            medication_name="RHDV2",
            cost=Decimal("4.50"),
        ),
    )

    assert result.expense is not None
    assert result.expense.category == "Medication"
    summary = await transactions.finance_summary(uow, farm.id)
    assert summary.expense == Decimal("4.50")
    assert summary.net == Decimal("-4.50")
    details = await get_animal_details.execute(uow, farm.id, doe.id)
    assert [r.medication_name for r in details.medical_records] == ["RHDV2"]

    with pytest.raises(ValidationError):
        await create_medical_record.execute(
            uow,
            farm.id,
            create_medical_record.CreateMedicalRecordInput(
                animal_id=doe.id, date=date(2024, 3, 3), type="Magic", medication_name="X"
            ),
        )


async def test_delivery_link_must_exist(uow, farm):
    with pytest.raises(NotFound):
        await create_animals.execute(
            uow,
            farm.id,
            create_animals.CreateAnimalsInput(breed="REX", sex="Female", delivery_id=uuid4()),
        )
