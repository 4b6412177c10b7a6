from __future__ import annotations

from uuid import uuid4

import pytest

from rabbitry.application.errors import ConflictError, NotFound, ValidationError
from rabbitry.application.use_cases.animals import generate_next_tag
from rabbitry.application.use_cases.farms import (
    create_farm,
    export_farm_data,
    get_farm,
    manage_breeds,
    update_farm_settings,
)


async def test_next_tag_uses_prefix_breed_and_sequence(uow, farm, make_animal):
    assert await generate_next_tag.execute(uow, farm.id, "REX") == "SN-REX-0001"
    # Previewing does not advance the sequence
    assert await generate_next_tag.execute(uow, farm.id, "rex") == "SN-REX-0001"

    first = await make_animal()
    second = await make_animal()
    by_name = await generate_next_tag.execute(uow, farm.id, "Rex")

    assert first.tag == "SN-REX-0001"
    assert second.tag == "SN-REX-0002"
    assert by_name == "SN-REX-0003"


async def test_generated_tags_skip_tags_entered_by_hand(uow, farm, make_animal):
    manual = await make_animal(tag="SN-REX-0001")
    await make_animal(tag="SN-REX-0003")

    assert await generate_next_tag.execute(uow, farm.id, "REX") == "SN-REX-0002"
    generated = [await make_animal() for _ in range(3)]

    assert manual.tag == "SN-REX-0001"
    assert [a.tag for a in generated] == ["SN-REX-0002", "SN-REX-0004", "SN-REX-0005"]


async def test_next_tag_rejects_unknown_breed(uow, farm):
    with pytest.raises(ValidationError):
        await generate_next_tag.execute(uow, farm.id, "New Zealand White")
    with pytest.raises(ValidationError):
        await generate_next_tag.execute(uow, farm.id, "  ")


async def test_owner_has_single_farm(uow, farm, owner_id):
    assert (await get_farm.execute(uow, owner_id)).id == farm.id
    with pytest.raises(ConflictError):
        await create_farm.execute(uow, owner_id, create_farm.CreateFarmInput(name="Second"))
    with pytest.raises(NotFound):
        await get_farm.execute(uow, uuid4())


@pytest.mark.parametrize(
    "changes",
    [
        {"gestation_days": 27},
        {"palpation_days": 21},
        {"weaning_days": 61},
        {"currency": "XXX"},
        {"timezone": "Mars/Olympus"},
        {"tag_prefix": "S"},
        {"tag_prefix": "S1"},
        {"capacity_policy": "strict"},
        {"name": "   "},
    ],
)
async def test_settings_validation(uow, farm, changes):
    with pytest.raises(ValidationError):
        await update_farm_settings.execute(
            uow, farm.id, update_farm_settings.UpdateFarmSettingsInput(**changes)
        )


async def test_settings_update_normalizes_values(uow, farm):
    updated = await update_farm_settings.execute(
        uow,
        farm.id,
        update_farm_settings.UpdateFarmSettingsInput(
            currency="eur", timezone="Africa/Lagos", gestation_days=33, tag_prefix="ab"
        ),
    )
    assert updated.currency == "EUR"
    assert updated.timezone == "Africa/Lagos"
    assert updated.gestation_days == 33
    assert updated.tag_prefix == "AB"
    assert await generate_next_tag.execute(uow, farm.id, "REX") == "AB-REX-0001"


async def test_breed_registry(uow, farm):
    with pytest.raises(ConflictError):
        await manage_breeds.add_breed(uow, farm.id, "Rex again", "rex")
    with pytest.raises(ValidationError):
        await manage_breeds.add_breed(uow, farm.id, "Bad", "R2")
    updated = await manage_breeds.add_breed(uow, farm.id, "New Zealand White", "nzw")
    assert [b.code for b in updated.breeds] == ["REX", "NZW"]
    updated = await manage_breeds.remove_breed(uow, farm.id, "REX")
    assert [b.code for b in updated.breeds] == ["NZW"]
    with pytest.raises(NotFound):
        await manage_breeds.remove_breed(uow, farm.id, "REX")


async def test_export_contains_every_section(uow, farm, make_hutch, make_animal):
    hutch = await make_hutch(1)
    await make_animal(hutch_id=hutch.id)

    document = await export_farm_data.execute(uow, farm.id)

    assert document["farm_id"] == str(farm.id)
    assert document["farm"]["name"] == "Sunny Rabbitry"
    assert len(document["animals"]) == 1
    assert len(document["hutches"]) == 1
    assert len(document["hutch_assignments"]) == 1
    for key in (
        "matings",
        "deliveries",
        "transactions",
        "sales",
        "customers",
        "medical_records",
        "weights",
    ):
        assert document[key] == []
