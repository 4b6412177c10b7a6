from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from rabbitry.application.errors import (
    CapacityExceeded,
    ConflictError,
    HousingNotFound,
    ValidationError,
)
from rabbitry.application.use_cases.farms import update_farm_settings
from rabbitry.application.use_cases.housing import (
    assign_animal,
    manage_hutches,
    reconcile_occupancy,
)
from rabbitry.application.use_cases.housing.ledger import move_animal, release_animal


async def test_move_between_hutches_keeps_counters_and_history(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    h2 = await make_hutch(2)
    doe = await make_animal(hutch_id=h1.id)
    assert (await uow.hutches.get(farm.id, h1.id)).current_occupancy == 1

    result = await assign_animal.execute(
        uow, farm.id, doe.id, assign_animal.AssignAnimalInput(hutch_id=h2.id)
    )

    assert result.changed
    assert result.animal.current_hutch_id == h2.id
    assert (await uow.hutches.get(farm.id, h1.id)).current_occupancy == 0
    assert (await uow.hutches.get(farm.id, h2.id)).current_occupancy == 1
    history = await uow.hutch_assignments.list_for_animal(farm.id, doe.id)
    assert len(history) == 2
    open_stays = [a for a in history if a.end_at is None]
    assert [a.hutch_id for a in open_stays] == [h2.id]
    closed = next(a for a in history if a.hutch_id == h1.id)
    assert closed.end_at is not None
    assert closed.end_at >= closed.start_at


async def test_move_into_current_hutch_changes_nothing(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    doe = await make_animal(hutch_id=h1.id)
    before = await uow.hutch_assignments.list_for_animal(farm.id, doe.id)

    result = await assign_animal.execute(
        uow, farm.id, doe.id, assign_animal.AssignAnimalInput(hutch_id=h1.id)
    )

    assert not result.changed
    assert result.assignment is None
    assert (await uow.hutches.get(farm.id, h1.id)).current_occupancy == 1
    assert await uow.hutch_assignments.list_for_animal(farm.id, doe.id) == before
    assert (await uow.animals.get(farm.id, doe.id)).version == doe.version


async def test_move_to_missing_hutch_writes_nothing(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    doe = await make_animal(hutch_id=h1.id)

    with pytest.raises(HousingNotFound):
        await move_animal(uow, farm.id, doe, uuid4())

    stored = await uow.animals.get(farm.id, doe.id)
    assert stored.current_hutch_id == h1.id
    assert stored.version == doe.version
    assert (await uow.hutches.get(farm.id, h1.id)).current_occupancy == 1
    stays = await uow.hutch_assignments.list_for_animal(farm.id, doe.id)
    assert len(stays) == 1 and stays[0].end_at is None


async def test_soft_policy_allows_overcrowding_with_warning(uow, farm, make_hutch, make_animal):
    small = await make_hutch(1, capacity=1)
    await make_animal(hutch_id=small.id)
    second = await make_animal()

    result = await assign_animal.execute(
        uow, farm.id, second.id, assign_animal.AssignAnimalInput(hutch_id=small.id)
    )

    assert result.changed
    assert result.capacity_warning is not None
    assert result.capacity_warning.capacity == 1
    assert result.capacity_warning.occupancy == 1
    assert "H01" in result.capacity_warning.message
    assert (await uow.hutches.get(farm.id, small.id)).current_occupancy == 2


async def test_hard_policy_rejects_full_hutch_before_writing(uow, farm, make_hutch, make_animal):
    await update_farm_settings.execute(
        uow, farm.id, update_farm_settings.UpdateFarmSettingsInput(capacity_policy="hard")
    )
    h1 = await make_hutch(1)
    small = await make_hutch(2, capacity=1)
    await make_animal(hutch_id=small.id)
    mover = await make_animal(hutch_id=h1.id)

    with pytest.raises(CapacityExceeded) as exc_info:
        await assign_animal.execute(
            uow, farm.id, mover.id, assign_animal.AssignAnimalInput(hutch_id=small.id)
        )

    assert exc_info.value.status_code == 409
    assert exc_info.value.details["capacity"] == 1
    assert (await uow.animals.get(farm.id, mover.id)).current_hutch_id == h1.id
    assert (await uow.hutches.get(farm.id, h1.id)).current_occupancy == 1
    assert (await uow.hutches.get(farm.id, small.id)).current_occupancy == 1


async def test_release_closes_stay_and_frees_slot(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    doe = await make_animal(hutch_id=h1.id)
    released_at = datetime(2030, 1, 1, tzinfo=timezone.utc)

    result = await release_animal(uow, farm.id, doe, released_at)

    assert result.changed
    assert result.animal.current_hutch_id is None
    assert (await uow.hutches.get(farm.id, h1.id)).current_occupancy == 0
    assert await uow.hutch_assignments.list_open_for_animal(farm.id, doe.id) == []
    again = await release_animal(uow, farm.id, result.animal)
    assert not again.changed


async def test_terminal_animal_cannot_be_moved(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    doe = await make_animal()
    doe.status = "Sold"
    with pytest.raises(ValidationError):
        await move_animal(uow, farm.id, doe, h1.id)


async def test_unknown_purpose_is_rejected(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    doe = await make_animal()
    with pytest.raises(ValidationError):
        await move_animal(uow, farm.id, doe, h1.id, purpose="Holiday")


async def test_reconcile_repairs_drifted_counter(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    await make_animal(hutch_id=h1.id)
    await uow.hutches.set_occupancy(farm.id, h1.id, 5)

    drifts = await reconcile_occupancy.execute(uow, farm.id)

    assert [(d.recorded, d.actual) for d in drifts] == [(5, 1)]
    assert (await uow.hutches.get(farm.id, h1.id)).current_occupancy == 1
    assert await reconcile_occupancy.execute(uow, farm.id) == []


async def test_occupied_hutch_cannot_be_deleted(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    doe = await make_animal(hutch_id=h1.id)
    with pytest.raises(ConflictError):
        await manage_hutches.delete_hutch(uow, farm.id, h1.id)

    await release_animal(uow, farm.id, doe)
    await manage_hutches.delete_hutch(uow, farm.id, h1.id)
    assert await uow.hutches.get(farm.id, h1.id) is None
    assert await manage_hutches.list_hutches(uow, farm.id) == []


async def test_deleting_hutch_keeps_animal_housing_history(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    h2 = await make_hutch(2)
    doe = await make_animal(hutch_id=h1.id)
    moved = await move_animal(uow, farm.id, doe, h2.id)

    await manage_hutches.delete_hutch(uow, farm.id, h1.id)

    history = await uow.hutch_assignments.list_for_animal(farm.id, moved.animal.id)
    assert len(history) == 2
    closed = next(a for a in history if a.hutch_id == h1.id)
    assert closed.end_at is not None
    assert closed.hutch_label == "H01"
    with pytest.raises(HousingNotFound):
        await manage_hutches.hutch_history(uow, farm.id, h1.id)


async def test_back_dated_move_never_ends_stay_before_it_starts(
    uow, farm, make_hutch, make_animal
):
    h1 = await make_hutch(1)
    h2 = await make_hutch(2)
    doe = await make_animal(hutch_id=h1.id)
    (placed,) = await uow.hutch_assignments.list_open_for_animal(farm.id, doe.id)

    result = await move_animal(uow, farm.id, doe, h2.id, at=date(2020, 1, 1))

    history = await uow.hutch_assignments.list_for_animal(farm.id, doe.id)
    first = next(a for a in history if a.hutch_id == h1.id)
    assert first.end_at == placed.start_at
    assert result.assignment.start_at >= first.end_at

    released = await release_animal(uow, farm.id, result.animal, date(2020, 1, 1))
    history = await uow.hutch_assignments.list_for_animal(farm.id, released.animal.id)
    assert all(a.end_at >= a.start_at for a in history)
