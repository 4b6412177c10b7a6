from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from rabbitry.application.errors import AnimalNotFound, ValidationError
from rabbitry.application.use_cases.disposition import record_mortality, record_sale
from rabbitry.application.use_cases.housing.ledger import move_animal


async def test_sale_of_two_animals_writes_one_transaction(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    r1 = await make_animal(tag="R1", hutch_id=h1.id)
    r2 = await make_animal(tag="R2", hutch_id=h1.id)

    result = await record_sale.execute(
        uow,
        farm.id,
        record_sale.RecordSaleInput(
            animal_ids=[r1.id, r2.id],
            amount=Decimal("50.00"),
            date=date(2024, 3, 1),
            buyer_name="Acme",
        ),
    )

    assert {a.status for a in result.animals} == {"Sold"}
    assert all(a.current_hutch_id is None for a in result.animals)
    assert (await uow.hutches.get(farm.id, h1.id)).current_occupancy == 0
    transactions = await uow.transactions.list(farm.id)
    assert len(transactions) == 1
    income = transactions[0]
    assert income.type == "Income"
    assert income.category == "Sale"
    assert income.amount == Decimal("50.00")
    assert sorted(income.related_tags) == ["R1", "R2"]
    assert income.related_id == result.sale.id
    assert result.sale.buyer_name == "Acme"
    assert sorted(result.sale.animal_tags) == ["R1", "R2"]


async def test_sale_rejects_unsaleable_animal_without_writing(uow, farm, make_animal):
    healthy = await make_animal(tag="R1")
    dead = await make_animal(tag="R2")
    await record_mortality.execute(
        uow,
        farm.id,
        dead.id,
        record_mortality.RecordMortalityInput(status="Deceased-Natural", date=date(2024, 2, 1)),
    )

    with pytest.raises(ValidationError):
        await record_sale.execute(
            uow,
            farm.id,
            record_sale.RecordSaleInput(
                animal_ids=[healthy.id, dead.id],
                amount=Decimal("20"),
                date=date(2024, 3, 1),
                buyer_name="Acme",
            ),
        )

    assert (await uow.animals.get(farm.id, healthy.id)).status == "Active"
    assert await uow.sales.list(farm.id) == []


async def test_sale_rejects_duplicates_and_unknown_animals(uow, farm, make_animal):
    r1 = await make_animal(tag="R1")
    with pytest.raises(ValidationError):
        await record_sale.execute(
            uow,
            farm.id,
            record_sale.RecordSaleInput(
                animal_ids=[r1.id, r1.id],
                amount=Decimal("10"),
                date=date(2024, 3, 1),
                buyer_name="Acme",
            ),
        )
    with pytest.raises(AnimalNotFound):
        await record_sale.execute(
            uow,
            farm.id,
            record_sale.RecordSaleInput(
                animal_ids=[uuid4()],
                amount=Decimal("10"),
                date=date(2024, 3, 1),
                buyer_name="Acme",
            ),
        )


async def test_sale_to_new_customer_updates_totals(uow, farm, make_animal):
    r1 = await make_animal(tag="R1")
    result = await record_sale.execute(
        uow,
        farm.id,
        record_sale.RecordSaleInput(
            animal_ids=[r1.id],
            amount=Decimal("30.00"),
            date=date(2024, 4, 2),
            new_customer=record_sale.NewCustomer(name="Acme", phone="555-0100"),
        ),
    )

    assert result.customer is not None
    assert result.customer.total_spent == Decimal("30.00")
    assert result.customer.last_purchase_date == date(2024, 4, 2)
    assert result.sale.buyer_name == "Acme"
    assert result.sale.customer_id == result.customer.id


async def test_natural_death_releases_hutch_and_notes_event(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    doe = await make_animal(hutch_id=h1.id, notes="Calm doe")

    result = await record_mortality.execute(
        uow,
        farm.id,
        doe.id,
        record_mortality.RecordMortalityInput(
            status="Deceased-Natural", date=date(2024, 5, 6), notes="Heat stress"
        ),
    )

    assert result.transaction is None
    assert result.animal.status == "Deceased-Natural"
    assert result.animal.current_hutch_id is None
    assert result.animal.notes == "Calm doe\n[Deceased-Natural on 2024-05-06]: Heat stress"
    assert (await uow.hutches.get(farm.id, h1.id)).current_occupancy == 0
    assert await uow.hutch_assignments.list_open_for_animal(farm.id, doe.id) == []


async def test_processed_with_amount_books_income(uow, farm, make_animal):
    buck = await make_animal(sex="Male", tag="B1")
    result = await record_mortality.execute(
        uow,
        farm.id,
        buck.id,
        record_mortality.RecordMortalityInput(
            status="Deceased-Processed", date=date(2024, 5, 6), sale_amount=Decimal("12.50")
        ),
    )

    assert result.transaction is not None
    assert result.transaction.type == "Income"
    assert result.transaction.amount == Decimal("12.50")
    assert result.transaction.related_tags == ["B1"]


async def test_mortality_is_terminal(uow, farm, make_animal):
    doe = await make_animal()
    payload = record_mortality.RecordMortalityInput(
        status="Deceased-Natural", date=date(2024, 1, 1)
    )
    await record_mortality.execute(uow, farm.id, doe.id, payload)
    with pytest.raises(ValidationError):
        await record_mortality.execute(uow, farm.id, doe.id, payload)
    with pytest.raises(ValidationError):
        await record_mortality.execute(
            uow,
            farm.id,
            doe.id,
            record_mortality.RecordMortalityInput(status="Sold", date=date(2024, 1, 1)),
        )


async def test_same_day_mortality_closes_stay_after_it_opened(uow, farm, make_hutch, make_animal):
    h1 = await make_hutch(1)
    h2 = await make_hutch(2)
    doe = await make_animal(hutch_id=h1.id)
    moved = await move_animal(uow, farm.id, doe, h2.id)
    today = moved.assignment.start_at.date()

    await record_mortality.execute(
        uow,
        farm.id,
        doe.id,
        record_mortality.RecordMortalityInput(status="Deceased-Natural", date=today),
    )

    history = await uow.hutch_assignments.list_for_animal(farm.id, doe.id)
    assert len(history) == 2
    assert all(a.end_at is not None and a.end_at >= a.start_at for a in history)
