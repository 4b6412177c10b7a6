from __future__ import annotations

import copy
from datetime import date, datetime, timezone
from typing import Any, Callable
from uuid import UUID

from rabbitry.application.errors import ConflictError
from rabbitry.domain.models.animal import Animal
from rabbitry.domain.models.customer import Customer
from rabbitry.domain.models.delivery import Delivery
from rabbitry.domain.models.farm import Farm
from rabbitry.domain.models.hutch import Hutch
from rabbitry.domain.models.hutch_assignment import HutchAssignment
from rabbitry.domain.models.mating import Mating
from rabbitry.domain.models.medical_record import MedicalRecord
from rabbitry.domain.models.sale import Sale
from rabbitry.domain.models.transaction import Transaction
from rabbitry.domain.models.weight_record import WeightRecord
from rabbitry.domain.ports.hutches_repo import HutchesRepo
from rabbitry.infrastructure.memory.store import MemoryState


class _Collection:
    """Base for repositories over one dict of the staged state.

    Objects are copied in and out so callers only change stored data through
    ``add``/``save``/``update``, as with the SQL repositories.
    """

    collection: str

    def __init__(self, state: Callable[[], MemoryState]) -> None:
        self._state = state

    @property
    def _items(self) -> dict[UUID, Any]:
        return getattr(self._state(), self.collection)

    def _put(self, obj: Any) -> Any:
        self._items[obj.id] = copy.deepcopy(obj)
        return copy.deepcopy(obj)

    def _get(self, farm_id: UUID, obj_id: UUID) -> Any | None:
        obj = self._items.get(obj_id)
        if obj is None or obj.farm_id != farm_id:
            return None
        return copy.deepcopy(obj)

    def _filter(self, predicate: Callable[[Any], bool]) -> list[Any]:
        return [copy.deepcopy(obj) for obj in self._items.values() if predicate(obj)]


class InMemoryFarmsRepository(_Collection):
    collection = "farms"

    async def add(self, farm: Farm) -> Farm:
        if any(f.owner_user_id == farm.owner_user_id for f in self._items.values()):
            raise ConflictError("Owner already has a farm")
        return self._put(farm)

    async def get(self, farm_id: UUID) -> Farm | None:
        farm = self._items.get(farm_id)
        return copy.deepcopy(farm) if farm else None

    async def get_by_owner(self, owner_user_id: UUID) -> Farm | None:
        found = self._filter(lambda f: f.owner_user_id == owner_user_id)
        return found[0] if found else None

    async def save(self, farm: Farm) -> Farm:
        return self._put(farm)


class InMemoryTagCountersRepository:
    def __init__(self, state: Callable[[], MemoryState]) -> None:
        self._state = state

    async def next_sequence(self, farm_id: UUID) -> int:
        counters = self._state().tag_counters
        counters[farm_id] = counters.get(farm_id, 0) + 1
        return counters[farm_id]

    async def peek_sequence(self, farm_id: UUID) -> int:
        return self._state().tag_counters.get(farm_id, 0) + 1


def _matches_search(animal: Animal, search: str | None) -> bool:
    if not search:
        return True
    needle = search.strip().lower()
    haystack = (animal.tag, animal.name or "", animal.breed or "")
    return any(needle in value.lower() for value in haystack)


class InMemoryAnimalsRepository(_Collection):
    collection = "animals"

    def _tag_taken(self, farm_id: UUID, tag: str, exclude: UUID | None = None) -> bool:
        return any(
            a.farm_id == farm_id and a.tag == tag and a.id != exclude
            for a in self._items.values()
        )

    async def add(self, animal: Animal) -> Animal:
        if self._tag_taken(animal.farm_id, animal.tag):
            raise ConflictError("Animal tag already exists for farm")
        return self._put(animal)

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None:
        return self._get(farm_id, animal_id)

    async def get_by_tag(self, farm_id: UUID, tag: str) -> Animal | None:
        found = self._filter(lambda a: a.farm_id == farm_id and a.tag == tag)
        return found[0] if found else None

    def _select(
        self,
        farm_id: UUID,
        statuses: list[str] | None,
        sex: str | None,
        search: str | None,
    ) -> list[Animal]:
        items = self._filter(
            lambda a: a.farm_id == farm_id
            and (statuses is None or a.status in statuses)
            and (sex is None or a.sex == sex)
            and _matches_search(a, search)
        )
        items.sort(key=lambda a: a.created_at, reverse=True)
        return items

    async def list(
        self,
        farm_id: UUID,
        *,
        statuses: list[str] | None = None,
        sex: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Animal]:
        items = self._select(farm_id, statuses, sex, search)[offset:]
        return items[:limit] if limit is not None else items

    async def count(
        self,
        farm_id: UUID,
        *,
        statuses: list[str] | None = None,
        sex: str | None = None,
        search: str | None = None,
    ) -> int:
        return len(self._select(farm_id, statuses, sex, search))

    async def list_by_parent(
        self, farm_id: UUID, *, sire_tag: str | None = None, doe_tag: str | None = None
    ) -> list[Animal]:
        return self._filter(
            lambda a: a.farm_id == farm_id
            and (sire_tag is None or a.sire_tag == sire_tag)
            and (doe_tag is None or a.doe_tag == doe_tag)
        )

    async def save(self, animal: Animal) -> Animal:
        if self._tag_taken(animal.farm_id, animal.tag, exclude=animal.id):
            raise ConflictError("Animal tag already exists for farm")
        return self._put(animal)

    async def update(
        self, farm_id: UUID, animal_id: UUID, data: dict, expected_version: int
    ) -> Animal | None:
        current = self._get(farm_id, animal_id)
        if current is None or current.version != expected_version:
            return None
        for key, value in data.items():
            setattr(current, key, value)
        current.bump_version()
        return await self.save(current)

    async def count_by_hutch(self, farm_id: UUID) -> dict[UUID, int]:
        counts: dict[UUID, int] = {}
        for animal in self._items.values():
            if animal.farm_id == farm_id and animal.current_hutch_id is not None:
                counts[animal.current_hutch_id] = counts.get(animal.current_hutch_id, 0) + 1
        return counts


class InMemoryHutchesRepository(_Collection, HutchesRepo):
    collection = "hutches"

    async def add(self, hutch: Hutch) -> Hutch:
        if await self.get_by_number(hutch.farm_id, hutch.number):
            raise ConflictError("Hutch number already exists for farm")
        return self._put(hutch)

    async def get(self, farm_id: UUID, hutch_id: UUID) -> Hutch | None:
        return self._get(farm_id, hutch_id)

    async def get_by_number(self, farm_id: UUID, number: int) -> Hutch | None:
        found = self._filter(lambda h: h.farm_id == farm_id and h.number == number)
        return found[0] if found else None

    async def list_for_farm(self, farm_id: UUID) -> list[Hutch]:
        items = self._filter(lambda h: h.farm_id == farm_id)
        items.sort(key=lambda h: h.number)
        return items

    async def update(self, farm_id: UUID, hutch_id: UUID, data: dict) -> Hutch | None:
        hutch = self._get(farm_id, hutch_id)
        if hutch is None:
            return None
        for key, value in data.items():
            setattr(hutch, key, value)
        hutch.updated_at = datetime.now(timezone.utc)
        return self._put(hutch)

    async def delete(self, farm_id: UUID, hutch_id: UUID) -> bool:
        if self._get(farm_id, hutch_id) is None:
            return False
        del self._items[hutch_id]
        return True

    async def increment_occupancy(self, farm_id: UUID, hutch_id: UUID) -> Hutch | None:
        hutch = self._items.get(hutch_id)
        if hutch is None or hutch.farm_id != farm_id:
            return None
        hutch.current_occupancy += 1
        return copy.deepcopy(hutch)

    async def decrement_occupancy(self, farm_id: UUID, hutch_id: UUID) -> Hutch | None:
        hutch = self._items.get(hutch_id)
        if hutch is None or hutch.farm_id != farm_id:
            return None
        hutch.current_occupancy = max(0, hutch.current_occupancy - 1)
        return copy.deepcopy(hutch)

    async def set_occupancy(self, farm_id: UUID, hutch_id: UUID, value: int) -> Hutch | None:
        return await self.update(farm_id, hutch_id, {"current_occupancy": max(0, value)})


class InMemoryHutchAssignmentsRepository(_Collection):
    collection = "hutch_assignments"

    async def add(self, assignment: HutchAssignment) -> HutchAssignment:
        return self._put(assignment)

    async def list_open_for_animal(self, farm_id: UUID, animal_id: UUID) -> list[HutchAssignment]:
        return self._filter(
            lambda r: r.farm_id == farm_id and r.animal_id == animal_id and r.end_at is None
        )

    async def close_open_for_animal(self, farm_id: UUID, animal_id: UUID, end_at: datetime) -> int:
        closed = 0
        for record in self._items.values():
            if record.farm_id == farm_id and record.animal_id == animal_id and record.end_at is None:
                record.end_at = end_at
                closed += 1
        return closed

    async def list_for_animal(self, farm_id: UUID, animal_id: UUID) -> list[HutchAssignment]:
        items = self._filter(lambda r: r.farm_id == farm_id and r.animal_id == animal_id)
        items.sort(key=lambda r: r.start_at, reverse=True)
        return items

    async def list_for_hutch(self, farm_id: UUID, hutch_id: UUID) -> list[HutchAssignment]:
        items = self._filter(lambda r: r.farm_id == farm_id and r.hutch_id == hutch_id)
        items.sort(key=lambda r: r.start_at, reverse=True)
        return items

    async def list_for_farm(self, farm_id: UUID) -> list[HutchAssignment]:
        items = self._filter(lambda r: r.farm_id == farm_id)
        items.sort(key=lambda r: r.start_at)
        return items


class InMemoryMatingsRepository(_Collection):
    collection = "matings"

    async def add(self, mating: Mating) -> Mating:
        return self._put(mating)

    async def get(self, farm_id: UUID, mating_id: UUID) -> Mating | None:
        return self._get(farm_id, mating_id)

    async def save(self, mating: Mating) -> Mating:
        return self._put(mating)

    async def list(
        self,
        farm_id: UUID,
        *,
        status: str | None = None,
        doe_tag: str | None = None,
        sire_tag: str | None = None,
    ) -> list[Mating]:
        items = self._filter(
            lambda m: m.farm_id == farm_id
            and (status is None or m.status == status)
            and (doe_tag is None or m.doe_tag == doe_tag)
            and (sire_tag is None or m.sire_tag == sire_tag)
        )
        items.sort(key=lambda m: m.mating_date, reverse=True)
        return items


class InMemoryDeliveriesRepository(_Collection):
    collection = "deliveries"

    async def add(self, delivery: Delivery) -> Delivery:
        return self._put(delivery)

    async def get(self, farm_id: UUID, delivery_id: UUID) -> Delivery | None:
        return self._get(farm_id, delivery_id)

    async def get_by_mating(self, farm_id: UUID, mating_id: UUID) -> Delivery | None:
        found = self._filter(lambda d: d.farm_id == farm_id and d.mating_id == mating_id)
        return found[0] if found else None

    async def save(self, delivery: Delivery) -> Delivery:
        return self._put(delivery)

    async def list(self, farm_id: UUID) -> list[Delivery]:
        items = self._filter(lambda d: d.farm_id == farm_id)
        items.sort(key=lambda d: d.delivery_date, reverse=True)
        return items


class InMemoryTransactionsRepository(_Collection):
    collection = "transactions"

    async def add(self, transaction: Transaction) -> Transaction:
        return self._put(transaction)

    async def list(
        self,
        farm_id: UUID,
        *,
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Transaction]:
        items = self._filter(
            lambda t: t.farm_id == farm_id
            and (type is None or t.type == type)
            and (date_from is None or t.date >= date_from)
            and (date_to is None or t.date <= date_to)
        )
        items.sort(key=lambda t: (t.date, t.created_at), reverse=True)
        return items


class InMemorySalesRepository(_Collection):
    collection = "sales"

    async def add(self, sale: Sale) -> Sale:
        return self._put(sale)

    async def list(self, farm_id: UUID) -> list[Sale]:
        items = self._filter(lambda s: s.farm_id == farm_id)
        items.sort(key=lambda s: s.date, reverse=True)
        return items


class InMemoryCustomersRepository(_Collection):
    collection = "customers"

    async def add(self, customer: Customer) -> Customer:
        return self._put(customer)

    async def get(self, farm_id: UUID, customer_id: UUID) -> Customer | None:
        return self._get(farm_id, customer_id)

    async def save(self, customer: Customer) -> Customer:
        return self._put(customer)

    async def list(self, farm_id: UUID) -> list[Customer]:
        items = self._filter(lambda c: c.farm_id == farm_id)
        items.sort(key=lambda c: c.total_spent, reverse=True)
        return items


class InMemoryMedicalRecordsRepository(_Collection):
    collection = "medical_records"

    async def add(self, record: MedicalRecord) -> MedicalRecord:
        return self._put(record)

    async def list(self, farm_id: UUID, *, animal_id: UUID | None = None) -> list[MedicalRecord]:
        items = self._filter(
            lambda r: r.farm_id == farm_id and (animal_id is None or r.animal_id == animal_id)
        )
        items.sort(key=lambda r: r.date, reverse=True)
        return items


class InMemoryWeightsRepository(_Collection):
    collection = "weights"

    async def add(self, record: WeightRecord) -> WeightRecord:
        return self._put(record)

    async def list(self, farm_id: UUID, *, animal_id: UUID | None = None) -> list[WeightRecord]:
        items = self._filter(
            lambda r: r.farm_id == farm_id and (animal_id is None or r.animal_id == animal_id)
        )
        items.sort(key=lambda r: r.date)
        return items
