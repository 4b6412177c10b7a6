from __future__ import annotations

import asyncio
import copy
from dataclasses import dataclass, field
from uuid import UUID

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


@dataclass
class MemoryState:
    farms: dict[UUID, Farm] = field(default_factory=dict)
    tag_counters: dict[UUID, int] = field(default_factory=dict)
    animals: dict[UUID, Animal] = field(default_factory=dict)
    hutches: dict[UUID, Hutch] = field(default_factory=dict)
    hutch_assignments: dict[UUID, HutchAssignment] = field(default_factory=dict)
    matings: dict[UUID, Mating] = field(default_factory=dict)
    deliveries: dict[UUID, Delivery] = field(default_factory=dict)
    transactions: dict[UUID, Transaction] = field(default_factory=dict)
    sales: dict[UUID, Sale] = field(default_factory=dict)
    customers: dict[UUID, Customer] = field(default_factory=dict)
    medical_records: dict[UUID, MedicalRecord] = field(default_factory=dict)
    weights: dict[UUID, WeightRecord] = field(default_factory=dict)

    def snapshot(self) -> MemoryState:
        return copy.deepcopy(self)


class InMemoryStore:
    """Process-local storage used for demo mode and tests.

    Units of work run one at a time under ``lock``, so the store behaves like a
    single serializing actor: each one sees the committed state and replaces it
    wholesale on commit.
    """

    def __init__(self) -> None:
        self.state = MemoryState()
        self.lock = asyncio.Lock()
