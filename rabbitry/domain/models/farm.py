from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from rabbitry.domain.value_objects.capacity_policy import CapacityPolicy

SUPPORTED_CURRENCIES = frozenset(
    {"USD", "EUR", "GBP", "NGN", "KES", "GHS", "ZAR", "MXN", "COP", "INR"}
)

GESTATION_DAYS_RANGE = (28, 35)
PALPATION_DAYS_RANGE = (10, 20)
WEANING_DAYS_RANGE = (28, 60)

_BREED_CODE_RE = re.compile(r"^[A-Z]{2,4}$")


def is_valid_breed_code(code: str) -> bool:
    return bool(_BREED_CODE_RE.match(code))


def default_tag_prefix(farm_name: str) -> str:
    letters = "".join(ch for ch in farm_name if ch.isalpha())
    return letters[:2].upper() if len(letters) >= 2 else "SN"


@dataclass(slots=True)
class Breed:
    name: str
    code: str


@dataclass(slots=True)
class Farm:
    id: UUID
    owner_user_id: UUID
    name: str
    currency: str = "USD"
    timezone: str = "UTC"
    gestation_days: int = 31
    palpation_days: int = 14
    weaning_days: int = 35
    breeds: list[Breed] = field(default_factory=list)
    tag_prefix: str = "SN"
    capacity_policy: str = CapacityPolicy.SOFT.value
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        owner_user_id: UUID,
        name: str,
        *,
        currency: str = "USD",
        timezone_name: str = "UTC",
        gestation_days: int = 31,
        palpation_days: int = 14,
        weaning_days: int = 35,
        tag_prefix: str | None = None,
    ) -> Farm:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            owner_user_id=owner_user_id,
            name=name,
            currency=currency,
            timezone=timezone_name,
            gestation_days=gestation_days,
            palpation_days=palpation_days,
            weaning_days=weaning_days,
            breeds=[],
            tag_prefix=(tag_prefix or default_tag_prefix(name)).upper(),
            capacity_policy=CapacityPolicy.SOFT.value,
            created_at=now,
            updated_at=now,
        )

    def find_breed(self, code: str) -> Breed | None:
        code = code.strip().upper()
        for breed in self.breeds:
            if breed.code == code:
                return breed
        return None

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
