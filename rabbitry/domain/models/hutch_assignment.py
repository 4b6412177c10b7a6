from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class HutchAssignment:
    """One stay of an animal in a hutch. ``end_at is None`` marks the open stay."""

    id: UUID
    farm_id: UUID
    animal_id: UUID
    hutch_id: UUID
    hutch_label: str
    start_at: datetime
    purpose: str  # HousingPurpose
    end_at: datetime | None = None
    notes: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def open(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        hutch_id: UUID,
        hutch_label: str,
        purpose: str,
        *,
        start_at: datetime | None = None,
        notes: str | None = None,
    ) -> HutchAssignment:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            hutch_id=hutch_id,
            hutch_label=hutch_label,
            start_at=start_at or now,
            purpose=purpose,
            end_at=None,
            notes=notes or "",
            created_at=now,
        )

    @property
    def is_open(self) -> bool:
        return self.end_at is None
