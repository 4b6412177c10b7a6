from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from rabbitry.domain.value_objects.inbreeding_relation import InbreedingRelation


class HasParentage(Protocol):
    sire_tag: str | None
    doe_tag: str | None


@dataclass(frozen=True, slots=True)
class Parentage:
    sire_tag: str | None = None
    doe_tag: str | None = None


def _same_parent(a: str | None, b: str | None) -> bool:
    a = (a or "").strip()
    b = (b or "").strip()
    # Two unknown parents are not a shared parent
    return bool(a) and a == b


def detect_inbreeding(a: HasParentage, b: HasParentage) -> InbreedingRelation:
    shared_father = _same_parent(a.sire_tag, b.sire_tag)
    shared_mother = _same_parent(a.doe_tag, b.doe_tag)
    if shared_father and shared_mother:
        return InbreedingRelation.FULL_SIBLINGS
    if shared_father:
        return InbreedingRelation.SHARED_FATHER
    if shared_mother:
        return InbreedingRelation.SHARED_MOTHER
    return InbreedingRelation.NO_RELATION_FOUND
