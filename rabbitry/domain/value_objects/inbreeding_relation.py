from __future__ import annotations

from enum import Enum


class InbreedingRelation(str, Enum):
    NO_RELATION_FOUND = "NoRelationFound"
    SHARED_FATHER = "SharedFather"
    SHARED_MOTHER = "SharedMother"
    FULL_SIBLINGS = "FullSiblings"

    @property
    def is_related(self) -> bool:
        return self is not InbreedingRelation.NO_RELATION_FOUND
