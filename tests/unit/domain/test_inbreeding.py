from __future__ import annotations

import pytest

from rabbitry.domain.services.inbreeding import Parentage, detect_inbreeding
from rabbitry.domain.value_objects.inbreeding_relation import InbreedingRelation


@pytest.mark.parametrize(
    "first, second, expected",
    [
        (Parentage("S1", "D1"), Parentage("S1", "D1"), InbreedingRelation.FULL_SIBLINGS),
        (Parentage("S1", "D1"), Parentage("S1", "D2"), InbreedingRelation.SHARED_FATHER),
        (Parentage("S1", "D1"), Parentage("S2", "D1"), InbreedingRelation.SHARED_MOTHER),
        (Parentage("S1", "D1"), Parentage("S2", "D2"), InbreedingRelation.NO_RELATION_FOUND),
        (Parentage(None, None), Parentage(None, None), InbreedingRelation.NO_RELATION_FOUND),
        (Parentage("", "D1"), Parentage("", "D2"), InbreedingRelation.NO_RELATION_FOUND),
        (Parentage("  ", "D1"), Parentage(None, "D1"), InbreedingRelation.SHARED_MOTHER),
        (Parentage(" S1 ", None), Parentage("S1", None), InbreedingRelation.SHARED_FATHER),
    ],
)
def test_relation_truth_table(first, second, expected):
    assert detect_inbreeding(first, second) is expected


def test_relation_is_symmetric():
    a = Parentage("S1", "D1")
    b = Parentage("S1", "D9")
    assert detect_inbreeding(a, b) is detect_inbreeding(b, a)


def test_only_no_relation_is_unrelated():
    assert not InbreedingRelation.NO_RELATION_FOUND.is_related
    assert InbreedingRelation.FULL_SIBLINGS.is_related
    assert InbreedingRelation.SHARED_FATHER.is_related
