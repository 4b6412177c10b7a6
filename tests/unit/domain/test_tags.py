from __future__ import annotations

from rabbitry.domain.models.farm import default_tag_prefix, is_valid_breed_code
from rabbitry.domain.services.tags import format_tag, kit_tags


def test_format_tag_pads_sequence():
    assert format_tag("SN", "REX", 1) == "SN-REX-0001"
    assert format_tag("sn", " nz ", 42) == "SN-NZ-0042"


def test_format_tag_keeps_wide_sequences():
    assert format_tag("SN", "REX", 12345) == "SN-REX-12345"
    assert format_tag("SN", "REX", 7, width=3) == "SN-REX-007"


def test_kit_tags_for_single_and_batch():
    assert kit_tags("L1", 1) == ["L1"]
    assert kit_tags("L1", 3) == ["L1-1", "L1-2", "L1-3"]


def test_breed_code_shape():
    assert is_valid_breed_code("REX")
    assert is_valid_breed_code("NZ")
    assert not is_valid_breed_code("R")
    assert not is_valid_breed_code("REXES")
    assert not is_valid_breed_code("RE1")


def test_default_prefix_from_farm_name():
    assert default_tag_prefix("Sunny Farm") == "SU"
    assert default_tag_prefix("7") == "SN"
