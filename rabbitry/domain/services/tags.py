from __future__ import annotations

DEFAULT_SEQUENCE_WIDTH = 4


def format_tag(
    prefix: str, breed_code: str, sequence: int, width: int = DEFAULT_SEQUENCE_WIDTH
) -> str:
    """Build a tag like ``SN-REX-0001``."""
    return f"{prefix.strip().upper()}-{breed_code.strip().upper()}-{sequence:0{width}d}"


def kit_tags(base_tag: str, count: int) -> list[str]:
    """Tags for a batch registered together: ``T`` alone, or ``T-1`` .. ``T-n``."""
    if count <= 1:
        return [base_tag]
    return [f"{base_tag}-{i}" for i in range(1, count + 1)]
