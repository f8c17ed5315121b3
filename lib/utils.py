# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Input parsing helpers shared by the services. They return None for bad
# input instead of raising, so callers decide which API error to raise.
# =============================================================================

import math
from uuid import UUID


# =============================================================================
# Identifier Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str | None:
    """
    Normalize a storage identifier to canonical string form.

    Returns:
        The lower-case hyphenated UUID string, or None if malformed

    Example:
        normalize_uuid("550E8400E29B41D4A716446655440000")  # "550e8400-e29b-41d4-a716-446655440000"
        normalize_uuid("not-an-id")  # None
    """
    if isinstance(value, UUID):
        return str(value)
    try:
        return str(UUID(str(value)))
    except (ValueError, AttributeError):
        return None


# =============================================================================
# Coordinate Utilities
# =============================================================================

def parse_coordinate(value: str | float | None) -> float | None:
    """
    Parse a latitude or longitude query value.

    Returns:
        The value as a float, or None if missing, blank, non-numeric,
        infinite or NaN
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None
