# =============================================================================
# core/models/common.py - Shared Field Normalizers
# =============================================================================
# Form input arrives from the mobile app untrimmed. These helpers are used as
# "before" validators so length constraints apply to the trimmed value.
# =============================================================================

from typing import Any


def strip_text(value: Any) -> Any:
    """Trim surrounding whitespace from strings; pass anything else through."""
    if isinstance(value, str):
        return value.strip()
    return value


def blank_to_none(value: Any) -> Any:
    """Trim strings and turn empty ones into None (clears optional fields)."""
    value = strip_text(value)
    if value == "":
        return None
    return value
