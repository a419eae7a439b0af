"""
Operation shape detection.

Native (Google Ads API) shape:
    { "create": {...} } | { "update": {...} } | { "remove": "customers/..." }

Canonical shape:
    { "entity": "campaign", "operation": "create", "resource": {...} }
"""

from collections.abc import Mapping
from typing import Any, Optional

SHAPE_CANONICAL = "canonical"
SHAPE_NATIVE = "native"

# Checked in this order; the first key present wins
STANDARD_OPERATION_TYPES = ("create", "update", "remove")


def is_canonical_format(operation: Any) -> bool:
    """Check if operation is already in canonical format.

    Requires a string "entity" and a "resource" key (its value may be None).
    """
    return bool(
        isinstance(operation, Mapping)
        and isinstance(operation.get("entity"), str)
        and "resource" in operation
    )


def get_standard_operation_type(operation: Any) -> Optional[str]:
    """Return 'create', 'update', 'remove', or None for a native operation."""
    if not isinstance(operation, Mapping):
        return None
    for op_type in STANDARD_OPERATION_TYPES:
        if op_type in operation:
            return op_type
    return None


def classify_shape(operation: Any) -> str:
    """Return SHAPE_CANONICAL or SHAPE_NATIVE.

    Anything not canonical is treated as native; whether it carries a
    recognized verb is decided by get_standard_operation_type().
    """
    if is_canonical_format(operation):
        return SHAPE_CANONICAL
    return SHAPE_NATIVE
