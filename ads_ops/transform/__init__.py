# =============================================================================
# ADS-OPS Transform Module
# =============================================================================
"""
Operation format transformation.

- resource_paths: resource name path segment -> entity type lexicon
- resource_names: entity type inference from resource_name strings
- shape_rules: entity type inference from create payload structure
- operation_format: native vs canonical shape detection
- normalize_operations: batch normalization to canonical shape
"""

from ads_ops.transform.errors import (
    InvalidOperationError,
    InvalidPayloadError,
    OperationFormatError,
    UnresolvedEntityError,
)
from ads_ops.transform.normalize_operations import normalize_operations
from ads_ops.transform.operation_format import (
    get_standard_operation_type,
    is_canonical_format,
)
from ads_ops.transform.resource_names import infer_entity_from_resource_name
from ads_ops.transform.shape_rules import infer_entity_from_create_resource

__all__ = [
    "InvalidOperationError",
    "InvalidPayloadError",
    "OperationFormatError",
    "UnresolvedEntityError",
    "get_standard_operation_type",
    "infer_entity_from_create_resource",
    "infer_entity_from_resource_name",
    "is_canonical_format",
    "normalize_operations",
]
