"""
Operation format normalization.

Converts standard Google Ads API format operations to the canonical
{ entity, operation, resource } format. Canonical operations pass through,
native ones are transformed and reported in the warnings list.

Entity type resolution, in order:
    1. resource_name (remove value, or the payload's resource_name field)
    2. payload structure (create only, see shape_rules)
    3. the operation's "_entity" field
"""

from collections.abc import Mapping, Sequence
from typing import Any, Iterable, Optional

from ads_ops.transform.errors import (
    InvalidOperationError,
    InvalidPayloadError,
    UnresolvedEntityError,
)
from ads_ops.transform.operation_format import (
    get_standard_operation_type,
    is_canonical_format,
)
from ads_ops.transform.resource_names import (
    RESOURCE_NAME_FIELD,
    infer_entity_from_resource_name,
)
from ads_ops.transform.shape_rules import infer_entity_from_create_resource

# =============================================================================
# CONFIGURATION
# =============================================================================

# Explicit entity hint, consulted only after inference fails
ENTITY_OVERRIDE_FIELD = "_entity"

# Entities that legitimately keep resource_name in CREATE operations.
# They use temporary resource IDs (-1, -2, ...) so siblings created in the
# same mutate request can reference them (e.g. budget + campaign).
ENTITIES_REQUIRING_RESOURCE_NAME_IN_CREATE = frozenset({
    "campaign_budget",
})


# =============================================================================
# SINGLE OPERATION
# =============================================================================


def _entity_override(operation: Mapping) -> Optional[str]:
    value = operation.get(ENTITY_OVERRIDE_FIELD)
    if isinstance(value, str) and value:
        return value
    return None


def _without_resource_name(resource: Mapping) -> dict:
    return {k: v for k, v in resource.items() if k != RESOURCE_NAME_FIELD}


def transform_standard_operation(
    operation: Any,
    index: int,
    exempt_entities: Iterable[str] = ENTITIES_REQUIRING_RESOURCE_NAME_IN_CREATE,
) -> dict:
    """Transform one native-format operation to canonical format.

    Args:
        operation: Native operation, e.g. {"remove": "customers/1/labels/2"}
        index: Position in the batch (used in error messages)
        exempt_entities: Entity types whose create payload keeps resource_name

    Returns:
        {"entity": ..., "operation": ..., "resource": ...}

    Raises:
        InvalidOperationError: no create/update/remove key
        InvalidPayloadError: remove value not a string, create/update not an object
        UnresolvedEntityError: entity type could not be determined
    """
    op_type = get_standard_operation_type(operation)
    if op_type is None:
        raise InvalidOperationError(index)

    entity = None

    if op_type == "remove":
        # Remove operations carry the resource_name string itself
        resource = operation["remove"]
        if not isinstance(resource, str):
            raise InvalidPayloadError(index, op_type)
        entity = infer_entity_from_resource_name(resource)
    else:
        resource = operation[op_type]
        if not isinstance(resource, Mapping):
            raise InvalidPayloadError(index, op_type)

        if resource.get(RESOURCE_NAME_FIELD):
            entity = infer_entity_from_resource_name(resource[RESOURCE_NAME_FIELD])

        if not entity and op_type == "create":
            entity = infer_entity_from_create_resource(resource)

    if not entity:
        entity = _entity_override(operation)

    if not entity:
        raise UnresolvedEntityError(index, op_type)

    # The API assigns resource names on create and rejects caller-supplied
    # ones, except for entities created with temporary IDs.
    if op_type == "create" and resource.get(RESOURCE_NAME_FIELD):
        if entity not in exempt_entities:
            resource = _without_resource_name(resource)

    return {
        "entity": entity,
        "operation": op_type,
        "resource": resource,
    }


def _repair_canonical_remove(operation: Mapping) -> Mapping:
    """Canonical remove ops must carry the resource_name string, not an object."""
    resource = operation.get("resource")
    if operation.get("operation") == "remove" and isinstance(resource, Mapping) and resource:
        return {**operation, "resource": resource.get(RESOURCE_NAME_FIELD) or resource}
    return operation


# =============================================================================
# BATCH
# =============================================================================


def normalize_operations(
    operations: Sequence,
    *,
    exempt_entities: Optional[Iterable[str]] = None,
) -> dict:
    """Normalize a batch of operations (mixed formats allowed) to canonical format.

    Args:
        operations: Operations in native and/or canonical format
        exempt_entities: Extra entity types whose create payload keeps
            resource_name, on top of ENTITIES_REQUIRING_RESOURCE_NAME_IN_CREATE

    Returns:
        {"operations": [...], "warnings": [...]}. Order is preserved; one
        warning per transformed (native) operation.

    Raises:
        OperationFormatError: on the first operation that cannot be
            normalized. Nothing is returned for the rest of the batch.
    """
    if isinstance(operations, (str, bytes)) or not isinstance(operations, Sequence):
        raise TypeError("operations must be a list of operation objects")

    exempt = ENTITIES_REQUIRING_RESOURCE_NAME_IN_CREATE
    if exempt_entities:
        exempt = exempt | frozenset(exempt_entities)

    normalized_ops = []
    warnings = []

    for i, op in enumerate(operations):
        if is_canonical_format(op):
            normalized_ops.append(_repair_canonical_remove(op))
            continue

        transformed = transform_standard_operation(op, i, exempt)
        normalized_ops.append(transformed)
        warnings.append(
            f"Operation {i}: Transformed from standard format (entity: {transformed['entity']})"
        )

    return {"operations": normalized_ops, "warnings": warnings}
