"""
Entity type inference from resource_name strings.
"""

from typing import Any, Optional

from ads_ops.transform.resource_paths import entity_for_path_segment

# Field that carries the resource_name inside create/update payloads
RESOURCE_NAME_FIELD = "resource_name"


def infer_entity_from_resource_name(resource_name: Any) -> Optional[str]:
    """Extract entity type from a resource_name.

    Args:
        resource_name: e.g. "customers/123/campaigns/456"

    Returns:
        Entity type (e.g. "campaign"), or None if the value is not a string,
        is not rooted at customers/, or names an unknown collection.
    """
    if not resource_name or not isinstance(resource_name, str):
        return None

    # customers/{customer_id}/{resource_type}/{resource_id}
    parts = resource_name.split("/")
    if len(parts) >= 3 and parts[0] == "customers":
        return entity_for_path_segment(parts[2])
    return None
