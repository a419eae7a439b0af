"""
Entity type inference from create payload structure.

Create payloads carry no resource_name, so the entity type is reconstructed
from which fields are present. Shapes overlap (a negative keyword can hang off
an ad group or a campaign, an ad group and a campaign criterion both reference
a campaign), so the rules are evaluated in order and the first match wins.

Rule order:
    R1  ad_group + (keyword | negative | placement)              -> ad_group_criterion
    R2  campaign + (keyword | negative), no advertising_channel_type
                                                                 -> campaign_criterion
    R3  shared_set                                               -> shared_criterion
    R4  name + text_label                                        -> label
    R5  campaign + name, no keyword, no negative                 -> ad_group
    R6  advertising_channel_type                                 -> campaign
    R7  amount_micros, no cpc_bid_micros                         -> campaign_budget
    R8  any *_asset field                                        -> asset
    R9  type + category                                          -> conversion_action
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional

# =============================================================================
# FIELD PREDICATES
# =============================================================================


def _has(*fields: str) -> Callable[[set], bool]:
    return lambda keys: all(f in keys for f in fields)


def _has_any(*fields: str) -> Callable[[set], bool]:
    return lambda keys: any(f in keys for f in fields)


def _lacks(*fields: str) -> Callable[[set], bool]:
    return lambda keys: not any(f in keys for f in fields)


def _all_of(*predicates: Callable[[set], bool]) -> Callable[[set], bool]:
    return lambda keys: all(p(keys) for p in predicates)


def _has_suffix(suffix: str) -> Callable[[set], bool]:
    return lambda keys: any(isinstance(k, str) and k.endswith(suffix) for k in keys)


# =============================================================================
# SHAPE RULES (ORDER MATTERS)
# =============================================================================

SHAPE_RULES = (
    ("R1", _all_of(_has("ad_group"), _has_any("keyword", "negative", "placement")), "ad_group_criterion"),
    # advertising_channel_type marks a campaign that happens to carry keyword-like fields
    ("R2", _all_of(_has("campaign"), _has_any("keyword", "negative"), _lacks("advertising_channel_type")), "campaign_criterion"),
    ("R3", _has("shared_set"), "shared_criterion"),
    ("R4", _has("name", "text_label"), "label"),
    ("R5", _all_of(_has("campaign", "name"), _lacks("keyword", "negative")), "ad_group"),
    ("R6", _has("advertising_channel_type"), "campaign"),
    # cpc_bid_micros belongs to bidding payloads, not budgets
    ("R7", _all_of(_has("amount_micros"), _lacks("cpc_bid_micros")), "campaign_budget"),
    ("R8", _has_suffix("_asset"), "asset"),
    ("R9", _has("type", "category"), "conversion_action"),
)


def match_shape_rule(resource: Any) -> Optional[tuple]:
    """Return the first (rule_id, entity) matching the payload, or None."""
    if not isinstance(resource, Mapping):
        return None

    keys = set(resource.keys())
    for rule_id, predicate, entity in SHAPE_RULES:
        if predicate(keys):
            return rule_id, entity
    return None


def infer_entity_from_create_resource(resource: Any) -> Optional[str]:
    """Infer entity type from the fields of a create payload.

    Args:
        resource: The resource being created (field name -> value)

    Returns:
        Entity type, or None if no rule matches or the input is not a mapping.
    """
    match = match_shape_rule(resource)
    if match is None:
        return None
    return match[1]
