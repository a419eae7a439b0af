# =============================================================================
# ADS-OPS
# Mutation operation normalization for the Google Ads API
# =============================================================================
"""
ADS-OPS: normalizes mixed-format Google Ads mutation operations.

Operations arrive either in the API-native shape ({ create: {...} },
{ update: {...} }, { remove: "..." }) or in the canonical shape
({ entity, operation, resource }). Everything leaves in the canonical shape.
"""

from ads_ops.transform.normalize_operations import normalize_operations

__all__ = ["normalize_operations"]
