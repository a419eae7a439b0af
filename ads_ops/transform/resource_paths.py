"""
Resource name path segments -> entity types.

Google Ads resource names look like customers/{customer_id}/{collection}/{id}.
The collection segment (camelCase plural) identifies the entity type.
"""

from typing import Optional

# =============================================================================
# ENTITY TYPES
# =============================================================================

ENTITY_KINDS = frozenset({
    "campaign",
    "ad_group",
    "ad_group_criterion",
    "campaign_criterion",
    "label",
    "shared_set",
    "shared_criterion",
    "campaign_budget",
    "bidding_strategy",
    "ad_group_ad",
    "asset",
    "conversion_action",
    "customer_negative_criterion",
    "campaign_label",
    "ad_group_label",
    "customer_label",
    "keyword_plan_campaign",
    "keyword_plan_ad_group",
    "keyword_plan_ad_group_keyword",
    "extension_feed_item",
    "campaign_extension_setting",
    "ad_group_extension_setting",
    "remarketing_action",
    "user_list",
})

# =============================================================================
# PATH SEGMENT LEXICON
# =============================================================================

RESOURCE_PATH_TO_ENTITY = {
    "campaigns": "campaign",
    "adGroups": "ad_group",
    "adGroupCriteria": "ad_group_criterion",
    "campaignCriteria": "campaign_criterion",
    "labels": "label",
    "sharedSets": "shared_set",
    "sharedCriteria": "shared_criterion",
    "campaignBudgets": "campaign_budget",
    "biddingStrategies": "bidding_strategy",
    "ads": "ad_group_ad",
    "adGroupAds": "ad_group_ad",
    "assets": "asset",
    "conversionActions": "conversion_action",
    "customerNegativeCriteria": "customer_negative_criterion",
    "campaignLabels": "campaign_label",
    "adGroupLabels": "ad_group_label",
    "customerLabels": "customer_label",
    "keywordPlanCampaigns": "keyword_plan_campaign",
    "keywordPlanAdGroups": "keyword_plan_ad_group",
    "keywordPlanAdGroupKeywords": "keyword_plan_ad_group_keyword",
    "extensionFeedItems": "extension_feed_item",
    "campaignExtensionSettings": "campaign_extension_setting",
    "adGroupExtensionSettings": "ad_group_extension_setting",
    "remarketingActions": "remarketing_action",
    "userLists": "user_list",
}


def entity_for_path_segment(segment: str) -> Optional[str]:
    """Look up the entity type for a collection segment. Unknown -> None."""
    if not isinstance(segment, str):
        return None
    return RESOURCE_PATH_TO_ENTITY.get(segment)
