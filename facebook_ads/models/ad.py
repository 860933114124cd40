"""FacebookAds — Ad record.

https://developers.facebook.com/docs/marketing-api/reference/adgroup
"""

from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import PrivateAttr

from facebook_ads.models.ad_creative import AdCreative
from facebook_ads.models.ad_insight import InsightsMixin
from facebook_ads.models.base import GraphObject

STATUSES = (
    "ACTIVE",
    "PAUSED",
    "DELETED",
    "PENDING_REVIEW",
    "DISAPPROVED",
    "PREAPPROVED",
    "PENDING_BILLING_INFO",
    "CAMPAIGN_PAUSED",
    "ARCHIVED",
    "ADSET_PAUSED",
)


class Ad(InsightsMixin, GraphObject):
    FIELDS = (
        "id",
        "account_id",
        "campaign_id",
        "adset_id",
        "name",
        "status",
        "configured_status",
        "effective_status",
        "bid_amount",
        "creative",
        "tracking_specs",
        "ad_review_feedback",
        "created_time",
        "updated_time",
    )

    STATUSES: ClassVar[Tuple[str, ...]] = STATUSES

    account_id: Optional[str] = None
    campaign_id: Optional[str] = None
    adset_id: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    configured_status: Optional[str] = None
    effective_status: Optional[str] = None
    bid_amount: Optional[int] = None
    creative: Optional[Dict[str, Any]] = None
    tracking_specs: Optional[List[Dict[str, Any]]] = None
    ad_review_feedback: Optional[Dict[str, Any]] = None
    created_time: Optional[str] = None
    updated_time: Optional[str] = None

    _ad_set = PrivateAttr(default=None)
    _ad_campaign = PrivateAttr(default=None)
    _ad_account = PrivateAttr(default=None)
    _ad_creative = PrivateAttr(default=None)

    async def ad_account(self):
        from facebook_ads.models.ad_account import AdAccount

        if self._ad_account is None:
            self._ad_account = await AdAccount.find(
                f"act_{self.account_id}", client=self.client
            )
        return self._ad_account

    async def ad_campaign(self):
        from facebook_ads.models.ad_campaign import AdCampaign

        if self._ad_campaign is None:
            self._ad_campaign = await AdCampaign.find(self.campaign_id, client=self.client)
        return self._ad_campaign

    async def ad_set(self):
        from facebook_ads.models.ad_set import AdSet

        if self._ad_set is None:
            self._ad_set = await AdSet.find(self.adset_id, client=self.client)
        return self._ad_set

    async def ad_creative(self) -> Optional[AdCreative]:
        creative_id = (self.creative or {}).get("id")
        if not creative_id:
            return None
        if self._ad_creative is None:
            self._ad_creative = await AdCreative.find(creative_id, client=self.client)
        return self._ad_creative
