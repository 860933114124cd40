"""FacebookAds — AdSet record.

https://developers.facebook.com/docs/marketing-api/reference/ad-account/adsets
"""

import json
from datetime import datetime, time
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple

from pydantic import PrivateAttr

from facebook_ads.core.logging import get_logger
from facebook_ads.models.ad import STATUSES, Ad
from facebook_ads.models.ad_insight import InsightsMixin
from facebook_ads.models.ad_set_activity import AdSetActivity
from facebook_ads.models.base import GraphObject, check_choice, status_filter

logger = get_logger("models.ad_set")

BILLING_EVENTS = ("APP_INSTALLS", "IMPRESSIONS")

OPTIMIZATION_GOALS = (
    "NONE",
    "APP_INSTALLS",
    "BRAND_AWARENESS",
    "AD_RECALL_LIFT",
    "CLICKS",
    "ENGAGED_USERS",
    "EVENT_RESPONSES",
    "IMPRESSIONS",
    "LEAD_GENERATION",
    "LINK_CLICKS",
    "OFFER_CLAIMS",
    "OFFSITE_CONVERSIONS",
    "PAGE_ENGAGEMENT",
    "PAGE_LIKES",
    "POST_ENGAGEMENT",
    "REACH",
    "SOCIAL_IMPRESSIONS",
    "VIDEO_VIEWS",
    "APP_DOWNLOADS",
    "LANDING_PAGE_VIEWS",
)

BID_STRATEGIES = (
    "LOWEST_COST_WITHOUT_CAP",
    "LOWEST_COST_WITH_BID_CAP",
    "TARGET_COST",
)


class AdSet(InsightsMixin, GraphObject):
    """An ad set: budget, schedule, bidding and targeting shared by its ads."""

    # Full set of Graph fields is much larger; these are the ones worth fetching.
    FIELDS = (
        "id",
        "account_id",
        "campaign_id",
        "name",
        "status",
        "configured_status",
        "effective_status",
        "bid_strategy",
        "bid_amount",
        "billing_event",
        "optimization_goal",
        "pacing_type",
        "daily_budget",
        "budget_remaining",
        "lifetime_budget",
        "promoted_object",
        "targeting",
        "created_time",
        "updated_time",
    )

    STATUSES: ClassVar[Tuple[str, ...]] = STATUSES
    BILLING_EVENTS: ClassVar[Tuple[str, ...]] = BILLING_EVENTS
    OPTIMIZATION_GOALS: ClassVar[Tuple[str, ...]] = OPTIMIZATION_GOALS
    BID_STRATEGIES: ClassVar[Tuple[str, ...]] = BID_STRATEGIES

    account_id: Optional[str] = None
    campaign_id: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    configured_status: Optional[str] = None
    effective_status: Optional[str] = None
    bid_strategy: Optional[str] = None
    bid_amount: Optional[int] = None
    billing_event: Optional[str] = None
    optimization_goal: Optional[str] = None
    pacing_type: Optional[List[str]] = None
    daily_budget: Optional[str] = None
    budget_remaining: Optional[str] = None
    lifetime_budget: Optional[str] = None
    promoted_object: Optional[Dict[str, Any]] = None
    targeting: Optional[Dict[str, Any]] = None
    created_time: Optional[str] = None
    updated_time: Optional[str] = None

    _ad_account = PrivateAttr(default=None)
    _ad_campaign = PrivateAttr(default=None)

    # ── AdAccount ──

    async def ad_account(self):
        from facebook_ads.models.ad_account import AdAccount

        if self._ad_account is None:
            self._ad_account = await AdAccount.find(
                f"act_{self.account_id}", client=self.client
            )
        return self._ad_account

    # ── AdCampaign ──

    async def ad_campaign(self):
        from facebook_ads.models.ad_campaign import AdCampaign

        if self._ad_campaign is None:
            self._ad_campaign = await AdCampaign.find(self.campaign_id, client=self.client)
        return self._ad_campaign

    # ── Ad ──

    async def ads(
        self, effective_status: Sequence[str] = ("ACTIVE",), limit: int = 100
    ) -> List[Ad]:
        query = {"effective_status": status_filter(effective_status), "limit": limit}
        return await Ad.paginate(f"/{self.id}/ads", query=query, client=self.client)

    async def create_ad(self, name: str, creative_id: str, status: str = "PAUSED") -> Ad:
        """Create an ad in this ad set from an existing creative."""
        check_choice(status, STATUSES, "status")
        query = {
            "name": name,
            "adset_id": self.id,
            "creative": json.dumps({"creative_id": creative_id}),
            "status": status,
        }
        result = await Ad.post(f"/act_{self.account_id}/ads", query=query, client=self.client)
        logger.info(
            f"Created ad {result['id']} in ad set {self.id}",
            extra={"object_id": result["id"]},
        )
        return await Ad.find(result["id"], client=self.client)

    # ── AdSetActivity ──

    async def activities(
        self, since: Optional[datetime] = None, until: Optional[datetime] = None
    ) -> List[AdSetActivity]:
        """Change history for this ad set; defaults to the whole of today."""
        today = datetime.now().date()
        since = since or datetime.combine(today, time.min)
        until = until or datetime.combine(today, time.max)
        query = {"since": int(since.timestamp()), "until": int(until.timestamp())}
        return await AdSetActivity.get(
            f"/{self.id}/activities", query=query, objectify=True, client=self.client
        )
