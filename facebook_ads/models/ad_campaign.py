"""FacebookAds — AdCampaign record.

https://developers.facebook.com/docs/marketing-api/reference/ad-campaign-group
"""

from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple

from pydantic import PrivateAttr

from facebook_ads.core.logging import get_logger
from facebook_ads.models.ad import Ad
from facebook_ads.models.ad_insight import InsightsMixin
from facebook_ads.models.ad_set import (
    BID_STRATEGIES,
    BILLING_EVENTS,
    OPTIMIZATION_GOALS,
    AdSet,
)
from facebook_ads.models.base import GraphObject, check_choice, status_filter

logger = get_logger("models.ad_campaign")

STATUSES = ("ACTIVE", "PAUSED", "DELETED", "ARCHIVED")

OBJECTIVES = (
    # Outcome-driven objectives
    "OUTCOME_APP_PROMOTION",
    "OUTCOME_AWARENESS",
    "OUTCOME_ENGAGEMENT",
    "OUTCOME_LEADS",
    "OUTCOME_SALES",
    "OUTCOME_TRAFFIC",
    # Legacy
    "APP_INSTALLS",
    "BRAND_AWARENESS",
    "CONVERSIONS",
    "EVENT_RESPONSES",
    "LEAD_GENERATION",
    "LINK_CLICKS",
    "LOCAL_AWARENESS",
    "MESSAGES",
    "OFFER_CLAIMS",
    "PAGE_LIKES",
    "POST_ENGAGEMENT",
    "PRODUCT_CATALOG_SALES",
    "REACH",
    "STORE_VISITS",
    "VIDEO_VIEWS",
)


class AdCampaign(InsightsMixin, GraphObject):
    FIELDS = (
        "id",
        "account_id",
        "buying_type",
        "configured_status",
        "effective_status",
        "status",
        "name",
        "objective",
        "spend_cap",
        "daily_budget",
        "lifetime_budget",
        "bid_strategy",
        "start_time",
        "stop_time",
        "created_time",
        "updated_time",
    )

    STATUSES: ClassVar[Tuple[str, ...]] = STATUSES
    OBJECTIVES: ClassVar[Tuple[str, ...]] = OBJECTIVES
    BID_STRATEGIES: ClassVar[Tuple[str, ...]] = BID_STRATEGIES

    account_id: Optional[str] = None
    buying_type: Optional[str] = None
    configured_status: Optional[str] = None
    effective_status: Optional[str] = None
    status: Optional[str] = None
    name: Optional[str] = None
    objective: Optional[str] = None
    spend_cap: Optional[str] = None
    daily_budget: Optional[str] = None
    lifetime_budget: Optional[str] = None
    bid_strategy: Optional[str] = None
    start_time: Optional[str] = None
    stop_time: Optional[str] = None
    created_time: Optional[str] = None
    updated_time: Optional[str] = None

    _ad_account = PrivateAttr(default=None)

    async def ad_account(self):
        from facebook_ads.models.ad_account import AdAccount

        if self._ad_account is None:
            self._ad_account = await AdAccount.find(
                f"act_{self.account_id}", client=self.client
            )
        return self._ad_account

    # ── AdSet ──

    async def ad_sets(
        self, effective_status: Sequence[str] = ("ACTIVE",), limit: int = 100
    ) -> List[AdSet]:
        query = {"effective_status": status_filter(effective_status), "limit": limit}
        return await AdSet.paginate(f"/{self.id}/adsets", query=query, client=self.client)

    async def create_ad_set(
        self,
        name: str,
        promoted_object: Dict[str, Any],
        targeting: Dict[str, Any],
        daily_budget: int,
        optimization_goal: str,
        billing_event: str = "IMPRESSIONS",
        status: str = "ACTIVE",
        bid_strategy: Optional[str] = None,
        bid_amount: Optional[int] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> AdSet:
        """Create an ad set under this campaign and fetch it back.

        ``daily_budget`` and ``bid_amount`` are in the account currency's
        minor unit (cents for USD).
        """
        check_choice(optimization_goal, OPTIMIZATION_GOALS, "optimization_goal")
        check_choice(billing_event, BILLING_EVENTS, "billing_event")
        check_choice(status, AdSet.STATUSES, "status")
        check_choice(bid_strategy, BID_STRATEGIES, "bid_strategy")
        if bid_strategy in ("LOWEST_COST_WITH_BID_CAP", "TARGET_COST") and bid_amount is None:
            raise ValueError(f"bid_amount is required with bid_strategy {bid_strategy}")

        query = {
            "campaign_id": self.id,
            "name": name,
            "promoted_object": promoted_object,
            "targeting": targeting,
            "daily_budget": daily_budget,
            "optimization_goal": optimization_goal,
            "billing_event": billing_event,
            "status": status,
            "bid_strategy": bid_strategy,
            "bid_amount": bid_amount,
            "start_time": start_time,
            "end_time": end_time,
        }
        result = await AdSet.post(
            f"/act_{self.account_id}/adsets", query=query, client=self.client
        )
        logger.info(
            f"Created ad set {result['id']} in campaign {self.id}",
            extra={"object_id": result["id"]},
        )
        return await AdSet.find(result["id"], client=self.client)

    # ── Ad ──

    async def ads(
        self, effective_status: Sequence[str] = ("ACTIVE",), limit: int = 100
    ) -> List[Ad]:
        query = {"effective_status": status_filter(effective_status), "limit": limit}
        return await Ad.paginate(f"/{self.id}/ads", query=query, client=self.client)
