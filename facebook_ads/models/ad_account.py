"""FacebookAds — AdAccount record.

https://developers.facebook.com/docs/marketing-api/reference/ad-account
"""

import json
from typing import Any, ClassVar, Dict, List, Optional, Sequence

from facebook_ads.core.logging import get_logger
from facebook_ads.exceptions import FacebookAdsError
from facebook_ads.models.ad import Ad
from facebook_ads.models.ad_campaign import OBJECTIVES, AdCampaign
from facebook_ads.models.ad_creative import AdCreative
from facebook_ads.models.ad_insight import InsightsMixin
from facebook_ads.models.ad_set import AdSet
from facebook_ads.models.base import GraphObject, check_choice, status_filter

logger = get_logger("models.ad_account")

ACCOUNT_STATUSES = {
    1: "ACTIVE",
    2: "DISABLED",
    3: "UNSETTLED",
    7: "PENDING_RISK_REVIEW",
    8: "PENDING_SETTLEMENT",
    9: "IN_GRACE_PERIOD",
    100: "PENDING_CLOSURE",
    101: "CLOSED",
    201: "ANY_ACTIVE",
    202: "ANY_CLOSED",
}


class AdAccount(InsightsMixin, GraphObject):
    """An ad account. Its Graph id is ``act_<account_id>``."""

    FIELDS = (
        "id",
        "account_id",
        "account_status",
        "age",
        "amount_spent",
        "balance",
        "business_name",
        "created_time",
        "currency",
        "name",
        "spend_cap",
        "timezone_name",
    )

    ACCOUNT_STATUSES: ClassVar[Dict[int, str]] = ACCOUNT_STATUSES

    account_id: Optional[str] = None
    account_status: Optional[int] = None
    age: Optional[float] = None
    amount_spent: Optional[str] = None
    balance: Optional[str] = None
    business_name: Optional[str] = None
    created_time: Optional[str] = None
    currency: Optional[str] = None
    name: Optional[str] = None
    spend_cap: Optional[str] = None
    timezone_name: Optional[str] = None

    @property
    def status_name(self) -> Optional[str]:
        if self.account_status is None:
            return None
        return ACCOUNT_STATUSES.get(self.account_status, str(self.account_status))

    async def currency_code(self) -> str:
        """Currency of the account, fetched if it was not requested."""
        if self.currency:
            return self.currency
        result = await self.get(f"/{self.id}", {"fields": "currency"}, client=self.client)
        currency = result.get("currency", "")
        if not currency:
            raise FacebookAdsError(f"No currency returned for {self.id}")
        self.currency = currency
        return currency

    # ── AdCampaign ──

    async def ad_campaigns(
        self, effective_status: Sequence[str] = ("ACTIVE",), limit: int = 100
    ) -> List[AdCampaign]:
        query = {"effective_status": status_filter(effective_status), "limit": limit}
        return await AdCampaign.paginate(
            f"/{self.id}/campaigns", query=query, client=self.client
        )

    async def create_ad_campaign(
        self,
        name: str,
        objective: str,
        status: str = "ACTIVE",
        special_ad_categories: Sequence[str] = (),
    ) -> AdCampaign:
        check_choice(objective, OBJECTIVES, "objective")
        check_choice(status, AdCampaign.STATUSES, "status")
        query = {
            "name": name,
            "objective": objective,
            "status": status,
            # Required by Graph even when empty
            "special_ad_categories": json.dumps(list(special_ad_categories)),
        }
        result = await AdCampaign.post(
            f"/{self.id}/campaigns", query=query, client=self.client
        )
        logger.info(
            f"Created campaign {result['id']} in {self.id}",
            extra={"object_id": result["id"]},
        )
        return await AdCampaign.find(result["id"], client=self.client)

    # ── AdSet ──

    async def ad_sets(
        self, effective_status: Sequence[str] = ("ACTIVE",), limit: int = 100
    ) -> List[AdSet]:
        query = {"effective_status": status_filter(effective_status), "limit": limit}
        return await AdSet.paginate(f"/{self.id}/adsets", query=query, client=self.client)

    # ── Ad ──

    async def ads(
        self, effective_status: Sequence[str] = ("ACTIVE",), limit: int = 100
    ) -> List[Ad]:
        query = {"effective_status": status_filter(effective_status), "limit": limit}
        return await Ad.paginate(f"/{self.id}/ads", query=query, client=self.client)

    # ── AdCreative ──

    async def ad_creatives(self, limit: int = 100) -> List[AdCreative]:
        return await AdCreative.paginate(
            f"/{self.id}/adcreatives", query={"limit": limit}, client=self.client
        )

    async def create_ad_creative(
        self, name: str, object_story_spec: Dict[str, Any]
    ) -> AdCreative:
        """Create a creative; build ``object_story_spec`` with ``AdCreative.link_spec``."""
        query = {"name": name, "object_story_spec": object_story_spec}
        result = await AdCreative.post(
            f"/{self.id}/adcreatives", query=query, client=self.client
        )
        return await AdCreative.find(result["id"], client=self.client)
