"""FacebookAds — Read-only Graph pass-through routes."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from facebook_ads.client import GraphClient, get_client
from facebook_ads.core.logging import get_logger
from facebook_ads.exceptions import FacebookAdsError
from facebook_ads.models.ad_account import AdAccount
from facebook_ads.models.ad_campaign import AdCampaign
from facebook_ads.models.ad_set import AdSet
from facebook_ads.models.base import GraphObject

logger = get_logger("api.routes")

router = APIRouter(prefix="/meta", tags=["Meta"])


def get_graph_client() -> GraphClient:
    """Dependency — the process-wide Graph client."""
    return get_client()


def _dump(records: List[GraphObject]) -> List[dict]:
    return [r.model_dump(exclude_none=True) for r in records]


def _http_error(e: FacebookAdsError, action: str) -> HTTPException:
    logger.warning(f"{action} failed: {e}", extra={"status_code": e.status_code})
    status = 404 if e.is_not_found else 400
    return HTTPException(status_code=status, detail=f"{action} failed: {str(e)}")


async def _find_ad_set(ad_set_id: str, client: GraphClient) -> AdSet:
    try:
        return await AdSet.find(ad_set_id, client=client)
    except FacebookAdsError as e:
        raise _http_error(e, "Ad set lookup")


@router.get("/validate-token")
async def validate_token(client: GraphClient = Depends(get_graph_client)):
    """Check if the Graph access token is valid.

    Returns validity status, expiration, and granted scopes.
    """
    try:
        result = await client.validate_token()
    except FacebookAdsError as e:
        raise _http_error(e, "Token validation")
    return {"status": "success", **result}


@router.get("/accounts/{account_id}")
async def get_account(account_id: str, client: GraphClient = Depends(get_graph_client)):
    if not account_id.startswith("act_"):
        account_id = f"act_{account_id}"
    try:
        account = await AdAccount.find(account_id, client=client)
    except FacebookAdsError as e:
        raise _http_error(e, "Account lookup")
    return {"status": "success", "account": account.model_dump(exclude_none=True)}


@router.get("/adsets/{ad_set_id}")
async def get_ad_set(ad_set_id: str, client: GraphClient = Depends(get_graph_client)):
    ad_set = await _find_ad_set(ad_set_id, client)
    return {"status": "success", "ad_set": ad_set.model_dump(exclude_none=True)}


@router.get("/adsets/{ad_set_id}/ads")
async def get_ad_set_ads(
    ad_set_id: str,
    effective_status: List[str] = Query(default=["ACTIVE"]),
    limit: int = Query(default=100, ge=1, le=1000),
    client: GraphClient = Depends(get_graph_client),
):
    ad_set = AdSet.from_graph({"id": ad_set_id}, client)
    try:
        ads = await ad_set.ads(effective_status=effective_status, limit=limit)
    except FacebookAdsError as e:
        raise _http_error(e, "Ads fetch")
    return {"status": "success", "count": len(ads), "ads": _dump(ads)}


@router.get("/adsets/{ad_set_id}/insights")
async def get_ad_set_insights(
    ad_set_id: str,
    since: Optional[date] = None,
    until: Optional[date] = None,
    level: Optional[str] = None,
    breakdowns: List[str] = Query(default=[]),
    client: GraphClient = Depends(get_graph_client),
):
    ad_set = AdSet.from_graph({"id": ad_set_id}, client)
    try:
        insights = await ad_set.ad_insights(
            since=since, until=until, level=level, breakdowns=breakdowns
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except FacebookAdsError as e:
        raise _http_error(e, "Insights fetch")
    return {"status": "success", "count": len(insights), "insights": _dump(insights)}


@router.get("/adsets/{ad_set_id}/activities")
async def get_ad_set_activities(
    ad_set_id: str, client: GraphClient = Depends(get_graph_client)
):
    ad_set = AdSet.from_graph({"id": ad_set_id}, client)
    try:
        activities = await ad_set.activities()
    except FacebookAdsError as e:
        raise _http_error(e, "Activities fetch")
    return {"status": "success", "activities": _dump(activities)}


@router.get("/campaigns/{campaign_id}/adsets")
async def get_campaign_ad_sets(
    campaign_id: str,
    effective_status: List[str] = Query(default=["ACTIVE"]),
    client: GraphClient = Depends(get_graph_client),
):
    campaign = AdCampaign.from_graph({"id": campaign_id}, client)
    try:
        ad_sets = await campaign.ad_sets(effective_status=effective_status)
    except FacebookAdsError as e:
        raise _http_error(e, "Ad sets fetch")
    return {"status": "success", "count": len(ad_sets), "ad_sets": _dump(ad_sets)}
