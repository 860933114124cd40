"""FacebookAds — AdInsight record.

https://developers.facebook.com/docs/marketing-api/insights
"""

from datetime import date, datetime
from typing import Any, ClassVar, List, Optional, Sequence, Tuple

from facebook_ads.models.base import GraphObject, check_choice


class AdInsight(GraphObject):
    """One row of an insights report."""

    FIELDS = (
        "account_id",
        "campaign_id",
        "adset_id",
        "ad_id",
        "objective",
        "impressions",
        "unique_actions",
        "cost_per_unique_action_type",
        "clicks",
        "cpc",
        "cpm",
        "cpp",
        "ctr",
        "spend",
        "reach",
        "date_start",
        "date_stop",
    )

    LEVELS: ClassVar[Tuple[str, ...]] = ("ad", "adset", "campaign", "account")

    account_id: Optional[str] = None
    campaign_id: Optional[str] = None
    adset_id: Optional[str] = None
    ad_id: Optional[str] = None
    objective: Optional[str] = None
    impressions: Optional[str] = None
    clicks: Optional[str] = None
    reach: Optional[str] = None
    spend: Optional[str] = None
    cpc: Optional[str] = None
    cpm: Optional[str] = None
    cpp: Optional[str] = None
    ctr: Optional[str] = None
    unique_actions: Optional[List[dict]] = None
    cost_per_unique_action_type: Optional[List[dict]] = None
    date_start: Optional[str] = None
    date_stop: Optional[str] = None


def _as_date(value: Optional[date]) -> Optional[date]:
    # time_range takes calendar days
    return value.date() if isinstance(value, datetime) else value


def insights_query(
    since: Optional[date] = None,
    until: Optional[date] = None,
    level: Optional[str] = None,
    breakdowns: Optional[Sequence[str]] = None,
    fields: Optional[Sequence[str]] = None,
    limit: int = 1000,
) -> dict[str, Any]:
    """Build the query for an ``/insights`` edge; empty entries are dropped later."""
    check_choice(level, AdInsight.LEVELS, "level")
    today = date.today()
    since = _as_date(since) or today
    until = _as_date(until) or today
    if since > until:
        raise ValueError(f"since ({since}) is after until ({until})")
    return {
        "time_range": {"since": since.isoformat(), "until": until.isoformat()},
        "level": level,
        "breakdowns": ",".join(breakdowns) if breakdowns else None,
        "fields": ",".join(fields) if fields else None,
        "limit": limit,
    }


class InsightsMixin:
    """Adds ``ad_insights`` to any node exposing an ``/insights`` edge."""

    async def ad_insights(
        self,
        since: Optional[date] = None,
        until: Optional[date] = None,
        level: Optional[str] = None,
        breakdowns: Optional[Sequence[str]] = None,
        fields: Optional[Sequence[str]] = None,
        limit: int = 1000,
    ) -> List[AdInsight]:
        """Fetch insights for ``since``..``until`` (both default to today).

        ``level`` is one of ad, adset, campaign or account; ``breakdowns``
        and ``fields`` are comma-joined.
        """
        query = insights_query(since, until, level, breakdowns, fields, limit)
        return await AdInsight.paginate(
            f"/{self.id}/insights", query=query, client=self.client
        )
