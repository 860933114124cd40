"""FacebookAds — AdSetActivity record.

https://developers.facebook.com/docs/marketing-api/reference/ad-activity
"""

from typing import Any, Optional

from facebook_ads.models.base import GraphObject


class AdSetActivity(GraphObject):
    FIELDS = (
        "actor_id",
        "actor_name",
        "application_id",
        "application_name",
        "date_time_in_timezone",
        "event_time",
        "event_type",
        "extra_data",
        "object_id",
        "object_name",
        "translated_event_type",
    )

    actor_id: Optional[str] = None
    actor_name: Optional[str] = None
    application_id: Optional[str] = None
    application_name: Optional[str] = None
    date_time_in_timezone: Optional[str] = None
    event_time: Optional[str] = None
    event_type: Optional[str] = None
    extra_data: Optional[Any] = None
    object_id: Optional[str] = None
    object_name: Optional[str] = None
    translated_event_type: Optional[str] = None
