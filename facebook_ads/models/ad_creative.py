"""FacebookAds — AdCreative record.

https://developers.facebook.com/docs/marketing-api/reference/ad-creative
"""

from typing import Any, ClassVar, Dict, Optional, Tuple

from facebook_ads.models.base import GraphObject, check_choice


class AdCreative(GraphObject):
    FIELDS = (
        "id",
        "name",
        "title",
        "body",
        "image_hash",
        "image_url",
        "object_story_id",
        "object_story_spec",
        "object_type",
        "status",
        "thumbnail_url",
        "call_to_action_type",
    )

    CALL_TO_ACTION_TYPES: ClassVar[Tuple[str, ...]] = (
        "APPLY_NOW",
        "BOOK_TRAVEL",
        "BUY_NOW",
        "CONTACT_US",
        "DOWNLOAD",
        "GET_OFFER",
        "GET_QUOTE",
        "INSTALL_APP",
        "LEARN_MORE",
        "NO_BUTTON",
        "ORDER_NOW",
        "SHOP_NOW",
        "SIGN_UP",
        "SUBSCRIBE",
        "WATCH_MORE",
    )

    name: Optional[str] = None
    title: Optional[str] = None
    body: Optional[str] = None
    image_hash: Optional[str] = None
    image_url: Optional[str] = None
    object_story_id: Optional[str] = None
    object_story_spec: Optional[Dict[str, Any]] = None
    object_type: Optional[str] = None
    status: Optional[str] = None
    thumbnail_url: Optional[str] = None
    call_to_action_type: Optional[str] = None

    @staticmethod
    def link_spec(
        page_id: str,
        link: str,
        message: str = "",
        name: str = "",
        description: str = "",
        image_hash: str | None = None,
        call_to_action_type: str | None = None,
        instagram_actor_id: str | None = None,
    ) -> Dict[str, Any]:
        """Build an ``object_story_spec`` for a single-image link ad."""
        check_choice(
            call_to_action_type, AdCreative.CALL_TO_ACTION_TYPES, "call_to_action_type"
        )
        link_data: Dict[str, Any] = {"link": link}
        if message:
            link_data["message"] = message
        if name:
            link_data["name"] = name
        if description:
            link_data["description"] = description
        if image_hash:
            link_data["image_hash"] = image_hash
        if call_to_action_type:
            link_data["call_to_action"] = {
                "type": call_to_action_type,
                "value": {"link": link},
            }

        spec: Dict[str, Any] = {"page_id": page_id, "link_data": link_data}
        if instagram_actor_id:
            spec["instagram_actor_id"] = instagram_actor_id
        return spec
