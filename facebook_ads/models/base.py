"""FacebookAds — Graph Object Base.

Every record is a read-only projection of a remote Graph node. Records are
built from JSON on fetch; changing one means issuing another remote call.
"""

from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr

from facebook_ads.client import GraphClient, get_client

T = TypeVar("T", bound="GraphObject")


class GraphObject(BaseModel):
    """Base record. Fields not requested from Graph stay ``None``."""

    model_config = ConfigDict(extra="allow")

    FIELDS: ClassVar[Tuple[str, ...]] = ("id",)

    id: Optional[str] = None

    _client: Optional[GraphClient] = PrivateAttr(default=None)

    @property
    def client(self) -> GraphClient:
        return self._client or get_client()

    @classmethod
    def from_graph(
        cls: type[T], payload: Mapping[str, Any], client: GraphClient | None = None
    ) -> T:
        obj = cls.model_validate(dict(payload))
        obj._client = client
        return obj

    @classmethod
    def _with_fields(cls, query: Mapping[str, Any] | None) -> Dict[str, Any]:
        query = dict(query or {})
        if not query.get("fields"):
            query["fields"] = ",".join(cls.FIELDS)
        return query

    # ── Class-level Graph calls ──

    @classmethod
    async def find(cls: type[T], object_id: str, client: GraphClient | None = None) -> T:
        """Fetch a single node by id with the default field set."""
        client = client or get_client()
        result = await client.get(f"/{object_id}", {"fields": ",".join(cls.FIELDS)})
        return cls.from_graph(result, client)

    @classmethod
    async def get(
        cls: type[T],
        path: str,
        query: Mapping[str, Any] | None = None,
        objectify: bool = False,
        client: GraphClient | None = None,
    ) -> Union[Dict[str, Any], List[T], T]:
        """GET ``path``; with ``objectify`` the body is wrapped in records."""
        client = client or get_client()
        if not objectify:
            return await client.get(path, query)
        result = await client.get(path, cls._with_fields(query))
        data = result.get("data")
        if isinstance(data, list):
            return [cls.from_graph(row, client) for row in data]
        return cls.from_graph(result, client)

    @classmethod
    async def paginate(
        cls: type[T],
        path: str,
        query: Mapping[str, Any] | None = None,
        client: GraphClient | None = None,
    ) -> List[T]:
        client = client or get_client()
        rows = await client.paginate(path, cls._with_fields(query))
        return [cls.from_graph(row, client) for row in rows]

    @classmethod
    async def post(
        cls,
        path: str,
        query: Mapping[str, Any] | None = None,
        client: GraphClient | None = None,
    ) -> Dict[str, Any]:
        client = client or get_client()
        return await client.post(path, query)

    @classmethod
    async def delete(
        cls,
        path: str,
        query: Mapping[str, Any] | None = None,
        client: GraphClient | None = None,
    ) -> Dict[str, Any]:
        client = client or get_client()
        return await client.delete(path, query)

    # ── Instance calls ──

    async def update(self, **changes: Any) -> bool:
        """POST changed fields to the node. Local values are not touched."""
        result = await self.post(f"/{self.id}", changes, client=self.client)
        return bool(result.get("success"))

    async def destroy(self) -> bool:
        result = await self.delete(f"/{self.id}", client=self.client)
        return bool(result.get("success"))

    async def reload(self: T) -> T:
        return await type(self).find(self.id, client=self.client)

    def __repr__(self) -> str:
        name = getattr(self, "name", None)
        label = f" {name!r}" if name else ""
        return f"<{type(self).__name__} {self.id}{label}>"


def check_choice(value: Optional[str], choices: Tuple[str, ...], label: str) -> None:
    """Reject a value outside a closed Graph enum before any request is made."""
    if value is not None and value not in choices:
        raise ValueError(f"{label} must be one of {', '.join(choices)}; got {value!r}")


def status_filter(effective_status: Union[str, Sequence[str]]) -> List[str]:
    """Normalise an ``effective_status`` filter; a bare string is one status."""
    if isinstance(effective_status, str):
        return [effective_status]
    return list(effective_status)
