"""FacebookAds — Graph API Client.

Handles authentication, retry logic, rate limiting, query packing and
pagination. Records in ``facebook_ads.models`` call into this module for
every remote operation.
"""

import asyncio
import hashlib
import hmac
import json
import time
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

import httpx

from facebook_ads.config import settings
from facebook_ads.core.logging import get_logger
from facebook_ads.exceptions import FacebookAdsError

logger = get_logger("client")

RETRY_STATUS = 429


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (str, list, tuple, dict, set)) and len(value) == 0


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def build_params(query: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Pack a query mapping into Graph request parameters.

    None and empty values are dropped; nested structures are sent as JSON.
    """
    if not query:
        return {}
    return {key: _encode(value) for key, value in query.items() if not _is_empty(value)}


class GraphClient:
    """Async HTTP client for the Facebook Marketing Graph API."""

    def __init__(
        self,
        access_token: str | None = None,
        app_secret: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.access_token = access_token or settings.meta_access_token
        self.app_secret = app_secret or settings.meta_app_secret
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=settings.request_timeout, transport=self._transport
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GraphClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ── Helpers ──

    @staticmethod
    def url_for(path: str) -> str:
        """Resolve a Graph path against the current base URI."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{settings.base_uri}/{path.lstrip('/')}"

    def auth_params(self) -> Dict[str, str]:
        params = {"access_token": self.access_token}
        if self.app_secret:
            params["appsecret_proof"] = hmac.new(
                self.app_secret.encode("utf-8"),
                self.access_token.encode("utf-8"),
                hashlib.sha256,
            ).hexdigest()
        return params

    @staticmethod
    def _error_body(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    # ── Core Request Method ──

    async def request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        data: Dict[str, Any] | None = None,
    ) -> Dict[str, Any]:
        """Make a request with retry + rate-limit handling."""
        url = self.url_for(path)
        params = dict(params or {})
        # `paging.next` URLs already carry the token
        if "access_token=" not in url:
            if data is not None:
                data = {**data, **self.auth_params()}
            else:
                params.update(self.auth_params())

        client = await self._get_client()
        max_retries = settings.max_retries

        for attempt in range(1, max_retries + 1):
            wait = settings.retry_base_delay * (2 ** (attempt - 1))
            started = time.monotonic()
            try:
                resp = await client.request(
                    method, url, params=params or None, data=data
                )
                logger.debug(
                    f"{method} {path} -> {resp.status_code}",
                    extra={
                        "path": path,
                        "status_code": resp.status_code,
                        "duration_ms": round((time.monotonic() - started) * 1000, 1),
                    },
                )

                # Rate limited
                if resp.status_code == RETRY_STATUS and attempt < max_retries:
                    logger.warning(
                        f"Rate limited (429). Retrying in {wait}s (attempt {attempt}/{max_retries})",
                        extra={"path": path, "attempt": attempt},
                    )
                    await asyncio.sleep(wait)
                    continue

                resp.raise_for_status()
                try:
                    body = resp.json()
                except ValueError as e:
                    raise FacebookAdsError(
                        f"Invalid JSON from Graph (HTTP {resp.status_code})",
                        status_code=resp.status_code,
                    ) from e
                if isinstance(body, dict) and "error" in body:
                    raise FacebookAdsError.from_response(resp.status_code, body)
                return body

            except httpx.HTTPStatusError as e:
                if attempt < max_retries and e.response.status_code >= 500:
                    logger.warning(
                        f"Server error {e.response.status_code}. Retrying in {wait}s",
                        extra={"path": path, "attempt": attempt},
                    )
                    await asyncio.sleep(wait)
                    continue
                raise FacebookAdsError.from_response(
                    e.response.status_code, self._error_body(e.response)
                ) from e

            except httpx.RequestError as e:
                if attempt < max_retries:
                    logger.warning(
                        f"Request error: {e}. Retrying in {wait}s",
                        extra={"path": path, "attempt": attempt},
                    )
                    await asyncio.sleep(wait)
                    continue
                raise FacebookAdsError(
                    f"Connection failed after {max_retries} retries: {e}"
                ) from e

        raise FacebookAdsError("Max retries exhausted")

    async def get(self, path: str, query: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        return await self.request("GET", path, params=build_params(query))

    async def post(self, path: str, query: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        return await self.request("POST", path, data=build_params(query))

    async def delete(self, path: str, query: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        return await self.request("DELETE", path, params=build_params(query))

    # ── Pagination ──

    async def paginate(
        self,
        path: str,
        query: Mapping[str, Any] | None = None,
    ) -> List[Dict[str, Any]]:
        """Fetch every page of a list edge.

        Further pages are only requested while the previous one came back
        full, and never past ``settings.max_pages``.
        """
        query = dict(query or {})
        query["limit"] = query.get("limit") or settings.default_page_limit
        limit = int(query["limit"])

        result = await self.get(path, query)
        data: List[Dict[str, Any]] = list(result.get("data") or [])
        page_size = len(data)

        for _ in range(1, settings.max_pages):
            next_url = (result.get("paging") or {}).get("next")
            if not next_url or page_size < limit:
                break
            result = await self.request("GET", next_url)
            page = result.get("data") or []
            data.extend(page)
            page_size = len(page)

        logger.info(
            f"Fetched {len(data)} records from {path}",
            extra={"path": path, "records": len(data)},
        )
        return data

    # ── Token Validation ──

    async def validate_token(self) -> Dict[str, Any]:
        """Check if the access token is valid and return metadata."""
        result = await self.get("/debug_token", {"input_token": self.access_token})
        token_data = result.get("data", {})
        return {
            "valid": token_data.get("is_valid", False),
            "expires_at": token_data.get("expires_at", 0),
            "scopes": token_data.get("scopes", []),
            "app_id": token_data.get("app_id", ""),
        }


_default_client: Optional[GraphClient] = None


def get_client() -> GraphClient:
    """Return the process-wide client, creating it from settings."""
    global _default_client
    if _default_client is None:
        _default_client = GraphClient()
    return _default_client


def set_client(client: Optional[GraphClient]) -> None:
    global _default_client
    _default_client = client
