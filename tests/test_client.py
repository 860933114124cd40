"""
Unit tests for the Graph client: query packing, auth parameters, retries,
error envelopes and pagination.
"""

import hashlib
import hmac
from datetime import date

import httpx
import pytest

from facebook_ads.client import GraphClient, build_params
from facebook_ads.config import get_base_uri, set_base_uri, settings
from facebook_ads.exceptions import FacebookAdsError

NEXT = "https://graph.facebook.com/v21.0/123/ads?access_token=test-token&limit=2&after={cursor}"


class TestBuildParams:
    """Tests for build_params - how query mappings become request params."""

    def test_none_and_empty_values_are_dropped(self):
        params = build_params(
            {"level": None, "breakdowns": "", "fields": [], "filtering": {}, "limit": 10}
        )
        assert params == {"limit": "10"}

    def test_zero_and_false_are_kept(self):
        assert build_params({"limit": 0, "is_autobid": False}) == {
            "limit": "0",
            "is_autobid": "false",
        }

    def test_nested_values_are_json_encoded(self):
        params = build_params(
            {
                "time_range": {"since": "2024-01-01", "until": "2024-01-31"},
                "effective_status": ["ACTIVE", "PAUSED"],
            }
        )
        assert params["time_range"] == '{"since": "2024-01-01", "until": "2024-01-31"}'
        assert params["effective_status"] == '["ACTIVE", "PAUSED"]'

    def test_dates_are_iso_formatted(self):
        assert build_params({"since": date(2024, 3, 5)}) == {"since": "2024-03-05"}

    def test_empty_query(self):
        assert build_params(None) == {}


class TestBaseUri:
    def test_default_is_host_plus_version(self, monkeypatch):
        monkeypatch.setattr(settings, "meta_base_uri", "")
        monkeypatch.setattr(settings, "meta_api_version", "v21.0")
        assert get_base_uri() == "https://graph.facebook.com/v21.0"

    def test_can_be_switched_at_runtime(self):
        set_base_uri("https://graph.facebook.com/v22.0/")
        assert get_base_uri() == "https://graph.facebook.com/v22.0"
        assert GraphClient.url_for("/123") == "https://graph.facebook.com/v22.0/123"

    def test_absolute_urls_are_untouched(self):
        url = "https://graph.facebook.com/v20.0/123?after=x"
        assert GraphClient.url_for(url) == url


class TestRequest:
    @pytest.mark.asyncio
    async def test_access_token_is_sent(self, graph, client):
        graph.add("GET", "/123", {"id": "123"})
        result = await client.get("/123", {"fields": "id,name"})
        assert result == {"id": "123"}
        assert graph.params() == {"fields": "id,name", "access_token": "test-token"}

    @pytest.mark.asyncio
    async def test_appsecret_proof_is_sent_with_secret(self, graph):
        client = GraphClient(
            access_token="test-token",
            app_secret="shh",
            transport=httpx.MockTransport(graph.handler),
        )
        graph.add("GET", "/123", {"id": "123"})
        await client.get("/123")
        expected = hmac.new(b"shh", b"test-token", hashlib.sha256).hexdigest()
        assert graph.params()["appsecret_proof"] == expected

    @pytest.mark.asyncio
    async def test_post_sends_form_body(self, graph, client):
        graph.add("POST", "/123", {"success": True})
        await client.post("/123", {"status": "PAUSED", "bid_amount": None})
        assert graph.form() == {"status": "PAUSED", "access_token": "test-token"}

    @pytest.mark.asyncio
    async def test_graph_error_envelope_raises(self, graph, client):
        graph.add(
            "GET",
            "/404",
            {
                "error": {
                    "message": "Unsupported get request.",
                    "type": "GraphMethodException",
                    "code": 100,
                    "error_subcode": 33,
                    "fbtrace_id": "AbC",
                }
            },
            status=400,
        )
        with pytest.raises(FacebookAdsError) as exc_info:
            await client.get("/404")
        err = exc_info.value
        assert str(err) == "Unsupported get request."
        assert err.status_code == 400
        assert err.error_code == 100
        assert err.error_subcode == 33
        assert err.error_type == "GraphMethodException"
        assert err.fbtrace_id == "AbC"
        assert err.is_not_found

    @pytest.mark.asyncio
    async def test_error_in_successful_response_raises(self, graph, client):
        graph.add("GET", "/123", {"error": {"message": "bad", "code": 2}})
        with pytest.raises(FacebookAdsError, match="bad"):
            await client.get("/123")

    @pytest.mark.asyncio
    async def test_non_json_success_body_raises(self, graph, client):
        graph.add_text("GET", "/123", "<html>oops</html>")
        with pytest.raises(FacebookAdsError, match="Invalid JSON") as exc_info:
            await client.get("/123")
        assert exc_info.value.status_code == 200
        assert len(graph.requests) == 1

    @pytest.mark.asyncio
    async def test_non_json_error_body_raises(self, graph, client):
        graph.add_text("GET", "/123", "<html>Bad gateway</html>", status=400)
        with pytest.raises(FacebookAdsError) as exc_info:
            await client.get("/123")
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_server_error_is_retried(self, graph, client):
        graph.add("GET", "/123", {"error": {"message": "try again"}}, status=500)
        graph.add("GET", "/123", {"id": "123"})
        assert await client.get("/123") == {"id": "123"}
        assert len(graph.requests) == 2

    @pytest.mark.asyncio
    async def test_rate_limit_is_retried(self, graph, client):
        graph.add("GET", "/123", {}, status=429)
        graph.add("GET", "/123", {"id": "123"})
        assert await client.get("/123") == {"id": "123"}
        assert len(graph.requests) == 2

    @pytest.mark.asyncio
    async def test_rate_limit_on_last_attempt_raises(self, graph, client):
        graph.add("GET", "/123", {"error": {"message": "User request limit reached", "code": 17}}, status=429)
        with pytest.raises(FacebookAdsError) as exc_info:
            await client.get("/123")
        assert exc_info.value.status_code == 429
        assert exc_info.value.error_code == 17
        assert len(graph.requests) == settings.max_retries

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self, graph, client):
        graph.add("GET", "/123", {"error": {"message": "Invalid token", "code": 190}}, status=400)
        with pytest.raises(FacebookAdsError):
            await client.get("/123")
        assert len(graph.requests) == 1

    @pytest.mark.asyncio
    async def test_connection_failure_after_retries(self, graph, client):
        graph.add_error("GET", "/123", httpx.ConnectError("refused"))
        with pytest.raises(FacebookAdsError, match="Connection failed"):
            await client.get("/123")
        assert len(graph.requests) == settings.max_retries


class TestPaginate:
    @pytest.mark.asyncio
    async def test_follows_next_while_pages_are_full(self, graph, client):
        graph.add(
            "GET",
            "/123/ads",
            {"data": [{"id": "1"}, {"id": "2"}], "paging": {"next": NEXT.format(cursor="a")}},
        )
        graph.add(
            "GET",
            "/123/ads",
            {"data": [{"id": "3"}, {"id": "4"}], "paging": {"next": NEXT.format(cursor="b")}},
        )
        graph.add("GET", "/123/ads", {"data": [{"id": "5"}]})

        rows = await client.paginate("/123/ads", {"limit": 2})

        assert [r["id"] for r in rows] == ["1", "2", "3", "4", "5"]
        assert len(graph.requests) == 3
        # next URLs are followed verbatim
        assert graph.params(1)["after"] == "a"
        assert graph.params(2)["after"] == "b"

    @pytest.mark.asyncio
    async def test_short_first_page_stops(self, graph, client):
        graph.add(
            "GET",
            "/123/ads",
            {"data": [{"id": "1"}], "paging": {"next": NEXT.format(cursor="a")}},
        )
        rows = await client.paginate("/123/ads", {"limit": 2})
        assert rows == [{"id": "1"}]
        assert len(graph.requests) == 1

    @pytest.mark.asyncio
    async def test_default_limit(self, graph, client):
        graph.add("GET", "/123/ads", {"data": []})
        await client.paginate("/123/ads")
        assert graph.params()["limit"] == "100"

    @pytest.mark.asyncio
    async def test_explicit_none_limit_uses_default(self, graph, client):
        graph.add("GET", "/123/ads", {"data": [{"id": "1"}]})
        rows = await client.paginate("/123/ads", {"limit": None})
        assert rows == [{"id": "1"}]
        assert graph.params()["limit"] == "100"

    @pytest.mark.asyncio
    async def test_missing_data_is_empty(self, graph, client):
        graph.add("GET", "/123/ads", {})
        assert await client.paginate("/123/ads") == []

    @pytest.mark.asyncio
    async def test_max_pages_caps_requests(self, graph, client, monkeypatch):
        monkeypatch.setattr(settings, "max_pages", 2)
        graph.add(
            "GET",
            "/123/ads",
            {"data": [{"id": "x"}], "paging": {"next": NEXT.format(cursor="loop")}},
        )
        rows = await client.paginate("/123/ads", {"limit": 1})
        assert len(rows) == 2
        assert len(graph.requests) == 2


class TestValidateToken:
    @pytest.mark.asyncio
    async def test_returns_token_metadata(self, graph, client):
        graph.add(
            "GET",
            "/debug_token",
            {"data": {"is_valid": True, "expires_at": 1700000000, "scopes": ["ads_read"], "app_id": "42"}},
        )
        result = await client.validate_token()
        assert result == {
            "valid": True,
            "expires_at": 1700000000,
            "scopes": ["ads_read"],
            "app_id": "42",
        }
        assert graph.params()["input_token"] == "test-token"
