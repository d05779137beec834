"""Unit tests – gateway HTTP transport."""
from __future__ import annotations

import asyncio

import httpx
import pytest
import respx

from verigate import __version__
from verigate.adapters.http import HttpxHttpClient
from verigate.kernel.errors import ApiError, AuthenticationError, ConnectionError

BASE = "https://api.test"


# ---------------------------------------------------------------------------
# Request headers
# ---------------------------------------------------------------------------
class TestHeaders:
    @respx.mock
    def test_bearer_auth_and_user_agent(self) -> None:
        route = respx.get(f"{BASE}/ok").mock(return_value=httpx.Response(200, json={}))

        async def run() -> None:
            async with HttpxHttpClient("sk_test_123", base_url=BASE) as client:
                await client.get("/ok")

        asyncio.run(run())
        sent = route.calls.last.request
        assert sent.headers["authorization"] == "Bearer sk_test_123"
        assert sent.headers["content-type"] == "application/json"
        assert sent.headers["user-agent"] == f"verigate-python/{__version__}"

    @respx.mock
    def test_extra_headers_merged(self) -> None:
        route = respx.get(f"{BASE}/ok").mock(return_value=httpx.Response(200, json={}))

        async def run() -> None:
            async with HttpxHttpClient("k", base_url=BASE, headers={"X-Trace": "1"}) as client:
                await client.get("/ok")

        asyncio.run(run())
        assert route.calls.last.request.headers["x-trace"] == "1"


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class TestResponses:
    @respx.mock
    def test_returns_decoded_json(self) -> None:
        respx.post(f"{BASE}/items").mock(return_value=httpx.Response(201, json={"id": "x"}))

        async def run():
            async with HttpxHttpClient("k", base_url=BASE) as client:
                return await client.post("/items", json={"a": 1})

        assert asyncio.run(run()) == {"id": "x"}

    @respx.mock
    def test_401_is_authentication_error(self) -> None:
        respx.get(f"{BASE}/s").mock(return_value=httpx.Response(401, json={"error": {}}))

        async def run() -> None:
            async with HttpxHttpClient("bad", base_url=BASE) as client:
                await client.get("/s")

        with pytest.raises(AuthenticationError) as exc_info:
            asyncio.run(run())
        assert exc_info.value.retryable is False

    @respx.mock
    def test_error_body_mapped_to_api_error(self) -> None:
        respx.get(f"{BASE}/s").mock(
            return_value=httpx.Response(
                404,
                json={"error": {"message": "Session not found", "code": "resource_missing"}},
                headers={"x-request-id": "req_42"},
            )
        )

        async def run() -> None:
            async with HttpxHttpClient("k", base_url=BASE) as client:
                await client.get("/s")

        with pytest.raises(ApiError) as exc_info:
            asyncio.run(run())
        err = exc_info.value
        assert err.status_code == 404
        assert err.code == "resource_missing"
        assert err.message == "Session not found"
        assert err.request_id == "req_42"
        assert err.retryable is False

    @respx.mock
    def test_non_json_error_body(self) -> None:
        respx.get(f"{BASE}/s").mock(return_value=httpx.Response(503, text="upstream down"))

        async def run() -> None:
            async with HttpxHttpClient("k", base_url=BASE) as client:
                await client.get("/s")

        with pytest.raises(ApiError) as exc_info:
            asyncio.run(run())
        assert exc_info.value.message == "API request failed with status 503"
        assert exc_info.value.raw_body == "upstream down"
        assert exc_info.value.retryable is True

    @respx.mock
    def test_non_json_success_body(self) -> None:
        respx.get(f"{BASE}/s").mock(return_value=httpx.Response(200, text="<html>"))

        async def run() -> None:
            async with HttpxHttpClient("k", base_url=BASE) as client:
                await client.get("/s")

        with pytest.raises(ApiError):
            asyncio.run(run())

    @respx.mock
    def test_timeout_is_connection_error(self) -> None:
        respx.get(f"{BASE}/slow").mock(side_effect=httpx.ReadTimeout("timed out"))

        async def run() -> None:
            async with HttpxHttpClient("k", base_url=BASE, timeout=1.5) as client:
                await client.get("/slow")

        with pytest.raises(ConnectionError) as exc_info:
            asyncio.run(run())
        assert "1500ms" in exc_info.value.message
        assert exc_info.value.retryable is True
        assert isinstance(exc_info.value.cause, httpx.ReadTimeout)

    @respx.mock
    def test_network_failure_is_connection_error(self) -> None:
        respx.get(f"{BASE}/s").mock(side_effect=httpx.ConnectError("refused"))

        async def run() -> None:
            async with HttpxHttpClient("k", base_url=BASE) as client:
                await client.get("/s")

        with pytest.raises(ConnectionError, match="Network error"):
            asyncio.run(run())


# ---------------------------------------------------------------------------
# Surface
# ---------------------------------------------------------------------------
class TestSurface:
    def test_only_gateway_verbs_exposed(self) -> None:
        assert callable(HttpxHttpClient.get)
        assert callable(HttpxHttpClient.post)
        assert not hasattr(HttpxHttpClient, "patch")
        assert not hasattr(HttpxHttpClient, "delete")
