"""HTTP adapter – HttpxHttpClient for the verification gateway."""
from __future__ import annotations

import json
from typing import Any

import httpx

from verigate import __version__
from verigate.kernel.errors import ApiError, AuthenticationError, ConnectionError
from verigate.observability.logging import get_logger

USER_AGENT = f"verigate-python/{__version__}"

logger = get_logger(__name__)


def _api_error_from_response(response: httpx.Response) -> ApiError:
    message = f"API request failed with status {response.status_code}"
    code = "api_error"
    raw_body = response.text
    try:
        payload = json.loads(raw_body)
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        message = payload["error"].get("message") or message
        code = payload["error"].get("code") or code
    return ApiError(
        message,
        response.status_code,
        code=code,
        request_id=response.headers.get("x-request-id"),
        raw_body=raw_body,
    )


class HttpxHttpClient:
    """Thin async httpx wrapper with bearer auth and structured error mapping.

    * 401 → :class:`AuthenticationError`
    * other non-2xx → :class:`ApiError`
    * timeouts and network failures → :class:`ConnectionError`
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "",
        timeout: float = 30.0,
        **kwargs: Any,
    ) -> None:
        self._timeout = timeout
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
            **kwargs.pop("headers", {}),
        }
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, headers=headers, **kwargs
        )

    async def __aenter__(self) -> "HttpxHttpClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, **kwargs: Any) -> Any:
        return await self._request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> Any:
        return await self._request("POST", url, **kwargs)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send the request and return the decoded JSON body."""
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise ConnectionError(
                f"Request timed out after {int(self._timeout * 1000)}ms: {method} {url}",
                cause=exc,
            ) from exc
        except httpx.HTTPError as exc:
            raise ConnectionError(f"Network error: {exc}", cause=exc) from exc

        if response.status_code == 401:
            raise AuthenticationError()
        if response.is_error:
            error = _api_error_from_response(response)
            logger.warning(
                "gateway.request_failed",
                method=method,
                url=url,
                status_code=response.status_code,
                request_id=error.request_id,
            )
            raise error

        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                "Gateway returned a non-JSON body",
                response.status_code,
                request_id=response.headers.get("x-request-id"),
                raw_body=response.text,
            ) from exc


HttpClient = HttpxHttpClient

__all__ = ["HttpClient", "HttpxHttpClient", "USER_AGENT"]
