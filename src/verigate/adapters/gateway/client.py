"""Gateway adapter – GatewayClient, the server-side entry point.

Example::

    async with GatewayClient(api_key=os.environ["VERIGATE_API_KEY"]) as gateway:
        created = await gateway.sessions.create(
            {"customer_user_ref": "user_123", "callback_url": "https://app.example/done"}
        )
        result = await gateway.sessions.poll(created.session_id, max_duration_ms=60_000)

    event = gateway.webhooks.construct(raw_body, signature_header, webhook_secret)
"""
from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Callable, Mapping
from urllib.parse import quote

from verigate.adapters.http.client import HttpxHttpClient
from verigate.application.sessions.models import (
    CreateSessionParams,
    SessionCreated,
    VerificationSession,
    validate_model,
)
from verigate.application.sessions.poller import (
    DEFAULT_INTERVAL_MS,
    DEFAULT_MAX_DURATION_MS,
    OnPoll,
    SessionPoller,
    Sleep,
)
from verigate.application.webhooks.events import WebhookEvent, parse_webhook_event
from verigate.application.webhooks.signature import RawBody, build_signature_header
from verigate.application.webhooks.verifier import (
    DEFAULT_TOLERANCE_SECONDS,
    construct_event,
    verify_signature,
)
from verigate.kernel.errors import ValidationError
from verigate.kernel.time import Clock

if TYPE_CHECKING:
    from verigate.config.settings import VerigateSettings

DEFAULT_API_BASE_URL = "https://api.verigate.io"
DEFAULT_TIMEOUT_MS = 30_000
SESSIONS_PATH = "/api/v1/sessions"


class SessionsResource:
    """``/api/v1/sessions`` operations."""

    def __init__(self, http: HttpxHttpClient, poller: SessionPoller) -> None:
        self._http = http
        self._poller = poller

    async def create(self, params: CreateSessionParams | Mapping[str, Any]) -> SessionCreated:
        """Create a verification session and return its client token."""
        if not isinstance(params, CreateSessionParams):
            params = validate_model(CreateSessionParams, params, context="Invalid parameter")
        response = await self._http.post(
            SESSIONS_PATH, json=params.model_dump(mode="json", exclude_none=True)
        )
        return validate_model(
            SessionCreated, response, context="Invalid response from API: session creation"
        )

    async def retrieve(self, session_id: str) -> VerificationSession:
        """Fetch the current state of a session."""
        if not session_id:
            raise ValidationError("Session ID must not be empty", field="session_id")
        response = await self._http.get(f"{SESSIONS_PATH}/{quote(session_id, safe='')}")
        return validate_model(
            VerificationSession, response, context="Invalid response from API: session result"
        )

    async def poll(
        self,
        session_id: str,
        *,
        interval_ms: float | None = None,
        max_duration_ms: float | None = None,
        on_poll: OnPoll | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> VerificationSession:
        """Retrieve *session_id* until it is verified, failed or canceled.

        Raises ``verigate.kernel.errors.TimeoutError`` when the deadline passes.
        """
        return await self._poller.poll(
            session_id,
            self.retrieve,
            interval_ms=interval_ms,
            max_duration_ms=max_duration_ms,
            on_poll=on_poll,
            cancel_event=cancel_event,
        )


class WebhooksResource:
    """Webhook helpers bound to the client's clock."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock

    def construct(
        self,
        raw_body: RawBody,
        signature_header: str | None,
        secret: str,
        *,
        tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
        parse: Callable[[str], Any] = parse_webhook_event,
    ) -> WebhookEvent:
        """Verify the request and parse it into a :class:`WebhookEvent`."""
        return construct_event(
            raw_body, signature_header, secret, parse, tolerance_seconds, clock=self._clock
        )

    def verify_signature(
        self,
        raw_body: RawBody,
        signature_header: str | None,
        secret: str,
        *,
        tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    ) -> bool:
        return verify_signature(
            secret, raw_body, signature_header, tolerance_seconds, clock=self._clock
        )

    def generate_test_signature(
        self, raw_body: RawBody, secret: str, timestamp: int | None = None
    ) -> str:
        """Build a signature header for exercising a webhook endpoint in tests."""
        return build_signature_header(secret, raw_body, timestamp, clock=self._clock)


class GatewayClient:
    """Server-side client for the verification gateway."""

    def __init__(
        self,
        api_key: str,
        *,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        poll_interval_ms: float = DEFAULT_INTERVAL_MS,
        poll_max_duration_ms: float = DEFAULT_MAX_DURATION_MS,
        clock: Clock | None = None,
        sleep: Sleep = asyncio.sleep,
        **http_kwargs: Any,
    ) -> None:
        if not api_key:
            raise ValidationError("API key is required", field="api_key")
        self._http = HttpxHttpClient(
            api_key,
            base_url=api_base_url.rstrip("/"),
            timeout=timeout_ms / 1000,
            **http_kwargs,
        )
        poller = SessionPoller(
            interval_ms=poll_interval_ms,
            max_duration_ms=poll_max_duration_ms,
            clock=clock,
            sleep=sleep,
        )
        self.sessions = SessionsResource(self._http, poller)
        self.webhooks = WebhooksResource(clock)

    @classmethod
    def from_settings(cls, settings: VerigateSettings, **kwargs: Any) -> GatewayClient:
        return cls(
            settings.api_key,
            api_base_url=settings.api_base_url,
            timeout_ms=settings.request_timeout_ms,
            poll_interval_ms=settings.poll_interval_ms,
            poll_max_duration_ms=settings.poll_max_duration_ms,
            **kwargs,
        )

    async def __aenter__(self) -> GatewayClient:
        await self._http.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._http.__aexit__(*args)

    async def aclose(self) -> None:
        await self._http.aclose()


__all__ = [
    "DEFAULT_API_BASE_URL",
    "GatewayClient",
    "SessionsResource",
    "WebhooksResource",
]
