"""FastAPI adapter – webhook receiving route.

Response contract (the gateway retries on any non-2xx):

* missing / invalid signature → ``401``
* verified but malformed payload → ``400``
* handler raised → ``500``
* otherwise → ``200 {"received": true}``
"""
import inspect
from typing import Any, Awaitable, Callable, Union

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from verigate.application.webhooks.events import WebhookEventType, parse_webhook_event
from verigate.application.webhooks.signature import normalize_body
from verigate.application.webhooks.verifier import DEFAULT_TOLERANCE_SECONDS, WebhookVerifier
from verigate.kernel.errors import ValidationError
from verigate.kernel.time import Clock
from verigate.observability.logging import get_logger

DEFAULT_SIGNATURE_HEADER = "X-Verigate-Signature"

EventHandler = Callable[[Any], Union[Awaitable[None], None]]

logger = get_logger(__name__)


def _is_async(handler: Any) -> bool:
    return inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(
        getattr(handler, "__call__", None)
    )


async def _call(handler: EventHandler | None, event: Any) -> None:
    if handler is None:
        return
    if _is_async(handler):
        await handler(event)
        return
    result = await run_in_threadpool(handler, event)
    if inspect.isawaitable(result):
        await result


def create_webhook_router(
    webhook_secret: str,
    *,
    path: str = "/webhook",
    on_event: EventHandler | None = None,
    on_verified: EventHandler | None = None,
    on_failed: EventHandler | None = None,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    signature_header: str = DEFAULT_SIGNATURE_HEADER,
    parse: Callable[[str], Any] = parse_webhook_event,
    clock: Clock | None = None,
) -> APIRouter:
    """Build an :class:`APIRouter` exposing ``POST {path}`` for gateway callbacks.

    ``on_event`` sees every verified event; ``on_verified`` / ``on_failed``
    fire for the matching event types.  Handlers may be sync or async; sync
    handlers run in the threadpool so a blocking handler does not stall the loop.
    """
    if not webhook_secret:
        raise ValidationError("A webhook secret is required", field="webhook_secret")

    verifier = WebhookVerifier(webhook_secret, tolerance_seconds=tolerance_seconds, clock=clock)
    router = APIRouter()

    async def receive_webhook(request: Request) -> JSONResponse:
        raw_body = await request.body()
        header = request.headers.get(signature_header)
        if not header:
            logger.warning("webhook.missing_signature", header=signature_header)
            return JSONResponse({"error": "Missing signature"}, status_code=401)

        outcome = verifier.verify_detailed(raw_body, header)
        if not outcome.valid:
            return JSONResponse({"error": outcome.reason or "Invalid signature"}, status_code=401)

        try:
            event = parse(normalize_body(raw_body))
        except ValidationError as exc:
            return JSONResponse(
                {"error": "Invalid webhook payload", "field": exc.field}, status_code=400
            )
        except ValueError:
            return JSONResponse({"error": "Invalid webhook payload"}, status_code=400)

        event_type = getattr(event, "type", None)
        try:
            await _call(on_event, event)
            if event_type == WebhookEventType.VERIFIED:
                await _call(on_verified, event)
            elif event_type == WebhookEventType.FAILED:
                await _call(on_failed, event)
        except Exception:
            logger.exception("webhook.handler_failed", event_type=str(event_type))
            return JSONResponse({"error": "Webhook processing failed"}, status_code=500)

        return JSONResponse({"received": True})

    router.add_api_route(path, receive_webhook, methods=["POST"])
    return router


__all__ = ["DEFAULT_SIGNATURE_HEADER", "create_webhook_router"]
