"""Application sessions – SessionPoller.

Repeatedly retrieves a session until it reaches a terminal status or the
polling deadline passes.  Retrievals are strictly sequential: the next one
starts only after the previous result's ``on_poll`` callback has returned and
the interval has elapsed.

Typical usage::

    poller = SessionPoller(interval_ms=2000, max_duration_ms=60_000)
    result = await poller.poll(session_id, client.sessions.retrieve,
                               on_poll=lambda r: print(r.status))
"""
from __future__ import annotations

import asyncio
import dataclasses
import inspect
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar, Union

from verigate.application.sessions.status import is_terminal_status
from verigate.kernel.errors import TimeoutError as PollingTimeoutError
from verigate.kernel.errors import ValidationError
from verigate.kernel.time import Clock, SystemClock
from verigate.observability.logging import get_logger

R = TypeVar("R")

DEFAULT_INTERVAL_MS = 2000
DEFAULT_MAX_DURATION_MS = 300_000
UNKNOWN_STATUS = "unknown"

Retrieve = Callable[[str], Union[Awaitable[R], R]]
OnPoll = Callable[[Any], Optional[Awaitable[None]]]
Sleep = Callable[[float], Awaitable[Any]]

logger = get_logger(__name__)


@dataclasses.dataclass
class PollState:
    """Bookkeeping for a single :func:`poll` call; discarded when it returns."""

    session_id: str
    started_at: float
    last_result: Any = None
    attempts: int = 0

    def elapsed_ms(self, clock: Clock) -> int:
        return int(round((clock.timestamp() - self.started_at) * 1000))

    @property
    def last_status(self) -> str:
        if self.attempts == 0:
            return UNKNOWN_STATUS
        return _status_text(status_of(self.last_result))


def status_of(result: Any) -> Any:
    """Read ``status`` from a result object or mapping."""
    if isinstance(result, Mapping):
        return result.get("status")
    return getattr(result, "status", None)


def _status_text(status: Any) -> str:
    if status is None:
        return UNKNOWN_STATUS
    if isinstance(status, Enum):
        return str(status.value)
    return str(status)


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _check_cancelled(cancel_event: asyncio.Event | None, session_id: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise asyncio.CancelledError(f"Polling of session {session_id} was cancelled")


async def _pause(
    sleep: Sleep,
    seconds: float,
    cancel_event: asyncio.Event | None,
    session_id: str,
) -> None:
    if cancel_event is None:
        await sleep(seconds)
        return

    sleeper = asyncio.ensure_future(sleep(seconds))
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({sleeper, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (sleeper, waiter):
            if not task.done():
                task.cancel()
        await asyncio.gather(sleeper, waiter, return_exceptions=True)
    _check_cancelled(cancel_event, session_id)


def _validate(session_id: str, interval_ms: float, max_duration_ms: float) -> None:
    if not session_id:
        raise ValidationError("Session ID must not be empty", field="session_id")
    if interval_ms < 0:
        raise ValidationError("interval_ms must be >= 0", field="interval_ms")
    if max_duration_ms <= 0:
        raise ValidationError("max_duration_ms must be > 0", field="max_duration_ms")


async def poll(
    session_id: str,
    retrieve: Retrieve[R],
    is_terminal: Callable[[Any], bool] = is_terminal_status,
    interval_ms: float = DEFAULT_INTERVAL_MS,
    max_duration_ms: float = DEFAULT_MAX_DURATION_MS,
    on_poll: OnPoll | None = None,
    *,
    clock: Clock | None = None,
    sleep: Sleep = asyncio.sleep,
    cancel_event: asyncio.Event | None = None,
) -> R:
    """Poll *retrieve* until ``is_terminal(result.status)`` or the deadline passes.

    Parameters
    ----------
    retrieve:
        Called with *session_id*; may return the result or an awaitable of it.
        Its exceptions propagate immediately and are never retried here.
    on_poll:
        Observes every result (sync or async). Its return value is ignored.
    clock, sleep:
        Time sources; inject a frozen clock and a clock-advancing sleep to
        run deterministically.
    cancel_event:
        When set, the loop stops before the next retrieval (or mid-sleep)
        and raises :class:`asyncio.CancelledError`.

    Raises
    ------
    TimeoutError
        ``verigate.kernel.errors.TimeoutError`` carrying ``session_id``,
        ``last_status`` and ``duration_ms``.
    """
    _validate(session_id, interval_ms, max_duration_ms)
    clock = clock or SystemClock()
    state = PollState(session_id=session_id, started_at=clock.timestamp())

    while state.elapsed_ms(clock) < max_duration_ms:
        _check_cancelled(cancel_event, session_id)

        result = await _resolve(retrieve(session_id))
        state.last_result = result
        state.attempts += 1

        if on_poll is not None:
            await _resolve(on_poll(result))

        if is_terminal(status_of(result)):
            return result

        await _pause(sleep, interval_ms / 1000, cancel_event, session_id)

    raise PollingTimeoutError(session_id, state.last_status, state.elapsed_ms(clock))


class SessionPoller:
    """Bind polling defaults and time sources once; poll many sessions.

    Each :meth:`poll` call owns its own :class:`PollState`, so one poller may
    serve concurrent polls of different sessions.
    """

    def __init__(
        self,
        *,
        interval_ms: float = DEFAULT_INTERVAL_MS,
        max_duration_ms: float = DEFAULT_MAX_DURATION_MS,
        is_terminal: Callable[[Any], bool] = is_terminal_status,
        clock: Clock | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.interval_ms = interval_ms
        self.max_duration_ms = max_duration_ms
        self._is_terminal = is_terminal
        self._clock = clock
        self._sleep = sleep

    async def poll(
        self,
        session_id: str,
        retrieve: Retrieve[R],
        *,
        interval_ms: float | None = None,
        max_duration_ms: float | None = None,
        on_poll: OnPoll | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> R:
        log = logger.bind(session_id=session_id)

        async def observe(result: Any) -> None:
            log.debug("session.poll", status=_status_text(status_of(result)))
            if on_poll is not None:
                await _resolve(on_poll(result))

        try:
            result = await poll(
                session_id,
                retrieve,
                self._is_terminal,
                self.interval_ms if interval_ms is None else interval_ms,
                self.max_duration_ms if max_duration_ms is None else max_duration_ms,
                observe,
                clock=self._clock,
                sleep=self._sleep,
                cancel_event=cancel_event,
            )
        except PollingTimeoutError as exc:
            log.warning(
                "session.poll_timeout",
                last_status=exc.last_status,
                duration_ms=exc.duration_ms,
            )
            raise
        log.info("session.poll_complete", status=_status_text(status_of(result)))
        return result


__all__ = [
    "DEFAULT_INTERVAL_MS",
    "DEFAULT_MAX_DURATION_MS",
    "PollState",
    "SessionPoller",
    "poll",
    "status_of",
]
