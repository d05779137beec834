"""Unit tests for the testing fakes."""
from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

from verigate.application.sessions import SessionStatus, VerificationSession
from verigate.testing.fakes import (
    ClockAdvancingSleep,
    FakeClock,
    ScriptedSessionRetriever,
    make_session,
)


# ---------------------------------------------------------------------------
# FakeClock / ClockAdvancingSleep
# ---------------------------------------------------------------------------
class TestClockFakes:
    def test_fake_clock_is_pinned(self):
        clock = FakeClock()
        assert clock.now() == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        assert clock.now() == clock.now()

    def test_sleep_advances_clock(self):
        clock = FakeClock()
        start = clock.timestamp()
        sleep = ClockAdvancingSleep(clock)

        async def run() -> None:
            await sleep(1.5)
            await sleep(0.5)

        asyncio.run(run())
        assert clock.timestamp() - start == pytest.approx(2.0)
        assert sleep.calls == [1.5, 0.5]
        assert sleep.total_seconds == 2.0


# ---------------------------------------------------------------------------
# make_session / ScriptedSessionRetriever
# ---------------------------------------------------------------------------
class TestSessionFakes:
    def test_make_session(self):
        session = make_session("processing", session_id="vs_9", livemode=True)
        assert isinstance(session, VerificationSession)
        assert session.id == "vs_9"
        assert session.status is SessionStatus.PROCESSING
        assert session.livemode is True

    def test_script_repeats_last_entry(self):
        retrieve = ScriptedSessionRetriever(["pending", "verified"])

        async def run():
            return [(await retrieve("vs_1")).status for _ in range(4)]

        assert asyncio.run(run()) == ["pending", "verified", "verified", "verified"]
        assert retrieve.call_count == 4

    def test_script_raises_exception_entries(self):
        retrieve = ScriptedSessionRetriever([ValueError("gateway down")])
        with pytest.raises(ValueError, match="gateway down"):
            asyncio.run(retrieve("vs_1"))
        assert retrieve.calls == ["vs_1"]

    def test_empty_script_rejected(self):
        with pytest.raises(ValueError):
            ScriptedSessionRetriever([])
