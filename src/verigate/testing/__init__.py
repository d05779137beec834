"""Testing support – fakes for deterministic webhook and polling tests."""

from verigate.testing.fakes import (
    ClockAdvancingSleep,
    FakeClock,
    FrozenClock,
    ScriptedSessionRetriever,
    make_session,
)

__all__ = [
    "ClockAdvancingSleep",
    "FakeClock",
    "FrozenClock",
    "ScriptedSessionRetriever",
    "make_session",
]
