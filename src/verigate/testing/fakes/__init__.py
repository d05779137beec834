"""Testing fakes – deterministic doubles for time and the gateway."""
from verigate.kernel.time import FrozenClock
from verigate.testing.fakes.clock import ClockAdvancingSleep, FakeClock
from verigate.testing.fakes.sessions import ScriptedSessionRetriever, make_session

__all__ = [
    "ClockAdvancingSleep",
    "FakeClock",
    "FrozenClock",
    "ScriptedSessionRetriever",
    "make_session",
]
