"""Kernel time – Clock port + implementations."""
from verigate.kernel.time.clock import Clock, FrozenClock, SystemClock, unix_seconds

__all__ = ["Clock", "FrozenClock", "SystemClock", "unix_seconds"]
