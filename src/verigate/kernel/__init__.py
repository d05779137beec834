"""Kernel – framework-agnostic building blocks shared by every layer."""

from verigate.kernel.errors import (
    ApiError,
    AuthenticationError,
    BaseError,
    ConnectionError,
    SignatureVerificationError,
    TimeoutError,
    ValidationError,
    is_retryable,
)
from verigate.kernel.time import Clock, FrozenClock, SystemClock

__all__ = [
    "ApiError",
    "AuthenticationError",
    "BaseError",
    "Clock",
    "ConnectionError",
    "FrozenClock",
    "SignatureVerificationError",
    "SystemClock",
    "TimeoutError",
    "ValidationError",
    "is_retryable",
]
