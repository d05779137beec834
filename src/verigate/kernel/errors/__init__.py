"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── SignatureVerificationError   (application.py)  fatal
    ├── AuthenticationError          (application.py)  fatal
    ├── TimeoutError                 (application.py)  retryable
    ├── ValidationError              (domain.py)       fatal
    ├── ConnectionError              (infrastructure.py) retryable
    └── ApiError                     (infrastructure.py) retryable on 5xx / 429
"""

from verigate.kernel.errors.application import (
    AuthenticationError,
    SignatureVerificationError,
    TimeoutError,
)
from verigate.kernel.errors.base import BaseError, is_retryable
from verigate.kernel.errors.domain import ValidationError
from verigate.kernel.errors.infrastructure import ApiError, ConnectionError

__all__ = [
    "ApiError",
    "AuthenticationError",
    "BaseError",
    "ConnectionError",
    "SignatureVerificationError",
    "TimeoutError",
    "ValidationError",
    "is_retryable",
]
