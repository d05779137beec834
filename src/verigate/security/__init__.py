"""Security – session token capability."""
from verigate.security.jwt import (
    InvalidTokenError,
    JwtSessionTokenVerifier,
    SessionClaims,
    SessionTokenVerifier,
)

__all__ = ["InvalidTokenError", "JwtSessionTokenVerifier", "SessionClaims", "SessionTokenVerifier"]
