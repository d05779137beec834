"""Security – session token capability (PyJWT-backed)."""
from verigate.security.jwt.decoder import (
    InvalidTokenError,
    JwtSessionTokenVerifier,
    SessionClaims,
    SessionTokenVerifier,
)

__all__ = ["InvalidTokenError", "JwtSessionTokenVerifier", "SessionClaims", "SessionTokenVerifier"]
