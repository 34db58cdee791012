"""
Admin Authorization Module

Provides the bearer-token dependency guarding the admin endpoints.

Admin access is a single shared secret configured through ADMIN_TOKEN.
There are no sessions, expiry or per-user identities:
- Missing token -> 401 Unauthorized
- Token that does not match the configured secret -> 403 Forbidden
- Matching token -> request proceeds

SECURITY NOTE:
- An empty ADMIN_TOKEN never matches, so admin endpoints stay closed until
  a secret is configured.
- Tokens are compared in constant time.
"""

import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from teacher_registry.core.config import settings

logger = logging.getLogger(__name__)

# Raw Authorization header, documented in OpenAPI. auto_error is disabled so
# that a missing header maps to our own 401 body. The scheme word is not
# checked: any "<scheme> <token>" header is compared against the secret.
security = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Static admin token sent as 'Bearer <token>'",
)


def extract_token(authorization: str | None) -> str | None:
    """Return the token part of an Authorization header, if there is one."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) < 2:
        return None
    return parts[1]


def _token_matches(token: str) -> bool:
    expected = settings.admin_token
    if not expected:
        return False
    return secrets.compare_digest(token.encode(), expected.encode())


async def require_admin_token(
    authorization: str | None = Depends(security),
) -> None:
    """
    FastAPI dependency that validates the admin bearer token.

    Usage:
        @router.get("/forms", dependencies=[Depends(require_admin_token)])
        async def list_forms(...):
            ...

    Raises:
        HTTPException 401: If the header is missing or carries no token
        HTTPException 403: If the token does not match the configured secret
    """
    token = extract_token(authorization)

    if token is None:
        logger.warning("Admin access attempt without a token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "TOKEN_MISSING",
                "message": "Access Denied: No Token Provided",
            },
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not _token_matches(token):
        logger.warning("Admin access attempt with an invalid token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "INVALID_TOKEN",
                "message": "Access Denied: Invalid Token",
            },
        )


__all__ = ["require_admin_token"]
