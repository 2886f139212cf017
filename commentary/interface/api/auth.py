"""Cookie-based identity for routes.

Tokens are minted by the platform's auth service and carried in the
``auth_token`` cookie.
"""

from fastapi import HTTPException, status

from commentary.config import AuthSettings
from commentary.util.jwt import JWTError, TokenPayload, verify_token

AUTH_COOKIE = "auth_token"


def optional_user(
    auth_token: str | None, settings: AuthSettings
) -> TokenPayload | None:
    """Decode the caller's token, treating a bad token as anonymous."""
    if not auth_token:
        return None
    try:
        return verify_token(auth_token, settings)
    except JWTError:
        return None


def require_user(auth_token: str | None, settings: AuthSettings) -> TokenPayload:
    """Decode the caller's token.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    try:
        return verify_token(auth_token, settings)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


def require_admin(auth_token: str | None, settings: AuthSettings) -> TokenPayload:
    """Decode the caller's token and check the admin claim.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not an admin
    """
    user = require_user(auth_token, settings)
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
