"""
FastAPI dependencies for authentication and authorization.

Three access levels exist:
- anonymous: no dependency needed
- logged in as a given user (or admin): ensure_correct_user_or_admin
- admin: ensure_admin

Token claims are {"username": ..., "isAdmin": ...} as issued by
app.core.security.create_token.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import BadRequestError, UnauthorizedError
from app.core.security import JWTError, decode_token

logger = logging.getLogger(__name__)

# auto_error=False: anonymous requests are allowed through and rejected per endpoint
security = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """
    Return the verified token claims, or None for anonymous requests.

    An invalid or expired token is treated the same as no token.
    """
    if not credentials:
        return None

    try:
        return decode_token(credentials.credentials)
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None


def ensure_admin(claims: Optional[dict] = Depends(get_current_claims)) -> dict:
    """
    Require a token with isAdmin set.

    Raises:
        UnauthorizedError 401: If not logged in or not an admin
    """
    if not claims or claims.get("isAdmin") is not True:
        raise UnauthorizedError()
    return claims


def ensure_correct_user_or_admin(
    username: str,
    claims: Optional[dict] = Depends(get_current_claims),
) -> dict:
    """
    Require a token for the user named in the path, or an admin token.

    Raises:
        UnauthorizedError 401: If not logged in as that user or as an admin
    """
    if not claims:
        raise UnauthorizedError()
    if claims.get("isAdmin") is not True and claims.get("username") != username:
        raise UnauthorizedError()
    return claims


def allowed_query_params(*names: str):
    """
    Build a dependency that rejects query parameters outside ``names``.

    Raises:
        BadRequestError 400: Listing the unexpected parameter names
    """
    allowed = set(names)

    def check(request: Request) -> None:
        unknown = sorted(set(request.query_params) - allowed)
        if unknown:
            raise BadRequestError(f"Unknown query parameter(s): {', '.join(unknown)}")

    return check
