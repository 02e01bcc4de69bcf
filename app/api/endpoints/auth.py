"""
Authentication endpoints.

- POST /auth/token: Exchange username/password for a JWT
- POST /auth/register: Create a (non-admin) user and return a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import UnauthorizedError
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.user import TokenResponse, UserLoginRequest, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate a user and return a JWT.

    The token carries the username and admin flag used for authorization.
    """
    try:
        user = user_crud.authenticate(db, request.username, request.password)
    except UnauthorizedError:
        logger.warning(f"Failed login for {request.username}")
        raise

    return TokenResponse(token=create_token(user.username, user.is_admin))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Registered users are never admins. Returns a JWT for immediate use.
    """
    new_user = user_crud.register(db, request)
    logger.info(f"New user registered: {new_user.username}")

    return TokenResponse(token=create_token(new_user.username, new_user.is_admin))
