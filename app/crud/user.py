"""
CRUD operations for User model.
"""

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.models.user import User
from app.schemas.user import UserRegisterRequest


def register(db: Session, user_data: UserRegisterRequest) -> User:
    """
    Create a non-admin user with a hashed password.

    Raises:
        BadRequestError: If the username is taken
    """
    if db.get(User, user_data.username) is not None:
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    user = User(
        username=user_data.username,
        password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    return user


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    user = db.get(User, username)
    if user is None or not verify_password(password, user.password):
        raise UnauthorizedError("Invalid username/password")
    return user


def get(db: Session, username: str) -> User:
    """
    Retrieve a user by username.

    Raises:
        NotFoundError: If no such user
    """
    user = db.get(User, username)
    if user is None:
        raise NotFoundError(f"No user: {username}")
    return user
