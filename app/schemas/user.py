"""
Pydantic schemas for user registration and token issuance.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictStr

from app.schemas.base import CamelModel, RequestModel


class UserRegisterRequest(RequestModel):
    """Request schema for user registration."""
    username: StrictStr = Field(..., min_length=1, max_length=25)
    password: StrictStr = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: StrictStr = Field(..., min_length=1, max_length=30)
    last_name: StrictStr = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserLoginRequest(RequestModel):
    """Request schema for obtaining a token."""
    username: StrictStr = Field(..., min_length=1, max_length=25)
    password: StrictStr = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(CamelModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool

    model_config = ConfigDict(from_attributes=True)


class UserEnvelope(BaseModel):
    user: UserResponse
