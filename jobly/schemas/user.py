"""
Pydantic schemas for users, registration and tokens.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


class UserRegisterRequest(BaseModel):
    """Request schema for self-registration. New users are never admins."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class UserCreateRequest(BaseModel):
    """
    Request schema for admins adding a user.

    The password is generated by the server and never sent by the client.
    """
    username: str = Field(..., min_length=1, max_length=25)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    is_admin: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class UserUpdateRequest(BaseModel):
    """Partial update of a user's own profile. Admin status can not be changed here."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None

    @field_validator("first_name", "last_name", "password", "email")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field can not be null")
        return v

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class UserLoginRequest(BaseModel):
    """Request schema for getting a token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(BaseModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class UserDetailResponse(UserResponse):
    """User profile with the ids of the jobs applied to."""
    jobs: List[int] = []


class UserCreateResponse(BaseModel):
    """An admin-created user and a token for them."""
    user: UserResponse
    token: str
