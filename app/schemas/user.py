"""
Pydantic schemas for user management.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional


class UserCreateRequest(BaseModel):
    """Admin-only user creation; may create other admins."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=30, alias="lastName")
    email: EmailStr
    is_admin: bool = Field(False, alias="isAdmin")

    class Config:
        populate_by_name = True
        extra = "forbid"


class UserUpdateRequest(BaseModel):
    """Fields a user (or an admin) may change. Username and admin flag are fixed."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=30, alias="firstName")
    last_name: Optional[str] = Field(None, min_length=1, max_length=30, alias="lastName")
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None

    @field_validator("first_name", "last_name", "password", "email", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

    class Config:
        populate_by_name = True
        extra = "forbid"


class UserResponse(BaseModel):
    """User profile response (no password)."""
    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    is_admin: bool = Field(..., alias="isAdmin")

    class Config:
        populate_by_name = True


class UserDetailResponse(UserResponse):
    jobs: List[int] = []


class UserEnvelope(BaseModel):
    user: UserResponse


class UserDetailEnvelope(BaseModel):
    user: UserDetailResponse


class UserListEnvelope(BaseModel):
    users: List[UserResponse]


class UserCreatedResponse(BaseModel):
    user: UserResponse
    token: str


class ApplicationResponse(BaseModel):
    applied: int
