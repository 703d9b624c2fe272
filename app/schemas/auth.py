"""
Pydantic schemas for token issuance and the authenticated principal.
"""

from pydantic import BaseModel, EmailStr, Field


class Principal(BaseModel):
    """Identity decoded from a verified token; lives for one request."""
    username: str = Field(..., min_length=1)
    is_admin: bool = Field(False, alias="isAdmin")

    class Config:
        populate_by_name = True
        frozen = True


class TokenRequest(BaseModel):
    """Request schema for POST /auth/token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)

    class Config:
        extra = "forbid"


class RegisterRequest(BaseModel):
    """Request schema for self-registration. New accounts are never admins."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=30, alias="lastName")
    email: EmailStr

    class Config:
        populate_by_name = True
        extra = "forbid"


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str
