"""
Authentication endpoints.

- POST /auth/token: exchange username/password for a JWT
- POST /auth/register: create a (non-admin) account and receive a JWT
"""

import logging
from fastapi import APIRouter, Depends

from app.core.database import Database, get_storage
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.auth import TokenRequest, RegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(request: TokenRequest, db: Database = Depends(get_storage)):
    """
    Authenticate and return a JWT.

    Raises 401 on an unknown user or wrong password.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user['username']}")
    return TokenResponse(token=create_token(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(request: RegisterRequest, db: Database = Depends(get_storage)):
    """
    Register a new user account and return a JWT for immediate use.

    Self-registered accounts are never admins.
    """
    data = request.model_dump(by_alias=True)
    data["isAdmin"] = False
    user = user_crud.register(db, data)
    return TokenResponse(token=create_token(user))
