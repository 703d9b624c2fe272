"""
User management endpoints.

- POST /users: admin creates a user (possibly another admin) and gets a token for it
- GET /users: admin lists users
- GET/PATCH/DELETE /users/{username}: that user or an admin
- POST /users/{username}/jobs/{job_id}: apply to a job, as that user or an admin
"""

import logging
from fastapi import APIRouter, Depends

from app.core.database import Database, get_storage
from app.core.deps import require_admin, require_authenticated, require_self_or_admin
from app.core.security import create_token
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.schemas.user import (
    UserCreateRequest,
    UserUpdateRequest,
    UserEnvelope,
    UserDetailEnvelope,
    UserListEnvelope,
    UserCreatedResponse,
    ApplicationResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)

# Anonymous callers are turned away before the ownership check
user_guards = [Depends(require_authenticated), Depends(require_self_or_admin)]


@router.post("/", status_code=201, response_model=UserCreatedResponse, dependencies=[Depends(require_admin)])
def create_user(request: UserCreateRequest, db: Database = Depends(get_storage)):
    """Create a user. Unlike /auth/register, this may create admins."""
    user = user_crud.register(db, request.model_dump(by_alias=True))
    return {"user": user, "token": create_token(user)}


@router.get("/", response_model=UserListEnvelope, dependencies=[Depends(require_admin)])
def list_users(db: Database = Depends(get_storage)):
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailEnvelope, dependencies=user_guards)
def get_user(username: str, db: Database = Depends(get_storage)):
    """Retrieve a user and the ids of jobs they applied to."""
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope, dependencies=user_guards)
def update_user(username: str, request: UserUpdateRequest, db: Database = Depends(get_storage)):
    """Patch any of firstName, lastName, password, email."""
    patch = request.model_dump(by_alias=True, exclude_unset=True)
    return {"user": user_crud.update(db, username, patch)}


@router.delete("/{username}", dependencies=user_guards)
def delete_user(username: str, db: Database = Depends(get_storage)):
    user_crud.remove(db, username)
    return {"deleted": username}


@router.post(
    "/{username}/jobs/{job_id}",
    response_model=ApplicationResponse,
    dependencies=user_guards,
)
def apply_to_job(username: str, job_id: int, db: Database = Depends(get_storage)):
    """
    Apply to a job on the user's behalf.

    Returns 404 if the user or job does not exist, 400 if already applied.
    """
    user_crud.get(db, username)
    job_crud.get(db, job_id)
    application = user_crud.apply_to_job(db, username, job_id)
    return {"applied": application["jobId"]}
