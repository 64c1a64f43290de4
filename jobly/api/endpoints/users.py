"""
User management endpoints.

Adding users here is for admins only; self-registration lives in the auth
router. Users can view, edit and delete themselves, apply to jobs and see
jobs matching their technologies.
"""

import logging
import secrets
from typing import Dict, List, Union
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import TokenUser, ensure_admin, ensure_admin_or_self
from jobly.core.query_params import job_id_param
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.schemas.job import MatchingJobResponse
from jobly.schemas.user import (
    UserCreateRequest,
    UserCreateResponse,
    UserDetailResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserCreateResponse)
def create_user(
    request: UserCreateRequest,
    admin: TokenUser = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    Add a new user, possibly an admin, with a generated password.

    Returns the user and a token for them.

    Authorization required: admin
    """
    user = user_crud.register(
        db,
        username=request.username,
        password=secrets.token_urlsafe(16),
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        is_admin=request.is_admin,
    )
    token = create_access_token(user["username"], user["is_admin"])

    logger.info(f"Admin {admin.username} created user {user['username']} (is_admin={user['is_admin']})")

    return {"user": user, "token": token}


@router.get("/", response_model=Dict[str, List[UserResponse]])
def list_users(
    admin: TokenUser = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    List all users.

    Authorization required: admin
    """
    return {"users": user_crud.get_multi(db)}


@router.get("/{username}", response_model=Dict[str, UserDetailResponse])
def get_user(
    username: str,
    current_user: TokenUser = Depends(ensure_admin_or_self),
    db: Session = Depends(get_db)
):
    """
    Retrieve a user with the ids of the jobs they applied to.

    Authorization required: admin or self
    """
    return {"user": user_crud.get_by_username(db, username)}


@router.patch("/{username}", response_model=Dict[str, UserResponse])
def update_user(
    username: str,
    request: UserUpdateRequest,
    current_user: TokenUser = Depends(ensure_admin_or_self),
    db: Session = Depends(get_db)
):
    """
    Update any of a user's firstName, lastName, password and email.

    Authorization required: admin or self
    """
    user = user_crud.update(db, username, request.model_dump(by_alias=True, exclude_unset=True))
    logger.info(f"Updated user {username} (by {current_user.username})")
    return {"user": user}


@router.delete("/{username}")
def delete_user(
    username: str,
    current_user: TokenUser = Depends(ensure_admin_or_self),
    db: Session = Depends(get_db)
):
    """
    Delete a user.

    Authorization required: admin or self
    """
    user_crud.delete(db, username)
    logger.info(f"Deleted user {username} (by {current_user.username})")
    return {"deleted": username}


@router.post("/{username}/jobs/{id}", status_code=201)
def apply_to_job(
    username: str,
    current_user: TokenUser = Depends(ensure_admin_or_self),
    job_id: Union[int, float] = Depends(job_id_param),
    db: Session = Depends(get_db)
):
    """
    Apply a user to a job.

    Authorization required: admin or self
    """
    application = user_crud.apply_to_job(db, username, job_id)
    logger.info(f"User {username} applied to job {job_id}")
    return {"applied": application["job_id"]}


@router.get("/{username}/matchingJobs", response_model=Dict[str, List[MatchingJobResponse]])
def matching_jobs(
    username: str,
    current_user: TokenUser = Depends(ensure_admin_or_self),
    db: Session = Depends(get_db)
):
    """
    List jobs that share technologies with the user, with the shared technologies.

    Authorization required: admin or self
    """
    return {"jobs": user_crud.match_jobs(db, username)}
