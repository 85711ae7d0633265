"""Account endpoints: email change, admin bootstrap and admin user management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import AdminUser, CurrentUser, OptionalUser
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.models import User
from app.schemas.auth import (
    AccountCreatedResponse,
    CreateAdminRequest,
    DeleteNonAdminUsersResponse,
    UpdateEmailRequest,
    UserSummary,
)
from app.services import accounts, consistency

router = APIRouter()


@router.put("/email", response_model=UserSummary)
def update_email(
    body: UpdateEmailRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: CurrentUser,
) -> UserSummary:
    """Change the caller's login email (409 if another user already has it)."""
    return accounts.update_email(db, current_user.user_id, body.email)


@router.post(
    "/admin/create",
    response_model=AccountCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_admin(
    body: CreateAdminRequest,
    db: Annotated[Session, Depends(get_db)],
    _caller: OptionalUser,
) -> AccountCreatedResponse:
    """Create an admin account. Requires the current master password (case-sensitive)."""
    return accounts.create_admin(
        db,
        email=body.email,
        password=body.password,
        name=body.name,
        master_password=body.master_password,
    )


@router.get("/admin/all", response_model=list[UserSummary])
def list_users(
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> list[UserSummary]:
    """List all users with their profile summary (admin only)."""
    return accounts.list_users(db)


@router.delete("/admin/delete-all-non-admin", response_model=DeleteNonAdminUsersResponse)
def delete_all_non_admin_users(
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> DeleteNonAdminUsersResponse:
    """
    Delete every non-admin user with their profiles. Projects they own pass to a
    remaining collaborator when there is one, otherwise they are deleted.
    """
    deleted_count, summary = consistency.delete_all_non_admin_users(db)
    return DeleteNonAdminUsersResponse(
        message=f"Successfully deleted {deleted_count} non-admin user(s) and their associated data",
        deleted_count=deleted_count,
        projects_deleted=len(summary.projects_deleted),
        projects_transferred=len(summary.projects_transferred),
        collaborations_deleted=summary.collaborations_deleted,
    )


@router.delete("/admin/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete a user, its profile and the projects only it was on (admin only)."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError.for_entity("User", user_id)
    consistency.delete_user(db, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
