"""Profile endpoints. Reading and editing a profile is limited to its user or an admin."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import CurrentUser
from app.core.database import atomic, get_db
from app.models import Profile, Project, ProjectCollaborator, User
from app.schemas.profile import (
    ProfilePictureResponse,
    ProfilePictureUpload,
    ProfileRead,
    ProfileUpdate,
)
from app.schemas.project import CollaborationRead, ProjectRead
from app.services.permissions import ensure_profile_access, get_profile_or_404

router = APIRouter()


def _profile_read(db: Session, profile: Profile) -> ProfileRead:
    user = db.get(User, profile.user_id)
    data = ProfileRead.model_validate(profile)
    data.role = user.role if user is not None else None
    return data


@router.get("/{profile_id}", response_model=ProfileRead)
def get_profile(
    profile_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: CurrentUser,
) -> ProfileRead:
    profile = get_profile_or_404(db, profile_id)
    ensure_profile_access(profile, current_user)
    return _profile_read(db, profile)


@router.put("/{profile_id}", response_model=ProfileRead)
def update_profile(
    profile_id: int,
    body: ProfileUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: CurrentUser,
) -> ProfileRead:
    """Partial update: only fields present in the body are changed."""
    profile = get_profile_or_404(db, profile_id)
    ensure_profile_access(profile, current_user)
    changes = body.model_dump(exclude_unset=True)
    # Name is required on the profile; an explicit null keeps the current one.
    if changes.get("name") is None:
        changes.pop("name", None)
    with atomic(db):
        for field_name, value in changes.items():
            setattr(profile, field_name, value)
    db.refresh(profile)
    return _profile_read(db, profile)


@router.post("/{profile_id}/picture", response_model=ProfilePictureResponse)
def upload_profile_picture(
    profile_id: int,
    body: ProfilePictureUpload,
    db: Annotated[Session, Depends(get_db)],
    current_user: CurrentUser,
) -> ProfilePictureResponse:
    """Store the image data string as the profile's avatar reference."""
    profile = get_profile_or_404(db, profile_id)
    ensure_profile_access(profile, current_user)
    with atomic(db):
        profile.profile_url = body.image_data
    return ProfilePictureResponse(profile_url=body.image_data)


@router.get("/{profile_id}/projects", response_model=list[ProjectRead])
def list_owned_projects(
    profile_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> list[Project]:
    """Projects owned by the profile."""
    return (
        db.query(Project)
        .filter(Project.profile_id == profile_id)
        .order_by(Project.id)
        .all()
    )


@router.get("/{profile_id}/collaborations", response_model=list[CollaborationRead])
def list_collaborations(
    profile_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> list[CollaborationRead]:
    """Collaborator rows of the profile, each with its project."""
    rows = (
        db.query(ProjectCollaborator, Project)
        .join(Project, Project.id == ProjectCollaborator.project_id)
        .filter(ProjectCollaborator.profile_id == profile_id)
        .order_by(ProjectCollaborator.id)
        .all()
    )
    return [
        CollaborationRead(
            id=collaborator.id,
            profile_id=collaborator.profile_id,
            project_id=collaborator.project_id,
            role=collaborator.role,
            project=ProjectRead.model_validate(project),
        )
        for collaborator, project in rows
    ]
