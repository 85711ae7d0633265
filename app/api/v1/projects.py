"""Project endpoints: CRUD, collaborators, impacts of a project and analytics."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.v1.auth import CurrentUser
from app.core.database import atomic, get_db
from app.models import Impact, Profile, Project, ProjectCollaborator, User
from app.models.enums import CollaboratorRole
from app.schemas.analysis import ProjectAnalysis
from app.schemas.impact import ImpactRead
from app.schemas.project import (
    CollaboratorCreate,
    CollaboratorRead,
    OwnerRemovalResponse,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from app.services import consistency
from app.services.analysis import analyze
from app.services.consistency import RemovalKind
from app.services.permissions import (
    ensure_project_member,
    get_caller_profile,
    get_project_or_404,
)

router = APIRouter()


@router.get("", response_model=list[ProjectRead])
def list_projects(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> list[Project]:
    return db.query(Project).order_by(Project.id).all()


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: CurrentUser,
) -> Project:
    """Create a project owned by the caller's profile."""
    owner = get_caller_profile(db, current_user)
    project = Project(
        profile_id=owner.id,
        title=body.title,
        description=body.description,
    )
    with atomic(db):
        db.add(project)
    db.refresh(project)
    return project


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(
    project_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> Project:
    return get_project_or_404(db, project_id)


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    body: ProjectUpdate,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> Project:
    """Update title and description. Ownership changes only through collaborator removal."""
    project = get_project_or_404(db, project_id)
    with atomic(db):
        project.title = body.title
        project.description = body.description
    db.refresh(project)
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> Response:
    """Delete the project with its impacts, their SDG links and its collaborators."""
    project = get_project_or_404(db, project_id)
    consistency.delete_project(db, project)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{project_id}/analysis", response_model=ProjectAnalysis)
def get_project_analysis(
    project_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: CurrentUser,
) -> ProjectAnalysis:
    """
    Summary counts plus relation, dimension and SDG distributions over the
    project's impacts. Only the owner and collaborators may view it.
    """
    project = get_project_or_404(db, project_id)
    ensure_project_member(db, project, current_user)
    impacts = db.query(Impact).filter(Impact.project_id == project.id).all()
    return analyze(impacts)


@router.get("/{project_id}/impacts", response_model=list[ImpactRead])
def list_project_impacts(
    project_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> list[Impact]:
    return (
        db.query(Impact)
        .filter(Impact.project_id == project_id)
        .order_by(Impact.id)
        .all()
    )


@router.get("/{project_id}/collaborators", response_model=list[CollaboratorRead])
def list_collaborators(
    project_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> list[CollaboratorRead]:
    """Owner first (role Owner), then collaborators in the order they were added."""
    project = get_project_or_404(db, project_id)
    entries: list[CollaboratorRead] = []

    owner = (
        db.query(Profile, User.email)
        .join(User, User.id == Profile.user_id)
        .filter(Profile.id == project.profile_id)
        .first()
    )
    if owner is not None:
        profile, email = owner
        entries.append(
            CollaboratorRead(
                profile_id=profile.id,
                name=profile.name,
                profile_url=profile.profile_url,
                email=email,
                role=CollaboratorRole.OWNER.value,
            )
        )

    rows = (
        db.query(ProjectCollaborator, Profile, User.email)
        .join(Profile, Profile.id == ProjectCollaborator.profile_id)
        .join(User, User.id == Profile.user_id)
        .filter(
            ProjectCollaborator.project_id == project.id,
            ProjectCollaborator.profile_id != project.profile_id,
        )
        .order_by(ProjectCollaborator.id)
        .all()
    )
    for collaborator, profile, email in rows:
        entries.append(
            CollaboratorRead(
                profile_id=profile.id,
                name=profile.name,
                profile_url=profile.profile_url,
                email=email,
                role=collaborator.role,
            )
        )
    return entries


@router.post(
    "/{project_id}/collaborators",
    response_model=CollaboratorRead,
    status_code=status.HTTP_201_CREATED,
)
def add_collaborator(
    project_id: int,
    body: CollaboratorCreate,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> CollaboratorRead:
    """Add the user with this email (409 if already owner or collaborator)."""
    project = get_project_or_404(db, project_id)
    collaborator = consistency.add_collaborator(
        db, project, body.email, CollaboratorRole(body.role)
    )
    profile = db.get(Profile, collaborator.profile_id)
    return CollaboratorRead(
        profile_id=profile.id,
        name=profile.name,
        profile_url=profile.profile_url,
        email=body.email,
        role=collaborator.role,
    )


@router.delete("/{project_id}/collaborators/{profile_id}", response_model=None)
def remove_collaborator(
    project_id: int,
    profile_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> Response:
    """
    Remove a collaborator (204). Removing the owner returns 200 with the outcome:
    ownership passes to the earliest-added collaborator, or the project is
    deleted when it has no other collaborator.
    """
    project = get_project_or_404(db, project_id)
    outcome = consistency.remove_collaborator(db, project, profile_id)
    if outcome.kind is RemovalKind.REMOVED:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    body = OwnerRemovalResponse(
        ownership_transferred=outcome.kind is RemovalKind.OWNERSHIP_TRANSFERRED,
        new_owner_profile_id=outcome.new_owner_profile_id,
        project_deleted=outcome.kind is RemovalKind.PROJECT_DELETED,
    )
    return JSONResponse(content=body.model_dump(by_alias=True))
