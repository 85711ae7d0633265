"""Resource-level access checks that depend on ownership and collaboration."""

import logging

from sqlalchemy.orm import Session

from app.core.errors import AuthorizationError, NotFoundError
from app.models import Profile, Project, ProjectCollaborator
from app.schemas.auth import TokenIdentity

logger = logging.getLogger(__name__)


def get_profile_or_404(db: Session, profile_id: int) -> Profile:
    profile = db.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError.for_entity("Profile", profile_id)
    return profile


def get_project_or_404(db: Session, project_id: int) -> Project:
    project = db.get(Project, project_id)
    if project is None:
        raise NotFoundError.for_entity("Project", project_id)
    return project


def get_caller_profile(db: Session, identity: TokenIdentity) -> Profile:
    """The caller's own profile. A caller without one gets NotFoundError."""
    profile = db.query(Profile).filter(Profile.user_id == identity.user_id).first()
    if profile is None:
        raise NotFoundError(f"Profile for user ID {identity.user_id} not found")
    return profile


def ensure_profile_access(profile: Profile, identity: TokenIdentity) -> None:
    """Only the owning user or an admin may read or write a profile."""
    if identity.is_admin or profile.user_id == identity.user_id:
        return
    logger.warning(
        "User %s denied access to profile %s", identity.user_id, profile.id
    )
    raise AuthorizationError("You can only access your own profile")


def is_project_member(db: Session, project: Project, profile_id: int) -> bool:
    """True if the profile owns the project or is listed as a collaborator."""
    if project.profile_id == profile_id:
        return True
    return (
        db.query(ProjectCollaborator.id)
        .filter(
            ProjectCollaborator.project_id == project.id,
            ProjectCollaborator.profile_id == profile_id,
        )
        .first()
        is not None
    )


def ensure_project_member(db: Session, project: Project, identity: TokenIdentity) -> Profile:
    """
    Require the caller to own or collaborate on the project.

    Raises NotFoundError if the caller has no profile, AuthorizationError if the
    profile is neither owner nor collaborator. Returns the caller's profile.
    """
    profile = get_caller_profile(db, identity)
    if not is_project_member(db, project, profile.id):
        logger.warning(
            "Profile %s denied access to project %s", profile.id, project.id
        )
        raise AuthorizationError("You do not have access to this project")
    return profile
