"""Collaboration and ownership consistency rules.

Cascades are spelled out here instead of being left to database foreign-key
actions, so each removal is one explicit unit of work:

- deleting an impact removes its SDG links;
- deleting a project removes its impacts, their SDG links and its collaborators;
- removing a project's owner transfers ownership to the earliest-added
  collaborator, or deletes the project when there is none;
- deleting a user releases every project its profile owns (by the rule above),
  removes its collaborations, then its profile, then the account.

Helpers prefixed with ``_stage`` only queue work in the session; the public
functions wrap them in a single ``atomic`` block.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.database import atomic
from app.core.errors import ConflictError, NotFoundError
from app.models import Impact, ImpactSdg, Profile, Project, ProjectCollaborator, User
from app.models.enums import CollaboratorRole, UserRole

logger = logging.getLogger(__name__)


class RemovalKind(str, Enum):
    REMOVED = "removed"
    OWNERSHIP_TRANSFERRED = "ownership_transferred"
    PROJECT_DELETED = "project_deleted"


@dataclass(frozen=True)
class RemovalOutcome:
    kind: RemovalKind
    new_owner_profile_id: int | None = None


@dataclass
class ReleaseSummary:
    """Counts of what happened to projects owned by departing profiles."""

    projects_deleted: list[int] = field(default_factory=list)
    projects_transferred: dict[int, int] = field(default_factory=dict)
    collaborations_deleted: int = 0


def _stage_impact_link_deletion(db: Session, impact_ids) -> None:
    db.query(ImpactSdg).filter(ImpactSdg.impact_id.in_(impact_ids)).delete(
        synchronize_session=False
    )


def _stage_project_deletion(db: Session, project_id: int) -> None:
    impact_ids = select(Impact.id).where(Impact.project_id == project_id)
    _stage_impact_link_deletion(db, impact_ids)
    db.query(Impact).filter(Impact.project_id == project_id).delete(
        synchronize_session=False
    )
    db.query(ProjectCollaborator).filter(
        ProjectCollaborator.project_id == project_id
    ).delete(synchronize_session=False)
    db.query(Project).filter(Project.id == project_id).delete(synchronize_session=False)


def _first_successor(
    db: Session, project_id: int, excluded_profile_ids: set[int]
) -> ProjectCollaborator | None:
    """Earliest-added collaborator row whose profile is not excluded."""
    query = db.query(ProjectCollaborator).filter(
        ProjectCollaborator.project_id == project_id
    )
    if excluded_profile_ids:
        query = query.filter(ProjectCollaborator.profile_id.notin_(sorted(excluded_profile_ids)))
    return query.order_by(ProjectCollaborator.id).first()


def _stage_owner_release(
    db: Session, project: Project, excluded_profile_ids: set[int]
) -> RemovalOutcome:
    successor = _first_successor(db, project.id, excluded_profile_ids)
    if successor is None:
        _stage_project_deletion(db, project.id)
        return RemovalOutcome(RemovalKind.PROJECT_DELETED)
    new_owner_id = successor.profile_id
    project.profile_id = new_owner_id
    # Owner is tracked on the project, not as a collaborator row.
    db.delete(successor)
    db.flush()
    return RemovalOutcome(RemovalKind.OWNERSHIP_TRANSFERRED, new_owner_id)


def _stage_profile_deletion(db: Session, profile_id: int) -> None:
    """Delete a profile that no longer owns projects. Owned projects block deletion."""
    owned = db.query(Project.id).filter(Project.profile_id == profile_id).first()
    if owned is not None:
        raise ConflictError(f"Profile with ID {profile_id} still owns projects")
    db.query(Profile).filter(Profile.id == profile_id).delete(synchronize_session=False)


def delete_impact(db: Session, impact: Impact) -> None:
    """Delete an impact together with its SDG links."""
    impact_id = impact.id
    with atomic(db):
        _stage_impact_link_deletion(db, [impact_id])
        db.query(Impact).filter(Impact.id == impact_id).delete(synchronize_session=False)
    logger.info("Deleted impact %s", impact_id)


def delete_project(db: Session, project: Project) -> None:
    """Delete a project with its impacts, their SDG links and its collaborators."""
    project_id = project.id
    with atomic(db):
        _stage_project_deletion(db, project_id)
    logger.info("Deleted project %s", project_id)


def add_collaborator(
    db: Session,
    project: Project,
    email: str,
    role: CollaboratorRole = CollaboratorRole.EDITOR,
) -> ProjectCollaborator:
    """
    Add the profile of the user with this email to the project.

    Raises NotFoundError if no such user/profile exists, ConflictError if the
    profile already owns or collaborates on the project.
    """
    profile = (
        db.query(Profile)
        .join(User, User.id == Profile.user_id)
        .filter(User.email == email)
        .first()
    )
    if profile is None:
        raise NotFoundError(f"User with email {email} not found")
    if project.profile_id == profile.id:
        raise ConflictError("User is already the owner of this project")
    existing = (
        db.query(ProjectCollaborator.id)
        .filter(
            ProjectCollaborator.project_id == project.id,
            ProjectCollaborator.profile_id == profile.id,
        )
        .first()
    )
    if existing is not None:
        raise ConflictError("User is already a collaborator on this project")

    collaborator = ProjectCollaborator(
        project_id=project.id,
        profile_id=profile.id,
        role=role.value,
    )
    with atomic(db, conflict_message="User is already a collaborator on this project"):
        db.add(collaborator)
    db.refresh(collaborator)
    logger.info(
        "Added profile %s to project %s as %s", profile.id, project.id, role.value
    )
    return collaborator


def remove_collaborator(db: Session, project: Project, profile_id: int) -> RemovalOutcome:
    """
    Remove a profile from a project.

    A non-owner loses its collaborator row. Removing the owner hands the
    project to the earliest-added collaborator (whose row is then dropped),
    or deletes the project when nobody else is on it.
    """
    project_id = project.id
    if project.profile_id != profile_id:
        collaborator = (
            db.query(ProjectCollaborator)
            .filter(
                ProjectCollaborator.project_id == project_id,
                ProjectCollaborator.profile_id == profile_id,
            )
            .first()
        )
        if collaborator is None:
            raise NotFoundError(
                f"Collaborator with profile ID {profile_id} not found in project {project_id}"
            )
        with atomic(db):
            db.delete(collaborator)
        logger.info("Removed profile %s from project %s", profile_id, project_id)
        return RemovalOutcome(RemovalKind.REMOVED)

    with atomic(db):
        outcome = _stage_owner_release(db, project, {profile_id})
    if outcome.kind is RemovalKind.OWNERSHIP_TRANSFERRED:
        logger.info(
            "Ownership of project %s transferred from profile %s to %s",
            project_id,
            profile_id,
            outcome.new_owner_profile_id,
        )
    else:
        logger.info(
            "Owner profile %s removed from project %s with no collaborators; project deleted",
            profile_id,
            project_id,
        )
    return outcome


def _stage_profiles_departure(db: Session, profile_ids: set[int]) -> ReleaseSummary:
    """Release owned projects and drop collaborations of departing profiles."""
    summary = ReleaseSummary()
    if not profile_ids:
        return summary
    owned = (
        db.query(Project)
        .filter(Project.profile_id.in_(sorted(profile_ids)))
        .order_by(Project.id)
        .all()
    )
    for project in owned:
        project_id = project.id
        outcome = _stage_owner_release(db, project, profile_ids)
        if outcome.kind is RemovalKind.PROJECT_DELETED:
            summary.projects_deleted.append(project_id)
        else:
            summary.projects_transferred[project_id] = outcome.new_owner_profile_id
    summary.collaborations_deleted = (
        db.query(ProjectCollaborator)
        .filter(ProjectCollaborator.profile_id.in_(sorted(profile_ids)))
        .delete(synchronize_session=False)
    )
    for profile_id in sorted(profile_ids):
        _stage_profile_deletion(db, profile_id)
    return summary


def delete_user(db: Session, user: User) -> ReleaseSummary:
    """Delete an account, its profile and everything the profile exclusively owns."""
    user_id = user.id
    profile_ids = {
        pid for (pid,) in db.query(Profile.id).filter(Profile.user_id == user_id).all()
    }
    with atomic(db):
        summary = _stage_profiles_departure(db, profile_ids)
        db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
    logger.info(
        "Deleted user %s: projects_deleted=%s projects_transferred=%s",
        user_id,
        len(summary.projects_deleted),
        len(summary.projects_transferred),
    )
    return summary


def delete_all_non_admin_users(db: Session) -> tuple[int, ReleaseSummary]:
    """Delete every non-admin account in one transaction. Returns (users_deleted, summary)."""
    user_ids = [
        uid
        for (uid,) in db.query(User.id).filter(User.role != UserRole.ADMIN.value).all()
    ]
    if not user_ids:
        return 0, ReleaseSummary()
    profile_ids = {
        pid
        for (pid,) in db.query(Profile.id).filter(Profile.user_id.in_(user_ids)).all()
    }
    with atomic(db):
        summary = _stage_profiles_departure(db, profile_ids)
        db.query(User).filter(User.id.in_(user_ids)).delete(synchronize_session=False)
    logger.info(
        "Deleted %s non-admin users: projects_deleted=%s projects_transferred=%s",
        len(user_ids),
        len(summary.projects_deleted),
        len(summary.projects_transferred),
    )
    return len(user_ids), summary
