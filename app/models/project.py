"""ORM models for projects and their collaborators."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint

from app.models.base import Base, CreatedAtMixin, UpdatedAtMixin
from app.models.enums import CollaboratorRole


class Project(CreatedAtMixin, UpdatedAtMixin, Base):
    """Project owned by exactly one profile (profile_id is the owner)."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    profile_id = Column(
        Integer,
        ForeignKey("profiles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    title = Column(String(200), nullable=False)
    description = Column(String(2000), nullable=True)


class ProjectCollaborator(Base):
    """Association of a non-owner profile with a project."""

    __tablename__ = "project_collaborators"
    __table_args__ = (
        UniqueConstraint("project_id", "profile_id", name="uq_project_collaborators_project_profile"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    profile_id = Column(
        Integer,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role = Column(String(32), nullable=False, default=CollaboratorRole.EDITOR.value)
