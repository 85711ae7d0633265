"""Request/response schemas for projects and collaborators."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel


class ProjectCreate(CamelModel):
    """New project; the caller's profile becomes the owner."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)


class ProjectUpdate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)


class ProjectRead(CamelModel):
    id: int
    profile_id: int
    title: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CollaboratorCreate(CamelModel):
    """Add the profile of the user with this email as a collaborator."""

    email: str = Field(..., min_length=1, max_length=255)
    role: Literal["Editor", "Viewer"] = "Editor"


class CollaboratorRead(CamelModel):
    """Collaborator listing entry; the owner is reported with role 'Owner'."""

    profile_id: int
    name: str
    profile_url: str | None = None
    email: str
    role: str


class CollaborationRead(CamelModel):
    """A profile's collaborator row together with the project it grants access to."""

    id: int
    profile_id: int
    project_id: int
    role: str
    project: ProjectRead


class OwnerRemovalResponse(CamelModel):
    """Outcome of removing a project's owner from its collaborators."""

    ownership_transferred: bool
    new_owner_profile_id: int | None = None
    project_deleted: bool
