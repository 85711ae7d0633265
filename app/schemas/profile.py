"""Request/response schemas for profile endpoints."""

from pydantic import Field

from app.schemas.base import CamelModel


class ProfileRead(CamelModel):
    id: int
    name: str
    profile_url: str | None = None
    job_title: str | None = None
    department: str | None = None
    organization: str | None = None
    location: str | None = None
    role: str | None = Field(default=None, description="Role of the owning user")


class ProfileUpdate(CamelModel):
    """Partial update: only fields present in the body are written."""

    name: str | None = Field(default=None, max_length=255)
    profile_url: str | None = None
    job_title: str | None = Field(default=None, max_length=255)
    department: str | None = Field(default=None, max_length=255)
    organization: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=255)


class ProfilePictureUpload(CamelModel):
    image_data: str = Field(..., min_length=1, description="Image as a data URL or other opaque string")


class ProfilePictureResponse(CamelModel):
    profile_url: str
