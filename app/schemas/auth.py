"""Request/response schemas for authentication, account and gate-setting endpoints."""

from pydantic import BaseModel, Field

from app.models.enums import UserRole
from app.schemas.base import CamelModel


class TokenIdentity(BaseModel):
    """Identity extracted from a validated access token."""

    user_id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        """Case-insensitive comparison against the literal admin role name."""
        return self.role.lower() == UserRole.ADMIN.value.lower()


class RegisterRequest(CamelModel):
    """Self-registration; requires the current registration code."""

    email: str = Field(..., min_length=3, max_length=255, description="Login email")
    password: str = Field(..., min_length=8, max_length=128, description="Password")
    name: str = Field(default="", max_length=255, description="Display name for the profile")
    registration_code: str = Field(..., min_length=1, description="Current registration gate code")


class CreateAdminRequest(CamelModel):
    """Admin bootstrap; requires the current master password."""

    email: str = Field(..., min_length=3, max_length=255, description="Login email")
    password: str = Field(..., min_length=8, max_length=128, description="Password")
    name: str = Field(default="", max_length=255, description="Display name for the profile")
    master_password: str = Field(..., min_length=1, description="Current master password")


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Login email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class UpdateEmailRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=255, description="New login email")


class ProfileSummary(CamelModel):
    id: int
    name: str


class UserSummary(CamelModel):
    """User entry without password hash."""

    id: int
    email: str
    role: str
    profile: ProfileSummary | None = None


class AccountCreatedResponse(CamelModel):
    """Returned by registration and admin bootstrap."""

    id: int
    email: str
    role: str
    token: str
    profile: ProfileSummary


class LoginResponse(CamelModel):
    message: str = "Login successful"
    token: str
    user: UserSummary


class DeleteNonAdminUsersResponse(CamelModel):
    message: str
    deleted_count: int
    projects_deleted: int
    projects_transferred: int
    collaborations_deleted: int


class RegistrationCodeRequest(CamelModel):
    code: str = Field(..., min_length=1, max_length=255, description="New registration code")


class RegistrationCodeResponse(CamelModel):
    message: str | None = None
    code: str


class MasterPasswordRequest(CamelModel):
    new_master_password: str = Field(..., min_length=1, max_length=255, description="New master password")


class MasterPasswordResponse(CamelModel):
    message: str | None = None
    password: str
