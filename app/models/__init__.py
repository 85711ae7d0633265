"""SQLAlchemy ORM models."""

from app.models.app_setting import AppSetting
from app.models.base import Base
from app.models.impact import Impact, ImpactSdg, Sdg
from app.models.project import Project, ProjectCollaborator
from app.models.user import Profile, User

__all__ = [
    "AppSetting",
    "Base",
    "Impact",
    "ImpactSdg",
    "Profile",
    "Project",
    "ProjectCollaborator",
    "Sdg",
    "User",
]
