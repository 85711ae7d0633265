"""Pydantic request/response schemas."""

from app.schemas.analysis import ProjectAnalysis
from app.schemas.auth import TokenIdentity, UserSummary
from app.schemas.health import HealthResponse
from app.schemas.impact import ImpactRead, ImpactWrite, SdgRead
from app.schemas.profile import ProfileRead, ProfileUpdate
from app.schemas.project import (
    CollaboratorCreate,
    CollaboratorRead,
    OwnerRemovalResponse,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)

__all__ = [
    "CollaboratorCreate",
    "CollaboratorRead",
    "HealthResponse",
    "ImpactRead",
    "ImpactWrite",
    "OwnerRemovalResponse",
    "ProfileRead",
    "ProfileUpdate",
    "ProjectAnalysis",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "SdgRead",
    "TokenIdentity",
    "UserSummary",
]
