"""Enumerations shared by ORM models, schemas and services. Values are stored as strings."""

from enum import Enum


class UserRole(str, Enum):
    USER = "User"
    ADMIN = "Admin"


class CollaboratorRole(str, Enum):
    """Owner is derived from Project.profile_id; collaborator rows hold Editor or Viewer."""

    OWNER = "Owner"
    EDITOR = "Editor"
    VIEWER = "Viewer"


class SectionType(str, Enum):
    """Canvas section an impact is recorded under."""

    KS = "KS"
    KA = "KA"
    WM = "WM"
    KTR = "KTR"
    UVP = "UVP"
    CO = "CO"
    RE = "RE"
    CS = "CS"
    CR = "CR"
    CH = "CH"
    GO = "GO"


class SustainabilityDimension(str, Enum):
    ENVIRONMENTAL = "Environmental"
    SOCIAL = "Social"
    ECONOMIC = "Economic"


class RelationType(str, Enum):
    DIRECT = "Direct"
    INDIRECT = "Indirect"
    HIDDEN = "Hidden"
