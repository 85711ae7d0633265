"""ORM models for login accounts and their public profiles."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.models.enums import UserRole


class User(Base):
    """
    Login account for JWT authentication and role-based access control.

    role: 'User' or 'Admin'. Email is unique and compared case-sensitively.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=UserRole.USER.value)

    profile = relationship("Profile", uselist=False, viewonly=True)


class Profile(Base):
    """Public identity of a user. Exactly one per user."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    name = Column(String(255), nullable=False, default="")
    # Avatar reference; stored as an opaque string (URL or data URL).
    profile_url = Column(Text, nullable=True)
    job_title = Column(String(255), nullable=True)
    department = Column(String(255), nullable=True)
    organization = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)

    user = relationship("User", viewonly=True)
