"""ORM model for admin-managed key/value settings."""

from sqlalchemy import Column, String, Text

from app.models.base import Base, UpdatedAtMixin


class AppSetting(UpdatedAtMixin, Base):
    """One mutable setting (registration code, master password) with its update time."""

    __tablename__ = "app_settings"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
