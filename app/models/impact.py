"""ORM models for impact entries, the SDG reference table and their association."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base, CreatedAtMixin, UpdatedAtMixin


class Sdg(Base):
    """UN Sustainable Development Goal (reference data, ids 1-17, read-only)."""

    __tablename__ = "sdgs"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(200), nullable=False)


class Impact(CreatedAtMixin, UpdatedAtMixin, Base):
    """
    Scored sustainability effect recorded on a project.

    score: integer 1-10. type: canvas section tag. dimension and relation are
    stored as their enum string values.
    """

    __tablename__ = "impacts"
    __table_args__ = (
        CheckConstraint("score BETWEEN 1 AND 10", name="ck_impacts_score_range"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(String(16), nullable=False)
    score = Column(Integer, nullable=False)
    dimension = Column(String(32), nullable=False)
    relation = Column(String(32), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(String(2000), nullable=False, default="")

    sdg_links = relationship("ImpactSdg", order_by="ImpactSdg.sdg_id", viewonly=True)

    @property
    def sdg_ids(self) -> list[int]:
        return [link.sdg_id for link in self.sdg_links]


class ImpactSdg(Base):
    """Join row between an impact and an SDG (composite primary key)."""

    __tablename__ = "impact_sdgs"

    impact_id = Column(
        Integer,
        ForeignKey("impacts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    sdg_id = Column(
        Integer,
        ForeignKey("sdgs.id"),
        primary_key=True,
    )
