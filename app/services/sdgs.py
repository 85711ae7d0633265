"""UN Sustainable Development Goals reference data."""

import logging

from sqlalchemy.orm import Session

from app.core.database import atomic
from app.core.errors import NotFoundError
from app.models import Sdg

logger = logging.getLogger(__name__)

# Index + 1 is the SDG id.
SDG_TITLES: tuple[str, ...] = (
    "No Poverty",
    "Zero Hunger",
    "Good Health and Well-being",
    "Quality Education",
    "Gender Equality",
    "Clean Water and Sanitation",
    "Affordable and Clean Energy",
    "Decent Work and Economic Growth",
    "Industry, Innovation and Infrastructure",
    "Reduced Inequality",
    "Sustainable Cities and Communities",
    "Responsible Consumption and Production",
    "Climate Action",
    "Life Below Water",
    "Life on Land",
    "Peace, Justice and Strong Institutions",
    "Partnerships for the Goals",
)

SDG_IDS: frozenset[int] = frozenset(range(1, len(SDG_TITLES) + 1))


def seed_sdgs(db: Session) -> int:
    """Insert any missing SDG rows. Idempotent; returns the number inserted."""
    existing = {sdg_id for (sdg_id,) in db.query(Sdg.id).all()}
    missing = [
        Sdg(id=i, title=title)
        for i, title in enumerate(SDG_TITLES, start=1)
        if i not in existing
    ]
    if not missing:
        return 0
    with atomic(db):
        db.add_all(missing)
    logger.info("Seeded %s SDG rows", len(missing))
    return len(missing)


def ensure_sdgs_exist(db: Session, sdg_ids: list[int]) -> None:
    """Raise NotFoundError naming the first id that is not a stored SDG."""
    if not sdg_ids:
        return
    found = {sdg_id for (sdg_id,) in db.query(Sdg.id).filter(Sdg.id.in_(sdg_ids)).all()}
    for sdg_id in sdg_ids:
        if sdg_id not in found:
            raise NotFoundError.for_entity("Sdg", sdg_id)
