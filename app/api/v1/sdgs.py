"""SDG reference data endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import CurrentUser
from app.core.database import get_db
from app.models import Sdg
from app.schemas.impact import SdgRead

router = APIRouter()


@router.get("", response_model=list[SdgRead])
def list_sdgs(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> list[Sdg]:
    """The 17 UN Sustainable Development Goals, ordered by id."""
    return db.query(Sdg).order_by(Sdg.id).all()
