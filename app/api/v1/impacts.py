"""Impact endpoints. Each impact belongs to a project and links to zero or more SDGs."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import CurrentUser
from app.core.database import atomic, get_db
from app.core.errors import NotFoundError
from app.models import Impact, ImpactSdg
from app.schemas.impact import ImpactRead, ImpactWrite
from app.services import consistency
from app.services.permissions import get_project_or_404
from app.services.sdgs import ensure_sdgs_exist

router = APIRouter()


def _get_impact_or_404(db: Session, impact_id: int) -> Impact:
    impact = db.get(Impact, impact_id)
    if impact is None:
        raise NotFoundError.for_entity("Impact", impact_id)
    return impact


def _apply(impact: Impact, body: ImpactWrite) -> None:
    impact.project_id = body.project_id
    impact.type = body.type.value
    impact.score = body.score
    impact.dimension = body.dimension.value
    impact.relation = body.relation.value
    impact.title = body.title
    impact.description = body.description


@router.get("", response_model=list[ImpactRead])
def list_impacts(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> list[Impact]:
    return db.query(Impact).order_by(Impact.id).all()


@router.get("/{impact_id}", response_model=ImpactRead)
def get_impact(
    impact_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> Impact:
    return _get_impact_or_404(db, impact_id)


@router.post("", response_model=ImpactRead, status_code=status.HTTP_201_CREATED)
def create_impact(
    body: ImpactWrite,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> Impact:
    """Create an impact and its SDG links in one transaction."""
    get_project_or_404(db, body.project_id)
    ensure_sdgs_exist(db, body.sdg_ids)
    impact = Impact()
    _apply(impact, body)
    with atomic(db):
        db.add(impact)
        db.flush()
        db.add_all(ImpactSdg(impact_id=impact.id, sdg_id=sdg_id) for sdg_id in body.sdg_ids)
    db.refresh(impact)
    return impact


@router.put("/{impact_id}", response_model=ImpactRead)
def update_impact(
    impact_id: int,
    body: ImpactWrite,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> Impact:
    """Replace the impact's fields and its full SDG set."""
    impact = _get_impact_or_404(db, impact_id)
    get_project_or_404(db, body.project_id)
    ensure_sdgs_exist(db, body.sdg_ids)
    with atomic(db):
        _apply(impact, body)
        db.query(ImpactSdg).filter(ImpactSdg.impact_id == impact.id).delete(
            synchronize_session=False
        )
        db.add_all(ImpactSdg(impact_id=impact.id, sdg_id=sdg_id) for sdg_id in body.sdg_ids)
    db.refresh(impact)
    return impact


@router.delete("/{impact_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_impact(
    impact_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> Response:
    impact = _get_impact_or_404(db, impact_id)
    consistency.delete_impact(db, impact)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
