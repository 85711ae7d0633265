"""Health check endpoint with a database connectivity probe."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import OptionalUser
from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()

SERVICE_NAME = "sustainability-canvas-api"


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    _caller: OptionalUser,
) -> HealthResponse:
    """
    Report service status and whether the database answers a trivial query.
    Open to anonymous callers so load balancers can poll it.
    """
    return HealthResponse(
        service=SERVICE_NAME,
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
