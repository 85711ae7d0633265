"""Admin management of the registration code and the admin-bootstrap master password."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import AdminUser
from app.core.database import get_db
from app.schemas.auth import (
    MasterPasswordRequest,
    MasterPasswordResponse,
    RegistrationCodeRequest,
    RegistrationCodeResponse,
)
from app.services import gate_settings

router = APIRouter()


@router.get("/registration-code", response_model=RegistrationCodeResponse)
def get_registration_code(
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> RegistrationCodeResponse:
    return RegistrationCodeResponse(code=gate_settings.registration_code.get(db))


@router.post("/registration-code", response_model=RegistrationCodeResponse)
def set_registration_code(
    body: RegistrationCodeRequest,
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> RegistrationCodeResponse:
    """Replace the registration code; effective for the next registration."""
    gate_settings.registration_code.set(db, body.code)
    return RegistrationCodeResponse(
        message="Registration code updated successfully",
        code=body.code,
    )


@router.get("/master-password", response_model=MasterPasswordResponse)
def get_master_password(
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> MasterPasswordResponse:
    return MasterPasswordResponse(password=gate_settings.master_password.get(db))


@router.post("/master-password", response_model=MasterPasswordResponse)
def set_master_password(
    body: MasterPasswordRequest,
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> MasterPasswordResponse:
    """Replace the master password; effective for the next admin bootstrap."""
    gate_settings.master_password.set(db, body.new_master_password)
    return MasterPasswordResponse(
        message="Master password updated successfully",
        password=body.new_master_password,
    )
