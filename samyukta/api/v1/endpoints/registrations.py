# samyukta/api/v1/endpoints/registrations.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from samyukta.api import deps
from samyukta.constants.tracks import CompetitionTrack, RegistrationStatus, WorkshopTrack
from samyukta.core.exceptions import RegistrationNotFoundError
from samyukta.crud import crud_registration
from samyukta.db.session import get_db
from samyukta.schemas.qr import TeamQRCodes
from samyukta.schemas.registration import (
    DirectJoinCreate,
    Registration,
    RegistrationCreate,
    RegistrationStatusUpdate,
    RegistrationSummary,
    RegistrationValidation,
)
from samyukta.schemas.token import TokenPayload
from samyukta.services.check_in.qr_generator import QRCodeService
from samyukta.services.registration_service import RegistrationService

router = APIRouter(prefix="/registrations", tags=["Registrations"])


@router.post("", response_model=Registration, status_code=status.HTTP_201_CREATED)
def create_registration(
    registration_in: RegistrationCreate,
    db: Session = Depends(get_db),
    service: RegistrationService = Depends(deps.get_registration_service),
):
    """
    Register a team of 1-4 members.

    Refused with 409 when the event, or a chosen track, is already closed.
    Each member gets a QR code, returned with the registration.
    """
    return service.register(db, registration_in)


@router.post("/direct-join", response_model=Registration, status_code=status.HTTP_201_CREATED)
def create_direct_join(
    registration_in: DirectJoinCreate,
    db: Session = Depends(get_db),
    service: RegistrationService = Depends(deps.get_registration_service),
):
    """Competition-only registration, available once the event passes its soft threshold."""
    return service.direct_join(db, registration_in)


@router.get("", response_model=List[RegistrationSummary])
def list_registrations(
    status_filter: Optional[RegistrationStatus] = Query(None, alias="status"),
    college: Optional[str] = None,
    workshop_track: Optional[WorkshopTrack] = None,
    competition_track: Optional[CompetitionTrack] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    return crud_registration.registration.get_multi_filtered(
        db,
        status=status_filter,
        college=college,
        workshop_track=workshop_track,
        competition_track=competition_track,
        skip=skip,
        limit=limit,
    )


@router.get("/validate", response_model=RegistrationValidation)
def validate_registration(
    code: Optional[str] = None,
    db: Session = Depends(get_db),
    service: RegistrationService = Depends(deps.get_registration_service),
):
    """Look up a registration by team id or registration code."""
    return service.validate(db, code)


@router.get("/team-qr", response_model=TeamQRCodes)
def get_team_qr_codes(
    email: str = Query(..., min_length=3),
    db: Session = Depends(get_db),
    qr_service: QRCodeService = Depends(deps.get_qr_service),
):
    team_codes = qr_service.team_codes_for_email(db, email)
    if team_codes is None:
        raise RegistrationNotFoundError(email)
    return team_codes


@router.get("/{team_id}", response_model=Registration)
def get_registration(
    team_id: str,
    db: Session = Depends(get_db),
    service: RegistrationService = Depends(deps.get_registration_service),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    return service.get(db, team_id)


@router.post("/{team_id}/approve", response_model=Registration)
def approve_registration(
    team_id: str,
    db: Session = Depends(get_db),
    service: RegistrationService = Depends(deps.get_registration_service),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    return service.approve(db, team_id)


@router.patch("/{team_id}/status", response_model=Registration)
def update_registration_status(
    team_id: str,
    status_in: RegistrationStatusUpdate,
    db: Session = Depends(get_db),
    service: RegistrationService = Depends(deps.get_registration_service),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    return service.set_status(db, team_id, status_in.status)


@router.post("/{team_id}/qr", response_model=TeamQRCodes)
def regenerate_team_qr_codes(
    team_id: str,
    db: Session = Depends(get_db),
    qr_service: QRCodeService = Depends(deps.get_qr_service),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return qr_service.generate_for_team(db, team_id)
