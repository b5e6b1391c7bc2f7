# samyukta/api/v1/endpoints/check_in.py
"""
On-site action endpoints used by coordinators' scanners.

Each endpoint records one action for one participant and returns a
confirmation, or a 400 describing which rule refused it.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from samyukta.api import deps
from samyukta.constants.tracks import ActionKind
from samyukta.db.session import get_db
from samyukta.schemas.check_in import (
    AccommodationConfirmation,
    AccommodationRequest,
    CompetitionCheckInRequest,
    CompetitionConfirmation,
    MealConfirmation,
    MealDistributionRequest,
    WorkshopAttendanceRequest,
    WorkshopConfirmation,
)
from samyukta.schemas.token import TokenPayload
from samyukta.services.check_in.attendance_service import AttendanceService

router = APIRouter(tags=["Check-in"])


@router.post("/meals/distribute", response_model=MealConfirmation)
def distribute_meal(
    request_in: MealDistributionRequest,
    db: Session = Depends(get_db),
    service: AttendanceService = Depends(deps.get_attendance_service),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return service.authorize_action(
        db, request_in.participant_id, ActionKind.MEAL, meal_type=request_in.meal_type
    )


@router.post("/workshops/attendance", response_model=WorkshopConfirmation)
def mark_workshop_attendance(
    request_in: WorkshopAttendanceRequest,
    db: Session = Depends(get_db),
    service: AttendanceService = Depends(deps.get_attendance_service),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return service.authorize_action(
        db,
        request_in.participant_id,
        ActionKind.WORKSHOP,
        workshop_session=request_in.workshop_session,
    )


@router.post("/competitions/checkin", response_model=CompetitionConfirmation)
def check_in_competition(
    request_in: CompetitionCheckInRequest,
    db: Session = Depends(get_db),
    service: AttendanceService = Depends(deps.get_attendance_service),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return service.authorize_action(
        db,
        request_in.participant_id,
        ActionKind.COMPETITION,
        competition_type=request_in.competition_type,
    )


@router.post("/accommodation/checkin", response_model=AccommodationConfirmation)
def update_accommodation(
    request_in: AccommodationRequest,
    db: Session = Depends(get_db),
    service: AttendanceService = Depends(deps.get_attendance_service),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    """Handles both check-in and check-out, selected by `action`."""
    return service.authorize_action(
        db,
        request_in.participant_id,
        ActionKind.ACCOMMODATION,
        action=request_in.action,
        room_number=request_in.room_number,
    )
