# samyukta/services/registration_service.py
"""
Registration Service

Handles business logic for:
- Team registration behind the capacity gate
- Direct join once the event passes its soft threshold
- QR generation for every registered member
- Review (approve / status changes) and code validation
"""

import logging
import threading
from typing import Optional

from sqlalchemy.orm import Session

from samyukta.constants.tracks import RegistrationStatus, TicketType, WorkshopTrack
from samyukta.core.exceptions import RegistrationNotFoundError
from samyukta.crud.crud_registration import registration as registration_crud
from samyukta.models.registration import Registration
from samyukta.schemas.registration import (
    DirectJoinCreate,
    RegistrationCreate,
    RegistrationValidation,
    ValidatedRegistration,
)
from samyukta.services.capacity.slot_service import SlotDecisionService
from samyukta.services.check_in.qr_generator import QRCodeService

logger = logging.getLogger(__name__)

# Serializes the capacity check and the insert inside one process, so two
# requests handled by the same worker cannot both pass a track that the
# first one closes. Separate worker processes are not covered.
_registration_lock = threading.Lock()


class RegistrationService:
    def __init__(self, slot_service: SlotDecisionService, qr_service: QRCodeService):
        self.slot_service = slot_service
        self.qr_service = qr_service

    # ========================================
    # Registration
    # ========================================

    def register(self, db: Session, obj_in: RegistrationCreate) -> Registration:
        with _registration_lock:
            self.slot_service.ensure_can_register(
                db, obj_in.workshop_track, obj_in.competition_track
            )
            db_obj = self._persist(
                db,
                obj_in,
                ticket_type=obj_in.ticket_type,
                workshop_track=obj_in.workshop_track,
                total_amount=obj_in.total_amount,
            )
        logger.info(
            f"Registered team {db_obj.team_id} ({db_obj.team_size} members, "
            f"{db_obj.workshop_track.value}/{db_obj.competition_track.value})"
        )
        return db_obj

    def direct_join(self, db: Session, obj_in: DirectJoinCreate) -> Registration:
        """Competition-only registration, priced per member."""
        with _registration_lock:
            self.slot_service.ensure_direct_join_available(db)
            self.slot_service.ensure_can_register(
                db, WorkshopTrack.NONE, obj_in.competition_track
            )
            price = self.slot_service.limits.direct_join_price(obj_in.competition_track)
            db_obj = self._persist(
                db,
                obj_in,
                ticket_type=TicketType.DIRECT_JOIN,
                workshop_track=WorkshopTrack.NONE,
                total_amount=price * obj_in.team_size,
            )
        logger.info(
            f"Direct join for team {db_obj.team_id} in {db_obj.competition_track.value}, "
            f"amount {db_obj.total_amount}"
        )
        return db_obj

    def _persist(self, db: Session, obj_in, **fields) -> Registration:
        """Creates the rows and member QR codes in one transaction."""
        try:
            db_obj = registration_crud.create_with_members(db, obj_in=obj_in, commit=False, **fields)
            for member in db_obj.members:
                self.qr_service.generate(db, member)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to persist registration: {e}")
            raise
        db.refresh(db_obj)
        return db_obj

    # ========================================
    # Review
    # ========================================

    def get(self, db: Session, team_id: str) -> Registration:
        db_obj = registration_crud.get_by_team_id(db, team_id=team_id)
        if db_obj is None:
            raise RegistrationNotFoundError(team_id)
        return db_obj

    def set_status(self, db: Session, team_id: str, status: RegistrationStatus) -> Registration:
        db_obj = self.get(db, team_id)
        previous = db_obj.status
        db_obj = registration_crud.update_status(db, db_obj=db_obj, status=status)
        logger.info(f"Team {team_id} status {previous.value} -> {status.value}")
        return db_obj

    def approve(self, db: Session, team_id: str) -> Registration:
        return self.set_status(db, team_id, RegistrationStatus.CONFIRMED)

    def validate(self, db: Session, code: Optional[str]) -> RegistrationValidation:
        """Looks up a registration by team id or registration code."""
        if not code or not code.strip():
            return RegistrationValidation(valid=False, error="Registration code is required")
        db_obj = registration_crud.get_by_code(db, code=code.strip())
        if db_obj is None:
            return RegistrationValidation(valid=False, error="Invalid registration code")
        return RegistrationValidation(
            valid=True, registration=ValidatedRegistration.model_validate(db_obj)
        )
