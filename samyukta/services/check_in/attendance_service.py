# samyukta/services/check_in/attendance_service.py
"""
Attendance Service

Authorizes and records on-site actions for a participant:
- Meal distribution
- Workshop attendance
- Competition check-in
- Accommodation check-in / check-out

Every action follows the same steps: look up the participant, check the
action's own precondition, refuse a same-day duplicate, then append a log
row and return a confirmation.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Dict, Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from samyukta.constants.tracks import (
    ACCOMMODATION_TRANSITIONS,
    AccommodationAction,
    AccommodationStatus,
    ActionKind,
    CompetitionTrack,
    MealType,
    WorkshopTrack,
)
from samyukta.core.exceptions import (
    AccommodationNotRequestedError,
    CompetitionNotRegisteredError,
    CompetitionTrackMismatchError,
    DuplicateActionError,
    InvalidAccommodationTransitionError,
    ParticipantNotFoundError,
    RegistrationNotFoundError,
    WorkshopNotRegisteredError,
)
from samyukta.crud import crud_attendance
from samyukta.crud.crud_attendance import CRUDActionLog
from samyukta.crud.crud_registration import team_member as team_member_crud
from samyukta.models.team_member import TeamMember
from samyukta.schemas.check_in import (
    AccommodationConfirmation,
    AccommodationParticipant,
    CompetitionConfirmation,
    CompetitionParticipant,
    MealConfirmation,
    MealParticipant,
    WorkshopConfirmation,
    WorkshopParticipant,
)

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class AttendanceService:
    """Precondition checks and append-only logging for on-site actions."""

    def __init__(self):
        self._handlers: Dict[ActionKind, Callable[..., BaseModel]] = {
            ActionKind.MEAL: self.distribute_meal,
            ActionKind.WORKSHOP: self.mark_workshop_attendance,
            ActionKind.COMPETITION: self.check_in_competition,
            ActionKind.ACCOMMODATION: self.update_accommodation,
        }
        missing = set(ActionKind) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler for action kinds: {sorted(k.value for k in missing)}")

    def authorize_action(
        self,
        db: Session,
        participant_id: str,
        action_kind: ActionKind,
        *,
        today: Optional[date] = None,
        **context,
    ) -> BaseModel:
        """
        Runs the precondition table for `action_kind` and records the action.

        `context` carries the action-specific fields: meal_type,
        workshop_session, competition_type, or action and room_number.
        """
        handler = self._handlers[ActionKind(action_kind)]
        return handler(db, participant_id, today=today or utc_today(), **context)

    # ========================================
    # Helpers
    # ========================================

    def _get_participant(self, db: Session, participant_id: str) -> TeamMember:
        member = team_member_crud.get_by_participant_id(db, participant_id=participant_id)
        if member is None:
            logger.warning(f"Action refused: unknown participant {participant_id}")
            raise ParticipantNotFoundError(participant_id)
        return member

    def _record(
        self,
        db: Session,
        log: CRUDActionLog,
        duplicate: DuplicateActionError,
        **values,
    ) -> None:
        """Appends the log row and commits, mapping a unique violation to `duplicate`."""
        try:
            log.record(db, **values)
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"Concurrent duplicate rejected by the store: {duplicate.details}")
            raise duplicate

    # ========================================
    # Meals
    # ========================================

    def distribute_meal(
        self, db: Session, participant_id: str, *, meal_type: MealType, today: date
    ) -> MealConfirmation:
        meal_type = MealType(meal_type)
        member = self._get_participant(db, participant_id)

        duplicate = DuplicateActionError(
            "Meal already distributed today", participant_id, meal_type.value, today.isoformat()
        )
        if crud_attendance.meal_log.exists(
            db, participant_id=participant_id, meal_type=meal_type, date=today
        ):
            logger.warning(f"Duplicate {meal_type.value} for {participant_id} on {today}")
            raise duplicate

        self._record(
            db,
            crud_attendance.meal_log,
            duplicate,
            participant_id=participant_id,
            participant_name=member.full_name,
            meal_type=meal_type,
            food_preference=member.food_preference,
            date=today,
        )
        logger.info(f"Served {meal_type.value} to {participant_id}")
        return MealConfirmation(
            participant=MealParticipant(
                name=member.full_name,
                food_preference=member.food_preference.value if member.food_preference else None,
            ),
            meal_type=meal_type,
        )

    # ========================================
    # Workshops
    # ========================================

    def mark_workshop_attendance(
        self, db: Session, participant_id: str, *, workshop_session: str, today: date
    ) -> WorkshopConfirmation:
        member = self._get_participant(db, participant_id)
        registration = member.registration
        if registration is None or registration.workshop_track == WorkshopTrack.NONE:
            logger.warning(f"Workshop attendance refused: {participant_id} has no workshop")
            raise WorkshopNotRegisteredError(participant_id)

        duplicate = DuplicateActionError(
            "Workshop attendance already marked today",
            participant_id,
            workshop_session,
            today.isoformat(),
        )
        if crud_attendance.workshop_attendance.exists(
            db, participant_id=participant_id, workshop_session=workshop_session, date=today
        ):
            logger.warning(f"Duplicate workshop attendance for {participant_id} on {today}")
            raise duplicate

        member.present = True
        db.add(member)
        self._record(
            db,
            crud_attendance.workshop_attendance,
            duplicate,
            participant_id=participant_id,
            participant_name=member.full_name,
            workshop_session=workshop_session,
            workshop_track=registration.workshop_track,
            date=today,
        )
        logger.info(f"Marked {participant_id} present at workshop {workshop_session}")
        return WorkshopConfirmation(
            participant=WorkshopParticipant(
                name=member.full_name, workshop_track=registration.workshop_track
            ),
            workshop_session=workshop_session,
        )

    # ========================================
    # Competitions
    # ========================================

    def check_in_competition(
        self,
        db: Session,
        participant_id: str,
        *,
        competition_type: CompetitionTrack,
        today: date,
    ) -> CompetitionConfirmation:
        competition_type = CompetitionTrack(competition_type)
        member = self._get_participant(db, participant_id)
        registration = member.registration
        if registration is None:
            raise RegistrationNotFoundError(member.registration_id)

        if registration.competition_track == CompetitionTrack.NONE:
            logger.warning(f"Competition check-in refused: {participant_id} has no competition")
            raise CompetitionNotRegisteredError(participant_id)

        if registration.competition_track != competition_type:
            logger.warning(
                f"Competition check-in refused for {participant_id}: registered "
                f"{registration.competition_track.value}, scanned {competition_type.value}"
            )
            raise CompetitionTrackMismatchError(
                participant_id,
                registered=registration.competition_track.value,
                scanned=competition_type.value,
            )

        duplicate = DuplicateActionError(
            "Already checked in for this competition today",
            participant_id,
            competition_type.value,
            today.isoformat(),
        )
        if crud_attendance.competition_checkin.exists(
            db, participant_id=participant_id, competition_type=competition_type, date=today
        ):
            logger.warning(f"Duplicate competition check-in for {participant_id} on {today}")
            raise duplicate

        member.present = True
        db.add(member)
        self._record(
            db,
            crud_attendance.competition_checkin,
            duplicate,
            participant_id=participant_id,
            participant_name=member.full_name,
            team_id=registration.team_id,
            competition_type=competition_type,
            date=today,
        )
        logger.info(f"Checked in {participant_id} for {competition_type.value}")
        return CompetitionConfirmation(
            participant=CompetitionParticipant(name=member.full_name, team_id=registration.team_id),
            competition_type=competition_type,
        )

    # ========================================
    # Accommodation
    # ========================================

    def update_accommodation(
        self,
        db: Session,
        participant_id: str,
        *,
        action: AccommodationAction = AccommodationAction.CHECKIN,
        room_number: Optional[str] = None,
        today: date,
    ) -> AccommodationConfirmation:
        """
        Moves the participant one step along
        requested -> checked_in -> checked_out.
        """
        action = AccommodationAction(action)
        member = self._get_participant(db, participant_id)
        current = member.accommodation_status
        if not member.accommodation or current == AccommodationStatus.NOT_REQUESTED:
            logger.warning(f"Accommodation {action.value} refused: {participant_id} did not request it")
            raise AccommodationNotRequestedError(participant_id)

        required, resulting = ACCOMMODATION_TRANSITIONS[action]
        if current != required:
            logger.warning(
                f"Accommodation {action.value} refused for {participant_id}: status is {current.value}"
            )
            raise InvalidAccommodationTransitionError(participant_id, current.value, action.value)

        if action == AccommodationAction.CHECKIN:
            member.accommodation_room = room_number
        member.accommodation_status = resulting
        db.add(member)

        duplicate = DuplicateActionError(
            f"Accommodation {action.value} already recorded",
            participant_id,
            action.value,
            today.isoformat(),
        )
        self._record(
            db,
            crud_attendance.accommodation_log,
            duplicate,
            participant_id=participant_id,
            participant_name=member.full_name,
            gender=member.gender or "Other",
            action=action,
            room_number=room_number or member.accommodation_room,
            date=today,
        )
        logger.info(f"Accommodation {action.value} for {participant_id}")
        return AccommodationConfirmation(
            participant=AccommodationParticipant(name=member.full_name, gender=member.gender),
            action=action,
            room_number=member.accommodation_room,
        )


attendance_service = AttendanceService()
