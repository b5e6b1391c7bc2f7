# samyukta/crud/crud_registration.py
import logging
import random
import secrets
import string
import uuid
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from samyukta.constants.tracks import (
    AccommodationStatus,
    CompetitionTrack,
    RegistrationStatus,
    TicketType,
    TrackType,
    WorkshopTrack,
)
from samyukta.core.exceptions import StoreUnavailableError
from samyukta.crud.base import CRUDBase
from samyukta.models.registration import Registration
from samyukta.models.team_member import TeamMember
from samyukta.schemas.registration import (
    DirectJoinCreate,
    RegistrationCreate,
    RegistrationStatusUpdate,
)

logger = logging.getLogger(__name__)

_CODE_CHARS = string.ascii_uppercase + string.digits


def generate_registration_code(length: int = 8) -> str:
    """Generates a random alphanumeric registration code."""
    # Example: A5D-G8K-9B
    code = "".join(random.choice(_CODE_CHARS) for _ in range(length))
    # Add dashes for readability
    return "-".join(code[i : i + 3] for i in range(0, len(code), 3))


def generate_participant_id() -> str:
    return "SAM-" + "".join(random.choice(_CODE_CHARS) for _ in range(8))


def generate_team_id() -> str:
    return f"team_{uuid.uuid4().hex[:12]}"


class CRUDRegistration(CRUDBase[Registration, RegistrationCreate, RegistrationStatusUpdate]):
    def get_by_team_id(self, db: Session, *, team_id: str) -> Optional[Registration]:
        return db.query(self.model).filter(self.model.team_id == team_id).first()

    def get_by_code(self, db: Session, *, code: str) -> Optional[Registration]:
        """Finds a registration by its team id or its registration code."""
        return (
            db.query(self.model)
            .filter(or_(self.model.team_id == code, self.model.registration_code == code))
            .first()
        )

    def get_multi_filtered(
        self,
        db: Session,
        *,
        status: Optional[RegistrationStatus] = None,
        college: Optional[str] = None,
        workshop_track: Optional[WorkshopTrack] = None,
        competition_track: Optional[CompetitionTrack] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Registration]:
        query = db.query(self.model)
        if status:
            query = query.filter(self.model.status == status)
        if college:
            query = query.filter(self.model.college == college)
        if workshop_track:
            query = query.filter(self.model.workshop_track == workshop_track)
        if competition_track:
            query = query.filter(self.model.competition_track == competition_track)
        return query.order_by(self.model.created_at.desc()).offset(skip).limit(limit).all()

    def _unique_value(self, db: Session, column, generator) -> str:
        while True:
            value = generator()
            if not db.query(self.model).filter(column == value).first():
                return value

    def create_with_members(
        self,
        db: Session,
        *,
        obj_in: RegistrationCreate | DirectJoinCreate,
        ticket_type: TicketType,
        workshop_track: WorkshopTrack,
        total_amount: int,
        commit: bool = True,
    ) -> Registration:
        """
        Creates the registration and one team member row per submitted member.

        With commit=False the rows are only flushed, so the caller can attach
        QR codes and commit everything together.
        """
        team_id = self._unique_value(db, self.model.team_id, generate_team_id)
        registration_code = self._unique_value(
            db, self.model.registration_code, generate_registration_code
        )

        db_obj = self.model(
            team_id=team_id,
            registration_code=registration_code,
            college=obj_in.college,
            team_size=obj_in.team_size,
            ticket_type=ticket_type,
            workshop_track=workshop_track,
            competition_track=obj_in.competition_track,
            status=RegistrationStatus.PENDING_REVIEW,
            total_amount=total_amount,
            transaction_id=obj_in.transaction_id,
            payment_screenshot_url=obj_in.payment_screenshot_url,
        )
        db.add(db_obj)

        for index, member_in in enumerate(obj_in.members):
            while True:
                participant_id = generate_participant_id()
                if not team_member.get_by_participant_id(db, participant_id=participant_id):
                    break
            db.add(
                TeamMember(
                    participant_id=participant_id,
                    registration_id=team_id,
                    member_index=index,
                    full_name=member_in.full_name,
                    email=member_in.email,
                    whatsapp=member_in.whatsapp,
                    year=member_in.year,
                    department=member_in.department,
                    college=member_in.college or obj_in.college,
                    gender=member_in.gender,
                    food_preference=member_in.food_preference,
                    accommodation=member_in.accommodation,
                    accommodation_status=(
                        AccommodationStatus.REQUESTED
                        if member_in.accommodation
                        else AccommodationStatus.NOT_REQUESTED
                    ),
                    passkey=secrets.token_urlsafe(6),
                )
            )

        if commit:
            db.commit()
        else:
            db.flush()
        db.refresh(db_obj)
        return db_obj

    def update_status(
        self, db: Session, *, db_obj: Registration, status: RegistrationStatus
    ) -> Registration:
        return self.update(db, db_obj=db_obj, obj_in={"status": status})

    # ------------------------------------------------------------------ #
    # Counting
    #
    # An aggregate over zero rows is a legitimate 0. A query that fails is
    # never turned into 0; it surfaces as StoreUnavailableError.
    # ------------------------------------------------------------------ #

    def count_by_track(self, db: Session, *, track_type: TrackType, track_value: str) -> int:
        """Sums team_size over every registration whose track field equals track_value."""
        column = getattr(self.model, track_type.value)
        try:
            total = (
                db.query(func.sum(self.model.team_size))
                .filter(column == track_value)
                .scalar()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to count {track_type.value}={track_value}: {e}")
            raise StoreUnavailableError("count_by_track") from e
        # SUM over no rows is NULL
        return int(total) if total is not None else 0

    def count_teams_by_track(self, db: Session, *, track_type: TrackType, track_value: str) -> int:
        column = getattr(self.model, track_type.value)
        try:
            return (
                db.query(func.count(self.model.id)).filter(column == track_value).scalar() or 0
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to count teams for {track_type.value}={track_value}: {e}")
            raise StoreUnavailableError("count_teams_by_track") from e

    def count_teams(self, db: Session) -> int:
        try:
            return db.query(func.count(self.model.id)).scalar() or 0
        except SQLAlchemyError as e:
            logger.error(f"Failed to count teams: {e}")
            raise StoreUnavailableError("count_teams") from e

    def count_total_participants(self, db: Session) -> int:
        """Counts every team member row, irrespective of track."""
        try:
            return db.query(func.count(TeamMember.id)).scalar() or 0
        except SQLAlchemyError as e:
            logger.error(f"Failed to count participants: {e}")
            raise StoreUnavailableError("count_total_participants") from e


class CRUDTeamMember:
    """Lookups and on-site updates for team members."""

    def get_by_participant_id(self, db: Session, *, participant_id: str) -> Optional[TeamMember]:
        return (
            db.query(TeamMember).filter(TeamMember.participant_id == participant_id).first()
        )

    def get_by_email(self, db: Session, *, email: str) -> Optional[TeamMember]:
        return db.query(TeamMember).filter(TeamMember.email == email.strip().lower()).first()

    def get_by_team(self, db: Session, *, team_id: str) -> List[TeamMember]:
        return (
            db.query(TeamMember)
            .filter(TeamMember.registration_id == team_id)
            .order_by(TeamMember.member_index)
            .all()
        )

    def count_present(self, db: Session) -> int:
        try:
            return (
                db.query(func.count(TeamMember.id)).filter(TeamMember.present.is_(True)).scalar()
                or 0
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to count present participants: {e}")
            raise StoreUnavailableError("count_present") from e


registration = CRUDRegistration(Registration)
team_member = CRUDTeamMember()
