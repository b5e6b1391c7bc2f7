# samyukta/models/attendance.py
"""
Append-only on-site action logs.

Each table carries a unique constraint over (participant, category, day) so a
duplicate that slips past the existence check in the attendance service fails
at insert time instead of being recorded twice.
"""
import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, UniqueConstraint, func

from samyukta.constants.tracks import (
    AccommodationAction,
    CompetitionTrack,
    FoodPreference,
    MealType,
    WorkshopTrack,
)
from samyukta.db.base_class import Base
from samyukta.db.types import value_enum


def _participant_fk():
    return Column(
        String, ForeignKey("team_members.participant_id"), nullable=False, index=True
    )


class MealLog(Base):
    __tablename__ = "meal_logs"

    id = Column(String, primary_key=True, default=lambda: f"meal_{uuid.uuid4().hex[:12]}")
    participant_id = _participant_fk()
    participant_name = Column(String, nullable=False)
    meal_type = Column(value_enum(MealType, "meal_type_enum"), nullable=False)
    food_preference = Column(value_enum(FoodPreference, "meal_food_preference_enum"), nullable=True)
    date = Column(Date, nullable=False, index=True)
    distributed_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("participant_id", "meal_type", "date", name="unique_meal_per_day"),
    )


class WorkshopAttendance(Base):
    __tablename__ = "workshop_attendance"

    id = Column(String, primary_key=True, default=lambda: f"wsa_{uuid.uuid4().hex[:12]}")
    participant_id = _participant_fk()
    participant_name = Column(String, nullable=False)
    workshop_session = Column(String, nullable=False)
    workshop_track = Column(value_enum(WorkshopTrack, "attendance_workshop_track_enum"), nullable=False)
    completion_status = Column(String(20), nullable=False, server_default="attended")
    date = Column(Date, nullable=False, index=True)
    check_in_time = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "participant_id", "workshop_session", "date", name="unique_workshop_attendance_per_day"
        ),
    )


class CompetitionCheckin(Base):
    __tablename__ = "competition_checkins"

    id = Column(String, primary_key=True, default=lambda: f"cci_{uuid.uuid4().hex[:12]}")
    participant_id = _participant_fk()
    participant_name = Column(String, nullable=False)
    team_id = Column(String, nullable=False, index=True)
    competition_type = Column(value_enum(CompetitionTrack, "checkin_competition_enum"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    checkin_time = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "participant_id", "competition_type", "date", name="unique_competition_checkin_per_day"
        ),
    )


class AccommodationLog(Base):
    __tablename__ = "accommodation_logs"

    id = Column(String, primary_key=True, default=lambda: f"acc_{uuid.uuid4().hex[:12]}")
    participant_id = _participant_fk()
    participant_name = Column(String, nullable=False)
    gender = Column(String, nullable=False, server_default="Other")
    action = Column(value_enum(AccommodationAction, "accommodation_action_enum"), nullable=False)
    room_number = Column(String, nullable=True)
    date = Column(Date, nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # The accommodation state machine only moves forward, so each action
    # happens at most once per participant.
    __table_args__ = (
        UniqueConstraint("participant_id", "action", name="unique_accommodation_action"),
    )
