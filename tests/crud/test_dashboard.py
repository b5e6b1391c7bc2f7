# tests/crud/test_dashboard.py

from datetime import date

from sqlalchemy.orm import Session

from samyukta.constants.tracks import CompetitionTrack, MealType, WorkshopTrack
from samyukta.core.config import CapacityLimits
from samyukta.crud import crud_attendance
from samyukta.crud.crud_dashboard import attendance_rate, dashboard
from samyukta.services.capacity.slot_service import SlotDecisionService
from tests.utils.registration import create_random_registration, seed_registrations


def test_attendance_rate_rounds_to_whole_percent():
    assert attendance_rate(1, 3) == 33
    assert attendance_rate(2, 3) == 67
    assert attendance_rate(5, 5) == 100


def test_attendance_rate_with_no_participants():
    assert attendance_rate(0, 0) == 0


def test_stats(db: Session):
    day = date(2025, 8, 22)
    registration = create_random_registration(
        db, members=2, workshop_track=WorkshopTrack.CLOUD,
        competition_track=CompetitionTrack.HACKATHON,
    )
    seed_registrations(db, 1, team_size=2, workshop_track=WorkshopTrack.AI, with_members=True)

    member = registration.members[0]
    member.present = True
    crud_attendance.meal_log.record(
        db,
        participant_id=member.participant_id,
        participant_name=member.full_name,
        meal_type=MealType.LUNCH,
        date=day,
    )

    stats = dashboard.get_stats(db, slot_service=SlotDecisionService(CapacityLimits()), day=day)

    assert stats.registrations.total == 4
    assert stats.registrations.total_teams == 2
    assert stats.registrations.cloud.participants == 2
    assert stats.registrations.cloud.teams == 1
    assert stats.registrations.ai.participants == 2
    assert stats.registrations.hackathon.participants == 2
    assert stats.registrations.pitch.participants == 0
    assert stats.slots.workshops["cloud"].remaining == 198
    assert stats.attendance.present_today == 1
    assert stats.attendance.attendance_rate == 25
    assert stats.attendance.meals_served == 1
    assert stats.attendance.workshop_attendance == 0
