# tests/crud/test_registration.py

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
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
from samyukta.crud.crud_registration import (
    CRUDRegistration,
    generate_participant_id,
    generate_registration_code,
    team_member,
)
from samyukta.models.registration import Registration
from samyukta.schemas.registration import RegistrationCreate
from tests.utils.registration import registration_payload, seed_registrations

registration_crud = CRUDRegistration(Registration)


# ========================================
# Counting against a mocked session
# ========================================


def test_count_by_track_with_no_rows_is_zero():
    db_session = MagicMock()
    # SUM over no rows is NULL
    db_session.query.return_value.filter.return_value.scalar.return_value = None

    assert (
        registration_crud.count_by_track(
            db_session, track_type=TrackType.WORKSHOP, track_value="Cloud"
        )
        == 0
    )


def test_count_by_track_returns_sum():
    db_session = MagicMock()
    db_session.query.return_value.filter.return_value.scalar.return_value = 7

    assert (
        registration_crud.count_by_track(
            db_session, track_type=TrackType.COMPETITION, track_value="Pitch"
        )
        == 7
    )


def test_count_by_track_store_failure_is_not_zero():
    db_session = MagicMock()
    db_session.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

    with pytest.raises(StoreUnavailableError) as exc_info:
        registration_crud.count_by_track(
            db_session, track_type=TrackType.WORKSHOP, track_value="AI"
        )
    assert exc_info.value.status_code == 503
    assert exc_info.value.details == {"operation": "count_by_track"}


def test_count_total_participants_store_failure():
    db_session = MagicMock()
    db_session.query.return_value.scalar.side_effect = OperationalError(
        "SELECT", {}, Exception("timeout")
    )

    with pytest.raises(StoreUnavailableError):
        registration_crud.count_total_participants(db_session)


def test_generated_codes():
    code = generate_registration_code()
    assert len(code.replace("-", "")) == 8
    assert code.count("-") == 2

    participant_id = generate_participant_id()
    assert participant_id.startswith("SAM-")
    assert len(participant_id) == 12


# ========================================
# Against the test database
# ========================================


def test_count_by_track_sums_team_sizes(db: Session):
    seed_registrations(db, 3, team_size=4, workshop_track=WorkshopTrack.CLOUD)
    seed_registrations(db, 2, team_size=2, workshop_track=WorkshopTrack.AI)
    seed_registrations(
        db, 1, team_size=3, workshop_track=WorkshopTrack.CLOUD,
        competition_track=CompetitionTrack.HACKATHON,
    )

    count = registration_crud.count_by_track
    assert count(db, track_type=TrackType.WORKSHOP, track_value="Cloud") == 15
    assert count(db, track_type=TrackType.WORKSHOP, track_value="AI") == 4
    assert count(db, track_type=TrackType.WORKSHOP, track_value="Cybersecurity") == 0
    assert count(db, track_type=TrackType.COMPETITION, track_value="Hackathon") == 3
    assert registration_crud.count_teams_by_track(
        db, track_type=TrackType.WORKSHOP, track_value="Cloud"
    ) == 4


def test_total_participants_counts_member_rows(db: Session):
    seed_registrations(db, 2, team_size=3, with_members=True)
    seed_registrations(db, 5, team_size=4)  # no member rows

    assert registration_crud.count_total_participants(db) == 6
    assert registration_crud.count_teams(db) == 7


def test_create_with_members(db: Session):
    obj_in = RegistrationCreate(**registration_payload(members=3, accommodation=True))

    registration = registration_crud.create_with_members(
        db,
        obj_in=obj_in,
        ticket_type=TicketType.COMBO,
        workshop_track=WorkshopTrack.CLOUD,
        total_amount=2400,
    )

    assert registration.team_size == 3
    assert registration.status == RegistrationStatus.PENDING_REVIEW
    assert registration.team_id.startswith("team_")
    assert [m.member_index for m in registration.members] == [0, 1, 2]
    assert all(m.registration_id == registration.team_id for m in registration.members)
    assert all(m.accommodation_status == AccommodationStatus.REQUESTED for m in registration.members)
    assert all(m.college == "Test Institute of Technology" for m in registration.members)

    assert registration_crud.get(db, registration.id) == registration
    assert registration_crud.get_by_code(db, code=registration.registration_code) == registration
    assert registration_crud.get_by_code(db, code=registration.team_id) == registration
    first = registration.members[0]
    assert team_member.get_by_email(db, email=first.email.upper()) == first


def test_get_multi_filtered(db: Session):
    seed_registrations(db, 2, workshop_track=WorkshopTrack.AI)
    seed_registrations(db, 1, competition_track=CompetitionTrack.PITCH)

    assert len(registration_crud.get_multi_filtered(db, workshop_track=WorkshopTrack.AI)) == 2
    assert len(registration_crud.get_multi_filtered(db, competition_track=CompetitionTrack.PITCH)) == 1
    assert (
        len(registration_crud.get_multi_filtered(db, status=RegistrationStatus.CONFIRMED)) == 0
    )
