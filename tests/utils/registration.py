import uuid
from typing import List

from sqlalchemy.orm import Session

from samyukta.constants.tracks import (
    AccommodationStatus,
    CompetitionTrack,
    TicketType,
    WorkshopTrack,
)
from samyukta.crud import crud_registration
from samyukta.models.registration import Registration
from samyukta.models.team_member import TeamMember
from samyukta.schemas.registration import RegistrationCreate


def member_payload(name: str = "Test Member", accommodation: bool = False, **overrides) -> dict:
    data = {
        "full_name": name,
        "email": f"{uuid.uuid4().hex[:10]}@example.com",
        "whatsapp": "9876543210",
        "year": "3",
        "department": "CSE",
        "gender": "Female",
        "food_preference": "veg",
        "accommodation": accommodation,
    }
    data.update(overrides)
    return data


def registration_payload(
    members: int = 1,
    workshop_track: str = "Cloud",
    competition_track: str = "None",
    accommodation: bool = False,
    **overrides,
) -> dict:
    data = {
        "college": "Test Institute of Technology",
        "members": [
            member_payload(f"Member {i}", accommodation=accommodation) for i in range(members)
        ],
        "ticket_type": "Combo",
        "workshop_track": workshop_track,
        "competition_track": competition_track,
        "total_amount": 800 * members,
        "transaction_id": "TXN123456",
    }
    data.update(overrides)
    return data


def create_random_registration(
    db: Session,
    members: int = 1,
    workshop_track: WorkshopTrack = WorkshopTrack.CLOUD,
    competition_track: CompetitionTrack = CompetitionTrack.NONE,
    accommodation: bool = False,
) -> Registration:
    """
    Creates a registration with members through the CRUD layer (no capacity
    check, no QR codes).
    """
    obj_in = RegistrationCreate(
        **registration_payload(
            members=members,
            workshop_track=workshop_track.value,
            competition_track=competition_track.value,
            accommodation=accommodation,
        )
    )
    return crud_registration.registration.create_with_members(
        db,
        obj_in=obj_in,
        ticket_type=TicketType.COMBO,
        workshop_track=obj_in.workshop_track,
        total_amount=obj_in.total_amount,
    )


def seed_registrations(
    db: Session,
    count: int,
    team_size: int = 1,
    workshop_track: WorkshopTrack = WorkshopTrack.NONE,
    competition_track: CompetitionTrack = CompetitionTrack.NONE,
    with_members: bool = False,
) -> List[Registration]:
    """
    Inserts registrations directly to reach a given occupancy quickly.
    Members are only created when `with_members` is set, since only the
    event-wide total counts member rows.
    """
    registrations = []
    for _ in range(count):
        suffix = uuid.uuid4().hex[:12]
        team_id = f"team_seed_{suffix}"
        registration = Registration(
            team_id=team_id,
            registration_code=f"SEED-{suffix}",
            college="Seed College",
            team_size=team_size,
            workshop_track=workshop_track,
            competition_track=competition_track,
        )
        db.add(registration)
        registrations.append(registration)
        if with_members:
            for index in range(team_size):
                member_suffix = uuid.uuid4().hex[:10]
                db.add(
                    TeamMember(
                        participant_id=f"SEED-{member_suffix}",
                        registration_id=team_id,
                        member_index=index,
                        full_name=f"Seed {member_suffix}",
                        email=f"seed_{member_suffix}@example.com",
                        whatsapp="9876543210",
                        accommodation_status=AccommodationStatus.NOT_REQUESTED,
                        passkey="seed",
                    )
                )
    db.flush()
    return registrations

