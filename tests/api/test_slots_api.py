from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from samyukta.constants.tracks import CompetitionTrack, WorkshopTrack
from tests.utils.registration import registration_payload, seed_registrations


def test_slots_for_empty_event(client: TestClient) -> None:
    response = client.get("/api/v1/slots")

    assert response.status_code == 200
    content = response.json()
    assert content["total"] == {"registered": 0, "max": 400, "remaining": 400, "closed": False}
    assert content["workshops"]["cloud"]["max"] == 200
    assert content["competitions"]["pitch"]["max"] == 250
    assert content["event_closed"] is False
    assert content["direct_join_available"] is False
    assert content["direct_join"]["threshold"] == 350


def test_team_accepted_into_last_slot_closes_track(client: TestClient, db: Session) -> None:
    # 199 of 200 Cloud slots used; a team of 2 is still accepted
    seed_registrations(db, 199, workshop_track=WorkshopTrack.CLOUD)

    response = client.post("/api/v1/registrations", json=registration_payload(members=2))
    assert response.status_code == 201

    cloud = client.get("/api/v1/slots").json()["workshops"]["cloud"]
    assert cloud == {"registered": 201, "max": 200, "remaining": 0, "closed": True}

    response = client.post("/api/v1/registrations", json=registration_payload(members=1))
    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "TRACK_CLOSED"
    assert error["category"] == "capacity_error"
    assert error["track"] == "Cloud"
    assert error["used"] == 201
    assert error["max"] == 200


def test_other_tracks_stay_open(client: TestClient, db: Session) -> None:
    seed_registrations(db, 200, workshop_track=WorkshopTrack.CLOUD)

    response = client.post(
        "/api/v1/registrations", json=registration_payload(workshop_track="Cybersecurity")
    )
    assert response.status_code == 201


def test_direct_join_unlocks_above_threshold(client: TestClient, db: Session) -> None:
    seed_registrations(db, 90, team_size=4, with_members=True)

    content = client.get("/api/v1/slots").json()
    assert content["total"]["registered"] == 360
    assert content["direct_join_available"] is True
    assert content["event_closed"] is False


def test_competition_summary(client: TestClient, db: Session) -> None:
    seed_registrations(db, 10, team_size=3, competition_track=CompetitionTrack.HACKATHON)

    response = client.get("/api/v1/slots/competitions")

    assert response.status_code == 200
    assert response.json() == {
        "hackathon": {"used": 30, "available": 220},
        "pitch": {"used": 0, "available": 250},
    }
