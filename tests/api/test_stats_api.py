from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from samyukta.constants.tracks import WorkshopTrack
from tests.utils.auth import coordinator_headers, participant_headers
from tests.utils.registration import create_random_registration


def test_dashboard_stats(client: TestClient, db: Session) -> None:
    registration = create_random_registration(db, members=4, workshop_track=WorkshopTrack.AI)
    member = registration.members[0]
    client.post(
        "/api/v1/workshops/attendance",
        headers=coordinator_headers(),
        json={"participant_id": member.participant_id, "workshop_session": "day1-am"},
    )

    response = client.get("/api/v1/admin/stats", headers=coordinator_headers())

    assert response.status_code == 200
    content = response.json()
    assert content["registrations"]["total"] == 4
    assert content["registrations"]["ai"] == {"participants": 4, "teams": 1}
    assert content["slots"]["workshops"]["ai"]["remaining"] == 196
    assert content["attendance"]["present_today"] == 1
    assert content["attendance"]["attendance_rate"] == 25
    assert content["attendance"]["workshop_attendance"] == 1


def test_dashboard_stats_requires_staff(client: TestClient) -> None:
    response = client.get("/api/v1/admin/stats", headers=participant_headers())
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


def test_dashboard_stats_without_token(client: TestClient) -> None:
    response = client.get("/api/v1/admin/stats")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    error = response.json()["error"]
    assert error["code"] == "NOT_AUTHENTICATED"
    assert error["category"] == "authentication_error"
    assert error["path"] == "/api/v1/admin/stats"
