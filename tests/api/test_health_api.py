from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from samyukta.db.session import get_db
from samyukta.main import app
from tests.utils.auth import coordinator_headers


def test_health(client: TestClient) -> None:
    assert client.get("/api/v1/health").json()["status"] == "healthy"
    assert client.get("/api/v1/health/db").json() == {"status": "healthy", "component": "database"}


def test_store_outage_is_reported_not_zeroed(client: TestClient) -> None:
    broken = MagicMock()
    broken.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
    broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    app.dependency_overrides[get_db] = lambda: broken

    response = client.get("/api/v1/slots")
    assert response.status_code == 503
    error = response.json()["error"]
    assert error["code"] == "STORE_UNAVAILABLE"
    assert "connection refused" not in response.text

    assert client.get("/api/v1/admin/stats", headers=coordinator_headers()).status_code == 503
    response = client.get("/api/v1/health/db")
    assert response.status_code == 503
    assert response.json()["error"]["code"] == "STORE_UNAVAILABLE"
