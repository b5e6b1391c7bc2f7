from jose import jwt

from samyukta.constants.tracks import ParticipantRole
from samyukta.core.config import settings
from samyukta.schemas.token import TokenPayload


def get_user_authentication_headers(
    role: ParticipantRole = ParticipantRole.COORDINATOR, user_id: str = "user_test"
) -> dict[str, str]:
    """
    Generates a valid JWT token and authentication headers for a test user.
    """
    payload = TokenPayload(sub=user_id, role=role, exp=9999999999)  # High expiration for tests
    token = jwt.encode(payload.model_dump(mode="json"), settings.JWT_SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


def coordinator_headers() -> dict[str, str]:
    return get_user_authentication_headers(ParticipantRole.COORDINATOR, "coordinator_test")


def admin_headers() -> dict[str, str]:
    return get_user_authentication_headers(ParticipantRole.ADMIN, "admin_test")


def participant_headers() -> dict[str, str]:
    return get_user_authentication_headers(ParticipantRole.PARTICIPANT, "participant_test")
