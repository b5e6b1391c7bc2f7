# samyukta/api/deps.py
from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from samyukta.constants.tracks import ParticipantRole
from samyukta.core.config import CapacityLimits, settings
from samyukta.schemas.token import TokenPayload
from samyukta.services.capacity.slot_service import SlotDecisionService
from samyukta.services.check_in.attendance_service import AttendanceService, attendance_service
from samyukta.services.check_in.qr_generator import QRCodeService
from samyukta.services.registration_service import RegistrationService

# The `tokenUrl` doesn't have to be a real endpoint in this service,
# it's just for the OpenAPI documentation.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def _decode(token: str) -> TokenPayload:
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=["HS256"])
    return TokenPayload(**payload)


def get_current_user(token: str = Depends(oauth2_scheme)) -> TokenPayload:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        return _decode(token)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        raise credentials_exception


def get_current_user_optional(
    token: str | None = Depends(oauth2_scheme_optional),
) -> TokenPayload | None:
    if token is None:
        return None
    try:
        return _decode(token)
    except (JWTError, ValueError):
        return None


def require_roles(*roles: ParticipantRole) -> Callable[..., TokenPayload]:
    """Dependency factory: the caller must hold one of `roles`."""

    def checker(current_user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized to perform this action",
            )
        return current_user

    return checker


require_staff = require_roles(ParticipantRole.COORDINATOR, ParticipantRole.ADMIN)
require_admin = require_roles(ParticipantRole.ADMIN)


# ========================================
# Services
# ========================================


def get_capacity_limits() -> CapacityLimits:
    return settings.capacity


def get_slot_service(
    limits: CapacityLimits = Depends(get_capacity_limits),
) -> SlotDecisionService:
    return SlotDecisionService(limits)


def get_qr_service() -> QRCodeService:
    return QRCodeService(
        settings.QR_SIGNING_SECRET,
        require_signature=settings.QR_REQUIRE_SIGNATURE,
        ttl_days=settings.QR_TOKEN_TTL_DAYS,
    )


def get_registration_service(
    slot_service: SlotDecisionService = Depends(get_slot_service),
    qr_service: QRCodeService = Depends(get_qr_service),
) -> RegistrationService:
    return RegistrationService(slot_service, qr_service)


def get_attendance_service() -> AttendanceService:
    return attendance_service
