# samyukta/services/check_in/qr_signing.py
"""
JWT-based signing for participant QR codes.

QR text formats:
  v1 (legacy): plain JSON object {"id", "name", "role", ..., "timestamp"}.
               Unsigned, so anyone can forge a role claim. Only accepted
               when QR_REQUIRE_SIGNATURE is off.
  v2 (HS256):  JWT whose claims are the QR payload plus iat/exp/v, signed
               with the shared QR_SIGNING_SECRET.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from samyukta.schemas.qr import QRPayload

logger = logging.getLogger(__name__)

QR_FORMAT_VERSION = 2
_ALGORITHM = "HS256"
# Claims added on top of the payload fields
_JWT_CLAIMS = ("iat", "exp", "v")


def is_jwt_qr(data: str) -> bool:
    """True when the text should be verified as a signed v2 token.

    Decided by shape alone: any non-JSON text with exactly two dots goes to
    signature verification and is rejected there if forged. Such text never
    reaches the legacy JSON parser, even when unsigned codes are allowed.
    """
    data = data.strip()
    return data.count(".") == 2 and not data.startswith("{")


def sign_payload(payload: QRPayload, secret: str, ttl_days: int = 30) -> str:
    """Sign a QR payload.

    Claims:
    - payload fields (id, name, role, email, ... timestamp)
    - iat: issued-at timestamp
    - exp: expiration (ttl_days after issue)
    - v: QR format version

    Returns:
        Compact JWT string suitable for QR code encoding.
    """
    now = datetime.now(timezone.utc)
    claims = payload.model_dump(mode="json", exclude_none=True)
    claims.update(
        {
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(days=ttl_days)).timestamp()),
            "v": QR_FORMAT_VERSION,
        }
    )
    return jwt.encode(claims, secret, algorithm=_ALGORITHM)


def verify_payload(token: str, secret: str) -> Optional[QRPayload]:
    """Verify a signed QR token.

    Returns:
        The decoded QRPayload if the signature and expiry are valid and the
        claims are well-formed, otherwise None.
    """
    try:
        claims = jwt.decode(token.strip(), secret, algorithms=[_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired QR token")
        return None
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected invalid QR token: {e}")
        return None

    for claim in _JWT_CLAIMS:
        claims.pop(claim, None)
    try:
        return QRPayload.model_validate(claims)
    except PydanticValidationError:
        return None


def parse_legacy_payload(text: str) -> Optional[QRPayload]:
    """Parse an unsigned v1 JSON payload. Returns None if malformed."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(data, dict):
        return None
    try:
        return QRPayload.model_validate(data)
    except PydanticValidationError:
        return None
