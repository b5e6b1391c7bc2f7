# samyukta/schemas/token.py
from pydantic import BaseModel

from samyukta.constants.tracks import ParticipantRole


class TokenPayload(BaseModel):
    sub: str  # "sub" is the standard claim for subject (user ID)
    role: ParticipantRole = ParticipantRole.PARTICIPANT
    exp: int  # Standard claim for expiration time

    model_config = {"from_attributes": True}
