# samyukta/schemas/qr.py
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from samyukta.constants.tracks import ParticipantRole, ScanType


class QRPayload(BaseModel):
    """Identity claims carried by a participant's QR code."""

    id: str
    name: str
    role: ParticipantRole = ParticipantRole.PARTICIPANT
    email: Optional[str] = None
    college: Optional[str] = None
    track: Optional[str] = None
    year: Optional[str] = None
    dept: Optional[str] = None
    timestamp: int  # epoch milliseconds


class QRArtifact(BaseModel):
    payload: QRPayload
    payload_text: str
    image_data_url: str


class MemberQRCode(BaseModel):
    participant_id: str
    name: str
    qr_code: Optional[str] = None


class TeamQRCodes(BaseModel):
    success: bool = True
    team_id: str
    qr_codes: List[MemberQRCode]


class ResolveRequest(BaseModel):
    qr_text: str = Field(..., min_length=1)


class ScanRequest(BaseModel):
    participant_id: Optional[str] = None
    qr_text: Optional[str] = None
    scan_type: ScanType = ScanType.PUBLIC

    @model_validator(mode="after")
    def check_identity(self):
        if not self.participant_id and not self.qr_text:
            raise ValueError("Either participant_id or qr_text is required")
        return self


class PublicScanResult(BaseModel):
    type: ScanType = ScanType.PUBLIC
    message: str
    participant_name: str


class ScannedParticipant(BaseModel):
    id: str
    name: str
    email: str
    whatsapp: str
    college: Optional[str] = None
    year: Optional[str] = None
    department: Optional[str] = None
    food_preference: str
    accommodation: bool
    accommodation_status: str
    present: bool


class ScannedTeamMember(BaseModel):
    name: str
    email: str
    participant_id: str
    present: bool


class ScannedTeam(BaseModel):
    team_id: str
    college: str
    team_size: int
    ticket_type: str
    workshop_track: str
    competition_track: str
    status: str
    total_amount: int
    members: List[ScannedTeamMember]


class CoordinatorScanResult(BaseModel):
    type: ScanType = ScanType.COORDINATOR
    participant: ScannedParticipant
    team: ScannedTeam
