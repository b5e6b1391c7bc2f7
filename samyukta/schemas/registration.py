# samyukta/schemas/registration.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from samyukta.constants.tracks import (
    MAX_TEAM_SIZE,
    AccommodationStatus,
    CompetitionTrack,
    FoodPreference,
    RegistrationStatus,
    TicketType,
    WorkshopTrack,
)


class TeamMemberCreate(BaseModel):
    full_name: str = Field(..., min_length=2, max_length=50)
    email: str = Field(..., min_length=5, max_length=100)
    whatsapp: str = Field(..., pattern=r"^[+]?[\d\s\-\(\)]{10,15}$")
    year: Optional[str] = None
    department: Optional[str] = None
    college: Optional[str] = None
    gender: Optional[str] = None
    food_preference: FoodPreference = FoodPreference.VEG
    accommodation: bool = False

    @field_validator("full_name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return " ".join(v.split())

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Please enter a valid email address")
        return v

    @field_validator("whatsapp")
    @classmethod
    def strip_spaces(cls, v: str) -> str:
        return "".join(v.split())


class RegistrationCreate(BaseModel):
    college: str = Field(..., min_length=2, max_length=100)
    members: List[TeamMemberCreate] = Field(..., min_length=1, max_length=MAX_TEAM_SIZE)
    ticket_type: TicketType = TicketType.COMBO
    workshop_track: WorkshopTrack = WorkshopTrack.NONE
    competition_track: CompetitionTrack = CompetitionTrack.NONE
    total_amount: int = Field(0, ge=0)
    transaction_id: Optional[str] = None
    payment_screenshot_url: Optional[str] = None

    @field_validator("college")
    @classmethod
    def strip_college(cls, v: str) -> str:
        return v.strip()

    @model_validator(mode="after")
    def check_members(self):
        emails = [m.email for m in self.members]
        if len(set(emails)) != len(emails):
            raise ValueError("Each team member must have a distinct email")
        if self.ticket_type == TicketType.DIRECT_JOIN:
            raise ValueError("Direct join registrations use the direct-join endpoint")
        return self

    @property
    def team_size(self) -> int:
        return len(self.members)


class DirectJoinCreate(BaseModel):
    """Lower-friction competition-only registration, unlocked at high occupancy."""

    college: str = Field(..., min_length=2, max_length=100)
    members: List[TeamMemberCreate] = Field(..., min_length=1, max_length=MAX_TEAM_SIZE)
    competition_track: CompetitionTrack
    transaction_id: Optional[str] = None
    payment_screenshot_url: Optional[str] = None

    @model_validator(mode="after")
    def check_track(self):
        if self.competition_track == CompetitionTrack.NONE:
            raise ValueError("Direct join requires a competition track")
        emails = [m.email for m in self.members]
        if len(set(emails)) != len(emails):
            raise ValueError("Each team member must have a distinct email")
        return self

    @property
    def team_size(self) -> int:
        return len(self.members)


class RegistrationStatusUpdate(BaseModel):
    status: RegistrationStatus


class TeamMember(BaseModel):
    participant_id: str
    full_name: str
    email: str
    whatsapp: str
    year: Optional[str] = None
    department: Optional[str] = None
    college: Optional[str] = None
    gender: Optional[str] = None
    food_preference: FoodPreference
    accommodation: bool
    accommodation_status: AccommodationStatus
    present: bool
    qr_code: Optional[str] = None

    model_config = {"from_attributes": True}


class Registration(BaseModel):
    id: str
    team_id: str
    registration_code: str
    college: str
    team_size: int
    ticket_type: TicketType
    workshop_track: WorkshopTrack
    competition_track: CompetitionTrack
    status: RegistrationStatus
    total_amount: int
    transaction_id: Optional[str] = None
    payment_screenshot_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    members: List[TeamMember] = []

    model_config = {"from_attributes": True}


class RegistrationSummary(BaseModel):
    """Registration without member QR images, for listings."""

    id: str
    team_id: str
    registration_code: str
    college: str
    team_size: int
    ticket_type: TicketType
    workshop_track: WorkshopTrack
    competition_track: CompetitionTrack
    status: RegistrationStatus
    total_amount: int
    created_at: datetime

    model_config = {"from_attributes": True}


class MemberPresence(BaseModel):
    participant_id: str
    full_name: str
    email: str
    present: bool

    model_config = {"from_attributes": True}


class ValidatedRegistration(RegistrationSummary):
    members: List[MemberPresence] = []


class RegistrationValidation(BaseModel):
    valid: bool
    registration: Optional[ValidatedRegistration] = None
    error: Optional[str] = None
