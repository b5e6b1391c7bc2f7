# samyukta/schemas/check_in.py
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from samyukta.constants.tracks import (
    AccommodationAction,
    CompetitionTrack,
    MealType,
    WorkshopTrack,
)


# ============================================
# Requests
# ============================================


class MealDistributionRequest(BaseModel):
    participant_id: str = Field(..., min_length=1)
    meal_type: MealType


class WorkshopAttendanceRequest(BaseModel):
    participant_id: str = Field(..., min_length=1)
    workshop_session: str = Field(..., min_length=1)


class CompetitionCheckInRequest(BaseModel):
    participant_id: str = Field(..., min_length=1)
    competition_type: CompetitionTrack


class AccommodationRequest(BaseModel):
    participant_id: str = Field(..., min_length=1)
    action: AccommodationAction = AccommodationAction.CHECKIN
    room_number: Optional[str] = None

    @model_validator(mode="after")
    def check_room(self):
        if self.action == AccommodationAction.CHECKIN and not self.room_number:
            raise ValueError("Room number required for check-in")
        return self


# ============================================
# Confirmations
# ============================================


class MealParticipant(BaseModel):
    name: str
    food_preference: Optional[str] = None


class MealConfirmation(BaseModel):
    success: bool = True
    participant: MealParticipant
    meal_type: MealType


class WorkshopParticipant(BaseModel):
    name: str
    workshop_track: WorkshopTrack


class WorkshopConfirmation(BaseModel):
    success: bool = True
    participant: WorkshopParticipant
    workshop_session: str


class CompetitionParticipant(BaseModel):
    name: str
    team_id: str


class CompetitionConfirmation(BaseModel):
    success: bool = True
    participant: CompetitionParticipant
    competition_type: CompetitionTrack


class AccommodationParticipant(BaseModel):
    name: str
    gender: Optional[str] = None


class AccommodationConfirmation(BaseModel):
    success: bool = True
    participant: AccommodationParticipant
    action: AccommodationAction
    room_number: Optional[str] = None
