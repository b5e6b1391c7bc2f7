# samyukta/schemas/stats.py
from datetime import datetime

from pydantic import BaseModel

from samyukta.schemas.slots import SlotSnapshot


class TrackCount(BaseModel):
    participants: int
    teams: int


class RegistrationCounts(BaseModel):
    total: int
    total_teams: int
    cloud: TrackCount
    ai: TrackCount
    cybersecurity: TrackCount
    hackathon: TrackCount
    pitch: TrackCount


class AttendanceStats(BaseModel):
    present_today: int
    attendance_rate: int  # percent of all participants
    workshop_attendance: int
    competition_checkins: int
    meals_served: int


class DashboardStats(BaseModel):
    registrations: RegistrationCounts
    slots: SlotSnapshot
    attendance: AttendanceStats
    timestamp: datetime
