# samyukta/schemas/slots.py
from datetime import datetime
from typing import Dict

from pydantic import BaseModel


class TrackSlots(BaseModel):
    """Used/max/remaining view of one track (or of the whole event)."""

    registered: int
    max: int
    remaining: int
    closed: bool


class DirectJoinInfo(BaseModel):
    available: bool
    threshold: int
    hackathon_price: int
    pitch_price: int


class SlotSnapshot(BaseModel):
    total: TrackSlots
    # Keyed by lower-cased track name: cloud, ai, cybersecurity
    workshops: Dict[str, TrackSlots]
    # hackathon, pitch
    competitions: Dict[str, TrackSlots]
    event_closed: bool
    direct_join_available: bool
    direct_join: DirectJoinInfo
    timestamp: datetime


class CompetitionSlot(BaseModel):
    used: int
    available: int


class CompetitionSlotSummary(BaseModel):
    hackathon: CompetitionSlot
    pitch: CompetitionSlot
