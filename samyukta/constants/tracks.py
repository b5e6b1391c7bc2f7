# samyukta/constants/tracks.py
"""
Closed value sets for tracks, registration state and on-site actions.

Stored in the database as their string values, so the values must never be
renamed once data exists.
"""

from enum import Enum

MAX_TEAM_SIZE = 4


class WorkshopTrack(str, Enum):
    CLOUD = "Cloud"
    AI = "AI"
    CYBERSECURITY = "Cybersecurity"
    NONE = "None"

    @classmethod
    def with_capacity(cls) -> list["WorkshopTrack"]:
        """Tracks that consume slots."""
        return [t for t in cls if t is not cls.NONE]


class CompetitionTrack(str, Enum):
    HACKATHON = "Hackathon"
    PITCH = "Pitch"
    NONE = "None"

    @classmethod
    def with_capacity(cls) -> list["CompetitionTrack"]:
        return [t for t in cls if t is not cls.NONE]


class TrackType(str, Enum):
    """Which registration field a track value is matched against."""

    WORKSHOP = "workshop_track"
    COMPETITION = "competition_track"


class TicketType(str, Enum):
    COMBO = "Combo"
    CUSTOM = "Custom"
    DIRECT_JOIN = "direct_join"


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    PENDING_REVIEW = "pending_review"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"


class FoodPreference(str, Enum):
    VEG = "veg"
    NON_VEG = "non-veg"


class ParticipantRole(str, Enum):
    PARTICIPANT = "participant"
    COORDINATOR = "coordinator"
    ADMIN = "admin"


class AccommodationStatus(str, Enum):
    NOT_REQUESTED = "not_requested"
    REQUESTED = "requested"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


class AccommodationAction(str, Enum):
    CHECKIN = "checkin"
    CHECKOUT = "checkout"


# Forward-only transitions: action -> (required current state, resulting state)
ACCOMMODATION_TRANSITIONS = {
    AccommodationAction.CHECKIN: (
        AccommodationStatus.REQUESTED,
        AccommodationStatus.CHECKED_IN,
    ),
    AccommodationAction.CHECKOUT: (
        AccommodationStatus.CHECKED_IN,
        AccommodationStatus.CHECKED_OUT,
    ),
}


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACKS = "snacks"
    DINNER = "dinner"


class ActionKind(str, Enum):
    MEAL = "meal"
    WORKSHOP = "workshop"
    COMPETITION = "competition"
    ACCOMMODATION = "accommodation"


class ScanType(str, Enum):
    PUBLIC = "public"
    COORDINATOR = "coordinator"
