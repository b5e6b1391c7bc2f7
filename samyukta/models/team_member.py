# samyukta/models/team_member.py
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from samyukta.constants.tracks import AccommodationStatus, FoodPreference
from samyukta.db.base_class import Base
from samyukta.db.types import value_enum


class TeamMember(Base):
    """
    A participant. Belongs to exactly one registration; `registration_id` holds its team id.

    Identity fields (name, email, participant_id) are written once at
    registration time; check-in actions only touch presence and accommodation.
    """

    __tablename__ = "team_members"

    id = Column(String, primary_key=True, default=lambda: f"tm_{uuid.uuid4().hex[:12]}")
    participant_id = Column(String, nullable=False, unique=True, index=True)
    registration_id = Column(
        String, ForeignKey("registrations.team_id"), nullable=False, index=True
    )
    # Order of the member within the submitted team
    member_index = Column(Integer, nullable=False, default=0)

    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    whatsapp = Column(String, nullable=False)
    year = Column(String, nullable=True)
    department = Column(String, nullable=True)
    college = Column(String, nullable=True)
    gender = Column(String, nullable=True)
    food_preference = Column(
        value_enum(FoodPreference, "food_preference_enum"),
        nullable=False,
        default=FoodPreference.VEG,
    )

    # Accommodation
    accommodation = Column(Boolean, nullable=False, default=False)
    accommodation_status = Column(
        value_enum(AccommodationStatus, "accommodation_status_enum"),
        nullable=False,
        default=AccommodationStatus.NOT_REQUESTED,
    )
    accommodation_room = Column(String, nullable=True)

    present = Column(Boolean, nullable=False, default=False)
    passkey = Column(String, nullable=False)

    # Signed QR text and its rendered PNG (data URL)
    qr_payload = Column(Text, nullable=True)
    qr_code = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    registration = relationship("Registration", back_populates="members")
