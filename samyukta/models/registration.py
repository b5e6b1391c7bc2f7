# samyukta/models/registration.py
import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import relationship

from samyukta.constants.tracks import (
    CompetitionTrack,
    RegistrationStatus,
    TicketType,
    WorkshopTrack,
)
from samyukta.db.base_class import Base
from samyukta.db.types import value_enum


class Registration(Base):
    """
    One team application. Never deleted; lifecycle is tracked through `status`.
    """

    __tablename__ = "registrations"

    id = Column(
        String, primary_key=True, default=lambda: f"reg_{uuid.uuid4().hex[:12]}"
    )
    team_id = Column(String, nullable=False, unique=True, index=True)
    registration_code = Column(String, nullable=False, unique=True, index=True)

    college = Column(String, nullable=False)
    team_size = Column(Integer, nullable=False)
    ticket_type = Column(
        value_enum(TicketType, "ticket_type_enum"),
        nullable=False,
        default=TicketType.COMBO,
    )
    workshop_track = Column(
        value_enum(WorkshopTrack, "workshop_track_enum"),
        nullable=False,
        default=WorkshopTrack.NONE,
        index=True,
    )
    competition_track = Column(
        value_enum(CompetitionTrack, "competition_track_enum"),
        nullable=False,
        default=CompetitionTrack.NONE,
        index=True,
    )
    status = Column(
        value_enum(RegistrationStatus, "registration_status_enum"),
        nullable=False,
        default=RegistrationStatus.PENDING_REVIEW,
    )

    # Payment
    total_amount = Column(Integer, nullable=False, default=0)
    transaction_id = Column(String, nullable=True)
    payment_screenshot_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    members = relationship(
        "TeamMember",
        back_populates="registration",
        order_by="TeamMember.member_index",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("team_size >= 1", name="check_team_size_positive"),
        CheckConstraint("total_amount >= 0", name="check_total_amount_positive"),
    )
