# samyukta/models/__init__.py
# Import all models so SQLAlchemy can resolve relationships and
# Base.metadata sees every table.

from samyukta.db.base_class import Base
from samyukta.models.registration import Registration
from samyukta.models.team_member import TeamMember
from samyukta.models.attendance import (
    AccommodationLog,
    CompetitionCheckin,
    MealLog,
    WorkshopAttendance,
)
