# samyukta/crud/__init__.py

from .crud_attendance import accommodation_log, competition_checkin, meal_log, workshop_attendance
from .crud_registration import registration, team_member
