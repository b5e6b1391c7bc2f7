# samyukta/db/base_class.py

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Registrations, team members and the action log tables."""
