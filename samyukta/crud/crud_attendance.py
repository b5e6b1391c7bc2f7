# samyukta/crud/crud_attendance.py
import logging
from datetime import date
from typing import Type

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from samyukta.core.exceptions import StoreUnavailableError
from samyukta.db.base_class import Base
from samyukta.models.attendance import (
    AccommodationLog,
    CompetitionCheckin,
    MealLog,
    WorkshopAttendance,
)

logger = logging.getLogger(__name__)


class CRUDActionLog:
    """
    Append-only access to one action log table.

    Records are only ever inserted; the existence check is what the
    attendance service uses to refuse a same-day duplicate.
    """

    def __init__(self, model: Type[Base]):
        self.model = model

    def exists(self, db: Session, **filters) -> bool:
        query = db.query(self.model.id)
        for field, value in filters.items():
            query = query.filter(getattr(self.model, field) == value)
        return query.first() is not None

    def record(self, db: Session, **values) -> Base:
        """Adds a log row and flushes it. The caller owns the commit."""
        db_obj = self.model(**values)
        db.add(db_obj)
        db.flush()
        return db_obj

    def count_for_day(self, db: Session, *, day: date) -> int:
        try:
            return (
                db.query(func.count(self.model.id)).filter(self.model.date == day).scalar() or 0
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to count {self.model.__tablename__} for {day}: {e}")
            raise StoreUnavailableError(f"count_{self.model.__tablename__}") from e


meal_log = CRUDActionLog(MealLog)
workshop_attendance = CRUDActionLog(WorkshopAttendance)
competition_checkin = CRUDActionLog(CompetitionCheckin)
accommodation_log = CRUDActionLog(AccommodationLog)
