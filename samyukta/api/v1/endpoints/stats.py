# samyukta/api/v1/endpoints/stats.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from samyukta.api import deps
from samyukta.crud.crud_dashboard import dashboard
from samyukta.db.session import get_db
from samyukta.schemas.stats import DashboardStats
from samyukta.schemas.token import TokenPayload
from samyukta.services.capacity.slot_service import SlotDecisionService
from samyukta.services.check_in.attendance_service import utc_today

router = APIRouter(prefix="/admin", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    slot_service: SlotDecisionService = Depends(deps.get_slot_service),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    """
    Registration counts per track, the slot view and today's attendance.

    Each figure is read separately, so under concurrent registrations the
    numbers may not add up exactly.
    """
    return dashboard.get_stats(db, slot_service=slot_service, day=utc_today())
