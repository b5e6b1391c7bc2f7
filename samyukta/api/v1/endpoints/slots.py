# samyukta/api/v1/endpoints/slots.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from samyukta.api import deps
from samyukta.db.session import get_db
from samyukta.schemas.slots import CompetitionSlotSummary, SlotSnapshot
from samyukta.services.capacity.slot_service import SlotDecisionService

router = APIRouter(prefix="/slots", tags=["Slots"])


@router.get("", response_model=SlotSnapshot)
def get_slots(
    db: Session = Depends(get_db),
    slot_service: SlotDecisionService = Depends(deps.get_slot_service),
):
    """
    Live open/closed view of every track and of the event as a whole.

    The event and per-track flags are independent: a track may still be open
    after the event has closed, and the other way round.
    """
    return slot_service.get_snapshot(db)


@router.get("/competitions", response_model=CompetitionSlotSummary)
def get_competition_slots(
    db: Session = Depends(get_db),
    slot_service: SlotDecisionService = Depends(deps.get_slot_service),
):
    return slot_service.get_competition_summary(db)
