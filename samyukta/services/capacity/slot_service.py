# samyukta/services/capacity/slot_service.py
"""
Slot Decision Service

Combines the capacity limits with live registration counts to answer
"is this track open" and "how many slots remain", for the public
registration form, the registration flow and the admin dashboard.

Counts are read once per call with no locking. Two registrations submitted
at the same moment can both see a track as open and both be accepted, so a
track can end up above its maximum. Closing is therefore advisory: a track
that is open at submission time accepts the whole team.
"""

import logging
from datetime import datetime, timezone
from typing import Dict

from sqlalchemy.orm import Session

from samyukta.constants.tracks import CompetitionTrack, TrackType, WorkshopTrack
from samyukta.core.config import CapacityLimits
from samyukta.core.exceptions import (
    DirectJoinUnavailableError,
    EventClosedError,
    TrackClosedError,
)
from samyukta.crud.crud_registration import registration as registration_counter
from samyukta.schemas.slots import (
    CompetitionSlot,
    CompetitionSlotSummary,
    DirectJoinInfo,
    SlotSnapshot,
)
from samyukta.services.capacity.ledger import TrackUsage, compute_usage

logger = logging.getLogger(__name__)


class SlotDecisionService:
    """Open/closed and remaining-capacity view over every track."""

    def __init__(self, limits: CapacityLimits, counter=registration_counter):
        self.limits = limits
        self.counter = counter

    # ========================================
    # Pure helpers
    # ========================================

    def is_direct_join_available(self, total_participants: int) -> bool:
        # Strictly above the soft threshold
        return total_participants > self.limits.direct_join_threshold

    def build_snapshot(
        self,
        total_participants: int,
        workshop_counts: Dict[WorkshopTrack, int],
        competition_counts: Dict[CompetitionTrack, int],
    ) -> SlotSnapshot:
        """Builds the snapshot from already-read counts."""
        total = compute_usage(total_participants, self.limits.max_total)
        workshops = {
            track.value.lower(): compute_usage(
                workshop_counts.get(track, 0), self.limits.for_workshop(track)
            ).to_slots()
            for track in WorkshopTrack.with_capacity()
        }
        competitions = {
            track.value.lower(): compute_usage(
                competition_counts.get(track, 0), self.limits.for_competition(track)
            ).to_slots()
            for track in CompetitionTrack.with_capacity()
        }
        direct_join_available = self.is_direct_join_available(total.used)

        return SlotSnapshot(
            total=total.to_slots(),
            workshops=workshops,
            competitions=competitions,
            event_closed=total.closed,
            direct_join_available=direct_join_available,
            direct_join=DirectJoinInfo(
                available=direct_join_available,
                threshold=self.limits.direct_join_threshold,
                hackathon_price=self.limits.direct_join_hackathon_price,
                pitch_price=self.limits.direct_join_pitch_price,
            ),
            timestamp=datetime.now(timezone.utc),
        )

    # ========================================
    # Reads
    # ========================================

    def workshop_usage(self, db: Session, track: WorkshopTrack) -> TrackUsage:
        used = self.counter.count_by_track(
            db, track_type=TrackType.WORKSHOP, track_value=track.value
        )
        return compute_usage(used, self.limits.for_workshop(track))

    def competition_usage(self, db: Session, track: CompetitionTrack) -> TrackUsage:
        used = self.counter.count_by_track(
            db, track_type=TrackType.COMPETITION, track_value=track.value
        )
        return compute_usage(used, self.limits.for_competition(track))

    def total_usage(self, db: Session) -> TrackUsage:
        return compute_usage(self.counter.count_total_participants(db), self.limits.max_total)

    def get_snapshot(self, db: Session) -> SlotSnapshot:
        """Reads every count once and returns the combined view."""
        total_participants = self.counter.count_total_participants(db)
        workshop_counts = {
            track: self.counter.count_by_track(
                db, track_type=TrackType.WORKSHOP, track_value=track.value
            )
            for track in WorkshopTrack.with_capacity()
        }
        competition_counts = {
            track: self.counter.count_by_track(
                db, track_type=TrackType.COMPETITION, track_value=track.value
            )
            for track in CompetitionTrack.with_capacity()
        }
        return self.build_snapshot(total_participants, workshop_counts, competition_counts)

    def get_competition_summary(self, db: Session) -> CompetitionSlotSummary:
        hackathon = self.competition_usage(db, CompetitionTrack.HACKATHON)
        pitch = self.competition_usage(db, CompetitionTrack.PITCH)
        return CompetitionSlotSummary(
            hackathon=CompetitionSlot(used=hackathon.used, available=hackathon.remaining),
            pitch=CompetitionSlot(used=pitch.used, available=pitch.remaining),
        )

    def is_track_open(self, db: Session, track: WorkshopTrack | CompetitionTrack) -> bool:
        return not self._usage_for(db, track).closed

    def remaining_for(self, db: Session, track: WorkshopTrack | CompetitionTrack) -> int:
        return self._usage_for(db, track).remaining

    def _usage_for(self, db: Session, track: WorkshopTrack | CompetitionTrack) -> TrackUsage:
        if isinstance(track, WorkshopTrack):
            return self.workshop_usage(db, track)
        return self.competition_usage(db, track)

    # ========================================
    # Registration gate
    # ========================================

    def ensure_can_register(
        self,
        db: Session,
        workshop_track: WorkshopTrack,
        competition_track: CompetitionTrack,
    ) -> None:
        """
        Raises when the event, or one of the chosen tracks, is already closed.

        Only the current closed flag is checked, not whether the incoming team
        fits in the remaining slots.
        """
        total = self.total_usage(db)
        if total.closed:
            logger.warning(f"Registration refused: event full ({total.used}/{total.max_capacity})")
            raise EventClosedError(total.used, total.max_capacity)

        if workshop_track != WorkshopTrack.NONE:
            usage = self.workshop_usage(db, workshop_track)
            if usage.closed:
                logger.warning(
                    f"Registration refused: {workshop_track.value} closed "
                    f"({usage.used}/{usage.max_capacity})"
                )
                raise TrackClosedError(workshop_track.value, usage.used, usage.max_capacity)

        if competition_track != CompetitionTrack.NONE:
            usage = self.competition_usage(db, competition_track)
            if usage.closed:
                logger.warning(
                    f"Registration refused: {competition_track.value} closed "
                    f"({usage.used}/{usage.max_capacity})"
                )
                raise TrackClosedError(competition_track.value, usage.used, usage.max_capacity)

    def ensure_direct_join_available(self, db: Session) -> None:
        total = self.counter.count_total_participants(db)
        if not self.is_direct_join_available(total):
            raise DirectJoinUnavailableError(total, self.limits.direct_join_threshold)
