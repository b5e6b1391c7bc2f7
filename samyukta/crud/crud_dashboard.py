# samyukta/crud/crud_dashboard.py
"""
Aggregated metrics for the admin dashboard.
"""
from datetime import date, datetime, timezone

from sqlalchemy.orm import Session

from samyukta.constants.tracks import CompetitionTrack, TrackType, WorkshopTrack
from samyukta.crud import crud_attendance
from samyukta.crud.crud_registration import registration, team_member
from samyukta.schemas.stats import (
    AttendanceStats,
    DashboardStats,
    RegistrationCounts,
    TrackCount,
)
from samyukta.services.capacity.slot_service import SlotDecisionService


def attendance_rate(present: int, total: int) -> int:
    """Whole-number percentage of participants marked present."""
    if total <= 0:
        return 0
    return round(present / total * 100)


class CRUDDashboard:
    def _track_count(self, db: Session, track_type: TrackType, track_value: str) -> TrackCount:
        return TrackCount(
            participants=registration.count_by_track(
                db, track_type=track_type, track_value=track_value
            ),
            teams=registration.count_teams_by_track(
                db, track_type=track_type, track_value=track_value
            ),
        )

    def get_registration_counts(self, db: Session) -> RegistrationCounts:
        return RegistrationCounts(
            total=registration.count_total_participants(db),
            total_teams=registration.count_teams(db),
            cloud=self._track_count(db, TrackType.WORKSHOP, WorkshopTrack.CLOUD.value),
            ai=self._track_count(db, TrackType.WORKSHOP, WorkshopTrack.AI.value),
            cybersecurity=self._track_count(
                db, TrackType.WORKSHOP, WorkshopTrack.CYBERSECURITY.value
            ),
            hackathon=self._track_count(
                db, TrackType.COMPETITION, CompetitionTrack.HACKATHON.value
            ),
            pitch=self._track_count(db, TrackType.COMPETITION, CompetitionTrack.PITCH.value),
        )

    def get_attendance(self, db: Session, *, day: date, total_participants: int) -> AttendanceStats:
        """
        Today's on-site numbers. `present_today` is the number of members
        flagged present, which is not reset between event days.
        """
        present = team_member.count_present(db)
        return AttendanceStats(
            present_today=present,
            attendance_rate=attendance_rate(present, total_participants),
            workshop_attendance=crud_attendance.workshop_attendance.count_for_day(db, day=day),
            competition_checkins=crud_attendance.competition_checkin.count_for_day(db, day=day),
            meals_served=crud_attendance.meal_log.count_for_day(db, day=day),
        )

    def get_stats(
        self, db: Session, *, slot_service: SlotDecisionService, day: date
    ) -> DashboardStats:
        counts = self.get_registration_counts(db)
        return DashboardStats(
            registrations=counts,
            slots=slot_service.get_snapshot(db),
            attendance=self.get_attendance(db, day=day, total_participants=counts.total),
            timestamp=datetime.now(timezone.utc),
        )


dashboard = CRUDDashboard()
