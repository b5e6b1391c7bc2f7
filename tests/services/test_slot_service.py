# tests/services/test_slot_service.py

from unittest.mock import MagicMock

import pytest

from samyukta.constants.tracks import CompetitionTrack, TrackType, WorkshopTrack
from samyukta.core.config import CapacityLimits
from samyukta.core.exceptions import (
    DirectJoinUnavailableError,
    EventClosedError,
    TrackClosedError,
)
from samyukta.services.capacity.slot_service import SlotDecisionService

limits = CapacityLimits()


def make_counter(total: int = 0, by_track: dict | None = None) -> MagicMock:
    """A registration counter returning fixed counts."""
    by_track = by_track or {}
    counter = MagicMock()
    counter.count_total_participants.return_value = total
    counter.count_by_track.side_effect = lambda db, *, track_type, track_value: by_track.get(
        track_value, 0
    )
    return counter


def test_snapshot_for_empty_event():
    service = SlotDecisionService(limits, counter=make_counter())
    snapshot = service.get_snapshot(MagicMock())

    assert snapshot.total.registered == 0
    assert snapshot.total.max == 400
    assert set(snapshot.workshops) == {"cloud", "ai", "cybersecurity"}
    assert set(snapshot.competitions) == {"hackathon", "pitch"}
    assert snapshot.workshops["cloud"].remaining == 200
    assert snapshot.competitions["hackathon"].max == 250
    assert snapshot.event_closed is False
    assert snapshot.direct_join_available is False


def test_direct_join_opens_above_threshold_before_event_closes():
    service = SlotDecisionService(limits)
    snapshot = service.build_snapshot(360, {}, {})

    assert snapshot.direct_join_available is True
    assert snapshot.direct_join.available is True
    assert snapshot.direct_join.hackathon_price == 400
    assert snapshot.direct_join.pitch_price == 300
    assert snapshot.event_closed is False


def test_direct_join_threshold_is_strict():
    service = SlotDecisionService(limits)
    assert service.is_direct_join_available(350) is False
    assert service.is_direct_join_available(351) is True


def test_event_and_track_flags_are_independent():
    service = SlotDecisionService(limits)

    snapshot = service.build_snapshot(400, {WorkshopTrack.CLOUD: 120}, {})
    assert snapshot.event_closed is True
    assert snapshot.workshops["cloud"].closed is False

    snapshot = service.build_snapshot(210, {WorkshopTrack.CLOUD: 200}, {})
    assert snapshot.event_closed is False
    assert snapshot.workshops["cloud"].closed is True


def test_limits_are_injected():
    small = CapacityLimits(max_total=10, max_pitch=2, direct_join_threshold=5)
    service = SlotDecisionService(small)
    snapshot = service.build_snapshot(6, {}, {CompetitionTrack.PITCH: 2})

    assert snapshot.total.max == 10
    assert snapshot.competitions["pitch"].closed is True
    assert snapshot.direct_join_available is True


def test_counts_are_requested_per_track_field():
    counter = make_counter(by_track={"AI": 3, "Pitch": 4})
    service = SlotDecisionService(limits, counter=counter)
    db = MagicMock()

    assert service.workshop_usage(db, WorkshopTrack.AI).used == 3
    assert service.competition_usage(db, CompetitionTrack.PITCH).used == 4
    counter.count_by_track.assert_any_call(
        db, track_type=TrackType.WORKSHOP, track_value="AI"
    )
    counter.count_by_track.assert_any_call(
        db, track_type=TrackType.COMPETITION, track_value="Pitch"
    )


def test_competition_summary():
    service = SlotDecisionService(limits, counter=make_counter(by_track={"Hackathon": 40}))
    summary = service.get_competition_summary(MagicMock())
    assert summary.hackathon.used == 40
    assert summary.hackathon.available == 210
    assert summary.pitch.available == 250


def test_is_track_open_and_remaining():
    service = SlotDecisionService(limits, counter=make_counter(by_track={"Cybersecurity": 200}))
    db = MagicMock()
    assert service.is_track_open(db, WorkshopTrack.CYBERSECURITY) is False
    assert service.remaining_for(db, WorkshopTrack.CYBERSECURITY) == 0
    assert service.is_track_open(db, CompetitionTrack.HACKATHON) is True


def test_registration_allowed_one_below_max():
    service = SlotDecisionService(limits, counter=make_counter(by_track={"Cloud": 199}))
    # Team size is not compared against the remaining slots
    service.ensure_can_register(MagicMock(), WorkshopTrack.CLOUD, CompetitionTrack.NONE)


def test_registration_refused_for_closed_track():
    service = SlotDecisionService(limits, counter=make_counter(by_track={"Hackathon": 250}))
    with pytest.raises(TrackClosedError) as exc_info:
        service.ensure_can_register(MagicMock(), WorkshopTrack.AI, CompetitionTrack.HACKATHON)

    error = exc_info.value
    assert error.status_code == 409
    assert error.details == {"track": "Hackathon", "used": 250, "max": 250}


def test_registration_refused_when_event_full():
    service = SlotDecisionService(limits, counter=make_counter(total=400))
    with pytest.raises(EventClosedError):
        service.ensure_can_register(MagicMock(), WorkshopTrack.NONE, CompetitionTrack.NONE)


def test_tracks_without_capacity_are_not_counted():
    counter = make_counter()
    service = SlotDecisionService(limits, counter=counter)
    service.ensure_can_register(MagicMock(), WorkshopTrack.NONE, CompetitionTrack.NONE)
    counter.count_by_track.assert_not_called()


def test_direct_join_unavailable_at_threshold():
    service = SlotDecisionService(limits, counter=make_counter(total=350))
    with pytest.raises(DirectJoinUnavailableError) as exc_info:
        service.ensure_direct_join_available(MagicMock())
    assert exc_info.value.details == {"total_registrations": 350, "threshold": 350}
