# samyukta/services/capacity/ledger.py
"""
Capacity ledger: derives remaining/closed flags from a used count and its
fixed maximum. Pure arithmetic, no database access.
"""

from dataclasses import dataclass
from typing import Optional

from samyukta.schemas.slots import TrackSlots


@dataclass(frozen=True)
class TrackUsage:
    used: int
    max_capacity: int

    @property
    def remaining(self) -> int:
        return max(0, self.max_capacity - self.used)

    @property
    def closed(self) -> bool:
        # Equality closes the track
        return self.used >= self.max_capacity

    def to_slots(self) -> TrackSlots:
        return TrackSlots(
            registered=self.used,
            max=self.max_capacity,
            remaining=self.remaining,
            closed=self.closed,
        )


def compute_usage(used: Optional[int], max_capacity: Optional[int]) -> TrackUsage:
    """
    Builds a TrackUsage, treating missing or negative counts as zero and
    clamping limits at zero.
    """
    used = used if used is not None and used > 0 else 0
    max_capacity = max_capacity if max_capacity is not None and max_capacity > 0 else 0
    return TrackUsage(used=used, max_capacity=max_capacity)
