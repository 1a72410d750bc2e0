"""Utilization statistics computed from the final grid and session list."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Sequence

import numpy as np

from .availability_grid import AvailabilityGrid


@dataclass(frozen=True)
class ScheduleStatistics:
    total_available_slots: int
    total_scheduled_sessions: int
    slots_after_scheduling: int
    utilization_percentage: float
    fully_booked_dates: List[date] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'totalAvailableSlots': self.total_available_slots,
            'totalScheduledSessions': self.total_scheduled_sessions,
            'slotsAfterScheduling': self.slots_after_scheduling,
            'utilizationPercentage': self.utilization_percentage,
            'fullyBookedDates': [d.isoformat() for d in self.fully_booked_dates],
        }


def summarize(grid: AvailabilityGrid, sessions: Sequence) -> ScheduleStatistics:
    """
    Summarize slot usage after allocation.

    The booked count is the number of sessions rather than a grid recount, and
    utilization is 0 for a grid without any slots.
    """
    slot_counts = np.array([len(day.slots) for day in grid], dtype=int)
    free_counts = np.array([day.free_count for day in grid], dtype=int)

    total_slots = int(slot_counts.sum())
    free_slots = int(free_counts.sum())

    if total_slots > 0:
        utilization = round((total_slots - free_slots) / total_slots * 100, 2)
    else:
        utilization = 0.0

    fully_booked = [day.date for day in grid if day.is_fully_booked]

    return ScheduleStatistics(
        total_available_slots=total_slots,
        total_scheduled_sessions=len(sessions),
        slots_after_scheduling=free_slots,
        utilization_percentage=utilization,
        fully_booked_dates=fully_booked,
    )
