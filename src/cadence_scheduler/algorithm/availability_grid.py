"""
Availability grid: the per-date, per-slot booking table for one quarter.

The grid is the single source of truth for whether a date+slot is free. It is
seeded once from the calendar rules and afterwards only changes through
`book` and `release`.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional

import numpy as np

from .calendar_rules import CalendarRules, DEFAULT_CALENDAR_RULES, TimeSlot


@dataclass(frozen=True)
class SlotOccupant:
    course_title: str
    session_number: int


@dataclass
class DayAvailability:
    """Slots for one date with a boolean free mask and the occupant of each booked slot."""
    date: date
    slots: List[TimeSlot]
    # Derived from occupants, which carry the comparable booking state
    free: np.ndarray = field(init=False, compare=False)
    occupants: List[Optional[SlotOccupant]] = field(init=False)

    def __post_init__(self):
        self.free = np.ones(len(self.slots), dtype=bool)
        self.occupants = [None] * len(self.slots)

    def slot_index(self, slot_start: str) -> Optional[int]:
        for i, slot in enumerate(self.slots):
            if slot.start == slot_start:
                return i
        return None

    @property
    def free_count(self) -> int:
        return int(np.count_nonzero(self.free))

    @property
    def is_fully_booked(self) -> bool:
        return len(self.slots) > 0 and not self.free.any()


class AvailabilityGrid:
    """Booking table keyed by date, owned by a single scheduling run."""

    def __init__(self, days: Iterable[DayAvailability] = ()):
        self._days: Dict[date, DayAvailability] = {}
        for day in days:
            self._days[day.date] = day

    @classmethod
    def initialize(cls, dates: Iterable[date], rules: CalendarRules = DEFAULT_CALENDAR_RULES) -> "AvailabilityGrid":
        """Seed one DayAvailability per date, every slot free."""
        return cls(DayAvailability(d, rules.slots_for_date(d)) for d in dates)

    def __contains__(self, day: date) -> bool:
        return day in self._days

    def __iter__(self) -> Iterator[DayAvailability]:
        return iter(self._days.values())

    def __len__(self) -> int:
        return len(self._days)

    @property
    def dates(self) -> List[date]:
        return list(self._days)

    def day(self, day: date) -> Optional[DayAvailability]:
        return self._days.get(day)

    def is_free(self, day: date, slot_start: str) -> bool:
        day_data = self._days.get(day)
        if day_data is None:
            return False
        index = day_data.slot_index(slot_start)
        return index is not None and bool(day_data.free[index])

    def occupant(self, day: date, slot_start: str) -> Optional[SlotOccupant]:
        day_data = self._days.get(day)
        if day_data is None:
            return None
        index = day_data.slot_index(slot_start)
        return None if index is None else day_data.occupants[index]

    def book(self, day: date, slot_start: str, course_title: str, session_number: int) -> bool:
        """
        Mark a slot as occupied.

        Returns False without changing anything if the date is not in the grid,
        the slot does not exist on that date, or it is already occupied.
        """
        day_data = self._days.get(day)
        if day_data is None:
            return False
        index = day_data.slot_index(slot_start)
        if index is None or not day_data.free[index]:
            return False

        day_data.free[index] = False
        day_data.occupants[index] = SlotOccupant(course_title, session_number)
        return True

    def release(self, day: date, slot_start: str) -> None:
        """Free a slot and clear its occupant. Safe to call on a slot that is already free."""
        day_data = self._days.get(day)
        if day_data is None:
            return
        index = day_data.slot_index(slot_start)
        if index is None:
            return
        day_data.free[index] = True
        day_data.occupants[index] = None

    def is_fully_booked(self, day: date) -> bool:
        day_data = self._days.get(day)
        return day_data is not None and day_data.is_fully_booked

    def total_slots(self) -> int:
        return sum(len(day.slots) for day in self)

    def free_slots(self) -> int:
        return sum(day.free_count for day in self)
