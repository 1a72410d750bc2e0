"""Date x time-slot calendar grid rebuilt from a session list."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Sequence


@dataclass
class CalendarGrid:
    dates: List[date]
    time_slots: List[str]
    grid: Dict[str, Dict[str, List[Dict]]] = field(default_factory=dict)

    def entries(self, day: date, time_slot: str) -> List[Dict]:
        return self.grid.get(day.isoformat(), {}).get(time_slot, [])

    def to_dict(self) -> Dict:
        return {
            'dates': [d.isoformat() for d in self.dates],
            'timeSlots': self.time_slots,
            'grid': self.grid,
        }


def build_calendar_grid(sessions: Sequence, dates: Sequence[date]) -> CalendarGrid:
    grid: Dict[str, Dict[str, List[Dict]]] = {}
    time_slots = set()

    for session in sessions:
        time_slot = f"{session.start_time} - {session.end_time}"
        grid.setdefault(session.date.isoformat(), {}).setdefault(time_slot, []).append({
            'course': session.course_title,
            'sessionNumber': session.session_number,
        })
        time_slots.add(time_slot)

    return CalendarGrid(dates=list(dates), time_slots=sorted(time_slots), grid=grid)
