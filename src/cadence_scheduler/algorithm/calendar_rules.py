"""
Calendar rules for the weekly slot templates and per-date exceptions.

Each business weekday has its own fixed list of half-hour slots. Holidays remove
a whole day, and a few restricted dates only keep the slots that start before a
cutoff time.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

DAY_NAMES = ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY")
WEEKEND = ("SATURDAY", "SUNDAY")

SLOT_LENGTH_MINUTES = 30


@dataclass(frozen=True)
class TimeSlot:
    """A fixed time-of-day interval, both ends as zero-padded "HH:MM"."""
    start: str
    end: str

    @property
    def label(self) -> str:
        return f"{self.start} - {self.end}"

    @property
    def start_hour(self) -> int:
        return int(self.start.split(":")[0])


@dataclass(frozen=True)
class FixedDate:
    """A month/day that recurs every calendar year."""
    month: int
    day: int

    def for_year(self, year: int) -> date:
        return date(year, self.month, self.day)


@dataclass(frozen=True)
class NthWeekdayDate:
    """The nth occurrence of a weekday in a month, e.g. the 4th Thursday of November."""
    month: int
    weekday: int  # 0 = Monday
    n: int

    def for_year(self, year: int) -> date:
        first = date(year, self.month, 1)
        offset = (self.weekday - first.weekday()) % 7
        return first + timedelta(days=offset + 7 * (self.n - 1))


@dataclass(frozen=True)
class PartialDayRestriction:
    """No sessions starting at or after `cutoff` on this date."""
    when: FixedDate
    cutoff: str


def time_to_minutes(time_str: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hours, minutes = time_str.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def time_difference_in_hours(time1: str, time2: str) -> float:
    """Absolute difference between two "HH:MM" times, in (fractional) hours."""
    return abs(time_to_minutes(time1) - time_to_minutes(time2)) / 60


def hourly_slots(hours) -> List[TimeSlot]:
    """Build half-hour slots starting on the hour for each hour given."""
    slots = []
    for hour in hours:
        start = hour * 60
        slots.append(TimeSlot(minutes_to_time(start), minutes_to_time(start + SLOT_LENGTH_MINUTES)))
    return slots


# Monday and Tuesday skip the 8am slot; Friday ends at 1:30pm
WEEKLY_SCHEDULE: Dict[str, List[TimeSlot]] = {
    "MONDAY": hourly_slots([6, 7] + list(range(9, 21))),     # 14 slots
    "TUESDAY": hourly_slots([6, 7] + list(range(9, 18))),    # 11 slots
    "WEDNESDAY": hourly_slots(range(6, 18)),                 # 12 slots
    "THURSDAY": hourly_slots(range(6, 18)),                  # 12 slots
    "FRIDAY": hourly_slots(range(6, 14)),                    # 8 slots
}

FULL_DAY_EXCLUSIONS: Tuple[FixedDate, ...] = (
    FixedDate(1, 1),    # New Year's Day
    FixedDate(7, 4),    # Fourth of July
    FixedDate(12, 25),  # Christmas
)

NTH_WEEKDAY_EXCLUSIONS: Tuple[NthWeekdayDate, ...] = (
    NthWeekdayDate(month=11, weekday=3, n=4),  # Thanksgiving
)

PARTIAL_DAY_RESTRICTIONS: Tuple[PartialDayRestriction, ...] = (
    PartialDayRestriction(FixedDate(4, 17), "08:30"),
    PartialDayRestriction(FixedDate(5, 22), "08:30"),
    PartialDayRestriction(FixedDate(6, 19), "08:30"),
    PartialDayRestriction(FixedDate(12, 24), "13:00"),  # Christmas Eve
    PartialDayRestriction(FixedDate(12, 31), "13:00"),  # New Year's Eve
)


@dataclass
class CalendarRules:
    """Slot templates plus the exception tables applied on top of them."""
    weekly_schedule: Dict[str, List[TimeSlot]] = field(default_factory=lambda: dict(WEEKLY_SCHEDULE))
    full_day_exclusions: Tuple[FixedDate, ...] = FULL_DAY_EXCLUSIONS
    nth_weekday_exclusions: Tuple[NthWeekdayDate, ...] = NTH_WEEKDAY_EXCLUSIONS
    partial_day_restrictions: Tuple[PartialDayRestriction, ...] = PARTIAL_DAY_RESTRICTIONS

    def excluded_dates(self, year: int) -> List[date]:
        """Dates in `year` with no sessions at all."""
        dates = [fixed.for_year(year) for fixed in self.full_day_exclusions]
        dates.extend(rule.for_year(year) for rule in self.nth_weekday_exclusions)
        return dates

    def restriction_cutoff(self, day: date) -> Optional[str]:
        """Cutoff time for a partial-day restriction on `day`, if any."""
        for restriction in self.partial_day_restrictions:
            if restriction.when.for_year(day.year) == day:
                return restriction.cutoff
        return None

    def slots_for_date(self, day: date) -> List[TimeSlot]:
        """
        Get the ordered time slots available on a specific date.

        Weekends and full-day exclusions give an empty list; restricted dates
        keep only the slots starting strictly before their cutoff.
        """
        day_name = DAY_NAMES[day.weekday()]
        if day_name in WEEKEND:
            return []

        base_slots = self.weekly_schedule.get(day_name, [])

        if day in self.excluded_dates(day.year):
            return []

        cutoff = self.restriction_cutoff(day)
        if cutoff is not None:
            cutoff_minutes = time_to_minutes(cutoff)
            return [slot for slot in base_slots if time_to_minutes(slot.start) < cutoff_minutes]

        return list(base_slots)

    def all_time_slot_labels(self) -> List[str]:
        """Unique "HH:MM - HH:MM" labels across every weekday template."""
        labels = {slot.label for slots in self.weekly_schedule.values() for slot in slots}
        return sorted(labels)


DEFAULT_CALENDAR_RULES = CalendarRules()


def slots_for_date(day: date, rules: CalendarRules = DEFAULT_CALENDAR_RULES) -> List[TimeSlot]:
    return rules.slots_for_date(day)


def day_name(day: date) -> str:
    return DAY_NAMES[day.weekday()]
