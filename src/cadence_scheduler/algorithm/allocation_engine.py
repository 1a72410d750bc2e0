"""
Allocation engine that books recurring course sessions into the quarter's slots.

Courses are processed greedily in input order. For every cadence start date the
engine tries every following weekday of the quarter as the start of a new
instance, and books all of an instance's weekly sessions or none of them.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from .availability_grid import AvailabilityGrid
from .calendar_rules import CalendarRules, DEFAULT_CALENDAR_RULES, TimeSlot, day_name, time_difference_in_hours
from .quarter_calculator import DEFAULT_FISCAL_CALENDAR, FiscalCalendar
from .statistics import ScheduleStatistics, summarize

logger = logging.getLogger(__name__)

MIN_SEPARATION_HOURS = 3


@dataclass(frozen=True)
class Course:
    """A course from the cadence sheet. `cadence` is in weeks."""
    title: str
    cadence: int
    session_count: int
    notes: str = ""


@dataclass(frozen=True)
class ScheduledSession:
    date: date
    course_title: str
    session_number: int
    start_time: str
    end_time: str
    instructor_first_name: str = ""
    instructor_last_name: str = ""

    def to_dict(self) -> Dict:
        return {
            'date': self.date.isoformat(),
            'courseTitle': self.course_title,
            'sessionNumber': self.session_number,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'instructorFirstName': self.instructor_first_name,
            'instructorLastName': self.instructor_last_name,
        }


@dataclass(frozen=True)
class InstanceStart:
    """Where session 1 of a successfully booked instance landed."""
    date: date
    weekday: str
    start_time: str


@dataclass(frozen=True)
class SpecialCourseRule:
    """Narrower day/time window for courses whose title contains `title_match`."""
    title_match: str
    weekdays: Tuple[str, ...]
    start_hour: int  # inclusive
    end_hour: int    # exclusive
    exempt_from_weekday_separation: bool = True

    def matches(self, title: str) -> bool:
        return self.title_match.lower() in title.lower()

    def allows(self, weekday: str, slot: TimeSlot) -> bool:
        return weekday in self.weekdays and self.start_hour <= slot.start_hour < self.end_hour


SPECIAL_COURSE_RULES: Tuple[SpecialCourseRule, ...] = (
    SpecialCourseRule("financial intelligence", ("TUESDAY", "WEDNESDAY"), 10, 13),
)


@dataclass(frozen=True)
class CourseConstraints:
    """Placement constraints resolved once per course."""
    special_rule: Optional[SpecialCourseRule] = None
    min_separation_hours: float = MIN_SEPARATION_HOURS

    @classmethod
    def for_course(cls, course: Course, special_rules: Sequence[SpecialCourseRule] = SPECIAL_COURSE_RULES,
                   min_separation_hours: float = MIN_SEPARATION_HOURS) -> "CourseConstraints":
        rule = next((r for r in special_rules if r.matches(course.title)), None)
        return cls(rule, min_separation_hours)

    @property
    def is_special(self) -> bool:
        return self.special_rule is not None

    def accepts(self, weekday: str, slot: TimeSlot, last_instance: Optional[InstanceStart]) -> bool:
        if self.special_rule is not None and not self.special_rule.allows(weekday, slot):
            return False

        if last_instance is not None:
            exempt = self.special_rule is not None and self.special_rule.exempt_from_weekday_separation
            if not exempt and weekday == last_instance.weekday:
                return False
            if time_difference_in_hours(slot.start, last_instance.start_time) < self.min_separation_hours:
                return False

        return True


@dataclass
class ScheduleResult:
    """Everything produced by one run of the engine for a single quarter."""
    sessions: List[ScheduledSession]
    statistics: ScheduleStatistics
    grid: AvailabilityGrid
    history: Dict[str, List[InstanceStart]]
    dates: List[date]
    quarter: Optional[str] = None
    year: Optional[int] = None

    def to_dict(self) -> Dict:
        return {
            'quarter': self.quarter,
            'year': self.year,
            'sessions': [session.to_dict() for session in self.sessions],
            'statistics': self.statistics.to_dict(),
        }


class AllocationEngine:
    """Greedy, order-dependent allocator for one quarter's availability grid."""

    def __init__(self, quarter_dates: List[date], fiscal_start: date, fiscal_end: Optional[date] = None,
                 rules: CalendarRules = DEFAULT_CALENDAR_RULES,
                 special_rules: Sequence[SpecialCourseRule] = SPECIAL_COURSE_RULES,
                 min_separation_hours: float = MIN_SEPARATION_HOURS):
        self.quarter_dates = sorted(quarter_dates)
        self.fiscal_start = fiscal_start
        if fiscal_end is None:
            # Day before the same month/day next year; 29 Feb falls back to 28 Feb
            next_start = date(fiscal_start.year + 1, fiscal_start.month, 1) + timedelta(days=fiscal_start.day - 1)
            fiscal_end = next_start - timedelta(days=1)
        self.fiscal_end = fiscal_end
        self.rules = rules
        self.special_rules = tuple(special_rules)
        self.min_separation_hours = min_separation_hours

        self.grid = AvailabilityGrid.initialize(self.quarter_dates, rules)
        self.history: Dict[str, List[InstanceStart]] = defaultdict(list)
        self.sessions: List[ScheduledSession] = []

    def run(self, courses: Sequence[Course]) -> List[ScheduledSession]:
        """Schedule every course in order and return all sessions sorted by date and time."""
        for course in courses:
            sessions = self.schedule_course(course)
            self.sessions.extend(sessions)
            logger.info("Scheduled %d sessions for %r", len(sessions), course.title)

        self.sessions.sort(key=lambda s: (s.date, s.start_time))
        return self.sessions

    def schedule_course(self, course: Course) -> List[ScheduledSession]:
        constraints = CourseConstraints.for_course(course, self.special_rules, self.min_separation_hours)
        sessions = []

        for cadence_date in self.cadence_start_dates(course):
            # Every later weekday is a candidate, not just the cadence date
            for start_date in (d for d in self.quarter_dates if d >= cadence_date):
                scheduled = self.schedule_instance(course, start_date, constraints)
                if scheduled:
                    sessions.extend(scheduled)
                    self.history[course.title].append(
                        InstanceStart(start_date, day_name(start_date), scheduled[0].start_time))

        return sessions

    def cadence_start_dates(self, course: Course) -> List[date]:
        """Dates from the fiscal epoch, `cadence` weeks apart, on/before the quarter's last date."""
        if not self.quarter_dates:
            return []
        last_quarter_date = self.quarter_dates[-1]

        current = self.fiscal_start
        while current.weekday() >= 5:
            current += timedelta(days=1)

        if current > self.fiscal_end:
            return []

        # Only steps landing on/before the fiscal year end
        steps = (self.fiscal_end - current).days // (7 * course.cadence)
        cadence_dates = []
        for i in range(steps + 1):
            cadence_date = current + timedelta(weeks=i * course.cadence)
            if cadence_date > last_quarter_date:
                break
            cadence_dates.append(cadence_date)
        return cadence_dates

    def find_suitable_slot(self, start_date: date, constraints: CourseConstraints,
                           history: List[InstanceStart]) -> Optional[TimeSlot]:
        """First free slot on `start_date` satisfying the course's constraints, if any."""
        day_data = self.grid.day(start_date)
        if day_data is None:
            return None

        weekday = day_name(start_date)
        last_instance = history[-1] if history else None

        for index, slot in enumerate(day_data.slots):
            if not day_data.free[index]:
                continue
            if constraints.accepts(weekday, slot, last_instance):
                return slot
        return None

    def next_date_on_weekday(self, from_date: date, weekday: int) -> Optional[date]:
        for d in self.quarter_dates:
            if d >= from_date and d.weekday() == weekday:
                return d
        return None

    def schedule_instance(self, course: Course, start_date: date,
                          constraints: CourseConstraints) -> List[ScheduledSession]:
        """
        Book all sessions of one instance starting at `start_date`.

        Returns the booked sessions, or an empty list after rolling back any
        partial booking when a week cannot be placed.
        """
        slot = self.find_suitable_slot(start_date, constraints, self.history.get(course.title, []))
        if slot is None:
            return []

        sessions = []
        cursor = start_date
        for session_number in range(1, course.session_count + 1):
            session_date = self.next_date_on_weekday(cursor, start_date.weekday())
            if session_date is None or not self.grid.book(session_date, slot.start, course.title, session_number):
                logger.debug("Rolling back %d sessions of %r starting %s at %s",
                             len(sessions), course.title, start_date, slot.start)
                self.rollback(sessions)
                return []

            sessions.append(ScheduledSession(
                date=session_date,
                course_title=course.title,
                session_number=session_number,
                start_time=slot.start,
                end_time=slot.end,
            ))
            cursor = session_date + timedelta(weeks=1)

        return sessions

    def rollback(self, sessions: List[ScheduledSession]) -> None:
        for session in sessions:
            self.grid.release(session.date, session.start_time)

    def statistics(self) -> ScheduleStatistics:
        return summarize(self.grid, self.sessions)


def generate_schedule(courses: Sequence[Course], quarter: str, year: int,
                      rules: CalendarRules = DEFAULT_CALENDAR_RULES,
                      fiscal_calendar: FiscalCalendar = DEFAULT_FISCAL_CALENDAR,
                      special_rules: Sequence[SpecialCourseRule] = SPECIAL_COURSE_RULES) -> ScheduleResult:
    """
    Generate the schedule for a fiscal quarter.

    Args:
        courses: Courses in priority order; earlier courses get first pick of slots
        quarter: Quarter identifier (Q1, Q2, Q3, Q4)
        year: Fiscal year start year (2025 for FY 2025-26)

    Returns:
        ScheduleResult with the sorted sessions, statistics and final grid

    Raises:
        InvalidQuarterError: If the quarter is not in the quarter table
        InvalidYearError: If the year is not a usable integer year
    """
    dates = fiscal_calendar.quarter_dates(quarter, year)
    engine = AllocationEngine(
        dates,
        fiscal_calendar.fiscal_epoch(year),
        fiscal_calendar.fiscal_year_end(year),
        rules=rules,
        special_rules=special_rules,
    )
    logger.info("Scheduling %d courses over %d weekdays in %s %s", len(courses), len(dates), quarter, year)
    sessions = engine.run(courses)

    return ScheduleResult(
        sessions=sessions,
        statistics=engine.statistics(),
        grid=engine.grid,
        history=dict(engine.history),
        dates=dates,
        quarter=fiscal_calendar.get_quarter(quarter).name,
        year=year,
    )
