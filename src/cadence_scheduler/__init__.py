"""
Cadence Scheduler Package
A greedy quarter scheduler for recurring course sessions.
"""

__version__ = "1.0.0"

from .algorithm.allocation_engine import (
    AllocationEngine,
    Course,
    CourseConstraints,
    ScheduledSession,
    ScheduleResult,
    SpecialCourseRule,
    generate_schedule,
)
from .algorithm.availability_grid import AvailabilityGrid
from .algorithm.calendar_rules import CalendarRules, TimeSlot, slots_for_date
from .algorithm.quarter_calculator import (
    FiscalCalendar,
    InvalidQuarterError,
    InvalidYearError,
    fiscal_epoch,
    quarter_dates,
)
from .algorithm.statistics import ScheduleStatistics, summarize

__all__ = [
    "AllocationEngine",
    "AvailabilityGrid",
    "CalendarRules",
    "Course",
    "CourseConstraints",
    "FiscalCalendar",
    "InvalidQuarterError",
    "InvalidYearError",
    "ScheduledSession",
    "ScheduleResult",
    "ScheduleStatistics",
    "SpecialCourseRule",
    "TimeSlot",
    "fiscal_epoch",
    "generate_schedule",
    "quarter_dates",
    "slots_for_date",
    "summarize",
]
