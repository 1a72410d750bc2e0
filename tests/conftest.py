import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))

from cadence_scheduler.algorithm.allocation_engine import Course
from cadence_scheduler.algorithm.calendar_rules import CalendarRules, hourly_slots

WEEKDAYS = ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY")


def business_days(start, count):
    """`count` consecutive Monday-Friday dates starting at `start`."""
    days = []
    current = start
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


@pytest.fixture()
def two_slot_rules():
    """Every weekday has a 09:00 and a 14:00 slot and there are no exceptions."""
    return CalendarRules(
        weekly_schedule={day: hourly_slots([9, 14]) for day in WEEKDAYS},
        full_day_exclusions=(),
        nth_weekday_exclusions=(),
        partial_day_restrictions=(),
    )


@pytest.fixture()
def one_week():
    # Monday 7 April 2025 .. Friday 11 April 2025
    return business_days(date(2025, 4, 7), 5)


@pytest.fixture()
def sample_courses():
    return [
        Course("Leadership Essentials", cadence=4, session_count=3),
        Course("Excel Basics", cadence=2, session_count=2),
        Course("Financial Intelligence", cadence=4, session_count=2),
        Course("Coaching Conversations", cadence=6, session_count=4),
        Course("Presentation Skills", cadence=1, session_count=1),
    ]


@pytest.fixture()
def course_rows():
    return [
        {"Course Title": "Leadership Essentials", "Delivery Cadence": "Every 4 weeks", "Number of Sessions": 3},
        {"Course Title": "Excel Basics", "Delivery Cadence": 2, "Number of Sessions": "2 sessions"},
        {"Course Title": "", "Delivery Cadence": 2, "Number of Sessions": 2},
    ]
