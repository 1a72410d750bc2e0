"""
Word statistics report for a schedule result.

The report carries the summary statistics, the dates with every slot booked
and the scheduling rules the engine applied.
"""

import logging
from datetime import date
from typing import List, Tuple

from docx import Document

from ..algorithm.allocation_engine import MIN_SEPARATION_HOURS
from ..algorithm.calendar_rules import CalendarRules, DEFAULT_CALENDAR_RULES, day_name
from ..algorithm.quarter_calculator import DEFAULT_FISCAL_CALENDAR

logger = logging.getLogger(__name__)

REPORT_TITLE = "Course Schedule Report"
NO_FULLY_BOOKED_DATES = "No dates with 100% utilization"

REPORT_NOTES = [
    "All sessions are scheduled according to delivery cadence rules",
    "Sessions for each course are consecutive weeks at the same time",
    f"Courses avoid same day/time as previous instances (minimum {MIN_SEPARATION_HOURS:g}-hour gap)",
    "Financial Intelligence courses are scheduled on Tuesday/Wednesday 10am-1pm",
    "Special dates and holidays have been accounted for",
]


def template_slot_count(dates, rules: CalendarRules = DEFAULT_CALENDAR_RULES) -> int:
    """Slots the weekly templates offer over `dates` before holidays and cutoffs."""
    return sum(len(rules.weekly_schedule.get(day_name(day), [])) for day in dates)


def format_report_date(day: date) -> str:
    return day.strftime("%A, %B %d, %Y")


def summary_items(result, rules: CalendarRules = DEFAULT_CALENDAR_RULES) -> List[Tuple[str, str]]:
    stats = result.statistics
    return [
        ("Total Available Time Slots (without exceptions)", str(template_slot_count(result.dates, rules))),
        ("Available Time Slots (after special dates and exceptions)", str(stats.total_available_slots)),
        ("Total Sessions Scheduled", str(stats.total_scheduled_sessions)),
        ("Remaining Available Slots", str(stats.slots_after_scheduling)),
        ("Utilization Percentage", f"{stats.utilization_percentage}%"),
    ]


def build_report(result, rules: CalendarRules = DEFAULT_CALENDAR_RULES):
    """
    Build the statistics report document.

    Args:
        result: ScheduleResult from generate_schedule
        rules: Calendar rules the schedule was generated with

    Returns:
        python-docx Document
    """
    document = Document()
    document.add_heading(REPORT_TITLE, level=1)
    if result.quarter is not None and result.year is not None:
        document.add_heading(DEFAULT_FISCAL_CALENDAR.format_quarter(result.quarter, result.year), level=2)

    document.add_heading("Summary Statistics", level=2)
    for label, value in summary_items(result, rules):
        paragraph = document.add_paragraph()
        paragraph.add_run(f"{label}: ").bold = True
        paragraph.add_run(value)

    document.add_heading("Dates with 100% Time Slot Utilization", level=2)
    fully_booked = result.statistics.fully_booked_dates
    if fully_booked:
        for day in fully_booked:
            document.add_paragraph(format_report_date(day), style="List Bullet")
    else:
        document.add_paragraph().add_run(NO_FULLY_BOOKED_DATES).italic = True

    document.add_heading("Notes", level=2)
    for note in REPORT_NOTES:
        document.add_paragraph(note, style="List Bullet")

    return document


def export_schedule_report(result, target, rules: CalendarRules = DEFAULT_CALENDAR_RULES):
    """Write the statistics report to a path or binary file-like object."""
    build_report(result, rules).save(target)
    logger.info("Wrote schedule report with %d fully booked dates", len(result.statistics.fully_booked_dates))
    return target
