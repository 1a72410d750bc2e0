"""
Excel workbook export of a schedule result.

One sheet per view: summary, by course, by month, by week, calendar grid and
the full session list.
"""

import logging
from datetime import timedelta
from typing import List

import pandas as pd

from ..algorithm.quarter_calculator import DEFAULT_FISCAL_CALENDAR, fiscal_year_label
from .calendar_view import build_calendar_grid

logger = logging.getLogger(__name__)

SESSION_COLUMNS = ["Date", "Day", "Start Time", "End Time", "Course Title", "Session Number",
                   "Instructor First Name", "Instructor Last Name"]

SHEET_NAMES = ["Summary", "By Course", "By Month", "By Week", "Calendar View", "All Sessions"]


def sessions_to_dataframe(sessions) -> pd.DataFrame:
    rows = [{
        "Date": s.date,
        "Day": s.date.strftime("%A"),
        "Start Time": s.start_time,
        "End Time": s.end_time,
        "Course Title": s.course_title,
        "Session Number": s.session_number,
        "Instructor First Name": s.instructor_first_name,
        "Instructor Last Name": s.instructor_last_name,
    } for s in sessions]
    return pd.DataFrame(rows, columns=SESSION_COLUMNS)


def summary_rows(result, sessions_df: pd.DataFrame, top_n: int = 5) -> List[list]:
    stats = result.statistics
    days_with_sessions = sessions_df["Date"].nunique()
    average_per_day = len(sessions_df) / days_with_sessions if days_with_sessions else 0.0

    if result.quarter is not None and result.year is not None:
        quarter_label = DEFAULT_FISCAL_CALENDAR.format_quarter(result.quarter, result.year)
        year_label = fiscal_year_label(result.year)
    else:
        quarter_label = year_label = ""

    rows = [
        ["Course Schedule Summary", ""],
        ["Quarter", quarter_label],
        ["Financial Year", year_label],
        ["Total Available Slots", stats.total_available_slots],
        ["Total Sessions Scheduled", stats.total_scheduled_sessions],
        ["Slots After Scheduling", stats.slots_after_scheduling],
        ["Utilization (%)", stats.utilization_percentage],
        ["Unique Courses", sessions_df["Course Title"].nunique()],
        ["Days with Sessions", days_with_sessions],
        ["Average Sessions per Day", round(average_per_day, 1)],
        ["Fully Booked Dates", ", ".join(d.isoformat() for d in stats.fully_booked_dates)],
        ["", ""],
        [f"Top {top_n} Most Scheduled Courses", "Session Count"],
    ]
    top_courses = sessions_df["Course Title"].value_counts().head(top_n)
    rows.extend([course, int(count)] for course, count in top_courses.items())
    return rows


def calendar_dataframe(result) -> pd.DataFrame:
    calendar = build_calendar_grid(result.sessions, result.dates)
    rows = []
    for day in calendar.dates:
        row = {"Date": day, "Day": day.strftime("%A")}
        for time_slot in calendar.time_slots:
            entries = calendar.entries(day, time_slot)
            row[time_slot] = "; ".join(f"{e['course']} (S{e['sessionNumber']})" for e in entries)
        rows.append(row)
    return pd.DataFrame(rows, columns=["Date", "Day"] + calendar.time_slots)


def build_sheets(result) -> dict:
    sessions_df = sessions_to_dataframe(result.sessions)

    by_course = sessions_df.sort_values(["Course Title", "Date", "Start Time"], kind="stable")

    by_month = sessions_df.copy()
    by_month.insert(0, "Month", [d.strftime("%B %Y") for d in by_month["Date"]])

    by_week = sessions_df.copy()
    by_week.insert(0, "Week Starting", [d - timedelta(days=d.weekday()) for d in by_week["Date"]])

    return {
        "Summary": pd.DataFrame(summary_rows(result, sessions_df)),
        "By Course": by_course,
        "By Month": by_month,
        "By Week": by_week,
        "Calendar View": calendar_dataframe(result),
        "All Sessions": sessions_df,
    }


def export_schedule_workbook(result, target):
    """
    Write the schedule workbook.

    Args:
        result: ScheduleResult from generate_schedule
        target: Output path or binary file-like object
    """
    sheets = build_sheets(result)
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        for name in SHEET_NAMES:
            sheets[name].to_excel(writer, sheet_name=name, index=False, header=(name != "Summary"))
    logger.info("Wrote schedule workbook with %d sessions", len(result.sessions))
    return target
