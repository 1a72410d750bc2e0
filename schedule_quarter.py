#!/usr/bin/env python3
"""
Cadence Scheduler CLI.

Usage:
  python schedule_quarter.py "Cadence Sheet.xlsx" --quarter Q1 --year 2025

  # Also write the Excel workbook
  python schedule_quarter.py courses.csv --quarter Q4 --year 2025 --excel "Q4 Schedule.xlsx"

  # And the Word statistics report
  python schedule_quarter.py courses.csv --quarter Q4 --year 2025 --report "Q4 Report.docx"
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from cadence_scheduler.algorithm.allocation_engine import generate_schedule
from cadence_scheduler.algorithm.quarter_calculator import InvalidQuarterError, InvalidYearError
from cadence_scheduler.data_parsing.course_manager import load_courses
from cadence_scheduler.solution_viewing.excel_exporter import export_schedule_workbook
from cadence_scheduler.solution_viewing.report_generator import export_schedule_report
from cadence_scheduler.solution_viewing.terminal_viewer import view_schedule


def quarter_arg(value):
    return value.strip().upper()


def build_parser():
    parser = argparse.ArgumentParser(description="Schedule recurring courses across a fiscal quarter.")
    parser.add_argument("courses", help="Cadence sheet (.xlsx, .xls or .csv)")
    parser.add_argument("--quarter", required=True, type=quarter_arg, help="Q1, Q2, Q3 or Q4")
    parser.add_argument("--year", required=True, type=int, help="Fiscal year start year, e.g. 2025 for FY 2025-26")
    parser.add_argument("--excel", help="Write the schedule workbook to this path")
    parser.add_argument("--report", help="Write the Word statistics report to this path")
    parser.add_argument("--quiet", action="store_true", help="Only print statistics")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO'))

    try:
        courses = load_courses(args.courses)
        result = generate_schedule(courses, args.quarter, args.year)
    except (InvalidQuarterError, InvalidYearError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except (FileNotFoundError, ValueError) as e:
        print(f"Error reading courses: {e}", file=sys.stderr)
        return 2

    print(f"Loaded {len(courses)} courses from {args.courses}")
    view_schedule(result, show_sessions=not args.quiet)

    if args.excel:
        export_schedule_workbook(result, args.excel)
        print(f"\nWorkbook written: {args.excel}")
    if args.report:
        export_schedule_report(result, args.report)
        print(f"\nReport written: {args.report}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
