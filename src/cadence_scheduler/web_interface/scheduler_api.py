"""
Flask API for the Cadence Scheduler web interface.
Turns uploaded cadence sheets or JSON course rows into a quarter schedule.
"""

import io
import logging

from flask import request, jsonify, send_file

from ..algorithm.allocation_engine import generate_schedule
from ..algorithm.quarter_calculator import DEFAULT_FISCAL_CALENDAR, InvalidQuarterError, InvalidYearError
from ..data_parsing.course_manager import load_courses, parse_course_records
from ..solution_viewing.calendar_view import build_calendar_grid
from ..solution_viewing.excel_exporter import export_schedule_workbook
from ..solution_viewing.report_generator import export_schedule_report

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
DOCX_MIMETYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class RequestError(ValueError):
    """A request that cannot be scheduled as sent."""


def _parse_year(value) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidYearError(f"Invalid year: {value!r}")


def _normalize_quarter(value):
    return value.strip().upper() if isinstance(value, str) else value


def _read_schedule_request():
    """
    Pull courses, quarter and year from either a JSON body or a multipart upload.

    Returns:
        Tuple of (courses, quarter, year)
    """
    if request.files:
        upload = request.files.get('file')
        if upload is None or not upload.filename:
            raise RequestError("Course file is required")
        quarter = _normalize_quarter(request.form.get('quarter', ''))
        year = _parse_year(request.form.get('year'))
        courses = load_courses(io.BytesIO(upload.read()), filename=upload.filename)
    else:
        data = request.get_json(silent=True)
        if not data:
            raise RequestError("Request body must be JSON or a file upload")
        if not isinstance(data, dict):
            raise RequestError("Request body must be a JSON object")
        records = data.get('courses', [])
        if not isinstance(records, list) or not all(isinstance(row, dict) for row in records):
            raise RequestError("'courses' must be a list of course row objects")
        quarter = _normalize_quarter(data.get('quarter', ''))
        year = _parse_year(data.get('year'))
        courses = parse_course_records(records)

    if not courses:
        raise RequestError("No valid courses found (each needs a title, cadence and number of sessions)")

    logger.info("Schedule request for %s %s with %d courses", quarter, year, len(courses))
    return courses, quarter, year


def _error(message, status):
    return jsonify({'success': False, 'error': message}), status


def generate_schedule_view():
    """Handle schedule generation request from the web interface."""
    try:
        courses, quarter, year = _read_schedule_request()
        result = generate_schedule(courses, quarter, year)
    except (InvalidQuarterError, InvalidYearError) as e:
        return _error(str(e), 400)
    except ValueError as e:
        return _error(f'Invalid course data: {str(e)}', 400)
    except Exception as e:
        logger.exception("Error generating schedule")
        return _error(f'An error occurred: {str(e)}', 500)

    calendar = build_calendar_grid(result.sessions, result.dates)
    stats = result.statistics
    return jsonify({
        'success': True,
        'quarterLabel': DEFAULT_FISCAL_CALENDAR.format_quarter(result.quarter, result.year),
        'sessions': [session.to_dict() for session in result.sessions],
        'statistics': stats.to_dict(),
        'calendar': calendar.to_dict(),
        'message': f'Scheduled {stats.total_scheduled_sessions} sessions '
                   f'({stats.utilization_percentage:.2f}% utilization)',
    })


def export_schedule_view():
    """Generate the schedule and return it as an Excel workbook."""
    try:
        courses, quarter, year = _read_schedule_request()
        result = generate_schedule(courses, quarter, year)
    except (InvalidQuarterError, InvalidYearError) as e:
        return _error(str(e), 400)
    except ValueError as e:
        return _error(f'Invalid course data: {str(e)}', 400)
    except Exception as e:
        logger.exception("Error exporting schedule")
        return _error(f'An error occurred: {str(e)}', 500)

    buffer = io.BytesIO()
    export_schedule_workbook(result, buffer)
    buffer.seek(0)
    return send_file(
        buffer,
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=f"schedule_{result.quarter}_{result.year}.xlsx",
    )


def export_report_view():
    """Generate the schedule and return its statistics report as a Word document."""
    try:
        courses, quarter, year = _read_schedule_request()
        result = generate_schedule(courses, quarter, year)
    except (InvalidQuarterError, InvalidYearError) as e:
        return _error(str(e), 400)
    except ValueError as e:
        return _error(f'Invalid course data: {str(e)}', 400)
    except Exception as e:
        logger.exception("Error exporting report")
        return _error(f'An error occurred: {str(e)}', 500)

    buffer = io.BytesIO()
    export_schedule_report(result, buffer)
    buffer.seek(0)
    return send_file(
        buffer,
        mimetype=DOCX_MIMETYPE,
        as_attachment=True,
        download_name=f"schedule_report_{result.quarter}_{result.year}.docx",
    )


def quarter_options():
    """Quarter dropdown options."""
    return jsonify({'success': True, 'quarters': DEFAULT_FISCAL_CALENDAR.quarter_options()})


def health_check():
    """Health check endpoint."""
    return jsonify({'status': 'healthy', 'message': 'Cadence Scheduler API is running'})
