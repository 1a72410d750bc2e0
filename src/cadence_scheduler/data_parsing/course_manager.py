"""
Course Manager - loads the cadence sheet and normalizes it into Course records.
Courses can come from an uploaded Excel/CSV file or from Google Sheets.
"""

import json
import logging
import numbers
import os
import re
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from gspread.auth import service_account, service_account_from_dict

from ..algorithm.allocation_engine import Course

logger = logging.getLogger(__name__)

# Header spellings seen in cadence sheets, compared after normalize_header()
COLUMN_ALIASES: Dict[str, List[str]] = {
    'title': ["Course Title", "title"],
    'cadence': ["Delivery Cadence (The course begins every X weeks)", "Delivery Cadence", "cadence"],
    'sessions': ["Number of Sessions in the Course", "Number of Sessions", "sessions"],
    'notes': ["Scheduling Notes", "notes"],
}

SUPPORTED_SUFFIXES = ('.csv', '.xlsx', '.xls')


def normalize_header(name) -> str:
    """Collapse whitespace (including embedded newlines) and lowercase a column header."""
    return " ".join(str(name).split()).lower()


def resolve_columns(columns) -> Dict[str, Optional[str]]:
    """Map each canonical field to the first matching column of the sheet."""
    normalized = {}
    for column in columns:
        normalized.setdefault(normalize_header(column), column)

    resolved = {}
    for field_name, aliases in COLUMN_ALIASES.items():
        resolved[field_name] = next(
            (normalized[normalize_header(alias)] for alias in aliases if normalize_header(alias) in normalized),
            None,
        )
    return resolved


def extract_int(value) -> int:
    """Numbers are truncated; text gives its first run of digits; anything else is 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, numbers.Real):
        if pd.isna(value):
            return 0
        return int(value)
    if isinstance(value, str):
        match = re.search(r'\d+', value)
        return int(match.group(0)) if match else 0
    return 0


def _text(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def parse_course_data(courses_df: pd.DataFrame) -> List[Course]:
    """
    Parse course rows from a cadence sheet DataFrame.

    Args:
        courses_df: DataFrame with one course per row and a header row

    Returns:
        Courses with a title, a cadence of at least 1 and at least 1 session, in sheet order

    Raises:
        ValueError: If the DataFrame is empty or has no course title column
    """
    if courses_df.empty:
        raise ValueError("Course DataFrame is empty")

    columns = resolve_columns(courses_df.columns)
    if columns['title'] is None:
        raise ValueError(f"Required 'Course Title' column not found in columns: {list(courses_df.columns)}")

    courses = []
    skipped = 0
    for _, row in courses_df.iterrows():
        title = _text(row[columns['title']])
        cadence = extract_int(row[columns['cadence']]) if columns['cadence'] is not None else 0
        sessions = extract_int(row[columns['sessions']]) if columns['sessions'] is not None else 0
        notes = _text(row[columns['notes']]) if columns['notes'] is not None else ""

        if not title or cadence <= 0 or sessions <= 0:
            skipped += 1
            continue
        courses.append(Course(title=title, cadence=cadence, session_count=sessions, notes=notes))

    if skipped:
        logger.info("Skipped %d course rows without a title, cadence or session count", skipped)
    return courses


def parse_course_records(records: List[Dict]) -> List[Course]:
    """Parse a list of row dicts, e.g. from a JSON request body."""
    if not records:
        raise ValueError("No course records provided")
    return parse_course_data(pd.DataFrame.from_records(records))


def read_course_file(source, filename: Optional[str] = None) -> pd.DataFrame:
    """
    Read a cadence sheet from a path or file-like object.

    `filename` supplies the suffix when `source` is a buffer (e.g. an upload).
    Excel workbooks are read from their first sheet.
    """
    name = filename if filename is not None else str(source)
    suffix = Path(name).suffix.lower()

    if suffix == '.csv':
        return pd.read_csv(source)
    if suffix in ('.xlsx', '.xls'):
        return pd.read_excel(source, sheet_name=0)
    raise ValueError(f"Unsupported course file type '{suffix}', expected one of {SUPPORTED_SUFFIXES}")


def load_courses(source, filename: Optional[str] = None) -> List[Course]:
    return parse_course_data(read_course_file(source, filename))


def parse_spreadsheet_url(url: str) -> str:
    """
    Extract the spreadsheet key from a Google Sheets URL.

    Raises:
        ValueError: If the URL doesn't contain a valid spreadsheet key
    """
    match = re.search(r'/spreadsheets/d/([a-zA-Z0-9-_]+)', url)
    if not match:
        raise ValueError(f"Could not extract spreadsheet key from URL: {url}")
    return match.group(1)


def get_sheets_client():
    """
    Create a gspread client.

    Uses the bundled service account file for local development, otherwise the
    GOOGLE_SHEETS_CREDENTIALS environment variable.
    """
    package_dir = Path(__file__).parent.parent
    credentials_path = package_dir / "credentials" / "service_account.json"

    if credentials_path.exists():
        logger.info("Using credentials file for local development")
        return service_account(filename=credentials_path)

    credentials_json = os.environ.get('GOOGLE_SHEETS_CREDENTIALS')
    if not credentials_json:
        raise FileNotFoundError(
            f"Credentials file not found at {credentials_path} and "
            "GOOGLE_SHEETS_CREDENTIALS environment variable not set"
        )

    try:
        credentials_dict = json.loads(credentials_json)
    except json.JSONDecodeError:
        raise ValueError("Invalid JSON in GOOGLE_SHEETS_CREDENTIALS environment variable")
    logger.info("Using credentials from environment variable")
    return service_account_from_dict(credentials_dict)


def get_course_data(spreadsheet_key: str, worksheet_name: Optional[str] = None) -> pd.DataFrame:
    """
    Get the cadence sheet from Google Sheets as a DataFrame with the first row as header.

    Raises:
        FileNotFoundError: If no credentials are configured
        ValueError: If the worksheet is empty
    """
    gc = get_sheets_client()
    spreadsheet = gc.open_by_key(spreadsheet_key)
    if worksheet_name:
        worksheet = spreadsheet.worksheet(worksheet_name)
    else:
        worksheet = spreadsheet.get_worksheet(0)
    data = worksheet.get_all_values()

    if not data:
        raise ValueError(f"No data retrieved from spreadsheet {spreadsheet_key}")

    courses_df = pd.DataFrame(data[1:], columns=data[0])
    return courses_df


def get_parsed_courses(spreadsheet_key: str, worksheet_name: Optional[str] = None) -> List[Course]:
    """Get and parse the cadence sheet from Google Sheets."""
    if not spreadsheet_key:
        raise ValueError("spreadsheet_key is required but not provided")
    return parse_course_data(get_course_data(spreadsheet_key, worksheet_name))
