"""
Quarter definitions and date calculations.

The fiscal year starts in April by default. A fiscal year is named after the
calendar year it starts in, so FY 2025 (2025-26) has Q1-Q3 in 2025 and Q4 in 2026.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Tuple

MIN_YEAR = 1
MAX_YEAR = 9998  # Q4 and the fiscal year end roll into year + 1


class InvalidQuarterError(ValueError):
    """Raised for a quarter identifier that is not in the quarter table."""


class InvalidYearError(ValueError):
    """Raised for a fiscal year that is not a usable integer year."""


@dataclass(frozen=True)
class QuarterDefinition:
    name: str
    months: Tuple[int, int, int]
    year_offset: int  # calendar year = fiscal year + year_offset
    label: str


FISCAL_YEAR_START_MONTH = 4

QUARTERS: Dict[str, QuarterDefinition] = {
    "Q1": QuarterDefinition("Q1", (4, 5, 6), 0, "Q1 (Apr-Jun)"),
    "Q2": QuarterDefinition("Q2", (7, 8, 9), 0, "Q2 (Jul-Sep)"),
    "Q3": QuarterDefinition("Q3", (10, 11, 12), 0, "Q3 (Oct-Dec)"),
    "Q4": QuarterDefinition("Q4", (1, 2, 3), 1, "Q4 (Jan-Mar)"),
}


def validate_year(year) -> int:
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidYearError(f"Invalid year: {year!r}")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidYearError(f"Year out of range: {year}")
    return year


@dataclass
class FiscalCalendar:
    """A deployment's quarter table and fiscal start month."""
    quarters: Dict[str, QuarterDefinition] = field(default_factory=lambda: dict(QUARTERS))
    start_month: int = FISCAL_YEAR_START_MONTH

    def get_quarter(self, quarter: str) -> QuarterDefinition:
        quarter_info = self.quarters.get(quarter) if isinstance(quarter, str) else None
        if quarter_info is None:
            raise InvalidQuarterError(f"Invalid quarter: {quarter}")
        return quarter_info

    def quarter_date_range(self, quarter: str, year: int) -> Tuple[date, date]:
        """First and last calendar day of the quarter."""
        quarter_info = self.get_quarter(quarter)
        validate_year(year)
        first_month, _, last_month = quarter_info.months
        calendar_year = year + quarter_info.year_offset
        # A quarter spanning December/January would end in the following year
        end_year = calendar_year + (1 if last_month < first_month else 0)

        start_date = date(calendar_year, first_month, 1)
        end_date = date(end_year, last_month, calendar.monthrange(end_year, last_month)[1])
        return start_date, end_date

    def all_dates(self, quarter: str, year: int) -> List[date]:
        start_date, end_date = self.quarter_date_range(quarter, year)
        return [start_date + timedelta(days=i) for i in range((end_date - start_date).days + 1)]

    def quarter_dates(self, quarter: str, year: int) -> List[date]:
        """Monday-Friday dates of the quarter, ascending."""
        return [d for d in self.all_dates(quarter, year) if d.weekday() < 5]

    def fiscal_epoch(self, year: int) -> date:
        """First day of the fiscal year; the origin for cadence dates."""
        validate_year(year)
        return date(year, self.start_month, 1)

    def fiscal_year_end(self, year: int) -> date:
        validate_year(year)
        return date(year + 1, self.start_month, 1) - timedelta(days=1)

    def format_quarter(self, quarter: str, year: int) -> str:
        return f"{self.get_quarter(quarter).label} {year}"

    def quarter_options(self) -> List[Dict[str, str]]:
        return [{"value": q.name, "label": q.label} for q in self.quarters.values()]


DEFAULT_FISCAL_CALENDAR = FiscalCalendar()


def quarter_dates(quarter: str, year: int) -> List[date]:
    return DEFAULT_FISCAL_CALENDAR.quarter_dates(quarter, year)


def fiscal_epoch(year: int) -> date:
    return DEFAULT_FISCAL_CALENDAR.fiscal_epoch(year)


def fiscal_year_label(year: int) -> str:
    """Display label such as "2025-26"."""
    return f"{year}-{str(year + 1)[-2:]}"
