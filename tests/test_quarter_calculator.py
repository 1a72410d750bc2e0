from datetime import date

import pytest

from cadence_scheduler.algorithm.quarter_calculator import (
    DEFAULT_FISCAL_CALENDAR,
    FiscalCalendar,
    InvalidQuarterError,
    InvalidYearError,
    QuarterDefinition,
    fiscal_epoch,
    fiscal_year_label,
    quarter_dates,
)


def test_q1_weekdays():
    dates = quarter_dates("Q1", 2025)
    assert dates[0] == date(2025, 4, 1)
    assert dates[-1] == date(2025, 6, 30)
    assert len(dates) == 65
    assert all(d.weekday() < 5 for d in dates)
    assert dates == sorted(dates)


def test_q4_rolls_into_next_calendar_year():
    start, end = DEFAULT_FISCAL_CALENDAR.quarter_date_range("Q4", 2025)
    assert start == date(2026, 1, 1)
    assert end == date(2026, 3, 31)

    dates = quarter_dates("Q4", 2025)
    assert dates[0] == date(2026, 1, 1)
    assert dates[-1] == date(2026, 3, 31)


def test_fiscal_epoch_and_year_end():
    assert fiscal_epoch(2025) == date(2025, 4, 1)
    assert DEFAULT_FISCAL_CALENDAR.fiscal_year_end(2025) == date(2026, 3, 31)


@pytest.mark.parametrize("quarter", [" Q2", "q2", "Q2 "])
def test_quarter_lookup_is_exact(quarter):
    with pytest.raises(InvalidQuarterError):
        quarter_dates(quarter, 2025)


@pytest.mark.parametrize("quarter", ["Q5", "", "quarter 1", None])
def test_invalid_quarter(quarter):
    with pytest.raises(InvalidQuarterError):
        quarter_dates(quarter, 2025)


def test_invalid_quarter_is_a_value_error():
    with pytest.raises(ValueError):
        quarter_dates("Q0", 2025)


@pytest.mark.parametrize("year", ["2025", 2025.0, True, 0, 9999])
def test_invalid_year(year):
    with pytest.raises(InvalidYearError):
        quarter_dates("Q1", year)


def test_july_fiscal_year_deployment():
    fiscal = FiscalCalendar(
        quarters={
            "Q1": QuarterDefinition("Q1", (7, 8, 9), 0, "Q1 (Jul-Sep)"),
            "Q2": QuarterDefinition("Q2", (10, 11, 12), 0, "Q2 (Oct-Dec)"),
            "Q3": QuarterDefinition("Q3", (1, 2, 3), 1, "Q3 (Jan-Mar)"),
            "Q4": QuarterDefinition("Q4", (4, 5, 6), 1, "Q4 (Apr-Jun)"),
        },
        start_month=7,
    )
    assert fiscal.fiscal_epoch(2025) == date(2025, 7, 1)
    assert fiscal.fiscal_year_end(2025) == date(2026, 6, 30)
    assert fiscal.quarter_date_range("Q3", 2025) == (date(2026, 1, 1), date(2026, 3, 31))
    assert fiscal.quarter_date_range("Q4", 2025) == (date(2026, 4, 1), date(2026, 6, 30))


def test_quarter_spanning_new_year():
    fiscal = FiscalCalendar(quarters={"Q1": QuarterDefinition("Q1", (12, 1, 2), 0, "Q1 (Dec-Feb)")}, start_month=12)
    assert fiscal.quarter_date_range("Q1", 2025) == (date(2025, 12, 1), date(2026, 2, 28))


def test_labels_and_options():
    assert DEFAULT_FISCAL_CALENDAR.format_quarter("Q1", 2025) == "Q1 (Apr-Jun) 2025"
    assert fiscal_year_label(2025) == "2025-26"
    options = DEFAULT_FISCAL_CALENDAR.quarter_options()
    assert [o["value"] for o in options] == ["Q1", "Q2", "Q3", "Q4"]
    assert options[3]["label"] == "Q4 (Jan-Mar)"
