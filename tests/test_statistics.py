from datetime import date

from cadence_scheduler.algorithm.availability_grid import AvailabilityGrid
from cadence_scheduler.algorithm.statistics import summarize


def test_empty_grid_has_zero_utilization():
    stats = summarize(AvailabilityGrid.initialize([]), [])
    assert stats.total_available_slots == 0
    assert stats.slots_after_scheduling == 0
    assert stats.utilization_percentage == 0.0
    assert stats.fully_booked_dates == []


def test_weekend_only_grid_has_zero_utilization(two_slot_rules):
    grid = AvailabilityGrid.initialize([date(2025, 4, 5), date(2025, 4, 6)], two_slot_rules)
    assert summarize(grid, []).utilization_percentage == 0.0


def test_counts_and_fully_booked_dates(two_slot_rules, one_week):
    grid = AvailabilityGrid.initialize(one_week, two_slot_rules)
    grid.book(one_week[0], "09:00", "A", 1)
    grid.book(one_week[0], "14:00", "B", 1)
    grid.book(one_week[3], "09:00", "A", 2)

    stats = summarize(grid, ["s1", "s2", "s3"])

    assert stats.total_available_slots == 10
    assert stats.slots_after_scheduling == 7
    assert stats.total_scheduled_sessions == 3
    assert stats.utilization_percentage == 30.0
    assert stats.fully_booked_dates == [one_week[0]]


def test_booked_count_is_the_session_list_length(two_slot_rules, one_week):
    grid = AvailabilityGrid.initialize(one_week, two_slot_rules)
    grid.book(one_week[1], "09:00", "A", 1)
    assert summarize(grid, []).total_scheduled_sessions == 0


def test_utilization_is_rounded_to_two_decimals(two_slot_rules):
    # Thursday 10 April 2025 and Friday 11 April with two slots each, plus a weekend day
    grid = AvailabilityGrid.initialize([date(2025, 4, 10), date(2025, 4, 11), date(2025, 4, 12)], two_slot_rules)
    grid.book(date(2025, 4, 10), "09:00", "A", 1)
    grid.release(date(2025, 4, 10), "09:00")
    grid.book(date(2025, 4, 11), "14:00", "A", 1)

    stats = summarize(grid, ["s1"])
    assert stats.utilization_percentage == 25.0

    grid = AvailabilityGrid.initialize([date(2025, 4, 10), date(2025, 4, 11), date(2025, 4, 14)], two_slot_rules)
    grid.book(date(2025, 4, 10), "09:00", "A", 1)
    grid.book(date(2025, 4, 11), "09:00", "A", 1)
    # 2 of 6 slots
    assert summarize(grid, ["s1", "s2"]).utilization_percentage == 33.33


def test_to_dict_uses_output_field_names(two_slot_rules, one_week):
    grid = AvailabilityGrid.initialize(one_week[:1], two_slot_rules)
    grid.book(one_week[0], "09:00", "A", 1)
    grid.book(one_week[0], "14:00", "A", 1)

    assert summarize(grid, ["s1", "s2"]).to_dict() == {
        'totalAvailableSlots': 2,
        'totalScheduledSessions': 2,
        'slotsAfterScheduling': 0,
        'utilizationPercentage': 100.0,
        'fullyBookedDates': ['2025-04-07'],
    }
