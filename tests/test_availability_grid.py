from datetime import date

from cadence_scheduler.algorithm.availability_grid import AvailabilityGrid, SlotOccupant


def test_initialize_marks_every_slot_free(two_slot_rules, one_week):
    grid = AvailabilityGrid.initialize(one_week, two_slot_rules)
    assert grid.dates == one_week
    assert grid.total_slots() == 10
    assert grid.free_slots() == 10


def test_book_and_occupant(two_slot_rules, one_week):
    grid = AvailabilityGrid.initialize(one_week, two_slot_rules)
    monday = one_week[0]

    assert grid.book(monday, "09:00", "Excel Basics", 1)
    assert not grid.is_free(monday, "09:00")
    assert grid.occupant(monday, "09:00") == SlotOccupant("Excel Basics", 1)
    assert grid.free_slots() == 9


def test_book_fails_without_side_effects(two_slot_rules, one_week):
    grid = AvailabilityGrid.initialize(one_week, two_slot_rules)
    monday = one_week[0]
    grid.book(monday, "09:00", "Excel Basics", 1)

    assert not grid.book(monday, "09:00", "Coaching", 1)           # occupied
    assert not grid.book(monday, "10:00", "Coaching", 1)           # no such slot
    assert not grid.book(date(2025, 4, 14), "09:00", "Coaching", 1)  # not in the grid

    assert grid.occupant(monday, "09:00") == SlotOccupant("Excel Basics", 1)
    assert grid.free_slots() == 9


def test_release_is_idempotent(two_slot_rules, one_week):
    grid = AvailabilityGrid.initialize(one_week, two_slot_rules)
    monday = one_week[0]
    grid.book(monday, "14:00", "Excel Basics", 2)

    grid.release(monday, "14:00")
    grid.release(monday, "14:00")
    grid.release(monday, "10:00")
    grid.release(date(2030, 1, 1), "14:00")

    assert grid.is_free(monday, "14:00")
    assert grid.occupant(monday, "14:00") is None
    assert grid.free_slots() == 10


def test_is_fully_booked(two_slot_rules, one_week):
    grid = AvailabilityGrid.initialize(one_week, two_slot_rules)
    tuesday = one_week[1]

    grid.book(tuesday, "09:00", "A", 1)
    assert not grid.is_fully_booked(tuesday)
    grid.book(tuesday, "14:00", "B", 1)
    assert grid.is_fully_booked(tuesday)
    assert not grid.is_fully_booked(date(2030, 1, 1))


def test_day_without_slots_is_never_fully_booked(two_slot_rules):
    saturday = date(2025, 4, 12)
    grid = AvailabilityGrid.initialize([saturday], two_slot_rules)
    assert grid.day(saturday).slots == []
    assert not grid.is_fully_booked(saturday)
    assert not grid.book(saturday, "09:00", "A", 1)


def test_days_compare_by_booking_state(two_slot_rules, one_week):
    first = AvailabilityGrid.initialize(one_week, two_slot_rules)
    second = AvailabilityGrid.initialize(one_week, two_slot_rules)
    monday = one_week[0]
    assert first.day(monday) == second.day(monday)

    first.book(monday, "09:00", "Excel Basics", 1)
    assert first.day(monday) != second.day(monday)
