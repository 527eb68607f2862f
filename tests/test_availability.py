"""
Tests for unavailable-period conflict detection.
"""

from __future__ import annotations

from datetime import date

from carbooking.application.use_cases.availability import check_conflict, find_date_conflicts
from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.car import Car
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.trip import TripData

BOOKED = [UnavailablePeriod(date(2024, 6, 10), date(2024, 6, 15), "Booked by another customer")]


def test_overlap_uses_inclusive_bounds():
    """Ranges that overlap or touch the period conflict; ranges beside it do not."""
    assert check_conflict(BOOKED, date(2024, 6, 14), date(2024, 6, 20)).has_conflict is True
    assert check_conflict(BOOKED, date(2024, 6, 16), date(2024, 6, 20)).has_conflict is False
    assert check_conflict(BOOKED, date(2024, 6, 1), date(2024, 6, 9)).has_conflict is False
    assert check_conflict(BOOKED, date(2024, 6, 1), date(2024, 6, 10)).has_conflict is True


def test_range_covering_whole_period_conflicts():
    assert check_conflict(BOOKED, date(2024, 6, 1), date(2024, 6, 30)).has_conflict is True


def test_missing_or_invalid_dates_never_conflict():
    assert check_conflict(BOOKED, None, date(2024, 6, 12)).has_conflict is False
    assert check_conflict(BOOKED, "2024-06-12", "").has_conflict is False
    assert check_conflict(BOOKED, "not-a-date", "2024-06-12").has_conflict is False


def test_iso_strings_are_accepted():
    assert check_conflict(BOOKED, "2024-06-12", "2024-06-13T00:00:00.000Z").has_conflict is True


def test_message_names_range_and_cause():
    booked = check_conflict(BOOKED, date(2024, 6, 11), date(2024, 6, 11))
    assert booked.message == "This car is unavailable from Jun 10, 2024 - Jun 15, 2024 due to another booking."

    periods = [UnavailablePeriod(date(2024, 7, 1), date(2024, 7, 2), "maintenance")]
    maintenance = check_conflict(periods, date(2024, 7, 2), date(2024, 7, 4))
    assert maintenance.has_conflict is True
    assert "Jul 1, 2024 - Jul 2, 2024" in maintenance.message
    assert maintenance.message.endswith("due to maintenance.")


def test_find_date_conflicts_reads_effective_dates():
    """Inheriting drafts use the common dates; drafts with their own data use theirs."""
    toyota = Car(car_id=11, make="Toyota", model="Vios", rent_price=1000)
    montero = Car(car_id=12, make="Mitsubishi", model="Montero", rent_price=1500)
    common = TripData(start_date=date(2024, 6, 12), end_date=date(2024, 6, 13))
    drafts = [
        # Own copy is stale and would not conflict; the common dates do.
        CarBookingDraft(car=toyota, trip=TripData(start_date=date(2024, 5, 1), end_date=date(2024, 5, 2))),
        CarBookingDraft(
            car=montero,
            use_common_data=False,
            trip=TripData(start_date=date(2024, 6, 20), end_date=date(2024, 6, 21)),
        ),
    ]
    periods = {11: BOOKED, 12: BOOKED}

    conflicts = find_date_conflicts(common, drafts, periods)

    assert len(conflicts) == 1
    assert conflicts[0].car_index == 0
    assert conflicts[0].car_name == "Toyota Vios"


def test_car_without_periods_has_no_conflicts():
    car = Car(car_id=99, make="Honda", model="City")
    common = TripData(start_date=date(2024, 6, 12), end_date=date(2024, 6, 13))
    assert find_date_conflicts(common, [CarBookingDraft(car=car, trip=common)], {11: BOOKED}) == []
