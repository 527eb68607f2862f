"""
Tests for driver assignment validation.
"""

from __future__ import annotations

from carbooking.application.use_cases.driver_validation import validate_drivers
from carbooking.domain.entities.car import Car, Driver
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.trip import TripData

TOYOTA = Car(car_id=11, make="Toyota", model="Vios", rent_price=1000)
MONTERO = Car(car_id=12, make="Mitsubishi", model="Montero", rent_price=1500)
WITH_DRIVER = TripData(is_self_drive=False)
DRIVERS = [Driver(driver_id=7, first_name="Pedro", last_name="Reyes"), Driver(driver_id=8, first_name="Ana", last_name="Cruz")]


def test_same_driver_on_two_cars_is_one_error_naming_both():
    drafts = [
        CarBookingDraft(car=TOYOTA, use_common_data=False, trip=WITH_DRIVER, selected_driver=7),
        CarBookingDraft(car=MONTERO, use_common_data=False, trip=WITH_DRIVER, selected_driver=7),
    ]

    result = validate_drivers(drafts, TripData(), DRIVERS)

    assert len(result.errors) == 1
    assert "Pedro Reyes" in result.errors[0]
    assert "Toyota Vios" in result.errors[0]
    assert "Mitsubishi Montero" in result.errors[0]
    assert result.warning is None


def test_missing_driver_is_reported_per_car():
    drafts = [
        CarBookingDraft(car=TOYOTA, trip=WITH_DRIVER),
        CarBookingDraft(car=MONTERO, use_common_data=False, trip=WITH_DRIVER, selected_driver=8),
    ]

    result = validate_drivers(drafts, WITH_DRIVER, DRIVERS)

    assert result.errors == ["Car 1: Please select a driver"]


def test_self_drive_cars_need_no_driver_and_may_share_stale_ids():
    drafts = [
        CarBookingDraft(car=TOYOTA, trip=TripData(), selected_driver=7),
        CarBookingDraft(car=MONTERO, trip=TripData(), selected_driver=7),
    ]
    assert validate_drivers(drafts, TripData(is_self_drive=True), DRIVERS).errors == []


def test_warning_when_more_cars_need_drivers_than_available():
    drafts = [CarBookingDraft(car=TOYOTA, trip=WITH_DRIVER), CarBookingDraft(car=MONTERO, trip=WITH_DRIVER)]

    result = validate_drivers(drafts, WITH_DRIVER, DRIVERS[:1])

    assert result.warning is not None
    assert "2 cars need a driver" in result.warning


def test_unknown_driver_id_falls_back_to_id_label():
    drafts = [
        CarBookingDraft(car=TOYOTA, use_common_data=False, trip=WITH_DRIVER, selected_driver=42),
        CarBookingDraft(car=MONTERO, use_common_data=False, trip=WITH_DRIVER, selected_driver=42),
    ]
    result = validate_drivers(drafts, TripData(), DRIVERS)
    assert result.errors[-1].startswith("Driver #42")


def test_driver_missing_from_the_list_blocks():
    drafts = [
        CarBookingDraft(car=TOYOTA, use_common_data=False, trip=WITH_DRIVER, selected_driver=1),
        CarBookingDraft(car=MONTERO, use_common_data=False, trip=WITH_DRIVER, selected_driver=8),
    ]

    result = validate_drivers(drafts, TripData(), DRIVERS)

    assert result.errors == ["Car 1: Selected driver is not available"]
