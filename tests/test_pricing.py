"""
Tests for rental cost calculation.
"""

from __future__ import annotations

from datetime import date

from carbooking.application.use_cases.drafts import set_car_field
from carbooking.application.use_cases.pricing import cost_for, rental_days, total_cost
from carbooking.domain.entities.car import Car
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.fees import FeeSchedule
from carbooking.domain.entities.trip import TripData

FEES = FeeSchedule(reservation_fee=1000, cleaning_fee=200, driver_fee=500)
TOYOTA = Car(car_id=11, make="Toyota", model="Vios", rent_price=1000)
MONTERO = Car(car_id=12, make="Mitsubishi", model="Montero", rent_price=1500)


def test_same_day_rental_counts_one_day():
    assert rental_days(date(2024, 6, 10), date(2024, 6, 10)) == 1

    common = TripData(start_date=date(2024, 6, 10), end_date=date(2024, 6, 10))
    assert cost_for(CarBookingDraft(car=TOYOTA, trip=common), common, FEES) == 1000 + 1000 + 200


def test_cost_is_zero_without_dates():
    assert cost_for(CarBookingDraft(car=TOYOTA), TripData(), FEES) == 0


def test_two_car_total_with_one_driver():
    common = TripData(start_date=date(2024, 6, 1), end_date=date(2024, 6, 3), purpose="Travel", is_self_drive=True)
    drafts = (CarBookingDraft(car=TOYOTA, trip=common), CarBookingDraft(car=MONTERO, trip=common))
    drafts = set_car_field(common, drafts, 1, "is_self_drive", False, {})

    assert cost_for(drafts[0], common, FEES) == 4200
    assert cost_for(drafts[1], common, FEES) == 7200
    assert total_cost(drafts, common, FEES) == 11400


def test_own_dates_are_used_for_detached_drafts():
    common = TripData(start_date=date(2024, 6, 1), end_date=date(2024, 6, 1))
    own = TripData(start_date=date(2024, 6, 1), end_date=date(2024, 6, 5), is_self_drive=False)
    draft = CarBookingDraft(car=TOYOTA, use_common_data=False, trip=own)

    assert cost_for(draft, common, FEES) == 5 * 1000 + 1000 + 200 + 5 * 500
