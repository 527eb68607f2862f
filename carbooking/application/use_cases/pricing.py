from __future__ import annotations

from datetime import date
from typing import Iterable

from carbooking.application.use_cases.availability import effective_trip
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.fees import FeeSchedule
from carbooking.domain.entities.trip import TripData


def rental_days(start_date: date, end_date: date) -> int:
    """Both endpoints count, so a same-day rental is one day."""
    return (end_date - start_date).days + 1


def cost_for(draft: CarBookingDraft, common: TripData, fees: FeeSchedule) -> float:
    trip = effective_trip(draft, common)
    if not trip.start_date or not trip.end_date:
        return 0

    days = rental_days(trip.start_date, trip.end_date)
    base_cost = days * (draft.car.rent_price or 0)
    driver_cost = 0 if trip.is_self_drive else fees.driver_fee * days
    return base_cost + fees.reservation_fee + fees.cleaning_fee + driver_cost


def total_cost(drafts: Iterable[CarBookingDraft], common: TripData, fees: FeeSchedule) -> float:
    return sum(cost_for(draft, common, fees) for draft in drafts)
