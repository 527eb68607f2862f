from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

from carbooking.application.exceptions import BackendRejectedError, BackendUpstreamError
from carbooking.application.ports.rental_backend import RentalBackendPort
from carbooking.application.utils.dates import parse_calendar_date, ranges_overlap
from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.car import CustomerProfile, Driver
from carbooking.domain.entities.fees import FeeSchedule


class MockRentalBackend(RentalBackendPort):
    """In-memory rental backend for local runs and tests."""

    def __init__(
        self,
        drivers: Iterable[Driver] | None = None,
        fees: FeeSchedule | None = None,
        customer: CustomerProfile | None = None,
        customers_by_token: dict[str, CustomerProfile] | None = None,
        periods: dict[int, list[UnavailablePeriod]] | None = None,
        failing_cars: Iterable[int] = (),
    ) -> None:
        self._drivers = list(drivers) if drivers is not None else [
            Driver(driver_id=2, first_name="Juan", last_name="Dela Cruz"),
            Driver(driver_id=3, first_name="Maria", last_name="Santos"),
        ]
        self._fees = fees or FeeSchedule()
        self._customer = customer or CustomerProfile(
            customer_id=1, first_name="Local", last_name="Customer", driver_license_no="N01-23-456789"
        )
        self._customers_by_token = dict(customers_by_token or {})
        self._periods: dict[int, list[UnavailablePeriod]] = {k: list(v) for k, v in (periods or {}).items()}
        self._failing_cars = set(failing_cars)
        self.bookings: list[dict[str, Any]] = []
        self._logger = logging.getLogger(__name__)

    def list_drivers(self) -> list[Driver]:
        return list(self._drivers)

    def get_fees(self) -> FeeSchedule:
        return self._fees

    def get_customer_profile(self, customer_token: str | None = None) -> CustomerProfile:
        # Without per-token customers every caller is the default customer.
        if customer_token is None or not self._customers_by_token:
            return self._customer
        if customer_token not in self._customers_by_token:
            raise BackendRejectedError("Invalid customer token", status_code=401)
        return self._customers_by_token[customer_token]

    def get_unavailable_periods(self, car_id: int) -> list[UnavailablePeriod]:
        if car_id in self._failing_cars:
            raise BackendUpstreamError(f"unavailable periods for car {car_id} could not be loaded")
        return list(self._periods.get(car_id, []))

    def create_bulk_bookings(
        self, bookings: list[dict[str, Any]], customer_token: str | None = None
    ) -> dict[str, Any]:
        # Mirrors the server-side re-validation against current availability.
        for booking in bookings:
            start = parse_calendar_date(booking.get("startDate"))
            end = parse_calendar_date(booking.get("endDate"))
            if start is None or end is None:
                raise BackendRejectedError("Start and end dates are required", status_code=400)
            if self._is_taken(booking["car_id"], start, end):
                raise BackendRejectedError(
                    f"Car {booking['car_id']} is no longer available for the selected dates", status_code=409
                )

        created = []
        for booking in bookings:
            booking_id = len(self.bookings) + 1
            self.bookings.append({"booking_id": booking_id, "customer_token": customer_token, **booking})
            start = parse_calendar_date(booking["startDate"])
            end = parse_calendar_date(booking["endDate"])
            self._periods.setdefault(booking["car_id"], []).append(
                UnavailablePeriod(start_date=start, end_date=end, reason="Booked by another customer")
            )
            created.append({"booking_id": booking_id, "car_id": booking["car_id"]})

        self._logger.info("Mock bulk booking created", extra={"car_count": len(created)})
        return {"success": True, "bookings": created}

    def _is_taken(self, car_id: int, start: date, end: date) -> bool:
        return any(
            ranges_overlap(start, end, period.start_date, period.end_date)
            for period in self._periods.get(car_id, [])
        )