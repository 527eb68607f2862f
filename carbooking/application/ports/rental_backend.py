from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.car import CustomerProfile, Driver
from carbooking.domain.entities.fees import FeeSchedule


class RentalBackendPort(ABC):
    @abstractmethod
    def list_drivers(self) -> list[Driver]:
        """List drivers that can be assigned to a booking."""
        raise NotImplementedError

    @abstractmethod
    def get_fees(self) -> FeeSchedule:
        """Fetch the current fee schedule."""
        raise NotImplementedError

    @abstractmethod
    def get_customer_profile(self, customer_token: str | None = None) -> CustomerProfile:
        """Fetch the profile of the customer the token belongs to."""
        raise NotImplementedError

    @abstractmethod
    def get_unavailable_periods(self, car_id: int) -> list[UnavailablePeriod]:
        """Fetch booked and maintenance periods for a car."""
        raise NotImplementedError

    @abstractmethod
    def create_bulk_bookings(
        self, bookings: list[dict[str, Any]], customer_token: str | None = None
    ) -> dict[str, Any]:
        """Create several bookings in one request for the token's customer. Returns the server's response body."""
        raise NotImplementedError
