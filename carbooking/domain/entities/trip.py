from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

DEFAULT_OFFICE_LOCATION = "JA Car Rental Office"
DEFAULT_PICKUP_TIME = "09:00"
DEFAULT_DROPOFF_TIME = "17:00"

OTHER_PURPOSE = "Others"
RENTAL_PURPOSES = (
    "Travel",
    "Vehicle Replacement",
    "Local Transportation",
    "Specialize Needs",
    "One-Way Rental",
    OTHER_PURPOSE,
)


class DeliveryType(str, Enum):
    pickup = "pickup"
    delivery = "delivery"


@dataclass(frozen=True)
class TripData:
    """Trip fields shared by the common defaults and each car's own copy."""

    start_date: date | None = None
    end_date: date | None = None
    pickup_time: str = DEFAULT_PICKUP_TIME
    dropoff_time: str = DEFAULT_DROPOFF_TIME
    purpose: str = ""
    custom_purpose: str = ""
    is_self_drive: bool = True
    delivery_type: DeliveryType = DeliveryType.pickup
    pickup_location: str = DEFAULT_OFFICE_LOCATION
    dropoff_location: str = DEFAULT_OFFICE_LOCATION
    delivery_location: str = ""

    @property
    def resolved_purpose(self) -> str:
        if self.purpose == OTHER_PURPOSE:
            return self.custom_purpose
        return self.purpose


TRIP_FIELDS = (
    "start_date",
    "end_date",
    "pickup_time",
    "dropoff_time",
    "purpose",
    "custom_purpose",
    "is_self_drive",
    "delivery_type",
    "pickup_location",
    "dropoff_location",
    "delivery_location",
)
DATE_FIELDS = frozenset({"start_date", "end_date"})
