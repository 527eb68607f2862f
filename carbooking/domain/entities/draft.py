from __future__ import annotations

from dataclasses import dataclass, field

from carbooking.domain.entities.car import Car
from carbooking.domain.entities.trip import TripData


@dataclass(frozen=True)
class CarBookingDraft:
    car: Car
    use_common_data: bool = True
    # Own copy of the trip fields; only read while use_common_data is False.
    trip: TripData = field(default_factory=TripData)
    selected_driver: int | None = None
    has_conflict: bool = False
    conflict_message: str = ""
