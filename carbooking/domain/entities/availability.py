from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class UnavailablePeriod:
    start_date: date
    end_date: date
    reason: str = "booking"  # "maintenance" or a booking-derived reason

    @property
    def is_maintenance(self) -> bool:
        return self.reason.strip().lower().startswith("maintenance")


@dataclass(frozen=True)
class DateConflict:
    car_index: int
    car_name: str
    message: str
