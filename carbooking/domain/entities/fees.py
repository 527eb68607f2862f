from __future__ import annotations

from dataclasses import dataclass

DEFAULT_RESERVATION_FEE = 1000.0
DEFAULT_CLEANING_FEE = 200.0
DEFAULT_DRIVER_FEE = 500.0


@dataclass(frozen=True)
class FeeSchedule:
    reservation_fee: float = DEFAULT_RESERVATION_FEE
    cleaning_fee: float = DEFAULT_CLEANING_FEE
    driver_fee: float = DEFAULT_DRIVER_FEE  # per day, only for cars with a driver
