from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Car:
    car_id: int
    make: str = ""
    model: str = ""
    rent_price: float = 0.0
    year: int | None = None
    no_of_seat: int | None = None
    license_plate: str | None = None
    car_img_url: str | None = None

    @property
    def display_name(self) -> str:
        name = f"{self.make} {self.model}".strip()
        return name or f"Car #{self.car_id}"


@dataclass(frozen=True)
class Driver:
    driver_id: int
    first_name: str = ""
    last_name: str = ""

    @property
    def display_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or f"Driver #{self.driver_id}"


@dataclass(frozen=True)
class CustomerProfile:
    customer_id: int | None = None
    first_name: str = ""
    last_name: str = ""
    driver_license_no: str | None = None

    @property
    def can_self_drive(self) -> bool:
        return bool(self.driver_license_no and self.driver_license_no.strip())
