from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from carbooking.application.use_cases.availability import effective_trip
from carbooking.domain.entities.car import Driver
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.trip import TripData


@dataclass(frozen=True)
class DriverValidation:
    errors: list[str] = field(default_factory=list)
    warning: str | None = None


def cars_needing_driver(drafts: Sequence[CarBookingDraft], common: TripData) -> list[int]:
    return [index for index, draft in enumerate(drafts) if not effective_trip(draft, common).is_self_drive]


def driver_shortage_warning(
    drafts: Sequence[CarBookingDraft],
    common: TripData,
    drivers: Sequence[Driver],
) -> str | None:
    needed = len(cars_needing_driver(drafts, common))
    if needed > len(drivers):
        return (
            f"{needed} cars need a driver but only {len(drivers)} drivers are available. "
            "Switch some cars to self-drive or remove cars from this booking."
        )
    return None


def validate_drivers(
    drafts: Sequence[CarBookingDraft],
    common: TripData,
    drivers: Sequence[Driver],
) -> DriverValidation:
    """Every car with a driver needs an available one assigned, and no driver may drive two cars."""
    errors: list[str] = []
    cars_by_driver: dict[int, list[int]] = {}
    names = {driver.driver_id: driver.display_name for driver in drivers}

    for index in cars_needing_driver(drafts, common):
        driver_id = drafts[index].selected_driver
        if driver_id is None:
            errors.append(f"Car {index + 1}: Please select a driver")
            continue
        if driver_id not in names:
            errors.append(f"Car {index + 1}: Selected driver is not available")
        cars_by_driver.setdefault(driver_id, []).append(index)

    for driver_id, indexes in cars_by_driver.items():
        if len(indexes) < 2:
            continue
        car_names = ", ".join(f"Car {i + 1} ({drafts[i].car.display_name})" for i in indexes)
        driver_name = names.get(driver_id, f"Driver #{driver_id}")
        errors.append(f"{driver_name} is assigned to more than one car: {car_names}")

    return DriverValidation(errors=errors, warning=driver_shortage_warning(drafts, common, drivers))
