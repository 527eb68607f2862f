from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Mapping

from carbooking.application.exceptions import WizardFieldError
from carbooking.application.use_cases.availability import with_conflict_status
from carbooking.application.utils.dates import normalize_time_of_day, parse_calendar_date
from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.trip import (
    DATE_FIELDS,
    DEFAULT_OFFICE_LOCATION,
    TRIP_FIELDS,
    DeliveryType,
    TripData,
)

TRUTHY = {"true", "1", "yes", "on"}


def coerce_trip_value(field: str, value: Any) -> Any:
    """Convert a raw form value into the type stored on TripData."""
    if field not in TRIP_FIELDS:
        raise WizardFieldError(f"Unknown trip field: {field}")

    if field in DATE_FIELDS:
        if value is None or value == "":
            return None
        parsed = parse_calendar_date(value)
        if parsed is None:
            raise WizardFieldError(f"Invalid date for {field}: {value}")
        return parsed

    if field == "is_self_drive":
        if isinstance(value, str):
            return value.strip().lower() in TRUTHY
        return bool(value)

    if field == "delivery_type":
        try:
            return DeliveryType(value)
        except ValueError:
            raise WizardFieldError(f"Invalid delivery type: {value}")

    if field in ("pickup_time", "dropoff_time"):
        normalized = normalize_time_of_day(value)
        if normalized is None:
            raise WizardFieldError(f"Invalid time for {field}: {value}")
        return normalized

    return "" if value is None else str(value)


def update_trip(
    trip: TripData,
    field: str,
    value: Any,
    office_location: str = DEFAULT_OFFICE_LOCATION,
) -> TripData:
    """Assign one already-coerced field and apply the delivery mode rules."""
    updated = replace(trip, **{field: value})

    if field == "delivery_type":
        if value == DeliveryType.pickup:
            updated = replace(
                updated,
                pickup_location=office_location,
                dropoff_location=office_location,
                delivery_location="",
            )
        else:
            # Delivery address is re-entered for every switch to delivery.
            updated = replace(updated, delivery_location="")

    return updated


def apply_common_field(
    common: TripData,
    drafts: Iterable[CarBookingDraft],
    field: str,
    value: Any,
    periods_by_car: Mapping[int, Iterable[UnavailablePeriod]],
    office_location: str = DEFAULT_OFFICE_LOCATION,
) -> tuple[TripData, tuple[CarBookingDraft, ...]]:
    """
    Reducer for a change to the common trip defaults.

    Every draft that inherits common data mirrors the new common values. A switch
    to self-drive clears the inheriting drafts' driver, and date changes recompute
    their conflict status. Drafts with their own data are returned untouched.
    """
    coerced = coerce_trip_value(field, value)
    new_common = update_trip(common, field, coerced, office_location)

    updated: list[CarBookingDraft] = []
    for draft in drafts:
        if not draft.use_common_data:
            updated.append(draft)
            continue

        mirrored = replace(draft, trip=new_common)
        if field == "is_self_drive" and coerced:
            mirrored = replace(mirrored, selected_driver=None)
        if field in DATE_FIELDS:
            mirrored = with_conflict_status(mirrored, new_common, periods_by_car)
        updated.append(mirrored)

    return new_common, tuple(updated)
