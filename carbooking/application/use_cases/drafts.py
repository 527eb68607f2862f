from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Mapping, Sequence

from carbooking.application.exceptions import WizardFieldError
from carbooking.application.use_cases.availability import effective_trip, with_conflict_status
from carbooking.application.use_cases.trip_data import coerce_trip_value, update_trip
from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.car import Driver
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.trip import DATE_FIELDS, DEFAULT_OFFICE_LOCATION, TripData


def _draft_at(drafts: Sequence[CarBookingDraft], index: int) -> CarBookingDraft:
    if not 0 <= index < len(drafts):
        raise WizardFieldError(f"No car at position {index + 1}")
    return drafts[index]


def _replace_at(
    drafts: Sequence[CarBookingDraft], index: int, draft: CarBookingDraft
) -> tuple[CarBookingDraft, ...]:
    updated = list(drafts)
    updated[index] = draft
    return tuple(updated)


def _coerce_driver_id(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise WizardFieldError(f"Invalid driver id: {value}")


def toggle_use_common_data(
    common: TripData,
    drafts: Sequence[CarBookingDraft],
    index: int,
    periods_by_car: Mapping[int, Iterable[UnavailablePeriod]],
) -> tuple[CarBookingDraft, ...]:
    draft = _draft_at(drafts, index)

    if not draft.use_common_data:
        # Own storage takes the current common values so a later switch back
        # starts from them instead of stale pre-toggle data.
        toggled = replace(
            draft,
            use_common_data=True,
            trip=common,
            selected_driver=None if common.is_self_drive else draft.selected_driver,
        )
        toggled = with_conflict_status(toggled, common, periods_by_car)
    else:
        # Keep the last mirrored values as the starting point; the conflict is
        # recomputed on the next date edit.
        toggled = replace(
            draft,
            use_common_data=False,
            trip=common,
            has_conflict=False,
            conflict_message="",
        )

    return _replace_at(drafts, index, toggled)


def set_car_field(
    common: TripData,
    drafts: Sequence[CarBookingDraft],
    index: int,
    field: str,
    value: Any,
    periods_by_car: Mapping[int, Iterable[UnavailablePeriod]],
    office_location: str = DEFAULT_OFFICE_LOCATION,
    drivers: Sequence[Driver] | None = None,
) -> tuple[CarBookingDraft, ...]:
    """
    Edit one car's booking.

    `selected_driver` may be set on any draft; when `drivers` is given the id
    must be one of them. Changing `is_self_drive` on a draft that inherits
    common data detaches it: the draft keeps a snapshot of the common fields and
    only self-drive differs. Other trip fields can only be edited once the draft
    has its own data.
    """
    draft = _draft_at(drafts, index)

    if field == "selected_driver":
        driver_id = _coerce_driver_id(value)
        if driver_id is not None and effective_trip(draft, common).is_self_drive:
            raise WizardFieldError(f"Car {index + 1} is self-drive; a driver cannot be assigned")
        if driver_id is not None and drivers is not None and driver_id not in {d.driver_id for d in drivers}:
            raise WizardFieldError(f"Driver #{driver_id} is not available")
        return _replace_at(drafts, index, replace(draft, selected_driver=driver_id))

    coerced = coerce_trip_value(field, value)

    if draft.use_common_data:
        if field != "is_self_drive":
            raise WizardFieldError(
                f"Car {index + 1} uses the common details; turn them off to edit {field}"
            )
        detached = replace(
            draft,
            use_common_data=False,
            trip=replace(common, is_self_drive=coerced),
            selected_driver=None if coerced else draft.selected_driver,
        )
        return _replace_at(drafts, index, with_conflict_status(detached, common, periods_by_car))

    edited = replace(draft, trip=update_trip(draft.trip, field, coerced, office_location))
    if field == "is_self_drive" and coerced:
        edited = replace(edited, selected_driver=None)
    if field in DATE_FIELDS:
        edited = with_conflict_status(edited, common, periods_by_car)

    return _replace_at(drafts, index, edited)


def remove_draft(drafts: Sequence[CarBookingDraft], index: int) -> tuple[CarBookingDraft, ...]:
    _draft_at(drafts, index)
    return tuple(draft for position, draft in enumerate(drafts) if position != index)
