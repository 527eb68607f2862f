from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from carbooking.application.use_cases.availability import find_date_conflicts
from carbooking.application.use_cases.driver_validation import validate_drivers
from carbooking.domain.entities.trip import OTHER_PURPOSE, RENTAL_PURPOSES, DeliveryType, TripData
from carbooking.domain.entities.wizard_state import WizardState, WizardStep

SELF_DRIVE_LICENSE_MESSAGE = "A driver's license on your profile is required for self-drive"
TERMS_REQUIRED_MESSAGE = "Please accept the terms and conditions to continue"

Guard = Callable[[WizardState, date | None], list[str]]


def trip_errors(trip: TripData, can_self_drive: bool, today: date | None = None, prefix: str = "") -> list[str]:
    errors: list[str] = []
    if not trip.start_date:
        errors.append(f"{prefix}Start date is required")
    if not trip.end_date:
        errors.append(f"{prefix}End date is required")
    if trip.start_date and trip.end_date and trip.start_date > trip.end_date:
        errors.append(f"{prefix}End date must be after start date")
    if trip.start_date and today and trip.start_date < today:
        errors.append(f"{prefix}Start date cannot be in the past")
    if not trip.purpose:
        errors.append(f"{prefix}Purpose is required")
    elif trip.purpose not in RENTAL_PURPOSES:
        errors.append(f"{prefix}Please choose a valid purpose")
    elif trip.purpose == OTHER_PURPOSE and not trip.custom_purpose.strip():
        errors.append(f"{prefix}Please specify your purpose")
    if trip.delivery_type == DeliveryType.delivery and not trip.delivery_location.strip():
        errors.append(f"{prefix}Delivery location is required")
    if trip.is_self_drive and not can_self_drive:
        errors.append(f"{prefix}{SELF_DRIVE_LICENSE_MESSAGE}")
    return errors


def common_details_errors(state: WizardState, today: date | None = None) -> list[str]:
    return trip_errors(state.common, state.can_self_drive, today)


def individual_cars_errors(state: WizardState, today: date | None = None) -> list[str]:
    errors: list[str] = []
    for index, draft in enumerate(state.drafts):
        if not draft.use_common_data:
            errors.extend(trip_errors(draft.trip, state.can_self_drive, today, prefix=f"Car {index + 1}: "))

    errors.extend(validate_drivers(state.drafts, state.common, state.drivers).errors)

    for conflict in find_date_conflicts(state.common, state.drafts, state.periods_by_car):
        errors.append(f"Car {conflict.car_index + 1} ({conflict.car_name}): {conflict.message}")
    return errors


def terms_errors(state: WizardState, today: date | None = None) -> list[str]:
    return [] if state.terms_accepted else [TERMS_REQUIRED_MESSAGE]


@dataclass(frozen=True)
class Transition:
    target: WizardStep
    guard: Guard


TRANSITIONS: dict[WizardStep, Transition] = {
    WizardStep.common_details: Transition(WizardStep.individual_cars, common_details_errors),
    WizardStep.individual_cars: Transition(WizardStep.use_notice_terms, individual_cars_errors),
    WizardStep.use_notice_terms: Transition(WizardStep.review_submit, terms_errors),
}

PREVIOUS_STEP: dict[WizardStep, WizardStep] = {
    transition.target: source for source, transition in TRANSITIONS.items()
}


def join_errors(errors: list[str]) -> str:
    return ". ".join(errors)
