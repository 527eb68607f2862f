from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable, Sequence

from carbooking.application.dto.booking_payload import build_booking_payloads
from carbooking.application.exceptions import (
    BackendRejectedError,
    BackendUpstreamError,
    WizardConflictError,
    WizardFieldError,
    WizardNotFoundError,
    WizardStepError,
)
from carbooking.application.ports.rental_backend import RentalBackendPort
from carbooking.application.ports.wizard_store import WizardStorePort
from carbooking.application.use_cases.drafts import remove_draft, set_car_field, toggle_use_common_data
from carbooking.application.use_cases.trip_data import apply_common_field
from carbooking.application.use_cases.wizard_steps import PREVIOUS_STEP, TRANSITIONS, join_errors
from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.car import Car, CustomerProfile, Driver
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.fees import FeeSchedule
from carbooking.domain.entities.trip import DEFAULT_OFFICE_LOCATION, TripData
from carbooking.domain.entities.wizard_state import WizardState, WizardStep

SUBMIT_REJECTED_MESSAGE = "Failed to create bookings. Please try again."
SUBMIT_FAILED_MESSAGE = "Failed to submit bookings. Please try again."
TERMS_NOT_VIEWED_WARNING = "Please read the terms and conditions before accepting them."


@dataclass(frozen=True)
class WizardResult:
    action: str
    message: str | None
    state: WizardState | None
    response: dict[str, Any] | None = None


class WizardUseCase:
    """
    Drives the multi-car booking wizard:
    Common Details -> Individual Cars -> Use Notice/Terms -> Review & Submit.
    """

    def __init__(
        self,
        backend: RentalBackendPort,
        store: WizardStorePort,
        office_location: str = DEFAULT_OFFICE_LOCATION,
        default_fees: FeeSchedule | None = None,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        self._backend = backend
        self._store = store
        self._office_location = office_location
        self._default_fees = default_fees or FeeSchedule()
        self._today = today_provider
        self._logger = logging.getLogger(__name__)

    def open(self, cars: Sequence[Car], customer_token: str | None = None) -> WizardResult:
        if not cars:
            raise WizardFieldError("At least one car is required to start a booking")

        drivers = self._load_drivers()
        fees = self._load_fees()
        customer = self._load_customer(customer_token)
        periods_by_car, unknown = self._load_periods(cars)

        common = TripData(
            is_self_drive=customer.can_self_drive if customer else True,
            pickup_location=self._office_location,
            dropoff_location=self._office_location,
        )
        now = time.time()
        state = WizardState(
            session_id=uuid.uuid4().hex,
            common=common,
            drafts=tuple(CarBookingDraft(car=car, trip=common) for car in cars),
            drivers=tuple(drivers),
            fees=fees,
            periods_by_car=periods_by_car,
            unknown_availability=frozenset(unknown),
            customer=customer,
            customer_token=customer_token,
            created_at=now,
        )
        saved = self._store.insert(state)
        self._logger.info(
            "Booking wizard opened",
            extra={"session_id": saved.session_id, "car_count": len(cars), "action": "opened"},
        )
        return WizardResult(action="opened", message=None, state=saved)

    def get(self, session_id: str) -> WizardState:
        state = self._store.get(session_id)
        if state is None:
            raise WizardNotFoundError(f"Booking wizard {session_id} is not open")
        return state

    def set_common_field(self, session_id: str, field: str, value: Any) -> WizardResult:
        state = self._require(session_id, WizardStep.common_details)
        common, drafts = apply_common_field(
            state.common, state.drafts, field, value, state.periods_by_car, self._office_location
        )
        return self._updated(replace(state, common=common, drafts=drafts))

    def set_car_field(self, session_id: str, index: int, field: str, value: Any) -> WizardResult:
        state = self._require(session_id, WizardStep.individual_cars)
        drafts = set_car_field(
            state.common,
            state.drafts,
            index,
            field,
            value,
            state.periods_by_car,
            self._office_location,
            drivers=state.drivers,
        )
        return self._updated(replace(state, drafts=drafts))

    def toggle_use_common_data(self, session_id: str, index: int) -> WizardResult:
        state = self._require(session_id, WizardStep.individual_cars)
        drafts = toggle_use_common_data(state.common, state.drafts, index, state.periods_by_car)
        return self._updated(replace(state, drafts=drafts))

    def remove_car(self, session_id: str, index: int) -> WizardResult:
        state = self._require(session_id)
        drafts = remove_draft(state.drafts, index)
        if not drafts:
            self._store.delete(session_id)
            self._logger.info(
                "Last car removed, wizard closed",
                extra={"session_id": session_id, "action": "closed"},
            )
            return WizardResult(action="closed", message=None, state=None)
        return self._updated(replace(state, drafts=drafts))

    def next_step(self, session_id: str) -> WizardResult:
        state = self._require(session_id)
        transition = TRANSITIONS.get(state.step)
        if transition is None:
            raise WizardStepError("Already on the last step; submit the booking instead")

        errors = transition.guard(state, self._today())
        if errors:
            message = join_errors(errors)
            saved = self._store.save(replace(state, error=message, updated_at=time.time()))
            self._logger.info(
                "Wizard step blocked",
                extra={"session_id": session_id, "step": state.step.value, "reason": message},
            )
            return WizardResult(action="blocked", message=message, state=saved)

        saved = self._store.save(
            replace(state, step=transition.target, error="", warning=None, updated_at=time.time())
        )
        self._logger.info(
            "Wizard step advanced",
            extra={"session_id": session_id, "step": saved.step.value, "action": "advanced"},
        )
        return WizardResult(action="advanced", message=None, state=saved)

    def back(self, session_id: str) -> WizardResult:
        state = self._require(session_id)
        previous = PREVIOUS_STEP.get(state.step)
        if previous is None:
            raise WizardStepError("Already on the first step")
        saved = self._store.save(replace(state, step=previous, error="", warning=None, updated_at=time.time()))
        return WizardResult(action="back", message=None, state=saved)

    def view_terms(self, session_id: str) -> WizardResult:
        state = self._require(session_id, WizardStep.use_notice_terms)
        saved = self._store.save(replace(state, terms_viewed=True, warning=None, updated_at=time.time()))
        return WizardResult(action="terms_viewed", message=None, state=saved)

    def set_terms_accepted(self, session_id: str, accepted: bool) -> WizardResult:
        state = self._require(session_id, WizardStep.use_notice_terms)
        if accepted and not state.terms_viewed:
            saved = self._store.save(
                replace(state, terms_accepted=False, warning=TERMS_NOT_VIEWED_WARNING, updated_at=time.time())
            )
            return WizardResult(action="terms_warning", message=TERMS_NOT_VIEWED_WARNING, state=saved)
        return self._updated(replace(state, terms_accepted=accepted, warning=None))

    def submit(
        self,
        session_id: str,
        on_success: Callable[[dict[str, Any]], None] | None = None,
    ) -> WizardResult:
        """
        Post every car as one bulk booking. The session is marked as submitting
        before the request, so a second submit or edit is rejected until it
        resolves. Only the flag is stored beforehand; a session closed in the
        meantime discards the outcome.
        """
        state = self._require(session_id, WizardStep.review_submit)
        payloads = [payload.to_wire() for payload in build_booking_payloads(state)]
        self._store.save(replace(state, submitting=True, updated_at=time.time()))

        try:
            response = self._backend.create_bulk_bookings(payloads, customer_token=state.customer_token)
        except BackendRejectedError as e:
            return self._submit_failed(session_id, e.message or SUBMIT_REJECTED_MESSAGE, str(e))
        except BackendUpstreamError as e:
            return self._submit_failed(session_id, SUBMIT_FAILED_MESSAGE, str(e))
        except Exception:
            self._release_submit(session_id)
            raise

        if not self._store.delete(session_id):
            self._logger.warning(
                "Bulk booking finished after wizard was closed",
                extra={"session_id": session_id, "action": "discarded"},
            )
            return WizardResult(action="discarded", message=None, state=None, response=response)

        self._logger.info(
            "Bulk booking submitted",
            extra={"session_id": session_id, "car_count": len(payloads), "action": "submitted"},
        )
        if on_success:
            on_success(response)
        return WizardResult(action="submitted", message=None, state=None, response=response)

    def close(self, session_id: str) -> bool:
        closed = self._store.delete(session_id)
        if closed:
            self._logger.info("Booking wizard closed", extra={"session_id": session_id, "action": "closed"})
        return closed

    def _submit_failed(self, session_id: str, message: str, error: str) -> WizardResult:
        saved = self._release_submit(session_id, error=message)
        if saved is None:
            self._logger.warning(
                "Bulk booking failed after wizard was closed",
                extra={"session_id": session_id, "action": "discarded", "error": error},
            )
            return WizardResult(action="discarded", message=message, state=None)

        self._logger.error(
            "Bulk booking failed",
            extra={"session_id": session_id, "action": "submit_failed", "error": error},
        )
        return WizardResult(action="submit_failed", message=message, state=saved)

    def _release_submit(self, session_id: str, error: str = "") -> WizardState | None:
        current = self._store.get(session_id)
        if current is None:
            return None
        try:
            return self._store.save(replace(current, submitting=False, error=error, updated_at=time.time()))
        except WizardNotFoundError:
            return None

    def _updated(self, state: WizardState) -> WizardResult:
        saved = self._store.save(replace(state, updated_at=time.time()))
        return WizardResult(action="updated", message=None, state=saved)

    def _require(self, session_id: str, step: WizardStep | None = None) -> WizardState:
        state = self._store.get(session_id)
        if state is None:
            raise WizardNotFoundError(f"Booking wizard {session_id} is not open")
        if state.submitting:
            raise WizardConflictError("The booking is being submitted; wait for the result")
        if step is not None and state.step != step:
            raise WizardStepError(
                f"This change is only allowed on the {step.value} step (current step: {state.step.value})"
            )
        return state

    def _load_drivers(self) -> list[Driver]:
        try:
            return self._backend.list_drivers()
        except (BackendUpstreamError, BackendRejectedError) as e:
            self._logger.warning("Could not load drivers", extra={"error": str(e)})
            return []

    def _load_fees(self) -> FeeSchedule:
        try:
            return self._backend.get_fees()
        except (BackendUpstreamError, BackendRejectedError) as e:
            self._logger.warning("Could not load fees, using defaults", extra={"error": str(e)})
            return self._default_fees

    def _load_customer(self, customer_token: str | None) -> CustomerProfile | None:
        try:
            return self._backend.get_customer_profile(customer_token)
        except (BackendUpstreamError, BackendRejectedError) as e:
            self._logger.warning("Could not load customer profile", extra={"error": str(e)})
            return None

    def _load_periods(
        self, cars: Sequence[Car]
    ) -> tuple[dict[int, tuple[UnavailablePeriod, ...]], set[int]]:
        periods_by_car: dict[int, tuple[UnavailablePeriod, ...]] = {}
        unknown: set[int] = set()
        for car in cars:
            try:
                periods_by_car[car.car_id] = tuple(self._backend.get_unavailable_periods(car.car_id))
            except (BackendUpstreamError, BackendRejectedError) as e:
                self._logger.warning(
                    "Could not load unavailable periods",
                    extra={"car_id": car.car_id, "error": str(e)},
                )
                periods_by_car[car.car_id] = ()
                unknown.add(car.car_id)
        return periods_by_car, unknown
