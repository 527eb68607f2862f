from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.car import CustomerProfile, Driver
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.fees import FeeSchedule
from carbooking.domain.entities.trip import TripData


class WizardStep(str, Enum):
    common_details = "common_details"
    individual_cars = "individual_cars"
    use_notice_terms = "use_notice_terms"
    review_submit = "review_submit"

    @property
    def position(self) -> int:
        return list(WizardStep).index(self)


@dataclass(frozen=True)
class WizardState:
    session_id: str
    step: WizardStep = WizardStep.common_details
    common: TripData = field(default_factory=TripData)
    drafts: tuple[CarBookingDraft, ...] = ()
    drivers: tuple[Driver, ...] = ()
    fees: FeeSchedule = field(default_factory=FeeSchedule)
    periods_by_car: dict[int, tuple[UnavailablePeriod, ...]] = field(default_factory=dict)
    unknown_availability: frozenset[int] = frozenset()  # car ids whose period fetch failed
    customer: CustomerProfile | None = None
    customer_token: str | None = field(default=None, repr=False)  # forwarded to profile and bulk calls
    terms_viewed: bool = False
    terms_accepted: bool = False
    submitting: bool = False
    error: str = ""
    warning: str | None = None
    version: int = 1
    created_at: float | None = None
    updated_at: float | None = None

    @property
    def can_self_drive(self) -> bool:
        # Without a profile the backend decides eligibility on submit.
        return self.customer.can_self_drive if self.customer else True
