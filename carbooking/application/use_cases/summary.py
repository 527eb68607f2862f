from __future__ import annotations

from dataclasses import dataclass, field

from carbooking.application.use_cases.availability import find_date_conflicts
from carbooking.application.use_cases.driver_validation import driver_shortage_warning
from carbooking.application.use_cases.pricing import cost_for
from carbooking.domain.entities.availability import DateConflict
from carbooking.domain.entities.wizard_state import WizardState


@dataclass(frozen=True)
class WizardSummary:
    car_costs: list[float] = field(default_factory=list)
    total_cost: float = 0
    conflicts: list[DateConflict] = field(default_factory=list)
    driver_warning: str | None = None
    availability_warning: str | None = None


def availability_warning(state: WizardState) -> str | None:
    names = [
        draft.car.display_name for draft in state.drafts if draft.car.car_id in state.unknown_availability
    ]
    if not names:
        return None
    return (
        f"Availability could not be checked for {', '.join(names)}. "
        "These cars may still be rejected when the booking is submitted."
    )


def summarize(state: WizardState) -> WizardSummary:
    """Derived view of a wizard session, recomputed from the stored state on every read."""
    car_costs = [cost_for(draft, state.common, state.fees) for draft in state.drafts]
    return WizardSummary(
        car_costs=car_costs,
        total_cost=sum(car_costs),
        conflicts=find_date_conflicts(state.common, state.drafts, state.periods_by_car),
        driver_warning=driver_shortage_warning(state.drafts, state.common, state.drivers),
        availability_warning=availability_warning(state),
    )
