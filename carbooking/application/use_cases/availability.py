from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, Mapping

from carbooking.application.utils.dates import format_date_range, parse_calendar_date, ranges_overlap
from carbooking.domain.entities.availability import DateConflict, UnavailablePeriod
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.trip import TripData


@dataclass(frozen=True)
class ConflictCheck:
    has_conflict: bool
    message: str = ""


NO_CONFLICT = ConflictCheck(has_conflict=False)


def check_conflict(
    periods: Iterable[UnavailablePeriod],
    start_date: date | str | None,
    end_date: date | str | None,
) -> ConflictCheck:
    """
    Check a requested date range against a car's unavailable periods.
    Bounds are inclusive on both sides; missing or invalid dates never conflict.
    """
    start = parse_calendar_date(start_date)
    end = parse_calendar_date(end_date)
    if start is None or end is None:
        return NO_CONFLICT

    for period in periods:
        if ranges_overlap(start, end, period.start_date, period.end_date):
            cause = "maintenance" if period.is_maintenance else "another booking"
            return ConflictCheck(
                has_conflict=True,
                message=(
                    f"This car is unavailable from {format_date_range(period.start_date, period.end_date)} "
                    f"due to {cause}."
                ),
            )
    return NO_CONFLICT


def effective_trip(draft: CarBookingDraft, common: TripData) -> TripData:
    return common if draft.use_common_data else draft.trip


def with_conflict_status(
    draft: CarBookingDraft,
    common: TripData,
    periods_by_car: Mapping[int, Iterable[UnavailablePeriod]],
) -> CarBookingDraft:
    """Recompute a single draft's conflict flag from its effective dates."""
    trip = effective_trip(draft, common)
    result = check_conflict(periods_by_car.get(draft.car.car_id, ()), trip.start_date, trip.end_date)
    return replace(draft, has_conflict=result.has_conflict, conflict_message=result.message)


def find_date_conflicts(
    common: TripData,
    drafts: Iterable[CarBookingDraft],
    periods_by_car: Mapping[int, Iterable[UnavailablePeriod]],
) -> list[DateConflict]:
    """Wizard-level conflict list, computed from every draft's effective dates."""
    conflicts: list[DateConflict] = []
    for index, draft in enumerate(drafts):
        trip = effective_trip(draft, common)
        result = check_conflict(periods_by_car.get(draft.car.car_id, ()), trip.start_date, trip.end_date)
        if result.has_conflict:
            conflicts.append(
                DateConflict(car_index=index, car_name=draft.car.display_name, message=result.message)
            )
    return conflicts
