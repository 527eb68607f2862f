from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from carbooking.application.use_cases.availability import effective_trip
from carbooking.application.use_cases.summary import summarize
from carbooking.domain.entities.car import Car
from carbooking.domain.entities.trip import TripData
from carbooking.domain.entities.wizard_state import WizardState


class CarSchema(BaseModel):
    car_id: int
    make: str = ""
    model: str = ""
    rent_price: float = 0.0
    year: int | None = None
    no_of_seat: int | None = None
    license_plate: str | None = None
    car_img_url: str | None = None

    def to_entity(self) -> Car:
        return Car(**self.model_dump())


class OpenWizardRequestSchema(BaseModel):
    cars: list[CarSchema] = Field(min_length=1)


class FieldUpdateSchema(BaseModel):
    field: str
    value: Any = None


class TermsAcceptSchema(BaseModel):
    accepted: bool = True


class TripSchema(BaseModel):
    start_date: date | None = None
    end_date: date | None = None
    pickup_time: str
    dropoff_time: str
    purpose: str
    custom_purpose: str
    is_self_drive: bool
    delivery_type: str
    pickup_location: str
    dropoff_location: str
    delivery_location: str

    @classmethod
    def from_trip(cls, trip: TripData) -> "TripSchema":
        return cls(
            start_date=trip.start_date,
            end_date=trip.end_date,
            pickup_time=trip.pickup_time,
            dropoff_time=trip.dropoff_time,
            purpose=trip.purpose,
            custom_purpose=trip.custom_purpose,
            is_self_drive=trip.is_self_drive,
            delivery_type=trip.delivery_type.value,
            pickup_location=trip.pickup_location,
            dropoff_location=trip.dropoff_location,
            delivery_location=trip.delivery_location,
        )


class DraftSchema(BaseModel):
    car: CarSchema
    use_common_data: bool
    trip: TripSchema  # effective values: common data while use_common_data is set
    selected_driver: int | None = None
    has_conflict: bool = False
    conflict_message: str = ""
    cost: float = 0


class DriverSchema(BaseModel):
    driver_id: int
    display_name: str


class FeesSchema(BaseModel):
    reservation_fee: float
    cleaning_fee: float
    driver_fee: float


class ConflictSchema(BaseModel):
    car_index: int
    car_name: str
    message: str


class WizardStateSchema(BaseModel):
    session_id: str
    step: str
    step_index: int
    common: TripSchema
    drafts: list[DraftSchema]
    drivers: list[DriverSchema] = Field(default_factory=list)
    fees: FeesSchema
    can_self_drive: bool
    terms_viewed: bool
    terms_accepted: bool
    submitting: bool = False
    error: str = ""
    warning: str | None = None
    conflicts: list[ConflictSchema] = Field(default_factory=list)
    driver_warning: str | None = None
    availability_warning: str | None = None
    total_cost: float = 0
    version: int

    @classmethod
    def from_state(cls, state: WizardState) -> "WizardStateSchema":
        summary = summarize(state)
        return cls(
            session_id=state.session_id,
            step=state.step.value,
            step_index=state.step.position,
            common=TripSchema.from_trip(state.common),
            drafts=[
                DraftSchema(
                    car=CarSchema(**vars(draft.car)),
                    use_common_data=draft.use_common_data,
                    trip=TripSchema.from_trip(effective_trip(draft, state.common)),
                    selected_driver=draft.selected_driver,
                    has_conflict=draft.has_conflict,
                    conflict_message=draft.conflict_message,
                    cost=cost,
                )
                for draft, cost in zip(state.drafts, summary.car_costs)
            ],
            drivers=[DriverSchema(driver_id=d.driver_id, display_name=d.display_name) for d in state.drivers],
            fees=FeesSchema(
                reservation_fee=state.fees.reservation_fee,
                cleaning_fee=state.fees.cleaning_fee,
                driver_fee=state.fees.driver_fee,
            ),
            can_self_drive=state.can_self_drive,
            terms_viewed=state.terms_viewed,
            terms_accepted=state.terms_accepted,
            submitting=state.submitting,
            error=state.error,
            warning=state.warning,
            conflicts=[
                ConflictSchema(car_index=c.car_index, car_name=c.car_name, message=c.message)
                for c in summary.conflicts
            ],
            driver_warning=summary.driver_warning,
            availability_warning=summary.availability_warning,
            total_cost=summary.total_cost,
            version=state.version,
        )


class WizardResultSchema(BaseModel):
    action: str
    message: str | None = None
    state: WizardStateSchema | None = None
    response: dict[str, Any] | None = None
