from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from carbooking.application.use_cases.availability import effective_trip
from carbooking.application.use_cases.pricing import cost_for
from carbooking.domain.entities.trip import DeliveryType
from carbooking.domain.entities.wizard_state import WizardState


class BookingPayloadDTO(BaseModel):
    """One entry of the `POST /bookings/bulk` body."""

    model_config = ConfigDict(populate_by_name=True)

    car_id: int
    purpose: str
    start_date: date | None = Field(alias="startDate")
    end_date: date | None = Field(alias="endDate")
    pickup_time: str = Field(alias="pickupTime")
    dropoff_time: str = Field(alias="dropoffTime")
    delivery_type: DeliveryType = Field(alias="deliveryType")
    delivery_location: str | None = Field(alias="deliveryLocation")
    pickup_location: str | None = Field(alias="pickupLocation")
    dropoff_location: str = Field(alias="dropoffLocation")
    selected_driver: int | None = Field(alias="selectedDriver")
    total_cost: float = Field(alias="totalCost")
    is_self_drive: bool = Field(alias="isSelfDrive")
    total_amount: float
    balance: float
    booking_status: str = "Pending"

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def build_booking_payloads(state: WizardState) -> list[BookingPayloadDTO]:
    """Resolve every car's effective trip into a bulk booking entry."""
    payloads: list[BookingPayloadDTO] = []
    for draft in state.drafts:
        trip = effective_trip(draft, state.common)
        cost = cost_for(draft, state.common, state.fees)
        is_delivery = trip.delivery_type == DeliveryType.delivery
        payloads.append(
            BookingPayloadDTO(
                car_id=draft.car.car_id,
                purpose=trip.resolved_purpose,
                start_date=trip.start_date,
                end_date=trip.end_date,
                pickup_time=trip.pickup_time,
                dropoff_time=trip.dropoff_time,
                delivery_type=trip.delivery_type,
                delivery_location=trip.delivery_location if is_delivery else None,
                pickup_location=None if is_delivery else trip.pickup_location,
                dropoff_location=trip.dropoff_location,
                selected_driver=None if trip.is_self_drive else draft.selected_driver,
                total_cost=cost,
                is_self_drive=trip.is_self_drive,
                total_amount=cost,
                balance=cost,
            )
        )
    return payloads
