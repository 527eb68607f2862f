"""
Tests for building the bulk booking request body.
"""

from __future__ import annotations

from datetime import date

from carbooking.application.dto.booking_payload import build_booking_payloads
from carbooking.domain.entities.car import Car
from carbooking.domain.entities.draft import CarBookingDraft
from carbooking.domain.entities.trip import DeliveryType, TripData
from carbooking.domain.entities.wizard_state import WizardState

WIRE_KEYS = {
    "car_id",
    "purpose",
    "startDate",
    "endDate",
    "pickupTime",
    "dropoffTime",
    "deliveryType",
    "deliveryLocation",
    "pickupLocation",
    "dropoffLocation",
    "selectedDriver",
    "totalCost",
    "isSelfDrive",
    "total_amount",
    "balance",
    "booking_status",
}


def _state() -> WizardState:
    common = TripData(
        start_date=date(2030, 6, 1),
        end_date=date(2030, 6, 3),
        purpose="Others",
        custom_purpose="Company retreat",
        is_self_drive=True,
    )
    own = TripData(
        start_date=date(2030, 6, 2),
        end_date=date(2030, 6, 2),
        pickup_time="07:30",
        purpose="Travel",
        is_self_drive=False,
        delivery_type=DeliveryType.delivery,
        delivery_location="Makati City",
    )
    return WizardState(
        session_id="s1",
        common=common,
        drafts=(
            CarBookingDraft(car=Car(car_id=11, make="Toyota", model="Vios", rent_price=1000), trip=common, selected_driver=3),
            CarBookingDraft(
                car=Car(car_id=12, make="Mitsubishi", model="Montero", rent_price=1500),
                use_common_data=False,
                trip=own,
                selected_driver=7,
            ),
        ),
    )


def test_payload_uses_wire_keys():
    payloads = [p.to_wire() for p in build_booking_payloads(_state())]
    assert all(set(p) == WIRE_KEYS for p in payloads)


def test_common_draft_resolves_custom_purpose_and_drops_stale_driver():
    first = build_booking_payloads(_state())[0].to_wire()

    assert first["purpose"] == "Company retreat"
    assert first["startDate"] == "2030-06-01"
    assert first["deliveryType"] == "pickup"
    assert first["deliveryLocation"] is None
    assert first["pickupLocation"] == "JA Car Rental Office"
    assert first["selectedDriver"] is None
    assert first["isSelfDrive"] is True
    assert first["totalCost"] == first["total_amount"] == first["balance"] == 4200
    assert first["booking_status"] == "Pending"


def test_own_draft_uses_its_delivery_and_driver():
    second = build_booking_payloads(_state())[1].to_wire()

    assert second["purpose"] == "Travel"
    assert second["pickupTime"] == "07:30"
    assert second["deliveryType"] == "delivery"
    assert second["deliveryLocation"] == "Makati City"
    assert second["pickupLocation"] is None
    assert second["selectedDriver"] == 7
    assert second["totalCost"] == 1500 + 1000 + 200 + 500
