from __future__ import annotations

from typing import Any

from carbooking.application.utils.dates import parse_calendar_date
from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.car import Car, CustomerProfile, Driver
from carbooking.domain.entities.fees import FeeSchedule

RESERVED_DRIVER_ID = 1


def _as_list(data: Any) -> list[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return data.get("data") or []
    return []


def parse_drivers(data: Any) -> list[Driver]:
    """Accepts a bare array or `{data: [...]}`; the reserved placeholder driver is dropped."""
    drivers: list[Driver] = []
    for item in _as_list(data):
        if not isinstance(item, dict):
            continue
        raw_id = item.get("drivers_id", item.get("driver_id"))
        try:
            driver_id = int(raw_id)
        except (TypeError, ValueError):
            continue
        if driver_id == RESERVED_DRIVER_ID:
            continue
        drivers.append(
            Driver(
                driver_id=driver_id,
                first_name=str(item.get("first_name") or ""),
                last_name=str(item.get("last_name") or ""),
            )
        )
    return drivers


def parse_fees(data: Any, defaults: FeeSchedule | None = None) -> FeeSchedule:
    """Missing or zero fees fall back to the defaults."""
    defaults = defaults or FeeSchedule()
    data = data if isinstance(data, dict) else {}

    def pick(key: str, fallback: float) -> float:
        try:
            value = float(data.get(key) or 0)
        except (TypeError, ValueError):
            return fallback
        return value or fallback

    return FeeSchedule(
        reservation_fee=pick("reservation_fee", defaults.reservation_fee),
        cleaning_fee=pick("cleaning_fee", defaults.cleaning_fee),
        driver_fee=pick("driver_fee", defaults.driver_fee),
    )


def parse_customer_profile(data: Any) -> CustomerProfile:
    data = data if isinstance(data, dict) else {}
    if isinstance(data.get("data"), dict):
        data = data["data"]
    license_info = data.get("driver_license") or {}
    license_no = license_info.get("driver_license_no") if isinstance(license_info, dict) else None
    customer_id = data.get("customer_id")
    return CustomerProfile(
        customer_id=int(customer_id) if customer_id is not None else None,
        first_name=str(data.get("first_name") or ""),
        last_name=str(data.get("last_name") or ""),
        driver_license_no=str(license_no) if license_no else None,
    )


def parse_unavailable_periods(data: Any) -> list[UnavailablePeriod]:
    periods: list[UnavailablePeriod] = []
    raw = data.get("unavailable_periods", []) if isinstance(data, dict) else []
    for item in raw or []:
        if not isinstance(item, dict):
            continue
        start = parse_calendar_date(item.get("start_date"))
        end = parse_calendar_date(item.get("end_date"))
        if start is None or end is None:
            continue
        reason = str(item.get("reason") or "booking")
        if item.get("is_maintenance"):
            reason = "maintenance"
        periods.append(UnavailablePeriod(start_date=start, end_date=end, reason=reason))
    return periods


def parse_car(data: dict[str, Any]) -> Car:
    def optional_int(key: str) -> int | None:
        value = data.get(key)
        try:
            return int(value) if value is not None else None
        except (TypeError, ValueError):
            return None

    return Car(
        car_id=int(data["car_id"]),
        make=str(data.get("make") or ""),
        model=str(data.get("model") or ""),
        rent_price=float(data.get("rent_price") or 0),
        year=optional_int("year"),
        no_of_seat=optional_int("no_of_seat"),
        license_plate=data.get("license_plate"),
        car_img_url=data.get("car_img_url"),
    )
