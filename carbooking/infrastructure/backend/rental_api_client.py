from __future__ import annotations

import logging
from typing import Any

import httpx

from carbooking.application.dto.backend_records import (
    parse_customer_profile,
    parse_drivers,
    parse_fees,
    parse_unavailable_periods,
)
from carbooking.application.exceptions import BackendRejectedError, BackendUpstreamError
from carbooking.application.ports.rental_backend import RentalBackendPort
from carbooking.core.config import settings
from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.car import CustomerProfile, Driver
from carbooking.domain.entities.fees import FeeSchedule


class RentalApiClient(RentalBackendPort):
    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        default_fees: FeeSchedule | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or settings.RENTAL_API_BASE_URL or "").rstrip("/")
        self._token = token or settings.RENTAL_API_TOKEN
        self._default_fees = default_fees or FeeSchedule(
            reservation_fee=settings.DEFAULT_RESERVATION_FEE,
            cleaning_fee=settings.DEFAULT_CLEANING_FEE,
            driver_fee=settings.DEFAULT_DRIVER_FEE,
        )
        self._client = httpx.Client(
            timeout=timeout if timeout is not None else settings.BACKEND_TIMEOUT_SECONDS,
            transport=transport,
        )
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("RENTAL_API_BASE_URL is required for the rental backend client")

    def list_drivers(self) -> list[Driver]:
        return parse_drivers(self._request("GET", "/drivers"))

    def get_fees(self) -> FeeSchedule:
        return parse_fees(self._request("GET", "/fees"), self._default_fees)

    def get_customer_profile(self, customer_token: str | None = None) -> CustomerProfile:
        return parse_customer_profile(self._request("GET", "/api/customers/me", token=customer_token))

    def get_unavailable_periods(self, car_id: int) -> list[UnavailablePeriod]:
        return parse_unavailable_periods(self._request("GET", f"/cars/{car_id}/unavailable-periods"))

    def create_bulk_bookings(
        self, bookings: list[dict[str, Any]], customer_token: str | None = None
    ) -> dict[str, Any]:
        data = self._request("POST", "/bookings/bulk", json={"bookings": bookings}, token=customer_token)
        self._logger.info("Bulk booking created", extra={"car_count": len(bookings)})
        return data if isinstance(data, dict) else {"data": data}

    def _headers(self, token: str | None = None) -> dict[str, str]:
        # A customer token takes precedence over the service token.
        headers = {"Accept": "application/json"}
        bearer = token or self._token
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"
        return headers

    def _request(self, method: str, path: str, json: Any | None = None, token: str | None = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            resp = self._client.request(method, url, json=json, headers=self._headers(token))
        except httpx.HTTPError as e:
            self._logger.error("Rental backend unreachable", extra={"path": path, "error": str(e)})
            raise BackendUpstreamError(f"{method} {path} failed: {e}") from e

        if resp.status_code >= 500:
            self._logger.error(
                "Rental backend error",
                extra={"path": path, "status": resp.status_code, "error": resp.text[:200]},
            )
            raise BackendUpstreamError(f"{method} {path} returned {resp.status_code}")

        if resp.status_code >= 400:
            try:
                error_json = resp.json()
            except ValueError:
                error_json = {}
            error_message = ""
            if isinstance(error_json, dict):
                error_message = str(error_json.get("error") or error_json.get("message") or "")
            self._logger.warning(
                "Rental backend rejected request",
                extra={"path": path, "status": resp.status_code, "error": error_message},
            )
            raise BackendRejectedError(error_message, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise BackendUpstreamError(f"{method} {path} returned invalid JSON") from e
