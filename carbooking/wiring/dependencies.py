from functools import lru_cache
import logging

from carbooking.application.ports.rental_backend import RentalBackendPort
from carbooking.application.ports.wizard_store import WizardStorePort
from carbooking.application.use_cases.wizard import WizardUseCase
from carbooking.core.config import settings
from carbooking.domain.entities.fees import FeeSchedule
from carbooking.infrastructure.backend.mock_backend import MockRentalBackend
from carbooking.infrastructure.backend.rental_api_client import RentalApiClient
from carbooking.infrastructure.store.memory_store import MemoryWizardStore


def get_default_fees() -> FeeSchedule:
    return FeeSchedule(
        reservation_fee=settings.DEFAULT_RESERVATION_FEE,
        cleaning_fee=settings.DEFAULT_CLEANING_FEE,
        driver_fee=settings.DEFAULT_DRIVER_FEE,
    )


@lru_cache
def get_rental_backend() -> RentalBackendPort:
    logger = logging.getLogger(__name__)
    if not settings.RENTAL_API_BASE_URL:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using MockRentalBackend (RENTAL_API_BASE_URL missing, ENV=dev/local)")
            return MockRentalBackend(fees=get_default_fees())
        raise ValueError("RENTAL_API_BASE_URL is required outside dev/local.")

    logger.info("Using RentalApiClient", extra={"reason": settings.RENTAL_API_BASE_URL})
    return RentalApiClient(default_fees=get_default_fees())


@lru_cache
def get_wizard_store() -> WizardStorePort:
    return MemoryWizardStore()


def get_wizard_use_case() -> WizardUseCase:
    return WizardUseCase(
        backend=get_rental_backend(),
        store=get_wizard_store(),
        office_location=settings.OFFICE_LOCATION,
        default_fees=get_default_fees(),
    )
