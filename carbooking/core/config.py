from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    RENTAL_API_BASE_URL: str | None = None
    RENTAL_API_TOKEN: str | None = None
    # None leaves backend calls without a timeout.
    BACKEND_TIMEOUT_SECONDS: float | None = None

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    OFFICE_LOCATION: str = "JA Car Rental Office"

    DEFAULT_RESERVATION_FEE: float = 1000.0
    DEFAULT_CLEANING_FEE: float = 200.0
    DEFAULT_DRIVER_FEE: float = 500.0


settings = Settings()
