import logging

from fastapi import FastAPI, Request

from carbooking.api.v1.wizards import router as wizards_router
from carbooking.core.config import settings

# Keys passed through `extra=` by the use cases, the backend client and the request log below.
LOG_CONTEXT_KEYS = (
    "session_id",
    "car_id",
    "car_count",
    "step",
    "action",
    "method",
    "path",
    "status",
    "reason",
    "error",
)


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = [
            f"{key}={getattr(record, key)}"
            for key in LOG_CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        ]
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

logger = logging.getLogger("carbooking.http")

app = FastAPI(title="Multi-Car Booking Wizard", version="1.0.0")


@app.middleware("http")
async def log_wizard_requests(request: Request, call_next):
    response = await call_next(request)
    if request.url.path.startswith("/api/"):
        logger.info(
            "Wizard request handled",
            extra={"method": request.method, "path": request.url.path, "status": response.status_code},
        )
    return response


app.include_router(wizards_router, prefix="/api/v1", tags=["wizards"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
