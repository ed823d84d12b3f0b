import logging

from fastapi import FastAPI

from .config import settings
from .errors import register_error_handlers
from .middleware.audit import audit_middleware
from .middleware.auth import auth_middleware
from .middleware.timeout import timeout_middleware
from .routers import admin, availability, bookings, services, user

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)

app = FastAPI(title="Rovart Booking API")

# ===== Middleware order (last registered runs first) =====
app.middleware("http")(audit_middleware)
app.middleware("http")(timeout_middleware)
app.middleware("http")(auth_middleware)

register_error_handlers(app)

app.include_router(availability.router)
app.include_router(bookings.router)
app.include_router(services.router)
app.include_router(user.router)
app.include_router(admin.router)


@app.get("/health")
def health():
    return {"status": "ok"}
