from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from salesboard.core.config import settings
from salesboard.core.logging_config import configure_logging
import salesboard.models  # noqa: F401  # force model registration

from salesboard.api.v1.auth import router as auth_router
from salesboard.api.v1.meetings import router as meetings_router
from salesboard.api.v1.offers import router as offers_router
from salesboard.api.v1.sales import router as sales_router
from salesboard.api.v1.bookings import router as bookings_router
from salesboard.api.v1.profiles import router as profiles_router
from salesboard.api.v1.dashboard import router as dashboard_router
from salesboard.api.v1.services import router as services_router
from salesboard.api.v1.admin import router as admin_router
from salesboard.api.v1.exports import router as exports_router
from salesboard.api.v1.integrations import router as integrations_router
from salesboard.api.v1.digest import router as digest_router


def create_application() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Salesboard API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {"status": "ok", "service": "salesboard"}

    # Routers
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(meetings_router, prefix="/api/v1")
    app.include_router(offers_router, prefix="/api/v1")
    app.include_router(sales_router, prefix="/api/v1")
    app.include_router(bookings_router, prefix="/api/v1")
    app.include_router(profiles_router, prefix="/api/v1")
    app.include_router(dashboard_router, prefix="/api/v1")
    app.include_router(services_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")
    app.include_router(exports_router, prefix="/api/v1")
    app.include_router(integrations_router, prefix="/api/v1")
    app.include_router(digest_router, prefix="/api/v1")

    return app


app = create_application()
