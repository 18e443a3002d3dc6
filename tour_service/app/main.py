import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import Settings, settings
from shared.core.rate_limit import build_rate_limiter
from shared.helpers.exception_handler import setup_exception_handlers
from shared.middleware.request_middleware import (
    HttpsEnforcementMiddleware, RequestLoggingMiddleware, SecurityHeadersMiddleware)
from shared.utils.logging_config import configure_logging

from .router import (
    activities_router, auth_router, bookings_router, health_router, reviews_router)
from .router.admin import (
    activities_router as admin_activities_router,
    analytics_router as admin_analytics_router,
    bookings_router as admin_bookings_router,
    reviews_router as admin_reviews_router,
    system_router as admin_system_router)
from .seed import seed_initial_data
from .storage.base import Storage
from .storage.factory import build_storage

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings, storage: Storage = None) -> FastAPI:
    configure_logging(app_settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "storage", None) is None:
            app.state.storage = build_storage(app_settings)
        seed_initial_data(app.state.storage, app_settings)
        app.state.started_at = datetime.now(timezone.utc)
        logger.info("%s %s started (%s, %s storage)", app_settings.APP_NAME,
                    app_settings.APP_VERSION, app_settings.APP_ENV, app.state.storage.kind)
        yield
        app.state.storage.close()

    app = FastAPI(title="MarrakechDunes Tours API",
                  version=app_settings.APP_VERSION, lifespan=lifespan)

    app.state.settings = app_settings
    app.state.storage = storage
    app.state.rate_limiter = build_rate_limiter(app_settings)
    app.state.started_at = datetime.now(timezone.utc)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if app_settings.is_production:
        app.add_middleware(HttpsEnforcementMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, hsts=app_settings.is_production)
    app.add_middleware(RequestLoggingMiddleware)

    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router.router)
    app.include_router(auth_router.router)
    app.include_router(activities_router.router)
    app.include_router(bookings_router.router)
    app.include_router(reviews_router.router)
    app.include_router(admin_bookings_router.router)
    app.include_router(admin_activities_router.router)
    app.include_router(admin_reviews_router.router)
    app.include_router(admin_analytics_router.router)
    app.include_router(admin_system_router.router)

    return app


app = create_app()
