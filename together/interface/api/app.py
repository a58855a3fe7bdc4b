"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from together.config import Settings
from together.interface.api.errors import register_error_handlers
from together.interface.api.routes import health, spaces, unbind, users
from together.interface.scheduler import create_scheduler, stop_scheduler
from together.util.di.container import create_container, setup_di
from together.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, configure in conftest.py if needed.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        scheduler = sweep = None
        if settings.unbind.sweep_enabled:
            scheduler, sweep = create_scheduler(
                app.state.dishka_container, settings.unbind
            )
            scheduler.start()
            logfire.info(
                "Unbind sweep scheduled",
                interval_seconds=settings.unbind.sweep_interval_seconds,
            )
        try:
            yield
        finally:
            if scheduler is not None and sweep is not None:
                await stop_scheduler(scheduler, sweep)
            await app.state.dishka_container.close()

    # Instrument httpx for outbound HTTP requests
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="Together API",
        description="Backend API for Together - a shared journal for two",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(spaces.router)
    app_instance.include_router(unbind.router)
    app_instance.include_router(users.router)

    register_error_handlers(app_instance)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configure in conftest.py
app = create_app()
