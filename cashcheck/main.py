import asyncio
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import health, checker, rates
from .services.rates.base import RateProvider
from .services.rates.providers import make_rate_provider
from .services.rates.state import RateState

logger = logging.getLogger("cashcheck")


@asynccontextmanager
async def lifespan(app: FastAPI):
    state: RateState = app.state.rate_state
    task = None
    if state.auto:
        # Startup fetch runs in the background; its outcome lands in the rate status
        task = asyncio.create_task(state.refresh())
    yield
    if task is not None:
        await task


def create_app(
    settings_override: Settings | None = None,
    provider_override: RateProvider | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    provider_override: rate provider to use instead of the configured one.
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    provider = provider_override or make_rate_provider(settings)
    logger.info(
        "using rate provider %s for home currency %s",
        type(provider).__name__,
        settings.home_currency,
    )

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.rate_state = RateState(provider, auto=settings.auto_rates)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(checker.router)
    app.include_router(rates.router)

    @app.get("/")
    async def root():
        return {"message": f"{settings.app_name} API", "version": settings.version}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn (HOST/PORT from env)."""
    uvicorn.run(
        "cashcheck.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_config=None,
    )
