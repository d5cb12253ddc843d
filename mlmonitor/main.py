"""mlmonitor FastAPI application entry point.

Wires together the database handle, stores, services, and routes via
dependency injection.  Loads configuration from ``config/config.yaml``,
``.env`` and the environment, and configures structured logging.

The database handle is created here, per application, and injected into
both stores; nothing else in the package opens storage on its own.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from mlmonitor.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    configure_error_handlers,
)
from mlmonitor.api.routes import router as api_router
from mlmonitor.config.loader import load_config, settings_from_config
from mlmonitor.config.settings import Settings
from mlmonitor.providers.memory import MemoryDatabase, MemoryFeedbackStore, MemoryInferenceStore
from mlmonitor.providers.sqlite import SQLiteDatabase, SQLiteFeedbackStore, SQLiteInferenceStore
from mlmonitor.services.feedback_service import FeedbackService
from mlmonitor.services.inference_service import InferenceService
from mlmonitor.utils.errors import ConfigurationError, StoreUnavailableError
from mlmonitor.utils.logging import configure_logging, get_logger

__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = settings_from_config(load_config())

configure_logging(settings)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Store selection
# ---------------------------------------------------------------------------


def _build_stores(app_settings: Settings) -> dict[str, Any]:
    """Create the database handle for the configured backend and both stores on it."""
    backend = app_settings.store_backend.strip().lower()

    if backend == "sqlite":
        database: SQLiteDatabase | MemoryDatabase = SQLiteDatabase(db_path=app_settings.db_path)
        inference_store = SQLiteInferenceStore(database)
        feedback_store = SQLiteFeedbackStore(database)
    elif backend == "memory":
        database = MemoryDatabase()
        inference_store = MemoryInferenceStore(database)
        feedback_store = MemoryFeedbackStore(database)
    else:
        raise ConfigurationError(
            f"Unknown store_backend {app_settings.store_backend!r}; expected 'sqlite' or 'memory'"
        )

    return {
        "database": database,
        "inference_store": inference_store,
        "feedback_store": feedback_store,
    }


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def build_components(app_settings: Settings) -> dict[str, Any]:
    """Construct every store and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    components = _build_stores(app_settings)

    inference_service = InferenceService(inference_store=components["inference_store"])
    feedback_service = FeedbackService(
        inference_store=components["inference_store"],
        feedback_store=components["feedback_store"],
        flag_update_attempts=app_settings.flag_update_attempts,
    )

    return {
        **components,
        "inference_service": inference_service,
        "feedback_service": feedback_service,
        "store_backend": app_settings.store_backend,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Configure logging, build (or adopt) components, then initialise and ping storage.

    Startup fails with ``StoreUnavailableError`` if the database does not
    answer.
    """
    configure_logging(application.state.settings)
    components = getattr(application.state, "components", None)
    if components is None:
        components = build_components(application.state.settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    database = components["database"]
    await database.initialize()
    if not await database.ping():
        raise StoreUnavailableError(
            message="Database did not answer after initialisation",
            store_name=components["store_backend"],
        )

    _logger.info(
        "app_startup",
        version=__version__,
        environment=application.state.settings.app_env,
        inference_store=components["inference_store"].get_provider_name(),
        feedback_store=components["feedback_store"].get_provider_name(),
    )

    yield

    _logger.info("app_shutdown")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    components: dict[str, Any] | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    app_settings:
        Settings used to build components at startup.  Defaults to the
        module-level settings.
    components:
        Optional pre-built components (as returned by ``build_components``).
        Tests pass these to share a store with the running app.
    """
    application = FastAPI(
        title="mlmonitor API",
        version=__version__,
        description=(
            "Record model inferences and human feedback on them, keeping each "
            "inference's has_feedback flag in step with its feedback rows."
        ),
        lifespan=_lifespan,
    )
    application.state.settings = app_settings or settings
    if components is not None:
        application.state.components = components

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)
    configure_error_handlers(application)

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "mlmonitor.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
