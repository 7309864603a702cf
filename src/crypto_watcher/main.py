"""Main module for the crypto watcher service."""
import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from crypto_watcher.config import Settings
from crypto_watcher.container import Container
from crypto_watcher.routers import (accounts_router, health_router,
                                    watchers_router)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Build singletons at startup; close exchange and price clients on shutdown."""
    container: Container = fastapi_app.state.container
    # Fail fast on bad configuration and seed the registry before serving
    directory = container.account_directory()
    container.watcher_registry()
    exchange_clients = container.exchange_clients()
    price_service = container.price_service()
    fastapi_app.state.started_at = time.monotonic()
    logger.info("Crypto watcher started with %d exchange account(s)", len(directory))

    yield

    for name, resource in (("exchange clients", exchange_clients), ("price service", price_service)):
        try:
            await resource.close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing %s: %s", name, exc)


async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 instead of FastAPI's 422."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app(container: Container | None = None) -> FastAPI:
    """Create the FastAPI app around a DI container (a fresh one by default)."""
    fastapi_app = FastAPI(
        title="Crypto Watcher",
        description="Exchange account monitoring and price alert watchers",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container or Container()
    fastapi_app.state.started_at = time.monotonic()
    fastapi_app.add_exception_handler(RequestValidationError, validation_error_handler)

    fastapi_app.include_router(health_router)
    fastapi_app.include_router(accounts_router)
    fastapi_app.include_router(watchers_router)
    return fastapi_app


app = create_app()


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def run():
    """Run the server (uvicorn). Entry point for `crypto-watcher`."""
    settings = app.state.container.settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "crypto_watcher.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


def run_dev():
    """Run the development server with auto-reload and debug logging."""
    settings = Settings.from_env()
    configure_logging("debug")
    uvicorn.run(
        "crypto_watcher.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=True,
        log_level="debug",
    )
