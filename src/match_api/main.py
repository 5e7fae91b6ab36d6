import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from importlib import metadata
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from opentelemetry.sdk.trace.export import SpanExporter
from starlette.exceptions import HTTPException as StarletteHTTPException

from match_api.api.v1 import health, matches
from match_api.core import errors
from match_api.core.config import Settings, get_settings
from match_api.core.logging import setup_logging
from match_api.core.middleware import (
    RecoveryMiddleware,
    RequestIdMiddleware,
    RequestLoggingMiddleware,
)
from match_api.core.tracing import (
    disable_tracing,
    install_global_tracing,
    setup_tracing,
    shutdown_tracing,
)

logger = logging.getLogger(__name__)

try:
    app_version = metadata.version("match-api")
except metadata.PackageNotFoundError:
    app_version = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    shutdown_tracing(app)


def create_app(
    settings: Settings | None = None, span_exporter: SpanExporter | None = None
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.api_title, version=app_version, lifespan=lifespan)
    app.state.settings = settings

    # Last added runs first.
    app.add_middleware(RecoveryMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=settings.allowed_methods,
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)

    app.add_exception_handler(StarletteHTTPException, errors.http_exception_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_exception_handler)
    app.add_exception_handler(Exception, errors.unhandled_exception_handler)

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount(settings.static_prefix, StaticFiles(directory=static_dir), name="static")
    else:
        logger.warning("Static directory not found, skipping mount", extra={"path": str(static_dir)})

    if settings.tracing_enabled:
        try:
            setup_tracing(app, settings, span_exporter)
        except Exception as exc:
            logger.critical("Failed to initialize tracing", exc_info=exc)
            raise
    else:
        disable_tracing(app)

    app.include_router(health.router)
    app.include_router(matches.router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    install_global_tracing(app)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
