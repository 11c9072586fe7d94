"""FastAPI application factory."""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from leadscope import __version__
from leadscope.core.client import LeadscopeClient, create_client
from leadscope.core.config import ConfigManager, LeadscopeConfig
from leadscope.core.data.cache import CacheStrategy, InMemoryTTLCache
from leadscope.core.data.fallback import FallbackOrchestrator
from leadscope.core.exceptions import (
    DataValidationError,
    LeadNotFoundError,
    LeadscopeError,
    OverrideStoreError,
    ResolutionError,
)
from leadscope.core.factory import create_credit_union_source, create_http_client, create_local_override_store
from leadscope.core.logging import current_trace_id, get_logger
from leadscope.core.overrides import FallbackOverrideStore, OverrideStore, RemoteOverrideStore
from leadscope.web.metrics import router as metrics_router
from leadscope.web.models import ErrorResponse
from leadscope.web.routes import health_router, lead_router, override_router, proxy_router

logger = get_logger(__name__)


def _build_client(config: LeadscopeConfig, local_store: OverrideStore) -> LeadscopeClient:
    # The override server and the lead client share one local store.
    http_client = create_http_client(config)
    override_store: OverrideStore = local_store
    if config.overrides.remote_url:
        override_store = FallbackOverrideStore(RemoteOverrideStore(http_client, config.overrides.remote_url), local_store)
    return create_client(config, http_client=http_client, override_store=override_store)


def create_app(
    config: LeadscopeConfig | None = None,
    *,
    client: LeadscopeClient | None = None,
    override_store: OverrideStore | None = None,
    proxy_source: FallbackOrchestrator | None = None,
    proxy_cache: CacheStrategy | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Collaborators not passed in are built from ``config`` at startup.
    """

    config = config or ConfigManager().get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        local_store = override_store or create_local_override_store(config)
        lead_client = client or _build_client(config, local_store)

        app.state.config = config
        app.state.client = lead_client
        app.state.override_server_store = local_store
        app.state.proxy_source = proxy_source or create_credit_union_source(
            lead_client.http_client, config, include_proxy=False
        )
        app.state.proxy_cache = proxy_cache or InMemoryTTLCache(max_size=config.cache.memory_size)
        app.state.start_time = time.time()
        logger.info(f"leadscope web service started (version {__version__})")

        yield

        await lead_client.close()
        await local_store.close()

    app = FastAPI(
        title="leadscope",
        description="Credit union and community bank lead resolution",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    _setup_middleware(app)
    _setup_routes(app)
    _setup_exception_handlers(app)
    return app


def _setup_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)


def _setup_routes(app: FastAPI) -> None:
    app.include_router(lead_router, prefix="/api/leads", tags=["leads"])
    app.include_router(proxy_router, prefix="/api/ncua", tags=["proxy"])
    app.include_router(override_router, prefix="/overrides", tags=["overrides"])
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router)


def _status_for(exc: LeadscopeError) -> int:
    if isinstance(exc, LeadNotFoundError):
        return 404
    if isinstance(exc, DataValidationError):
        return 422
    if isinstance(exc, (ResolutionError, OverrideStoreError)):
        return 503
    return 400


def _setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LeadscopeError)
    async def leadscope_exception_handler(request: Request, exc: LeadscopeError) -> JSONResponse:
        return JSONResponse(
            status_code=_status_for(exc),
            content=ErrorResponse(
                error=exc.__class__.__name__,
                message=exc.message,
                details={"error_code": exc.error_code, **exc.details},
                request_id=current_trace_id(),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.bind(error_code="INTERNAL_ERROR").error(f"Unhandled error on {request.url.path}: {exc!r}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="InternalServerError",
                message="Internal server error",
                details={"type": type(exc).__name__},
                request_id=current_trace_id(),
            ).model_dump(mode="json"),
        )


__all__ = ["create_app"]
