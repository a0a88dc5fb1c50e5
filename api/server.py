"""FastAPI server for operation discovery and abstracted execution.

Main entry point for the API server.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from abstraction import AbstractionError, AbstractionRegistry, AbstractionRouter
from abstraction.categories import register_default_abstractions
from abstraction.executors import HttpGatewayExecutor, VendorCallExecutor
from api.routes import abstracted, health, search
from api.routes.abstracted import request_id_of
from core.config import Settings, get_settings
from core.observability.logging import configure_logging, get_logger
from operation_search import (
    InMemoryOperationCatalog,
    IntentResolver,
    OperationCatalog,
    SearchConfig,
    SearchEngine,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    executor = app.state.router.executor
    if isinstance(executor, HttpGatewayExecutor):
        await executor.connect()

    logger.info(
        "Operations API starting up (%d categories)",
        len(app.state.router.list_categories()),
    )

    yield

    if isinstance(executor, HttpGatewayExecutor):
        await executor.close()
    logger.info("Operations API shutting down")


def create_app(
    catalog: Optional[OperationCatalog] = None,
    executor: Optional[VendorCallExecutor] = None,
    registry: Optional[AbstractionRegistry] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        catalog: Operation catalog to search (empty by default)
        executor: Vendor call executor (HTTP gateway when OPS_GATEWAY_URL is set)
        registry: Category registry (the built-in categories by default)
        settings: Settings (loaded from the environment by default)
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_format=settings.log_json, force=True)

    if registry is None:
        registry = AbstractionRegistry()
        register_default_abstractions(registry)

    if executor is None and settings.gateway_url:
        executor = HttpGatewayExecutor(
            settings.gateway_url,
            timeout_seconds=settings.gateway_timeout_seconds,
        )

    engine = SearchEngine(
        catalog if catalog is not None else InMemoryOperationCatalog(),
        SearchConfig.from_settings(settings),
    )

    app = FastAPI(
        title="Operations API",
        description="Operation discovery and vendor-neutral execution across integrations",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.resolver = IntentResolver(engine)
    app.state.router = AbstractionRouter(
        registry=registry,
        executor=executor,
        skip_deprecated_default=settings.skip_deprecated_vendors,
        callback_url=settings.callback_url,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AbstractionError)
    async def abstraction_error_handler(request: Request, exc: AbstractionError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": exc.message,
                "code": exc.code.value,
                "category": request.path_params.get("category"),
                "operation": request.path_params.get("operation"),
                "request_id": request_id_of(request),
            },
        )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(search.router, tags=["Search"])
    app.include_router(abstracted.router, prefix="/api/v1", tags=["Abstracted"])

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.server:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
