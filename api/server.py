"""
FastAPI application entry point.

Sets up the application with:
- Lifespan management (store creation and teardown)
- Route registration
- Error handling
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.dependencies import set_dispatcher
from api.routes import health_router, items_router
from api.schemas.item import ErrorResponse
from core.config import settings
from core.logging import configure_logging, get_logger
from core.storage import create_item_store
from manager.dispatcher import ErrorKind, RequestDispatcher


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Startup: create the item store and the dispatcher in front of it.
    Shutdown: drop all items and unregister the dispatcher.
    """
    configure_logging()

    logger.info(
        "Starting item service...",
        storage_backend=settings.storage_backend,
    )

    store = create_item_store(settings)
    set_dispatcher(RequestDispatcher(store, default_limit=settings.list_default_limit))

    logger.info(
        "Item service started",
        host=settings.server_host,
        port=settings.server_port,
        storage_backend=settings.storage_backend,
    )

    yield

    logger.info("Shutting down item service...", items=len(store))
    set_dispatcher(None)
    store.clear()
    logger.info("Item service stopped")


def create_app() -> FastAPI:
    """
    Application factory.

    Creates and configures the FastAPI application.
    """
    app = FastAPI(
        title="CRUDL Item Store",
        description="In-memory create/read/update/delete/list service for keyed items.",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.include_router(health_router)
    app.include_router(items_router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info(
            "Malformed request",
            path=request.url.path,
            method=request.method,
            errors=len(exc.errors()),
        )
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error=ErrorKind.BAD_REQUEST.value,
                detail="; ".join(
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in exc.errors()
                ),
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error=ErrorKind.INTERNAL.value,
                detail=str(exc) if settings.debug else "An error occurred",
            ).model_dump(),
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.server:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
    )
