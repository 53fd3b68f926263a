"""FastAPI application entry point.

Trade Show Portal API - order portals plus ERP/carrier sync.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from tradeshow.routes import api_router
from tradeshow.schemas import ErrorResponse
from tradeshow.services.apparelmagic_client import ApparelMagicClient
from tradeshow.services.attachments import ensure_upload_dir
from tradeshow.services.portals import PortalError
from tradeshow.services.shipstation_client import ShipStationClient
from tradeshow.services.sync_engine import SyncClients
from tradeshow.settings import get_settings
from tradeshow.stores.postgres import close_db, init_db, ping_db
from tradeshow.stores.redis import close_redis, init_redis

logger = logging.getLogger("uvicorn.error")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open DB, Redis and remote API clients for the app's lifetime."""
    # Startup
    try:
        await init_db()
        await ping_db()
        logger.info("Postgres connected")
    except Exception:
        logger.exception("Postgres init failed")

    # Redis only guards sync runs; the API works without it
    try:
        await init_redis()
    except Exception:
        logger.exception("Redis init failed, sync locks disabled")

    clients = SyncClients(apparelmagic=ApparelMagicClient(), shipstation=ShipStationClient())
    app.state.sync_clients = clients

    yield

    # Shutdown
    if clients.apparelmagic:
        await clients.apparelmagic.close()
    if clients.shipstation:
        await clients.shipstation.close()
    await close_redis()
    await close_db()


def create_app() -> FastAPI:
    """Build the app: middleware, error envelope handlers, routers and the upload mount."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Trade show order portals with ApparelMagic and ShipStation sync",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
        return _error(exc.status_code, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        messages = [f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}" for err in exc.errors()]
        return _error(400, "; ".join(messages) or "Invalid request")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning the {success, error} envelope."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(500, str(exc) if settings.debug else "Internal server error")

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        return {"ok": True}

    app.include_router(api_router)

    # Uploaded portal attachments
    if settings.upload_public_base_url.startswith("/"):
        ensure_upload_dir()
        app.mount(
            settings.upload_public_base_url.rstrip("/"),
            StaticFiles(directory=settings.upload_dir),
            name="attachments",
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "tradeshow.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
