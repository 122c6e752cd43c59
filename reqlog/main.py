"""reqlog demo service: a FastAPI app wired with the request logger."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reqlog.api import orders
from reqlog.config import RequestLogConfig, settings
from reqlog.core.logging import build_logger, configure_logging
from reqlog.core.middleware import RequestLoggingMiddleware, attach_error

configure_logging(level=settings.log_level, development=settings.log_development)
logger = structlog.get_logger()

request_log_config = RequestLogConfig.from_settings(settings)
request_logger = build_logger(
    level=request_log_config.level,
    development=request_log_config.development,
    utc=request_log_config.utc,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    logger.info("Starting reqlog demo service", env=settings.app_env)
    yield
    logger.info("Shutting down reqlog demo service")


def create_app(config: RequestLogConfig | None = None, access_logger=None) -> FastAPI:
    """Build the app with its own request logger configuration."""
    app = FastAPI(
        title="reqlog demo",
        description="Demo service for the request logging middleware",
        version="0.1.0",
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # ── Middleware ─────────────────────────────────────
    app.add_middleware(
        RequestLoggingMiddleware,
        config=config or request_log_config,
        logger=access_logger if access_logger is not None else request_logger,
    )

    # ── Error handlers ─────────────────────────────────
    @app.exception_handler(StarletteHTTPException)
    async def attach_http_error(request: Request, exc: StarletteHTTPException):
        attach_error(request, str(exc.detail))
        return await http_exception_handler(request, exc)

    # ── Health Check ──────────────────────────────────
    @app.get("/health", tags=["system"])
    async def health_check():
        """Liveness probe: always healthy while the process is running."""
        return {"status": "healthy", "version": "0.1.0"}

    @app.get("/ready", tags=["system"])
    async def readiness_check():
        """Readiness probe."""
        return {"status": "ready", "checks": {"api": "ok"}}

    @app.get("/crash", tags=["system"])
    async def crash(request: Request):
        """Always fails; used to exercise error-level records."""
        attach_error(request, "db timeout")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # ── API Routes ────────────────────────────────────
    app.include_router(orders.router, prefix="/orders", tags=["orders"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="warning")
