"""Request logging middleware: one structured record per HTTP exchange."""

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from reqlog.config import RequestLogConfig
from reqlog.core.filters import normalize_path
from reqlog.core.logging import build_logger

DEFAULT_MESSAGE = "Request"


def attach_error(request: Request, message: str) -> None:
    """Attach an error message to the current exchange.

    Attached messages replace the default record message, joined with ``;``.
    """
    errors = getattr(request.state, "errors", None)
    if errors is None:
        errors = []
        request.state.errors = errors
    errors.append(message)


def client_ip(request: Request) -> str:
    """Best-effort client address: X-Forwarded-For, X-Real-IP, then the peer."""
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip
    return request.client.host if request.client else ""


def level_for_status(status_code: int) -> str:
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "warning"
    return "info"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with status, method, normalized path, client and latency.

    The logger is injected; when omitted, one is built from ``config``. Requests
    matching a skip rule are passed through without a record.
    """

    def __init__(self, app, config: RequestLogConfig | None = None, logger: Any = None):
        super().__init__(app)
        self.config = config or RequestLogConfig()
        self.rules = self.config.skip_rules
        self.logger = logger if logger is not None else build_logger(
            level=self.config.level,
            development=self.config.development,
            utc=self.config.utc,
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        path = request.url.path
        query = request.url.query

        try:
            response = await call_next(request)
        except Exception as exc:
            attach_error(request, str(exc) or type(exc).__name__)
            self._log(request, 500, path, query, start)
            raise

        self._log(request, response.status_code, path, query, start)
        return response

    def _log(self, request: Request, status_code: int, path: str, query: str, start: float) -> None:
        path = normalize_path(path, request.path_params, query)
        if self.rules.should_skip(request.method, path):
            return

        latency = time.perf_counter() - start
        end = datetime.now(timezone.utc) if self.config.utc else datetime.now().astimezone()

        errors = getattr(request.state, "errors", None)
        message = ";".join(errors) if errors else DEFAULT_MESSAGE

        if self.config.profile == "full":
            fields = {
                "status": status_code,
                "method": request.method,
                "path": path,
                "ip": client_ip(request),
                "user_agent": request.headers.get("user-agent", ""),
                "latency": latency,
                "time": end.isoformat(),
            }
        else:
            fields = {
                "s": status_code,
                "m": request.method,
                "p": path,
                "i": client_ip(request),
                "l": latency,
            }

        getattr(self.logger, level_for_status(status_code))(message, **fields)
