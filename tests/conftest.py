"""Shared test fixtures."""

import logging
from contextlib import asynccontextmanager

import pytest
import structlog
from httpx import ASGITransport, AsyncClient
from structlog.testing import LogCapture

from reqlog.config import RequestLogConfig
from reqlog.main import create_app


@pytest.fixture
def log_capture():
    """Collects every record the request logger emits."""
    return LogCapture()


@pytest.fixture
def access_logger(log_capture):
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=[log_capture],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
    )


@pytest.fixture
def make_client(access_logger):
    """Async test client factory for an app with a given request log config."""

    @asynccontextmanager
    async def _make(config: RequestLogConfig | None = None):
        app = create_app(config or RequestLogConfig(), access_logger)
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac

    return _make


@pytest.fixture
async def client(make_client):
    """Async test client for the FastAPI app, nothing skipped."""
    async with make_client() as ac:
        yield ac
