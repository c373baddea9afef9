"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from api.errors import make_error_handler
from api.middleware import EasyAuthMiddleware
from core.config import Config, validate
from core.exceptions import AuthProxyError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.routing_service import RoutingService
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create the local dev server with the Easy Auth middleware installed."""
    validate(config)
    limits = httpx.Limits(max_connections=100, max_keepalive_connections=20)
    azure_client = http_client or httpx.AsyncClient(
        timeout=config.easy_auth.timeout,
        limits=limits,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            yield
        finally:
            await azure_client.aclose()

    app = FastAPI(title="Easy Auth Local", version="0.1.0", lifespan=lifespan)

    on_error = make_error_handler(logger)
    app.add_exception_handler(AuthProxyError, on_error)

    service = RoutingService(
        config=config,
        upstream=UpstreamClient(azure_client, timeout=config.easy_auth.timeout),
        header_builder=HeaderBuilder(config.allow_origin),
    )
    app.add_middleware(
        EasyAuthMiddleware,
        service=service,
        logger=logger,
        on_error=on_error,
    )

    if config.server.static_dir:
        app.mount("/", StaticFiles(directory=config.server.static_dir, html=True), name="static")

    return app
