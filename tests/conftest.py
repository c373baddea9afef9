"""Shared fixtures for the Easy Auth proxy tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from app import create_app
from core.config import Config, EasyAuthSettings, ServerSettings

AZURE_HOST = "myapp.azurewebsites.net"
LOCAL_ORIGIN = "http://localhost:3000"


class RecordingLogger:
    """RequestLogger that keeps every call for assertions."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str, dict[str, str]]] = []
        self.redirects: list[tuple[str, str]] = []
        self.proxied: list[tuple[str, int]] = []
        self.preflights: list[str] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_request(self, method: str, path: str, headers: dict[str, str]) -> None:
        self.requests.append((method, path, headers))

    def log_redirect(self, path: str, target: str) -> None:
        self.redirects.append((path, target))

    def log_proxy(self, path: str, status: int) -> None:
        self.proxied.append((path, status))

    def log_preflight(self, path: str) -> None:
        self.preflights.append(path)

    def log_error(self, route: str, status: int, message: str) -> None:
        self.errors.append((route, status, message))


@pytest.fixture
def config() -> Config:
    """Provide config pointing at a fake Azure host."""
    return Config(
        server=ServerSettings(port=3000),
        easy_auth=EasyAuthSettings(azure_host=AZURE_HOST, timeout=5.0),
    )


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def app(config: Config, logger: RecordingLogger) -> FastAPI:
    """Provide the app with a couple of routes standing in for the wrapped application."""
    application = create_app(config, logger)

    @application.get("/other/path")
    async def other_path() -> PlainTextResponse:
        return PlainTextResponse("from the app", headers={"X-Handled-By": "app"})

    @application.api_route("/auth/me", methods=["POST"])
    async def post_auth_me() -> PlainTextResponse:
        return PlainTextResponse("posted")

    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client driving the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://localhost:3000") as c:
        yield c
