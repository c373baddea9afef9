"""Error pipeline: renders AuthProxyError as a JSON error response."""

from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import JSONResponse

from core.exceptions import AuthProxyError
from core.protocols import RequestLogger

ErrorHandler = Callable[[Request, AuthProxyError], Awaitable[JSONResponse]]


def make_error_handler(logger: RequestLogger) -> ErrorHandler:
    """Build the handler shared by the middleware and FastAPI's exception handlers."""

    async def auth_error_response(request: Request, exc: AuthProxyError) -> JSONResponse:
        logger.log_error(exc.kind.value, exc.status_code, exc.message)
        return JSONResponse(
            content={"error": exc.message, "kind": exc.kind.value},
            status_code=exc.status_code,
        )

    return auth_error_response
