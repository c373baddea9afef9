"""Pure ASGI middleware serving the fake /.auth/ and proxy /auth/ endpoints.

During local development the web app calls host-relative /.auth/* URLs.
Those are redirected to the deployed app's /auth/* endpoints, which proxy
to Azure's real /.auth/* endpoints with the session cookie and add the
credentialed CORS headers Azure itself never sends. Everything else is
passed to the wrapped application untouched.
"""

from starlette.datastructures import Headers
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from starlette.types import ASGIApp, Receive, Scope, Send

from api.errors import ErrorHandler
from core.exceptions import AuthProxyError
from core.protocols import RequestLogger
from core.router import Mode, RouteDecider
from services.routing_service import RoutingService


class EasyAuthMiddleware:
    """Redirect /.auth/, proxy /auth/ and answer its preflights."""

    def __init__(
        self,
        app: ASGIApp,
        service: RoutingService,
        logger: RequestLogger,
        on_error: ErrorHandler,
        decider: RouteDecider | None = None,
    ) -> None:
        self.app = app
        self._service = service
        self._logger = logger
        self._on_error = on_error
        self._decider = decider or RouteDecider()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        decision = self._decider.decide(scope["method"], _raw_path(scope))
        if not decision.intercepted:
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        self._logger.log_request(scope["method"], decision.path, dict(headers))
        query = scope.get("query_string", b"").decode("latin-1")

        if decision.mode is Mode.REDIRECT:
            response = self._redirect(decision.path, query)
        elif decision.mode is Mode.PREFLIGHT:
            response = self._preflight(decision.path)
        else:
            try:
                response = await self._proxy(decision.path, headers, query)
            except AuthProxyError as exc:
                response = await self._on_error(Request(scope, receive), exc)

        await response(scope, receive, send)

    def _redirect(self, path: str, query: str) -> Response:
        target = self._service.redirect_target(path, query)
        self._logger.log_redirect(path, target)
        return RedirectResponse(
            target,
            status_code=302,
            headers=self._service.header_builder.build_cors_headers(),
        )

    async def _proxy(self, path: str, headers: Headers, query: str) -> Response:
        data = await self._service.proxy(path, headers, query)
        self._logger.log_proxy(path, 200)
        return JSONResponse(
            content=data,
            status_code=200,
            headers=self._service.header_builder.build_cors_headers(),
        )

    def _preflight(self, path: str) -> Response:
        self._logger.log_preflight(path)
        headers = self._service.header_builder.build_cors_headers()
        headers["Content-Length"] = "0"
        return Response(status_code=204, headers=headers)


def _raw_path(scope: Scope) -> str:
    """Path as sent by the client, percent-escapes intact."""
    raw_path = scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1")
    return scope["path"]
