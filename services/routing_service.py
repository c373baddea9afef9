"""Redirect and proxy orchestration for the /.auth/ and /auth/ endpoints."""

from collections.abc import Mapping
from typing import Any

from starlette.requests import cookie_parser

from core.config import Config
from core.cookies import CookieParser, extract_session
from core.exceptions import MissingSession
from core.headers import HeaderBuilder
from core.request_types import PreparedRequest
from services.upstream import UpstreamClient


class RoutingService:
    """Build redirect targets and proxy /auth/ requests to Azure.

    The Azure host is fixed at construction; every URL produced here uses
    https regardless of how the local server is reached.
    """

    def __init__(
        self,
        config: Config,
        upstream: UpstreamClient,
        header_builder: HeaderBuilder | None = None,
        cookie_parser: CookieParser = cookie_parser,
    ) -> None:
        self._host = config.easy_auth.azure_host
        self._upstream = upstream
        self._headers = header_builder or HeaderBuilder(config.allow_origin)
        self._cookie_parser = cookie_parser

    @property
    def header_builder(self) -> HeaderBuilder:
        return self._headers

    def redirect_target(self, path: str, query: str = "") -> str:
        """/.auth/me -> https://{host}/auth/me"""
        return self._url(path[2:], query)

    def prepare_proxy(self, path: str, session: str, query: str = "") -> PreparedRequest:
        """/auth/me -> https://{host}/.auth/me with the session cookie."""
        return PreparedRequest(
            route_name="proxy",
            target_url=self._url("." + path[1:], query),
            headers=self._headers.build_upstream_headers(session),
        )

    async def proxy(self, path: str, headers: Mapping[str, str], query: str = "") -> Any:
        """Forward the session cookie to Azure and return its JSON body."""
        session = extract_session(headers, self._cookie_parser)
        if session is None:
            raise MissingSession()
        prepared = self.prepare_proxy(path, session, query)
        return await self._upstream.fetch_json(prepared)

    def _url(self, rest: str, query: str) -> str:
        url = f"https://{self._host}/{rest}"
        if query:
            url += f"?{query}"
        return url
