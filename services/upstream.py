"""HTTP client for the real Azure /.auth/ endpoints."""

import json
from typing import Any

import httpx

from core.exceptions import NetworkError, UpstreamError, UpstreamLoginRequired
from core.request_types import PreparedRequest


class UpstreamClient:
    """Issue a single GET to Azure and map the result to data or an AuthProxyError."""

    def __init__(self, client: httpx.AsyncClient, timeout: float = 30.0) -> None:
        self._client = client
        self._timeout = timeout

    async def fetch_json(self, prepared: PreparedRequest) -> Any:
        """Return the decoded JSON body of a successful upstream response."""
        try:
            response = await self._client.get(
                prepared.target_url,
                headers=prepared.headers,
                timeout=self._timeout,
                follow_redirects=False,
            )
        except httpx.TimeoutException:
            raise NetworkError("Upstream timeout") from None
        except httpx.RequestError as e:
            raise NetworkError(f"Upstream connection error: {e}") from None

        if response.is_success:
            return self._decode(response)

        # Assume that all redirects are redirects to the Microsoft login page.
        # Turn these into 401 responses so that they can be handled using XHR.
        if response.status_code == 302:
            raise UpstreamLoginRequired()
        raise UpstreamError(
            f"Request failed with status code {response.status_code}",
            status_code=response.status_code,
        )

    def _decode(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UpstreamError(f"Upstream returned invalid JSON: {e}", status_code=502) from None
