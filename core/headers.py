"""Header construction for upstream requests and CORS responses."""

from core.exceptions import SESSION_COOKIE

APPLICATION_JSON = "application/json"


class HeaderBuilder:
    """Build upstream and CORS headers."""

    def __init__(self, allow_origin: str) -> None:
        self.allow_origin = allow_origin

    def build_upstream_headers(self, session: str) -> dict[str, str]:
        """Only Accept and the session cookie; nothing else is forwarded."""
        return {
            "Accept": APPLICATION_JSON,
            "Cookie": f"{SESSION_COOKIE}={session}",
        }

    def build_cors_headers(self) -> dict[str, str]:
        """Credentialed CORS headers for the configured local origin."""
        return {
            "Access-Control-Allow-Credentials": "true",
            "Access-Control-Allow-Origin": self.allow_origin,
            "Access-Control-Allow-Methods": "GET, OPTIONS",
        }
