"""Request classification - decides how the middleware handles a request."""

from dataclasses import dataclass
from enum import Enum

# Dotted prefix: Azure's own endpoints, faked locally and redirected
FAKE_PREFIX = "/.auth/"
# Non-dotted prefix: served by the deployed middleware and proxied
PROXY_PREFIX = "/auth/"


class Mode(str, Enum):
    PASS_THROUGH = "pass-through"
    REDIRECT = "redirect"
    PROXY = "proxy"
    PREFLIGHT = "preflight"


@dataclass(frozen=True)
class RouteDecision:
    """Routing decision for a request."""

    mode: Mode
    path: str

    @property
    def intercepted(self) -> bool:
        return self.mode is not Mode.PASS_THROUGH


class RouteDecider:
    """Decide whether a request is redirected, proxied, preflighted or passed on."""

    def decide(self, method: str, path: str) -> RouteDecision:
        """Return the handling mode for a method and path.

        Matching is a literal prefix test including the trailing slash, so
        ``/.auth`` and ``/auth`` on their own are passed through.
        """
        if method == "GET":
            if path.startswith(FAKE_PREFIX):
                return RouteDecision(Mode.REDIRECT, path)
            if path.startswith(PROXY_PREFIX):
                return RouteDecision(Mode.PROXY, path)
        elif method == "OPTIONS" and path.startswith(PROXY_PREFIX):
            return RouteDecision(Mode.PREFLIGHT, path)
        return RouteDecision(Mode.PASS_THROUGH, path)
