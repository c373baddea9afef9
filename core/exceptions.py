"""Custom exception hierarchy for the Easy Auth local proxy."""

from enum import Enum

SESSION_COOKIE = "AppServiceAuthSession"

DEV_MODE_MESSAGE = (
    "It looks like you are in development mode and are probably running on your "
    "localhost. You must first sign into your Azure web site so the appropriate "
    "cookies are set. In production mode, when running on Azure, you would have "
    "automatically been redirected to the login page."
)


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class ErrorKind(str, Enum):
    MISSING_SESSION = "MissingSession"
    UPSTREAM_LOGIN_REQUIRED = "UpstreamLoginRequired"
    UPSTREAM_ERROR = "UpstreamError"
    NETWORK_ERROR = "NetworkError"


class AuthProxyError(ProxyError):
    """Failure of a proxied /auth/ request, rendered by the error handler.

    Attributes:
        kind: Which of the proxy failure modes occurred
        status_code: HTTP status returned to the browser
        message: Error message returned to the browser
    """

    kind: ErrorKind

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class MissingSession(AuthProxyError):
    """Raised when the request carries no session cookie."""

    kind = ErrorKind.MISSING_SESSION

    def __init__(self) -> None:
        super().__init__(f"No {SESSION_COOKIE} cookie in request.", status_code=400)


class UpstreamLoginRequired(AuthProxyError):
    """Raised when Azure answers with a redirect to its login page."""

    kind = ErrorKind.UPSTREAM_LOGIN_REQUIRED

    def __init__(self) -> None:
        super().__init__(DEV_MODE_MESSAGE, status_code=401)


class UpstreamError(AuthProxyError):
    """Raised when Azure returns any other non-success status."""

    kind = ErrorKind.UPSTREAM_ERROR


class NetworkError(AuthProxyError):
    """Raised when no response was received from Azure at all."""

    kind = ErrorKind.NETWORK_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500)
