"""Session cookie extraction."""

from collections.abc import Callable, Mapping

from starlette.requests import cookie_parser

from core.exceptions import SESSION_COOKIE

CookieParser = Callable[[str], Mapping[str, str]]


def extract_session(
    headers: Mapping[str, str],
    parser: CookieParser = cookie_parser,
) -> str | None:
    """Return the AppServiceAuthSession value, or None when absent or empty."""
    cookie_header = headers.get("cookie")
    if not cookie_header:
        return None
    return parser(cookie_header).get(SESSION_COOKIE) or None
