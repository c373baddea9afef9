"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_request(self, method: str, path: str, headers: dict[str, str]) -> None: ...
    def log_redirect(self, path: str, target: str) -> None: ...
    def log_proxy(self, path: str, status: int) -> None: ...
    def log_preflight(self, path: str) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
