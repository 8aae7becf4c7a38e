"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard or ConsoleLogger)."""

    def log_crawler(self, url: str, user_agent: str, matched_agent: str | None) -> None: ...
    def log_human(self, url: str, user_agent: str) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
