"""Custom exception hierarchy for the prerender gateway."""


class ProxyError(Exception):
    """Base exception for all gateway errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class UpstreamError(ProxyError):
    """Raised when an upstream request fails before a response arrives.

    Attributes:
        message: Error message
        status_code: HTTP status code to answer the caller with (optional)
        provider: Upstream name (e.g., 'prerender', 'origin')
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        provider: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.provider = provider


class UpstreamTimeoutError(UpstreamError):
    """Raised when an upstream request times out."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
    ) -> None:
        super().__init__(message, status_code=504, provider=provider)


class UpstreamConnectionError(UpstreamError):
    """Raised when unable to connect to an upstream."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
    ) -> None:
        super().__init__(message, status_code=502, provider=provider)
