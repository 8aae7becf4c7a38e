"""Shared request data types."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IncomingRequest:
    """Snapshot of the inbound request taken before routing.

    ``path`` is the raw path plus query string exactly as received.
    Header names are lowercase; repeated headers keep every occurrence.
    """

    method: str
    path: str
    host: str
    headers: tuple[tuple[str, str], ...] = ()
    has_body: bool = False

    def header(self, name: str, default: str | None = None) -> str | None:
        name = name.lower()
        for key, value in self.headers:
            if key == name:
                return value
        return default

    @property
    def user_agent(self) -> str:
        return self.header("user-agent") or ""


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    route_name: str
    method: str
    target_url: str
    original_url: str
    headers: list[tuple[str, str]] = field(default_factory=list)
    forward_body: bool = False
