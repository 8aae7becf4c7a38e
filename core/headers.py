"""Header construction for upstream requests and relayed responses."""

from typing import Iterable

PRERENDER_TOKEN_HEADER = "X-Prerender-Token"

# RFC 9110 connection-specific headers, never forwarded by a proxy
HOP_BY_HOP = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "proxy-connection",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


class HeaderBuilder:
    """Build upstream headers for different targets."""

    def build_prerender_headers(
        self,
        headers: Iterable[tuple[str, str]],
        token: str,
    ) -> list[tuple[str, str]]:
        """Pass through the caller's headers and add the prerender token."""
        upstream: list[tuple[str, str]] = []
        for key, value in headers:
            key_lower = key.lower()
            if key_lower in HOP_BY_HOP or key_lower == "host":
                continue
            if key_lower == PRERENDER_TOKEN_HEADER.lower():
                continue
            upstream.append((key, value))
        upstream.append((PRERENDER_TOKEN_HEADER, token))
        return upstream

    def build_origin_headers(self) -> list[tuple[str, str]]:
        """The static origin fetch carries no caller headers."""
        return []

    def filter_response_headers(
        self,
        raw_headers: Iterable[tuple[bytes, bytes]],
    ) -> list[tuple[bytes, bytes]]:
        """Drop hop-by-hop headers from an upstream response."""
        return [
            (key, value)
            for key, value in raw_headers
            if key.decode("latin-1").lower() not in HOP_BY_HOP
        ]
