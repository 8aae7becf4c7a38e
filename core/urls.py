"""URL construction for the site origin and the prerender service."""

from urllib.parse import quote, quote_from_bytes

# RFC 3986 reserved characters plus "%" so existing escapes survive
_URL_SAFE = ":/?#[]@!$&'()*+,;=%~"


def raw_target(raw_path: bytes, query_string: bytes = b"") -> str:
    """Path and query from the request line, percent-encoding any non-URL bytes.

    Works on the raw bytes so UTF-8 paths are escaped exactly once.
    """
    path = quote_from_bytes(raw_path, safe=_URL_SAFE)
    if query_string:
        path = f"{path}?{quote_from_bytes(query_string, safe=_URL_SAFE)}"
    return path


def normalize_host(raw_host: str) -> str:
    """Strip whitespace and any port from a Host / X-Forwarded-Host value."""
    host = raw_host.split(",", 1)[0].strip()
    if host.startswith("["):
        # IPv6 literal, keep the brackets
        end = host.find("]")
        return host[: end + 1] if end != -1 else host
    if ":" in host:
        host = host.rsplit(":", 1)[0]
    return host


def site_url(host: str, scheme: str = "https") -> str:
    return f"{scheme}://{host}"


def original_url(host: str, path: str, scheme: str = "https") -> str:
    """Absolute URL of the inbound request on the public site."""
    if not path.startswith("/"):
        path = "/" + path
    return site_url(host, scheme) + path


def prerender_url(service_url: str, url: str) -> str:
    """Target URL for the prerender service.

    The page URL is appended to the service URL as-is; characters that
    cannot appear in a URL (spaces, non-ASCII, quotes) are percent-encoded.
    """
    return f"{service_url.rstrip('/')}/{quote(url, safe=_URL_SAFE)}"


def index_url(host: str, index_path: str = "/index.html", scheme: str = "https") -> str:
    if not index_path.startswith("/"):
        index_path = "/" + index_path
    return site_url(host, scheme) + index_path
