"""Upstream target handlers for the prerender service and the site origin."""

from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import IncomingRequest, PreparedRequest
from core.urls import index_url, original_url, prerender_url

PRERENDER_ROUTE = "prerender"
ORIGIN_ROUTE = "origin"


class PrerenderTarget:
    """Prerender-specific request preparation."""

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        header_builder: HeaderBuilder,
    ) -> None:
        self._config = config
        self._logger = logger
        self._headers = header_builder

    def prepare(
        self,
        request: IncomingRequest,
        matched_agent: str | None = None,
    ) -> PreparedRequest:
        """Forward the caller's request to the prerender service."""
        page_url = original_url(request.host, request.path, self._config.routing.site_scheme)
        upstream_headers = self._headers.build_prerender_headers(
            request.headers,
            self._config.prerender.token,
        )
        self._logger.log_crawler(page_url, request.user_agent, matched_agent)
        return PreparedRequest(
            route_name=PRERENDER_ROUTE,
            method=request.method,
            target_url=prerender_url(self._config.prerender.service_url, page_url),
            original_url=page_url,
            headers=upstream_headers,
            forward_body=request.has_body,
        )


class OriginTarget:
    """Static origin request preparation (serves the app shell)."""

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        header_builder: HeaderBuilder,
    ) -> None:
        self._config = config
        self._logger = logger
        self._headers = header_builder

    def prepare(self, request: IncomingRequest) -> PreparedRequest:
        """Fetch the site's index.html regardless of the requested path."""
        routing = self._config.routing
        page_url = original_url(request.host, request.path, routing.site_scheme)
        self._logger.log_human(page_url, request.user_agent)
        return PreparedRequest(
            route_name=ORIGIN_ROUTE,
            method="GET",
            target_url=index_url(request.host, routing.index_path, routing.site_scheme),
            original_url=page_url,
            headers=self._headers.build_origin_headers(),
        )
