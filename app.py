"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_render
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.router import RouteDecider
from services.routing_service import RoutingService
from services.upstream import UpstreamClient

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``transport`` replaces the network transport of both upstream clients
    (used by tests to mock the prerender service and the origin).
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = config.upstream
        limits = httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
        )
        timeout = httpx.Timeout(settings.timeout, connect=settings.connect_timeout)
        prerender_client = httpx.AsyncClient(timeout=timeout, limits=limits, transport=transport)
        origin_client = httpx.AsyncClient(timeout=timeout, limits=limits, transport=transport)
        header_builder = HeaderBuilder()
        app.state.upstream_client = UpstreamClient(
            prerender_client,
            origin_client,
            header_builder=header_builder,
            retries=settings.retries,
            chunk_size=settings.chunk_size,
        )
        app.state.routing_service = RoutingService(
            config=config,
            logger=logger,
            decider=RouteDecider(config.routing.bot_agents),
            header_builder=header_builder,
        )
        try:
            yield
        finally:
            await prerender_client.aclose()
            await origin_client.aclose()

    app = FastAPI(
        title="Prerender Gateway",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.api_route("/{path:path}", methods=PROXY_METHODS)
    async def render(request: Request):
        return await handle_render(request, config, logger)

    return app
