"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import StreamingResponse

from core.config import Config
from core.protocols import RequestLogger
from core.request_types import IncomingRequest
from core.urls import normalize_host, raw_target
from ui.log_utils import write_incoming_log


def build_incoming_request(
    request: Request,
    trust_forwarded_host: bool = False,
) -> IncomingRequest:
    """Snapshot the parts of the ASGI request that routing needs."""
    headers = tuple(request.headers.items())
    host = request.headers.get("host", "")
    if trust_forwarded_host:
        host = request.headers.get("x-forwarded-host") or host

    raw_path = request.scope.get("raw_path") or request.url.path.encode("utf-8")
    path = raw_target(raw_path, request.scope.get("query_string", b""))

    has_body = "transfer-encoding" in request.headers or (
        request.headers.get("content-length", "0") not in ("", "0")
    )
    return IncomingRequest(
        method=request.method,
        path=path,
        host=normalize_host(host),
        headers=headers,
        has_body=has_body,
    )


async def handle_render(
    request: Request,
    config: Config,
    logger: RequestLogger,
) -> Response | StreamingResponse:
    """Route any request to the prerender service (crawlers) or index.html (humans)."""
    incoming = build_incoming_request(request, config.proxy.trust_forwarded_host)
    if not incoming.host:
        return Response(
            content='{"error": "Missing Host header"}',
            status_code=400,
            media_type="application/json",
        )

    if config.proxy.debug:
        write_incoming_log(incoming.method, incoming.path, dict(incoming.headers), None)

    routing_service = request.app.state.routing_service
    prepared = routing_service.prepare(incoming)
    upstream = request.app.state.upstream_client

    body = request.stream() if prepared.forward_body else None
    return await upstream.relay(prepared, body, logger)
