"""HTTP proxying utilities for upstream requests."""

import json
from typing import AsyncIterator

import httpx
from fastapi import Response
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from core.exceptions import UpstreamConnectionError, UpstreamError, UpstreamTimeoutError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import PreparedRequest
from services.targets import ORIGIN_ROUTE, PRERENDER_ROUTE


class UpstreamClient:
    """Relay requests to upstream services, streaming the response back."""

    def __init__(
        self,
        prerender_client: httpx.AsyncClient,
        origin_client: httpx.AsyncClient,
        *,
        header_builder: HeaderBuilder | None = None,
        retries: int = 1,
        chunk_size: int = 64 * 1024,
    ) -> None:
        self._clients = {
            PRERENDER_ROUTE: prerender_client,
            ORIGIN_ROUTE: origin_client,
        }
        self._headers = header_builder or HeaderBuilder()
        self._retries = retries
        self._chunk_size = chunk_size

    async def relay(
        self,
        prepared: PreparedRequest,
        body: AsyncIterator[bytes] | None,
        logger: RequestLogger,
    ) -> Response | StreamingResponse:
        """Send the prepared request and stream the upstream response back verbatim.

        Non-2xx upstream answers are relayed unchanged. Only failures that
        leave no response at all become 502/504 errors.
        """
        try:
            response = await self._send(prepared, body)
        except UpstreamError as e:
            logger.log_error(prepared.route_name, e.status_code or 502, str(e))
            return Response(
                content=json.dumps({"error": str(e)}),
                status_code=e.status_code or 502,
                media_type="application/json",
            )

        if response.status_code >= 400:
            logger.log_error(
                prepared.route_name,
                response.status_code,
                f"{prepared.method} {prepared.target_url}",
            )

        streaming = StreamingResponse(
            response.aiter_raw(self._chunk_size),
            status_code=response.status_code,
            background=BackgroundTask(self._cleanup_streaming, response),
        )
        # Raw bytes are relayed, so upstream framing headers stay valid
        streaming.raw_headers = self._headers.filter_response_headers(response.headers.raw)
        return streaming

    async def _send(
        self,
        prepared: PreparedRequest,
        body: AsyncIterator[bytes] | None,
    ) -> httpx.Response:
        """Open the upstream response stream, retrying refused connections."""
        client = self._client_for(prepared.route_name)
        content = body if prepared.forward_body else None
        # A streamed request body cannot be replayed
        attempts = 1 if content is not None else self._retries + 1

        for attempt in range(1, attempts + 1):
            request = client.build_request(
                prepared.method,
                prepared.target_url,
                headers=prepared.headers,
                content=content,
            )
            try:
                return await client.send(request, stream=True)
            except httpx.TimeoutException as e:
                raise UpstreamTimeoutError(
                    f"Upstream timeout: {prepared.target_url}",
                    provider=prepared.route_name,
                ) from e
            except httpx.ConnectError as e:
                if attempt < attempts:
                    continue
                raise UpstreamConnectionError(
                    f"Upstream connection error: {e}",
                    provider=prepared.route_name,
                ) from e
            except httpx.RequestError as e:
                raise UpstreamConnectionError(
                    f"Upstream connection error: {e}",
                    provider=prepared.route_name,
                ) from e

        raise UpstreamConnectionError("No upstream attempt made", provider=prepared.route_name)

    async def _cleanup_streaming(self, response: httpx.Response) -> None:
        """Clean up streaming resources."""
        await response.aclose()

    def _client_for(self, route_name: str) -> httpx.AsyncClient:
        """Select the appropriate cached client."""
        return self._clients.get(route_name, self._clients[ORIGIN_ROUTE])
