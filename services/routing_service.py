"""Routing orchestration for gateway requests."""

from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import IncomingRequest, PreparedRequest
from core.router import RouteDecider
from services.targets import OriginTarget, PrerenderTarget


class RoutingService:
    """Prepare requests for routing to the prerender service or the origin."""

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        decider: RouteDecider,
        header_builder: HeaderBuilder,
        prerender_target: PrerenderTarget | None = None,
        origin_target: OriginTarget | None = None,
    ) -> None:
        self._decider = decider
        self._prerender = prerender_target or PrerenderTarget(
            config, logger, header_builder
        )
        self._origin = origin_target or OriginTarget(
            config, logger, header_builder
        )

    def prepare(self, request: IncomingRequest) -> PreparedRequest:
        """Classify the caller and prepare the matching upstream request."""
        decision = self._decider.classify(request.header("user-agent"))
        if decision.is_crawler:
            return self._prerender.prepare(request, decision.matched_agent)
        return self._origin.prepare(request)
