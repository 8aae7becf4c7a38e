"""Request classification - decides crawler vs human visitor."""

from dataclasses import dataclass
from typing import Iterable, Literal

from core.config import BOT_AGENTS

Route = Literal["crawler", "human"]


@dataclass(frozen=True)
class RouteDecision:
    """Routing decision for a request."""

    route: Route
    matched_agent: str | None = None

    @property
    def is_crawler(self) -> bool:
        return self.route == "crawler"


class RouteDecider:
    """Classify callers by substring match against known bot user agents."""

    def __init__(self, bot_agents: Iterable[str] | None = None):
        agents = BOT_AGENTS if bot_agents is None else bot_agents
        self.bot_agents: tuple[str, ...] = tuple(a.lower() for a in agents if a)

    def classify(self, user_agent: str | None) -> RouteDecision:
        """Return the route for a User-Agent header value (None means absent)."""
        normalized = (user_agent or "").lower()
        for agent in self.bot_agents:
            if agent in normalized:
                return RouteDecision(route="crawler", matched_agent=agent)
        return RouteDecision(route="human")
