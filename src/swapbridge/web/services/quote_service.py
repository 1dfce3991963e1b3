"""Quote service wrapping the routing engine.

Resolves a route for an HTTP quote request and fills in token symbol and
decimals from the static token list. No transactions are signed or sent.
"""

import logging

from swapbridge.routing.base import Route, RouteSuccess, RoutingResult, TokenRef
from swapbridge.routing.engine import RoutingEngine
from swapbridge.tokens import find_token
from swapbridge.web.contracts.quotes import QuoteRequest

logger = logging.getLogger(__name__)


def _token_ref(chain_id: str, address: str) -> TokenRef:
    token = find_token(chain_id, address)
    if token is None:
        return TokenRef(address=address)
    return TokenRef(address=address, symbol=token.symbol, decimals=token.decimals)


class QuoteService:
    """Service for resolving quotes through the routing engine."""

    def __init__(self, engine: RoutingEngine, default_slippage_bps: int = 50):
        self._engine = engine
        self._default_slippage_bps = default_slippage_bps

    async def get_route(self, request: QuoteRequest) -> RoutingResult:
        """Resolve a route and enrich its token references.

        Args:
            request: Validated quote request

        Returns:
            RouteSuccess with an enriched route, or the engine's RouteFailure
        """
        result = await self._engine.resolve_route(request.to_engine_request(self._default_slippage_bps))
        if not result.success:
            logger.info(f"Quote failed: {result.error.code} - {result.error.message}")
            return result

        return RouteSuccess(route=self._enrich(result.route))

    @staticmethod
    def _enrich(route: Route) -> Route:
        return route.with_tokens(
            from_token=_token_ref(route.from_chain_id, route.from_token.address),
            to_token=_token_ref(route.to_chain_id, route.to_token.address),
        )
