"""Mode rules: validate a from/to selection against the active trading mode.

- SWAP_ONLY: same chain required.
- BRIDGE_ONLY: different chains required. Token pairs are not inspected; any
  swap-on-route requirement is left to the bridge adapter.
- AUTO: always passes pre-validation.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from swapbridge.routing.base import ErrorCode, Mode, RoutingError


@dataclass(frozen=True)
class ModeValidationResult:
    valid: bool
    error: Optional[RoutingError] = None


@dataclass(frozen=True)
class RouteClassification:
    route_type: Literal["swap", "bridge"]
    reason: str


def validate_mode(
    mode: Mode,
    from_chain_id: str,
    to_chain_id: str,
    from_token_address: str = "",
    to_token_address: str = "",
) -> ModeValidationResult:
    """Enforce mode rules before requesting a quote."""
    same_chain = from_chain_id == to_chain_id

    if mode == Mode.SWAP_ONLY and not same_chain:
        return ModeValidationResult(
            valid=False,
            error=RoutingError(
                code=ErrorCode.MODE_SWAP_CROSS_CHAIN.value,
                message="Swap-only mode requires the same chain on both sides.",
            ),
        )

    if mode == Mode.BRIDGE_ONLY and same_chain:
        return ModeValidationResult(
            valid=False,
            error=RoutingError(
                code=ErrorCode.MODE_BRIDGE_SAME_CHAIN.value,
                message="Bridge-only mode requires different chains.",
            ),
        )

    return ModeValidationResult(valid=True)


def resolve_auto_route_type(from_chain_id: str, to_chain_id: str) -> RouteClassification:
    """Classify an AUTO request as a same-chain swap or a cross-chain bridge."""
    if from_chain_id == to_chain_id:
        return RouteClassification(
            route_type="swap",
            reason=f"Same chain ({from_chain_id}), using swap adapter.",
        )
    return RouteClassification(
        route_type="bridge",
        reason=f"Cross-chain ({from_chain_id} -> {to_chain_id}), using bridge adapter.",
    )
