"""Routing engine: resolves a QuoteRequest into a Route or a RoutingError.

The engine never talks to a network itself. It validates the request, picks
exactly one registered adapter and normalizes the adapter's answer into the
common Route shape.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from swapbridge.chains import (
    CANTON_CHAIN_ID,
    NATIVE_TOKEN_ADDRESS,
    SUI_CHAIN_ID,
    ChainId,
    get_chain,
    is_canton_chain,
    is_evm_chain,
    is_solana_chain,
    is_sui_chain,
)
from swapbridge.routing.base import (
    AdapterBridgeParams,
    AdapterQuoteParams,
    BridgeAdapter,
    ErrorCode,
    Mode,
    QuoteRequest,
    Route,
    RouteFailure,
    RouteStep,
    RouteSuccess,
    RouteType,
    RoutingError,
    RoutingResult,
    StepStatus,
    StepType,
    SwapAdapter,
    TokenRef,
)
from swapbridge.routing.modes import resolve_auto_route_type, validate_mode

logger = logging.getLogger(__name__)

# Upstream error bodies can be arbitrarily long
MAX_ERROR_MESSAGE_LENGTH = 300

_clock_lock = threading.Lock()
_last_created_at = 0


def _now_ms() -> int:
    """Epoch milliseconds, never lower than a previously returned value."""
    global _last_created_at
    with _clock_lock:
        now = int(time.time() * 1000)
        if now < _last_created_at:
            now = _last_created_at
        _last_created_at = now
        return now


def _truncate(message: str) -> str:
    if len(message) <= MAX_ERROR_MESSAGE_LENGTH:
        return message
    return message[:MAX_ERROR_MESSAGE_LENGTH]


def _failure(code: ErrorCode, message: str) -> RouteFailure:
    return RouteFailure(error=RoutingError(code=code.value, message=message))


@dataclass
class RouterDependencies:
    """Adapters available to the engine, one slot per chain family and bridge kind.

    Populated once at startup; registering into a slot again replaces the
    previous adapter.
    """

    evm_swap_adapter: Optional[SwapAdapter] = None
    solana_swap_adapter: Optional[SwapAdapter] = None
    sui_swap_adapter: Optional[SwapAdapter] = None
    canton_swap_adapter: Optional[SwapAdapter] = None
    bridge_adapter: Optional[BridgeAdapter] = None
    canton_bridge_adapter: Optional[BridgeAdapter] = None
    sui_bridge_adapter: Optional[BridgeAdapter] = None

    def register_evm_swap_adapter(self, adapter: SwapAdapter) -> None:
        self.evm_swap_adapter = adapter

    def register_solana_swap_adapter(self, adapter: SwapAdapter) -> None:
        self.solana_swap_adapter = adapter

    def register_sui_swap_adapter(self, adapter: SwapAdapter) -> None:
        self.sui_swap_adapter = adapter

    def register_canton_swap_adapter(self, adapter: SwapAdapter) -> None:
        self.canton_swap_adapter = adapter

    def register_bridge_adapter(self, adapter: BridgeAdapter) -> None:
        self.bridge_adapter = adapter

    def register_canton_bridge_adapter(self, adapter: BridgeAdapter) -> None:
        self.canton_bridge_adapter = adapter

    def register_sui_bridge_adapter(self, adapter: BridgeAdapter) -> None:
        self.sui_bridge_adapter = adapter

    def summary(self) -> dict[str, Optional[str]]:
        """Registered adapter name per slot (None when empty)."""
        return {
            "evm_swap": self.evm_swap_adapter.name if self.evm_swap_adapter else None,
            "solana_swap": self.solana_swap_adapter.name if self.solana_swap_adapter else None,
            "sui_swap": self.sui_swap_adapter.name if self.sui_swap_adapter else None,
            "canton_swap": self.canton_swap_adapter.name if self.canton_swap_adapter else None,
            "bridge": self.bridge_adapter.name if self.bridge_adapter else None,
            "canton_bridge": self.canton_bridge_adapter.name if self.canton_bridge_adapter else None,
            "sui_bridge": self.sui_bridge_adapter.name if self.sui_bridge_adapter else None,
        }


class RoutingEngine:
    """Deterministic route resolver over a set of registered adapters."""

    def __init__(self, dependencies: Optional[RouterDependencies] = None):
        self.dependencies = dependencies or RouterDependencies()

    async def resolve_route(self, request: QuoteRequest) -> RoutingResult:
        """Resolve a quote request into a route.

        Expected failures (unknown chain, mode violation, missing adapter,
        adapter-reported failure) come back as RouteFailure. Exceptions raised
        by an adapter are not caught here.
        """
        logger.debug(
            f"Resolving route {request.from_chain_id} -> {request.to_chain_id} "
            f"mode={request.mode.value} amount={request.amount}"
        )

        # 1. Validate chains exist
        if get_chain(request.from_chain_id) is None:
            logger.info(f"Rejected route: unsupported source chain {request.from_chain_id!r}")
            return _failure(
                ErrorCode.INVALID_FROM_CHAIN,
                f"Unsupported source chain: {request.from_chain_id}",
            )
        if get_chain(request.to_chain_id) is None:
            logger.info(f"Rejected route: unsupported destination chain {request.to_chain_id!r}")
            return _failure(
                ErrorCode.INVALID_TO_CHAIN,
                f"Unsupported destination chain: {request.to_chain_id}",
            )

        # 2. Validate mode constraints
        mode_check = validate_mode(
            request.mode,
            request.from_chain_id,
            request.to_chain_id,
            request.from_token_address,
            request.to_token_address,
        )
        if not mode_check.valid:
            logger.info(f"Rejected route: {mode_check.error.code}")
            return RouteFailure(error=mode_check.error)

        # 3. Determine route type
        if request.mode == Mode.SWAP_ONLY:
            route_type, route_reason = "swap", "Swap-only mode selected."
        elif request.mode == Mode.BRIDGE_ONLY:
            route_type, route_reason = "bridge", "Bridge-only mode selected."
        else:
            classification = resolve_auto_route_type(request.from_chain_id, request.to_chain_id)
            route_type, route_reason = classification.route_type, classification.reason

        # 4. Delegate to the adapter
        if route_type == "swap":
            return await self._handle_swap(request, route_reason)
        return await self._handle_bridge(request, route_reason)

    def _select_swap_adapter(self, chain_id: str) -> tuple[bool, Optional[SwapAdapter]]:
        """Return (family known, adapter in that family's slot)."""
        deps = self.dependencies
        if is_solana_chain(chain_id):
            return True, deps.solana_swap_adapter
        if is_sui_chain(chain_id):
            return True, deps.sui_swap_adapter
        if is_evm_chain(chain_id):
            return True, deps.evm_swap_adapter
        if is_canton_chain(chain_id):
            return True, deps.canton_swap_adapter
        return False, None

    def _select_bridge_adapter(self, from_chain_id: str, to_chain_id: str) -> Optional[BridgeAdapter]:
        deps = self.dependencies
        involved = (from_chain_id, to_chain_id)
        if CANTON_CHAIN_ID in involved and deps.canton_bridge_adapter is not None:
            return deps.canton_bridge_adapter
        if SUI_CHAIN_ID in involved and deps.sui_bridge_adapter is not None:
            return deps.sui_bridge_adapter
        return deps.bridge_adapter

    async def _handle_swap(self, request: QuoteRequest, route_reason: str) -> RoutingResult:
        chain_id = request.from_chain_id

        known_family, adapter = self._select_swap_adapter(chain_id)
        if not known_family:
            logger.info(f"No swap adapter concept for chain {chain_id}")
            return _failure(ErrorCode.NO_ADAPTER, f"No swap adapter for chain {chain_id}")
        if adapter is None:
            logger.warning(f"Swap adapter slot for chain {chain_id} is empty")
            return _failure(ErrorCode.ADAPTER_NOT_REGISTERED, "Swap adapter not initialized.")

        logger.info(f"Using swap adapter {adapter.name} on chain {chain_id}")
        result = await adapter.get_quote(
            AdapterQuoteParams(
                chain_id=chain_id,
                from_token_address=request.from_token_address,
                to_token_address=request.to_token_address,
                amount=request.amount,
                slippage_bps=request.slippage_bps,
                sender_address=request.sender_address,
            )
        )

        if not result.success or not result.to_amount:
            message = _truncate(result.error) if result.error else "Failed to get swap quote."
            logger.warning(f"{adapter.name} quote failed: {message}")
            return _failure(ErrorCode.QUOTE_FAILED, message)

        steps = []
        is_native_from = request.from_token_address.lower() == NATIVE_TOKEN_ADDRESS.lower()

        # ERC-20 sources need an allowance before the swap
        if is_evm_chain(chain_id) and not is_native_from:
            steps.append(
                RouteStep(
                    id=f"step-approve-{uuid4()}",
                    type=StepType.APPROVE,
                    description="Approve token spending",
                    chain_id=chain_id,
                    tool=adapter.name,
                    status=StepStatus.PENDING,
                )
            )

        steps.append(
            RouteStep(
                id=f"step-swap-{uuid4()}",
                type=StepType.SWAP,
                description=f"Swap via {adapter.name}",
                chain_id=chain_id,
                tool=adapter.name,
                transaction_data=result.transaction_data,
                status=StepStatus.PENDING,
            )
        )

        route = Route(
            route_id=str(uuid4()),
            mode=request.mode,
            route_type=RouteType.SWAP,
            provider=adapter.name,
            from_chain_id=ChainId(chain_id),
            to_chain_id=ChainId(chain_id),
            from_token=TokenRef(address=request.from_token_address),
            to_token=TokenRef(address=request.to_token_address),
            from_amount=request.amount,
            to_amount=result.to_amount,
            to_amount_min=result.to_amount_min or result.to_amount,
            steps=tuple(steps),
            fees=tuple(result.fees or ()),
            exchange_rate=result.exchange_rate,
            price_impact=result.price_impact,
            estimated_gas=result.estimated_gas,
            route_reason=route_reason,
            created_at=_now_ms(),
        )
        return RouteSuccess(route=route)

    async def _handle_bridge(self, request: QuoteRequest, route_reason: str) -> RoutingResult:
        adapter = self._select_bridge_adapter(request.from_chain_id, request.to_chain_id)
        if adapter is None:
            logger.warning(
                f"No bridge adapter registered for {request.from_chain_id} -> {request.to_chain_id}"
            )
            return _failure(ErrorCode.ADAPTER_NOT_REGISTERED, "Bridge adapter not initialized.")

        logger.info(
            f"Using bridge adapter {adapter.name} for {request.from_chain_id} -> {request.to_chain_id}"
        )
        result = await adapter.get_route(
            AdapterBridgeParams(
                from_chain_id=request.from_chain_id,
                to_chain_id=request.to_chain_id,
                from_token_address=request.from_token_address,
                to_token_address=request.to_token_address,
                amount=request.amount,
                slippage_bps=request.slippage_bps,
                sender_address=request.sender_address,
                recipient_address=request.recipient_address,
            )
        )

        if not result.success or not result.to_amount:
            message = _truncate(result.error) if result.error else "Failed to get bridge route."
            logger.warning(f"{adapter.name} route failed: {message}")
            return _failure(ErrorCode.BRIDGE_ROUTE_FAILED, message)

        adapter_steps = result.steps or []
        if not adapter_steps:
            logger.warning(f"{adapter.name} route has no steps")
            return _failure(ErrorCode.BRIDGE_ROUTE_FAILED, "Bridge adapter returned no steps.")

        has_destination_swap = any(
            step.type == StepType.DESTINATION_SWAP for step in adapter_steps
        )
        route_type = RouteType.BRIDGE_SWAP if has_destination_swap else RouteType.BRIDGE

        steps = tuple(
            RouteStep(
                id=step.id,
                type=StepType(step.type),
                description=step.description,
                chain_id=step.chain_id,
                tool=step.tool,
                transaction_data=step.transaction_data,
                status=StepStatus.PENDING,
            )
            for step in adapter_steps
        )

        route = Route(
            route_id=str(uuid4()),
            mode=request.mode,
            route_type=route_type,
            provider=adapter.name,
            from_chain_id=ChainId(request.from_chain_id),
            to_chain_id=ChainId(request.to_chain_id),
            from_token=TokenRef(address=request.from_token_address),
            to_token=TokenRef(address=request.to_token_address),
            from_amount=request.amount,
            to_amount=result.to_amount,
            to_amount_min=result.to_amount_min or result.to_amount,
            steps=steps,
            fees=tuple(result.fees or ()),
            eta_seconds=result.eta_seconds,
            exchange_rate=result.exchange_rate,
            price_impact=result.price_impact,
            route_reason=route_reason,
            created_at=_now_ms(),
        )
        return RouteSuccess(route=route)
