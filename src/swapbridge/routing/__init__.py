"""Routing module: mode rules, the routing engine and quote adapters.

Adapters:
- ParaSwap / 1inch: EVM swaps
- Jupiter: Solana swaps
- Cetus (Aftermath fallback): Sui swaps
- Canton Network: CC / USDCx / USDTx swaps priced from CoinGecko
- LI.FI / deBridge DLN: default cross-chain bridges
- Sui Bridge: deBridge + Wormhole for routes touching Sui
- Canton xReserve: USDC <-> USDCx between Ethereum and Canton
"""

from swapbridge.routing.base import (
    AdapterBridgeParams,
    AdapterBridgeResult,
    AdapterQuoteParams,
    AdapterQuoteResult,
    AdapterStep,
    BridgeAdapter,
    ErrorCode,
    FeeInfo,
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
    TransactionData,
)
from swapbridge.routing.engine import RouterDependencies, RoutingEngine
from swapbridge.routing.factory import create_default_dependencies, create_routing_engine
from swapbridge.routing.modes import (
    ModeValidationResult,
    RouteClassification,
    resolve_auto_route_type,
    validate_mode,
)

__all__ = [
    # Data model
    "Mode",
    "RouteType",
    "StepType",
    "StepStatus",
    "ErrorCode",
    "QuoteRequest",
    "Route",
    "RouteStep",
    "TokenRef",
    "FeeInfo",
    "TransactionData",
    "RoutingError",
    "RouteSuccess",
    "RouteFailure",
    "RoutingResult",
    # Adapter contracts
    "SwapAdapter",
    "BridgeAdapter",
    "AdapterQuoteParams",
    "AdapterQuoteResult",
    "AdapterBridgeParams",
    "AdapterBridgeResult",
    "AdapterStep",
    # Mode rules
    "ModeValidationResult",
    "RouteClassification",
    "validate_mode",
    "resolve_auto_route_type",
    # Engine
    "RouterDependencies",
    "RoutingEngine",
    "create_default_dependencies",
    "create_routing_engine",
]
