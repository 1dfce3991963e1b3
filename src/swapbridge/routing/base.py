"""Route data model and the adapter interfaces consumed by the routing engine."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Literal, Optional, Union

from swapbridge.chains import ChainId


class Mode(str, Enum):
    """User-selected trading mode."""

    AUTO = "AUTO"
    SWAP_ONLY = "SWAP_ONLY"
    BRIDGE_ONLY = "BRIDGE_ONLY"


class RouteType(str, Enum):
    SWAP = "swap"
    BRIDGE = "bridge"
    BRIDGE_SWAP = "bridge+swap"


class StepType(str, Enum):
    APPROVE = "approve"
    SWAP = "swap"
    BRIDGE_SEND = "bridgeSend"
    BRIDGE_RECEIVE = "bridgeReceive"
    DESTINATION_SWAP = "destinationSwap"


class StepStatus(str, Enum):
    """Execution status of a step. The engine only ever emits PENDING."""

    PENDING = "pending"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class ErrorCode(str, Enum):
    """Codes returned in RoutingError.code."""

    INVALID_FROM_CHAIN = "INVALID_FROM_CHAIN"
    INVALID_TO_CHAIN = "INVALID_TO_CHAIN"
    MODE_SWAP_CROSS_CHAIN = "MODE_SWAP_CROSS_CHAIN"
    MODE_BRIDGE_SAME_CHAIN = "MODE_BRIDGE_SAME_CHAIN"
    NO_ADAPTER = "NO_ADAPTER"
    ADAPTER_NOT_REGISTERED = "ADAPTER_NOT_REGISTERED"
    QUOTE_FAILED = "QUOTE_FAILED"
    BRIDGE_ROUTE_FAILED = "BRIDGE_ROUTE_FAILED"


@dataclass(frozen=True)
class RoutingError:
    """Structured, displayable routing failure."""

    code: str
    message: str

    def to_dict(self) -> dict:
        return {"code": str(getattr(self.code, "value", self.code)), "message": self.message}


@dataclass(frozen=True)
class TransactionData:
    """Opaque payload interpreted by the execution layer.

    EVM steps use to/data/value/gas_limit; Solana, Sui and Canton steps carry a
    serialized transaction or DAML intent.
    """

    to: Optional[str] = None
    data: Optional[str] = None
    value: Optional[str] = None
    gas_limit: Optional[str] = None
    serialized_transaction: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            key: value
            for key, value in (
                ("to", self.to),
                ("data", self.data),
                ("value", self.value),
                ("gas_limit", self.gas_limit),
                ("serialized_transaction", self.serialized_transaction),
            )
            if value is not None
        }


@dataclass(frozen=True)
class FeeInfo:
    name: str
    amount: str
    token: str
    amount_usd: Optional[float] = None

    def to_dict(self) -> dict:
        data = {"name": self.name, "amount": self.amount, "token": self.token}
        if self.amount_usd is not None:
            data["amount_usd"] = self.amount_usd
        return data


@dataclass(frozen=True)
class TokenRef:
    """Token reference on a route. Symbol and decimals are filled by the caller."""

    address: str
    symbol: str = ""
    decimals: int = 0

    def to_dict(self) -> dict:
        return {"address": self.address, "symbol": self.symbol, "decimals": self.decimals}


@dataclass
class QuoteRequest:
    """Input to the routing engine."""

    from_chain_id: str
    to_chain_id: str
    from_token_address: str
    to_token_address: str
    amount: str
    slippage_bps: int = 50
    mode: Mode = Mode.AUTO
    sender_address: Optional[str] = None
    recipient_address: Optional[str] = None

    def __post_init__(self) -> None:
        # Unknown modes are programmer errors and raise ValueError here
        self.mode = Mode(self.mode)


# ======================
# Adapter contracts
# ======================

@dataclass
class AdapterQuoteParams:
    chain_id: str
    from_token_address: str
    to_token_address: str
    amount: str
    slippage_bps: int
    sender_address: Optional[str] = None


@dataclass
class AdapterQuoteResult:
    """Same-chain quote returned by a SwapAdapter."""

    success: bool
    to_amount: Optional[str] = None
    to_amount_min: Optional[str] = None
    exchange_rate: Optional[str] = None
    price_impact: Optional[float] = None
    estimated_gas: Optional[str] = None
    fees: list[FeeInfo] = field(default_factory=list)
    transaction_data: Optional[TransactionData] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "AdapterQuoteResult":
        return cls(success=False, error=error)


@dataclass
class AdapterBridgeParams:
    from_chain_id: str
    to_chain_id: str
    from_token_address: str
    to_token_address: str
    amount: str
    slippage_bps: int
    sender_address: Optional[str] = None
    recipient_address: Optional[str] = None


@dataclass
class AdapterStep:
    """A bridge step as produced by an adapter, before the engine stamps a status."""

    id: str
    type: StepType
    description: str
    chain_id: str
    tool: str
    transaction_data: Optional[TransactionData] = None


@dataclass
class AdapterBridgeResult:
    """Cross-chain route returned by a BridgeAdapter."""

    success: bool
    to_amount: Optional[str] = None
    to_amount_min: Optional[str] = None
    exchange_rate: Optional[str] = None
    price_impact: Optional[float] = None
    eta_seconds: Optional[int] = None
    fees: list[FeeInfo] = field(default_factory=list)
    steps: list[AdapterStep] = field(default_factory=list)
    provider_route_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "AdapterBridgeResult":
        return cls(success=False, error=error)


class SwapAdapter(ABC):
    """Same-chain swap quote provider."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name, used as Route.provider and step tool."""
        pass

    @abstractmethod
    async def get_quote(self, params: AdapterQuoteParams) -> AdapterQuoteResult:
        """
        Get a same-chain swap quote.

        Ordinary quote failures are returned as success=False results; only
        truly exceptional conditions should raise.
        """
        pass


class BridgeAdapter(ABC):
    """Cross-chain route provider."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name, used as Route.provider."""
        pass

    @abstractmethod
    async def get_route(self, params: AdapterBridgeParams) -> AdapterBridgeResult:
        """
        Get a cross-chain route with ordered steps.

        Ordinary route failures are returned as success=False results.
        """
        pass


# ======================
# Engine output
# ======================

@dataclass(frozen=True)
class RouteStep:
    id: str
    type: StepType
    description: str
    chain_id: str
    tool: str
    transaction_data: Optional[TransactionData] = None
    status: StepStatus = StepStatus.PENDING
    tx_hash: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "type": StepType(self.type).value,
            "description": self.description,
            "chain_id": self.chain_id,
            "tool": self.tool,
            "status": StepStatus(self.status).value,
        }
        if self.transaction_data is not None:
            data["transaction_data"] = self.transaction_data.to_dict()
        if self.tx_hash is not None:
            data["tx_hash"] = self.tx_hash
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class Route:
    """A resolved route: quote plus the ordered plan of steps to execute."""

    route_id: str
    mode: Mode
    route_type: RouteType
    provider: str
    from_chain_id: ChainId
    to_chain_id: ChainId
    from_token: TokenRef
    to_token: TokenRef
    from_amount: str
    to_amount: str
    to_amount_min: str
    steps: tuple[RouteStep, ...]
    fees: tuple[FeeInfo, ...] = ()
    eta_seconds: Optional[int] = None
    exchange_rate: Optional[str] = None
    price_impact: Optional[float] = None
    estimated_gas: Optional[str] = None
    route_reason: Optional[str] = None
    created_at: int = field(default_factory=lambda: int(time.time() * 1000))

    def with_tokens(self, from_token: TokenRef, to_token: TokenRef) -> "Route":
        """Return a copy with enriched token references."""
        return replace(self, from_token=from_token, to_token=to_token)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        return {
            "route_id": self.route_id,
            "mode": Mode(self.mode).value,
            "route_type": RouteType(self.route_type).value,
            "provider": self.provider,
            "from_chain_id": self.from_chain_id,
            "to_chain_id": self.to_chain_id,
            "from_token": self.from_token.to_dict(),
            "to_token": self.to_token.to_dict(),
            "from_amount": self.from_amount,
            "to_amount": self.to_amount,
            "to_amount_min": self.to_amount_min,
            "steps": [step.to_dict() for step in self.steps],
            "fees": [fee.to_dict() for fee in self.fees],
            "eta_seconds": self.eta_seconds,
            "exchange_rate": self.exchange_rate,
            "price_impact": self.price_impact,
            "estimated_gas": self.estimated_gas,
            "route_reason": self.route_reason,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class RouteSuccess:
    route: Route
    success: Literal[True] = True


@dataclass(frozen=True)
class RouteFailure:
    error: RoutingError
    success: Literal[False] = False


RoutingResult = Union[RouteSuccess, RouteFailure]


# ======================
# Helpers for adapters
# ======================

def parse_positive_amount(amount: str) -> Optional[Decimal]:
    """Parse a decimal amount string, returning None unless it is a finite positive number."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def ratio(numerator: str, denominator: str) -> Optional[str]:
    """Exchange rate numerator/denominator as a string, or None if not computable."""
    num = parse_positive_amount(numerator)
    den = parse_positive_amount(denominator)
    if num is None or den is None:
        return None
    return str(num / den)


def apply_slippage(amount: str, slippage_bps: int) -> str:
    """Minimum received after slippage, floored to whole base units."""
    value = Decimal(str(amount))
    minimum = value * (Decimal(10000) - Decimal(slippage_bps)) / Decimal(10000)
    return str(int(minimum))
