"""Pytest configuration and fixtures."""

import os
from typing import Optional

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"

from swapbridge.routing.base import (
    AdapterBridgeParams,
    AdapterBridgeResult,
    AdapterQuoteParams,
    AdapterQuoteResult,
    AdapterStep,
    BridgeAdapter,
    FeeInfo,
    StepType,
    SwapAdapter,
    TransactionData,
)
from swapbridge.routing.engine import RouterDependencies, RoutingEngine

USDC_ETH = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
USDT_ETH = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
USDC_ARB = "0xaf88d065e77c8cC2239327C5EDb3A432268e5831"
NATIVE = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
SENDER = "0x1111111111111111111111111111111111111111"


class FakeSwapAdapter(SwapAdapter):
    """Swap adapter returning a canned result and recording its calls."""

    def __init__(self, name: str = "FakeSwap", result: Optional[AdapterQuoteResult] = None):
        self._name = name
        self.result = result or AdapterQuoteResult(
            success=True,
            to_amount="990000",
            to_amount_min="985050",
            exchange_rate="0.99",
            price_impact=0.01,
            estimated_gas="150000",
            fees=[FeeInfo(name="Gas cost", amount="1.20", token="USD", amount_usd=1.2)],
            transaction_data=TransactionData(to="0xrouter", data="0xdeadbeef", value="0"),
        )
        self.calls: list[AdapterQuoteParams] = []

    @property
    def name(self) -> str:
        return self._name

    async def get_quote(self, params: AdapterQuoteParams) -> AdapterQuoteResult:
        self.calls.append(params)
        return self.result


class FakeBridgeAdapter(BridgeAdapter):
    """Bridge adapter returning a canned result and recording its calls."""

    def __init__(self, name: str = "FakeBridge", result: Optional[AdapterBridgeResult] = None):
        self._name = name
        self.result = result or AdapterBridgeResult(
            success=True,
            to_amount="995000",
            to_amount_min="990000",
            eta_seconds=180,
            fees=[FeeInfo(name="Bridge fee", amount="0.50", token="USD")],
            steps=[
                AdapterStep(
                    id="send-1",
                    type=StepType.BRIDGE_SEND,
                    description="Send via FakeBridge",
                    chain_id="1",
                    tool=name,
                ),
                AdapterStep(
                    id="receive-1",
                    type=StepType.BRIDGE_RECEIVE,
                    description="Receive on destination",
                    chain_id="42161",
                    tool=name,
                ),
            ],
        )
        self.calls: list[AdapterBridgeParams] = []

    @property
    def name(self) -> str:
        return self._name

    async def get_route(self, params: AdapterBridgeParams) -> AdapterBridgeResult:
        self.calls.append(params)
        return self.result


class ExplodingSwapAdapter(SwapAdapter):
    @property
    def name(self) -> str:
        return "Exploding"

    async def get_quote(self, params: AdapterQuoteParams) -> AdapterQuoteResult:
        raise RuntimeError("upstream exploded")


@pytest.fixture
def evm_swap():
    return FakeSwapAdapter("FakeEVM")


@pytest.fixture
def default_bridge():
    return FakeBridgeAdapter("FakeBridge")


@pytest.fixture
def full_dependencies(evm_swap, default_bridge) -> RouterDependencies:
    """Dependencies with a fake adapter in every slot."""
    deps = RouterDependencies()
    deps.register_evm_swap_adapter(evm_swap)
    deps.register_solana_swap_adapter(FakeSwapAdapter("FakeSolana"))
    deps.register_sui_swap_adapter(FakeSwapAdapter("FakeSui"))
    deps.register_canton_swap_adapter(FakeSwapAdapter("FakeCanton"))
    deps.register_bridge_adapter(default_bridge)
    deps.register_canton_bridge_adapter(FakeBridgeAdapter("FakeCantonBridge"))
    deps.register_sui_bridge_adapter(FakeBridgeAdapter("FakeSuiBridge"))
    return deps


@pytest.fixture
def engine(full_dependencies) -> RoutingEngine:
    return RoutingEngine(full_dependencies)
