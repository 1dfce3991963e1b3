"""Tests for adapter registration from settings."""

from swapbridge.config import Settings
from swapbridge.routing.debridge import DeBridgeAdapter
from swapbridge.routing.factory import (
    create_bridge_adapter,
    create_default_dependencies,
    create_evm_swap_adapter,
    create_routing_engine,
)
from swapbridge.routing.lifi import LiFiBridgeAdapter
from swapbridge.routing.oneinch import OneInchAdapter
from swapbridge.routing.paraswap import ParaSwapAdapter


class TestFactory:
    """Tests for the adapter factory."""

    def test_default_dependencies_fill_every_slot(self):
        deps = create_default_dependencies(Settings())

        assert deps.summary() == {
            "evm_swap": "ParaSwap",
            "solana_swap": "Jupiter",
            "sui_swap": "Cetus",
            "canton_swap": "Canton Network",
            "bridge": "LI.FI",
            "canton_bridge": "Canton xReserve",
            "sui_bridge": "Sui Bridge (deBridge + Wormhole)",
        }

    def test_oneinch_with_key(self):
        adapter = create_evm_swap_adapter(
            Settings(evm_swap_provider="oneinch", oneinch_api_key="key")
        )
        assert isinstance(adapter, OneInchAdapter)

    def test_oneinch_without_key_falls_back(self):
        adapter = create_evm_swap_adapter(
            Settings(evm_swap_provider="oneinch", oneinch_api_key=None)
        )
        assert isinstance(adapter, ParaSwapAdapter)

    def test_debridge_bridge(self):
        adapter = create_bridge_adapter(Settings(bridge_provider="debridge"))
        assert isinstance(adapter, DeBridgeAdapter)

    def test_unknown_bridge_provider_uses_lifi(self):
        adapter = create_bridge_adapter(Settings(bridge_provider="nope"))
        assert isinstance(adapter, LiFiBridgeAdapter)

    def test_settings_are_applied(self):
        settings = Settings(http_timeout_seconds=3.0, integrator_id="acme")
        adapter = create_evm_swap_adapter(settings)

        assert adapter.timeout == 3.0
        assert adapter.partner == "acme"

    def test_create_routing_engine(self):
        engine = create_routing_engine(Settings(canton_network="sepolia"))

        assert engine.dependencies.canton_bridge_adapter.network_name == "sepolia"


class TestSettings:
    """Tests for Settings helpers."""

    def test_safe_dict_redacts_keys(self):
        settings = Settings(oneinch_api_key="secret", lifi_api_key=None)
        data = settings.get_safe_dict()

        assert data["providers"]["oneinch_api_key"] == "***"
        assert data["providers"]["lifi_api_key"] == "(not set)"
        assert "secret" not in str(data)

    def test_is_production(self):
        assert Settings(environment="Production").is_production is True
        assert Settings(environment="test").is_production is False
