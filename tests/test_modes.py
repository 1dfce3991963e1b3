"""Tests for mode rules."""

from swapbridge.routing.base import ErrorCode, Mode
from swapbridge.routing.modes import resolve_auto_route_type, validate_mode


class TestValidateMode:
    """Tests for validate_mode."""

    def test_swap_only_same_chain_is_valid(self):
        result = validate_mode(Mode.SWAP_ONLY, "1", "1")
        assert result.valid is True
        assert result.error is None

    def test_swap_only_cross_chain_is_rejected(self):
        result = validate_mode(Mode.SWAP_ONLY, "1", "42161")
        assert result.valid is False
        assert result.error.code == ErrorCode.MODE_SWAP_CROSS_CHAIN.value
        assert result.error.message == "Swap-only mode requires the same chain on both sides."

    def test_bridge_only_cross_chain_is_valid(self):
        assert validate_mode(Mode.BRIDGE_ONLY, "1", "solana").valid is True

    def test_bridge_only_same_chain_is_rejected(self):
        result = validate_mode(Mode.BRIDGE_ONLY, "137", "137")
        assert result.valid is False
        assert result.error.code == "MODE_BRIDGE_SAME_CHAIN"
        assert result.error.message == "Bridge-only mode requires different chains."

    def test_auto_always_passes(self):
        assert validate_mode(Mode.AUTO, "1", "1").valid is True
        assert validate_mode(Mode.AUTO, "1", "sui").valid is True

    def test_bridge_only_ignores_token_pair(self):
        """Different tokens on a bridge are left to the adapter."""
        result = validate_mode(Mode.BRIDGE_ONLY, "1", "42161", "0xaaa", "0xbbb")
        assert result.valid is True

    def test_chain_ids_compared_exactly(self):
        result = validate_mode(Mode.SWAP_ONLY, "Solana", "solana")
        assert result.valid is False


class TestResolveAutoRouteType:
    """Tests for AUTO classification."""

    def test_same_chain_is_swap(self):
        result = resolve_auto_route_type("1", "1")
        assert result.route_type == "swap"
        assert result.reason == "Same chain (1), using swap adapter."

    def test_different_chains_is_bridge(self):
        result = resolve_auto_route_type("1", "solana")
        assert result.route_type == "bridge"
        assert result.reason == "Cross-chain (1 -> solana), using bridge adapter."
