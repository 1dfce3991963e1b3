"""Tests for the chain registry and token list."""

from swapbridge.chains import (
    CHAIN_IDS,
    NATIVE_TOKEN_ADDRESS,
    ZERO_ADDRESS,
    ChainType,
    get_all_chains,
    get_chain,
    get_evm_chains,
    is_canton_chain,
    is_evm_chain,
    is_solana_chain,
    is_sui_chain,
)
from swapbridge.tokens import (
    find_token,
    find_token_by_symbol,
    get_tokens_for_chain,
    is_native_token,
)


class TestChainRegistry:
    """Tests for chain lookups."""

    def test_get_known_chain(self):
        chain = get_chain("1")
        assert chain is not None
        assert chain.name == "Ethereum"
        assert chain.type == ChainType.EVM
        assert chain.native_currency.symbol == "ETH"

    def test_get_unknown_chain(self):
        assert get_chain("424242") is None

    def test_lookup_is_exact(self):
        assert get_chain("Solana") is None
        assert get_chain(" 1") is None

    def test_non_evm_chains_registered(self):
        assert get_chain("solana").type == ChainType.SOLANA
        assert get_chain("sui").type == ChainType.SUI
        assert get_chain("canton").type == ChainType.CANTON

    def test_family_predicates(self):
        assert is_evm_chain("137") is True
        assert is_evm_chain("solana") is False
        assert is_solana_chain("solana") is True
        assert is_sui_chain("sui") is True
        assert is_canton_chain("canton") is True

    def test_predicates_false_for_unknown(self):
        assert is_evm_chain("unknown") is False
        assert is_solana_chain("unknown") is False
        assert is_sui_chain("unknown") is False
        assert is_canton_chain("unknown") is False

    def test_all_chains_matches_ids(self):
        assert [c.id for c in get_all_chains()] == CHAIN_IDS
        assert len(set(CHAIN_IDS)) == len(CHAIN_IDS)

    def test_evm_chains_only_evm(self):
        evm = get_evm_chains()
        assert evm
        assert all(c.type == ChainType.EVM for c in evm)
        assert "solana" not in [c.id for c in evm]


class TestTokenList:
    """Tests for token lookups."""

    def test_tokens_for_chain(self):
        tokens = get_tokens_for_chain("1")
        symbols = {t.symbol for t in tokens}
        assert {"ETH", "USDC", "USDT"} <= symbols
        assert all(t.chain_id == "1" for t in tokens)

    def test_find_token_case_insensitive(self):
        token = find_token("1", "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48")
        assert token is not None
        assert token.symbol == "USDC"
        assert token.decimals == 6

    def test_find_token_scoped_to_chain(self):
        assert find_token("42161", "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48") is None

    def test_find_token_by_symbol(self):
        token = find_token_by_symbol("solana", "usdc")
        assert token.address == "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

    def test_canton_tokens(self):
        assert find_token("canton", "canton:native").symbol == "CC"
        assert find_token("canton", "canton:usdc").decimals == 6

    def test_is_native_token(self):
        assert is_native_token(NATIVE_TOKEN_ADDRESS) is True
        assert is_native_token(NATIVE_TOKEN_ADDRESS.lower()) is True
        assert is_native_token(ZERO_ADDRESS) is True
        assert is_native_token("0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48") is False
