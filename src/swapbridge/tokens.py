"""Static token list used to enrich routes with symbol and decimals.

Sui tokens use Move type addresses; Canton tokens use "canton:" identifiers.
"""

from dataclasses import dataclass
from typing import Optional

from swapbridge.chains import (
    CANTON_CHAIN_ID,
    NATIVE_TOKEN_ADDRESS,
    SOLANA_CHAIN_ID,
    SUI_CHAIN_ID,
    ZERO_ADDRESS,
)


@dataclass(frozen=True)
class TokenInfo:
    """Token metadata for a single chain."""

    chain_id: str
    address: str
    symbol: str
    name: str
    decimals: int


def _t(chain_id: str, address: str, symbol: str, name: str, decimals: int) -> TokenInfo:
    return TokenInfo(chain_id=chain_id, address=address, symbol=symbol, name=name, decimals=decimals)


TOKEN_LIST: list[TokenInfo] = [
    # Ethereum
    _t("1", NATIVE_TOKEN_ADDRESS, "ETH", "Ether", 18),
    _t("1", "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", "WETH", "Wrapped Ether", 18),
    _t("1", "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", "USDC", "USD Coin", 6),
    _t("1", "0xdAC17F958D2ee523a2206206994597C13D831ec7", "USDT", "Tether USD", 6),
    _t("1", "0x6B175474E89094C44Da98b954EedeAC495271d0F", "DAI", "Dai Stablecoin", 18),

    # Arbitrum
    _t("42161", NATIVE_TOKEN_ADDRESS, "ETH", "Ether", 18),
    _t("42161", "0x82aF49447D8a07e3bd95BD0d56f35241523fBab1", "WETH", "Wrapped Ether", 18),
    _t("42161", "0xaf88d065e77c8cC2239327C5EDb3A432268e5831", "USDC", "USD Coin", 6),
    _t("42161", "0xFd086bC7CD5C481DCC9C85ebE478A1C0b69FCbb9", "USDT", "Tether USD", 6),

    # Optimism
    _t("10", NATIVE_TOKEN_ADDRESS, "ETH", "Ether", 18),
    _t("10", "0x4200000000000000000000000000000000000006", "WETH", "Wrapped Ether", 18),
    _t("10", "0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85", "USDC", "USD Coin", 6),
    _t("10", "0x94b008aA00579c1307B0EF2c499aD98a8ce58e58", "USDT", "Tether USD", 6),

    # Base
    _t("8453", NATIVE_TOKEN_ADDRESS, "ETH", "Ether", 18),
    _t("8453", "0x4200000000000000000000000000000000000006", "WETH", "Wrapped Ether", 18),
    _t("8453", "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913", "USDC", "USD Coin", 6),

    # Polygon
    _t("137", NATIVE_TOKEN_ADDRESS, "POL", "POL", 18),
    _t("137", "0x7ceB23fD6bC0adD59E62ac25578270cFf1b9f619", "WETH", "Wrapped Ether", 18),
    _t("137", "0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359", "USDC", "USD Coin", 6),
    _t("137", "0xc2132D05D31c914a87C6611C10748AEb04B58e8F", "USDT", "Tether USD", 6),

    # BNB Chain (stablecoins use 18 decimals here)
    _t("56", NATIVE_TOKEN_ADDRESS, "BNB", "BNB", 18),
    _t("56", "0x8AC76a51cc950d9822D68b83fE1Ad97B32Cd580d", "USDC", "USD Coin", 18),
    _t("56", "0x55d398326f99059fF775485246999027B3197955", "USDT", "Tether USD", 18),

    # Avalanche
    _t("43114", NATIVE_TOKEN_ADDRESS, "AVAX", "Avalanche", 18),
    _t("43114", "0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E", "USDC", "USD Coin", 6),
    _t("43114", "0x9702230A8Ea53601f5cD2dc00fDBc13d4dF4A8c7", "USDT", "Tether USD", 6),

    # Solana
    _t(SOLANA_CHAIN_ID, "So11111111111111111111111111111111111111112", "SOL", "Solana", 9),
    _t(SOLANA_CHAIN_ID, "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v", "USDC", "USD Coin", 6),
    _t(SOLANA_CHAIN_ID, "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB", "USDT", "Tether USD", 6),

    # Sui
    _t(SUI_CHAIN_ID, "0x2::sui::SUI", "SUI", "Sui", 9),
    _t(SUI_CHAIN_ID,
       "0xdba34672e30cb065b1f93e3ab55318768fd6fef66c15942c9f7cb846e2f900e7::usdc::USDC",
       "USDC", "USD Coin", 6),
    _t(SUI_CHAIN_ID,
       "0xc060006111016b8a020ad5b33834984a437aaa7d3c74c18e09a95d48aceab08c::coin::COIN",
       "USDT", "Tether USD", 6),
    _t(SUI_CHAIN_ID,
       "0xaf8cd5edc19c4512f4259f0bee101a40d41ebed738ade5874359610ef8eeced5::coin::COIN",
       "WETH", "Wrapped Ether (Wormhole)", 8),

    # Canton
    _t(CANTON_CHAIN_ID, "canton:native", "CC", "Canton Coin", 10),
    _t(CANTON_CHAIN_ID, "canton:usdc", "USDCx", "USDC (xReserve)", 6),
    _t(CANTON_CHAIN_ID, "canton:usdt", "USDTx", "Tether USD (Canton)", 6),
]


def get_tokens_for_chain(chain_id: str) -> list[TokenInfo]:
    """Get all known tokens on a chain."""
    return [t for t in TOKEN_LIST if t.chain_id == chain_id]


def find_token(chain_id: str, address: str) -> Optional[TokenInfo]:
    """Find a token by chain id and address (address match is case-insensitive)."""
    address_lower = address.lower()
    for token in TOKEN_LIST:
        if token.chain_id == chain_id and token.address.lower() == address_lower:
            return token
    return None


def find_token_by_symbol(chain_id: str, symbol: str) -> Optional[TokenInfo]:
    """Find a token by chain id and symbol."""
    symbol_upper = symbol.upper()
    for token in TOKEN_LIST:
        if token.chain_id == chain_id and token.symbol.upper() == symbol_upper:
            return token
    return None


def is_native_token(address: str) -> bool:
    """Check for the EVM native-currency sentinel or the zero address."""
    lowered = address.lower()
    return lowered in (NATIVE_TOKEN_ADDRESS.lower(), ZERO_ADDRESS)
