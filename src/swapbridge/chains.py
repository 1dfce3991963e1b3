"""Static registry of every chain the router can quote on.

Chain ids are strings: the decimal chain id for EVM networks and a fixed
literal ("solana", "sui", "canton") for the other families. Lookups are exact
string matches with no normalization.

RPC endpoints can be overridden per chain with RPC_URL_<id> (EVM) or
SOLANA_RPC_URL / SUI_RPC_URL / CANTON_RPC_URL.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import NewType, Optional

ChainId = NewType("ChainId", str)

# Sentinel address used by EVM aggregators for the chain's native currency
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

SOLANA_CHAIN_ID = ChainId("solana")
SUI_CHAIN_ID = ChainId("sui")
CANTON_CHAIN_ID = ChainId("canton")


class ChainType(str, Enum):
    """Chain family."""

    EVM = "evm"
    SOLANA = "solana"
    SUI = "sui"
    CANTON = "canton"


@dataclass(frozen=True)
class NativeCurrency:
    name: str
    symbol: str
    decimals: int


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for a blockchain."""

    id: ChainId
    name: str
    short_name: str
    type: ChainType
    native_currency: NativeCurrency
    rpc_url: str
    explorer_url: str


def _evm(chain_id: int, name: str, short_name: str, currency: NativeCurrency,
         default_rpc: str, explorer_url: str) -> ChainConfig:
    return ChainConfig(
        id=ChainId(str(chain_id)),
        name=name,
        short_name=short_name,
        type=ChainType.EVM,
        native_currency=currency,
        rpc_url=os.getenv(f"RPC_URL_{chain_id}", default_rpc),
        explorer_url=explorer_url,
    )


_ETHER = NativeCurrency(name="Ether", symbol="ETH", decimals=18)


# ======================
# Chain Configurations
# ======================

_ALL_CHAINS: list[ChainConfig] = [
    # Major L1s
    _evm(1, "Ethereum", "ETH", _ETHER, "https://eth.llamarpc.com", "https://etherscan.io"),
    _evm(56, "BNB Chain", "BNB", NativeCurrency("BNB", "BNB", 18),
         "https://bsc-dataseed.binance.org", "https://bscscan.com"),
    _evm(137, "Polygon", "POL", NativeCurrency("POL", "POL", 18),
         "https://polygon-rpc.com", "https://polygonscan.com"),
    _evm(43114, "Avalanche", "AVAX", NativeCurrency("Avalanche", "AVAX", 18),
         "https://api.avax.network/ext/bc/C/rpc", "https://snowtrace.io"),

    # L2s / rollups
    _evm(42161, "Arbitrum", "ARB", _ETHER, "https://arb1.arbitrum.io/rpc", "https://arbiscan.io"),
    _evm(10, "Optimism", "OP", _ETHER, "https://mainnet.optimism.io",
         "https://optimistic.etherscan.io"),
    _evm(8453, "Base", "BASE", _ETHER, "https://mainnet.base.org", "https://basescan.org"),
    _evm(59144, "Linea", "LINEA", _ETHER, "https://rpc.linea.build", "https://lineascan.build"),
    _evm(5000, "Mantle", "MNT", NativeCurrency("Mantle", "MNT", 18),
         "https://rpc.mantle.xyz", "https://explorer.mantle.xyz"),
    _evm(25, "Cronos", "CRO", NativeCurrency("Cronos", "CRO", 18),
         "https://evm.cronos.org", "https://cronoscan.com"),

    # Emerging EVM networks
    _evm(146, "Sonic", "SONIC", NativeCurrency("Sonic", "S", 18),
         "https://rpc.soniclabs.com", "https://sonicscan.org"),
    _evm(1329, "Sei", "SEI", NativeCurrency("Sei", "SEI", 18),
         "https://evm-rpc.sei-apis.com", "https://seitrace.com"),
    _evm(747, "Flow", "FLOW", NativeCurrency("Flow", "FLOW", 18),
         "https://mainnet.evm.nodes.onflow.org", "https://evm.flowscan.io"),
    _evm(1514, "Story", "STORY", NativeCurrency("IP", "IP", 18),
         "https://mainnet.storyrpc.io", "https://storyscan.xyz"),
    _evm(2741, "Abstract", "ABS", _ETHER, "https://api.mainnet.abs.xyz", "https://abscan.org"),
    _evm(60808, "BOB", "BOB", _ETHER, "https://rpc.gobob.xyz", "https://explorer.gobob.xyz"),
    _evm(999, "Hyperliquid", "HYPE", NativeCurrency("HYPE", "HYPE", 18),
         "https://rpc.hyperliquid.xyz/evm", "https://hyperevm.cloud"),
    _evm(9745, "Plasma", "PLASMA", _ETHER, "https://rpc.plasma.build",
         "https://explorer.plasma.build"),
    _evm(143, "Monad", "MON", NativeCurrency("Monad", "MON", 18),
         "https://rpc.monad.xyz", "https://explorer.monad.xyz"),
    _evm(4326, "MegaETH", "MEGA", _ETHER, "https://mainnet.megaeth.com/rpc",
         "https://megaexplorer.xyz"),

    # Non-EVM
    ChainConfig(
        id=SOLANA_CHAIN_ID,
        name="Solana",
        short_name="SOL",
        type=ChainType.SOLANA,
        native_currency=NativeCurrency("SOL", "SOL", 9),
        rpc_url=os.getenv("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com"),
        explorer_url="https://solscan.io",
    ),
    ChainConfig(
        id=SUI_CHAIN_ID,
        name="Sui",
        short_name="SUI",
        type=ChainType.SUI,
        native_currency=NativeCurrency("Sui", "SUI", 9),
        rpc_url=os.getenv("SUI_RPC_URL", "https://fullnode.mainnet.sui.io"),
        explorer_url="https://suiscan.xyz",
    ),
    ChainConfig(
        id=CANTON_CHAIN_ID,
        name="Canton",
        short_name="CC",
        type=ChainType.CANTON,
        native_currency=NativeCurrency("Canton Coin", "CC", 10),
        rpc_url=os.getenv("CANTON_RPC_URL", "https://canton.network"),
        explorer_url="https://scan.canton.network",
    ),
]

CHAINS: dict[str, ChainConfig] = {chain.id: chain for chain in _ALL_CHAINS}

# Ordered list of chain ids for selectors
CHAIN_IDS: list[str] = list(CHAINS.keys())


# ======================
# Helper Functions
# ======================

def get_chain(chain_id: str) -> Optional[ChainConfig]:
    """Get chain configuration by exact id, or None."""
    return CHAINS.get(chain_id)


def get_all_chains() -> list[ChainConfig]:
    """Get all chain configurations."""
    return list(CHAINS.values())


def get_evm_chains() -> list[ChainConfig]:
    """Get EVM-compatible chains."""
    return [c for c in CHAINS.values() if c.type == ChainType.EVM]


def _is_type(chain_id: str, chain_type: ChainType) -> bool:
    chain = CHAINS.get(chain_id)
    return chain is not None and chain.type == chain_type


def is_evm_chain(chain_id: str) -> bool:
    return _is_type(chain_id, ChainType.EVM)


def is_solana_chain(chain_id: str) -> bool:
    return _is_type(chain_id, ChainType.SOLANA)


def is_sui_chain(chain_id: str) -> bool:
    return _is_type(chain_id, ChainType.SUI)


def is_canton_chain(chain_id: str) -> bool:
    return _is_type(chain_id, ChainType.CANTON)
