"""Chain service for chain and token metadata.

Read-only views over the chain registry and token list.
"""

from typing import Optional

from swapbridge.chains import ChainConfig, get_all_chains, get_chain
from swapbridge.tokens import get_tokens_for_chain
from swapbridge.web.contracts.chains import (
    ChainInfo,
    ChainListResponse,
    NativeCurrencyInfo,
    TokenInfoResponse,
    TokenListResponse,
)


def _to_chain_info(chain: ChainConfig) -> ChainInfo:
    return ChainInfo(
        id=chain.id,
        name=chain.name,
        short_name=chain.short_name,
        type=chain.type.value,
        native_currency=NativeCurrencyInfo(
            name=chain.native_currency.name,
            symbol=chain.native_currency.symbol,
            decimals=chain.native_currency.decimals,
        ),
        rpc_url=chain.rpc_url,
        explorer_url=chain.explorer_url,
    )


class ChainService:
    """Service for chain and token metadata."""

    def get_supported_chains(self) -> ChainListResponse:
        chains = [_to_chain_info(c) for c in get_all_chains()]
        return ChainListResponse(chains=chains, total=len(chains))

    def get_chain(self, chain_id: str) -> Optional[ChainInfo]:
        """Get chain info by id, or None if the chain is unknown."""
        chain = get_chain(chain_id)
        if chain is None:
            return None
        return _to_chain_info(chain)

    def get_tokens(self, chain_id: str) -> Optional[TokenListResponse]:
        """Get the known tokens for a chain, or None if the chain is unknown."""
        if get_chain(chain_id) is None:
            return None

        tokens = [
            TokenInfoResponse(
                chain_id=t.chain_id,
                address=t.address,
                symbol=t.symbol,
                name=t.name,
                decimals=t.decimals,
            )
            for t in get_tokens_for_chain(chain_id)
        ]
        return TokenListResponse(chain_id=chain_id, tokens=tokens, total=len(tokens))
