"""Chain and token information API endpoints."""

from fastapi import APIRouter, HTTPException

from swapbridge.web.contracts.chains import ChainInfo, ChainListResponse, TokenListResponse
from swapbridge.web.services.chain_service import ChainService

router = APIRouter(prefix="/chains", tags=["chains"])

# Service instance
_chain_service = ChainService()


@router.get("", response_model=ChainListResponse)
async def get_chains() -> ChainListResponse:
    """Get list of supported blockchains."""
    return _chain_service.get_supported_chains()


@router.get("/{chain_id}", response_model=ChainInfo)
async def get_chain(chain_id: str) -> ChainInfo:
    """Get information about a specific chain.

    Args:
        chain_id: Chain identifier ("1", "137", "solana", "sui", "canton", ...)

    Returns:
        Chain metadata
    """
    chain = _chain_service.get_chain(chain_id)
    if not chain:
        raise HTTPException(status_code=404, detail=f"Chain not found: {chain_id}")
    return chain


@router.get("/{chain_id}/tokens", response_model=TokenListResponse)
async def get_chain_tokens(chain_id: str) -> TokenListResponse:
    """Get the known tokens on a chain."""
    tokens = _chain_service.get_tokens(chain_id)
    if tokens is None:
        raise HTTPException(status_code=404, detail=f"Chain not found: {chain_id}")
    return tokens
