"""Bridge transfer status endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from swapbridge.routing.lifi import LiFiBridgeAdapter
from swapbridge.web.contracts.status import BridgeStatusResponse

router = APIRouter(prefix="/bridge", tags=["bridge"])


def get_status_adapter(request: Request) -> LiFiBridgeAdapter:
    return request.app.state.status_adapter


@router.get("/status", response_model=BridgeStatusResponse)
async def get_bridge_status(
    tx_hash: str = Query(..., min_length=1, description="Source chain transaction hash"),
    from_chain: str = Query(..., min_length=1, description="Source chain id"),
    to_chain: str = Query(..., min_length=1, description="Destination chain id"),
    bridge: Optional[str] = Query(None, description="Bridge tool used, if known"),
    adapter: LiFiBridgeAdapter = Depends(get_status_adapter),
) -> BridgeStatusResponse:
    """Poll the status of a cross-chain transfer."""
    status = await adapter.get_status(tx_hash, from_chain, to_chain, bridge)
    return BridgeStatusResponse(**status.to_dict())
