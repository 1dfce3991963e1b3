"""Bridge status contract."""

from typing import Optional

from pydantic import BaseModel, Field


class BridgeStatusResponse(BaseModel):
    """Status of an in-flight bridge transfer."""

    route_id: str = Field(..., description="Source transaction hash used as route id")
    status: str = Field(..., description="COMPLETED, FAILED or BRIDGING")
    substatus: Optional[str] = None
    from_tx_hash: Optional[str] = None
    to_tx_hash: Optional[str] = None
    bridge_tx_link: Optional[str] = None
    error: Optional[str] = None
    step_statuses: list = Field(default_factory=list)
    updated_at: int = Field(..., description="Epoch milliseconds")
