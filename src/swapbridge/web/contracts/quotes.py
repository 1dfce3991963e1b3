"""Quote request and error contracts."""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from swapbridge.routing.base import Mode
from swapbridge.routing.base import QuoteRequest as EngineQuoteRequest


class QuoteRequest(BaseModel):
    """Request for a swap or bridge quote."""

    from_chain_id: str = Field(..., min_length=1, description="Source chain id (\"1\", \"solana\", ...)")
    to_chain_id: str = Field(..., min_length=1, description="Destination chain id")
    from_token_address: str = Field(..., min_length=1, description="Source token address")
    to_token_address: str = Field(..., min_length=1, description="Destination token address")
    amount: str = Field(..., min_length=1, description="Amount as a decimal string")
    slippage_bps: Optional[int] = Field(None, ge=0, le=10000, description="Slippage in basis points")
    mode: Mode = Field(default=Mode.AUTO, description="AUTO, SWAP_ONLY or BRIDGE_ONLY")
    sender_address: Optional[str] = Field(None, description="Wallet sending the funds")
    recipient_address: Optional[str] = Field(None, description="Wallet receiving the funds")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: str) -> str:
        """Amount must be a positive decimal number."""
        try:
            value = Decimal(v)
        except InvalidOperation:
            raise ValueError("Amount must be a decimal number")
        if not value.is_finite() or value <= 0:
            raise ValueError("Amount must be greater than zero")
        return v

    def to_engine_request(self, default_slippage_bps: int = 50) -> EngineQuoteRequest:
        return EngineQuoteRequest(
            from_chain_id=self.from_chain_id,
            to_chain_id=self.to_chain_id,
            from_token_address=self.from_token_address,
            to_token_address=self.to_token_address,
            amount=self.amount,
            slippage_bps=self.slippage_bps if self.slippage_bps is not None else default_slippage_bps,
            mode=self.mode,
            sender_address=self.sender_address,
            recipient_address=self.recipient_address,
        )


class ErrorResponse(BaseModel):
    """Error body returned for failed requests."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable message")
    details: Optional[Any] = Field(None, description="Validation details")
