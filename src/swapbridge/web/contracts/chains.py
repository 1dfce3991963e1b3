"""Chain and token information contracts."""

from pydantic import BaseModel, Field


class NativeCurrencyInfo(BaseModel):
    name: str
    symbol: str
    decimals: int


class ChainInfo(BaseModel):
    """Information about a supported blockchain."""

    id: str = Field(..., description="Chain id (\"1\", \"solana\", \"sui\", \"canton\", ...)")
    name: str = Field(..., description="Chain display name")
    short_name: str = Field(..., description="Short label")
    type: str = Field(..., description="Chain family: evm, solana, sui or canton")
    native_currency: NativeCurrencyInfo
    rpc_url: str = Field(..., description="Public RPC URL (for client use)")
    explorer_url: str = Field(..., description="Block explorer URL")


class ChainListResponse(BaseModel):
    """Response containing list of supported chains."""

    success: bool = True
    chains: list[ChainInfo] = Field(default_factory=list)
    total: int = Field(default=0)


class TokenInfoResponse(BaseModel):
    """Information about a token on one chain."""

    chain_id: str
    address: str
    symbol: str
    name: str
    decimals: int


class TokenListResponse(BaseModel):
    success: bool = True
    chain_id: str
    tokens: list[TokenInfoResponse] = Field(default_factory=list)
    total: int = Field(default=0)
