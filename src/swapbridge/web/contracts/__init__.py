"""Request and response contracts for the web layer.

These Pydantic models define the HTTP interface. Route bodies are rendered
from the engine's Route dataclass directly.
"""

from swapbridge.web.contracts.chains import (
    ChainInfo,
    ChainListResponse,
    NativeCurrencyInfo,
    TokenInfoResponse,
    TokenListResponse,
)
from swapbridge.web.contracts.quotes import ErrorResponse, QuoteRequest
from swapbridge.web.contracts.status import BridgeStatusResponse

__all__ = [
    # Quote contracts
    "QuoteRequest",
    "ErrorResponse",
    # Chain contracts
    "ChainInfo",
    "ChainListResponse",
    "NativeCurrencyInfo",
    "TokenInfoResponse",
    "TokenListResponse",
    # Status contracts
    "BridgeStatusResponse",
]
