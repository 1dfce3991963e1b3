"""Web services for quotes and metadata.

These services never sign or broadcast transactions. Routes carry unsigned
transaction data for client-side signing.
"""

from swapbridge.web.services.chain_service import ChainService
from swapbridge.web.services.quote_service import QuoteService

__all__ = [
    "QuoteService",
    "ChainService",
]
