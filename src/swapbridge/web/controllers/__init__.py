"""HTTP controllers for web API endpoints.

All endpoints are read-only or return unsigned transaction data for
client-side signing.
"""

from swapbridge.web.controllers.bridge import router as bridge_router
from swapbridge.web.controllers.chains import router as chains_router
from swapbridge.web.controllers.quotes import router as quotes_router

__all__ = [
    "quotes_router",
    "chains_router",
    "bridge_router",
]
