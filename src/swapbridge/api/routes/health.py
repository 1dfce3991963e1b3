"""Health check endpoints."""

from fastapi import APIRouter, Request

from swapbridge.chains import CHAIN_IDS
from swapbridge.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic liveness check."""
    return {"status": "healthy", "service": "swapbridge"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Adapter registration per routing slot.

    Reports "degraded" while any slot is empty; routes needing that slot fail
    with ADAPTER_NOT_REGISTERED.
    """
    slots = request.app.state.engine.dependencies.summary()
    adapters = {
        slot: {"registered": name is not None, "name": name}
        for slot, name in slots.items()
    }
    missing = [slot for slot, name in slots.items() if name is None]

    return {
        "status": "degraded" if missing else "healthy",
        "service": "swapbridge",
        "environment": get_settings().environment,
        "supported_chains": len(CHAIN_IDS),
        "adapters": adapters,
        "missing_adapters": missing,
    }
