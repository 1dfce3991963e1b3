"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from swapbridge.config import get_settings
from swapbridge.routing.engine import RoutingEngine
from swapbridge.routing.factory import create_lifi_adapter, create_routing_engine
from swapbridge.routing.lifi import LiFiBridgeAdapter
from swapbridge.web.services.quote_service import QuoteService

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"code": "VALIDATION_ERROR", "message": "Invalid request", "details": details},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"},
    )


def create_app(
    engine: Optional[RoutingEngine] = None,
    status_adapter: Optional[LiFiBridgeAdapter] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        engine: Routing engine to serve quotes from. Defaults to one with every
            adapter registered from settings.
        status_adapter: LI.FI adapter used for bridge status polling.
    """
    settings = get_settings()

    app = FastAPI(
        title="Swapbridge API",
        description="Cross-chain swap and bridge routing API",
        version="0.1.0",
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.state.engine = engine or create_routing_engine(settings)
    app.state.quote_service = QuoteService(
        app.state.engine, default_slippage_bps=settings.default_slippage_bps
    )
    app.state.status_adapter = status_adapter or create_lifi_adapter(settings)

    # Register routes
    from swapbridge.api.routes import health
    from swapbridge.web.controllers import bridge_router, chains_router, quotes_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(quotes_router, prefix="/api")
    app.include_router(chains_router, prefix="/api")
    app.include_router(bridge_router, prefix="/api")

    return app
