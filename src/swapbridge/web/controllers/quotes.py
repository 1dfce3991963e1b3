"""Quote API endpoint."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from swapbridge.config import get_settings
from swapbridge.web.contracts.quotes import ErrorResponse, QuoteRequest
from swapbridge.web.services.quote_service import QuoteService

router = APIRouter(prefix="/quote", tags=["quotes"])


def get_quote_service(request: Request) -> QuoteService:
    return request.app.state.quote_service


@router.post("", responses={400: {"model": ErrorResponse}})
async def get_quote(
    body: QuoteRequest,
    service: QuoteService = Depends(get_quote_service),
):
    """Resolve a swap or bridge route.

    Returns the route with its ordered steps, fees and unsigned transaction
    data. Routing failures return 400 with a machine-readable code.
    """
    max_slippage_bps = get_settings().max_slippage_bps
    if body.slippage_bps is not None and body.slippage_bps > max_slippage_bps:
        error = ErrorResponse(
            code="VALIDATION_ERROR",
            message=f"Slippage above the configured maximum of {max_slippage_bps} bps",
        )
        return JSONResponse(status_code=400, content=error.model_dump())

    result = await service.get_route(body)
    if not result.success:
        return JSONResponse(status_code=400, content=result.error.to_dict())
    return result.route.to_dict()
