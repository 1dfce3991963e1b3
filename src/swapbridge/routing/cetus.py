"""Sui swap integration.

Primary: Cetus aggregator (GET /find_routes, no API key).
Fallback: Aftermath Finance trade API (POST /trade/route, /trade/transaction).

Sui tokens are identified by Move coin types, e.g. 0x2::sui::SUI.
"""

import logging
from decimal import Decimal
from typing import Optional

import httpx

from swapbridge.routing.base import (
    AdapterQuoteParams,
    AdapterQuoteResult,
    SwapAdapter,
    TransactionData,
    apply_slippage,
    ratio,
)

logger = logging.getLogger(__name__)

CETUS_AGGREGATOR_API = "https://api-sui.cetus.zone/router_v2"
AFTERMATH_API = "https://aftermath.finance/api"


class CetusSwapAdapter(SwapAdapter):
    """Sui swap adapter: Cetus first, then Aftermath."""

    def __init__(
        self,
        cetus_url: str = CETUS_AGGREGATOR_API,
        aftermath_url: str = AFTERMATH_API,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cetus_url = cetus_url.rstrip("/")
        self.aftermath_url = aftermath_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "Cetus"

    async def get_quote(self, params: AdapterQuoteParams) -> AdapterQuoteResult:
        result = await self._quote_cetus(params)
        if result.success:
            return result

        logger.info(f"Cetus failed: {result.error}; trying Aftermath fallback")
        return await self._quote_aftermath(params)

    async def _quote_cetus(self, params: AdapterQuoteParams) -> AdapterQuoteResult:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.cetus_url}/find_routes",
                    params={
                        "from": params.from_token_address,
                        "target": params.to_token_address,
                        "amount": params.amount,
                        "by_amount_in": "true",
                    },
                )

            if response.status_code != 200:
                logger.warning(f"Cetus API error: {response.status_code} - {response.text}")
                return AdapterQuoteResult.failure(
                    f"Cetus route error ({response.status_code}): {response.text}"
                )

            # {code: 200, msg: "Success", data: {amount_in, amount_out, deviation_ratio, routes}}
            raw = response.json()
            data = raw.get("data") or {}
            if raw.get("code") != 200:
                return AdapterQuoteResult.failure(f"Cetus: API error {raw.get('code')}")
            if not data.get("amount_out"):
                return AdapterQuoteResult.failure("Cetus: no output amount returned")

            to_amount = str(data["amount_out"])
            deviation = data.get("deviation_ratio")
            return AdapterQuoteResult(
                success=True,
                to_amount=to_amount,
                to_amount_min=apply_slippage(to_amount, params.slippage_bps),
                exchange_rate=ratio(to_amount, params.amount),
                price_impact=abs(float(Decimal(str(deviation)) * 100)) if deviation else None,
            )

        except Exception as e:
            logger.error(f"Cetus quote error: {e}")
            return AdapterQuoteResult.failure(f"Cetus adapter error: {e}")

    async def _quote_aftermath(self, params: AdapterQuoteParams) -> AdapterQuoteResult:
        body = {
            "coinInType": params.from_token_address,
            "coinOutType": params.to_token_address,
            "coinInAmount": params.amount,
            "slippage": params.slippage_bps / 10000,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(f"{self.aftermath_url}/trade/route", json=body)

                if response.status_code != 200:
                    logger.warning(f"Aftermath API error: {response.status_code} - {response.text}")
                    return AdapterQuoteResult.failure(
                        f"Aftermath route error ({response.status_code}): {response.text}"
                    )

                data = response.json()
                to_amount = (data.get("coinOut") or {}).get("amount")
                if not to_amount:
                    return AdapterQuoteResult.failure("Aftermath returned no output amount")

                to_amount = str(to_amount)
                result = AdapterQuoteResult(
                    success=True,
                    to_amount=to_amount,
                    to_amount_min=apply_slippage(to_amount, params.slippage_bps),
                    exchange_rate=ratio(to_amount, params.amount),
                    price_impact=data.get("priceImpact"),
                )

                if params.sender_address:
                    # The quote stays valid when the transaction cannot be built
                    tx_response = await client.post(
                        f"{self.aftermath_url}/trade/transaction",
                        json={**body, "walletAddress": params.sender_address},
                    )
                    if tx_response.status_code == 200 and tx_response.json().get("tx"):
                        result.transaction_data = TransactionData(
                            serialized_transaction=tx_response.json()["tx"]
                        )
                    else:
                        logger.warning(f"Aftermath transaction build failed: {tx_response.status_code}")

                return result

        except Exception as e:
            logger.error(f"Aftermath quote error: {e}")
            return AdapterQuoteResult.failure(f"Aftermath adapter error: {e}")
