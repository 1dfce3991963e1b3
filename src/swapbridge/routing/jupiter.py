"""Jupiter DEX aggregator integration for Solana.

Uses the Jupiter Swap API (public relay) for swaps on Solana.
API docs: https://station.jup.ag/docs/apis/swap-api
"""

import logging
from typing import Optional

import httpx

from swapbridge.routing.base import (
    AdapterQuoteParams,
    AdapterQuoteResult,
    SwapAdapter,
    TransactionData,
    ratio,
)

logger = logging.getLogger(__name__)

# quote-api.jup.ag/v6 was sunset; this host serves the same v6 format
JUPITER_API = "https://public.jupiterapi.com"


class JupiterAdapter(SwapAdapter):
    """Jupiter DEX aggregator adapter for Solana.

    Jupiter aggregates liquidity from Raydium, Orca and other Solana DEXes.
    Amounts are raw token units (lamports for SOL).
    """

    def __init__(
        self,
        base_url: str = JUPITER_API,
        api_key: Optional[str] = None,
        timeout: float = 8.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "Jupiter"

    def _get_headers(self) -> dict:
        """Get API headers."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def get_quote(self, params: AdapterQuoteParams) -> AdapterQuoteResult:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.base_url}/quote",
                    headers=self._get_headers(),
                    params={
                        "inputMint": params.from_token_address,
                        "outputMint": params.to_token_address,
                        "amount": params.amount,
                        "slippageBps": str(params.slippage_bps),
                    },
                )

                if response.status_code != 200:
                    logger.warning(f"Jupiter API error: {response.status_code} - {response.text}")
                    return AdapterQuoteResult.failure(
                        f"Jupiter quote error ({response.status_code}): {response.text}"
                    )

                quote = response.json()

                price_impact = quote.get("priceImpactPct")
                result = AdapterQuoteResult(
                    success=True,
                    to_amount=quote.get("outAmount"),
                    to_amount_min=quote.get("otherAmountThreshold"),
                    price_impact=float(price_impact) if price_impact else None,
                )
                if quote.get("outAmount") and quote.get("inAmount"):
                    result.exchange_rate = ratio(quote["outAmount"], quote["inAmount"])

                # Serialized transaction for the wallet to sign
                if params.sender_address:
                    swap_response = await client.post(
                        f"{self.base_url}/swap",
                        headers=self._get_headers(),
                        json={
                            "quoteResponse": quote,
                            "userPublicKey": params.sender_address,
                            "wrapAndUnwrapSol": True,
                            "dynamicComputeUnitLimit": True,
                            "prioritizationFeeLamports": "auto",
                        },
                    )

                    if swap_response.status_code != 200:
                        logger.warning(
                            f"Jupiter swap error: {swap_response.status_code} - {swap_response.text}"
                        )
                        return AdapterQuoteResult.failure(
                            f"Jupiter swap error ({swap_response.status_code}): {swap_response.text}"
                        )

                    result.transaction_data = TransactionData(
                        serialized_transaction=swap_response.json().get("swapTransaction")
                    )

                return result

        except Exception as e:
            logger.error(f"Jupiter quote error: {e}")
            return AdapterQuoteResult.failure(f"Jupiter adapter error: {e}")
