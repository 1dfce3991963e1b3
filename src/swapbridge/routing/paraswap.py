"""ParaSwap aggregator integration for EVM swaps.

No API key required.
API docs: https://developers.paraswap.network/api/get-rate-for-a-token-pair

Endpoints used:
- GET /prices                   best rate for a token pair (no tx data)
- POST /transactions/{network}  transaction data for the priced route
"""

import logging
from typing import Optional

import httpx

from swapbridge.routing.base import (
    AdapterQuoteParams,
    AdapterQuoteResult,
    FeeInfo,
    SwapAdapter,
    TransactionData,
    ratio,
)

logger = logging.getLogger(__name__)

PARASWAP_API_V5 = "https://apiv5.paraswap.io"


class ParaSwapAdapter(SwapAdapter):
    """ParaSwap adapter. ParaSwap uses the standard EVM chain id as network."""

    def __init__(
        self,
        base_url: str = PARASWAP_API_V5,
        partner: str = "swapbridge",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.partner = partner
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "ParaSwap"

    async def get_quote(self, params: AdapterQuoteParams) -> AdapterQuoteResult:
        try:
            network = int(params.chain_id)

            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                # Step 1: price the route
                response = await client.get(
                    f"{self.base_url}/prices",
                    headers={"Accept": "application/json"},
                    params={
                        "srcToken": params.from_token_address,
                        "destToken": params.to_token_address,
                        "amount": params.amount,
                        # ParaSwap corrects the decimals from its own token list
                        "srcDecimals": "18",
                        "destDecimals": "18",
                        "side": "SELL",
                        "network": str(network),
                        "otherExchangePrices": "true",
                        "includeContractMethods": "simpleSwap,multiSwap,megaSwap",
                    },
                )

                if response.status_code != 200:
                    logger.warning(f"ParaSwap price error: {response.status_code} - {response.text}")
                    return AdapterQuoteResult.failure(
                        f"ParaSwap price error ({response.status_code}): {response.text}"
                    )

                price_route = response.json().get("priceRoute")
                if not price_route:
                    return AdapterQuoteResult.failure("No swap route found for this token pair.")

                dest_amount = price_route.get("destAmount")
                result = AdapterQuoteResult(
                    success=True,
                    to_amount=dest_amount,
                    # Slippage is applied when the transaction is built
                    to_amount_min=dest_amount,
                    estimated_gas=str(price_route.get("gasCost") or "0"),
                )

                if dest_amount and price_route.get("srcAmount"):
                    result.exchange_rate = ratio(dest_amount, price_route["srcAmount"])

                gas_cost_usd = price_route.get("gasCostUSD")
                if gas_cost_usd:
                    try:
                        amount_usd = float(gas_cost_usd)
                    except ValueError:
                        amount_usd = 0.0
                    result.fees = [
                        FeeInfo(name="Gas cost", amount=str(gas_cost_usd), token="USD", amount_usd=amount_usd)
                    ]

                # Step 2: build the transaction when we know who sends it
                if params.sender_address:
                    tx_response = await client.post(
                        f"{self.base_url}/transactions/{network}",
                        headers={"Accept": "application/json"},
                        json={
                            "srcToken": params.from_token_address,
                            "destToken": params.to_token_address,
                            "srcAmount": params.amount,
                            "destAmount": dest_amount,
                            "priceRoute": price_route,
                            "userAddress": params.sender_address,
                            "partner": self.partner,
                            "srcDecimals": price_route.get("srcDecimals") or 18,
                            "destDecimals": price_route.get("destDecimals") or 18,
                            "slippage": params.slippage_bps,
                        },
                    )

                    if tx_response.status_code == 200:
                        tx = tx_response.json()
                        result.transaction_data = TransactionData(
                            to=tx.get("to"),
                            data=tx.get("data"),
                            value=str(tx.get("value") or "0"),
                            gas_limit=str(tx.get("gas") or "0"),
                        )
                    else:
                        logger.warning(
                            f"ParaSwap transaction build failed: {tx_response.status_code} - {tx_response.text}"
                        )

                return result

        except Exception as e:
            logger.error(f"ParaSwap quote error: {e}")
            return AdapterQuoteResult.failure(f"ParaSwap adapter error: {e}")
