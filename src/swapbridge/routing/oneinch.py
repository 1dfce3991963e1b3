"""1inch DEX aggregator integration.

Uses the 1inch Swap API v6.0 on EVM chains. Requires an API key.
API docs: https://portal.1inch.dev/documentation/apis/swap/introduction
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

# 1inch API endpoints
ONEINCH_API_V6 = "https://api.1inch.dev/swap/v6.0"


class OneInchAdapter(SwapAdapter):
    """1inch aggregator adapter.

    Uses /quote for quote-only requests and /swap (which also returns
    transaction data) when the sender is known.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = ONEINCH_API_V6,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize 1inch adapter.

        Args:
            api_key: 1inch API key (required)
            base_url: Swap API base URL
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "1inch"

    def _get_headers(self) -> dict:
        """Get API headers."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def get_quote(self, params: AdapterQuoteParams) -> AdapterQuoteResult:
        if not self.api_key:
            return AdapterQuoteResult.failure(
                "ONEINCH_API_KEY is not set. Add it to the environment to enable 1inch swaps."
            )

        endpoint = "swap" if params.sender_address else "quote"
        query = {
            "src": params.from_token_address,
            "dst": params.to_token_address,
            "amount": params.amount,
            # 1inch takes slippage as a percentage
            "slippage": str(params.slippage_bps / 100),
            "includeGas": "true",
        }
        if params.sender_address:
            query["from"] = params.sender_address
            # Approvals are planned as a separate step
            query["disableEstimate"] = "true"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.base_url}/{params.chain_id}/{endpoint}",
                    headers=self._get_headers(),
                    params=query,
                )

                if response.status_code != 200:
                    logger.warning(f"1inch API error: {response.status_code} - {response.text}")
                    return AdapterQuoteResult.failure(
                        f"1inch API error ({response.status_code}): {response.text}"
                    )

                data = response.json()

        except Exception as e:
            logger.error(f"1inch quote error: {e}")
            return AdapterQuoteResult.failure(f"1inch adapter error: {e}")

        dst_amount = data.get("dstAmount")
        tx = data.get("tx") or {}

        result = AdapterQuoteResult(
            success=True,
            to_amount=dst_amount,
            # 1inch applies slippage inside the swap calldata
            to_amount_min=dst_amount,
            estimated_gas=str(data.get("gas") or tx.get("gas") or "0"),
        )
        if dst_amount:
            result.exchange_rate = ratio(dst_amount, params.amount)

        if tx:
            result.transaction_data = TransactionData(
                to=tx.get("to"),
                data=tx.get("data"),
                value=str(tx.get("value") or "0"),
                gas_limit=str(tx.get("gas") or "0"),
            )

        return result
