"""Canton Network swap adapter.

Canton has no public DEX API. Quotes are priced from the CoinGecko CC/USD spot
price (stablecoin pairs are 1:1) and the swap itself is returned as a DAML
transfer intent that the user's Canton wallet executes.

Input amounts are human-readable units; output amounts are destination base
units.
"""

import json
import logging
import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import httpx

from swapbridge.routing.base import (
    AdapterQuoteParams,
    AdapterQuoteResult,
    FeeInfo,
    SwapAdapter,
    TransactionData,
    parse_positive_amount,
)

logger = logging.getLogger(__name__)

COINGECKO_API = "https://api.coingecko.com/api/v3"
COINGECKO_CANTON_ID = "canton-network"

CANTON_NATIVE = "canton:native"
CANTON_USDC = "canton:usdc"
CANTON_USDT = "canton:usdt"
STABLECOINS = (CANTON_USDC, CANTON_USDT)

TOKEN_DECIMALS = {
    CANTON_NATIVE: 10,
    CANTON_USDC: 6,
    CANTON_USDT: 6,
}

# Standard Splice transfer fee tier
FEE_BPS = 30
PRICE_CACHE_TTL_SECONDS = 60
INTENT_DEADLINE_SECONDS = 300
DEFAULT_FALLBACK_PRICE_USD = 0.166


def _to_base_units(amount: Decimal, decimals: int) -> str:
    return str(int((amount * (Decimal(10) ** decimals)).quantize(Decimal(1), rounding=ROUND_HALF_UP)))


class CantonSwapAdapter(SwapAdapter):
    """Swaps between CC, USDCx and USDTx on Canton."""

    def __init__(
        self,
        coingecko_url: str = COINGECKO_API,
        fallback_price_usd: float = DEFAULT_FALLBACK_PRICE_USD,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.coingecko_url = coingecko_url.rstrip("/")
        self.fallback_price_usd = Decimal(str(fallback_price_usd))
        self.timeout = timeout
        self._transport = transport
        self._price_cache: Optional[tuple[Decimal, float]] = None  # (price, fetched_at)

    @property
    def name(self) -> str:
        return "Canton Network"

    async def get_cc_price_usd(self) -> Decimal:
        """Live CC/USD price.

        Falls back to the last cached price, then to the configured fallback.
        """
        if self._price_cache and time.monotonic() - self._price_cache[1] < PRICE_CACHE_TTL_SECONDS:
            return self._price_cache[0]

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.coingecko_url}/simple/price",
                    headers={"Accept": "application/json"},
                    params={"ids": COINGECKO_CANTON_ID, "vs_currencies": "usd"},
                )
            response.raise_for_status()

            price = (response.json().get(COINGECKO_CANTON_ID) or {}).get("usd")
            if not isinstance(price, (int, float)) or price <= 0:
                raise ValueError("Invalid price data from CoinGecko")

            value = Decimal(str(price))
            self._price_cache = (value, time.monotonic())
            return value

        except Exception as e:
            if self._price_cache:
                logger.warning(f"CoinGecko price fetch failed, using cached price: {e}")
                return self._price_cache[0]
            logger.warning(f"CoinGecko price fetch failed, using fallback price: {e}")
            return self.fallback_price_usd

    async def get_exchange_rate(self, from_token: str, to_token: str) -> Optional[Decimal]:
        """Units of to_token per unit of from_token, or None for unsupported pairs."""
        if from_token in STABLECOINS and to_token in STABLECOINS:
            return Decimal(1)

        if from_token == CANTON_NATIVE and to_token in STABLECOINS:
            return await self.get_cc_price_usd()

        if from_token in STABLECOINS and to_token == CANTON_NATIVE:
            return Decimal(1) / await self.get_cc_price_usd()

        return None

    async def get_quote(self, params: AdapterQuoteParams) -> AdapterQuoteResult:
        from_token = params.from_token_address
        to_token = params.to_token_address

        if not from_token.startswith("canton:") or not to_token.startswith("canton:"):
            return AdapterQuoteResult.failure(
                "Canton swap adapter only handles canton: token addresses"
            )
        if from_token == to_token:
            return AdapterQuoteResult.failure("Cannot swap a token for itself")

        from_amount = parse_positive_amount(params.amount)
        if from_amount is None:
            return AdapterQuoteResult.failure("Invalid amount")

        try:
            rate = await self.get_exchange_rate(from_token, to_token)
            if rate is None:
                return AdapterQuoteResult.failure(
                    f"No Canton swap route for {from_token} -> {to_token}"
                )

            from_decimals = TOKEN_DECIMALS.get(from_token, 10)
            to_decimals = TOKEN_DECIMALS.get(to_token, 10)

            fee_rate = Decimal(FEE_BPS) / Decimal(10000)
            to_amount = from_amount * rate * (1 - fee_rate)
            to_amount_min = to_amount * (1 - Decimal(params.slippage_bps) / Decimal(10000))

            # Fee valued in USD; stablecoins count 1:1
            if from_token == CANTON_NATIVE:
                from_value_usd = from_amount * await self.get_cc_price_usd()
                fee_token = "CC"
            else:
                from_value_usd = from_amount
                fee_token = from_token.replace("canton:", "").upper()

            intent = {
                "type": "canton:transfer",
                "version": "1",
                "fromToken": from_token,
                "toToken": to_token,
                "fromAmount": _to_base_units(from_amount, from_decimals),
                "toAmountMin": _to_base_units(to_amount_min, to_decimals),
                "slippageBps": params.slippage_bps,
                "deadline": int(time.time()) + INTENT_DEADLINE_SECONDS,
            }

            return AdapterQuoteResult(
                success=True,
                to_amount=_to_base_units(to_amount, to_decimals),
                to_amount_min=_to_base_units(to_amount_min, to_decimals),
                exchange_rate=f"{rate:.8f}",
                price_impact=0.5 if from_amount > 100000 else 0.05,
                # Canton has no gas; network fees are paid in CC
                estimated_gas="0",
                fees=[
                    FeeInfo(
                        name="Canton Network fee (0.3%)",
                        amount=f"{from_amount * fee_rate:.{from_decimals}f}",
                        token=fee_token,
                        amount_usd=float(from_value_usd * fee_rate),
                    )
                ],
                transaction_data=TransactionData(serialized_transaction=json.dumps(intent)),
            )

        except Exception as e:
            logger.error(f"Canton swap quote error: {e}")
            return AdapterQuoteResult.failure(f"Canton swap adapter error: {e}")
