"""Sui bridge integration: deBridge DLN first, Wormhole estimate as fallback.

deBridge supports Sui natively (chain id 7565164 on the DLN API). Wormhole has
no quote endpoint; wrapped-token transfers are estimated 1:1 minus the
relayer fee once Wormholescan confirms the network is reachable.
"""

import logging
from decimal import ROUND_FLOOR, Decimal
from typing import Optional
from uuid import uuid4

import httpx

from swapbridge.chains import SUI_CHAIN_ID
from swapbridge.routing.base import (
    AdapterBridgeParams,
    AdapterBridgeResult,
    AdapterStep,
    BridgeAdapter,
    FeeInfo,
    StepType,
    apply_slippage,
    parse_positive_amount,
    ratio,
)

logger = logging.getLogger(__name__)

DEBRIDGE_SUI_API = "https://deswap.dln.trade/v1.0"
WORMHOLESCAN_API = "https://api.wormholescan.io/api/v1"

SUI_DEBRIDGE_CHAIN_ID = 7565164

DEBRIDGE_CHAIN_IDS = {
    "1": 1,
    "10": 10,
    "56": 56,
    "137": 137,
    "42161": 42161,
    "43114": 43114,
    "8453": 8453,
    "324": 324,
    "solana": 7565164,
    "sui": SUI_DEBRIDGE_CHAIN_ID,
}

WORMHOLE_CHAIN_IDS = {
    "1": 2,
    "56": 4,
    "137": 5,
    "43114": 6,
    "10": 24,
    "42161": 23,
    "8453": 30,
    "solana": 1,
    "sui": 21,
}

WORMHOLE_RELAYER_FEE = Decimal("0.001")
DEBRIDGE_ETA_SECONDS = 120
WORMHOLE_ETA_SECONDS = 900


class SuiBridgeAdapter(BridgeAdapter):
    """Bridges between Sui and EVM chains or Solana."""

    def __init__(
        self,
        debridge_url: str = DEBRIDGE_SUI_API,
        wormhole_url: str = WORMHOLESCAN_API,
        timeout: float = 12.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.debridge_url = debridge_url.rstrip("/")
        self.wormhole_url = wormhole_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "Sui Bridge (deBridge + Wormhole)"

    async def get_route(self, params: AdapterBridgeParams) -> AdapterBridgeResult:
        result = await self._route_debridge(params)
        if result.success:
            return result

        logger.info(f"deBridge failed for Sui route: {result.error}; trying Wormhole")
        fallback = await self._route_wormhole(params)
        if fallback.success:
            return fallback

        return AdapterBridgeResult.failure(
            f"deBridge: {result.error}; Wormhole: {fallback.error}"
        )

    async def _route_debridge(self, params: AdapterBridgeParams) -> AdapterBridgeResult:
        src_chain_id = DEBRIDGE_CHAIN_IDS.get(params.from_chain_id)
        dst_chain_id = DEBRIDGE_CHAIN_IDS.get(params.to_chain_id)
        if not src_chain_id or not dst_chain_id:
            return AdapterBridgeResult.failure(
                f"Unsupported chain for deBridge: {params.from_chain_id} -> {params.to_chain_id}"
            )

        query = {
            "srcChainId": str(src_chain_id),
            "srcChainTokenIn": params.from_token_address,
            "srcChainTokenInAmount": params.amount,
            "dstChainId": str(dst_chain_id),
            "dstChainTokenOut": params.to_token_address,
        }
        if params.sender_address:
            query["srcChainOrderAuthorityAddress"] = params.sender_address
        if params.recipient_address:
            query["dstChainTokenOutRecipient"] = params.recipient_address

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(f"{self.debridge_url}/dln/order/quote", params=query)

            if response.status_code != 200:
                logger.warning(f"deBridge Sui quote error: {response.status_code} - {response.text}")
                return AdapterBridgeResult.failure(
                    f"deBridge quote error ({response.status_code}): {response.text}"
                )

            data = response.json()
            dst_out = (data.get("estimation") or {}).get("dstChainTokenOut") or {}
            out_amount = dst_out.get("amount")
            if not out_amount:
                return AdapterBridgeResult.failure("deBridge returned no output amount for Sui bridge")

            out_amount = str(out_amount)
            return AdapterBridgeResult(
                success=True,
                to_amount=out_amount,
                to_amount_min=str(dst_out.get("minAmount") or out_amount),
                exchange_rate=ratio(out_amount, params.amount),
                price_impact=data.get("priceImpact"),
                eta_seconds=DEBRIDGE_ETA_SECONDS,
                fees=[FeeInfo(name="deBridge Protocol Fee", amount="0", token="SUI")],
                steps=[
                    AdapterStep(
                        id=f"step-sui-bridge-{uuid4()}",
                        type=StepType.BRIDGE_SEND,
                        description=f"Bridge via deBridge DLN ({params.from_chain_id} -> {params.to_chain_id})",
                        chain_id=params.from_chain_id,
                        tool="deBridge DLN",
                    )
                ],
                provider_route_id=(data.get("order") or {}).get("orderId"),
            )

        except Exception as e:
            logger.error(f"deBridge Sui route error: {e}")
            return AdapterBridgeResult.failure(f"deBridge Sui bridge error: {e}")

    async def _route_wormhole(self, params: AdapterBridgeParams) -> AdapterBridgeResult:
        if params.from_chain_id not in WORMHOLE_CHAIN_IDS or params.to_chain_id not in WORMHOLE_CHAIN_IDS:
            return AdapterBridgeResult.failure(
                f"Wormhole doesn't support {params.from_chain_id} -> {params.to_chain_id}"
            )

        amount_in = parse_positive_amount(params.amount)
        if amount_in is None:
            return AdapterBridgeResult.failure("Invalid amount")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(f"{self.wormhole_url}/governor/token_list")

            if response.status_code != 200:
                logger.warning(f"Wormhole API unavailable: {response.status_code}")
                return AdapterBridgeResult.failure(f"Wormhole API unavailable ({response.status_code})")

            # Wrapped transfers are 1:1 minus the relayer fee
            estimated_out = (amount_in * (1 - WORMHOLE_RELAYER_FEE)).to_integral_value(rounding=ROUND_FLOOR)
            relayer_fee = (amount_in * WORMHOLE_RELAYER_FEE).to_integral_value(rounding=ROUND_FLOOR)
            to_amount = str(int(estimated_out))

            return AdapterBridgeResult(
                success=True,
                to_amount=to_amount,
                to_amount_min=apply_slippage(to_amount, params.slippage_bps),
                exchange_rate=ratio(to_amount, params.amount) or "1",
                eta_seconds=WORMHOLE_ETA_SECONDS,
                fees=[
                    FeeInfo(
                        name="Wormhole Relayer Fee",
                        amount=str(int(relayer_fee)),
                        token="SUI" if params.from_chain_id == SUI_CHAIN_ID else "ETH",
                    )
                ],
                steps=[
                    AdapterStep(
                        id=f"step-wormhole-{uuid4()}",
                        type=StepType.BRIDGE_SEND,
                        description=f"Bridge via Wormhole ({params.from_chain_id} -> {params.to_chain_id})",
                        chain_id=params.from_chain_id,
                        tool="Wormhole",
                    )
                ],
            )

        except Exception as e:
            logger.error(f"Wormhole route error: {e}")
            return AdapterBridgeResult.failure(f"Wormhole bridge error: {e}")
