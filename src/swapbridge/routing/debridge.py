"""deBridge DLN (Decentralized Liquidity Network) bridge integration.

No API key required.
Base URL: https://dln.debridge.finance/v1.0

Fees are on-chain and included in the API estimation: a flat source-chain
fee plus a 4 bps protocol fee on the input amount. Amounts are raw base
units on both sides.
"""

import json
import logging
import time
from decimal import Decimal
from typing import Optional

import httpx

from swapbridge.routing.base import (
    AdapterBridgeParams,
    AdapterBridgeResult,
    AdapterStep,
    BridgeAdapter,
    FeeInfo,
    StepType,
    TransactionData,
    apply_slippage,
    parse_positive_amount,
    ratio,
)
from swapbridge.routing.evm import encode_approve, needs_approval

logger = logging.getLogger(__name__)

DEBRIDGE_API = "https://dln.debridge.finance/v1.0"

# deBridge uses its own ids for non-EVM chains; EVM ids map to themselves
DEBRIDGE_CHAIN_IDS = {
    "1": "1",
    "42161": "42161",
    "10": "10",
    "8453": "8453",
    "137": "137",
    "56": "56",
    "43114": "43114",
    "100": "100",
    "59144": "59144",
    "solana": "7565164",
}

PROTOCOL_FEE_BPS = 4
# Placeholder recipient accepted by the quote endpoint when none is known
PLACEHOLDER_RECIPIENT = "0x0000000000000000000000000000000000000001"


class DeBridgeAdapter(BridgeAdapter):
    """deBridge DLN bridge adapter returning ready-to-sign order transactions."""

    def __init__(
        self,
        base_url: str = DEBRIDGE_API,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "deBridge DLN"

    async def get_route(self, params: AdapterBridgeParams) -> AdapterBridgeResult:
        src_chain_id = DEBRIDGE_CHAIN_IDS.get(params.from_chain_id)
        dst_chain_id = DEBRIDGE_CHAIN_IDS.get(params.to_chain_id)
        supported = ", ".join(DEBRIDGE_CHAIN_IDS)

        if not src_chain_id:
            return AdapterBridgeResult.failure(
                f"deBridge does not support source chain {params.from_chain_id}. Supported: {supported}"
            )
        if not dst_chain_id:
            return AdapterBridgeResult.failure(
                f"deBridge does not support destination chain {params.to_chain_id}. Supported: {supported}"
            )
        if parse_positive_amount(params.amount) is None:
            return AdapterBridgeResult.failure("Invalid amount")

        recipient = params.recipient_address or params.sender_address or PLACEHOLDER_RECIPIENT

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.base_url}/dln/order/create-tx",
                    headers={"Accept": "application/json"},
                    params={
                        "srcChainId": src_chain_id,
                        "srcChainTokenIn": params.from_token_address,
                        "srcChainTokenInAmount": params.amount,
                        "dstChainId": dst_chain_id,
                        "dstChainTokenOut": params.to_token_address,
                        "dstChainTokenOutRecipient": recipient,
                        "prependOperatingExpenses": "true",
                    },
                )

            if response.status_code != 200:
                logger.warning(f"deBridge API error: {response.status_code} - {response.text}")
                return AdapterBridgeResult.failure(
                    f"deBridge API error ({response.status_code}): {response.text}"
                )

            quote = response.json()
            estimation = quote["estimation"]
            src_in = estimation["srcChainTokenIn"]
            dst_out = estimation["dstChainTokenOut"]
            tx = quote.get("tx") or {}

            to_amount = str(dst_out.get("recommendedAmount") or dst_out["amount"])
            delay_minutes = (quote.get("order") or {}).get("approximateFulfillmentDelay") or 1

            total_fee_usd = sum(
                Decimal(str((cost.get("payload") or {}).get("feeApproximateUsdValue") or "0"))
                for cost in estimation.get("costsDetails") or []
            )
            protocol_fee_usd = (
                Decimal(str(src_in.get("approximateUsdValue") or 0))
                * PROTOCOL_FEE_BPS / Decimal(10000)
            )

            stamp = int(time.time() * 1000)
            steps: list[AdapterStep] = []

            if needs_approval(params.from_token_address) and tx.get("allowanceTarget"):
                steps.append(AdapterStep(
                    id=f"debridge-approve-{stamp}",
                    type=StepType.APPROVE,
                    description=f"Approve {src_in.get('symbol', 'token')} for deBridge DLN",
                    chain_id=params.from_chain_id,
                    tool=self.name,
                    transaction_data=TransactionData(
                        to=params.from_token_address,
                        data=encode_approve(tx["allowanceTarget"], int(Decimal(params.amount))),
                        value="0",
                    ),
                ))

            order_data = None
            if tx:
                order_data = TransactionData(
                    to=tx.get("to") or "",
                    data=tx.get("data") or "0x",
                    value=str(tx.get("value") or "0"),
                    serialized_transaction=json.dumps({
                        "type": "debridge:dlnOrder",
                        "srcChainId": src_chain_id,
                        "dstChainId": dst_chain_id,
                        "srcToken": params.from_token_address,
                        "dstToken": params.to_token_address,
                        "srcAmount": params.amount,
                        "dstAmount": to_amount,
                        "recipient": recipient,
                        "allowanceTarget": tx.get("allowanceTarget"),
                        "allowanceValue": tx.get("allowanceValue"),
                    }),
                )

            steps.append(AdapterStep(
                id=f"debridge-send-{stamp}",
                type=StepType.BRIDGE_SEND,
                description=(
                    f"deBridge: {src_in.get('symbol', '')} on chain {params.from_chain_id} -> "
                    f"{dst_out.get('symbol', '')} on chain {params.to_chain_id} (~{delay_minutes} min)"
                ),
                chain_id=params.from_chain_id,
                tool=self.name,
                transaction_data=order_data,
            ))
            steps.append(AdapterStep(
                id=f"debridge-receive-{stamp}",
                type=StepType.BRIDGE_RECEIVE,
                description=(
                    f"Receive {dst_out.get('symbol', '')} on chain {params.to_chain_id} "
                    f"(deBridge solver fulfills ~{delay_minutes} min)"
                ),
                chain_id=params.to_chain_id,
                tool=self.name,
            ))

            return AdapterBridgeResult(
                success=True,
                to_amount=to_amount,
                to_amount_min=apply_slippage(to_amount, params.slippage_bps),
                exchange_rate=ratio(to_amount, params.amount),
                eta_seconds=int(delay_minutes * 60),
                fees=[
                    FeeInfo(
                        name="deBridge protocol fee (0.04%)",
                        amount=f"{protocol_fee_usd:.4f}",
                        token=src_in.get("symbol", ""),
                        amount_usd=float(protocol_fee_usd),
                    ),
                    FeeInfo(
                        name="Gas + solver expenses",
                        amount="",
                        token="ETH",
                        amount_usd=float(total_fee_usd - protocol_fee_usd),
                    ),
                ],
                steps=steps,
                provider_route_id=f"debridge-{params.from_chain_id}-{params.to_chain_id}-{stamp}",
            )

        except Exception as e:
            logger.error(f"deBridge route error: {e}")
            return AdapterBridgeResult.failure(f"deBridge adapter error: {e}")
