"""LI.FI cross-chain bridge integration.

Endpoints used:
- POST /advanced/routes  cross-chain routes with steps
- GET  /status           bridge transfer status

Works without an API key (rate-limited).
API docs: https://docs.li.fi/li.fi-api/li.fi-api
"""

import logging
import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

import httpx

from swapbridge.routing.base import (
    AdapterBridgeParams,
    AdapterBridgeResult,
    AdapterStep,
    BridgeAdapter,
    FeeInfo,
    StepType,
    TransactionData,
)

logger = logging.getLogger(__name__)

LIFI_API_V1 = "https://li.quest/v1"

# LI.FI ids for non-EVM chains
LIFI_CHAIN_IDS = {
    "solana": 1151111081099710,
    "sui": 9270000000000000,
}


def _lifi_chain_id(chain_id: str) -> Any:
    if chain_id.isdigit():
        return int(chain_id)
    return LIFI_CHAIN_IDS.get(chain_id, chain_id)


def _transaction_data(request: Optional[dict]) -> Optional[TransactionData]:
    if not request:
        return None
    gas_limit = request.get("gasLimit")
    return TransactionData(
        to=request.get("to"),
        data=request.get("data"),
        value=str(request.get("value") or "0"),
        gas_limit=str(gas_limit) if gas_limit else None,
    )


def _symbol(action: dict, key: str, default: str = "") -> str:
    return (action.get(key) or {}).get("symbol") or default


@dataclass
class BridgeStatus:
    """Bridge transfer status as reported to clients."""

    route_id: str
    status: str
    substatus: Optional[str] = None
    from_tx_hash: Optional[str] = None
    to_tx_hash: Optional[str] = None
    bridge_tx_link: Optional[str] = None
    error: Optional[str] = None
    step_statuses: list = field(default_factory=list)
    updated_at: int = field(default_factory=lambda: int(time.time() * 1000))

    def to_dict(self) -> dict:
        return {
            "route_id": self.route_id,
            "status": self.status,
            "substatus": self.substatus,
            "from_tx_hash": self.from_tx_hash,
            "to_tx_hash": self.to_tx_hash,
            "bridge_tx_link": self.bridge_tx_link,
            "error": self.error,
            "step_statuses": self.step_statuses,
            "updated_at": self.updated_at,
        }


# LI.FI PENDING and NOT_FOUND both mean the transfer is still in flight
STATUS_MAP = {
    "DONE": "COMPLETED",
    "FAILED": "FAILED",
}


class LiFiBridgeAdapter(BridgeAdapter):
    """LI.FI bridge adapter with swap-on-route support."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = LIFI_API_V1,
        integrator: str = "swapbridge",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.integrator = integrator
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "LI.FI"

    def _get_headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-lifi-api-key"] = self.api_key
        return headers

    async def get_route(self, params: AdapterBridgeParams) -> AdapterBridgeResult:
        body = {
            "fromChainId": _lifi_chain_id(params.from_chain_id),
            "toChainId": _lifi_chain_id(params.to_chain_id),
            "fromTokenAddress": params.from_token_address,
            "toTokenAddress": params.to_token_address,
            "fromAmount": params.amount,
            "fromAddress": params.sender_address,
            "toAddress": params.recipient_address or params.sender_address,
            "integrator": self.integrator,
            "options": {
                # LI.FI takes slippage as a fraction (0.005 = 0.5%)
                "slippage": params.slippage_bps / 10000,
                "order": "RECOMMENDED",
                "allowSwitchChain": True,
            },
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/advanced/routes",
                    headers=self._get_headers(),
                    json=body,
                )

            if response.status_code != 200:
                logger.warning(f"LI.FI API error: {response.status_code} - {response.text}")
                return AdapterBridgeResult.failure(
                    f"LI.FI API error ({response.status_code}): {response.text}"
                )

            routes = response.json().get("routes") or []
            if not routes:
                return AdapterBridgeResult.failure("No bridge routes found for this token pair.")

            # First route is the recommended one
            best = routes[0]
            lifi_steps = best.get("steps") or []

            fees = []
            gas_cost_usd = best.get("gasCostUSD")
            if gas_cost_usd:
                fees.append(
                    FeeInfo(
                        name="Gas cost",
                        amount=str(gas_cost_usd),
                        token="USD",
                        amount_usd=float(Decimal(str(gas_cost_usd))),
                    )
                )

            steps = self._convert_steps(lifi_steps, params)
            if not steps:
                logger.warning(f"LI.FI route {best.get('id')} has no executable steps")
                return AdapterBridgeResult.failure("LI.FI route has no executable steps.")

            return AdapterBridgeResult(
                success=True,
                to_amount=best.get("toAmount"),
                to_amount_min=best.get("toAmountMin"),
                eta_seconds=sum(
                    int((step.get("estimate") or {}).get("executionDuration") or 0)
                    for step in lifi_steps
                ),
                fees=fees,
                steps=steps,
                provider_route_id=best.get("id"),
            )

        except Exception as e:
            logger.error(f"LI.FI route error: {e}")
            return AdapterBridgeResult.failure(f"LI.FI adapter error: {e}")

    def _convert_steps(self, lifi_steps: list[dict], params: AdapterBridgeParams) -> list[AdapterStep]:
        """Map LI.FI swap/cross/lifi steps onto route steps."""
        steps: list[AdapterStep] = []

        for lifi_step in lifi_steps:
            action = lifi_step.get("action") or {}
            tool = lifi_step.get("tool") or ""
            step_id = lifi_step.get("id", "")
            from_chain = str(action.get("fromChainId") or params.from_chain_id)
            to_chain = str(action.get("toChainId") or params.to_chain_id)
            tx_data = _transaction_data(lifi_step.get("transactionRequest"))

            if (lifi_step.get("estimate") or {}).get("approvalAddress"):
                steps.append(AdapterStep(
                    id=f"{step_id}-approve",
                    type=StepType.APPROVE,
                    description=f"Approve {_symbol(action, 'fromToken', 'token')} for {tool or 'bridge'}",
                    chain_id=from_chain,
                    tool=tool or "LI.FI",
                ))

            step_type = lifi_step.get("type")
            if step_type == "swap":
                steps.append(AdapterStep(
                    id=step_id,
                    type=StepType.SWAP,
                    description=(
                        f"Swap {_symbol(action, 'fromToken')} -> {_symbol(action, 'toToken')} via {tool}"
                    ),
                    chain_id=from_chain,
                    tool=tool or "LI.FI",
                    transaction_data=tx_data,
                ))
            elif step_type == "cross":
                steps.extend(self._bridge_pair(step_id, tool, from_chain, to_chain, params, tx_data))
            elif step_type == "lifi":
                included = lifi_step.get("includedSteps") or []
                for sub in included:
                    steps.extend(self._convert_included_step(sub, params))

                if not included and tx_data is not None:
                    steps.append(AdapterStep(
                        id=step_id,
                        type=StepType.BRIDGE_SEND,
                        description=f"Bridge via {tool or 'LI.FI'}",
                        chain_id=params.from_chain_id,
                        tool=tool or "LI.FI",
                        transaction_data=tx_data,
                    ))

        return steps

    def _convert_included_step(self, sub: dict, params: AdapterBridgeParams) -> list[AdapterStep]:
        action = sub.get("action") or {}
        tool = sub.get("tool") or ""
        sub_id = sub.get("id", "")
        from_chain = str(action.get("fromChainId") or params.from_chain_id)
        to_chain = str(action.get("toChainId") or params.to_chain_id)

        if sub.get("type") == "swap":
            # A swap that starts on the destination chain runs after the bridge
            is_destination = str(action.get("fromChainId")) == params.to_chain_id
            label = "Destination swap" if is_destination else "Swap"
            return [AdapterStep(
                id=sub_id,
                type=StepType.DESTINATION_SWAP if is_destination else StepType.SWAP,
                description=(
                    f"{label}: {_symbol(action, 'fromToken')} -> {_symbol(action, 'toToken')} via {tool}"
                ),
                chain_id=from_chain,
                tool=tool or "LI.FI",
            )]

        if sub.get("type") == "cross":
            send, receive = self._bridge_pair(sub_id, tool, from_chain, to_chain, params, None)
            send.description = f"Bridge via {tool or 'bridge'}"
            return [send, receive]

        return []

    @staticmethod
    def _bridge_pair(
        step_id: str,
        tool: str,
        from_chain: str,
        to_chain: str,
        params: AdapterBridgeParams,
        tx_data: Optional[TransactionData],
    ) -> tuple[AdapterStep, AdapterStep]:
        bridge_tool = f"LI.FI/{tool or 'bridge'}"
        send = AdapterStep(
            id=f"{step_id}-send",
            type=StepType.BRIDGE_SEND,
            description=f"Bridge via {tool or 'bridge'} ({params.from_chain_id} -> {params.to_chain_id})",
            chain_id=from_chain,
            tool=bridge_tool,
            transaction_data=tx_data,
        )
        receive = AdapterStep(
            id=f"{step_id}-receive",
            type=StepType.BRIDGE_RECEIVE,
            description=f"Receive on chain {params.to_chain_id}",
            chain_id=to_chain,
            tool=bridge_tool,
        )
        return send, receive

    async def get_status(
        self,
        tx_hash: str,
        from_chain_id: str,
        to_chain_id: str,
        bridge: Optional[str] = None,
    ) -> BridgeStatus:
        """Poll LI.FI for the status of a bridge transfer."""
        query = {"txHash": tx_hash, "fromChain": from_chain_id, "toChain": to_chain_id}
        if bridge:
            query["bridge"] = bridge

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.base_url}/status",
                    headers=self._get_headers(),
                    params=query,
                )

            if response.status_code != 200:
                logger.warning(f"LI.FI status error: {response.status_code} - {response.text}")
                return BridgeStatus(
                    route_id=tx_hash,
                    status="FAILED",
                    error=f"LI.FI status error ({response.status_code}): {response.text}",
                )

            data = response.json()
            return BridgeStatus(
                route_id=tx_hash,
                status=STATUS_MAP.get(data.get("status"), "BRIDGING"),
                substatus=data.get("substatus"),
                from_tx_hash=(data.get("sending") or {}).get("txHash") or tx_hash,
                to_tx_hash=(data.get("receiving") or {}).get("txHash"),
                bridge_tx_link=data.get("lifiExplorerLink"),
            )

        except Exception as e:
            logger.error(f"LI.FI status error: {e}")
            return BridgeStatus(route_id=tx_hash, status="FAILED", error=f"LI.FI status error: {e}")
