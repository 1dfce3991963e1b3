"""Canton Network bridge via Circle xReserve.

Supported routes:
- Ethereum (chain 1) -> Canton: approve USDC, depositToRemote on the xReserve
  contract, wait for the Circle attestation, mint USDCx on Canton.
- Canton -> Ethereum: burn USDCx on Canton, USDC released on Ethereum.

Amounts are USD (human-readable USDC units). Contract addresses and party ids
come from digital-asset/xreserve-deposits.
"""

import json
import logging
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Optional
from uuid import uuid4

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from swapbridge.chains import CANTON_CHAIN_ID
from swapbridge.routing.base import (
    AdapterBridgeParams,
    AdapterBridgeResult,
    AdapterStep,
    BridgeAdapter,
    FeeInfo,
    StepType,
    TransactionData,
    parse_positive_amount,
)
from swapbridge.routing.evm import encode_approve

logger = logging.getLogger(__name__)

CIRCLE_XRESERVE_API = "https://xreserve-api.circle.com"
ETHEREUM_CHAIN_ID = "1"
USDC_DECIMALS = 6
ATTESTATION_MINUTES = 5
BURN_ETA_SECONDS = 600

DEPOSIT_TO_REMOTE_SELECTOR = function_signature_to_4byte_selector(
    "depositToRemote(uint256,uint32,bytes32,address,uint256,bytes)"
)


@dataclass(frozen=True)
class XReserveNetwork:
    xreserve: str
    usdc: str
    canton_domain: int
    canton_usdc_hash: str


NETWORKS = {
    "mainnet": XReserveNetwork(
        xreserve="0x8888888199b2Df864bf678259607d6D5EBb4e3Ce",
        usdc="0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        canton_domain=10001,
        canton_usdc_hash="0x661237037dc811823d8b2de17aaabb8ef2ac9b713ca7db3b01fc7f7baf7db562",
    ),
    "sepolia": XReserveNetwork(
        xreserve="0x008888878f94C0d87defdf0B07f46B93C1934442",
        usdc="0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238",
        canton_domain=10001,
        canton_usdc_hash="0x74ed63088c070c8fd5d8ad71f2a1cef868c63d00e0ac6dc2a6722d171691a422",
    ),
}

CANTON_PARTIES = {
    "utility_operator": "auth0_007c6643538f2eadd3e573dd05b9::12205bcc106efa0eaa7f18dc491e5c6f5fb9b0cc68dc110ae66f4ed6467475d7c78e",
    "bridge_operator": "Bridge-Operator::1220c8448890a70e65f6906bd48d797ee6551f094e9e6a53e329fd5b2b549334f13f",
    "cross_chain_representative": "decentralized-usdc-interchain-rep::12208115f1e168dd7e792320be9c4ca720c751a02a3053c7606e1c1cd3dad9bf60ef",
}

BRIDGE_USER_AGREEMENT_TEMPLATE = "#utility-bridge-v0:Utility.Bridge.V0.Agreement.User:BridgeUserAgreement"
ALLOCATION_FACTORY_CID = "006289e882123613ea96d71fad9cc38a529e613a8d4b550ef6a0422383e1925934ca11122003bc3af7d468f09465fa72db6182b63e349804e430a81eeeffa9076f5099f796"
INSTRUMENT_CONFIG_CID = "002a23aed42edb51940f74f6fc5f7b8267c9192ab8e72296673420ffc4c4f22debca1112201d94617a63f11a4ce245498930752e56313d200b6a0976ee621f6add2788ba1b"
APP_REWARD_CONFIG_CID = "00ad54961b99aa48d545fe0d74a6b56737e8cb0d7935e831ee1afce0619a4a82bfca1112202c765d54dfcc7a1db8d0bbb5f06951ceb4562a1acaaf74de13c6d05ebe4a64c4"


def usd_to_usdc_units(amount: Decimal) -> int:
    return int((amount * (Decimal(10) ** USDC_DECIMALS)).to_integral_value(rounding=ROUND_FLOOR))


def encode_canton_recipient(party_id: str) -> bytes:
    """UTF-8 party id truncated to 32 bytes; the ABI encoder right-pads it."""
    return party_id.encode("utf-8")[:32]


def encode_deposit_to_remote(network: XReserveNetwork, value: int, canton_recipient: str) -> str:
    """Encode xReserve.depositToRemote(value, domain, recipient, usdc, maxFee=0, hookData=b"")."""
    encoded = encode(
        ["uint256", "uint32", "bytes32", "address", "uint256", "bytes"],
        [
            value,
            network.canton_domain,
            encode_canton_recipient(canton_recipient),
            to_checksum_address(network.usdc),
            0,
            b"",
        ],
    )
    return "0x" + (DEPOSIT_TO_REMOTE_SELECTOR + encoded).hex()


def build_canton_burn_command(
    agreement_contract_id: str,
    amount: str,
    destination_eth_address: str,
    holding_cids: Optional[list[str]] = None,
    request_id: Optional[str] = None,
) -> dict:
    """DAML exercise that burns USDCx and releases USDC on Ethereum (domain 0)."""
    return {
        "commands": [{
            "ExerciseCommand": {
                "templateId": BRIDGE_USER_AGREEMENT_TEMPLATE,
                "contractId": agreement_contract_id,
                "choice": "BridgeUserAgreement_Burn",
                "choiceArgument": {
                    "amount": amount,
                    "destinationDomain": "0",
                    "destinationRecipient": destination_eth_address,
                    "holdingCids": holding_cids or [],
                    "requestId": request_id or str(uuid4()),
                    "reference": "",
                    "factoryCid": ALLOCATION_FACTORY_CID,
                    "contextContractIds": {
                        "instrumentConfigurationCid": INSTRUMENT_CONFIG_CID,
                        "appRewardConfigurationCid": APP_REWARD_CONFIG_CID,
                        "featuredAppRightCid": "",
                    },
                },
            },
        }],
    }


class CantonXReserveAdapter(BridgeAdapter):
    """USDC <-> USDCx bridge between Ethereum and Canton."""

    def __init__(self, network: str = "mainnet"):
        if network not in NETWORKS:
            raise ValueError(f"Unknown xReserve network: {network}")
        self.network_name = network
        self.network = NETWORKS[network]

    @property
    def name(self) -> str:
        return "Canton xReserve"

    async def get_route(self, params: AdapterBridgeParams) -> AdapterBridgeResult:
        is_deposit = params.from_chain_id == ETHEREUM_CHAIN_ID and params.to_chain_id == CANTON_CHAIN_ID
        is_burn = params.from_chain_id == CANTON_CHAIN_ID and params.to_chain_id == ETHEREUM_CHAIN_ID

        if not is_deposit and not is_burn:
            return AdapterBridgeResult.failure(
                f"Canton xReserve only supports ETH<->Canton routes. "
                f"Got: {params.from_chain_id} -> {params.to_chain_id}"
            )

        amount = parse_positive_amount(params.amount)
        if amount is None:
            return AdapterBridgeResult.failure("Invalid amount")

        recipient = params.recipient_address or params.sender_address or ""
        if is_deposit:
            if not recipient:
                return AdapterBridgeResult.failure(
                    "Canton recipient party ID required for xReserve deposit"
                )
            return self._deposit_route(params, amount, recipient)

        if not recipient:
            return AdapterBridgeResult.failure("Ethereum recipient address required for xReserve burn")
        return self._burn_route(params, amount, recipient)

    def _deposit_route(
        self, params: AdapterBridgeParams, amount: Decimal, canton_recipient: str
    ) -> AdapterBridgeResult:
        value = usd_to_usdc_units(amount)
        usdc_out = str(value)
        logger.debug(f"Building xReserve deposit of {value} USDC units to {canton_recipient}")

        return AdapterBridgeResult(
            success=True,
            # USDC -> USDCx is 1:1
            to_amount=usdc_out,
            to_amount_min=usdc_out,
            exchange_rate="1.0",
            price_impact=0.0,
            eta_seconds=ATTESTATION_MINUTES * 60,
            fees=[FeeInfo(name="xReserve bridge fee", amount="0", token="USDC", amount_usd=0.0)],
            steps=[
                AdapterStep(
                    id="step-approve-usdc",
                    type=StepType.APPROVE,
                    description=f"Approve {params.amount} USDC for xReserve contract",
                    chain_id=params.from_chain_id,
                    tool=self.name,
                    transaction_data=TransactionData(
                        to=self.network.usdc,
                        data=encode_approve(self.network.xreserve, value),
                        value="0",
                    ),
                ),
                AdapterStep(
                    id="step-deposit-xreserve",
                    type=StepType.BRIDGE_SEND,
                    description=(
                        f"Deposit {params.amount} USDC to Canton via xReserve "
                        f"(domain {self.network.canton_domain})"
                    ),
                    chain_id=params.from_chain_id,
                    tool=self.name,
                    transaction_data=TransactionData(
                        to=self.network.xreserve,
                        data=encode_deposit_to_remote(self.network, value, canton_recipient),
                        value="0",
                    ),
                ),
                AdapterStep(
                    id="step-attestation-wait",
                    type=StepType.BRIDGE_RECEIVE,
                    description=(
                        f"Wait for Circle attestation (~{ATTESTATION_MINUTES} min). "
                        f"Poll: {CIRCLE_XRESERVE_API}/v1/attestations/{{messageHash}}"
                    ),
                    chain_id=CANTON_CHAIN_ID,
                    tool="Circle xReserve API",
                ),
                # Executed on Canton once the attestation is available
                AdapterStep(
                    id="step-canton-mint",
                    type=StepType.SWAP,
                    description="Submit BridgeUserAgreement_Mint on Canton, USDCx credited to account",
                    chain_id=CANTON_CHAIN_ID,
                    tool="Canton Ledger",
                    transaction_data=TransactionData(
                        serialized_transaction=json.dumps({
                            "type": "canton:bridge:mint",
                            "note": (
                                "Submit after attestation. Requires the BridgeUserAgreement "
                                "contract id and the DepositAttestation cid from the Ethereum tx."
                            ),
                        })
                    ),
                ),
            ],
        )

    def _burn_route(
        self, params: AdapterBridgeParams, amount: Decimal, eth_recipient: str
    ) -> AdapterBridgeResult:
        usdc_out = str(usd_to_usdc_units(amount))
        # Agreement and holding ids are user-specific and filled in by the Canton wallet
        burn_command = build_canton_burn_command(
            agreement_contract_id="<user-bridge-agreement-cid>",
            amount=params.amount,
            destination_eth_address=eth_recipient,
        )

        return AdapterBridgeResult(
            success=True,
            to_amount=usdc_out,
            to_amount_min=usdc_out,
            exchange_rate="1.0",
            price_impact=0.0,
            eta_seconds=BURN_ETA_SECONDS,
            fees=[FeeInfo(name="xReserve burn fee", amount="0", token="USDCx", amount_usd=0.0)],
            steps=[
                AdapterStep(
                    id="step-canton-burn",
                    type=StepType.BRIDGE_SEND,
                    description=f"Burn {params.amount} USDCx on Canton, release USDC on Ethereum",
                    chain_id=CANTON_CHAIN_ID,
                    tool="Canton Ledger",
                    transaction_data=TransactionData(serialized_transaction=json.dumps(burn_command)),
                ),
                AdapterStep(
                    id="step-eth-release",
                    type=StepType.BRIDGE_RECEIVE,
                    description=f"USDC released to {eth_recipient} on Ethereum (~10 min)",
                    chain_id=params.to_chain_id,
                    tool=self.name,
                ),
            ],
        )
